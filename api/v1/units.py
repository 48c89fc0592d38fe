# api/v1/units.py
from __future__ import annotations
from fastapi import APIRouter, Query

from core.units import UnitConverter
from api.v1.schemas import ImperialOut, MetricOut

router = APIRouter()


@router.get("/imperial", response_model=ImperialOut, summary="Metric values for display in ft/in + lbs")
def to_imperial(
    height_cm: float = Query(..., gt=0, allow_inf_nan=False),
    weight_kg: float = Query(..., gt=0, allow_inf_nan=False),
) -> ImperialOut:
    feet, inches = UnitConverter.to_imperial_height(height_cm)
    return ImperialOut(
        feet=feet,
        inches=inches,
        pounds=UnitConverter.to_imperial_weight(weight_kg),
    )


@router.get("/metric", response_model=MetricOut, summary="Imperial input converted for storage")
def to_metric(
    feet: float = Query(0, ge=0, allow_inf_nan=False),
    inches: float = Query(0, ge=0, allow_inf_nan=False),
    pounds: float = Query(0, ge=0, allow_inf_nan=False),
) -> MetricOut:
    return MetricOut(
        height_cm=UnitConverter.to_metric_height(feet, inches),
        weight_kg=UnitConverter.to_metric_weight(pounds),
    )
