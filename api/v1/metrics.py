# api/v1/metrics.py
from __future__ import annotations
from fastapi import APIRouter, HTTPException, status

from core.errors import InvalidInput, OutOfRange
from core.health_metrics import HealthMetricsCalculator
from core.intake import build_profile
from core.models.profile import CalculatedMetrics, UserProfile
from api.v1.schemas import MetricsOut, MetricsResponse, ProfileIn, ProfileOut

router = APIRouter()
_calc = HealthMetricsCalculator()


def profile_and_metrics(body: ProfileIn) -> tuple[UserProfile, CalculatedMetrics | None]:
    """Validate the form and compute metrics; form errors become 422s."""
    try:
        profile = build_profile(body.to_form())
        return profile, _calc.compute_all(profile)
    except (InvalidInput, OutOfRange) as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.post("", response_model=MetricsResponse, status_code=status.HTTP_200_OK)
def compute_metrics(body: ProfileIn) -> MetricsResponse:
    profile, metrics = profile_and_metrics(body)
    return MetricsResponse(
        profile=ProfileOut.from_profile(profile),
        metrics=MetricsOut.from_metrics(metrics) if metrics else None,
    )
