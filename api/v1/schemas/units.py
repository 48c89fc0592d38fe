from __future__ import annotations

from pydantic import BaseModel


class ImperialOut(BaseModel):
    feet: int
    inches: int
    pounds: int


class MetricOut(BaseModel):
    height_cm: int
    weight_kg: float
