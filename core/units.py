"""
core/units.py
────────────────────────────────────────────────────────────────────────
Metric ⇄ imperial conversion for height and weight, plus range checks.

Profiles are stored metric (cm, kg); imperial values only exist at the
input/display boundary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from core.constants import (
    CM_TO_INCH,
    FEET_TO_INCHES,
    INCH_TO_CM,
    KG_TO_LB,
    LB_TO_KG,
    MAX_HEIGHT_CM,
    MAX_WEIGHT_KG,
    MIN_HEIGHT_CM,
    MIN_WEIGHT_KG,
)
from core.errors import OutOfRange
from core.models.profile import UnitSystem


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Display rounding: halves go away from zero (2.5 → 3, not 2)."""
    quant = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(value)).quantize(quant, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class ValidationResult:
    height_cm: float
    weight_kg: float


class UnitConverter:
    """Stateless; every method is a pure function of its arguments."""

    # --------------- height -----------------------------------------
    @staticmethod
    def to_metric_height(feet: float, inches: float) -> int:
        return int(round_half_up((feet * FEET_TO_INCHES + inches) * INCH_TO_CM))

    @staticmethod
    def to_imperial_height(height_cm: float) -> tuple[int, int]:
        total_in = height_cm * CM_TO_INCH
        feet = math.floor(total_in / FEET_TO_INCHES)
        inches = int(round_half_up(total_in % FEET_TO_INCHES))
        if inches == FEET_TO_INCHES:            # 5'12" → 6'0"
            feet, inches = feet + 1, 0
        return int(feet), inches

    # --------------- weight -----------------------------------------
    @staticmethod
    def to_metric_weight(pounds: float) -> float:
        return round_half_up(pounds * LB_TO_KG, 1)

    @staticmethod
    def to_imperial_weight(weight_kg: float, ndigits: int = 0) -> float | int:
        lbs = round_half_up(weight_kg * KG_TO_LB, ndigits)
        return int(lbs) if ndigits == 0 else lbs

    # --------------- validation -------------------------------------
    @staticmethod
    def validate(
        height_cm: float,
        weight_kg: float,
        unit_system: UnitSystem = UnitSystem.METRIC,
    ) -> ValidationResult:
        """Raise OutOfRange naming the bounds in both unit systems."""
        imperial = unit_system == UnitSystem.IMPERIAL

        if not (math.isfinite(height_cm) and MIN_HEIGHT_CM <= height_cm <= MAX_HEIGHT_CM):
            lo = (f"{MIN_HEIGHT_CM}cm", f"{MIN_HEIGHT_CM * CM_TO_INCH / FEET_TO_INCHES:.1f}ft")
            hi = (f"{MAX_HEIGHT_CM}cm", f"{MAX_HEIGHT_CM * CM_TO_INCH / FEET_TO_INCHES:.1f}ft")
            raise OutOfRange(
                _bounds_message("Height", lo, hi, imperial),
                field="height_cm",
                lower=MIN_HEIGHT_CM,
                upper=MAX_HEIGHT_CM,
                unit_system=unit_system.value,
            )

        if not (math.isfinite(weight_kg) and MIN_WEIGHT_KG <= weight_kg <= MAX_WEIGHT_KG):
            lo = (f"{MIN_WEIGHT_KG}kg", f"{MIN_WEIGHT_KG * KG_TO_LB:.1f}lbs")
            hi = (f"{MAX_WEIGHT_KG}kg", f"{MAX_WEIGHT_KG * KG_TO_LB:.1f}lbs")
            raise OutOfRange(
                _bounds_message("Weight", lo, hi, imperial),
                field="weight_kg",
                lower=MIN_WEIGHT_KG,
                upper=MAX_WEIGHT_KG,
                unit_system=unit_system.value,
            )

        return ValidationResult(height_cm=height_cm, weight_kg=weight_kg)


def _bounds_message(
    what: str,
    lo: tuple[str, str],
    hi: tuple[str, str],
    imperial: bool,
) -> str:
    # (metric, imperial) pairs; the active system leads
    def fmt(pair: tuple[str, str]) -> str:
        first, second = (pair[1], pair[0]) if imperial else pair
        return f"{first} ({second})"

    return f"{what} must be between {fmt(lo)} and {fmt(hi)}."
