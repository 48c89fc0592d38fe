"""
core/health_metrics.py
────────────────────────────────────────────────────────────────────────
Age, BMI (+ category), BMR (Mifflin–St Jeor) and TDEE from a profile.

Non-computable states return the sentinels 0 / None instead of raising;
only an unusable date of birth is an error (InvalidInput).
"""

from __future__ import annotations

import logging
from datetime import date

from core.constants import (
    ACTIVITY_MULTIPLIERS,
    BMI_NORMAL_MAX,
    BMI_UNDERWEIGHT_MAX,
)
from core.errors import InvalidInput
from core.models.profile import (
    ActivityLevel,
    BMICategory,
    BMIResult,
    CalculatedMetrics,
    Gender,
    UserProfile,
)
from core.units import round_half_up

_LOG = logging.getLogger(__name__)


def parse_dob(dob: str | date) -> date:
    if isinstance(dob, date):
        return dob
    if not dob or not dob.strip():
        raise InvalidInput("Date of Birth is required.")
    try:
        return date.fromisoformat(dob.strip())
    except ValueError as exc:
        raise InvalidInput(f"Date of Birth {dob!r} is not a valid YYYY-MM-DD date.") from exc


class HealthMetricsCalculator:
    """Source-of-truth for the derived profile metrics."""

    # --------------- public entrypoint --------------------------------
    def compute_all(
        self,
        profile: UserProfile,
        reference_date: date | None = None,
    ) -> CalculatedMetrics | None:
        """
        Full recomputation. None means "nothing to show yet" (no dob or a
        non-positive height/weight) and is distinct from zero-valued metrics.
        """
        if not profile.dob or profile.height_cm <= 0 or profile.weight_kg <= 0:
            return None

        age = self.calculate_age(profile.dob, reference_date)
        bmi = self.calculate_bmi(profile.weight_kg, profile.height_cm)
        bmr = self.calculate_bmr(profile.weight_kg, profile.height_cm, age, profile.gender)
        tdee = self.calculate_tdee(bmr, profile.activity_level)

        metrics = CalculatedMetrics(
            age=age,
            bmi=BMIResult(value=round_half_up(bmi, 1), category=self.classify_bmi(bmi)),
            bmr=int(round_half_up(bmr)),
            tdee=int(round_half_up(tdee)),
        )
        _LOG.debug("metrics computed: %s", metrics)
        return metrics

    # --------------- age ----------------------------------------------
    def calculate_age(
        self,
        dob: str | date,
        reference_date: str | date | None = None,
    ) -> int:
        born = parse_dob(dob)
        today = parse_dob(reference_date) if reference_date else date.today()
        if born > today:
            raise InvalidInput("Date of Birth cannot be in the future.")

        age = today.year - born.year
        if (today.month, today.day) < (born.month, born.day):
            age -= 1                              # birthday not reached yet
        return age

    # --------------- BMI ----------------------------------------------
    def calculate_bmi(self, weight_kg: float, height_cm: float) -> float:
        if weight_kg <= 0 or height_cm <= 0:
            return 0
        height_m = height_cm / 100
        return weight_kg / (height_m * height_m)

    def classify_bmi(self, value: float) -> BMICategory:
        if value < BMI_UNDERWEIGHT_MAX:
            return BMICategory.UNDERWEIGHT
        if value <= BMI_NORMAL_MAX:
            return BMICategory.NORMAL
        # the Overweight band (up to BMI_OVERWEIGHT_MAX) is reported as Obese too
        return BMICategory.OBESE

    # --------------- BMR / TDEE ---------------------------------------
    def calculate_bmr(
        self,
        weight_kg: float,
        height_cm: float,
        age: int,
        gender: Gender,
    ) -> float:
        if weight_kg <= 0 or height_cm <= 0 or age <= 0:
            return 0

        base = 10 * weight_kg + 6.25 * height_cm - 5 * age
        if gender == Gender.MALE:
            return base + 5
        if gender == Gender.FEMALE:
            return base - 161
        return ((base + 5) + (base - 161)) / 2

    def calculate_tdee(self, bmr: float, activity_level: ActivityLevel) -> float:
        if bmr <= 0:
            return 0
        return bmr * ACTIVITY_MULTIPLIERS[ActivityLevel(activity_level)]
