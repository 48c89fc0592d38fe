"""
core/intake.py
────────────────────────────────────────────────────────────────────────
Form boundary: raw fields in whichever unit system the user picked ➜
validated, metric-only UserProfile.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date

from core.constants import MAX_AGE, MIN_AGE
from core.errors import InvalidInput
from core.health_metrics import parse_dob
from core.models.profile import (
    ActivityLevel,
    DietPreference,
    Gender,
    KnownAllergen,
    UnitSystem,
    UserProfile,
)
from core.units import UnitConverter, round_half_up


@dataclass
class ProfileForm:
    dob: str = ""
    gender: Gender = Gender.MALE
    unit_system: UnitSystem = UnitSystem.METRIC
    # metric fields
    height_cm: float | None = None
    weight_kg: float | None = None
    # imperial fields
    height_ft: float | None = None
    height_in: float | None = None
    weight_lbs: float | None = None
    activity_level: ActivityLevel = ActivityLevel.MODERATELY_ACTIVE
    diet_preference: DietPreference = DietPreference.NONE
    allergies: list[KnownAllergen] = field(default_factory=list)
    custom_allergies: str = ""


def _check_age_window(born: date, today: date) -> None:
    # same window the date picker enforces: [today-90y, today-15y]
    latest = _years_before(today, MIN_AGE)
    earliest = _years_before(today, MAX_AGE)
    if born > today:
        raise InvalidInput("Date of Birth cannot be in the future.")
    if not earliest <= born <= latest:
        raise InvalidInput(
            f"Date of Birth must be between {earliest.isoformat()} and {latest.isoformat()}."
        )


def _years_before(d: date, years: int) -> date:
    try:
        return d.replace(year=d.year - years)
    except ValueError:                          # 29 Feb → 28 Feb
        return d.replace(year=d.year - years, day=28)


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def metric_measurements(form: ProfileForm) -> tuple[float, float]:
    """
    Return (height_cm, weight_kg) as stored: whole cm, kg to one decimal.
    A non-finite input comes back as NaN so `UnitConverter.validate` rejects it.
    """
    if form.unit_system == UnitSystem.IMPERIAL:
        ft, inch, lbs = form.height_ft or 0, form.height_in or 0, form.weight_lbs or 0
        height_cm = UnitConverter.to_metric_height(ft, inch) if _finite(ft, inch) else math.nan
        weight_kg = UnitConverter.to_metric_weight(lbs) if _finite(lbs) else math.nan
        return height_cm, weight_kg

    cm, kg = form.height_cm or 0, form.weight_kg or 0
    height_cm = int(round_half_up(cm)) if _finite(cm) else math.nan
    weight_kg = round_half_up(kg, 1) if _finite(kg) else math.nan
    return height_cm, weight_kg


def build_profile(form: ProfileForm, today: date | None = None) -> UserProfile:
    if not form.dob:
        raise InvalidInput("Date of Birth is required.")
    _check_age_window(parse_dob(form.dob), today or date.today())

    height_cm, weight_kg = metric_measurements(form)
    UnitConverter.validate(height_cm, weight_kg, form.unit_system)

    return UserProfile(
        dob=form.dob,
        gender=form.gender,
        height_cm=height_cm,
        weight_kg=weight_kg,
        activity_level=form.activity_level,
        diet_preference=form.diet_preference,
        allergies=tuple(form.allergies),
        custom_allergies=form.custom_allergies.strip(),
    )
