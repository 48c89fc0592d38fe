from __future__ import annotations

from datetime import date

import pytest

from core.errors import InvalidInput, OutOfRange
from core.intake import ProfileForm, build_profile
from core.models.profile import KnownAllergen, UnitSystem

TODAY = date(2026, 10, 17)


def test_metric_form_is_normalised():
    p = build_profile(
        ProfileForm(dob="1990-05-01", height_cm=175.4, weight_kg=70.26, custom_allergies="  kiwi "),
        today=TODAY,
    )
    assert p.height_cm == 175
    assert p.weight_kg == 70.3
    assert p.custom_allergies == "kiwi"


def test_imperial_form_is_converted_to_metric():
    p = build_profile(
        ProfileForm(
            dob="1990-05-01",
            unit_system=UnitSystem.IMPERIAL,
            height_ft=5,
            height_in=9,
            weight_lbs=154,
            allergies=[KnownAllergen.EGGS],
        ),
        today=TODAY,
    )
    assert (p.height_cm, p.weight_kg) == (175, 69.9)
    assert p.allergies == (KnownAllergen.EGGS,)


def test_missing_dob_blocks_submission():
    with pytest.raises(InvalidInput, match="Date of Birth is required"):
        build_profile(ProfileForm(height_cm=175, weight_kg=70), today=TODAY)


@pytest.mark.parametrize("dob", ["2015-01-01", "1930-01-01", "2027-01-01"])
def test_dob_outside_age_window(dob):
    with pytest.raises(InvalidInput):
        build_profile(ProfileForm(dob=dob, height_cm=175, weight_kg=70), today=TODAY)


def test_out_of_range_imperial_height_reports_feet_first():
    form = ProfileForm(
        dob="1990-05-01",
        unit_system=UnitSystem.IMPERIAL,
        height_ft=3,
        height_in=0,
        weight_lbs=150,
    )
    with pytest.raises(OutOfRange, match=r"3\.3ft \(100cm\)"):
        build_profile(form, today=TODAY)


def test_non_finite_imperial_weight_is_out_of_range():
    form = ProfileForm(
        dob="1990-05-01",
        unit_system=UnitSystem.IMPERIAL,
        height_ft=5,
        height_in=9,
        weight_lbs=float("inf"),
    )
    with pytest.raises(OutOfRange, match="Weight must be between"):
        build_profile(form, today=TODAY)


def test_nan_metric_height_is_out_of_range():
    with pytest.raises(OutOfRange, match="Height must be between"):
        build_profile(ProfileForm(dob="1990-05-01", height_cm=float("nan"), weight_kg=70), today=TODAY)
