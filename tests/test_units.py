# tests/test_units.py
from __future__ import annotations

import pytest

from core.errors import OutOfRange
from core.models.profile import UnitSystem
from core.units import UnitConverter, round_half_up

conv = UnitConverter()


# ── conversions ─────────────────────────────────────────────────────
def test_metric_height_from_feet_and_inches():
    assert conv.to_metric_height(5, 9) == 175          # 69 in = 175.26 cm


def test_imperial_height_from_cm():
    assert conv.to_imperial_height(175) == (5, 9)


def test_imperial_height_carries_twelve_inches_into_feet():
    # 182 cm = 71.65 in → 5 ft 11.65 in, which rounds to 12 in
    assert conv.to_imperial_height(182) == (6, 0)


def test_metric_weight_keeps_one_decimal():
    assert conv.to_metric_weight(154) == 69.9


def test_imperial_weight_is_whole_pounds_for_display():
    lbs = conv.to_imperial_weight(70)
    assert lbs == 154
    assert isinstance(lbs, int)


def test_round_half_up_rounds_halves_away_from_zero():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.25, 1) == 0.3


# ── round trips ─────────────────────────────────────────────────────
def test_height_round_trip_within_one_cm():
    for cm in range(100, 251):
        feet, inches = conv.to_imperial_height(cm)
        assert abs(conv.to_metric_height(feet, inches) - cm) <= 1, cm


def test_weight_round_trip_within_a_tenth_of_a_kg():
    # display pounds are whole numbers; the round trip keeps tenths
    for tenths in range(300, 3001, 7):
        kg = tenths / 10
        back = conv.to_metric_weight(conv.to_imperial_weight(kg, ndigits=1))
        assert abs(back - kg) <= 0.1 + 1e-9, kg


# ── validation ──────────────────────────────────────────────────────
def test_height_below_range_fails():
    with pytest.raises(OutOfRange) as exc:
        conv.validate(99, 70)
    assert exc.value.field == "height_cm"
    assert str(exc.value) == "Height must be between 100cm (3.3ft) and 250cm (8.2ft)."


def test_height_lower_bound_passes():
    res = conv.validate(100, 70)
    assert res.height_cm == 100


def test_weight_above_range_fails():
    with pytest.raises(OutOfRange) as exc:
        conv.validate(175, 301)
    assert exc.value.field == "weight_kg"
    assert exc.value.upper == 300


def test_bounds_message_leads_with_active_unit_system():
    with pytest.raises(OutOfRange) as exc:
        conv.validate(175, 20, UnitSystem.IMPERIAL)
    assert str(exc.value) == "Weight must be between 66.1lbs (30kg) and 661.4lbs (300kg)."
    assert exc.value.unit_system == "imperial"


@pytest.mark.parametrize(
    "height,weight,field",
    [
        (float("nan"), 70, "height_cm"),
        (float("inf"), 70, "height_cm"),
        (175, float("-inf"), "weight_kg"),
    ],
)
def test_non_finite_values_are_out_of_range(height, weight, field):
    with pytest.raises(OutOfRange) as exc:
        conv.validate(height, weight)
    assert exc.value.field == field
