"""
core/constants.py
────────────────────────────────────────────────────────────────────────
Fixed tables shared by the unit converter and the metrics calculator.
"""

from __future__ import annotations

from core.models.profile import ActivityLevel

# ─── input bounds ────────────────────────────────────────────────────
MIN_AGE = 15
MAX_AGE = 90
MIN_HEIGHT_CM = 100
MAX_HEIGHT_CM = 250
MIN_WEIGHT_KG = 30
MAX_WEIGHT_KG = 300

# ─── conversion factors ──────────────────────────────────────────────
INCH_TO_CM = 2.54
LB_TO_KG = 0.453592
CM_TO_INCH = 1 / INCH_TO_CM
KG_TO_LB = 1 / LB_TO_KG
FEET_TO_INCHES = 12

# ─── metrics ─────────────────────────────────────────────────────────
ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.SUPER_ACTIVE: 1.9,
}

BMI_UNDERWEIGHT_MAX = 18.5
BMI_NORMAL_MAX = 24.9
BMI_OVERWEIGHT_MAX = 29.9

# ─── diet prompt calorie targets ─────────────────────────────────────
DEFICIT_KCAL = 500
SURPLUS_KCAL = 300
MIN_DEFICIT_TARGET_KCAL = 1200
