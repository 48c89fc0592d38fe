"""
scripts/metrics_report.py
────────────────────────────────────────────────────────────────────────
Compute health metrics for one profile from the command line, optionally
asking Gemini for both 7-day plans:

    python -m scripts.metrics_report --dob 1990-04-02 --gender Female \
        --height-cm 165 --weight-kg 61.5 --activity MODERATELY_ACTIVE

    python -m scripts.metrics_report --dob 1990-04-02 --imperial \
        --feet 5 --inches 5 --pounds 135 --plans
"""
from __future__ import annotations

import asyncio
import json
import sys
from argparse import ArgumentParser, Namespace
from dataclasses import asdict
from typing import Any, Dict

from dotenv import load_dotenv
load_dotenv()

from core.errors import InvalidInput, OutOfRange
from core.health_metrics import HealthMetricsCalculator
from core.intake import ProfileForm, build_profile
from core.models.profile import (
    ActivityLevel,
    DietPreference,
    Gender,
    KnownAllergen,
    UnitSystem,
)
from services.gemini import PlanGenerationError

calc = HealthMetricsCalculator()


def _form(args: Namespace) -> ProfileForm:
    return ProfileForm(
        dob=args.dob,
        gender=Gender(args.gender),
        unit_system=UnitSystem.IMPERIAL if args.imperial else UnitSystem.METRIC,
        height_cm=args.height_cm,
        weight_kg=args.weight_kg,
        height_ft=args.feet,
        height_in=args.inches,
        weight_lbs=args.pounds,
        activity_level=ActivityLevel[args.activity],
        diet_preference=DietPreference[args.diet],
        allergies=[KnownAllergen[a] for a in args.allergen],
        custom_allergies=args.custom_allergies,
    )


def _run(args: Namespace) -> Dict[str, Any]:
    profile = build_profile(_form(args))
    metrics = calc.compute_all(profile)
    out: Dict[str, Any] = {
        "profile": asdict(profile),
        "metrics": asdict(metrics) if metrics else None,
    }
    if args.plans and metrics:
        from services.planner import generate_plans

        bundle = asyncio.run(generate_plans(profile, metrics))
        out["exercise_plan"] = bundle.exercise_plan.model_dump(by_alias=True) if bundle.exercise_plan else None
        out["diet_plan"] = bundle.diet_plan.model_dump(by_alias=True) if bundle.diet_plan else None
        out["errors"] = bundle.errors
    return out


def main(argv: list[str] | None = None) -> int:
    ap = ArgumentParser(description="BMI / BMR / TDEE for one profile")
    ap.add_argument("--dob", required=True, help="YYYY-MM-DD")
    ap.add_argument("--gender", default=Gender.MALE.value, choices=[g.value for g in Gender])
    ap.add_argument("--imperial", action="store_true", help="read --feet/--inches/--pounds")
    ap.add_argument("--height-cm", type=float)
    ap.add_argument("--weight-kg", type=float)
    ap.add_argument("--feet", type=float)
    ap.add_argument("--inches", type=float)
    ap.add_argument("--pounds", type=float)
    ap.add_argument("--activity", default="MODERATELY_ACTIVE", choices=[a.name for a in ActivityLevel])
    ap.add_argument("--diet", default="NONE", choices=[d.name for d in DietPreference])
    ap.add_argument("--allergen", action="append", default=[], choices=[a.name for a in KnownAllergen])
    ap.add_argument("--custom-allergies", default="")
    ap.add_argument("--plans", action="store_true", help="also generate both 7-day plans")
    args = ap.parse_args(argv)

    try:
        result = _run(args)
    except (InvalidInput, OutOfRange, PlanGenerationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
