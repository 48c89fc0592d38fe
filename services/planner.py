"""
services/planner.py
────────────────────────────────────────────────────────────────────────
Fire the exercise-plan and diet-plan prompts concurrently and collect
each outcome separately: one failing never discards the other.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from google import genai

from core.models.plan import DietPlan, ExercisePlan
from core.models.profile import CalculatedMetrics, UserProfile
from core.prompts import (
    diet_plan_prompt,
    exercise_plan_prompt,
    parse_diet_plan,
    parse_exercise_plan,
)
from services import gemini

_LOG = logging.getLogger(__name__)


@dataclass
class PlanBundle:
    exercise_plan: ExercisePlan | None = None
    diet_plan: DietPlan | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def has_any_plan(self) -> bool:
        return self.exercise_plan is not None or self.diet_plan is not None


async def generate_exercise_plan(
    profile: UserProfile,
    metrics: CalculatedMetrics,
    gclient: genai.Client | None = None,
) -> ExercisePlan | None:
    raw = await gemini.generate_async(
        exercise_plan_prompt(profile, metrics), json_mode=True, gclient=gclient
    )
    return parse_exercise_plan(raw)


async def generate_diet_plan(
    profile: UserProfile,
    metrics: CalculatedMetrics,
    gclient: genai.Client | None = None,
) -> DietPlan | None:
    raw = await gemini.generate_async(
        diet_plan_prompt(profile, metrics), json_mode=True, gclient=gclient
    )
    return parse_diet_plan(raw)


async def generate_plans(
    profile: UserProfile,
    metrics: CalculatedMetrics,
    gclient: genai.Client | None = None,
) -> PlanBundle:
    if gclient is None:
        gclient = gemini.client()           # GeminiNotConfigured surfaces here, once

    exercise_res, diet_res = await asyncio.gather(
        generate_exercise_plan(profile, metrics, gclient),
        generate_diet_plan(profile, metrics, gclient),
        return_exceptions=True,
    )

    bundle = PlanBundle()
    if isinstance(exercise_res, BaseException):
        _LOG.error("Failed to generate exercise plan: %s", exercise_res)
        bundle.errors.append(f"Failed to generate exercise plan: {str(exercise_res) or 'Unknown error'}")
    else:
        bundle.exercise_plan = exercise_res
        if not exercise_res or not exercise_res.exercise_plan:
            _LOG.warning("exercise plan came back empty or malformed")

    if isinstance(diet_res, BaseException):
        _LOG.error("Failed to generate diet plan: %s", diet_res)
        bundle.errors.append(f"Failed to generate diet plan: {str(diet_res) or 'Unknown error'}")
    else:
        bundle.diet_plan = diet_res
        if not diet_res or not diet_res.diet_plan:
            _LOG.warning("diet plan came back empty or malformed")

    return bundle
