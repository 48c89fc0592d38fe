"""
core/prompts.py
────────────────────────────────────────────────────────────────────────
Prompt text for the two 7-day plans and the follow-up chat, plus parsing
of the model's JSON replies into plan objects.

Everything here is pure string work over an immutable profile + metrics;
the network side lives in services/.
"""

from __future__ import annotations

import json
import logging
from textwrap import dedent

from pydantic import ValidationError

from core.constants import DEFICIT_KCAL, MIN_DEFICIT_TARGET_KCAL, SURPLUS_KCAL
from core.models.plan import DietPlan, ExercisePlan
from core.models.profile import (
    BMICategory,
    CalculatedMetrics,
    DietPreference,
    UserProfile,
)
from scripts.helpers import extract_clean_json

_LOG = logging.getLogger(__name__)

ASSISTANT_NAME = "MetaFlux AI"


# ──────────────────────────────────────────────────────────────────────
#  Shared profile block
# ──────────────────────────────────────────────────────────────────────
def _profile_lines(profile: UserProfile, metrics: CalculatedMetrics) -> str:
    return "\n".join([
        f"Age: {metrics.age}",
        f"Gender: {profile.gender.value}",
        f"Height: {profile.height_cm:g} cm",
        f"Weight: {profile.weight_kg:g} kg",
        f"BMI: {metrics.bmi.value} ({metrics.bmi.category.value})",
        f"BMR: {metrics.bmr} calories/day",
        f"TDEE: {metrics.tdee} calories/day",
        f"Activity Level: {profile.activity_level.value}",
    ])


# ──────────────────────────────────────────────────────────────────────
#  Exercise plan
# ──────────────────────────────────────────────────────────────────────
_EXERCISE_TASK = dedent("""\
    Generate a 7-day personalized exercise plan.
    For each day, include:
    - Day (e.g., "Monday", "Day 1")
    - Focus (e.g., "Cardio", "Strength Training - Upper Body", "Rest")
    - Exercises: Array of objects, each with:
      - name (e.g., "Running", "Push-ups")
      - duration (e.g., "30 minutes", "3 sets of 10-12 reps")
      - intensity (e.g., "Moderate", "High", "To failure")
    - Notes (optional, e.g., "Warm-up for 5 minutes before", "Cool-down and stretch after")

    The plan should be suitable for the user's current fitness level and goals implied by their activity level and BMI.
    Prioritize safety and effectiveness. Suggest rest days as appropriate.
    Return the response as a JSON object with a single key "exercisePlan" which is an array of 7 day objects.
    Example of a day object in the array:
    {
      "day": "Monday",
      "focus": "Cardio & Core",
      "exercises": [
        { "name": "Brisk Walking", "duration": "30 minutes", "intensity": "Moderate" },
        { "name": "Plank", "duration": "3 sets, 30 seconds hold", "intensity": "Moderate" }
      ],
      "notes": "Remember to stay hydrated."
    }""")


def exercise_plan_prompt(profile: UserProfile, metrics: CalculatedMetrics) -> str:
    return (
        "Based on the following user data:\n"
        f"{_profile_lines(profile, metrics)}\n\n"
        f"{_EXERCISE_TASK}\n"
    )


# ──────────────────────────────────────────────────────────────────────
#  Diet plan
# ──────────────────────────────────────────────────────────────────────
_DIET_RULES = dedent("""\
    Please ensure ALL meal suggestions strictly adhere to this preference.
    - If Vegan: no animal products whatsoever (no meat, poultry, fish, dairy, eggs, honey).
    - If Vegetarian: no meat, poultry, or fish. Dairy and eggs are okay.
    - If Pescatarian: Vegetarian diet that includes fish and seafood. No other meat or poultry.
    - If Pollotarian: Excludes red meat and fish, but includes poultry (chicken, turkey). Dairy and eggs may be included.
    - If Carnivore: Primarily meat, fish, and eggs. Minimal to no plant-based foods.
    If the preference is 'None', provide a balanced, general healthy diet.""")

_DIET_TASK = dedent("""\
    For each day, include:
    - Day (e.g., "Monday", "Day 1")
    - totalCalories (approximate for the day, close to the target)
    - Meals: Array of objects, each with:
      - name (e.g., "Breakfast", "Lunch", "Dinner", "Snack 1")
      - description (detailed, e.g., "Oatmeal (1/2 cup dry) cooked with water or unsweetened almond milk, topped with mixed berries (1 cup) and a sprinkle of chia seeds (1 tbsp).")
      - estimatedCalories (approximate)
    - Macronutrients (optional, for the whole day):
      - protein (grams)
      - carbs (grams)
      - fat (grams)

    Suggest varied, balanced, and healthy meals. Include a mix of whole foods.
    Ensure the meal descriptions are specific enough for the user to understand what to prepare.
    If allergies are specified, all meal suggestions MUST be free of those allergens.
    Return the response as a JSON object with a single key "dietPlan" which is an array of 7 day objects.""")


def calorie_target_instruction(metrics: CalculatedMetrics) -> str:
    category = metrics.bmi.category
    if category in (BMICategory.OVERWEIGHT, BMICategory.OBESE):
        target = max(MIN_DEFICIT_TARGET_KCAL, metrics.tdee - DEFICIT_KCAL)
        return f"target a moderate caloric deficit, around {target} calories, for healthy weight loss"
    if category == BMICategory.UNDERWEIGHT:
        target = metrics.tdee + SURPLUS_KCAL
        return f"target a moderate caloric surplus, around {target} calories, for healthy weight gain"
    return f"target TDEE ({metrics.tdee} calories) for maintenance"


def diet_preference_instruction(profile: UserProfile) -> str:
    if profile.diet_preference == DietPreference.NONE:
        return ""
    return f"Dietary Preference: {profile.diet_preference.value}.\n{_DIET_RULES}"


def allergies_instruction(profile: UserProfile) -> str:
    allergens = profile.all_allergens
    if not allergens:
        return ""
    return (
        f"Food Allergies: The user is allergic to the following items: {', '.join(allergens)}.\n"
        "ABSOLUTELY AVOID all ingredients containing these allergens in all meal suggestions. "
        "Double-check ingredients (e.g., sauces, dressings, processed foods) for hidden allergens."
    )


def diet_plan_prompt(profile: UserProfile, metrics: CalculatedMetrics) -> str:
    sections = ["Based on the following user data:", _profile_lines(profile, metrics)]
    for extra in (diet_preference_instruction(profile), allergies_instruction(profile)):
        if extra:
            sections.append(extra)
    sections += [
        "",
        "Generate a 7-day personalized diet plan.",
        f"The daily calorie intake should {calorie_target_instruction(metrics)}.",
        _DIET_TASK,
    ]
    return "\n".join(sections) + "\n"


# ──────────────────────────────────────────────────────────────────────
#  Chat
# ──────────────────────────────────────────────────────────────────────
def chat_context(
    profile: UserProfile,
    metrics: CalculatedMetrics,
    exercise_plan: ExercisePlan | None,
    diet_plan: DietPlan | None,
) -> str:
    allergies = ", ".join(profile.all_allergens) or "None specified"
    context = (
        "USER PROFILE:\n"
        f"Age: {metrics.age} years\n"
        f"Gender: {profile.gender.value}\n"
        f"Height: {profile.height_cm:g} cm\n"
        f"Weight: {profile.weight_kg:g} kg\n"
        f"BMI: {metrics.bmi.value} ({metrics.bmi.category.value})\n"
        f"BMR (Basal Metabolic Rate): {metrics.bmr} calories/day\n"
        f"TDEE (Total Daily Energy Expenditure): {metrics.tdee} calories/day\n"
        f"Activity Level: {profile.activity_level.value}\n"
        f"Dietary Preference: {profile.diet_preference.value}\n"
        f"Allergies: {allergies}\n\n"
    )

    if exercise_plan and exercise_plan.exercise_plan:
        context += "\nCURRENTLY GENERATED 7-DAY EXERCISE PLAN:\n" + _plan_json(exercise_plan) + "\n"
    else:
        context += "\nNo exercise plan was generated or it's currently empty.\n"

    if diet_plan and diet_plan.diet_plan:
        context += "\nCURRENTLY GENERATED 7-DAY DIET PLAN:\n" + _plan_json(diet_plan) + "\n"
    else:
        context += "\nNo diet plan was generated or it's currently empty.\n"
    return context


def _plan_json(plan: ExercisePlan | DietPlan) -> str:
    return json.dumps(plan.model_dump(by_alias=True, exclude_none=True), indent=2)


_CHAT_RULES = dedent("""\
    The user has just received personalized 7-day exercise and diet plans based on their profile.
    Your primary role is to discuss these plans with the user. You should help them understand their plans, answer any questions they have, and assist with making reasonable adjustments or modifications if they request them.
    When providing information or making suggestions:
    - Be encouraging, clear, and provide actionable advice.
    - Always refer to the user's specific data, metrics, and the current plans they have (which are provided below as context).
    - If the user asks for a revision (e.g., "Can I swap the Tuesday lunch?" or "Make Friday's workout focus on legs"), provide the updated part of the plan or the full revised plan.
    - If you provide a revised plan or part of a plan, try to output it in the original JSON structure if possible, like: ```json { "dietPlan": [...] } ``` or ```json { "exercisePlan": [...] } ``` for easier integration, or as a clearly formatted list.
    - Prioritize safety. If a user's request seems unsafe or counterproductive to their implied goals (e.g. drastic calorie cuts, overtraining), gently guide them towards safer alternatives.
    - Remind the user that these are suggestions and they should listen to their body.
    - CRITICALLY IMPORTANT: DO NOT PROVIDE MEDICAL ADVICE. For any medical concerns, injuries, or health conditions, strictly advise the user to consult with a healthcare professional or doctor. You can say something like, "For specific medical conditions or advice, it's always best to consult with your doctor or a registered dietitian/physician."
    - Keep responses concise but informative.""")


def chat_system_instruction(
    profile: UserProfile,
    metrics: CalculatedMetrics,
    exercise_plan: ExercisePlan | None,
    diet_plan: DietPlan | None,
) -> str:
    return (
        f'You are "{ASSISTANT_NAME}", a friendly and knowledgeable health and fitness assistant.\n'
        f"{_CHAT_RULES}\n\n"
        "INITIAL CONTEXT FOR THIS CONVERSATION:\n"
        f"{chat_context(profile, metrics, exercise_plan, diet_plan)}"
    )


# ──────────────────────────────────────────────────────────────────────
#  Reply parsing (None on malformed output)
# ──────────────────────────────────────────────────────────────────────
def parse_exercise_plan(raw: str | None) -> ExercisePlan | None:
    data = extract_clean_json(raw)
    if data is None:
        return None
    try:
        return ExercisePlan.model_validate(data)
    except ValidationError as e:
        _LOG.error("exercise plan JSON did not match the expected shape: %s", e)
        return None


def parse_diet_plan(raw: str | None) -> DietPlan | None:
    data = extract_clean_json(raw)
    if data is None:
        return None
    try:
        return DietPlan.model_validate(data)
    except ValidationError as e:
        _LOG.error("diet plan JSON did not match the expected shape: %s", e)
        return None
