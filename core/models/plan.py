from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# plans travel as the camelCase JSON the model is asked to emit
_CAMEL = ConfigDict(populate_by_name=True)


class Exercise(BaseModel):
    name: str
    duration: str              # "30 minutes", "3 sets of 10-12 reps"
    intensity: str             # "Moderate", "High"


class ExerciseDay(BaseModel):
    day: str
    focus: str
    exercises: list[Exercise] = []
    notes: str | None = None


class ExercisePlan(BaseModel):
    exercise_plan: list[ExerciseDay] = Field(default_factory=list, alias="exercisePlan")

    model_config = _CAMEL


class Meal(BaseModel):
    name: str                  # Breakfast / Lunch / Dinner / Snack 1
    description: str
    estimated_calories: float = Field(alias="estimatedCalories")

    model_config = _CAMEL


class Macronutrients(BaseModel):
    protein: float             # grams
    carbs: float
    fat: float


class DietDay(BaseModel):
    day: str
    total_calories: float = Field(alias="totalCalories")
    meals: list[Meal] = []
    macronutrients: Macronutrients | None = None

    model_config = _CAMEL


class DietPlan(BaseModel):
    diet_plan: list[DietDay] = Field(default_factory=list, alias="dietPlan")

    model_config = _CAMEL


class ChatMessage(BaseModel):
    role: Literal["user", "model"]
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
