from __future__ import annotations
from typing import List

from pydantic import BaseModel

from core.models.plan import ChatMessage, DietPlan, ExercisePlan
from .profile import MetricsOut, ProfileIn, ProfileOut


class PlansResponse(BaseModel):
    profile: ProfileOut
    metrics: MetricsOut
    exercise_plan: ExercisePlan | None
    diet_plan: DietPlan | None
    errors: List[str] = []


class ChatRequest(BaseModel):
    profile: ProfileIn
    exercise_plan: ExercisePlan | None = None
    diet_plan: DietPlan | None = None
    history: List[ChatMessage] = []
    message: str


class ChatResponse(BaseModel):
    reply: str
    history: List[ChatMessage]
