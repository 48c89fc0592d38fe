# api/v1/plans.py
from __future__ import annotations
from fastapi import APIRouter, HTTPException, status

from services import planner
from services.chat import ChatSession
from services.gemini import GeminiNotConfigured, PlanGenerationError
from api.v1.metrics import profile_and_metrics
from api.v1.schemas import (
    ChatRequest,
    ChatResponse,
    MetricsOut,
    PlansResponse,
    ProfileIn,
    ProfileOut,
)

router = APIRouter()

_NO_METRICS = "Could not calculate health metrics. Please check your inputs."


@router.post("", response_model=PlansResponse, status_code=status.HTTP_200_OK)
async def generate_plans(body: ProfileIn) -> PlansResponse:
    profile, metrics = profile_and_metrics(body)
    if metrics is None:
        raise HTTPException(status_code=422, detail=_NO_METRICS)

    try:
        bundle = await planner.generate_plans(profile, metrics)
    except GeminiNotConfigured as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return PlansResponse(
        profile=ProfileOut.from_profile(profile),
        metrics=MetricsOut.from_metrics(metrics),
        exercise_plan=bundle.exercise_plan,
        diet_plan=bundle.diet_plan,
        errors=bundle.errors,
    )


@router.post("/chat", response_model=ChatResponse, status_code=status.HTTP_200_OK)
def chat(body: ChatRequest) -> ChatResponse:
    """
    Stateless on the server: the caller sends the conversation so far and
    a fresh session is rebuilt from it for every turn.
    """
    profile, metrics = profile_and_metrics(body.profile)
    if metrics is None:
        raise HTTPException(status_code=422, detail=_NO_METRICS)

    session = ChatSession(
        profile,
        metrics,
        exercise_plan=body.exercise_plan,
        diet_plan=body.diet_plan,
        history=body.history,
    )
    try:
        reply = session.send(body.message)
    except GeminiNotConfigured as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except PlanGenerationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return ChatResponse(reply=reply, history=session.history)
