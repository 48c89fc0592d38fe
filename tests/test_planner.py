from __future__ import annotations

import asyncio

import pytest

from core.health_metrics import HealthMetricsCalculator
from core.models.profile import ActivityLevel, Gender, UserProfile
from services import gemini
from services.planner import generate_plans
from fakes import FakeClient

PROFILE = UserProfile(
    dob="1990-05-01",
    gender=Gender.FEMALE,
    height_cm=165,
    weight_kg=61.5,
    activity_level=ActivityLevel.LIGHTLY_ACTIVE,
)
METRICS = HealthMetricsCalculator().compute_all(PROFILE)


def test_both_plans_are_generated():
    fake = FakeClient()
    bundle = asyncio.run(generate_plans(PROFILE, METRICS, gclient=fake))

    assert bundle.errors == []
    assert len(bundle.exercise_plan.exercise_plan) == 7
    assert len(bundle.diet_plan.diet_plan) == 7          # fenced reply still parses
    assert len(fake.aio.models.prompts) == 2


def test_one_failure_keeps_the_other_plan():
    bundle = asyncio.run(generate_plans(PROFILE, METRICS, gclient=FakeClient(fail_on="diet")))

    assert bundle.exercise_plan is not None
    assert bundle.diet_plan is None
    assert bundle.errors == [
        "Failed to generate diet plan: API quota exceeded or rate limit hit. Please try again later."
    ]
    assert bundle.has_any_plan


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(gemini.settings, "gemini_api_key", None)
    gemini.client.cache_clear()
    with pytest.raises(gemini.GeminiNotConfigured):
        asyncio.run(generate_plans(PROFILE, METRICS))
    gemini.client.cache_clear()


@pytest.mark.parametrize(
    "message,expected",
    [
        ("400 API key not valid. Please pass a valid API key.", "Invalid API Key"),
        ("429 RESOURCE_EXHAUSTED", "API quota exceeded"),
        ("something else broke", "something else broke"),
    ],
)
def test_translate_error(message, expected):
    assert expected in str(gemini.translate_error(RuntimeError(message)))


def test_context_length_only_matters_for_chat():
    err = RuntimeError("input exceeds the context length")
    assert "conversation history is too long" in str(gemini.translate_error(err, chat=True))
    assert str(gemini.translate_error(err)) == "input exceeds the context length"
