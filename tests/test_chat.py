from __future__ import annotations

import pytest

from core.health_metrics import HealthMetricsCalculator
from core.models.plan import ChatMessage
from core.models.profile import ActivityLevel, Gender, UserProfile
from services.chat import ChatSession
from services.gemini import PlanGenerationError
from fakes import FakeClient

PROFILE = UserProfile(
    dob="1985-11-30",
    gender=Gender.MALE,
    height_cm=182,
    weight_kg=90,
    activity_level=ActivityLevel.VERY_ACTIVE,
)
METRICS = HealthMetricsCalculator().compute_all(PROFILE)


def test_send_opens_chat_once_and_records_history():
    fake = FakeClient(chat_replies=["Sure, swap it for salmon.", "Done."])
    session = ChatSession(PROFILE, METRICS, gclient=fake)

    assert session.send("Can I swap Tuesday lunch?") == "Sure, swap it for salmon."
    assert session.send("Thanks") == "Done."

    assert len(fake.chats.created) == 1
    config = fake.chats.created[0]["config"]
    assert "MetaFlux AI" in config.system_instruction
    assert [m.role for m in session.history] == ["user", "model", "user", "model"]


def test_prior_history_is_replayed_into_the_chat():
    fake = FakeClient(chat_replies=["ok"])
    prior = [ChatMessage(role="user", content="hi"), ChatMessage(role="model", content="hello")]
    ChatSession(PROFILE, METRICS, history=prior, gclient=fake).send("next")

    history = fake.chats.created[0]["history"]
    assert [c.role for c in history] == ["user", "model"]
    assert history[1].parts[0].text == "hello"


def test_failure_drops_the_chat_and_reopens_on_next_send():
    fake = FakeClient(chat_replies=[RuntimeError("token limit reached"), "back again"])
    session = ChatSession(PROFILE, METRICS, gclient=fake)

    with pytest.raises(PlanGenerationError, match="conversation history is too long"):
        session.send("a very long message")
    assert session.history == []

    assert session.send("short") == "back again"
    assert len(fake.chats.created) == 2


def test_reset_returns_a_fresh_session():
    fake = FakeClient(chat_replies=["one"])
    session = ChatSession(PROFILE, METRICS, gclient=fake)
    session.send("first")

    fresh = session.reset()
    assert fresh is not session
    assert fresh.history == []
    assert len(session.history) == 2          # old session untouched
    assert fresh.profile is session.profile
