"""Stand-ins for the google-genai client used by the service tests."""
from __future__ import annotations

import json
from types import SimpleNamespace

EXERCISE_REPLY = json.dumps({
    "exercisePlan": [
        {"day": f"Day {i}", "focus": "Full body",
         "exercises": [{"name": "Squat", "duration": "3x10", "intensity": "Moderate"}]}
        for i in range(1, 8)
    ]
})
DIET_REPLY = "```json\n" + json.dumps({
    "dietPlan": [
        {"day": f"Day {i}", "totalCalories": 2200,
         "meals": [{"name": "Lunch", "description": "Rice and beans", "estimatedCalories": 700}]}
        for i in range(1, 8)
    ]
}) + "\n```"


class _AsyncModels:
    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.prompts: list[str] = []

    async def generate_content(self, model, contents, config=None):
        self.prompts.append(contents)
        kind = "diet" if '"dietPlan"' in contents else "exercise"
        if kind == self.fail_on:
            raise RuntimeError("Quota exceeded for this project")
        return SimpleNamespace(text=DIET_REPLY if kind == "diet" else EXERCISE_REPLY)


class FakeChat:
    def __init__(self, history, replies):
        self.history = history
        self.replies = replies          # shared across reopened chats
        self.sent: list[str] = []

    def send_message(self, message):
        self.sent.append(message)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(text=reply)


class _Chats:
    def __init__(self, replies):
        self.replies = replies
        self.created: list[dict] = []

    def create(self, model, config=None, history=None):
        self.created.append({"model": model, "config": config, "history": history})
        return FakeChat(history, self.replies)


class FakeClient:
    def __init__(self, fail_on: str | None = None, chat_replies=()):
        self.aio = SimpleNamespace(models=_AsyncModels(fail_on))
        self.chats = _Chats(list(chat_replies))
