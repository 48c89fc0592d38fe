"""
services/chat.py
────────────────────────────────────────────────────────────────────────
Follow-up conversation about the generated plans.

A ChatSession belongs to whoever created it; there is no module-level
"active chat". `reset()` hands back a new session for the same context.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from google import genai
from google.genai import types

from config import settings
from core.models.plan import ChatMessage, DietPlan, ExercisePlan
from core.models.profile import CalculatedMetrics, UserProfile
from core.prompts import chat_system_instruction
from services import gemini

_LOG = logging.getLogger(__name__)


class ChatSession:
    def __init__(
        self,
        profile: UserProfile,
        metrics: CalculatedMetrics,
        exercise_plan: ExercisePlan | None = None,
        diet_plan: DietPlan | None = None,
        history: Iterable[ChatMessage] = (),
        gclient: genai.Client | None = None,
    ) -> None:
        self.profile = profile
        self.metrics = metrics
        self.exercise_plan = exercise_plan
        self.diet_plan = diet_plan
        self.history: list[ChatMessage] = list(history)
        self._gclient = gclient
        self._chat: Any | None = None       # opened lazily on first send

    @property
    def system_instruction(self) -> str:
        return chat_system_instruction(
            self.profile, self.metrics, self.exercise_plan, self.diet_plan
        )

    def _open(self) -> Any:
        gclient = self._gclient or gemini.client()
        _LOG.info("opening chat session (%d prior messages)", len(self.history))
        return gclient.chats.create(
            model=settings.gemini_model,
            config=types.GenerateContentConfig(system_instruction=self.system_instruction),
            history=[
                types.Content(role=m.role, parts=[types.Part(text=m.content)])
                for m in self.history
            ],
        )

    def send(self, message: str) -> str:
        if self._chat is None:
            self._chat = self._open()
        try:
            resp = self._chat.send_message(message)
        except Exception as e:
            _LOG.error("Error sending message in chat: %s", e)
            self._chat = None                # reopened from history next time
            raise gemini.translate_error(e, chat=True) from e

        reply = resp.text or ""
        self.history.append(ChatMessage(role="user", content=message))
        self.history.append(ChatMessage(role="model", content=reply))
        return reply

    def reset(self) -> ChatSession:
        _LOG.info("resetting chat session")
        return ChatSession(
            self.profile,
            self.metrics,
            self.exercise_plan,
            self.diet_plan,
            gclient=self._gclient,
        )
