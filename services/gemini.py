# services/gemini.py
import asyncio
import functools
import logging
import random

from google import genai
from google.genai import types, errors as gerrors

from config import settings

_LOG = logging.getLogger(__name__)


class PlanGenerationError(RuntimeError):
    """A Gemini call failed; message is safe to show to the user."""


class GeminiNotConfigured(PlanGenerationError):
    pass


# ───────────── Client ─────────────
@functools.lru_cache(maxsize=1)
def client() -> genai.Client:
    if not settings.gemini_api_key:
        raise GeminiNotConfigured(
            "GEMINI_API_KEY is not set. Cannot generate plans or chat."
        )
    return genai.Client(api_key=settings.gemini_api_key)


def _config(temperature: float | None, json_mode: bool, max_output_tokens: int | None):
    return types.GenerateContentConfig(
        temperature=settings.gemini_temperature if temperature is None else temperature,
        max_output_tokens=max_output_tokens,
        response_mime_type="application/json" if json_mode else None,
    )


def _rate_limited(e: Exception) -> bool:
    return isinstance(e, gerrors.ClientError) and (
        getattr(e, "status", None) == "RESOURCE_EXHAUSTED" or getattr(e, "code", None) == 429
    )


def _backoff(attempt: int) -> float:
    return (2 ** attempt) + random.random()


# ───────────── Error translation ─────────────
def translate_error(e: Exception, chat: bool = False) -> PlanGenerationError:
    if isinstance(e, PlanGenerationError):
        return e
    text = str(e)
    low = text.lower()
    if "api key not valid" in low or "api_key_invalid" in low:
        return PlanGenerationError("Invalid API Key. Please check your Gemini API Key.")
    if "quota" in low or "rate limit" in low or "resource_exhausted" in low:
        return PlanGenerationError(
            "API quota exceeded or rate limit hit. Please try again later."
        )
    if chat and ("context length" in low or "token limit" in low):
        return PlanGenerationError(
            "The conversation history is too long. Please start a new plan "
            "generation to reset the chat or try a shorter message."
        )
    return PlanGenerationError(text or type(e).__name__)


# ───────────── Generation ─────────────
async def generate_async(
    prompt: str,
    temperature: float | None = None,
    max_output_tokens: int | None = None,
    json_mode: bool = False,
    gclient: genai.Client | None = None,
) -> str:
    gclient = gclient or client()
    for attempt in range(settings.gemini_max_retries):
        try:
            resp = await gclient.aio.models.generate_content(
                model=settings.gemini_model,
                contents=prompt,
                config=_config(temperature, json_mode, max_output_tokens),
            )
            return resp.text or ""
        except Exception as e:
            if _rate_limited(e) and attempt + 1 < settings.gemini_max_retries:
                delay = _backoff(attempt)
                _LOG.warning("429 from Gemini, retrying in %.1fs", delay)
                await asyncio.sleep(delay)
                continue
            _LOG.error("Gemini generation failed: %s", e)
            raise translate_error(e) from e
    raise PlanGenerationError("Gemini retries exhausted")
