"""
Model invocation: one single-turn call to a text-generation backend.

The adapter returns raw text and nothing else. It does not retry, does not
enforce a deadline and does not look at the content; backend errors
propagate to the caller.
"""

from __future__ import annotations

import logging
from typing import Protocol

from app.config import Settings

logger = logging.getLogger(__name__)


class TextModel(Protocol):
    def generate(self, model: str, prompt: str) -> str: ...


def _build_ai_client(settings: Settings) -> "OpenAI":
    try:
        from openai import OpenAI
    except Exception as e:
        raise RuntimeError(
            "openai package not available. Reinstall the api with its dependencies"
        ) from e

    if not settings.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY is not set")

    if settings.openai_base_url:
        return OpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
    return OpenAI(api_key=settings.openai_api_key)


class OpenAITextModel:
    """
    Chat-completions backed TextModel. Works with OpenAI and any
    OpenAI-compatible endpoint set through OPENAI_BASE_URL.

    The SDK client is created on first use so a missing credential only
    fails the calls that need it, not process startup.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client = None

    @property
    def client(self) -> "OpenAI":
        if self._client is None:
            self._client = _build_ai_client(self.settings)
            logger.info("Model client initialized (base_url=%s)", self.settings.openai_base_url or "default")
        return self._client

    def generate(self, model: str, prompt: str) -> str:
        resp = self.client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
        )
        if not resp.choices:
            return ""
        return resp.choices[0].message.content or ""
