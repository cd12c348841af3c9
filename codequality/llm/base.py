"""Abstract base for LLM providers.

Every provider turns one rendered prompt into the raw text of the vendor's
reply.  Request and response envelopes differ per vendor (message array,
content-block array, parts array) and stay inside the adapter; callers only
ever see ``LLMResponse.content``.

Adapters raise ``ProviderError`` for a non-success vendor response (with the
vendor's own message) and ``TransportError`` when the call never completed.
There is no retry, and no timeout beyond the transport's own.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful code analysis assistant. Always respond with valid JSON."

# Appended for vendors without a JSON response mode.
JSON_ONLY_SUFFIX = "\n\nIMPORTANT: Respond ONLY with valid JSON, no markdown or additional text."


# ── Shared data classes ──────────────────────────────────────────


@dataclass
class LLMResponse:
    """Response from a single LLM call."""

    content: str
    input_tokens: int = 0
    output_tokens: int = 0
    model: str = ""
    provider: str = ""


@dataclass(frozen=True)
class ModelInfo:
    """One entry of a provider's model dropdown."""

    id: str
    name: str


def vendor_message(exc: Exception) -> str:
    """Best human-readable message an SDK exception carries.

    Prefers ``error.message`` from the vendor's JSON error body, which both
    SDKs keep on ``exc.body`` (OpenAI stores the inner object, Anthropic the
    whole envelope).
    """
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
            return error["message"]
    message = getattr(exc, "message", None)
    return message if isinstance(message, str) and message else str(exc)


# Abstract provider


class LLMProvider(ABC):
    """Interface every LLM provider must implement."""

    @abstractmethod
    def name(self) -> str:
        """Short identifier used in provider configs, e.g. ``"openai"``."""

    @abstractmethod
    def label(self) -> str:
        """Name shown in the UI."""

    @abstractmethod
    def default_model(self) -> str:
        """Model used when the config leaves it empty."""

    @abstractmethod
    def models(self) -> list[ModelInfo]:
        """Models offered in the UI for this provider."""

    @abstractmethod
    def chat(self, prompt: str, model: str, api_key: str) -> LLMResponse:
        """Send *prompt* and return the vendor's reply text."""
