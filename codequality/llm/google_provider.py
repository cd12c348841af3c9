"""Google Gemini provider.

Talks to the Generative Language REST API (``models/{model}:generateContent``)
directly with ``httpx``.  The request is a ``contents[].parts[]`` envelope;
the reply text is the concatenation of the first candidate's text parts.

Env vars:
  - GOOGLE_MODEL     (default: gemini-1.5-flash)
  - GOOGLE_API_BASE  (default: https://generativelanguage.googleapis.com/v1beta)
"""

from __future__ import annotations

import logging

import httpx

from codequality.core.config import settings
from codequality.core.errors import ProviderError, TransportError
from codequality.llm.base import JSON_ONLY_SUFFIX, LLMProvider, LLMResponse, ModelInfo

logger = logging.getLogger(__name__)

GOOGLE_MODELS = [
    ModelInfo("gemini-2.0-flash-exp", "Gemini 2.0 Flash (Experimental)"),
    ModelInfo("gemini-1.5-pro", "Gemini 1.5 Pro"),
    ModelInfo("gemini-1.5-flash", "Gemini 1.5 Flash"),
]


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.reason_phrase or f"HTTP {response.status_code}"


class GoogleProvider(LLMProvider):
    """Gemini models over the public REST endpoint."""

    def __init__(self, base_url: str | None = None, transport: httpx.BaseTransport | None = None) -> None:
        self._base_url = (base_url or settings.GOOGLE_API_BASE).rstrip("/")
        self._transport = transport

    def name(self) -> str:
        return "google"

    def label(self) -> str:
        return "Google AI"

    def default_model(self) -> str:
        return settings.GOOGLE_MODEL

    def models(self) -> list[ModelInfo]:
        return list(GOOGLE_MODELS)

    def chat(self, prompt: str, model: str, api_key: str) -> LLMResponse:
        url = f"{self._base_url}/models/{model}:generateContent"
        body = {
            "contents": [{"parts": [{"text": prompt + JSON_ONLY_SUFFIX}]}],
            "generationConfig": {
                "temperature": settings.LLM_TEMPERATURE,
                "maxOutputTokens": settings.LLM_MAX_TOKENS,
            },
        }

        logger.debug("Google call model=%s, prompt_len=%d", model, len(prompt))

        try:
            # No client-side timeout: generation time is bounded by the vendor.
            with httpx.Client(timeout=None, transport=self._transport) as client:
                response = client.post(url, params={"key": api_key}, json=body)
        except httpx.TransportError as e:
            logger.error("Google connection error [%s]: %s", model, e)
            raise TransportError() from e

        if response.is_error:
            message = _error_message(response)
            logger.error("Google API error [%s]: %s %s", model, response.status_code, message)
            raise ProviderError(f"Google AI Error: {message}")

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Google reply is not JSON [%s]: %s", model, e)
            raise ProviderError("Google AI Error: the response was not valid JSON") from e
        if not isinstance(data, dict):
            raise ProviderError("Google AI Error: unexpected response format")

        candidates = data.get("candidates") or []
        if not candidates:
            raise ProviderError("Google AI Error: the response contained no candidates")

        first = candidates[0] if isinstance(candidates, list) else None
        reply = (first.get("content") or {}) if isinstance(first, dict) else None
        if not isinstance(reply, dict):
            raise ProviderError("Google AI Error: unexpected response format")
        parts = reply.get("parts") or []
        if not isinstance(parts, list):
            raise ProviderError("Google AI Error: unexpected response format")
        content = "".join(
            part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)
        )

        usage = data.get("usageMetadata")
        if not isinstance(usage, dict):
            usage = {}
        return LLMResponse(
            content=content,
            input_tokens=usage.get("promptTokenCount", 0),
            output_tokens=usage.get("candidatesTokenCount", 0),
            model=data.get("modelVersion", model),
            provider=self.name(),
        )
