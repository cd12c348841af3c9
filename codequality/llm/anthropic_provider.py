"""Anthropic Claude provider.

Uses the ``anthropic`` Python SDK.  The Messages API has no JSON mode, so
the prompt is suffixed with an explicit "JSON only" instruction and the
text blocks of the reply are concatenated.
"""

from __future__ import annotations

import logging

from codequality.core.config import settings
from codequality.core.errors import ProviderError, TransportError
from codequality.llm.base import JSON_ONLY_SUFFIX, LLMProvider, LLMResponse, ModelInfo, vendor_message

logger = logging.getLogger(__name__)

ANTHROPIC_MODELS = [
    ModelInfo("claude-3-5-sonnet-20241022", "Claude 3.5 Sonnet (Latest)"),
    ModelInfo("claude-3-5-sonnet-20240620", "Claude 3.5 Sonnet"),
    ModelInfo("claude-3-opus-20240229", "Claude 3 Opus"),
    ModelInfo("claude-3-sonnet-20240229", "Claude 3 Sonnet"),
]


class AnthropicProvider(LLMProvider):
    """Claude 3.5 Sonnet (or any Anthropic chat model)."""

    def name(self) -> str:
        return "anthropic"

    def label(self) -> str:
        return "Anthropic"

    def default_model(self) -> str:
        return settings.ANTHROPIC_MODEL

    def models(self) -> list[ModelInfo]:
        return list(ANTHROPIC_MODELS)

    def chat(self, prompt: str, model: str, api_key: str) -> LLMResponse:
        import anthropic

        client = anthropic.Anthropic(api_key=api_key)

        try:
            response = client.messages.create(
                model=model,
                max_tokens=settings.LLM_MAX_TOKENS,
                messages=[
                    {"role": "user", "content": prompt + JSON_ONLY_SUFFIX},
                ],
            )
        except anthropic.APIConnectionError as e:
            logger.error("Anthropic connection error [%s]: %s", model, e)
            raise TransportError() from e
        except anthropic.APIStatusError as e:
            logger.error("Anthropic API error [%s]: %s", model, e)
            raise ProviderError(f"Anthropic API Error: {vendor_message(e)}") from e

        content = ""
        for block in response.content:
            if block.type == "text":
                content += block.text

        usage = response.usage
        return LLMResponse(
            content=content,
            input_tokens=usage.input_tokens if usage else 0,
            output_tokens=usage.output_tokens if usage else 0,
            model=response.model,
            provider=self.name(),
        )
