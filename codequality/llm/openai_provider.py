"""OpenAI chat-completions provider.

Uses the ``openai`` Python SDK (imported lazily so the module loads without it).
The system message and ``response_format=json_object`` ask for bare JSON.
"""

from __future__ import annotations

import logging

from codequality.core.config import settings
from codequality.core.errors import ProviderError, TransportError
from codequality.llm.base import SYSTEM_PROMPT, LLMProvider, LLMResponse, ModelInfo, vendor_message

logger = logging.getLogger(__name__)

OPENAI_MODELS = [
    ModelInfo("gpt-4-turbo", "GPT-4 Turbo"),
    ModelInfo("gpt-4", "GPT-4"),
    ModelInfo("gpt-4o", "GPT-4o"),
    ModelInfo("gpt-4o-mini", "GPT-4o Mini"),
]


class OpenAIProvider(LLMProvider):
    """Any OpenAI chat model (GPT-4o, GPT-4 Turbo, ...)."""

    def name(self) -> str:
        return "openai"

    def label(self) -> str:
        return "OpenAI"

    def default_model(self) -> str:
        return settings.OPENAI_MODEL

    def models(self) -> list[ModelInfo]:
        return list(OPENAI_MODELS)

    def chat(self, prompt: str, model: str, api_key: str) -> LLMResponse:
        import openai

        client = openai.OpenAI(api_key=api_key)

        logger.debug("OpenAI call model=%s, prompt_len=%d", model, len(prompt))

        try:
            response = client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=settings.LLM_TEMPERATURE,
                response_format={"type": "json_object"},
            )
        except openai.APIConnectionError as e:
            logger.error("OpenAI connection error [%s]: %s", model, e)
            raise TransportError() from e
        except openai.APIStatusError as e:
            logger.error("OpenAI API error [%s]: %s", model, e)
            raise ProviderError(f"OpenAI API Error: {vendor_message(e)}") from e

        choice = response.choices[0] if response.choices else None
        usage = response.usage
        return LLMResponse(
            content=(choice.message.content if choice else None) or "",
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=response.model,
            provider=self.name(),
        )
