from __future__ import annotations

import logging

from codequality.core.errors import MissingCredentialError
from codequality.core.security import sanitize_api_key
from codequality.domain.schemas import ProviderConfig
from codequality.llm.registry import LLMProviderRegistry

logger = logging.getLogger(__name__)


class LLMGateway:
    """
    Send a rendered prompt to whichever provider a ``ProviderConfig`` names.

    One call, one reply: no retry, no fallback to another provider.
    """

    def __init__(self, registry: LLMProviderRegistry):
        self.registry = registry

    def send(self, prompt: str, config: ProviderConfig) -> str:
        api_key = sanitize_api_key(config.api_key)
        if not api_key:
            raise MissingCredentialError()

        provider = self.registry.pick(config.provider)
        model = config.model or provider.default_model()

        logger.info(
            "LLM call provider=%s model=%s prompt_len=%d",
            provider.name(),
            model,
            len(prompt),
            extra={"provider": provider.name()},
        )
        resp = provider.chat(prompt, model=model, api_key=api_key)
        logger.info(
            "LLM reply provider=%s tokens_in=%d tokens_out=%d",
            provider.name(),
            resp.input_tokens,
            resp.output_tokens,
            extra={"provider": provider.name()},
        )
        return resp.content
