"""LLM Provider Registry.

Usage::

    registry = LLMProviderRegistry()
    registry.register(OpenAIProvider())
    registry.register(AnthropicProvider())

    provider = registry.get("openai")       # specific provider, or None
    provider = registry.pick("anthropic")   # raises if missing
    names    = registry.list()              # ["openai", "anthropic"]
"""

from __future__ import annotations

from codequality.core.config import settings
from codequality.llm.base import LLMProvider


class LLMProviderRegistry:
    """Registry of available LLM providers."""

    def __init__(self) -> None:
        self._providers: dict[str, LLMProvider] = {}

    def register(self, provider: LLMProvider) -> None:
        self._providers[provider.name()] = provider

    def get(self, name: str) -> LLMProvider | None:
        return self._providers.get(name)

    def pick(self, name: str) -> LLMProvider:
        p = self.get(name)
        if p is None:
            available = ", ".join(self.list())
            raise ValueError(f"Unsupported provider '{name}'. Available: {available}")
        return p

    def list(self) -> list[str]:
        """All registered provider names."""
        return list(self._providers.keys())

    def get_default(self) -> LLMProvider | None:
        """The provider named by DEFAULT_PROVIDER, else the first registered one."""
        p = self.get(settings.DEFAULT_PROVIDER)
        if p is not None:
            return p
        return next(iter(self._providers.values()), None)
