"""Tests for the provider-agnostic LLM gateway and key sanitisation."""

import pytest

from codequality.core.errors import MissingCredentialError, ProviderError
from codequality.core.security import sanitize_api_key
from codequality.domain.schemas import ProviderConfig
from codequality.llm.gateway import LLMGateway


def test_send_returns_reply_text(fake_registry, fake_provider):
    fake_provider.reply = '{"summary": "hi"}'
    out = LLMGateway(fake_registry).send("prompt", ProviderConfig(provider="openai", model="gpt-4o", api_key="sk-x"))
    assert out == '{"summary": "hi"}'
    assert fake_provider.calls == [{"prompt": "prompt", "model": "gpt-4o", "api_key": "sk-x"}]


def test_empty_model_uses_provider_default(fake_registry, fake_provider):
    LLMGateway(fake_registry).send("p", ProviderConfig(provider="openai", api_key="sk-x"))
    assert fake_provider.calls[0]["model"] == "openai-default"


@pytest.mark.parametrize("key", ["", "   ", "\u200b\u200b"])
def test_missing_key_raises_before_any_call(fake_registry, fake_provider, key):
    with pytest.raises(MissingCredentialError) as exc:
        LLMGateway(fake_registry).send("p", ProviderConfig(provider="openai", api_key=key))
    assert exc.value.status_code == 400
    assert "API key is required" in str(exc.value)
    assert fake_provider.calls == []


def test_key_is_sanitised_before_sending(fake_registry, fake_provider):
    LLMGateway(fake_registry).send("p", ProviderConfig(provider="openai", api_key="  sk-\u200babc  "))
    assert fake_provider.calls[0]["api_key"] == "sk-abc"


def test_provider_errors_propagate_unchanged(fake_registry, fake_provider):
    fake_provider.error = ProviderError("OpenAI API Error: Incorrect API key provided")
    with pytest.raises(ProviderError, match="Incorrect API key provided"):
        LLMGateway(fake_registry).send("p", ProviderConfig(provider="openai", api_key="sk-x"))


def test_unregistered_provider_raises(fake_registry):
    with pytest.raises(ValueError, match="Unsupported provider"):
        LLMGateway(fake_registry).send("p", ProviderConfig(provider="google", api_key="k"))


def test_api_key_not_in_repr():
    assert "sk-secret" not in repr(ProviderConfig(api_key="sk-secret"))


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, ""),
        ("", ""),
        ("  sk-abc  ", "sk-abc"),
        ("sk-\u201cabc\u201d", "sk-abc"),
        ("\u200bsk-abc", "sk-abc"),
    ],
)
def test_sanitize_api_key(raw, expected):
    assert sanitize_api_key(raw) == expected
