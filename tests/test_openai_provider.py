"""Tests for the OpenAI provider."""

from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from codequality.core.errors import ProviderError, TransportError
from codequality.llm.base import SYSTEM_PROMPT
from codequality.llm.openai_provider import OpenAIProvider

_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _mock_openai(content: str | None = '{"bugs": []}'):
    mock_choice = MagicMock()
    mock_choice.message.content = content

    mock_response = MagicMock()
    mock_response.choices = [mock_choice]
    mock_response.usage.prompt_tokens = 50
    mock_response.usage.completion_tokens = 30
    mock_response.model = "gpt-4o-mini"

    mock_mod = MagicMock()
    mock_mod.OpenAI.return_value.chat.completions.create.return_value = mock_response
    return mock_mod


def test_metadata():
    p = OpenAIProvider()
    assert p.name() == "openai"
    assert p.label() == "OpenAI"
    assert p.default_model() == "gpt-4o-mini"
    assert [m.id for m in p.models()] == ["gpt-4-turbo", "gpt-4", "gpt-4o", "gpt-4o-mini"]


def test_chat_calls_openai_api():
    mock_mod = _mock_openai()
    with patch.dict("sys.modules", {"openai": mock_mod}):
        resp = OpenAIProvider().chat("find bugs", model="gpt-4o", api_key="sk-test")

    assert resp.content == '{"bugs": []}'
    assert resp.provider == "openai"
    assert resp.input_tokens == 50
    assert resp.output_tokens == 30

    mock_mod.OpenAI.assert_called_once_with(api_key="sk-test")
    kwargs = mock_mod.OpenAI.return_value.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o"
    assert kwargs["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "find bugs"},
    ]
    assert kwargs["temperature"] == 0.7
    assert kwargs["response_format"] == {"type": "json_object"}


def test_empty_content_becomes_empty_string():
    with patch.dict("sys.modules", {"openai": _mock_openai(content=None)}):
        resp = OpenAIProvider().chat("p", model="gpt-4o", api_key="sk-test")
    assert resp.content == ""


def test_status_error_becomes_provider_error():
    response = httpx.Response(401, request=_REQUEST)
    err = openai.AuthenticationError(
        "Error code: 401",
        response=response,
        body={"message": "Incorrect API key provided", "type": "invalid_request_error"},
    )
    with patch("openai.OpenAI") as mock_cls:
        mock_cls.return_value.chat.completions.create.side_effect = err
        with pytest.raises(ProviderError) as exc:
            OpenAIProvider().chat("p", model="gpt-4o", api_key="sk-bad")

    assert str(exc.value) == "OpenAI API Error: Incorrect API key provided"
    assert exc.value.status_code == 502


def test_connection_error_becomes_transport_error():
    with patch("openai.OpenAI") as mock_cls:
        mock_cls.return_value.chat.completions.create.side_effect = openai.APIConnectionError(request=_REQUEST)
        with pytest.raises(TransportError) as exc:
            OpenAIProvider().chat("p", model="gpt-4o", api_key="sk-test")

    assert exc.value.status_code == 503
