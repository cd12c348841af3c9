import json

import pytest
from fastapi.testclient import TestClient

from codequality.core.containers import build_analysis_service
from codequality.llm.base import LLMProvider, LLMResponse, ModelInfo
from codequality.llm.registry import LLMProviderRegistry
from codequality.main import app


class FakeProvider(LLMProvider):
    """Returns a canned reply and records every call it receives."""

    def __init__(self, name: str = "openai", reply: str = "{}", error: Exception | None = None):
        self._name = name
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    def name(self) -> str:
        return self._name

    def label(self) -> str:
        return self._name.title()

    def default_model(self) -> str:
        return f"{self._name}-default"

    def models(self) -> list[ModelInfo]:
        return [ModelInfo(self.default_model(), "Default")]

    def chat(self, prompt, model, api_key):
        self.calls.append({"prompt": prompt, "model": model, "api_key": api_key})
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, input_tokens=10, output_tokens=5, model=model, provider=self._name)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_provider():
    return FakeProvider


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider("openai")


@pytest.fixture
def fake_registry(fake_provider) -> LLMProviderRegistry:
    reg = LLMProviderRegistry()
    reg.register(fake_provider)
    return reg


@pytest.fixture
def fake_service(fake_registry):
    return build_analysis_service(fake_registry)


@pytest.fixture
def bug_reply() -> str:
    return json.dumps(
        {
            "bugs": [
                {
                    "id": "bug-1",
                    "severity": "high",
                    "lineNumber": 3,
                    "description": "Possible null dereference",
                    "explanation": "user may be undefined",
                    "suggestedFix": "if (user) { ... }",
                    "category": "Null Safety",
                }
            ],
            "totalCount": 1,
            "severitySummary": {"critical": 0, "high": 1, "medium": 0, "low": 0},
        }
    )
