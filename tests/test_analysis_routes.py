"""Tests for the /api analysis endpoints."""

import pytest

from codequality.core.errors import ProviderError


@pytest.fixture
def routed(monkeypatch, fake_service, fake_provider):
    """Route /api/analyse through the fake provider."""
    monkeypatch.setattr("codequality.api.analysis_routes._analysis_service", fake_service)
    return fake_provider


def _body(**overrides):
    body = {
        "feature": "bugs",
        "code": "function f(user) {\n  return user.name;\n}",
        "provider": {"provider": "openai", "model": "gpt-4o", "api_key": "sk-test"},
    }
    body.update(overrides)
    return body


def test_list_features(client):
    r = client.get("/api/features")
    assert r.status_code == 200
    data = r.json()
    assert [f["value"] for f in data] == ["explainer", "bugs", "refactor", "smells", "complexity", "security"]
    assert data[0]["label"] == "Code Explainer"


def test_list_languages(client):
    data = client.get("/api/languages").json()
    assert len(data) == 10
    assert {"value": "csharp", "label": "C#"} in data


def test_detect(client):
    r = client.post("/api/detect", json={"code": "fn main() {\n  println!(\"hi\");\n}"})
    assert r.status_code == 200
    assert r.json() == {"language": "rust"}


def test_detect_empty_code(client):
    assert client.post("/api/detect", json={"code": ""}).json() == {"language": "javascript"}


def test_upload(client):
    r = client.post("/api/upload", files={"file": ("Main.java", b"public class Main {}\n", "text/plain")})
    assert r.status_code == 200
    assert r.json() == {"filename": "Main.java", "language": "java", "code": "public class Main {}\n"}


def test_upload_undecodable_bytes_are_replaced(client):
    r = client.post("/api/upload", files={"file": ("x.bin", b"\xff\xfe\x00", "application/octet-stream")})
    assert r.status_code == 200
    assert r.json()["code"] == "\ufffd\ufffd\x00"


def test_upload_too_large(client, monkeypatch):
    monkeypatch.setattr("codequality.services.upload_service.settings.MAX_UPLOAD_BYTES", 8)
    r = client.post("/api/upload", files={"file": ("a.js", b"x" * 9, "text/plain")})
    assert r.status_code == 413


def test_analyse(client, routed, bug_reply):
    routed.reply = bug_reply
    r = client.post("/api/analyse", json=_body(language="javascript"))
    assert r.status_code == 200
    data = r.json()
    assert data["feature"] == "bugs"
    assert data["language"] == "javascript"
    assert data["result"]["totalCount"] == 1
    assert data["result"]["severitySummary"] == {"critical": 0, "high": 1, "medium": 0, "low": 0}
    assert data["result"]["bugs"][0]["suggestedFix"] == "if (user) { ... }"


def test_analyse_detects_language(client, routed):
    r = client.post("/api/analyse", json=_body(feature="explainer", code="package main\n\nfunc main() {}"))
    assert r.status_code == 200
    assert r.json()["language"] == "go"
    assert r.json()["result"]["summary"] == "Analysis completed."


def test_analyse_missing_key(client, routed):
    body = _body()
    body["provider"]["api_key"] = "  "
    r = client.post("/api/analyse", json=body)
    assert r.status_code == 400
    assert "API key is required" in r.json()["detail"]
    assert routed.calls == []


def test_analyse_parse_failure(client, routed):
    routed.reply = "Sorry, I cannot help with that."
    r = client.post("/api/analyse", json=_body())
    assert r.status_code == 502
    assert r.json()["detail"] == "Failed to parse AI response. Please try again."


def test_analyse_provider_error(client, routed):
    routed.error = ProviderError("OpenAI API Error: Rate limit reached")
    r = client.post("/api/analyse", json=_body())
    assert r.status_code == 502
    assert r.json()["detail"] == "OpenAI API Error: Rate limit reached"


@pytest.mark.parametrize(
    "override",
    [
        {"feature": "poetry"},
        {"language": "cobol"},
        {"provider": {"provider": "mistral", "api_key": "k"}},
    ],
)
def test_analyse_rejects_unknown_values(client, routed, override):
    r = client.post("/api/analyse", json=_body(**override))
    assert r.status_code == 422
    assert routed.calls == []
