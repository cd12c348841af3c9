"""Tests for fence stripping and JSON payload extraction."""

import pytest

from codequality.core.errors import ParseFailure
from codequality.normalizers.util import parse_payload, strip_fences


def test_strip_fences_removes_json_fence():
    assert strip_fences('```json\n{"a": 1}\n```') == '{"a": 1}'


def test_strip_fences_removes_bare_fence():
    assert strip_fences('```\n{"a": 1}\n```') == '{"a": 1}'


def test_strip_fences_leaves_plain_text_untouched():
    assert strip_fences('  {"a": 1}  ') == '{"a": 1}'


def test_strip_fences_handles_none():
    assert strip_fences(None) == ""


def test_parse_bare_json():
    assert parse_payload('{"summary": "ok"}', "explainer") == {"summary": "ok"}


def test_parse_fenced_json():
    raw = '```json\n{"overallScore": 42, "suggestions": []}\n```'
    assert parse_payload(raw, "refactor") == {"overallScore": 42, "suggestions": []}


def test_parse_json_wrapped_in_prose():
    raw = 'Here is the analysis:\n{"bugs": [], "totalCount": 0}\nHope this helps!'
    assert parse_payload(raw, "bugs") == {"bugs": [], "totalCount": 0}


def test_non_object_json_becomes_empty_dict():
    assert parse_payload("[1, 2, 3]", "bugs") == {}
    assert parse_payload('"just a string"', "bugs") == {}


@pytest.mark.parametrize("raw", ["not json at all", "", "{broken", "{ not: valid }"])
def test_unparseable_reply_raises(raw):
    with pytest.raises(ParseFailure) as exc:
        parse_payload(raw, "bugs")
    assert str(exc.value) == "Failed to parse AI response. Please try again."
    assert exc.value.status_code == 502


@pytest.mark.parametrize("raw", ["[" * 100000, '{"a": ' * 100000, 'Here: {"a": ' + "[" * 100000 + "}"])
def test_deeply_nested_reply_raises_parse_failure(raw):
    with pytest.raises(ParseFailure):
        parse_payload(raw, "bugs")
