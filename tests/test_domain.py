"""Tests for domain constants, wire serialisation and the error taxonomy."""

import pytest

from codequality.core.errors import (
    AnalysisError,
    MissingCredentialError,
    ParseFailure,
    ProviderError,
    TransportError,
    UploadError,
)
from codequality.domain.models import (
    FEATURES,
    LANGUAGE_LABELS,
    LANGUAGES,
    OWASP_CATEGORIES,
    AnalysisReport,
    RefactorResult,
    camel_case,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("summary", "summary"),
        ("total_count", "totalCount"),
        ("average_cyclomatic_complexity", "averageCyclomaticComplexity"),
    ],
)
def test_camel_case(name, expected):
    assert camel_case(name) == expected


def test_every_language_has_a_label():
    assert set(LANGUAGE_LABELS) == set(LANGUAGES)
    assert len(LANGUAGES) == 10


def test_six_features_in_ui_order():
    assert [f.value for f in FEATURES] == ["explainer", "bugs", "refactor", "smells", "complexity", "security"]


def test_owasp_has_ten_categories():
    assert len(OWASP_CATEGORIES) == 10


def test_report_to_dict():
    report = AnalysisReport("refactor", "go", RefactorResult(suggestions=[], overall_score=88))
    assert report.to_dict() == {
        "feature": "refactor",
        "language": "go",
        "result": {"suggestions": [], "overallScore": 88},
    }


@pytest.mark.parametrize(
    "error, status",
    [
        (MissingCredentialError(), 400),
        (ProviderError("OpenAI API Error: boom"), 502),
        (TransportError(), 503),
        (ParseFailure(), 502),
        (UploadError(), 400),
        (UploadError("too big", status_code=413), 413),
    ],
)
def test_error_status_codes(error, status):
    assert isinstance(error, AnalysisError)
    assert error.status_code == status


def test_error_default_message():
    assert str(ParseFailure()) == "Failed to parse AI response. Please try again."
    assert str(ProviderError("Google AI Error: quota")) == "Google AI Error: quota"
