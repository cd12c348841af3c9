"""Error taxonomy for an analysis call.

Every error carries a single human-readable message (``str(err)``) and the
HTTP status the API layer answers with.  Nothing in the core retries or
recovers: an error either reaches the caller unchanged or the analysis
produces a fully-defaulted result.
"""

from __future__ import annotations


class AnalysisError(RuntimeError):
    """Base class for every caller-visible analysis failure."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred during analysis."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class MissingCredentialError(AnalysisError):
    """No usable API key; raised before any network I/O."""

    status_code = 400
    default_message = "API key is required. Please enter your API key in the AI Configuration section."


class ProviderError(AnalysisError):
    """The vendor answered with a non-success response."""

    status_code = 502
    default_message = "The AI provider returned an error."


class TransportError(AnalysisError):
    """The request never reached the vendor or the reply never came back."""

    status_code = 503
    default_message = "Could not reach the AI provider. Please check your connection and try again."


class ParseFailure(AnalysisError):
    """The vendor reply could not be read as JSON after fence stripping."""

    status_code = 502
    default_message = "Failed to parse AI response. Please try again."


class UploadError(AnalysisError):
    """An uploaded file could not be turned into source text."""

    status_code = 400
    default_message = "Error reading file. Please try again."

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
