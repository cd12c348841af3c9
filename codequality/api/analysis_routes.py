from __future__ import annotations

from typing import Any

from fastapi import APIRouter, File, HTTPException, UploadFile
from pydantic import BaseModel, Field

from codequality.core.containers import build_analysis_service
from codequality.core.errors import AnalysisError
from codequality.detection.detector import detect_language
from codequality.domain.models import FEATURES, LANGUAGE_LABELS, FeatureType, LanguageTag
from codequality.domain.schemas import ProviderConfig
from codequality.services.upload_service import UploadService

router = APIRouter(prefix="/api", tags=["analysis"])

# Build once at module level
_analysis_service = build_analysis_service()


# ── Request / Response schemas ────────────────────────────────────
class AnalyseRequest(BaseModel):
    """Request body for running one analysis."""

    feature: FeatureType = Field(..., description="Analysis mode.")
    code: str = Field(..., description="Source code to analyse, verbatim.")
    language: LanguageTag | None = Field(
        None,
        description="Language of the code. If omitted, it is detected from the content.",
    )
    provider: ProviderConfig = Field(
        ...,
        description="LLM provider, model and API key for this call. The key is not stored.",
        json_schema_extra={"examples": [{"provider": "openai", "model": "gpt-4o-mini", "api_key": "sk-..."}]},
    )


class AnalyseResponse(BaseModel):
    """Normalized result of one analysis."""

    feature: str
    language: str
    result: dict[str, Any] = Field(..., description="Feature-specific result with camelCase keys.")


class DetectRequest(BaseModel):
    code: str


class DetectResponse(BaseModel):
    language: str


class SourceFileResponse(BaseModel):
    """An uploaded file read back as text."""

    filename: str
    language: str
    code: str


def _raise_http(err: AnalysisError) -> None:
    raise HTTPException(status_code=err.status_code, detail=str(err)) from err


# ── Endpoints ─────────────────────────────────────────────────────
@router.get("/features", summary="List analysis modes")
def list_features() -> list[dict[str, str]]:
    """The six analysis modes with their UI label and description."""
    return [{"value": f.value, "label": f.label, "description": f.description} for f in FEATURES]


@router.get("/languages", summary="List supported languages")
def list_languages() -> list[dict[str, str]]:
    return [{"value": value, "label": label} for value, label in LANGUAGE_LABELS.items()]


@router.post("/detect", response_model=DetectResponse, summary="Detect language from content")
def detect(req: DetectRequest) -> dict[str, str]:
    """Best-effort guess of the language of pasted code. Never fails."""
    return {"language": detect_language(req.code)}


@router.post(
    "/upload",
    response_model=SourceFileResponse,
    summary="Read an uploaded source file",
    response_description="File content and its language",
)
async def upload(file: UploadFile = File(...)) -> dict[str, Any]:
    """Read a source file (max 1MB, UTF-8).

    The language comes from the file extension, or from the content when the
    extension is unknown.
    """
    data = await file.read()
    try:
        source = UploadService.read_source(file.filename, data)
    except AnalysisError as e:
        _raise_http(e)
    return source.to_dict()


@router.post(
    "/analyse",
    response_model=AnalyseResponse,
    summary="Run one analysis",
    response_description="Normalized analysis result",
)
def analyse(req: AnalyseRequest) -> dict[str, Any]:
    """Send the code to the chosen LLM with the feature's instructions and
    return the normalized JSON result.

    **Errors** (single `detail` message):
    - 400: missing API key
    - 502: provider error, or a reply that is not JSON
    - 503: provider unreachable
    """
    try:
        report = _analysis_service.run(
            req.feature,
            req.code,
            req.provider,
            language=req.language,
        )
    except AnalysisError as e:
        _raise_http(e)
    return report.to_dict()
