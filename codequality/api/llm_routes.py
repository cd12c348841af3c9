from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from codequality.core.containers import build_llm_registry

router = APIRouter(prefix="/api/llm", tags=["llm"])

_registry = build_llm_registry()


# ── Response schemas ──────────────────────────────────────────────
class ModelEntry(BaseModel):
    id: str
    name: str


class ProviderEntry(BaseModel):
    value: str
    label: str
    default_model: str
    models: list[ModelEntry]


class ProvidersResponse(BaseModel):
    """Selectable providers and their model catalogs."""

    available: list[str] = Field(..., description="Provider names accepted in `provider.provider`.")
    default: str | None
    providers: list[ProviderEntry]


# ── Endpoints ─────────────────────────────────────────────────────
@router.get(
    "/providers",
    response_model=ProvidersResponse,
    summary="List LLM providers",
    response_description="Providers, their models and the default provider",
)
def list_providers() -> dict[str, Any]:
    """Every provider needs an API key, supplied per request. Keys are never
    stored server-side.
    """
    default = _registry.get_default()
    providers = []
    for name in _registry.list():
        p = _registry.pick(name)
        providers.append(
            {
                "value": p.name(),
                "label": p.label(),
                "default_model": p.default_model(),
                "models": [{"id": m.id, "name": m.name} for m in p.models()],
            }
        )
    return {
        "available": _registry.list(),
        "default": default.name() if default else None,
        "providers": providers,
    }
