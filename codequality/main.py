from fastapi import FastAPI

from codequality.api.analysis_routes import router as analysis_router
from codequality.api.llm_routes import router as llm_router
from codequality.core.config import APP_VERSION
from codequality.core.logging import setup_logging

setup_logging()

app = FastAPI(
    title="CodeQuality: AI-Powered Code Analysis",
    version=APP_VERSION,
    description=(
        "Send source code to an LLM provider of your choice for explanation, bug finding, "
        "refactoring suggestions, code-smell detection, complexity scoring or security scanning, "
        "and get back a normalized JSON result."
    ),
    openapi_tags=[
        {
            "name": "analysis",
            "description": "Run one of the six analyses on a piece of code, detect its language, or read an uploaded file.",
        },
        {
            "name": "llm",
            "description": "LLM providers and models that can be chosen per request. Keys are supplied by the caller.",
        },
        {"name": "meta", "description": "Service health."},
    ],
)

app.include_router(analysis_router)
app.include_router(llm_router)


@app.get("/health", tags=["meta"])
def health() -> dict:
    return {"status": "healthy", "version": APP_VERSION}
