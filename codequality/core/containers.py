from __future__ import annotations

from codequality.llm.anthropic_provider import AnthropicProvider
from codequality.llm.gateway import LLMGateway
from codequality.llm.google_provider import GoogleProvider
from codequality.llm.openai_provider import OpenAIProvider
from codequality.llm.registry import LLMProviderRegistry
from codequality.normalizers.bug_normalizer import BugFinderNormalizer
from codequality.normalizers.complexity_normalizer import ComplexityNormalizer
from codequality.normalizers.explainer_normalizer import ExplainerNormalizer
from codequality.normalizers.refactor_normalizer import RefactorNormalizer
from codequality.normalizers.registry import NormalizerRegistry
from codequality.normalizers.security_normalizer import SecurityNormalizer
from codequality.normalizers.smell_normalizer import CodeSmellNormalizer
from codequality.services.analysis_service import AnalysisService


def build_normalizer_registry() -> NormalizerRegistry:
    return NormalizerRegistry(
        [
            ExplainerNormalizer(),
            BugFinderNormalizer(),
            RefactorNormalizer(),
            CodeSmellNormalizer(),
            ComplexityNormalizer(),
            SecurityNormalizer(),
        ]
    )


def build_llm_registry() -> LLMProviderRegistry:
    """Register all available LLM providers.

    Each entry is one selectable provider in the UI; its models populate the
    model dropdown.

    To add a new provider:
    1. Implement ``LLMProvider`` in ``codequality/llm/``
    2. ``registry.register(MyProvider())`` here
    3. Add its name to ``ProviderName`` in ``codequality/domain/schemas.py``
    """
    registry = LLMProviderRegistry()
    registry.register(OpenAIProvider())
    registry.register(AnthropicProvider())
    registry.register(GoogleProvider())
    return registry


def build_analysis_service(llm_registry: LLMProviderRegistry | None = None) -> AnalysisService:
    return AnalysisService(
        LLMGateway(llm_registry or build_llm_registry()),
        build_normalizer_registry(),
    )
