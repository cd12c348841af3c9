from __future__ import annotations

import logging
import uuid

from codequality.core.errors import AnalysisError
from codequality.detection.detector import detect_language
from codequality.domain.models import AnalysisReport
from codequality.domain.schemas import ProviderConfig
from codequality.llm.gateway import LLMGateway
from codequality.normalizers.registry import NormalizerRegistry
from codequality.prompts.prompt_builder import build_prompt

logger = logging.getLogger(__name__)


class AnalysisService:
    """
    Orchestrates one analysis: detect language → build prompt → LLM → normalize.

    The same routine serves all six features; the feature tag selects the
    prompt builder and the normalizer.  Each call owns its whole request /
    response lifecycle, so concurrent calls share no mutable state.
    """

    def __init__(self, gateway: LLMGateway, normalizer_registry: NormalizerRegistry):
        self.gateway = gateway
        self.normalizers = normalizer_registry

    def features(self) -> list[str]:
        return self.normalizers.list()

    def run(
        self,
        feature: str,
        code: str,
        config: ProviderConfig,
        language: str | None = None,
    ) -> AnalysisReport:
        normalizer = self.normalizers.pick(feature)
        language = language or detect_language(code)
        log_extra = {"analysis_id": uuid.uuid4().hex[:12], "feature": feature}

        logger.info(
            "Running %s analysis language=%s provider=%s",
            feature,
            language,
            config.provider,
            extra=log_extra,
        )

        try:
            prompt = build_prompt(feature, code, language)
            raw = self.gateway.send(prompt, config)
            result = normalizer.normalize(raw)
        except AnalysisError as e:
            logger.warning("%s analysis failed: %s", feature, e, extra=log_extra)
            raise

        logger.info(
            "Analysis complete: %d findings",
            len(result.findings),
            extra=log_extra,
        )
        return AnalysisReport(feature=feature, language=language, result=result)
