from __future__ import annotations

from codequality.domain.models import RefactorResult

from .base import Items, ResultNormalizer, Score


class RefactorNormalizer(ResultNormalizer):
    result_type = RefactorResult
    rules = {
        "suggestions": Items(),
        "overall_score": Score(),
    }

    def feature_name(self) -> str:
        return "refactor"
