from __future__ import annotations

from codequality.domain.models import SMELL_CATEGORIES, CodeSmellResult

from .base import Count, Histogram, Items, ResultNormalizer, Score


class CodeSmellNormalizer(ResultNormalizer):
    result_type = CodeSmellResult
    rules = {
        "smells": Items(),
        "total_count": Count("smells"),
        "category_summary": Histogram(SMELL_CATEGORIES, source="smells", by="category"),
        "overall_health_score": Score(),
    }

    def feature_name(self) -> str:
        return "smells"
