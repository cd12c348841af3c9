from __future__ import annotations

from codequality.domain.models import ExplainerResult

from .base import Items, ResultNormalizer, Text


class ExplainerNormalizer(ResultNormalizer):
    result_type = ExplainerResult
    rules = {
        "summary": Text("Analysis completed."),
        "explanations": Items(),
    }

    def feature_name(self) -> str:
        return "explainer"
