from __future__ import annotations

from codequality.domain.models import ComplexityResult, OverallMetrics

from .base import Aggregate, Count, Items, ResultNormalizer, Score, Section

# Cyclomatic complexity above which a function counts as "complex".
COMPLEX_THRESHOLD = 10


def _mean(values: list[float]) -> float:
    return round(sum(values) / len(values), 2)


def _count_complex(values: list[float]) -> int:
    return sum(1 for v in values if v > COMPLEX_THRESHOLD)


class ComplexityNormalizer(ResultNormalizer):
    result_type = ComplexityResult
    rules = {
        "functions": Items(),
        "overall_metrics": Section(
            OverallMetrics,
            {
                "average_cyclomatic_complexity": Aggregate("functions", "cyclomaticComplexity", _mean),
                "average_cognitive_complexity": Aggregate("functions", "cognitiveComplexity", _mean),
                "max_nesting_depth": Aggregate("functions", "nestingDepth", max),
                "total_functions": Count("functions"),
                "complex_functions": Aggregate("functions", "cyclomaticComplexity", _count_complex),
            },
        ),
        "maintainability_index": Score(),
        "recommendations": Items(),
    }

    def feature_name(self) -> str:
        return "complexity"
