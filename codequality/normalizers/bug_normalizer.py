from __future__ import annotations

from codequality.domain.models import BUG_SEVERITIES, BugFinderResult

from .base import Count, Histogram, Items, ResultNormalizer


class BugFinderNormalizer(ResultNormalizer):
    result_type = BugFinderResult
    rules = {
        "bugs": Items(),
        "total_count": Count("bugs"),
        "severity_summary": Histogram(BUG_SEVERITIES, source="bugs", by="severity"),
    }

    def feature_name(self) -> str:
        return "bugs"
