from __future__ import annotations

from codequality.domain.models import OWASP_CATEGORIES, VULNERABILITY_SEVERITIES, SecurityResult

from .base import Count, Histogram, Items, ResultNormalizer, Score


class SecurityNormalizer(ResultNormalizer):
    """OWASP-oriented scan result.

    Both summaries are rebuilt over their full key sets (five severities, ten
    OWASP categories) because the UI renders one tile per key.
    """

    result_type = SecurityResult
    rules = {
        "vulnerabilities": Items(),
        "total_count": Count("vulnerabilities"),
        "severity_summary": Histogram(VULNERABILITY_SEVERITIES, source="vulnerabilities", by="severity"),
        "category_summary": Histogram(OWASP_CATEGORIES, source="vulnerabilities", by="category"),
        "security_score": Score(),
        "recommendations": Items(),
    }

    def feature_name(self) -> str:
        return "security"
