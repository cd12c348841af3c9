from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Literal, TypedDict, Union

LanguageTag = Literal[
    "javascript", "typescript", "python", "java", "csharp", "cpp", "go", "rust", "ruby", "php"
]
FeatureType = Literal["explainer", "bugs", "refactor", "smells", "complexity", "security"]

LANGUAGES: tuple[str, ...] = (
    "javascript",
    "typescript",
    "python",
    "java",
    "csharp",
    "cpp",
    "go",
    "rust",
    "ruby",
    "php",
)
DEFAULT_LANGUAGE = "javascript"

LANGUAGE_LABELS: dict[str, str] = {
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "python": "Python",
    "java": "Java",
    "csharp": "C#",
    "cpp": "C++",
    "go": "Go",
    "rust": "Rust",
    "ruby": "Ruby",
    "php": "PHP",
}

BUG_SEVERITIES: tuple[str, ...] = ("critical", "high", "medium", "low")
REFACTOR_PRIORITIES: tuple[str, ...] = ("high", "medium", "low")
SMELL_CATEGORIES: tuple[str, ...] = (
    "bloaters",
    "oo-abusers",
    "change-preventers",
    "dispensables",
    "couplers",
)
VULNERABILITY_SEVERITIES: tuple[str, ...] = ("critical", "high", "medium", "low", "info")
OWASP_CATEGORIES: tuple[str, ...] = (
    "injection",
    "broken-auth",
    "sensitive-data",
    "xxe",
    "broken-access",
    "security-misconfig",
    "xss",
    "insecure-deserialization",
    "vulnerable-components",
    "logging-monitoring",
)

# Score reported when the model omits one; a product choice, not a statistic.
NEUTRAL_SCORE = 70


@dataclass(frozen=True)
class Feature:
    value: str
    label: str
    description: str


FEATURES: tuple[Feature, ...] = (
    Feature("explainer", "Code Explainer", "Get line-by-line explanation of your code"),
    Feature("bugs", "Bug Finder", "Find potential bugs and get fixes"),
    Feature("refactor", "Code Refactoring", "Get suggestions to improve code quality"),
    Feature("smells", "Code Smell Detector", "Identify design issues and anti-patterns"),
    Feature("complexity", "Complexity Analyzer", "Measure code complexity and maintainability"),
    Feature("security", "Security Scanner", "Detect security vulnerabilities and OWASP risks"),
)


def camel_case(name: str) -> str:
    """``total_count`` -> ``totalCount``: attribute name to wire key."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


# ── Finding items ────────────────────────────────────────────────
# Items are forwarded exactly as the model returned them; these shapes
# describe what the prompts ask for, not what is guaranteed.


class LineExplanation(TypedDict, total=False):
    lineNumber: int
    code: str
    explanation: str
    why: str
    issues: list[str]


class Bug(TypedDict, total=False):
    id: str
    severity: str
    lineNumber: int
    description: str
    explanation: str
    suggestedFix: str
    category: str


class RefactorSuggestion(TypedDict, total=False):
    id: str
    title: str
    priority: str
    impact: str
    lineNumbers: list[int]
    description: str
    before: str
    after: str
    benefits: list[str]


class CodeSmell(TypedDict, total=False):
    id: str
    title: str
    category: str
    severity: int
    lineNumbers: list[int]
    description: str
    explanation: str
    remediation: str
    example: str


class FunctionComplexity(TypedDict, total=False):
    name: str
    line: int
    cyclomaticComplexity: int
    cognitiveComplexity: int
    nestingDepth: int
    parameterCount: int
    linesOfCode: int
    issues: list[str]


class Vulnerability(TypedDict, total=False):
    id: str
    title: str
    severity: str
    category: str
    description: str
    lineNumber: int
    codeSnippet: str
    impact: str
    remediation: str
    references: list[str]
    cwe: str


# ── Results ──────────────────────────────────────────────────────


class _WireRecord:
    """Serialises a dataclass with camelCase keys, recursing into nested records."""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if isinstance(value, _WireRecord):
                value = value.to_dict()
            out[camel_case(f.name)] = value
        return out


class _Result(_WireRecord):
    findings_field: ClassVar[str]

    @property
    def findings(self) -> list[Any]:
        return getattr(self, self.findings_field)


@dataclass(frozen=True)
class ExplainerResult(_Result):
    findings_field: ClassVar[str] = "explanations"

    summary: str
    explanations: list[LineExplanation]


@dataclass(frozen=True)
class BugFinderResult(_Result):
    findings_field: ClassVar[str] = "bugs"

    bugs: list[Bug]
    total_count: int
    severity_summary: dict[str, int]


@dataclass(frozen=True)
class RefactorResult(_Result):
    findings_field: ClassVar[str] = "suggestions"

    suggestions: list[RefactorSuggestion]
    overall_score: float


@dataclass(frozen=True)
class CodeSmellResult(_Result):
    findings_field: ClassVar[str] = "smells"

    smells: list[CodeSmell]
    total_count: int
    category_summary: dict[str, int]
    overall_health_score: float


@dataclass(frozen=True)
class OverallMetrics(_WireRecord):
    average_cyclomatic_complexity: float = 0
    average_cognitive_complexity: float = 0
    max_nesting_depth: float = 0
    total_functions: int = 0
    complex_functions: int = 0


@dataclass(frozen=True)
class ComplexityResult(_Result):
    findings_field: ClassVar[str] = "functions"

    functions: list[FunctionComplexity]
    overall_metrics: OverallMetrics
    maintainability_index: float
    recommendations: list[str]


@dataclass(frozen=True)
class SecurityResult(_Result):
    findings_field: ClassVar[str] = "vulnerabilities"

    vulnerabilities: list[Vulnerability]
    total_count: int
    severity_summary: dict[str, int]
    category_summary: dict[str, int]
    security_score: float
    recommendations: list[str]


AnalysisResult = Union[
    ExplainerResult,
    BugFinderResult,
    RefactorResult,
    CodeSmellResult,
    ComplexityResult,
    SecurityResult,
]


@dataclass(frozen=True)
class AnalysisReport:
    feature: str
    language: str
    result: AnalysisResult

    def to_dict(self) -> dict[str, Any]:
        return {
            "feature": self.feature,
            "language": self.language,
            "result": self.result.to_dict(),
        }
