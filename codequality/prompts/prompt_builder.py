"""Build the instruction sent to the LLM for each analysis feature.

Every prompt has the same skeleton:
  - the task, naming the language
  - the code, verbatim, in a fenced block tagged with the language
  - the exact JSON shape of the reply, as literal example JSON
  - the enumerations the reply must draw from

The example JSON doubles as the contract the normalizers read, so its key
names must stay in step with ``codequality.normalizers``.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from codequality.domain.models import (
    BUG_SEVERITIES,
    OWASP_CATEGORIES,
    REFACTOR_PRIORITIES,
    SMELL_CATEGORIES,
    VULNERABILITY_SEVERITIES,
)

SMELL_CATEGORY_HINTS = {
    "bloaters": "Large classes, long methods, long parameter lists, primitive obsession",
    "oo-abusers": "Switch statements, refused bequest, alternative classes with different interfaces",
    "change-preventers": "Divergent change, shotgun surgery, parallel inheritance hierarchies",
    "dispensables": "Dead code, speculative generality, duplicate code, lazy class",
    "couplers": "Feature envy, inappropriate intimacy, message chains, middle man",
}

OWASP_CATEGORY_HINTS = {
    "injection": "SQL, NoSQL, OS command injection, LDAP injection",
    "broken-auth": "Authentication and session management flaws",
    "sensitive-data": "Unencrypted sensitive data, weak crypto",
    "xxe": "XML External Entity attacks",
    "broken-access": "Improper access controls, IDOR",
    "security-misconfig": "Default configs, verbose errors, open cloud storage",
    "xss": "Cross-site scripting vulnerabilities",
    "insecure-deserialization": "Unsafe deserialization leading to RCE",
    "vulnerable-components": "Using components with known vulnerabilities",
    "logging-monitoring": "Insufficient logging, monitoring, or incident response",
}


def _code_block(code: str, language: str) -> str:
    return f"Code:\n```{language}\n{code}\n```"


def _reply_format(example: dict[str, Any]) -> str:
    return "Provide the response in the following JSON format:\n" + json.dumps(example, indent=2)


def _one_of(values: tuple[str, ...]) -> str:
    return "|".join(values)


def _hints(hints: dict[str, str]) -> str:
    return "\n".join(f"- {key}: {text}" for key, text in hints.items())


def build_explainer_prompt(code: str, language: str) -> str:
    example = {
        "summary": "A brief 2-3 sentence summary of what this code does",
        "explanations": [
            {
                "lineNumber": 1,
                "code": "actual code line",
                "explanation": "What this line does in simple terms",
                "why": "Why this line is needed",
                "issues": ["optional issue 1", "optional issue 2"],
            }
        ],
    }
    parts = [
        f"You are a code analysis expert. Analyze this {language} code and provide a line-by-line explanation.\n",
        _code_block(code, language),
        "",
        _reply_format(example),
        "",
        "Focus on clarity and educational value. Include the issues array only if there are potential problems.",
    ]
    return "\n".join(parts)


def build_bug_finder_prompt(code: str, language: str) -> str:
    example = {
        "bugs": [
            {
                "id": "bug-1",
                "severity": _one_of(BUG_SEVERITIES),
                "lineNumber": 5,
                "description": "Brief description of the bug",
                "explanation": "Detailed explanation of why this is a problem",
                "suggestedFix": "Code example of how to fix it",
                "category": "Category like 'Null Safety', 'Array Safety', etc.",
            }
        ],
        "totalCount": 3,
        "severitySummary": {"critical": 1, "high": 1, "medium": 1, "low": 0},
    }
    parts = [
        f"You are a bug detection expert. Analyze this {language} code for potential bugs and issues.\n",
        _code_block(code, language),
        "",
        _reply_format(example),
        "",
        "Look for: null pointer issues, array bounds, resource leaks, type mismatches, "
        "infinite loops, security issues.",
    ]
    return "\n".join(parts)


def build_refactor_prompt(code: str, language: str) -> str:
    example = {
        "overallScore": 75,
        "suggestions": [
            {
                "id": "refactor-1",
                "title": "Brief title of suggestion",
                "priority": _one_of(REFACTOR_PRIORITIES),
                "impact": "Description of the impact",
                "lineNumbers": [5, 6, 7],
                "description": "Detailed description",
                "before": "code before refactoring",
                "after": "code after refactoring",
                "benefits": ["benefit 1", "benefit 2", "benefit 3"],
            }
        ],
    }
    parts = [
        f"You are a code analysis expert. Analyze this {language} code and suggest refactoring improvements.\n",
        _code_block(code, language),
        "",
        _reply_format(example),
        "",
        "Consider: DRY principle, naming, complexity, modern features, code organization. Score from 0-100.",
    ]
    return "\n".join(parts)


def build_code_smell_prompt(code: str, language: str) -> str:
    example = {
        "smells": [
            {
                "id": "smell-1",
                "title": "Descriptive title of the smell",
                "category": _one_of(SMELL_CATEGORIES),
                "severity": 7,
                "lineNumbers": [5, 6, 7],
                "description": "Brief description of the issue",
                "explanation": "Detailed explanation of why this is problematic",
                "remediation": "Specific steps to fix this smell",
                "example": "Optional: code example showing the fix",
            }
        ],
        "categorySummary": {"bloaters": 2, "oo-abusers": 1, "change-preventers": 0, "dispensables": 1, "couplers": 0},
        "overallHealthScore": 75,
    }
    parts = [
        "You are a code quality expert specializing in detecting code smells and design issues. "
        f"Analyze this {language} code for anti-patterns and design problems.\n",
        _code_block(code, language),
        "",
        _reply_format(example),
        "",
        "Categories:",
        _hints(SMELL_CATEGORY_HINTS),
        "",
        "Severity: 1-10 scale (1=minor, 10=critical)",
        "Health Score: 0-100 (0=poor, 100=excellent)",
    ]
    return "\n".join(parts)


def build_complexity_prompt(code: str, language: str) -> str:
    example = {
        "functions": [
            {
                "name": "functionName",
                "line": 10,
                "cyclomaticComplexity": 5,
                "cognitiveComplexity": 8,
                "nestingDepth": 3,
                "parameterCount": 2,
                "linesOfCode": 45,
                "issues": ["Too many conditional branches", "Consider extracting method"],
            }
        ],
        "overallMetrics": {
            "averageCyclomaticComplexity": 6.5,
            "averageCognitiveComplexity": 9.2,
            "maxNestingDepth": 4,
            "totalFunctions": 8,
            "complexFunctions": 2,
        },
        "maintainabilityIndex": 72,
        "recommendations": [
            "Reduce cyclomatic complexity in fetchData() by extracting validation logic",
            "Break down processResults() into smaller, focused functions",
        ],
    }
    parts = [
        f"Analyze the following {language} code for complexity metrics. For each function/method, calculate:\n",
        "1. Cyclomatic Complexity: Number of independent paths (<10 good, 10-20 moderate, >20 high)",
        "2. Cognitive Complexity: Difficulty of understanding (<15 good, 15-25 moderate, >25 high)",
        "3. Nesting Depth: Maximum nesting level (<4 good, 4-6 moderate, >6 high)",
        "4. Parameter Count: Number of parameters (<5 good, 5-7 moderate, >7 high)",
        "5. Lines of Code: Function length (<50 good, 50-100 moderate, >100 high)",
        "",
        "Also calculate:",
        "- Maintainability Index: 0-100 score (0=poor, 100=excellent) based on complexity, LOC, and structure",
        "- Overall Metrics: Average cyclomatic, average cognitive, max nesting, total functions, "
        "complex functions (>10 cyclomatic)",
        "- Recommendations: Actionable suggestions to reduce complexity",
        "",
        _code_block(code, language),
        "",
        _reply_format(example),
    ]
    return "\n".join(parts)


def build_security_prompt(code: str, language: str) -> str:
    example = {
        "vulnerabilities": [
            {
                "id": "VULN-001",
                "title": "SQL Injection Vulnerability",
                "severity": "critical",
                "category": "injection",
                "description": "User input is directly concatenated into SQL query without sanitization",
                "lineNumber": 15,
                "codeSnippet": 'query = "SELECT * FROM users WHERE id = " + userId',
                "impact": "Attacker could execute arbitrary SQL commands, leading to data breach",
                "remediation": 'Use parameterized queries:\nquery = "SELECT * FROM users WHERE id = ?"',
                "references": [
                    "https://owasp.org/www-community/attacks/SQL_Injection",
                    "https://cwe.mitre.org/data/definitions/89.html",
                ],
                "cwe": "CWE-89",
            }
        ],
        "totalCount": 1,
        "severitySummary": {"critical": 1, "high": 0, "medium": 0, "low": 0, "info": 0},
        "categorySummary": {category: int(category == "injection") for category in OWASP_CATEGORIES},
        "securityScore": 45,
        "recommendations": [
            "Always use parameterized queries to prevent SQL injection",
            "Implement proper input validation and sanitization",
        ],
    }
    parts = [
        f"Analyze the following {language} code for security vulnerabilities "
        "based on OWASP Top 10 and common security risks.\n",
        "For each vulnerability found, provide: a unique ID (e.g. \"VULN-001\"), title, "
        f"severity ({', '.join(VULNERABILITY_SEVERITIES)}), OWASP category, description, line number, "
        "the vulnerable code snippet, impact, remediation with specific code, reference URLs "
        "and optionally a CWE id.",
        "",
        "OWASP Categories:",
        _hints(OWASP_CATEGORY_HINTS),
        "",
        _code_block(code, language),
        "",
        "Calculate:",
        "- Security Score: 0-100 (higher is better, based on severity and count of vulnerabilities)",
        "- Severity Summary: Count per severity",
        "- Category Summary: Count per OWASP category",
        "- Recommendations: Actionable security improvements",
        "",
        _reply_format(example),
    ]
    return "\n".join(parts)


PROMPT_BUILDERS: dict[str, Callable[[str, str], str]] = {
    "explainer": build_explainer_prompt,
    "bugs": build_bug_finder_prompt,
    "refactor": build_refactor_prompt,
    "smells": build_code_smell_prompt,
    "complexity": build_complexity_prompt,
    "security": build_security_prompt,
}


def build_prompt(feature: str, code: str, language: str) -> str:
    try:
        builder = PROMPT_BUILDERS[feature]
    except KeyError:
        raise ValueError(f"No prompt builder for feature '{feature}'") from None
    return builder(code, language)
