"""Content-based programming language detection.

Used when pasted or uploaded code has no trustworthy file extension.  The
detector is a heuristic, not a parser: each language has a handful of
regular-expression probes that are distinctive of it, and the languages are
tried in a fixed priority order with the first match winning.

The order is the tie-break policy.  Signatures overlap (TypeScript code also
satisfies the JavaScript probes, a Python ``class`` line satisfies Ruby's),
so the more specific or superset language is always tried first:

    python > java > csharp > cpp > go > rust > ruby > php > typescript > javascript

Anything that matches nothing, including empty input, is ``javascript``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from codequality.domain.models import DEFAULT_LANGUAGE


@dataclass(frozen=True)
class _Snippet:
    """The three views of the input that probes run against."""

    raw: str  # whole input, trimmed; for probes anchored at the very start
    content: str  # non-blank, non-``//`` lines, each trimmed
    first_line: str


Probe = Callable[[_Snippet], bool]


def _content(pattern: str) -> Probe:
    rx = re.compile(pattern)
    return lambda s: rx.search(s.content) is not None


def _raw(pattern: str) -> Probe:
    rx = re.compile(pattern)
    return lambda s: rx.search(s.raw) is not None


def _first_line(pattern: str) -> Probe:
    rx = re.compile(pattern)
    return lambda s: rx.search(s.first_line) is not None


def _both(a: Probe, b: Probe) -> Probe:
    return lambda s: a(s) and b(s)


# ^ anchors to the start of the probed string, not to each line.
_SIGNATURES: tuple[tuple[str, tuple[Probe, ...]], ...] = (
    (
        "python",
        (
            _content(r"^(def|class|import|from|if __name__|print\(|async def)\s"),
            _first_line(r":\s*$"),
            _content(r"^\s*(def|class|import|from|elif|async def)\s"),
        ),
    ),
    (
        "java",
        (
            _content(r"\b(public|private|protected)\s+(static\s+)?(class|interface|enum|void|int|String)\b"),
            _content(r"\bpackage\s+[\w.]+;"),
            _content(r"\bimport\s+java\."),
            _content(r"\bSystem\.out\.println"),
        ),
    ),
    (
        "csharp",
        (
            _content(r"\b(namespace|using\s+System|public\s+class|private\s+class)\b"),
            _content(r"\bConsole\.WriteLine"),
            _content(r"\[.*Attribute\]"),
            _content(r"\basync\s+Task"),
        ),
    ),
    (
        "cpp",
        (
            _content(r"#include\s*[<\"]"),
            _content(r"\b(std::|cout|cin|endl|nullptr|template\s*<)\b"),
            _content(r"^using namespace std;?"),
        ),
    ),
    (
        "go",
        (
            _raw(r"^package\s+\w+"),
            _content(r"\bfunc\s+\w+\("),
            _content(r"\bimport\s+\("),
            _content(r"\bfmt\.Print"),
            _content(r":=\s*"),
        ),
    ),
    (
        "rust",
        (
            _content(r"\bfn\s+\w+"),
            _content(r"\blet\s+mut\s+"),
            _content(r"\buse\s+std::"),
            _content(r"\bimpl\s+"),
            _content(r"\b(pub\s+)?(struct|enum|trait)\s+"),
        ),
    ),
    (
        "ruby",
        (
            _content(r"\b(def|class|module|require|puts|attr_accessor|end)\b"),
            _content(r"\bdo\s*\|.*\|"),
            _both(_content(r"@\w+"), _content(r"\bdef\s+")),
        ),
    ),
    (
        "php",
        (
            _raw(r"^<\?php"),
            _content(r"\$\w+\s*="),
            _both(_content(r"\bfunction\s+\w+\(.*\)\s*\{"), _content(r"\$")),
            _content(r"\b(echo|print_r|var_dump)\b"),
        ),
    ),
    (
        "typescript",
        (
            _content(r":\s*(string|number|boolean|any|void|never|unknown)\b"),
            _content(r"\binterface\s+\w+"),
            _content(r"\btype\s+\w+\s*="),
            _both(_content(r"<\w+>"), _content(r"\bfunction\s+")),
            _content(r"\bas\s+\w+"),
            _content(r"\benum\s+\w+"),
        ),
    ),
    (
        "javascript",
        (
            _content(r"\b(const|let|var|function|class|import|export|async|await|=>)\b"),
            _content(r"\bconsole\.(log|error|warn)"),
            _content(r"\brequire\("),
            _content(r"\bmodule\.exports"),
        ),
    ),
)

DETECTION_ORDER: tuple[str, ...] = tuple(lang for lang, _ in _SIGNATURES)


def _prepare(text: str) -> _Snippet:
    raw = text.strip()
    lines = [line.strip() for line in raw.split("\n")]
    content = "\n".join(line for line in lines if line and not line.startswith("//"))
    return _Snippet(raw=raw, content=content, first_line=lines[0])


def detect_language(text: str | None) -> str:
    """Best-effort guess of the language *text* is written in.

    Never raises; always returns one of ``LANGUAGES``.
    """
    if not text or not text.strip():
        return DEFAULT_LANGUAGE

    snippet = _prepare(text)
    for language, probes in _SIGNATURES:
        if any(probe(snippet) for probe in probes):
            return language
    return DEFAULT_LANGUAGE
