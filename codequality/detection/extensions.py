from __future__ import annotations

from pathlib import PurePath

from .detector import detect_language

EXTENSION_LANGUAGES: dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "java": "java",
    "cs": "csharp",
    "cpp": "cpp",
    "cc": "cpp",
    "cxx": "cpp",
    "go": "go",
    "rs": "rust",
    "rb": "ruby",
    "php": "php",
}


def language_for_filename(filename: str | None) -> str | None:
    """Map a file name to a language by the text after its last dot, or None if unknown.

    A name without a dot is looked up whole, so ``py`` and ``.py`` both map
    to python.
    """
    if not filename:
        return None
    suffix = PurePath(filename).name.rsplit(".", 1)[-1].lower()
    return EXTENSION_LANGUAGES.get(suffix)


def resolve_language(filename: str | None, text: str) -> str:
    """Extension first; content detection when the extension says nothing."""
    return language_for_filename(filename) or detect_language(text)
