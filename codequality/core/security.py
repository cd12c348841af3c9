import re

_NON_ASCII = re.compile(r"[^\x00-\x7F]")


def sanitize_api_key(api_key: str | None) -> str:
    """Trim a pasted API key and drop every non-ASCII character.

    Vendors reject non-ASCII header values, and keys copied from web pages
    often pick up zero-width spaces or smart quotes.
    """
    if not api_key:
        return ""
    return _NON_ASCII.sub("", api_key.strip())
