from __future__ import annotations

import json
import logging
import re
from typing import Any

from codequality.core.errors import ParseFailure

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")


def strip_fences(text: str) -> str:
    """
    Remove markdown code-fence markers and trim.

    Both the ```json opener and bare ``` markers are removed wherever they
    occur, so text that never had fences comes back unchanged apart from
    surrounding whitespace.
    """
    return _FENCE.sub("", _JSON_FENCE.sub("", text or "")).strip()


def _outermost_object(text: str) -> str | None:
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end <= start:
        return None
    return text[start : end + 1]


def parse_payload(raw: str, feature: str) -> dict[str, Any]:
    """
    Turn a model reply into the JSON object it (hopefully) contains.

    Handles three cases:
    1. Bare or fenced JSON       -> parsed after fence stripping
    2. JSON wrapped in prose      -> the outermost {...} span is parsed
    3. Anything else              -> ParseFailure (including JSON nested too
                                     deeply for the decoder)

    A valid JSON value that is not an object carries none of the expected
    keys, so it is treated as an empty object and every field defaults.
    """
    cleaned = strip_fences(raw)
    try:
        data = json.loads(cleaned)
    except RecursionError as e:
        logger.warning("%s response nests too deeply to parse (%d chars)", feature, len(cleaned))
        raise ParseFailure() from e
    except json.JSONDecodeError:
        candidate = _outermost_object(cleaned)
        if candidate is None:
            logger.warning("Unparseable %s response (%d chars)", feature, len(cleaned))
            raise ParseFailure()
        try:
            data = json.loads(candidate)
        except (json.JSONDecodeError, RecursionError) as e:
            logger.warning("Unparseable %s response: %s", feature, e)
            raise ParseFailure() from e

    if not isinstance(data, dict):
        logger.warning("%s response is a JSON %s, not an object; using defaults", feature, type(data).__name__)
        return {}
    return data
