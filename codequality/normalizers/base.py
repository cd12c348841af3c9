"""Parse-with-defaults machinery shared by the six result normalizers.

Each normalizer declares its result type and a mapping of attribute name to
``FieldRule``.  The wire key a rule reads is the camelCase form of the
attribute (``total_count`` reads ``totalCount``).  Rules never raise: a
missing or malformed field resolves to its documented default, so the only
failure left is a reply that is not JSON at all (see ``util.parse_payload``).
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Mapping

from codequality.domain.models import NEUTRAL_SCORE, camel_case

from .util import parse_payload

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    # NaN and +/-inf (from NaN, Infinity or 1e999 in the reply) count as malformed
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not isinstance(value, float) or math.isfinite(value)


def _as_count(value: Any) -> int:
    return int(value) if _is_number(value) else 0


def _items(data: Mapping[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    return list(value) if isinstance(value, list) else []


class FieldRule(ABC):
    @abstractmethod
    def resolve(self, section: Mapping[str, Any], key: str, root: Mapping[str, Any]) -> Any:
        """Value for *key* in *section*; *root* is the whole reply, for derived counts."""


@dataclass(frozen=True)
class Items(FieldRule):
    """A list forwarded verbatim, in the order the model returned it."""

    def resolve(self, section, key, root):
        return _items(section, key)


@dataclass(frozen=True)
class Text(FieldRule):
    default: str = ""

    def resolve(self, section, key, root):
        value = section.get(key)
        return value if isinstance(value, str) and value else self.default


@dataclass(frozen=True)
class Score(FieldRule):
    default: float = NEUTRAL_SCORE

    def resolve(self, section, key, root):
        value = section.get(key)
        return value if _is_number(value) else self.default


@dataclass(frozen=True)
class Count(FieldRule):
    """Explicit count when given, else the length of the *source* list."""

    source: str

    def resolve(self, section, key, root):
        value = section.get(key)
        if _is_number(value):
            return int(value)
        return len(_items(root, self.source))


@dataclass(frozen=True)
class Histogram(FieldRule):
    """
    A count per key of a closed enumeration; every key is always present.

    When the reply has a map, it is completed with zeros (never forwarded
    partially).  When it has none, the *source* items are tallied by their
    *by* field.
    """

    keys: tuple[str, ...]
    source: str
    by: str

    def resolve(self, section, key, root):
        supplied = section.get(key)
        if isinstance(supplied, dict):
            return {k: _as_count(supplied.get(k)) for k in self.keys}

        counts = dict.fromkeys(self.keys, 0)
        for item in _items(root, self.source):
            label = item.get(self.by) if isinstance(item, dict) else None
            if isinstance(label, str) and label in counts:
                counts[label] += 1
        return counts


@dataclass(frozen=True)
class Aggregate(FieldRule):
    """Explicit number when given, else *reduce* over the items' numeric *field*."""

    source: str
    field: str
    reduce: Callable[[list[float]], float]

    def resolve(self, section, key, root):
        value = section.get(key)
        if _is_number(value):
            return value
        values = [
            item[self.field]
            for item in _items(root, self.source)
            if isinstance(item, dict) and _is_number(item.get(self.field))
        ]
        if not values:
            return 0
        try:
            result = self.reduce(values)
        except OverflowError:
            return 0
        return result if _is_number(result) else 0


@dataclass(frozen=True)
class Section(FieldRule):
    """A nested record built by the same rules."""

    result_type: type
    rules: Mapping[str, FieldRule]

    def resolve(self, section, key, root):
        nested = section.get(key)
        return build(self.result_type, self.rules, nested if isinstance(nested, dict) else {}, root)


def build(result_type: type, rules: Mapping[str, FieldRule], section: Mapping[str, Any], root: Mapping[str, Any]):
    kwargs = {attr: rule.resolve(section, camel_case(attr), root) for attr, rule in rules.items()}
    return result_type(**kwargs)


class ResultNormalizer(ABC):
    """Turns one feature's raw model reply into its strict result type."""

    result_type: ClassVar[type]
    rules: ClassVar[Mapping[str, FieldRule]]

    @abstractmethod
    def feature_name(self) -> str: ...

    def normalize(self, raw: str):
        payload = parse_payload(raw, self.feature_name())
        missing = [camel_case(attr) for attr in self.rules if camel_case(attr) not in payload]
        if missing:
            logger.debug("%s response omitted %s; using defaults", self.feature_name(), ", ".join(missing))
        return build(self.result_type, self.rules, payload, payload)
