from __future__ import annotations

from dataclasses import dataclass

from .base import ResultNormalizer


@dataclass
class NormalizerRegistry:
    normalizers: list[ResultNormalizer]

    def get(self, feature: str) -> ResultNormalizer | None:
        for n in self.normalizers:
            if n.feature_name() == feature:
                return n
        return None

    def pick(self, feature: str) -> ResultNormalizer:
        n = self.get(feature)
        if n is None:
            available = ", ".join(self.list())
            raise ValueError(f"Unknown analysis feature '{feature}'. Available: {available}")
        return n

    def list(self) -> list[str]:
        return [n.feature_name() for n in self.normalizers]
