"""
Distributions: histograms over natural numbers.

A Distribution is an immutable multiset stored as sorted (value, count) pairs
with strictly positive counts. merge() is pointwise addition, so
Distribution.EMPTY is the identity and merge is associative and commutative.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Iterable, Iterator, Mapping, Optional, Tuple


def _check_natural(name: str, v: Any) -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"{name} must be an int, got {type(v).__name__}: {v!r}")
    if v < 0:
        raise ValueError(f"{name} must be non-negative, got {v}")
    return v


@dataclass(frozen=True)
class Distribution:
    counts: Tuple[Tuple[int, int], ...] = ()

    EMPTY: ClassVar["Distribution"]

    # ---------- constructors ----------

    @classmethod
    def of_counts(cls, counts: Mapping[int, int]) -> "Distribution":
        items = []
        for v, c in counts.items():
            _check_natural("value", v)
            _check_natural(f"count of {v}", c)
            if c:
                items.append((v, c))
        return cls(tuple(sorted(items)))

    @classmethod
    def of_values(cls, values: Iterable[int]) -> "Distribution":
        return cls.of_counts(Counter(values))

    # ---------- algebra ----------

    def merge(self, other: "Distribution") -> "Distribution":
        if not other.counts:
            return self
        if not self.counts:
            return other
        acc: Counter = Counter(dict(self.counts))
        acc.update(dict(other.counts))
        return Distribution(tuple(sorted(acc.items())))

    # ---------- queries ----------

    @property
    def total(self) -> int:
        return sum(c for _, c in self.counts)

    def count_of(self, value: int) -> int:
        for v, c in self.counts:
            if v == value:
                return c
        return 0

    def items(self) -> Iterator[Tuple[int, int]]:
        return iter(self.counts)

    def __bool__(self) -> bool:
        return bool(self.counts)

    @property
    def min_value(self) -> Optional[int]:
        return self.counts[0][0] if self.counts else None

    @property
    def max_value(self) -> Optional[int]:
        return self.counts[-1][0] if self.counts else None

    @property
    def mean(self) -> Optional[float]:
        n = self.total
        if not n:
            return None
        return sum(v * c for v, c in self.counts) / n

    @property
    def median(self) -> Optional[float]:
        n = self.total
        if not n:
            return None
        lo = self._nth((n - 1) // 2)
        hi = self._nth(n // 2)
        return (lo + hi) / 2

    def _nth(self, k: int) -> int:
        # k-th smallest element, 0-based
        seen = 0
        for v, c in self.counts:
            seen += c
            if k < seen:
                return v
        raise IndexError(k)

    # ---------- JSON ----------

    def to_json_obj(self) -> Dict[str, int]:
        return {str(v): c for v, c in self.counts}

    @classmethod
    def from_json_obj(cls, obj: Any) -> "Distribution":
        if not isinstance(obj, dict):
            raise ValueError(f"distribution must be an object, got {type(obj).__name__}")
        counts: Dict[int, int] = {}
        for k, c in obj.items():
            try:
                v = int(k)
            except (TypeError, ValueError):
                raise ValueError(f"distribution key {k!r} is not an integer") from None
            counts[v] = c
        return cls.of_counts(counts)


Distribution.EMPTY = Distribution()