"""
Metric Scalers
==============
Pure numeric mappings from a data domain into a visual range.

    SqrtScale   -- magnitude -> radius (area grows linearly with magnitude)
    LinearScale -- weight -> stroke width

Both are frozen and callable. A degenerate domain (min == max) maps every
input to the midpoint of the range instead of dividing by zero.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


def extent(values: Iterable[float]) -> Optional[Tuple[float, float]]:
    """Return (min, max) of the values, or None for an empty collection."""
    values = list(values)
    if not values:
        return None
    return min(values), max(values)


@dataclass(frozen=True)
class LinearScale:
    """Linear mapping of ``domain`` onto ``range``."""
    domain: Tuple[float, float]
    range: Tuple[float, float]

    def _transform(self, value: float) -> float:
        return value

    @property
    def is_degenerate(self) -> bool:
        lo, hi = self.domain
        return self._transform(hi) == self._transform(lo)

    def __call__(self, value: float) -> float:
        r0, r1 = self.range
        if self.is_degenerate:
            return (r0 + r1) / 2
        d0 = self._transform(self.domain[0])
        d1 = self._transform(self.domain[1])
        t = (self._transform(value) - d0) / (d1 - d0)
        return r0 + t * (r1 - r0)


@dataclass(frozen=True)
class SqrtScale(LinearScale):
    """Square-root mapping: sqrt(value) is mapped linearly."""

    def _transform(self, value: float) -> float:
        return math.sqrt(max(value, 0.0))


def fit_scale(scale_cls, values: Iterable[float], output_range: Tuple[float, float]):
    """
    Build a scale whose domain is the extent of ``values``.

    An empty collection yields a degenerate (0, 0) domain, so every
    output is the midpoint of ``output_range``.
    """
    domain = extent(values) or (0.0, 0.0)
    return scale_cls(domain=domain, range=output_range)
