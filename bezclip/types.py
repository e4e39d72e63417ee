"""Shared type definitions for curve intersection."""
from typing import NamedTuple

Point = tuple[float, float]

class Interval(NamedTuple):
    """Sub-range [low, high] of a curve's [0, 1] parameter domain."""
    low: float; high: float

    @property
    def width(self) -> float:
        return self.high - self.low

    @property
    def mid(self) -> float:
        return (self.low + self.high) / 2

    def contains(self, t: float, eps: float = 0.0) -> bool:
        return self.low - eps <= t <= self.high + eps

    def map(self, t: float) -> float:
        """Map local parameter t in [0, 1] into this interval's parameter space."""
        return self.low + t * (self.high - self.low)

    def compose(self, local: "Interval") -> "Interval":
        """Interval *local* (relative to this one) expressed in this interval's space."""
        return Interval(self.map(local.low), self.map(local.high))

UNIT = Interval(0.0, 1.0)
