"""Implicit lines in normalized standard form, and fat-line strips."""
import math
from typing import NamedTuple

from .types import Point
from .geometry import GeometryError, DegenerateLineError


class _Coeffs(NamedTuple):
    a: float; b: float; c: float


class Line(_Coeffs):
    """Line a*x + b*y + c = 0, normalized so that a**2 + b**2 == 1.

    Normalization makes distance_to() a true signed Euclidean distance.
    The sign selects a side: clipping keeps points with non-negative
    distance, and negate() flips which side that is.
    """
    __slots__ = ()

    def __new__(cls, a: float, b: float, c: float):
        n = math.hypot(a, b)
        if n == 0.0 or not math.isfinite(n) or not math.isfinite(c):
            raise DegenerateLineError(f"Degenerate line: a={a}, b={b}, c={c}")
        if n != 1.0:
            a, b, c = a/n, b/n, c/n
        return super().__new__(cls, a, b, c)

    @classmethod
    def from_two_points(cls, p1: Point, p2: Point) -> "Line":
        """Line through p1 and p2. Vertical lines come out with b == 0."""
        if p1[0] == p2[0]:
            if p1[1] == p2[1]:
                raise DegenerateLineError(f"Coincident points: {p1}")
            return cls(1.0, 0.0, -p1[0])
        slope = (p2[1]-p1[1]) / (p2[0]-p1[0])
        offset = p1[1] - slope*p1[0]
        return cls(slope, -1.0, offset)

    def y_at(self, x: float) -> float:
        if self.b == 0.0:
            raise GeometryError(f"Vertical line has no single y at x={x}: {self}")
        return -(self.a*x + self.c) / self.b

    def x_intercept(self) -> float:
        if self.a == 0.0:
            raise GeometryError(f"Horizontal line has no x-intercept: {self}")
        return -self.c / self.a

    def distance_to(self, p: Point) -> float:
        return self.a*p[0] + self.b*p[1] + self.c

    def negate(self) -> "Line":
        return Line(-self.a, -self.b, -self.c)

    def with_c(self, c: float) -> "Line":
        return Line(self.a, self.b, c)

    def parallel_through(self, p: Point) -> "Line":
        return Line(self.a, self.b, -(self.a*p[0] + self.b*p[1]))

    def perpendicular_through(self, p: Point) -> "Line":
        # normal of the result is this line's direction (-b, a)
        return Line(-self.b, self.a, self.b*p[0] - self.a*p[1])

    def approx_eq(self, other: "Line", eps: float = 1e-6) -> bool:
        return (abs(self.a-other.a) < eps and abs(self.b-other.b) < eps
                and abs(self.c-other.c) < eps)


class FatLine(NamedTuple):
    """Strip between two lines parallel to a curve's baseline.

    A point is inside when min_line.negate() and max_line both give it a
    non-negative distance.
    """
    baseline: Line
    min_line: Line
    max_line: Line

    @property
    def width(self) -> float:
        return self.max_line.c - self.min_line.c

    def contains(self, p: Point, eps: float = 1e-9) -> bool:
        return (self.min_line.negate().distance_to(p) >= -eps
                and self.max_line.distance_to(p) >= -eps)
