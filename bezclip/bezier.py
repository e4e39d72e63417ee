"""Cubic Bezier curves: evaluation, de Casteljau subdivision, fat lines."""
from typing import NamedTuple, Optional, Sequence

import numpy as np

from .types import Point, Interval
from .geometry import GeometryError, add, sub, scale, lerp, dist
from .line import Line, FatLine
from .clipping import clip_against
from .constants import CLIP_SLACK, CHORD_EPS

# Bernstein basis in power form: [1, t, t^2, t^3] @ _BERNSTEIN @ [p0..p3]
_BERNSTEIN = np.array([
    [ 1.0,  0.0,  0.0, 0.0],
    [-3.0,  3.0,  0.0, 0.0],
    [ 3.0, -6.0,  3.0, 0.0],
    [-1.0,  3.0, -3.0, 1.0],
])


class CubicBezier(NamedTuple):
    """Cubic Bezier with endpoints p0/p3 and interior control points p1/p2."""
    p0: Point
    p1: Point
    p2: Point
    p3: Point

    @classmethod
    def from_quadratic(cls, q0: Point, q1: Point, q2: Point) -> "CubicBezier":
        """Exact degree elevation of the quadratic q0-q1-q2."""
        return cls(q0, add(scale(q0, 1/3), scale(q1, 2/3)),
                   add(scale(q1, 2/3), scale(q2, 1/3)), q2)

    # ============================================================
    # Evaluation
    # ============================================================
    def point_at(self, t: float) -> Point:
        ti = 1 - t
        b0, b1, b2, b3 = ti**3, 3*ti**2*t, 3*ti*t**2, t**3
        return (b0*self.p0[0] + b1*self.p1[0] + b2*self.p2[0] + b3*self.p3[0],
                b0*self.p0[1] + b1*self.p1[1] + b2*self.p2[1] + b3*self.p3[1])

    def derivative_at(self, t: float) -> Point:
        ti = 1 - t
        d0, d1, d2 = sub(self.p1, self.p0), sub(self.p2, self.p1), sub(self.p3, self.p2)
        return (3*(ti**2*d0[0] + 2*ti*t*d1[0] + t**2*d2[0]),
                3*(ti**2*d0[1] + 2*ti*t*d1[1] + t**2*d2[1]))

    def sample(self, ts: Sequence[float]) -> np.ndarray:
        """Evaluate at every t in *ts*; returns an (N, 2) array."""
        t = np.asarray(ts, dtype=float)
        powers = np.stack([np.ones_like(t), t, t**2, t**3], axis=-1)
        return powers @ _BERNSTEIN @ np.asarray(self, dtype=float)

    def bounds(self) -> tuple[float, float, float, float]:
        """Control-polygon bounding box (xmin, ymin, xmax, ymax)."""
        xs = [p[0] for p in self]; ys = [p[1] for p in self]
        return min(xs), min(ys), max(xs), max(ys)

    def reversed(self) -> "CubicBezier":
        return CubicBezier(self.p3, self.p2, self.p1, self.p0)

    # ============================================================
    # Subdivision
    # ============================================================
    def split_at(self, t: float) -> tuple["CubicBezier", "CubicBezier"]:
        """de Casteljau split into curves over [0, t] and [t, 1], each reparameterized to [0, 1]."""
        a = lerp(self.p0, self.p1, t)
        b = lerp(self.p1, self.p2, t)
        c = lerp(self.p2, self.p3, t)
        ab = lerp(a, b, t)
        bc = lerp(b, c, t)
        mid = lerp(ab, bc, t)
        return (CubicBezier(self.p0, a, ab, mid),
                CubicBezier(mid, bc, c, self.p3))

    def split_2(self, low: float, high: float) -> tuple["CubicBezier", "CubicBezier", "CubicBezier"]:
        """Curves over [0, low], [low, high] and [high, 1]."""
        if not 0.0 <= low <= high <= 1.0:
            raise GeometryError(f"Bad split range: low={low}, high={high}")
        left, rest = self.split_at(low)
        if low == 1.0:
            return left, rest, rest
        ratio = min(1.0, (high-low) / (1-low))
        mid, right = rest.split_at(ratio)
        return left, mid, right

    def sub_curve(self, low: float, high: float) -> "CubicBezier":
        return self.split_2(low, high)[1]

    # ============================================================
    # Fat Lines
    # ============================================================
    def _chord(self) -> tuple[Line, bool]:
        """Baseline for the fat line, and whether it is the true p0-p3 chord."""
        xmin, ymin, xmax, ymax = self.bounds()
        eps = CHORD_EPS * max(xmax-xmin, ymax-ymin)
        if dist(self.p0, self.p3) > eps:
            return Line.from_two_points(self.p0, self.p3), True
        # closed or collapsed: any direction bounds the hull once all four
        # control points set the offsets
        far = max((self.p1, self.p2), key=lambda p: dist(self.p0, p))
        if dist(self.p0, far) > eps:
            return Line.from_two_points(self.p0, far), False
        return Line(0.0, 1.0, -self.p0[1]), False

    def fat_line(self, tight: bool = False) -> FatLine:
        """Strip of lines parallel to the chord containing the whole curve.

        With *tight*, uses the cubic bound of Sederberg & Nishita: a curve whose
        interior control points lie at distances d1, d2 from the chord stays
        within k*min(0, d1, d2) .. k*max(0, d1, d2), with k = 3/4 when d1 and d2
        share a sign and 4/9 otherwise.
        """
        base, is_chord = self._chord()
        if tight and is_chord:
            d1 = base.distance_to(self.p1); d2 = base.distance_to(self.p2)
            k = 3/4 if d1*d2 > 0 else 4/9
            ds = [k*min(0.0, d1, d2), k*max(0.0, d1, d2)]
            cs = [base.c - d for d in ds]
        else:
            cs = [base.parallel_through(p).c for p in self]
        return FatLine(base, base.with_c(min(cs)), base.with_c(max(cs)))

    def fat_line_perpendicular(self) -> FatLine:
        """Strip perpendicular to the chord, bounded by the extreme control points."""
        base, _ = self._chord()
        perp = base.perpendicular_through(self.p0)
        cs = [perp.parallel_through(p).c for p in self]
        return FatLine(perp, perp.with_c(min(cs)), perp.with_c(max(cs)))

    def clip_against(self, line: Line, slack: float = CLIP_SLACK) -> Optional[Interval]:
        """Parameter range that may lie on the non-negative side of *line*; None if none."""
        return clip_against(self, line, slack)
