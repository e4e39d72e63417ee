"""Convex-hull clipping of a cubic's parameter domain against a line.

The signed distance from a cubic to a line is itself a cubic in Bernstein
form whose coefficients are the control-point distances, placed at
t = 0, 1/3, 2/3, 1.  The curve lies inside the convex hull of those four
(t, distance) samples, so any t where the hull stays below zero can be
discarded.
"""
from typing import Optional, Sequence

from .types import Point, Interval
from .line import Line, FatLine
from .constants import CLIP_SLACK

SAMPLE_TS = (0.0, 1.0/3.0, 2.0/3.0, 1.0)


def _crossing(p: Point, q: Point) -> Optional[float]:
    """t where the line through two (t, distance) samples crosses zero."""
    if p[1] == q[1]:
        return None
    return Line.from_two_points(p, q).x_intercept()


def clip_distances(distances: Sequence[float], slack: float = 0.0) -> Optional[Interval]:
    """Interval of t that may have non-negative distance, or None if none can.

    *distances* are the signed distances of the four control points.
    *slack* is an absolute amount added to each.
    """
    e = [(t, d + slack) for t, d in zip(SAMPLE_TS, distances)]
    if all(d < 0 for _, d in e):
        return None

    low = 0.0
    if e[0][1] < 0:
        xs = [_crossing(e[0], ek) for ek in e[1:]]
        low = min((x for x in xs if x is not None and x > 0), default=0.0)

    high = 1.0
    if e[3][1] < 0:
        xs = [_crossing(ek, e[3]) for ek in e[:3]]
        high = max((x for x in xs if x is not None and x < 1), default=1.0)

    return Interval(low, high)


def _magnitude(curve: Sequence[Point], line: Line) -> float:
    """Largest term size in the distance sums, the scale of their rounding error."""
    return max(abs(line.a*p[0]) + abs(line.b*p[1]) + abs(line.c) for p in curve)


def clip_against(curve: Sequence[Point], line: Line, slack: float = CLIP_SLACK) -> Optional[Interval]:
    """Clip *curve* (four control points) to the non-negative side of *line*.

    *slack* is relative to the magnitude of the coordinates, so control
    points lying on the line up to rounding are kept at any scale.
    """
    d = [line.distance_to(p) for p in curve]
    return clip_distances(d, slack * _magnitude(curve, line))


def clip_to_fat_line(curve: Sequence[Point], fat: FatLine, slack: float = CLIP_SLACK) -> Optional[Interval]:
    """Clip *curve* to the strip of *fat*. None when no part can lie inside."""
    lo = clip_against(curve, fat.min_line.negate(), slack)
    hi = clip_against(curve, fat.max_line, slack)
    if lo is None or hi is None:
        return None
    t_start = max(lo.low, hi.low)
    t_end = min(lo.high, hi.high)
    if t_start > t_end:
        return None
    return Interval(t_start, t_end)
