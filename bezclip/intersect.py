"""Curve-curve intersection by Bezier clipping.

Each step bounds one curve with its fat line and clips the other curve's
parameter range to the part that can lie inside the strip, then the roles
swap.  Both ranges shrink towards the crossing; tangent or overlapping
curves stop shrinking, which is reported rather than looped on.
"""
import logging
import math
from enum import Enum
from typing import NamedTuple, Optional

import numpy as np
from scipy.optimize import least_squares

from .types import Point, Interval, UNIT
from .geometry import GeometryError, is_finite
from .bezier import CubicBezier
from .clipping import clip_to_fat_line
from .constants import (
    TOLERANCE, MAX_ITERATIONS, STALL_RATIO, STALL_LIMIT,
    SPLIT_RATIO, MAX_DEPTH, MAX_SEARCH_STEPS, MAX_INTERSECTIONS, DEDUP_FACTOR,
)

logger = logging.getLogger(__name__)


# ============================================================
# Result Types
# ============================================================
class Outcome(Enum):
    FOUND = "found"
    NONE = "none"
    INCONCLUSIVE = "inconclusive"     # tangency, overlap or several crossings


class Role(Enum):
    """Which curve gets clipped in the next step."""
    CLIP_B = "clip_b"     # a is the reference, b the target
    CLIP_A = "clip_a"

    def other(self) -> "Role":
        return Role.CLIP_A if self is Role.CLIP_B else Role.CLIP_B


class Intersection(NamedTuple):
    t_a: float; t_b: float
    point: Point


class SolveResult(NamedTuple):
    outcome: Outcome
    intersection: Optional[Intersection]
    a_range: Interval
    b_range: Interval
    iterations: int
    reason: str = ""

    @property
    def found(self) -> bool:
        return self.outcome is Outcome.FOUND


class IntersectionSet(NamedTuple):
    intersections: list[Intersection]
    outcome: Outcome
    reason: str = ""


class Part(NamedTuple):
    """A curve piece and the span of the original parameter domain it covers."""
    curve: CubicBezier
    span: Interval

    def halves(self) -> tuple["Part", "Part"]:
        left, right = self.curve.split_at(0.5)
        mid = self.span.mid
        return (Part(left, Interval(self.span.low, mid)),
                Part(right, Interval(mid, self.span.high)))


# ============================================================
# Clip Step
# ============================================================
def clip_step(
    reference: Part, target: Part, tight: bool = False, perpendicular: bool = False,
) -> Optional[Part]:
    """Clip *target* against the fat line of *reference*.

    Returns the surviving piece of target, its span composed into the
    original parameter space, or None when no piece can intersect.
    """
    local = clip_to_fat_line(target.curve, reference.curve.fat_line(tight))
    if local is None:
        return None
    if perpendicular:
        across = clip_to_fat_line(target.curve, reference.curve.fat_line_perpendicular())
        if across is None:
            return None
        if across.width < local.width:
            local = across
    return Part(target.curve.sub_curve(local.low, local.high), target.span.compose(local))


def _shrink(before: Part, after: Part) -> float:
    """Share of the span kept by a step."""
    w = before.span.width
    return after.span.width / w if w > 0 else 0.0


def _check_curve(name: str, curve: CubicBezier):
    if not all(is_finite(p) for p in curve):
        raise GeometryError(f"Curve {name} has non-finite control points: {curve}")


def _make_intersection(a: CubicBezier, b: CubicBezier, pa: Part, pb: Part) -> Intersection:
    t_a, t_b = pa.span.mid, pb.span.mid
    return Intersection(t_a, t_b, a.point_at(t_a))


# ============================================================
# Single Intersection
# ============================================================
def intersect(
    a: CubicBezier, b: CubicBezier,
    tolerance: float = TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
    stall_limit: int = STALL_LIMIT,
    stall_ratio: float = STALL_RATIO,
    tight: bool = False,
    perpendicular: bool = False,
    refine: bool = False,
) -> SolveResult:
    """Find the crossing of *a* and *b* by alternating Bezier clips.

    Stops with FOUND once both parameter spans are within *tolerance*, with
    NONE as soon as a clip leaves nothing, and with INCONCLUSIVE after
    *stall_limit* consecutive steps that each keep more than *stall_ratio*
    of the clipped span, or after *max_iterations* steps.  Only one crossing
    is reported; use find_intersections() to enumerate several.
    """
    _check_curve("a", a); _check_curve("b", b)
    pa, pb = Part(a, UNIT), Part(b, UNIT)
    role = Role.CLIP_B
    stalls = 0
    iteration = 0
    try:
        while iteration < max_iterations:
            iteration += 1
            ref, tgt = (pa, pb) if role is Role.CLIP_B else (pb, pa)
            clipped = clip_step(ref, tgt, tight, perpendicular)
            if clipped is None:
                logger.debug("%s: empty clip at step %d", role.value, iteration)
                return SolveResult(Outcome.NONE, None, pa.span, pb.span, iteration)

            ratio = _shrink(tgt, clipped)
            if tgt.span.width > tolerance:
                stalls = stalls + 1 if ratio > stall_ratio else 0
            if role is Role.CLIP_B:
                pb = clipped
            else:
                pa = clipped
            logger.debug("%s step %d: a=%s b=%s kept=%.4f",
                         role.value, iteration, pa.span, pb.span, ratio)

            if pa.span.width <= tolerance and pb.span.width <= tolerance:
                hit = _make_intersection(a, b, pa, pb)
                if refine:
                    hit = refine_intersection(a, b, hit.t_a, hit.t_b)
                return SolveResult(Outcome.FOUND, hit, pa.span, pb.span, iteration)

            if stalls >= stall_limit:
                logger.debug("stalled after %d steps: a=%s b=%s", iteration, pa.span, pb.span)
                return SolveResult(Outcome.INCONCLUSIVE, None, pa.span, pb.span, iteration,
                                   f"no progress in {stalls} consecutive steps")
            role = role.other()
    except GeometryError as exc:
        logger.warning("intersection abandoned at step %d: %s", iteration, exc)
        return SolveResult(Outcome.INCONCLUSIVE, None, pa.span, pb.span, iteration, str(exc))

    return SolveResult(Outcome.INCONCLUSIVE, None, pa.span, pb.span, iteration,
                       f"not converged in {max_iterations} steps")


# ============================================================
# All Intersections
# ============================================================
class _Search:
    """Recursive subdivision search state for find_intersections()."""

    def __init__(self, a, b, tolerance, max_depth, max_steps, tight, perpendicular):
        self.a = a; self.b = b
        self.tolerance = tolerance
        self.max_depth = max_depth
        self.steps_left = max_steps
        self.tight = tight
        self.perpendicular = perpendicular
        self.found: list[Intersection] = []
        self.reason = ""

    def _record(self, pa: Part, pb: Part):
        hit = _make_intersection(self.a, self.b, pa, pb)
        radius = DEDUP_FACTOR * self.tolerance
        for prev in self.found:
            if abs(prev.t_a - hit.t_a) <= radius and abs(prev.t_b - hit.t_b) <= radius:
                return
        self.found.append(hit)

    def give_up(self, reason: str) -> bool:
        if not self.reason:
            self.reason = reason
            logger.debug("search incomplete: %s", reason)
        return False

    def run(self, pa: Part, pb: Part, depth: int = 0) -> bool:
        """Search pa x pb; False when a budget ran out before it was settled."""
        role = Role.CLIP_B
        while True:
            if self.steps_left <= 0:
                return self.give_up("step budget exhausted")
            self.steps_left -= 1

            ref, tgt = (pa, pb) if role is Role.CLIP_B else (pb, pa)
            clipped = clip_step(ref, tgt, self.tight, self.perpendicular)
            if clipped is None:
                return True
            ratio = _shrink(tgt, clipped)
            if role is Role.CLIP_B:
                pb = clipped
            else:
                pa = clipped

            if pa.span.width <= self.tolerance and pb.span.width <= self.tolerance:
                self._record(pa, pb)
                if len(self.found) > MAX_INTERSECTIONS:
                    return self.give_up(f"more than {MAX_INTERSECTIONS} intersections, overlap?")
                return True

            if ratio > SPLIT_RATIO and tgt.span.width > self.tolerance:
                if depth >= self.max_depth:
                    return self.give_up(f"subdivision depth {self.max_depth} reached at "
                                         f"a={pa.span} b={pb.span}")
                if pa.span.width > pb.span.width:
                    left, right = pa.halves()
                    ok = self.run(left, pb, depth+1)
                    return self.run(right, pb, depth+1) and ok
                left, right = pb.halves()
                ok = self.run(pa, left, depth+1)
                return self.run(pa, right, depth+1) and ok
            role = role.other()


def find_intersections(
    a: CubicBezier, b: CubicBezier,
    tolerance: float = TOLERANCE,
    max_depth: int = MAX_DEPTH,
    max_steps: int = MAX_SEARCH_STEPS,
    tight: bool = False,
    perpendicular: bool = True,
    refine: bool = False,
) -> IntersectionSet:
    """Find every crossing of *a* and *b*.

    Whenever a clip keeps most of a span, the longer piece is halved and
    each half searched on its own.  Results are sorted by t_a.  If a budget
    runs out, the outcome is INCONCLUSIVE and the list holds what was found.
    """
    _check_curve("a", a); _check_curve("b", b)
    search = _Search(a, b, tolerance, max_depth, max_steps, tight, perpendicular)
    try:
        complete = search.run(Part(a, UNIT), Part(b, UNIT))
    except GeometryError as exc:
        logger.warning("intersection search abandoned: %s", exc)
        complete = search.give_up(str(exc))

    hits = search.found
    if refine:
        hits = [refine_intersection(a, b, h.t_a, h.t_b) for h in hits]
    hits = sorted(hits, key=lambda h: h.t_a)
    if not complete:
        return IntersectionSet(hits, Outcome.INCONCLUSIVE, search.reason)
    return IntersectionSet(hits, Outcome.FOUND if hits else Outcome.NONE)


# ============================================================
# Refinement
# ============================================================
def refine_intersection(a: CubicBezier, b: CubicBezier, t_a: float, t_b: float) -> Intersection:
    """Polish a parameter pair so that a(t_a) and b(t_b) coincide.

    Solves a(t) - b(u) = 0 by bounded least squares on [0, 1]^2, starting
    from (t_a, t_b).  Keeps the starting pair if the solver does not improve it.
    """
    def residuals(x):
        pa = a.point_at(x[0]); pb = b.point_at(x[1])
        return np.array([pa[0]-pb[0], pa[1]-pb[1]])

    def jacobian(x):
        da = a.derivative_at(x[0]); db = b.derivative_at(x[1])
        return np.array([[da[0], -db[0]], [da[1], -db[1]]])

    x0 = np.clip([t_a, t_b], 0.0, 1.0)
    result = least_squares(residuals, x0, jac=jacobian, bounds=([0.0, 0.0], [1.0, 1.0]),
                           method="trf", xtol=1e-12, ftol=1e-12, gtol=1e-12)
    t, u = (float(v) for v in result.x)
    if math.hypot(*residuals([t, u])) > math.hypot(*residuals(x0)):
        t, u = float(x0[0]), float(x0[1])
    return Intersection(t, u, a.point_at(t))
