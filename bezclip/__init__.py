"""Curve-curve intersection of cubic Beziers by Bezier clipping."""

from .types import Point, Interval, UNIT
from .geometry import (
    GeometryError, DegenerateLineError,
    add, sub, scale, lerp, dot, cross, norm, dist, approx_eq, is_finite,
)
from .line import Line, FatLine
from .bezier import CubicBezier
from .clipping import clip_distances, clip_against, clip_to_fat_line
from .intersect import (
    Outcome, Role, Intersection, SolveResult, IntersectionSet, Part,
    clip_step, intersect, find_intersections, refine_intersection,
)
