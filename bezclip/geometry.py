"""Point arithmetic and the geometry error types."""
import math
from .types import Point

# ============================================================
# Error Types
# ============================================================
class GeometryError(ValueError):
    """Raised for impossible geometry operations."""

class DegenerateLineError(GeometryError):
    """Raised when a line has no direction (zero or non-finite normal)."""

# ============================================================
# Point Arithmetic
# ============================================================
def add(p: Point, q: Point) -> Point:
    return (p[0]+q[0], p[1]+q[1])

def sub(p: Point, q: Point) -> Point:
    return (p[0]-q[0], p[1]-q[1])

def scale(p: Point, s: float) -> Point:
    return (p[0]*s, p[1]*s)

def lerp(p: Point, q: Point, t: float) -> Point:
    """Linear interpolation p -> q. Exact at t=0 and t=1."""
    return ((1-t)*p[0] + t*q[0], (1-t)*p[1] + t*q[1])

def dot(p: Point, q: Point) -> float:
    return p[0]*q[0] + p[1]*q[1]

def cross(p: Point, q: Point) -> float:
    """z-component of the 2D cross product."""
    return p[0]*q[1] - p[1]*q[0]

def norm(p: Point) -> float:
    return math.hypot(p[0], p[1])

def dist(p: Point, q: Point) -> float:
    return math.hypot(q[0]-p[0], q[1]-p[1])

def approx_eq(p: Point, q: Point, eps: float = 1e-9) -> bool:
    return abs(p[0]-q[0]) <= eps and abs(p[1]-q[1]) <= eps

def is_finite(p: Point) -> bool:
    return math.isfinite(p[0]) and math.isfinite(p[1])
