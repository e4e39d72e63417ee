"""Shared test fixtures: sample curve pairs with known intersections."""
import pytest
from bezclip.bezier import CubicBezier


@pytest.fixture(scope="session")
def pair_single():
    """Two S-shaped curves crossing once."""
    a = CubicBezier((18, 122), (15, 178), (247, 173), (251, 242))
    b = CubicBezier((24, 21), (189, 40), (159, 137), (101, 261))
    return a, b


@pytest.fixture(scope="session")
def pair_endpoint():
    """Curves meeting only at a shared endpoint, a(1) == b(0)."""
    a = CubicBezier((0, 0), (30, 10), (70, 40), (100, 100))
    b = CubicBezier((100, 100), (130, 60), (170, 30), (200, 0))
    return a, b


@pytest.fixture(scope="session")
def pair_disjoint():
    """Two arches 100 units apart."""
    a = CubicBezier((0, 0), (30, 20), (70, 20), (100, 0))
    b = CubicBezier((0, 100), (30, 120), (70, 120), (100, 100))
    return a, b


@pytest.fixture(scope="session")
def pair_three_roots():
    """Wave x = 90t against the x-axis segment x = -10 + 120u.

    The wave's y is 600*(t-0.5)*((t-0.5)**2 - 0.15), zero at t = 0.5 and
    t = 0.5 +/- sqrt(0.15).
    """
    a = CubicBezier((0, -30), (30, 90), (60, -90), (90, 30))
    b = CubicBezier((-10, 0), (30, 0), (70, 0), (110, 0))
    return a, b


@pytest.fixture(scope="session")
def three_roots_expected():
    """(t_a, t_b) for pair_three_roots."""
    r = 0.15 ** 0.5
    ts = [0.5 - r, 0.5, 0.5 + r]
    return [(t, (90*t + 10) / 120) for t in ts]


@pytest.fixture(scope="session")
def curve():
    """Generic cubic with a loop-free bend."""
    return CubicBezier((10, 5), (3, 11), (12, 20), (6, 15))
