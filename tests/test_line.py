"""Tests for bezclip/line.py: normalized lines and fat lines."""
import math
import pytest
from bezclip.line import Line, FatLine
from bezclip.geometry import GeometryError, DegenerateLineError


class TestConstruction:
    def test_normalized(self):
        ln = Line(3, 4, 5)
        assert abs(ln.a - 0.6) < 1e-12
        assert abs(ln.b - 0.8) < 1e-12
        assert abs(ln.c - 1.0) < 1e-12

    def test_zero_normal_raises(self):
        with pytest.raises(DegenerateLineError, match="Degenerate"):
            Line(0, 0, 1)

    def test_non_finite_raises(self):
        with pytest.raises(DegenerateLineError):
            Line(math.nan, 1, 0)
        with pytest.raises(DegenerateLineError):
            Line(1, 0, math.inf)

    def test_degenerate_is_geometry_error(self):
        with pytest.raises(GeometryError):
            Line(0, 0, 0)

    def test_frozen(self):
        ln = Line(0, 1, 0)
        with pytest.raises(AttributeError):
            ln.a = 2

    def test_tuple_value(self):
        a, b, c = Line(3, 4, 5)
        assert (a, b, c) == pytest.approx((0.6, 0.8, 1.0))
        assert Line(0, 2, 4) == Line(0, 1, 2)
        assert Line(0, 2, 4)._fields == ("a", "b", "c")
        assert repr(Line(0, 1, 2)).startswith("Line(")


class TestFromTwoPoints:
    def test_sloped(self):
        ln = Line.from_two_points((2, 2), (6, 4))
        assert abs(ln.a - 0.4472136) < 1e-6
        assert abs(ln.b - (-0.8944272)) < 1e-6
        assert abs(ln.c - 0.8944272) < 1e-6

    def test_unit_normal(self):
        ln = Line.from_two_points((-3, 7), (11, -2))
        assert abs(ln.a**2 + ln.b**2 - 1.0) < 1e-12

    @pytest.mark.parametrize("p1,p2", [
        ((2, 2), (6, 4)),
        ((0, 0), (1, 1000)),
        ((-5, 3), (5, 3)),
        ((5, 1), (5, 12)),
    ])
    def test_defining_points_on_line(self, p1, p2):
        ln = Line.from_two_points(p1, p2)
        assert abs(ln.distance_to(p1)) < 1e-9
        assert abs(ln.distance_to(p2)) < 1e-9

    def test_horizontal(self):
        ln = Line.from_two_points((2, 2), (6, 2))
        assert (ln.a, ln.b, ln.c) == (0.0, -1.0, 2.0)
        assert ln.y_at(100) == 2.0
        with pytest.raises(GeometryError, match="Horizontal"):
            ln.x_intercept()

    def test_vertical(self):
        ln = Line.from_two_points((5, 1), (5, 12))
        assert (ln.a, ln.b, ln.c) == (1.0, 0.0, -5.0)
        assert ln.x_intercept() == 5.0
        assert abs(ln.distance_to((7, 0)) - 2.0) < 1e-12
        with pytest.raises(GeometryError, match="Vertical"):
            ln.y_at(5)

    def test_coincident_raises(self):
        with pytest.raises(DegenerateLineError, match="Coincident"):
            Line.from_two_points((1, 1), (1, 1))


class TestQueries:
    def test_signed_distance(self):
        ln = Line.from_two_points((2, 2), (6, 4))
        assert abs(ln.distance_to((2, 3)) - (-2 / math.sqrt(5))) < 1e-9
        assert ln.distance_to((2, 1)) > 0

    def test_y_at(self):
        ln = Line.from_two_points((2, 2), (6, 4))
        assert abs(ln.y_at(4) - 3.0) < 1e-12

    def test_x_intercept(self):
        ln = Line.from_two_points((0, -2), (1, 0))
        assert abs(ln.x_intercept() - 1.0) < 1e-12

    def test_negate_flips_side(self):
        ln = Line.from_two_points((0, 0), (10, 3))
        p = (4, 9)
        assert abs(ln.negate().distance_to(p) + ln.distance_to(p)) < 1e-12

    def test_parallel_through(self):
        ln = Line.from_two_points((0, 0), (10, 3))
        par = ln.parallel_through((4, 9))
        assert (par.a, par.b) == pytest.approx((ln.a, ln.b))
        assert abs(par.distance_to((4, 9))) < 1e-12

    def test_perpendicular_through(self):
        ln = Line.from_two_points((0, 0), (10, 3))
        perp = ln.perpendicular_through((4, 9))
        assert abs(perp.distance_to((4, 9))) < 1e-12
        assert abs(perp.a*ln.a + perp.b*ln.b) < 1e-12

    def test_with_c(self):
        ln = Line(0, 1, 0).with_c(-7)
        assert ln.distance_to((0, 7)) == 0

    def test_approx_eq(self):
        ln = Line.from_two_points((2, 2), (6, 4))
        assert ln.approx_eq(Line(0.4472136, -0.8944272, 0.8944272))
        assert not ln.approx_eq(ln.negate())


class TestFatLine:
    @pytest.fixture
    def strip(self):
        # horizontal strip 1 <= y <= 4; distance along baseline is -y
        base = Line(0, -1, 0)
        return FatLine(base, base.with_c(1), base.with_c(4))

    def test_width(self, strip):
        assert strip.width == 3

    def test_contains(self, strip):
        assert strip.contains((50, 1))
        assert strip.contains((-50, 2.5))
        assert strip.contains((0, 4))
        assert not strip.contains((0, 0.5))
        assert not strip.contains((0, 4.5))

    def test_contains_eps(self, strip):
        assert not strip.contains((0, 4.01))
        assert strip.contains((0, 4.01), eps=0.1)
