from fractions import Fraction
from itertools import combinations

import numpy as np
import pytest

from cg2d.calipers import diameter, minimum_width
from cg2d.geom import Pt, InvalidGeometry, distance2
from cg2d.hull import hull
from cg2d.polygon import Polygon
from cg2d.segment import Segment

SQUARE = [(0, 0), (4, 0), (4, 4), (0, 4)]


class TestDiameter:
    def test_square(self):
        d = diameter(Polygon.from_points(SQUARE))
        assert d.distance_squared == 32
        assert (d.first, d.second) == (Pt(0, 0), Pt(4, 4))

    def test_rectangle_either_winding(self):
        rect = [(0, 0), (5, 0), (5, 2), (0, 2)]
        for pts in (rect, rect[::-1]):
            assert diameter(Polygon.from_points(pts)).distance_squared == 29

    def test_collinear_vertex_is_ignored(self):
        # (2,0) лежить посеред нижнього ребра
        poly = Polygon.from_points([(2, 0), (4, 0), (4, 3), (0, 3), (0, 0)])
        assert poly.size() == 5
        assert diameter(poly).distance_squared == 25

    def test_two_point_hull(self):
        d = diameter(hull([(1, 1), (4, 5)]))
        assert d.distance_squared == 25
        assert d.distance == pytest.approx(5.0)

    def test_single_point_hull(self):
        assert diameter(hull([(3, 3)])).distance_squared == 0

    @pytest.mark.parametrize("seed", range(4))
    def test_matches_brute_force(self, seed):
        rng = np.random.default_rng(seed)
        h = hull([tuple(p) for p in rng.integers(-100, 100, size=(60, 2)).tolist()])
        expected = max(distance2(a, b) for a, b in combinations(h.vertices, 2))
        assert diameter(h).distance_squared == expected


class TestMinimumWidth:
    def test_square(self):
        w = minimum_width(Polygon.from_points(SQUARE))
        assert w.width_squared == 16
        assert w.width == pytest.approx(4.0)

    def test_rectangle(self):
        w = minimum_width(Polygon.from_points([(0, 0), (5, 0), (5, 2), (0, 2)]))
        assert w.width_squared == 4
        assert w.edge in (Segment(Pt(0, 0), Pt(5, 0)), Segment(Pt(5, 2), Pt(0, 2)))

    def test_triangle(self):
        # найменша висота опущена на найдовшу сторону
        w = minimum_width(Polygon.from_points([(0, 0), (4, 0), (0, 3)]))
        assert w.width_squared == Fraction(144, 25)
        assert w.vertex == Pt(0, 0)

    def test_two_point_hull_has_zero_width(self):
        assert minimum_width(hull([(1, 1), (4, 5)])).width_squared == 0


class TestRejected:
    """Open and non-convex polygons."""

    def test_non_convex(self):
        concave = Polygon.from_points([(0, 0), (4, 0), (2, 1), (4, 4), (0, 4)])
        with pytest.raises(InvalidGeometry):
            diameter(concave)
        with pytest.raises(InvalidGeometry):
            minimum_width(concave)

    @pytest.mark.parametrize("pts", [SQUARE, [(1, 1)]])
    def test_open(self, pts):
        open_poly = Polygon(pts)
        with pytest.raises(InvalidGeometry):
            diameter(open_poly)
        with pytest.raises(InvalidGeometry):
            minimum_width(open_poly)

    def test_empty(self):
        with pytest.raises(InvalidGeometry):
            diameter(hull([]))
