from fractions import Fraction

import pytest

from cg2d.clip import (
    HalfPlane, clip_polygon, convex_polygon_intersection, halfplane_intersection, is_convex, simplify,
)
from cg2d.geom import Pt, InvalidGeometry
from cg2d.polygon import Polygon


def square(x0, y0, x1, y1, cw=False):
    pts = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    return Polygon.from_points(pts[::-1] if cw else pts)


class TestHalfPlane:
    def test_left_side_is_inside(self):
        hp = HalfPlane((0, 0), (1, 0))
        assert hp.contains((5, 1))
        assert hp.contains((5, 0))
        assert not hp.contains((5, -1))

    def test_degenerate_rejected(self):
        with pytest.raises(InvalidGeometry):
            HalfPlane((1, 1), (1, 1))

    def test_bisector_keeps_nearer_side(self):
        hp = HalfPlane.bisector((0, 0), (4, 0))
        assert hp.contains((0, 0))
        assert hp.contains((2, 7))
        assert not hp.contains((3, 0))

    def test_from_convex_polygon_either_winding(self):
        for cw in (False, True):
            planes = HalfPlane.from_convex_polygon(square(0, 0, 2, 2, cw=cw))
            assert len(planes) == 4
            assert all(hp.contains((1, 1)) for hp in planes)


class TestConvexity:
    def test_convex_and_concave(self):
        assert is_convex(square(0, 0, 1, 1))
        assert is_convex(square(0, 0, 1, 1, cw=True))
        arrow = Polygon.from_points([(0, 0), (4, 0), (4, 4), (2, 1), (0, 4)])
        assert not is_convex(arrow)

    def test_open_raises(self):
        with pytest.raises(InvalidGeometry):
            is_convex(Polygon([(0, 0), (1, 0), (1, 1)]))


class TestClipping:
    """Sutherland–Hodgman and convex intersection."""

    def test_clip_square_by_diagonal(self):
        v = list(square(0, 0, 2, 2))
        out = simplify(clip_polygon(v, HalfPlane((0, 0), (2, 2))))
        assert set(out) == {Pt(0, 0), Pt(2, 2), Pt(0, 2)}

    def test_crossing_point_is_exact(self):
        v = list(square(0, 0, 3, 3))
        out = clip_polygon(v, HalfPlane((0, Fraction(1, 2)), (2, 1)))
        assert out == [Pt(3, Fraction(5, 4)), Pt(3, 3), Pt(0, 3), Pt(0, Fraction(1, 2))]

    def test_overlap(self):
        r = convex_polygon_intersection(square(0, 0, 2, 2), square(1, 1, 3, 3, cw=True))
        assert r.is_closed()
        assert r.area() == 1
        assert r.vertices == (Pt(1, 1), Pt(2, 1), Pt(2, 2), Pt(1, 2))

    def test_contained(self):
        r = convex_polygon_intersection(square(0, 0, 10, 10), square(2, 2, 3, 3))
        assert r.area() == 1

    def test_disjoint(self):
        r = convex_polygon_intersection(square(0, 0, 1, 1), square(5, 5, 6, 6))
        assert r.is_closed()
        assert r.size() == 0

    def test_touching_edge(self):
        r = convex_polygon_intersection(square(0, 0, 1, 1), square(1, 0, 2, 1))
        assert sorted(r) == [Pt(1, 0), Pt(1, 1)]

    def test_touching_point(self):
        r = convex_polygon_intersection(square(0, 0, 1, 1), square(1, 1, 2, 2))
        assert list(r) == [Pt(1, 1)]

    def test_rational_result(self):
        tri = Polygon.from_points([(0, 0), (3, 0), (0, 3)])
        r = convex_polygon_intersection(tri, square(0, 0, 2, 2))
        assert r.area() == Fraction(7, 2)

    def test_non_convex_rejected(self):
        arrow = Polygon.from_points([(0, 0), (4, 0), (4, 4), (2, 1), (0, 4)])
        with pytest.raises(InvalidGeometry):
            convex_polygon_intersection(square(0, 0, 1, 1), arrow)
        with pytest.raises(InvalidGeometry):
            convex_polygon_intersection(arrow, square(0, 0, 1, 1))

    def test_open_rejected(self):
        with pytest.raises(InvalidGeometry):
            convex_polygon_intersection(square(0, 0, 1, 1), Polygon([(0, 0), (1, 0), (1, 1)]))


class TestHalfPlaneIntersection:
    """Intersection of a raw list of half-planes."""

    @pytest.mark.parametrize("cw", [False, True])
    def test_single_square(self, cw):
        planes = HalfPlane.from_convex_polygon(square(0, 0, 4, 4, cw=cw))
        out = halfplane_intersection(planes)
        assert out.vertices == (Pt(0, 0), Pt(4, 0), Pt(4, 4), Pt(0, 4))
        assert out.area() == 16

    def test_two_overlapping_squares(self):
        planes = HalfPlane.from_convex_polygon(square(0, 0, 4, 4)) + \
            HalfPlane.from_convex_polygon(square(2, 2, 6, 6))
        out = halfplane_intersection(planes)
        assert out.vertices == (Pt(2, 2), Pt(4, 2), Pt(4, 4), Pt(2, 4))

    def test_triangle_from_three_lines(self):
        planes = [HalfPlane((0, 0), (6, 0)), HalfPlane((6, 0), (0, 6)), HalfPlane((0, 6), (0, 0))]
        out = halfplane_intersection(planes)
        assert out.vertices == (Pt(0, 0), Pt(6, 0), Pt(0, 6))

    def test_inconsistent_constraints_give_empty(self):
        planes = [
            HalfPlane((2, 1), (2, 0)),   # x >= 2
            HalfPlane((1, 0), (1, 1)),   # x <= 1
            HalfPlane((0, 0), (1, 0)),   # y >= 0
            HalfPlane((1, 1), (0, 1)),   # y <= 1
        ]
        out = halfplane_intersection(planes)
        assert out.size() == 0 and out.is_closed()

    def test_unbounded_region_gives_empty(self):
        planes = [
            HalfPlane((0, 1), (0, 0)),   # x >= 0
            HalfPlane((0, 0), (1, 0)),   # y >= 0
            HalfPlane((1, 0), (1, 1)),   # x <= 1
        ]
        assert halfplane_intersection(planes).size() == 0

    def test_empty_list_and_parallel_strip(self):
        assert halfplane_intersection([]).size() == 0
        strip = [HalfPlane((0, 0), (1, 0)), HalfPlane((1, 1), (0, 1))]
        assert halfplane_intersection(strip).size() == 0

    def test_degenerate_segment(self):
        planes = [
            HalfPlane((0, 0), (1, 0)),   # y >= 0
            HalfPlane((1, 0), (0, 0)),   # y <= 0
            HalfPlane((0, 1), (0, 0)),   # x >= 0
            HalfPlane((3, 0), (3, 1)),   # x <= 3
        ]
        assert halfplane_intersection(planes).vertices == (Pt(0, 0), Pt(3, 0))

    def test_matches_convex_polygon_intersection(self):
        a = Polygon.from_points([(0, 0), (5, 1), (4, 5), (-1, 3)])
        b = Polygon.from_points([(2, -1), (7, 2), (3, 6)])
        planes = HalfPlane.from_convex_polygon(a) + HalfPlane.from_convex_polygon(b)
        assert halfplane_intersection(planes) == convex_polygon_intersection(a, b)
