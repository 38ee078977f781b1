import random
from itertools import combinations

import numpy as np
import pytest

from cg2d.closest import closest_pair, closest_segment
from cg2d.geom import Pt, InvalidGeometry, distance2
from cg2d.segment import Segment


def _brute(pts):
    return min(distance2(Pt(*a), Pt(*b)) for a, b in combinations(pts, 2))


class TestScenarios:
    """Hand-checked inputs."""

    def test_two_points(self):
        cp = closest_pair([(1, 2), (4, 6)])
        assert cp.distance_squared == 25
        assert cp.distance == pytest.approx(5.0)
        assert (cp.first, cp.second) == (Pt(1, 2), Pt(4, 6))

    def test_unique_minimum(self):
        cp = closest_pair([(0, 0), (10, 10), (2, 1), (6, 6), (3, 5)])
        assert cp.distance_squared == 5
        assert (cp.first, cp.second) == (Pt(0, 0), Pt(2, 1))

    def test_duplicates_give_zero(self):
        cp = closest_pair([(0, 0), (5, 5), (9, 1), (5, 5)])
        assert cp.distance_squared == 0
        assert cp.first == cp.second == Pt(5, 5)

    def test_all_duplicates(self):
        cp = closest_pair([(7, 7)] * 4)
        assert cp.distance_squared == 0
        assert cp.first == Pt(7, 7)

    def test_collinear(self):
        pts = [(0, 0), (5, 0), (2, 0), (9, 0)]
        assert closest_pair(pts).distance_squared == 4
        assert closest_segment(pts) == Segment(Pt(0, 0), Pt(2, 0))

    @pytest.mark.parametrize("pts", [[], [(1, 1)]])
    def test_needs_two_points(self, pts):
        with pytest.raises(InvalidGeometry):
            closest_pair(pts)

    def test_permuted_input_same_pair(self):
        pts = [(0, 0), (10, 10), (1, 0), (5, 5)]
        a = closest_pair(pts)
        b = closest_pair([pts[3], pts[2], pts[0], pts[1]])
        assert a == b
        assert (a.first, a.second) == (Pt(0, 0), Pt(1, 0))


class TestAgainstBruteForce:
    @pytest.mark.parametrize("seed", range(5))
    def test_random(self, seed):
        rng = np.random.default_rng(seed)
        pts = [tuple(p) for p in rng.integers(0, 200, size=(120, 2)).tolist()]
        assert closest_pair(pts).distance_squared == _brute(pts)

    def test_ties_resolve_to_smallest_pair(self):
        grid = [(x, y) for x in range(6) for y in range(6)]
        random.Random(1).shuffle(grid)
        cp = closest_pair(grid)
        assert cp.distance_squared == 1
        assert (cp.first, cp.second) == (Pt(0, 0), Pt(0, 1))

    def test_float_input(self):
        rng = np.random.default_rng(3)
        pts = [tuple(p) for p in rng.random((80, 2)).tolist()]
        assert closest_pair(pts).distance_squared == _brute(pts)
