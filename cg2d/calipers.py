from __future__ import annotations
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterator, List, Tuple

from .clip import ccw, is_convex, simplify
from .geom import Pt, InvalidGeometry, distance2
from .polygon import Polygon
from .predicates import orient2d
from .segment import Segment


@dataclass(frozen=True)
class Diameter:
    first: Pt
    second: Pt
    distance_squared: Fraction

    @property
    def distance(self) -> float:
        return math.sqrt(self.distance_squared)


@dataclass(frozen=True)
class Width:
    """
    width_squared — квадрат відстані між двома паралельними опорними прямими;
    edge — ребро, що лежить на одній з них; vertex — найдальша від нього вершина.
    """
    width_squared: Fraction
    edge: Segment
    vertex: Pt

    @property
    def width(self) -> float:
        return math.sqrt(self.width_squared)


def _convex_cycle(poly: Polygon) -> List[Pt]:
    """
    Вершини опуклого замкненого полігона CCW без колінеарних.
    Для виродженої оболонки (1-2 вершини або нульова площа) — її крайні точки.
    """
    if not poly.is_closed():
        raise InvalidGeometry("rotating calipers need a closed polygon")
    if poly.size() == 0:
        raise InvalidGeometry("polygon has no vertices")
    v = list(poly)
    if len(v) < 3 or poly.signed_area2() == 0:
        return [min(v), max(v)] if min(v) != max(v) else [v[0]]
    if not is_convex(poly):
        raise InvalidGeometry("rotating calipers need a convex polygon")
    return simplify(list(ccw(poly)))


def _antipodal(v: List[Pt]) -> Iterator[Tuple[int, int, int]]:
    """(i, i+1, j): j — вершина, найдальша від прямої ребра v[i]->v[i+1]."""
    n = len(v)
    j = 1
    for i in range(n):
        ni = (i + 1) % n
        while orient2d(v[i], v[ni], v[(j + 1) % n]) > orient2d(v[i], v[ni], v[j]):
            j = (j + 1) % n
        yield i, ni, j


def diameter(poly: Polygon) -> Diameter:
    """Найвіддаленіша пара вершин опуклого полігона."""
    v = _convex_cycle(poly)
    if len(v) <= 2:
        return Diameter(v[0], v[-1], distance2(v[0], v[-1]))
    n = len(v)
    best = None
    for i, ni, j in _antipodal(v):
        cand = [j]
        # паралельне ребро навпроти: обидва його кінці антиподальні
        nj = (j + 1) % n
        if orient2d(v[i], v[ni], v[nj]) == orient2d(v[i], v[ni], v[j]):
            cand.append(nj)
        for k in cand:
            for s in (i, ni):
                a, b = min(v[s], v[k]), max(v[s], v[k])
                key = (-distance2(a, b), a, b)
                if best is None or key < best:
                    best = key
    d2, a, b = best
    return Diameter(a, b, -d2)


def minimum_width(poly: Polygon) -> Width:
    """Найменша ширина опуклого полігона; для відрізка чи точки — 0."""
    v = _convex_cycle(poly)
    if len(v) <= 2:
        return Width(Fraction(0), Segment(v[0], v[-1]), v[0])
    best = None
    for i, ni, j in _antipodal(v):
        h = orient2d(v[i], v[ni], v[j])
        w2 = h * h / distance2(v[i], v[ni])
        if best is None or w2 < best.width_squared:
            best = Width(w2, Segment(v[i], v[ni]), v[j])
    return best
