from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from typing import List, Optional, Sequence

from .geom import Pt, InvalidGeometry, PointLike, add, as_point, cross, scale, sub
from .polygon import Polygon
from .predicates import orient2d
from .segment import Segment


@dataclass(frozen=True)
class HalfPlane:
    """Замкнена півплощина ліворуч від орієнтованої прямої a->b."""
    a: Pt
    b: Pt

    def __post_init__(self):
        object.__setattr__(self, "a", as_point(self.a))
        object.__setattr__(self, "b", as_point(self.b))
        if self.a == self.b:
            raise InvalidGeometry("half-plane needs two distinct points")

    def direction(self) -> Pt:
        return sub(self.b, self.a)

    def side(self, p: Pt) -> Fraction:
        return orient2d(self.a, self.b, p)

    def contains(self, p: PointLike) -> bool:
        return self.side(as_point(p)) >= 0

    def crossing(self, p: Pt, q: Pt) -> Pt:
        """Перетин відрізка p-q з межею (p і q строго по різні боки)."""
        sp, sq = self.side(p), self.side(q)
        t = sp / (sp - sq)
        return Pt(p.x + t*(q.x - p.x), p.y + t*(q.y - p.y))

    @classmethod
    def bisector(cls, p: PointLike, q: PointLike) -> "HalfPlane":
        """Точки, що не далі від p, ніж від q."""
        return cls(*Segment(as_point(p), as_point(q)).perpendicular_bisector())

    @classmethod
    def from_convex_polygon(cls, poly: Polygon) -> List["HalfPlane"]:
        if not is_convex(poly):
            raise InvalidGeometry("clip region must be a closed convex polygon")
        v = list(ccw(poly))
        return [cls(v[i], v[(i + 1) % len(v)]) for i in range(len(v))
                if v[i] != v[(i + 1) % len(v)]]


def ccw(poly: Polygon) -> Polygon:
    return poly.reversed() if poly.signed_area2() < 0 else poly


def is_convex(poly: Polygon) -> bool:
    """
    Замкнений полігон ненульової площі, усі повороти в один бік.
    Колінеарні вершини (поворот 0) допускаються.
    """
    if not poly.is_closed():
        raise InvalidGeometry("polygon is not closed")
    area2 = poly.signed_area2()
    if area2 == 0:
        return False
    v = poly.vertices
    n = len(v)
    for i in range(n):
        o = orient2d(v[i - 1], v[i], v[(i + 1) % n])
        if o != 0 and (o > 0) != (area2 > 0):
            return False
    return True


def clip_polygon(vertices: Sequence[Pt], hp: HalfPlane) -> List[Pt]:
    """Sutherland–Hodgman: опуклий (можливо вироджений) контур ∩ півплощина."""
    out: List[Pt] = []
    n = len(vertices)
    for i in range(n):
        cur, nxt = vertices[i], vertices[(i + 1) % n]
        sc, sn = hp.side(cur), hp.side(nxt)
        if sc >= 0:
            out.append(cur)
        if (sc > 0 and sn < 0) or (sc < 0 and sn > 0):
            out.append(hp.crossing(cur, nxt))
    return out


def simplify(vertices: Sequence[Pt]) -> List[Pt]:
    """
    Прибрати циклічні дублікати й колінеарні вершини опуклого контуру.
    Вироджений контур нульової площі стискається до двох крайніх точок.
    """
    v: List[Pt] = []
    for p in vertices:
        if not v or v[-1] != p:
            v.append(p)
    while len(v) > 1 and v[0] == v[-1]:
        v.pop()
    if len(v) < 3:
        return v
    n = len(v)
    if all(orient2d(v[0], v[1], q) == 0 for q in v[2:]):
        return [min(v), max(v)]
    return [v[i] for i in range(n) if orient2d(v[i - 1], v[i], v[(i + 1) % n]) != 0]


def clip_to_halfplanes(poly: Polygon, halfplanes: Sequence[HalfPlane]) -> Polygon:
    v: List[Pt] = list(ccw(poly))
    for hp in halfplanes:
        if not v:
            break
        v = simplify(clip_polygon(v, hp))
    if v:
        k = v.index(min(v))
        v = v[k:] + v[:k]
    return Polygon._trusted(v)


def convex_polygon_intersection(a: Polygon, b: Polygon) -> Polygon:
    """
    Перетин двох опуклих замкнених полігонів, CCW.
    Порожній -> 0 вершин, дотик ребром -> 2, дотик у точці -> 1.
    """
    if not is_convex(a):
        raise InvalidGeometry("first polygon is not convex")
    return clip_to_halfplanes(a, HalfPlane.from_convex_polygon(b))


def _line_crossing(h: HalfPlane, g: HalfPlane) -> Optional[Pt]:
    """Точка перетину меж h і g; None для паралельних меж."""
    d, e = h.direction(), g.direction()
    denom = cross(d, e)
    if denom == 0:
        return None
    t = cross(sub(g.a, h.a), e) / denom
    return add(h.a, scale(d, t))


def _unbounded(halfplanes: Sequence[HalfPlane]) -> bool:
    """
    Перетин необмежений, якщо існує ненульовий напрям c, що лежить у кожній півплощині
    «на нескінченності»: cross(d_j, c) >= 0 для всіх j. Якщо такий c є, то є і серед ±d_i.
    """
    dirs = [h.direction() for h in halfplanes]
    for d in dirs:
        for c in (d, scale(d, -1)):
            if all(cross(e, c) >= 0 for e in dirs):
                return True
    return False


def halfplane_intersection(halfplanes: Sequence[HalfPlane]) -> Polygon:
    """
    Перетин довільного набору замкнених півплощин як опуклий полігон (CCW,
    від найменшої вершини). Несумісні обмеження або необмежена область -> порожній полігон.
    Вироджений перетин віддається як 1 чи 2 вершини, як і в convex_polygon_intersection.
    """
    if not halfplanes or _unbounded(halfplanes):
        return Polygon._trusted([])
    hs = list(halfplanes)
    corners: List[Pt] = []
    for i, h in enumerate(hs):
        for g in hs[i + 1:]:
            p = _line_crossing(h, g)
            if p is not None:
                corners.append(p)
    if not corners:
        return Polygon._trusted([])
    # обмежена область є опуклою оболонкою частини цих точок, тож рамка її містить
    lo_x = min(p.x for p in corners) - 1
    hi_x = max(p.x for p in corners) + 1
    lo_y = min(p.y for p in corners) - 1
    hi_y = max(p.y for p in corners) + 1
    box = Polygon._trusted([Pt(lo_x, lo_y), Pt(hi_x, lo_y), Pt(hi_x, hi_y), Pt(lo_x, hi_y)])
    return clip_to_halfplanes(box, halfplanes)
