from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction

from .geom import Pt, InvalidGeometry, PointLike, as_point, distance, midpoint, sub, dot, cross, norm2
from .predicates import orient2d, between


class Sense(Enum):
    """Компасний октант напрямку src -> tgt (для розкладки у викликачів)."""
    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"


_SENSES = {
    (0, 1): Sense.N, (1, 1): Sense.NE, (1, 0): Sense.E, (1, -1): Sense.SE,
    (0, -1): Sense.S, (-1, -1): Sense.SW, (-1, 0): Sense.W, (-1, 1): Sense.NW,
}


def _sign(v: Fraction) -> int:
    return (v > 0) - (v < 0)


@dataclass(frozen=True)
class Segment:
    src: Pt
    tgt: Pt

    def __post_init__(self):
        object.__setattr__(self, "src", as_point(self.src))
        object.__setattr__(self, "tgt", as_point(self.tgt))

    def __iter__(self):
        yield self.src; yield self.tgt

    def direction(self) -> Pt:
        return sub(self.tgt, self.src)

    def length(self) -> float:
        return distance(self.src, self.tgt)

    def is_degenerate(self) -> bool:
        return self.src == self.tgt

    def midpoint(self) -> Pt:
        return midpoint(self.src, self.tgt)

    def reversed(self) -> "Segment":
        return Segment(self.tgt, self.src)

    def perpendicular_bisector(self) -> "Segment":
        """
        Серединний перпендикуляр тієї ж довжини: проходить через midpoint,
        напрям — src->tgt, повернутий на +90°.
        """
        if self.is_degenerate():
            raise InvalidGeometry("zero-length segment has no bisector")
        m = self.midpoint()
        d = self.direction()
        hx, hy = -d.y / 2, d.x / 2
        return Segment(Pt(m.x - hx, m.y - hy), Pt(m.x + hx, m.y + hy))

    def foot_of_perpendicular(self, p: PointLike) -> Pt:
        """Основа перпендикуляра з p на пряму відрізка."""
        p = as_point(p)
        if self.is_degenerate():
            raise InvalidGeometry("zero-length segment has no supporting line")
        d = self.direction()
        t = dot(sub(p, self.src), d) / norm2(d)
        return Pt(self.src.x + t*d.x, self.src.y + t*d.y)

    def sense(self) -> Sense:
        d = self.direction()
        key = (_sign(d.x), _sign(d.y))
        if key == (0, 0):
            raise InvalidGeometry("zero-length segment has no direction")
        return _SENSES[key]

    # ---------- перетини ----------
    def contains(self, p: PointLike) -> bool:
        return between(self.src, self.tgt, as_point(p))

    def is_parallel_with(self, other: "Segment") -> bool:
        return cross(self.direction(), other.direction()) == 0

    def intersects_with(self, other: "Segment") -> bool:
        """Замкнені відрізки: дотик кінцем і колінеарне накладання теж рахуються."""
        a, b = self.src, self.tgt
        c, d = other.src, other.tgt
        o1 = _sign(orient2d(a, b, c))
        o2 = _sign(orient2d(a, b, d))
        o3 = _sign(orient2d(c, d, a))
        o4 = _sign(orient2d(c, d, b))
        if o1 * o2 < 0 and o3 * o4 < 0:
            return True
        return (between(a, b, c) or between(a, b, d)
                or between(c, d, a) or between(c, d, b))

    def intersects_properly_with(self, other: "Segment") -> bool:
        """Одна спільна точка, внутрішня для обох відрізків."""
        a, b = self.src, self.tgt
        c, d = other.src, other.tgt
        return (_sign(orient2d(a, b, c)) * _sign(orient2d(a, b, d)) < 0
                and _sign(orient2d(c, d, a)) * _sign(orient2d(c, d, b)) < 0)

    def intersection_with(self, other: "Segment") -> Pt:
        """Точка перетину опорних прямих. Паралельні прямі — InvalidGeometry."""
        r = self.direction()
        s = other.direction()
        den = cross(r, s)
        if den == 0:
            raise InvalidGeometry("parallel segments have no single intersection point")
        t = cross(sub(other.src, self.src), s) / den
        return Pt(self.src.x + t*r.x, self.src.y + t*r.y)

    def __repr__(self) -> str:
        return f"Segment({self.src!r}, {self.tgt!r})"
