from __future__ import annotations
import heapq
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, List, Optional, Tuple

from .geom import Pt, InvalidGeometry, PointLike, as_point, distance2
from .log import get_logger
from .segment import Segment

logger = get_logger(__name__)

# (квадрат відстані, менша точка, більша точка): мінімум за цим ключем однозначний
_Key = Tuple[Fraction, Pt, Pt]


@dataclass(frozen=True)
class ClosestPair:
    """first <= second лексикографічно; distance_squared точний."""
    first: Pt
    second: Pt
    distance_squared: Fraction

    @property
    def distance(self) -> float:
        return math.sqrt(self.distance_squared)


def _key(p: Pt, q: Pt) -> _Key:
    a, b = (p, q) if p <= q else (q, p)
    return distance2(a, b), a, b


def _by_y(p: Pt) -> Tuple[Fraction, Fraction]:
    return p.y, p.x


def _brute(pts: List[Pt]) -> _Key:
    best: Optional[_Key] = None
    for i in range(len(pts)):
        for j in range(i + 1, len(pts)):
            k = _key(pts[i], pts[j])
            if best is None or k < best:
                best = k
    return best


def _recurse(px: List[Pt]) -> Tuple[_Key, List[Pt]]:
    """px відсортовані за x; повертає (найкращий ключ, ті самі точки, відсортовані за y)."""
    n = len(px)
    if n <= 3:
        return _brute(px), sorted(px, key=_by_y)
    mid = n // 2
    split_x = px[mid].x
    left, left_y = _recurse(px[:mid])
    right, right_y = _recurse(px[mid:])
    best = min(left, right)
    py = list(heapq.merge(left_y, right_y, key=_by_y))

    # смуга навколо вертикалі розрізу, у порядку y
    strip = [p for p in py if (p.x - split_x) ** 2 <= best[0]]
    for i, p in enumerate(strip):
        for q in strip[i + 1:]:
            if (q.y - p.y) ** 2 > best[0]:
                break
            k = _key(p, q)
            if k < best:
                best = k
    return best, py


def closest_pair(points: Iterable[PointLike]) -> ClosestPair:
    """
    Найближча пара точок (розділяй і володарюй, O(n log n)).
    Дублікати не зливаються: два однакові входи дають відстань 0.
    Менше двох точок -> InvalidGeometry.
    """
    pts = sorted(as_point(p) for p in points)
    if len(pts) < 2:
        raise InvalidGeometry(f"closest pair needs at least 2 points, got {len(pts)}")
    (d2, a, b), _ = _recurse(pts)
    logger.debug("closest pair found", points=len(pts), distance_squared=str(d2))
    return ClosestPair(a, b, d2)


def closest_segment(points: Iterable[PointLike]) -> Segment:
    cp = closest_pair(points)
    return Segment(cp.first, cp.second)
