from __future__ import annotations
from typing import List, Tuple

from .geom import Pt, InvalidGeometry
from .log import get_logger
from .polygon import Polygon
from .predicates import orient2d

logger = get_logger(__name__)

Tri = Tuple[Pt, Pt, Pt]


def _in_closed_triangle(a: Pt, b: Pt, c: Pt, p: Pt) -> bool:
    return orient2d(a, b, p) >= 0 and orient2d(b, c, p) >= 0 and orient2d(c, a, p) >= 0


def _is_ear(v: List[Pt], i: int) -> bool:
    n = len(v)
    a, b, c = v[i - 1], v[i], v[(i + 1) % n]
    if orient2d(a, b, c) <= 0:
        return False
    return not any(_in_closed_triangle(a, b, c, p) for p in v if p not in (a, b, c))


def ear_cut(polygon: Polygon) -> List[Tri]:
    """
    Тріангуляція простого полігона відрізанням «вух», O(n²).
    Будь-яка орієнтація на вході; n-2 CCW-трикутники на виході.
    """
    if not polygon.is_closed():
        raise InvalidGeometry("polygon is not closed")
    area2 = polygon.signed_area2()
    if area2 == 0:
        raise InvalidGeometry("polygon has zero area")
    v = list(polygon) if area2 > 0 else list(polygon)[::-1]

    out: List[Tri] = []
    while len(v) > 3:
        for i in range(len(v)):
            if _is_ear(v, i):
                out.append((v[i - 1], v[i], v[(i + 1) % len(v)]))
                del v[i]
                break
        else:
            raise InvalidGeometry("no ear found, polygon is not simple")
    out.append((v[0], v[1], v[2]))
    logger.debug("polygon triangulated", vertices=polygon.size(), triangles=len(out))
    return out
