from __future__ import annotations
from functools import cmp_to_key
from heapq import merge
from typing import Callable, Dict, Iterable, List, Optional

from .config import settings
from .geom import Pt, PointLike, dot, sub, distance2, unique_points
from .log import get_logger
from .polygon import Polygon
from .predicates import orient2d, between

logger = get_logger(__name__)

HullAlgorithm = Callable[[Iterable[PointLike]], Polygon]


# ---------------- спільне ----------------
def _finish(cycle: List[Pt]) -> Polygon:
    """
    Канонічна форма оболонки: CCW, починаючи з лексикографічно найменшої вершини.
    Так усі алгоритми віддають однакові послідовності для однакового входу.
    """
    if len(cycle) >= 3:
        area2 = sum(orient2d(cycle[0], cycle[i], cycle[i + 1]) for i in range(1, len(cycle) - 1))
        if area2 < 0:
            cycle = cycle[::-1]
    if cycle:
        k = cycle.index(min(cycle))
        cycle = cycle[k:] + cycle[:k]
    return Polygon._trusted(cycle)


def _chain(pts: Iterable[Pt], out: List[Pt]) -> List[Pt]:
    for p in pts:
        while len(out) >= 2 and orient2d(out[-2], out[-1], p) <= 0:
            out.pop()
        out.append(p)
    return out


def _monotone_chain_sorted(pts: List[Pt]) -> List[Pt]:
    """Andrew на вже відсортованих унікальних точках. O(n)."""
    if len(pts) <= 2:
        return list(pts)
    lower = _chain(pts, [])
    upper = _chain(reversed(pts), [])
    return lower[:-1] + upper[:-1]


# ---------------- алгоритми ----------------
def monotone_chain_hull(points: Iterable[PointLike]) -> Polygon:
    """Andrew's monotone chain (sweep), O(n log n). Алгоритм за замовчуванням."""
    return _finish(_monotone_chain_sorted(sorted(unique_points(points))))


def graham_scan_hull(points: Iterable[PointLike]) -> Polygon:
    """Graham: кутове сортування навколо найнижчої точки, O(n log n)."""
    pts = unique_points(points)
    if len(pts) <= 2:
        return _finish(sorted(pts))
    pivot = min(pts, key=lambda p: (p.y, p.x))

    def by_angle(a: Pt, b: Pt) -> int:
        # усі точки у півплощині над pivot, тож cross задає повний порядок кутів
        o = orient2d(pivot, a, b)
        if o != 0:
            return -1 if o > 0 else 1
        da, db = distance2(pivot, a), distance2(pivot, b)
        return (da > db) - (da < db)

    rest = sorted((p for p in pts if p != pivot), key=cmp_to_key(by_angle))
    return _finish(_chain(rest, [pivot]))


def divide_and_conquer_hull(points: Iterable[PointLike]) -> Polygon:
    """
    Розділяй і володарюй: ліва/права половини лексикографічно відсортованих точок,
    рекурсивні оболонки, лінійне злиття. O(n log n).
    """
    pts = sorted(unique_points(points))

    def lex_order(cycle: List[Pt]) -> List[Pt]:
        # CCW-цикл від мінімуму: нижній ланцюг зростає до максимуму, верхній спадає
        if len(cycle) <= 2:
            return cycle
        k = cycle.index(max(cycle))
        return list(merge(cycle[:k + 1], reversed(cycle[k + 1:])))

    def rec(lo: int, hi: int) -> List[Pt]:
        if hi - lo <= 3:
            return _monotone_chain_sorted(pts[lo:hi])
        mid = (lo + hi) // 2
        left = lex_order(rec(lo, mid))
        right = lex_order(rec(mid, hi))
        # усі вершини left лексикографічно менші за right, тож конкатенація вже відсортована
        return _monotone_chain_sorted(left + right)

    return _finish(rec(0, len(pts)) if pts else [])


def quickhull(points: Iterable[PointLike]) -> Polygon:
    """QuickHull: найвіддаленіша точка від ребра ділить задачу на дві."""
    pts = sorted(unique_points(points))
    if len(pts) <= 2:
        return _finish(pts)
    a, b = pts[0], pts[-1]

    def farthest(u: Pt, v: Pt, S: List[Pt]) -> Pt:
        # нічия за відстанню -> ближча до u (справжня вершина, а не середина ребра)
        axis = sub(v, u)
        return min(S, key=lambda p: (orient2d(u, v, p), dot(p, axis)))

    def rec(u: Pt, v: Pt, S: List[Pt]) -> List[Pt]:
        # S: точки строго праворуч від u->v
        if not S:
            return []
        c = farthest(u, v, S)
        s1 = [p for p in S if orient2d(u, c, p) < 0]
        s2 = [p for p in S if orient2d(c, v, p) < 0]
        return rec(u, c, s1) + [c] + rec(c, v, s2)

    lower = [p for p in pts if orient2d(a, b, p) < 0]
    upper = [p for p in pts if orient2d(a, b, p) > 0]
    return _finish([a] + rec(a, b, lower) + [b] + rec(b, a, upper))


def gift_wrapping_hull(points: Iterable[PointLike]) -> Polygon:
    """Jarvis march, O(nh)."""
    pts = unique_points(points)
    if len(pts) <= 1:
        return _finish(pts)
    start = min(pts)
    out = [start]
    cur = start
    while True:
        q = pts[0] if pts[0] != cur else pts[1]
        for r in pts:
            if r == cur:
                continue
            o = orient2d(cur, q, r)
            if o < 0 or (o == 0 and distance2(cur, r) > distance2(cur, q)):
                q = r
        if q == start:
            break
        out.append(q)
        cur = q
    return _finish(out)


def brute_force_hull(points: Iterable[PointLike]) -> Polygon:
    """
    Перебір крайніх ребер: p->q — ребро оболонки, якщо жодна точка не лежить
    строго праворуч, а колінеарні лежать на [p, q]. O(n³), лише як оракул для тестів.
    """
    pts = unique_points(points)
    if len(pts) <= 1:
        return _finish(pts)

    succ: Dict[Pt, Pt] = {}
    for p in pts:
        for q in pts:
            if p == q:
                continue
            if all(orient2d(p, q, r) > 0 or between(p, q, r) for r in pts):
                succ[p] = q

    start = min(pts)
    out = [start]
    cur = succ[start]
    while cur != start:
        out.append(cur)
        cur = succ[cur]
    return _finish(out)


HULL_ALGORITHMS: Dict[str, HullAlgorithm] = {
    "monotone_chain": monotone_chain_hull,
    "graham_scan": graham_scan_hull,
    "divide_and_conquer": divide_and_conquer_hull,
    "quickhull": quickhull,
    "gift_wrapping": gift_wrapping_hull,
    "brute_force": brute_force_hull,
}


def hull(points: Iterable[PointLike], algorithm: Optional[str] = None) -> Polygon:
    """
    Опукла оболонка як замкнений CCW Polygon.
    0/1/2 різні точки (або всі колінеарні) -> вироджена «оболонка» з 0/1/2 вершин.
    """
    name = algorithm or settings.hull_algorithm
    try:
        fn = HULL_ALGORITHMS[name]
    except KeyError:
        raise ValueError(f"unknown hull algorithm {name!r}") from None
    pts = list(points)
    result = fn(pts)
    logger.debug("convex hull built", algorithm=name, points=len(pts), vertices=result.size())
    return result
