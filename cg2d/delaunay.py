from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

import numpy as np

from .geom import Pt, PointLike, unique_points
from .log import get_logger
from .mesh import GHOST, Edge, TriMesh
from .predicates import incircle, orient2d, strictly_between

logger = get_logger(__name__)


@dataclass(frozen=True, order=True)
class Triangle:
    """Індекси вершин у sites, CCW, найменший індекс першим."""
    i: int
    j: int
    k: int

    def __iter__(self):
        yield self.i; yield self.j; yield self.k

    def edges(self) -> Tuple[Edge, Edge, Edge]:
        return (self.i, self.j), (self.j, self.k), (self.k, self.i)

    @classmethod
    def canonical(cls, a: int, b: int, c: int) -> "Triangle":
        # циклічний зсув зберігає орієнтацію
        if b < a and b < c:
            a, b, c = b, c, a
        elif c < a and c < b:
            a, b, c = c, a, b
        return cls(a, b, c)


@dataclass(frozen=True)
class DelaunayResult:
    """
    sites — унікальні точки у канонічному (лексикографічному) порядку;
    triangles — відсортовані CCW-трійки індексів у sites.
    """
    sites: Tuple[Pt, ...]
    triangles: Tuple[Triangle, ...]

    def points(self, t: Triangle) -> Tuple[Pt, Pt, Pt]:
        return self.sites[t.i], self.sites[t.j], self.sites[t.k]

    def edges(self) -> List[Edge]:
        """Унікальні неорієнтовані ребра (min, max), відсортовані."""
        out: Set[Edge] = set()
        for t in self.triangles:
            for u, v in t.edges():
                out.add((min(u, v), max(u, v)))
        return sorted(out)

    def hull_edges(self) -> List[Edge]:
        """Орієнтовані ребра оболонки (внутрішність ліворуч): ребра без двійника."""
        directed = {e for t in self.triangles for e in t.edges()}
        return sorted((u, v) for u, v in directed if (v, u) not in directed)

    def adjacency(self) -> Dict[int, List[int]]:
        """Сусіди кожного сайту за один прохід по ребрах (списки відсортовані)."""
        out: Dict[int, List[int]] = {i: [] for i in range(len(self.sites))}
        for u, v in self.edges():
            out[u].append(v); out[v].append(u)
        for nbs in out.values():
            nbs.sort()
        return out

    def neighbors(self, i: int) -> List[int]:
        out: Set[int] = set()
        for t in self.triangles:
            if i in (t.i, t.j, t.k):
                out.update((t.i, t.j, t.k))
        out.discard(i)
        return sorted(out)

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """(sites float64 (n,2), triangles int64 (m,3)) для numpy-споживачів."""
        sites = np.array([p.to_float() for p in self.sites], dtype=np.float64).reshape(-1, 2)
        tris = np.array([tuple(t) for t in self.triangles], dtype=np.int64).reshape(-1, 3)
        return sites, tris


class Delaunay2D:
    """
    Інкрементальна 2D Делоне (Bowyer–Watson) з порожнім колом, точна арифметика.

    Замість супер-трикутника — ghost-трикутники на ребрах оболонки: точка конфліктує
    з ghost (a, b, ∞), якщо лежить строго зовні ребра a->b або на його відкритому відрізку.

    Сайти вставляються у лексикографічному порядку, тож результат залежить лише від
    множини точок, а не від порядку входу (це і є правило розв'язання співколових нічиїх).
    Стани: Init -> Inserting -> Finalized; build() викликається один раз.
    """
    def __init__(self, points: Iterable[PointLike] = ()):
        self._pending: List[Pt] = unique_points(points)
        self.sites: List[Pt] = []
        self.mesh = TriMesh(self.sites)
        self.state = "init"
        self._last_fan: List[int] = []  # трикутники навколо останнього вставленого сайту

    def insert(self, p: PointLike) -> None:
        """Додати сайт до побудови. Порядок додавання на результат не впливає."""
        if self.state != "init":
            raise RuntimeError("cannot insert into a finalized triangulation")
        self._pending.extend(unique_points([p]))

    # ---- предикат конфлікту ----
    def _conflicts(self, tid: int, p_idx: int) -> bool:
        a, b, c = self.mesh.tris[tid].v
        P = self.sites
        p = P[p_idx]
        if c == GHOST:
            o = orient2d(P[a], P[b], p)
            return o > 0 or (o == 0 and strictly_between(P[a], P[b], p))
        return incircle(P[a], P[b], P[c], p) > 0

    # ---- стартовий стан: колінеарний ланцюжок + перша точка поза ним ----
    def _init_fan(self, k: int) -> None:
        """
        Сайти 0..k-1 колінеарні, k — ні. Єдина тріангуляція тут — віяло з k,
        тож будуємо його напряму, а на ребрах оболонки ставимо ghost-трикутники.
        """
        mesh = self.mesh
        P = self.sites
        ccw = orient2d(P[0], P[1], P[k]) > 0
        fan = [mesh.add_tri(i, i + 1, k) if ccw else mesh.add_tri(i + 1, i, k)
               for i in range(k - 1)]
        hull = [e for tid in fan for e in (mesh.tris[tid].edge(i) for i in range(3))
                if e[::-1] not in mesh.edgemap]
        fan += [mesh.add_tri(v, u, GHOST) for u, v in hull]
        self._last_fan = fan

    def _find_seed(self, p_idx: int) -> int:
        # при лексикографічній вставці нова точка завжди бачить ребро при попередньому сайті
        for tid in self._last_fan:
            if self.mesh.tris[tid].alive and self._conflicts(tid, p_idx):
                return tid
        for tid in self.mesh.alive():
            if self._conflicts(tid, p_idx):
                logger.debug("seed found by full scan", site=p_idx)
                return tid
        raise RuntimeError(f"site {p_idx} conflicts with no triangle")

    # ---- вставка однієї точки ----
    def _insert(self, p_idx: int) -> None:
        mesh = self.mesh
        seed = self._find_seed(p_idx)

        # 1) cavity: усі трикутники, чиє коло (або ghost-півплощина) містить p
        memo: Dict[int, bool] = {seed: True}
        cavity: Set[int] = set()
        order: List[int] = []
        stack = [seed]
        while stack:
            cur = stack.pop()
            if cur in cavity:
                continue
            cavity.add(cur)
            order.append(cur)
            for i in range(3):
                nb = mesh.neighbor(cur, i)
                if nb is None or nb in cavity:
                    continue
                if nb not in memo:
                    memo[nb] = self._conflicts(nb, p_idx)
                if memo[nb]:
                    stack.append(nb)

        # 2) межа cavity: ребра, з іншого боку яких трикутник лишається
        boundary: List[Edge] = []
        for ct in order:
            t = mesh.tris[ct]
            for i in range(3):
                u, v = t.edge(i)
                if mesh.edgemap.get((v, u)) not in cavity:
                    boundary.append((u, v))

        # 3) знести cavity
        for ct in order:
            mesh.remove_tri(ct)

        # 4) віяло з p до кожного ребра межі
        self._last_fan = [mesh.add_tri(u, v, p_idx) for u, v in boundary]

    def build(self) -> DelaunayResult:
        if self.state != "init":
            raise RuntimeError("triangulation is already built")
        self.state = "inserting"
        self.sites = sorted(unique_points(self._pending))
        self.mesh = TriMesh(self.sites)
        P = self.sites
        n = len(P)

        k: Optional[int] = None
        for idx in range(2, n):
            if orient2d(P[0], P[1], P[idx]) != 0:
                k = idx
                break

        if k is not None:
            self._init_fan(k)
            for p_idx in range(k + 1, n):
                self._insert(p_idx)

        self.state = "finalized"
        result = self.result()
        logger.debug("delaunay triangulation built", sites=n, triangles=len(result.triangles))
        return result

    def result(self) -> DelaunayResult:
        if self.state != "finalized":
            raise RuntimeError("triangulation is not finalized")
        tris = sorted(Triangle.canonical(*v) for v in self.mesh.solid_triangles())
        return DelaunayResult(sites=tuple(self.sites), triangles=tuple(tris))


def triangulate(points: Iterable[PointLike]) -> DelaunayResult:
    """
    Триангуляція Делоне множини точок.
    <3 різних точок або всі колінеарні -> порожній список трикутників (не помилка).
    """
    return Delaunay2D(points).build()
