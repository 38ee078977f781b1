from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .clip import HalfPlane, ccw, clip_to_halfplanes, is_convex
from .delaunay import DelaunayResult, triangulate
from .geom import Pt, InvalidGeometry, PointLike
from .log import get_logger
from .mesh import Edge
from .polygon import Polygon
from .predicates import circumcenter

logger = get_logger(__name__)


@dataclass(frozen=True)
class VoronoiEdge:
    """
    Двоїсте ребро Делоне-ребра (site_u, site_v), site_u < site_v.
    Обмежене: src/tgt — центри описаних кіл двох суміжних трикутників.
    Промінь: src — центр кола єдиного трикутника, direction — зовнішня нормаль ребра оболонки.
    """
    site_u: int
    site_v: int
    src: Pt
    tgt: Optional[Pt]
    direction: Optional[Pt]
    unbounded: bool
    vertex_u: int
    vertex_v: Optional[int]


@dataclass(frozen=True)
class VoronoiCell:
    site_index: int
    site: Pt
    vertex_indices: Tuple[int, ...]   # CCW навколо сайту
    vertices: Tuple[Pt, ...]
    edge_indices: Tuple[int, ...]
    bounded: bool


@dataclass(frozen=True)
class VoronoiResult:
    sites: Tuple[Pt, ...]
    vertices: Tuple[Pt, ...]          # i-та вершина: центр кола i-го трикутника
    edges: Tuple[VoronoiEdge, ...]
    cells: Tuple[VoronoiCell, ...]
    delaunay: DelaunayResult

    @property
    def bounded_edges(self) -> List[VoronoiEdge]:
        return [e for e in self.edges if not e.unbounded]

    @property
    def rays(self) -> List[VoronoiEdge]:
        return [e for e in self.edges if e.unbounded]


@dataclass(frozen=True)
class ClippedCell:
    site_index: int
    site: Pt
    polygon: Polygon


def _fan(owner: Dict[Edge, int], tris: List[Tuple[int, int, int]], s: int,
         start: int) -> Tuple[List[int], bool]:
    """
    Обхід трикутників навколо s проти годинникової стрілки від start.
    Повертає (трикутники, чи віяло замкнене).
    """
    out: List[int] = []
    t = start
    while True:
        out.append(t)
        a, b, c = tris[t]
        b_next = {a: c, b: a, c: b}[s]  # трикутник (s, x, b_next) у CCW-порядку
        t = owner.get((s, b_next))
        if t is None:
            return out, False
        if t == start:
            return out, True


def _other(tri: Tuple[int, int, int], s: int) -> Tuple[int, int]:
    a, b, c = tri
    if s == a:
        return b, c
    if s == b:
        return c, a
    return a, b


def voronoi(source: Union[DelaunayResult, Iterable[PointLike]]) -> VoronoiResult:
    """
    Діаграма Вороного як двоїстий граф триангуляції Делоне.
    Приймає або готовий DelaunayResult, або точки (тоді тріангулює сама).
    """
    dt = source if isinstance(source, DelaunayResult) else triangulate(source)
    tris = [tuple(t) for t in dt.triangles]

    owner: Dict[Edge, int] = {}
    for tid, (a, b, c) in enumerate(tris):
        owner[(a, b)] = tid; owner[(b, c)] = tid; owner[(c, a)] = tid

    vertices = tuple(circumcenter(*dt.points(t)) for t in dt.triangles)

    # ---- ребра ----
    edges: List[VoronoiEdge] = []
    edge_index: Dict[Edge, int] = {}
    for u, v in dt.edges():
        left, right = owner.get((u, v)), owner.get((v, u))
        if left is not None and right is not None:
            e = VoronoiEdge(u, v, vertices[left], vertices[right], None, False, left, right)
        else:
            # ребро оболонки: a->b з внутрішністю ліворуч, назовні праворуч
            a, b, tid = (u, v, left) if left is not None else (v, u, right)
            d = Pt(dt.sites[b].y - dt.sites[a].y, dt.sites[a].x - dt.sites[b].x)
            e = VoronoiEdge(u, v, vertices[tid], None, d, True, tid, None)
        edge_index[(u, v)] = len(edges)
        edges.append(e)

    def eidx(p: int, q: int) -> int:
        return edge_index[(min(p, q), max(p, q))]

    # ---- комірки ----
    incident: Dict[int, List[int]] = {}
    for tid, tri in enumerate(tris):
        for s in tri:
            incident.setdefault(s, []).append(tid)

    cells: List[VoronoiCell] = []
    for s, site in enumerate(dt.sites):
        around = incident.get(s, [])
        if not around:
            cells.append(VoronoiCell(s, site, (), (), (), False))
            continue
        # для сайту на оболонці стартуємо з трикутника після «дірки» віяла
        start = min(around)
        for tid in around:
            x, _ = _other(tris[tid], s)
            if (x, s) not in owner:
                start = tid
                break
        fan, closed = _fan(owner, tris, s, start)
        sides = [eidx(s, _other(tris[t], s)[0]) for t in fan]
        if not closed:
            sides.append(eidx(s, _other(tris[fan[-1]], s)[1]))
        bounded = closed and not any(edges[i].unbounded for i in sides)
        cells.append(VoronoiCell(
            site_index=s,
            site=site,
            vertex_indices=tuple(fan),
            vertices=tuple(vertices[t] for t in fan),
            edge_indices=tuple(sides),
            bounded=bounded,
        ))

    result = VoronoiResult(
        sites=dt.sites,
        vertices=vertices,
        edges=tuple(edges),
        cells=tuple(cells),
        delaunay=dt,
    )
    logger.debug("voronoi diagram built", sites=len(dt.sites), vertices=len(vertices),
                 edges=len(edges), rays=len(result.rays))
    return result


# ---------------- відсікання опуклою областю ----------------
def clipped_cells_indexed(result: VoronoiResult, clip: Polygon) -> List[ClippedCell]:
    """
    Комірка сайту = clip ∩ півплощини серединних перпендикулярів до сусідів по Делоне
    (до всіх інших сайтів, якщо трикутників немає). Сайт поза clip -> порожній полігон.
    """
    if not clip.is_closed():
        raise InvalidGeometry("clip polygon is not closed")
    if not is_convex(clip):
        raise InvalidGeometry("clip polygon is not convex")
    region = ccw(clip)
    dt = result.delaunay
    sites = result.sites
    adjacency = dt.adjacency() if dt.triangles else None

    out: List[ClippedCell] = []
    for i, site in enumerate(sites):
        if not region.contains(site):
            out.append(ClippedCell(i, site, Polygon._trusted([])))
            continue
        others = adjacency[i] if adjacency is not None else [j for j in range(len(sites)) if j != i]
        planes = [HalfPlane.bisector(site, sites[j]) for j in others]
        out.append(ClippedCell(i, site, clip_to_halfplanes(region, planes)))
    logger.debug("voronoi cells clipped", cells=len(out),
                 empty=sum(1 for c in out if c.polygon.size() == 0))
    return out


def clipped_cells(result: VoronoiResult, clip: Polygon) -> List[Polygon]:
    return [c.polygon for c in clipped_cells_indexed(result, clip)]
