from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .delaunay import DelaunayResult, triangulate
from .geom import Pt, PointLike, unique_points
from .hull import hull
from .log import get_logger
from .polygon import Polygon
from .voronoi import ClippedCell, VoronoiResult, clipped_cells_indexed, voronoi

logger = get_logger(__name__)


@dataclass(frozen=True)
class Diagram:
    points: Tuple[Pt, ...]
    hull: Polygon
    delaunay: DelaunayResult
    voronoi: VoronoiResult
    cells: Optional[List[ClippedCell]]


def build_diagram(
    points: Iterable[PointLike],
    clip: Optional[Polygon] = None,
    hull_algorithm: Optional[str] = None,
) -> Diagram:
    """
    Повний пайплайн:
      - прибирає дублікати точок;
      - будує опуклу оболонку (алгоритм з налаштувань або hull_algorithm);
      - будує 2D Делоне і двоїсту діаграму Вороного;
      - якщо задано clip — відсікає комірки опуклим полігоном.
    """
    pts = unique_points(points)
    log = logger.bind(points=len(pts))

    shell = hull(pts, hull_algorithm)
    log.debug("hull stage done", hull_vertices=shell.size())

    dt = triangulate(pts)
    log.debug("delaunay stage done", triangles=len(dt.triangles))

    vd = voronoi(dt)
    log.debug("voronoi stage done", vertices=len(vd.vertices), edges=len(vd.edges))

    cells = clipped_cells_indexed(vd, clip) if clip is not None else None
    if cells is not None:
        log.debug("clip stage done", cells=len(cells))

    return Diagram(points=tuple(pts), hull=shell, delaunay=dt, voronoi=vd, cells=cells)
