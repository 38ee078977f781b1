"""
cg2d — мінімальна бібліотека для 2D обчислювальної геометрії з точною арифметикою.
Зараз: предикати, відрізки й полігони, опукла оболонка (шість алгоритмів),
Делоне (Bowyer–Watson з ghost-трикутниками) і двоїста діаграма Вороного з відсіканням.
Плюс найближча пара точок, діаметр і ширина опуклого полігона, перетин півплощин.
"""

__version__ = "0.1.0"

from cg2d.geom import Pt, InvalidGeometry, as_point, centroid, unique_points
from cg2d.predicates import (
    Orientation, CircleSide, orient2d, orientation, incircle, in_circumcircle, circumcenter,
)
from cg2d.segment import Segment, Sense
from cg2d.polygon import Polygon, Location, RegularPolygon
from cg2d.hull import HULL_ALGORITHMS, hull
from cg2d.clip import HalfPlane, is_convex, convex_polygon_intersection, halfplane_intersection
from cg2d.closest import ClosestPair, closest_pair, closest_segment
from cg2d.calipers import Diameter, Width, diameter, minimum_width
from cg2d.earcut import ear_cut
from cg2d.delaunay import Delaunay2D, DelaunayResult, Triangle, triangulate
from cg2d.voronoi import (
    VoronoiEdge, VoronoiCell, VoronoiResult, ClippedCell, voronoi, clipped_cells, clipped_cells_indexed,
)
from cg2d.pipeline import Diagram, build_diagram

__all__ = [
    "Pt", "InvalidGeometry", "as_point", "centroid", "unique_points",
    "Orientation", "CircleSide", "orient2d", "orientation", "incircle", "in_circumcircle", "circumcenter",
    "Segment", "Sense", "Polygon", "Location", "RegularPolygon",
    "HULL_ALGORITHMS", "hull",
    "HalfPlane", "is_convex", "convex_polygon_intersection", "halfplane_intersection", "ear_cut",
    "ClosestPair", "closest_pair", "closest_segment", "Diameter", "Width", "diameter", "minimum_width",
    "Delaunay2D", "DelaunayResult", "Triangle", "triangulate",
    "VoronoiEdge", "VoronoiCell", "VoronoiResult", "ClippedCell",
    "voronoi", "clipped_cells", "clipped_cells_indexed",
    "Diagram", "build_diagram", "__version__",
]
