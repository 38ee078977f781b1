# examples/demo_voronoi.py
from cg2d.polygon import Polygon
from cg2d.voronoi import clipped_cells_indexed, voronoi

if __name__ == "__main__":
    sites = [(1, 1), (5, 1), (3, 4), (3, 2), (6, 5)]
    vd = voronoi(sites)

    print("Vertices:", len(vd.vertices))
    print("Bounded edges:", len(vd.bounded_edges))
    print("Rays:", len(vd.rays))
    for cell in vd.cells:
        print(f"  site {cell.site!r}: {len(cell.vertices)} vertices, bounded={cell.bounded}")

    box = Polygon.from_points([(0, 0), (7, 0), (7, 6), (0, 6)])
    for c in clipped_cells_indexed(vd, box):
        print(f"  clipped {c.site!r}: area={float(c.polygon.area()):.3f}")
