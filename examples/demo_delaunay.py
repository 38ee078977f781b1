# examples/demo_delaunay.py
from cg2d.delaunay import Delaunay2D

if __name__ == "__main__":
    grid = [(x, y) for x in range(4) for y in range(4)]

    dt = Delaunay2D(grid)
    result = dt.build()
    print("Sites:", len(result.sites))
    print("Triangles:", len(result.triangles))  # 2(m-1)^2 = 18
    print("Hull edges:", result.hull_edges())
    print("VALIDATION:", dt.mesh.validate())
