from cg2d.calipers import diameter, minimum_width
from cg2d.closest import closest_pair
from cg2d.hull import HULL_ALGORITHMS
from cg2d.log import configure_logging

if __name__ == "__main__":
    configure_logging("DEBUG")
    raw = [
        (0, 0), (4, 0), (4, 4), (0, 4),
        (2, 2), (1, 3), (3, 1), (2, 0), (0.5, 0.5),
    ]
    poly = None
    for name, fn in HULL_ALGORITHMS.items():
        poly = fn(raw)
        print(f"{name:20s}", list(poly))

    d = diameter(poly)
    w = minimum_width(poly)
    cp = closest_pair(raw)
    print("diameter:", d.first, d.second, f"{d.distance:.4f}")
    print("width:   ", f"{w.width:.4f}", "edge", w.edge)
    print("closest: ", cp.first, cp.second, f"{cp.distance:.4f}")
