# examples/main.py
from __future__ import annotations

import numpy as np

from cg2d.log import configure_logging
from cg2d.pipeline import build_diagram
from cg2d.polygon import Polygon


def main():
    configure_logging()

    # --- 1) Вхідні дані ---
    # Можна змінити на читання з файлу
    rng = np.random.default_rng(7)
    points = [tuple(p) for p in rng.integers(0, 100, size=(40, 2)).tolist()]
    box = Polygon.from_points([(-10, -10), (110, -10), (110, 110), (-10, 110)])

    # --- 2) Пайплайн: оболонка + Делоне + Вороний + відсікання ---
    d = build_diagram(points, clip=box)

    print(f"Точок:            {len(d.points)}")
    print(f"Вершин оболонки:  {d.hull.size()}")
    print(f"Трикутників:      {len(d.delaunay.triangles)}")
    print(f"Ребер Вороного:   {len(d.voronoi.edges)} (променів: {len(d.voronoi.rays)})")

    # --- 3) Площі комірок у сумі дають площу кліпу ---
    total = sum(c.polygon.area() for c in d.cells)
    print(f"Сума площ комірок: {float(total)} / {float(box.area())}")

    # --- 4) numpy-масиви для зовнішніх інструментів ---
    sites, tris = d.delaunay.as_arrays()
    print("sites:", sites.shape, "triangles:", tris.shape)


if __name__ == "__main__":
    main()
