# cg2d/mesh.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .geom import Pt
from .predicates import orient2d

GHOST = -1  # символічна вершина «на нескінченності»

Edge = Tuple[int, int]  # орієнтоване ребро (u, v)


@dataclass
class Tri:
    """
    Трикутник сітки.
    v: вершини у CCW-порядку. Ghost-трикутник зберігається як (a, b, GHOST):
       a->b — ребро оболонки, зовнішня область ліворуч від a->b.
    alive: чи трикутник активний.
    """
    v: Tuple[int, int, int]
    alive: bool = True

    def edge(self, i: int) -> Edge:
        a, b, c = self.v
        if i == 0:
            return (a, b)
        if i == 1:
            return (b, c)
        return (c, a)

    def is_ghost(self) -> bool:
        return self.v[2] == GHOST


class TriMesh:
    """
    Мінімальна структура 2D трикутної сітки з ghost-трикутниками:
      - points: таблиця вершин
      - tris: масив Tri (мертві лишаються, щоб не ламати індекси)
      - edgemap: орієнтоване ребро -> tri_id; сусід через (u, v) — власник (v, u)
    Ghost-трикутники замикають поверхню: кожне живе ребро має двійника.
    """
    def __init__(self, points: Sequence[Pt]):
        self.points: List[Pt] = list(points)
        self.tris: List[Tri] = []
        self.edgemap: Dict[Edge, int] = {}

    def add_tri(self, v0: int, v1: int, v2: int) -> int:
        # ghost-вершину завжди ставимо останньою (циклічний зсув зберігає орієнтацію)
        if v0 == GHOST:
            v0, v1, v2 = v1, v2, v0
        elif v1 == GHOST:
            v0, v1, v2 = v2, v0, v1
        tid = len(self.tris)
        t = Tri((v0, v1, v2))
        edges = [t.edge(i) for i in range(3)]
        for e in edges:
            if e in self.edgemap:
                raise RuntimeError(f"edge {e} already owned by triangle {self.edgemap[e]}")
        self.tris.append(t)
        for e in edges:
            self.edgemap[e] = tid
        return tid

    def remove_tri(self, tid: int) -> None:
        """Позначити трикутник мертвим і прибрати його ребра з edgemap."""
        t = self.tris[tid]
        if not t.alive:
            return
        t.alive = False
        for i in range(3):
            e = t.edge(i)
            if self.edgemap.get(e) == tid:
                del self.edgemap[e]

    def neighbor(self, tid: int, i: int) -> Optional[int]:
        u, v = self.tris[tid].edge(i)
        return self.edgemap.get((v, u))

    # ---------- корисні операції ----------
    def alive(self) -> List[int]:
        return [tid for tid, t in enumerate(self.tris) if t.alive]

    def solid_triangles(self) -> List[Tuple[int, int, int]]:
        return [t.v for t in self.tris if t.alive and not t.is_ghost()]

    def hull_edges(self) -> List[Edge]:
        """Ребра оболонки з внутрішністю ліворуч (тобто двійники ghost-ребер)."""
        return [(t.v[1], t.v[0]) for t in self.tris if t.alive and t.is_ghost()]

    # ---------- валідація сітки ----------
    def validate(self) -> dict:
        """
        Швидка перевірка коректності:
          - кожен живий solid-трикутник має додатну орієнтацію;
          - кожне живе ребро зареєстроване за своїм трикутником і має двійника;
          - ghost-ребра утворюють один замкнений цикл оболонки.
        Повертає словник з діагностикою (порожні списки = все ок).
        """
        bad_orientation: List[int] = []
        bad_edges: List[Tuple[Edge, str]] = []

        alive_ids = self.alive()
        for tid in alive_ids:
            t = self.tris[tid]
            if not t.is_ghost():
                a, b, c = (self.points[i] for i in t.v)
                if orient2d(a, b, c) <= 0:
                    bad_orientation.append(tid)
            for i in range(3):
                u, v = t.edge(i)
                if self.edgemap.get((u, v)) != tid:
                    bad_edges.append(((u, v), "not_registered"))
                if (v, u) not in self.edgemap:
                    bad_edges.append(((u, v), "no_twin"))

        succ: Dict[int, int] = {}
        for a, b in self.hull_edges():
            succ[a] = b
        hull_cycle_ok = True
        if succ:
            start = next(iter(succ))
            cur, steps = succ[start], 1
            while cur != start and cur in succ and steps <= len(succ):
                cur, steps = succ[cur], steps + 1
            hull_cycle_ok = cur == start and steps == len(succ)

        return {
            "triangles": sum(1 for tid in alive_ids if not self.tris[tid].is_ghost()),
            "ghosts": sum(1 for tid in alive_ids if self.tris[tid].is_ghost()),
            "bad_orientation": bad_orientation,
            "bad_edges": bad_edges,
            "hull_cycle_ok": hull_cycle_ok,
        }
