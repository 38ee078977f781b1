from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Iterable, Iterator, List

from .geom import Pt, InvalidGeometry, PointLike, add, as_point, cross, dot, sub
from .predicates import Orientation, orient2d
from .segment import Segment


class Location(Enum):
    INSIDE = "inside"
    BOUNDARY = "boundary"
    OUTSIDE = "outside"


def _folds_back(prev: Pt, mid: Pt, nxt: Pt) -> bool:
    """Ребра prev->mid і mid->nxt колінеарні й накладаються (розворот на 180°)."""
    return orient2d(prev, mid, nxt) == 0 and dot(sub(prev, mid), sub(nxt, mid)) > 0


class Polygon:
    """
    Полігон як впорядкована послідовність вершин (порядок додавання = порядок обходу)
    плюс прапорець замкненості.

    Відкритий полігон — лише ламана: алгоритми, яким потрібна межа, його відкидають.
    close() перевіряє простоту (жодні несуміжні ребра не перетинаються) і ненульову площу.
    Орієнтація зберігається такою, як її задали (CW або CCW).
    """

    def __init__(self, points: Iterable[PointLike] = ()):
        self._v: List[Pt] = []
        self._closed = False
        for p in points:
            self.add_vertex(p)

    @classmethod
    def from_points(cls, points: Iterable[PointLike], close: bool = True) -> "Polygon":
        poly = cls(points)
        if close:
            poly.close()
        return poly

    @classmethod
    def _trusted(cls, vertices: Iterable[Pt]) -> "Polygon":
        """Замкнений полігон без валідації — для результатів алгоритмів (0/1/2-вершинні оболонки тощо)."""
        poly = cls.__new__(cls)
        poly._v = list(vertices)
        poly._closed = True
        return poly

    # ---------------- побудова ----------------
    def add_vertex(self, p: PointLike) -> None:
        if self._closed:
            raise InvalidGeometry("polygon is already closed")
        p = as_point(p)
        if self._v and p == self._v[-1]:
            raise InvalidGeometry(f"repeated vertex {p!r}")
        if len(self._v) >= 2:
            a, b = self._v[-2], self._v[-1]
            if orient2d(a, b, p) == 0:
                if dot(sub(b, a), sub(p, b)) < 0:
                    raise InvalidGeometry(f"vertex {p!r} folds back onto the last edge")
                # колінеарне продовження останнього ребра: зсуваємо кінець
                self._v[-1] = p
                return
        self._v.append(p)

    def close(self) -> None:
        if self._closed:
            raise InvalidGeometry("polygon is already closed")
        n = len(self._v)
        if n < 3:
            raise InvalidGeometry(f"polygon needs at least 3 vertices, has {n}")
        v = self._v
        if all(orient2d(v[0], v[1], q) == 0 for q in v[2:]):
            raise InvalidGeometry("polygon has zero area (all vertices collinear)")

        # суміжні ребра: лише розворот назад; несуміжні: жодного перетину
        for i in range(n):
            if _folds_back(v[i - 1], v[i], v[(i + 1) % n]):
                raise InvalidGeometry(f"edges at vertex {v[i]!r} overlap")
        edges = [Segment(v[i], v[(i + 1) % n]) for i in range(n)]
        for i in range(n):
            for j in range(i + 2, n):
                if i == 0 and j == n - 1:
                    continue
                if edges[i].intersects_with(edges[j]):
                    raise InvalidGeometry(f"closing causes an intersection between {edges[i]!r} and {edges[j]!r}")
        self._closed = True

    # ---------------- доступ ----------------
    def is_closed(self) -> bool:
        return self._closed

    def size(self) -> int:
        return len(self._v)

    def __len__(self) -> int:
        return len(self._v)

    def __iter__(self) -> Iterator[Pt]:
        return iter(self._v)

    def __getitem__(self, i: int) -> Pt:
        return self._v[i]

    @property
    def vertices(self) -> tuple[Pt, ...]:
        return tuple(self._v)

    @property
    def first_vertex(self) -> Pt:
        if not self._v:
            raise InvalidGeometry("polygon has no vertices")
        return self._v[0]

    @property
    def last_vertex(self) -> Pt:
        if not self._v:
            raise InvalidGeometry("polygon has no vertices")
        return self._v[-1]

    def next_vertex(self, i: int) -> Pt:
        return self._v[(i + 1) % len(self._v)]

    def prev_vertex(self, i: int) -> Pt:
        return self._v[(i - 1) % len(self._v)]

    def segments(self) -> List[Segment]:
        """n-1 ребер для відкритого полігона, n — для замкненого."""
        v = self._v
        out = [Segment(v[i], v[i + 1]) for i in range(len(v) - 1)]
        if self._closed and len(v) >= 2:
            out.append(Segment(v[-1], v[0]))
        return out

    def contains_vertex(self, p: PointLike) -> bool:
        return as_point(p) in self._v

    def lowest(self) -> Pt:
        return min(self._nonempty(), key=lambda p: (p.y, p.x))

    def highest(self) -> Pt:
        return max(self._nonempty(), key=lambda p: (p.y, p.x))

    def leftmost(self) -> Pt:
        return min(self._nonempty())

    def rightmost(self) -> Pt:
        return max(self._nonempty())

    def _nonempty(self) -> List[Pt]:
        if not self._v:
            raise InvalidGeometry("polygon has no vertices")
        return self._v

    # ---------------- міри ----------------
    def signed_area2(self) -> Fraction:
        """Подвоєна орієнтована площа (шнурування). >0 — CCW."""
        v = self._v
        n = len(v)
        return sum((cross(v[i], v[(i + 1) % n]) for i in range(n)), Fraction(0))

    def area(self) -> Fraction:
        return abs(self.signed_area2()) / 2

    def orientation(self) -> Orientation:
        a2 = self.signed_area2()
        return Orientation((a2 > 0) - (a2 < 0))

    def reversed(self) -> "Polygon":
        poly = Polygon.__new__(Polygon)
        poly._v = self._v[::-1]
        poly._closed = self._closed
        return poly

    # ---------------- запити ----------------
    def intersects_with(self, s: Segment) -> bool:
        return any(side.intersects_with(s) for side in self.segments())

    def locate(self, p: PointLike) -> Location:
        """Точне розташування точки через число обертів (winding number)."""
        if not self._closed:
            raise InvalidGeometry("polygon is not closed")
        p = as_point(p)
        sides = self.segments()
        if p in self._v or any(s.contains(p) for s in sides):
            return Location.BOUNDARY
        if len(self._v) < 3:
            return Location.OUTSIDE
        wn = 0
        for s in sides:
            a, b = s.src, s.tgt
            if a.y <= p.y:
                if b.y > p.y and orient2d(a, b, p) > 0:
                    wn += 1
            elif b.y <= p.y and orient2d(a, b, p) < 0:
                wn -= 1
        return Location.INSIDE if wn != 0 else Location.OUTSIDE

    def contains(self, p: PointLike) -> bool:
        return self.locate(p) is not Location.OUTSIDE

    def strictly_contains(self, p: PointLike) -> bool:
        return self.locate(p) is Location.INSIDE

    # ----------------
    def __eq__(self, other) -> bool:
        if not isinstance(other, Polygon):
            return NotImplemented
        return self._closed == other._closed and self._v == other._v

    __hash__ = None

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"Polygon({self._v!r}, {state})"


@dataclass(frozen=True)
class RegularPolygon:
    """
    Правильний n-кутник, заданий центром, довжиною сторони й кутом повороту.
    Вершина 0 — center + (0, -r), повернута на angle; далі проти годинникової стрілки
    з кроком 2π/n. Координати вершин рахуються у float (sin/cos), тож вони наближені.
    """
    center: Pt
    side_size: float
    n: int
    angle: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "center", as_point(self.center))
        if self.n < 3:
            raise InvalidGeometry(f"regular polygon needs at least 3 sides, got {self.n}")
        if not self.side_size > 0:
            raise InvalidGeometry(f"side size must be positive, got {self.side_size!r}")

    @property
    def beta(self) -> float:
        """Центральний кут між сусідніми вершинами."""
        return 2 * math.pi / self.n

    @property
    def radius(self) -> float:
        beta = self.beta
        return self.side_size * math.sin((math.pi - beta) / 2) / math.sin(beta)

    def size(self) -> int:
        return self.n

    def is_closed(self) -> bool:
        return True

    def vertex(self, i: int) -> Pt:
        if not 0 <= i < self.n:
            raise IndexError(f"vertex {i} out of range for {self.n} vertices")
        phi = i * self.beta + self.angle
        r = self.radius
        cx, cy = self.center.to_float()
        # поворот (0, -r) на phi
        return Pt(cx + r * math.sin(phi), cy - r * math.cos(phi))

    def __iter__(self) -> Iterator[Pt]:
        return (self.vertex(i) for i in range(self.n))

    @property
    def vertices(self) -> tuple[Pt, ...]:
        return tuple(self)

    def segments(self) -> List[Segment]:
        v = self.vertices
        return [Segment(v[i], v[(i + 1) % self.n]) for i in range(self.n)]

    # крайні точки описаного кола
    def lowest(self) -> Pt:
        return add(self.center, Pt(0, -self.radius))

    def highest(self) -> Pt:
        return add(self.center, Pt(0, self.radius))

    def leftmost(self) -> Pt:
        return add(self.center, Pt(-self.radius, 0))

    def rightmost(self) -> Pt:
        return add(self.center, Pt(self.radius, 0))

    def to_polygon(self) -> Polygon:
        return Polygon.from_points(self.vertices)
