from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from math import isfinite, sqrt
from numbers import Integral, Real
from typing import Any, Iterable, Sequence, Tuple, Union


class InvalidGeometry(ValueError):
    """Порушено передумову щодо форми: відкритий/самоперетинний полігон, неопуклий кліп, тощо."""


def to_number(v: Any) -> Fraction:
    """
    Точне число ядра — Fraction.
    float конвертується без округлення (двійкове значення як є), тож знаки
    предикатів ніколи не «пливуть». nan/inf і нечислові значення відкидаємо.
    """
    if isinstance(v, bool):
        raise InvalidGeometry(f"boolean is not a coordinate: {v!r}")
    if isinstance(v, Fraction):
        return v
    if isinstance(v, Integral):
        return Fraction(int(v))
    if isinstance(v, Real):
        f = float(v)
        if not isfinite(f):
            raise InvalidGeometry(f"non-finite coordinate: {v!r}")
        return Fraction(f)
    if isinstance(v, Decimal):
        if not v.is_finite():
            raise InvalidGeometry(f"non-finite coordinate: {v!r}")
        return Fraction(v)
    if isinstance(v, str):
        try:
            return Fraction(v.strip())
        except ValueError as e:
            raise InvalidGeometry(f"not a number: {v!r}") from e
    raise InvalidGeometry(f"unsupported coordinate type: {type(v).__name__}")


@dataclass(frozen=True, order=True)
class Pt:
    """Точка площини. Рівність — точна, порядок — лексикографічний (x, потім y)."""
    x: Fraction
    y: Fraction

    def __post_init__(self):
        object.__setattr__(self, "x", to_number(self.x))
        object.__setattr__(self, "y", to_number(self.y))

    def __iter__(self):
        yield self.x; yield self.y

    def __repr__(self) -> str:
        return f"Pt({_fmt(self.x)}, {_fmt(self.y)})"

    def to_float(self) -> Tuple[float, float]:
        return float(self.x), float(self.y)


PointLike = Union[Pt, Sequence[Any]]


def _fmt(v: Fraction) -> str:
    return str(v.numerator) if v.denominator == 1 else str(v)


def as_point(p: PointLike) -> Pt:
    if isinstance(p, Pt):
        return p
    try:
        x, y = p
    except (TypeError, ValueError) as e:
        raise InvalidGeometry(f"expected a 2D point, got {p!r}") from e
    return Pt(x, y)


def sub(a: Pt, b: Pt) -> Pt:
    return Pt(a.x - b.x, a.y - b.y)

def add(a: Pt, b: Pt) -> Pt:
    return Pt(a.x + b.x, a.y + b.y)

def scale(a: Pt, k) -> Pt:
    k = to_number(k)
    return Pt(a.x * k, a.y * k)

def dot(a: Pt, b: Pt) -> Fraction:
    return a.x*b.x + a.y*b.y

def cross(a: Pt, b: Pt) -> Fraction:
    """z-компонента векторного добутку (a.x, a.y, 0) x (b.x, b.y, 0)."""
    return a.x*b.y - a.y*b.x

def norm2(a: Pt) -> Fraction:
    return dot(a, a)

def distance2(a: Pt, b: Pt) -> Fraction:
    dx = a.x - b.x
    dy = a.y - b.y
    return dx*dx + dy*dy

def distance(a: Pt, b: Pt) -> float:
    # лише для звітності, у знакових тестах не використовується
    return sqrt(distance2(a, b))

def midpoint(a: Pt, b: Pt) -> Pt:
    return Pt((a.x + b.x) / 2, (a.y + b.y) / 2)

def centroid(points: Iterable[Pt]) -> Pt:
    xs = ys = Fraction(0)
    n = 0
    for p in points:
        xs += p.x; ys += p.y; n += 1
    if n == 0:
        raise InvalidGeometry("empty set")
    return Pt(xs / n, ys / n)

def unique_points(points: Iterable[PointLike]) -> list[Pt]:
    """
    Точна дедуплікація (без квантування — числа точні).
    Порядок перших входжень зберігається.
    """
    seen: dict[Pt, None] = {}
    for p in points:
        seen.setdefault(as_point(p), None)
    return list(seen)
