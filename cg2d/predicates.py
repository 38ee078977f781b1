# cg2d/predicates.py
from __future__ import annotations
from enum import Enum
from fractions import Fraction
from math import sqrt

from .geom import Pt, InvalidGeometry, distance2


class Orientation(Enum):
    CLOCKWISE = -1
    COLLINEAR = 0
    COUNTER_CLOCKWISE = 1


class CircleSide(Enum):
    INSIDE = 1
    ON_BOUNDARY = 0
    OUTSIDE = -1


def _sign(v: Fraction) -> int:
    return (v > 0) - (v < 0)


def orient2d(a: Pt, b: Pt, c: Pt) -> Fraction:
    """Подвоєна орієнтована площа (b-a) x (c-a). Точна — лише +, -, *."""
    return (b.x - a.x)*(c.y - a.y) - (b.y - a.y)*(c.x - a.x)

def orientation(a: Pt, b: Pt, c: Pt) -> Orientation:
    return Orientation(_sign(orient2d(a, b, c)))

def is_left(a: Pt, b: Pt, p: Pt) -> bool:
    return orient2d(a, b, p) > 0

def is_left_on(a: Pt, b: Pt, p: Pt) -> bool:
    return orient2d(a, b, p) >= 0

def collinear(a: Pt, b: Pt, c: Pt) -> bool:
    return orient2d(a, b, c) == 0

def between(a: Pt, b: Pt, p: Pt) -> bool:
    """p колінеарна з a,b і лежить на замкненому відрізку [a, b]."""
    if orient2d(a, b, p) != 0:
        return False
    if a.x != b.x:
        return min(a.x, b.x) <= p.x <= max(a.x, b.x)
    return min(a.y, b.y) <= p.y <= max(a.y, b.y)

def strictly_between(a: Pt, b: Pt, p: Pt) -> bool:
    return p != a and p != b and between(a, b, p)


# ---------- тест кола ----------
def incircle(a: Pt, b: Pt, c: Pt, d: Pt) -> Fraction:
    """
    Знак тесту «чи лежить d всередині кола через a, b, c?».
    Детермінант 3x3 піднятих (lifted) координат відносно d:
      | ax-dx  ay-dy  (ax-dx)^2+(ay-dy)^2 |
      | bx-dx  by-dy  ...                 |
      | cx-dx  cy-dy  ...                 |
    Повертає:
      >0  якщо d всередині кола,
      <0  якщо зовні,
       0  якщо на колі.
    Знак нормалізовано орієнтацією (a, b, c), тож порядок обходу не важливий.
    Для колінеарних a, b, c — InvalidGeometry (кола не існує).
    """
    ori = _sign(orient2d(a, b, c))
    if ori == 0:
        raise InvalidGeometry("circumcircle of collinear points is undefined")
    return ori * _lifted_det(a, b, c, d)

def _lifted_det(a: Pt, b: Pt, c: Pt, d: Pt) -> Fraction:
    adx, ady = a.x - d.x, a.y - d.y
    bdx, bdy = b.x - d.x, b.y - d.y
    cdx, cdy = c.x - d.x, c.y - d.y
    alift = adx*adx + ady*ady
    blift = bdx*bdx + bdy*bdy
    clift = cdx*cdx + cdy*cdy
    return (alift * (bdx*cdy - bdy*cdx)
            + blift * (cdx*ady - cdy*adx)
            + clift * (adx*bdy - ady*bdx))

def in_circumcircle(a: Pt, b: Pt, c: Pt, p: Pt) -> CircleSide:
    return CircleSide(_sign(incircle(a, b, c, p)))


# ---------- звітні величини (тут ділення дозволене) ----------
def circumcenter(a: Pt, b: Pt, c: Pt) -> Pt:
    """Центр описаного кола. Точний (Fraction), ділення лише для координати."""
    bx, by = b.x - a.x, b.y - a.y
    cx, cy = c.x - a.x, c.y - a.y
    d = 2 * (bx*cy - by*cx)
    if d == 0:
        raise InvalidGeometry("circumcenter of collinear points is undefined")
    b2 = bx*bx + by*by
    c2 = cx*cx + cy*cy
    ux = (cy*b2 - by*c2) / d
    uy = (bx*c2 - cx*b2) / d
    return Pt(a.x + ux, a.y + uy)

def circumradius2(a: Pt, b: Pt, c: Pt) -> Fraction:
    return distance2(circumcenter(a, b, c), a)

def circumradius(a: Pt, b: Pt, c: Pt) -> float:
    return sqrt(circumradius2(a, b, c))
