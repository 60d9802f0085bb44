"""
Line Coefficient Solver

Represents the infinite line through two points in one of four forms, chosen
so that no case needs an undefined slope:

    Vertical(x)                 x = const
    Horizontal(y)               y = const
    Sloped(slope, intercept)    y = slope * x + intercept
    Degenerate                  identical or non-finite defining points

and intersects two such lines with an exhaustive case table. Parallel and
degenerate combinations yield None instead of raising; they are routine in
CAD data (adjacent polyline segments, axis-aligned or collinear lines).

All coordinate equality tests are exact.
"""

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .entities import Point


@dataclass(frozen=True)
class Vertical:
    x: float


@dataclass(frozen=True)
class Horizontal:
    y: float


@dataclass(frozen=True)
class Sloped:
    slope: float
    intercept: float


@dataclass(frozen=True)
class Degenerate:
    pass


CoefficientModel = Union[Vertical, Horizontal, Sloped, Degenerate]


def _solve(formula, results) -> Optional[np.ndarray]:
    """Solve a 2x2 linear system, None if singular"""
    try:
        return np.linalg.solve(np.array(formula, dtype=float),
                               np.array(results, dtype=float))
    except np.linalg.LinAlgError:
        return None


def classify(p1: Point, p2: Point) -> CoefficientModel:
    """Choose the representation of the line through p1 and p2"""
    # NaN points come from tessellating a bulge between coincident vertices
    if not np.isfinite([p1.x, p1.y, p2.x, p2.y]).all():
        return Degenerate()
    if p1.x == p2.x and p1.y == p2.y:
        return Degenerate()
    if p1.x == p2.x:
        return Vertical(p1.x)
    if p1.y == p2.y:
        return Horizontal(p1.y)

    # [[x1, 1], [x2, 1]] . [a, k] = [y1, y2]
    solution = _solve([[p1.x, 1.0], [p2.x, 1.0]], [p1.y, p2.y])
    if solution is None:
        return Degenerate()
    return Sloped(float(solution[0]), float(solution[1]))


def _vertical_with(line: Vertical, other: CoefficientModel) -> Optional[Point]:
    if isinstance(other, Horizontal):
        return Point(line.x, other.y)
    if isinstance(other, Sloped):
        return Point(line.x, other.slope * line.x + other.intercept)
    return None


def _horizontal_with(line: Horizontal, other: CoefficientModel) -> Optional[Point]:
    if isinstance(other, Vertical):
        return Point(other.x, line.y)
    if isinstance(other, Sloped):
        return Point((line.y - other.intercept) / other.slope, line.y)
    return None


def _sloped_with(line: Sloped, other: CoefficientModel) -> Optional[Point]:
    if isinstance(other, Vertical):
        return _vertical_with(other, line)
    if isinstance(other, Horizontal):
        return _horizontal_with(other, line)
    if isinstance(other, Sloped):
        if line.slope == other.slope:
            return None
        # [[1, -a1], [1, -a2]] . [y, x] = [k1, k2]
        solution = _solve([[1.0, -line.slope], [1.0, -other.slope]],
                          [line.intercept, other.intercept])
        if solution is None:
            return None
        return Point(float(solution[1]), float(solution[0]))
    return None


_DISPATCH = {
    Vertical: _vertical_with,
    Horizontal: _horizontal_with,
    Sloped: _sloped_with,
}


def intersect_models(a: CoefficientModel, b: CoefficientModel) -> Optional[Point]:
    """
    Intersect two lines.

    Returns:
        The crossing point, or None for parallel lines (vertical/vertical,
        horizontal/horizontal, equal slopes) and whenever either side is
        Degenerate.
    """
    if isinstance(a, Degenerate) or isinstance(b, Degenerate):
        return None
    handler = _DISPATCH.get(type(a))
    if handler is None:
        raise TypeError(f"Unknown coefficient model: {a!r}")
    return handler(a, b)
