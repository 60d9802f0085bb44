"""Angle-of-chord and polar-projection helpers used by the tessellator."""

import math

import numpy as np

from .entities import Point


def angle2(p1: Point, p2: Point) -> float:
    """
    Return the angle in radians of the vector (p1, p2) measured from (1, 0).

    The result lies in (-pi, pi]. A zero-length chord gives NaN.
    """
    chord = np.array([p2.x - p1.x, p2.y - p1.y], dtype=float)
    with np.errstate(invalid="ignore", divide="ignore"):
        chord = chord / np.hypot(chord[0], chord[1])
        angle = float(np.arccos(np.clip(chord[0], -1.0, 1.0)))
    if chord[1] < 0:
        return -angle
    return angle


def polar(point: Point, distance: float, angle: float) -> Point:
    """Project from point by distance along angle"""
    return Point(point.x + distance * math.cos(angle),
                 point.y + distance * math.sin(angle))
