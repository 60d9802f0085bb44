"""Tests for the angle and polar helpers."""
import math

from dxfcross.entities import Point
from dxfcross.vector import angle2, polar


# --- angle2 ---

def test_angle2_axes():
    assert angle2(Point(0, 0), Point(1, 0)) == 0
    assert angle2(Point(0, 0), Point(0, 1)) == math.pi / 2
    assert angle2(Point(0, 0), Point(0, -1)) == -math.pi / 2


def test_angle2_negative_x_axis_is_pi():
    assert angle2(Point(0, 0), Point(-3, 0)) == math.pi


def test_angle2_range():
    origin = Point(1.5, -2.0)
    for i in range(72):
        theta = -math.pi + (i + 0.5) * math.pi / 36
        a = angle2(origin, polar(origin, 2.0, theta))
        assert -math.pi < a <= math.pi
        assert abs(a - theta) < 1e-9


def test_angle2_zero_chord_is_nan():
    assert math.isnan(angle2(Point(1, 1), Point(1, 1)))


# --- polar ---

def test_polar():
    p = polar(Point(3, 4), 2.0, math.pi / 2)
    assert abs(p.x - 3.0) < 1e-12
    assert abs(p.y - 6.0) < 1e-12
