"""Tests for line classification and the intersection case table."""
import pytest

from dxfcross.coefficients import (
    Degenerate, Horizontal, Sloped, Vertical, classify, intersect_models,
)
from dxfcross.entities import Point


# --- classify ---

def test_classify_vertical():
    assert classify(Point(0, 0), Point(0, 5)) == Vertical(0)


def test_classify_horizontal():
    assert classify(Point(0, 3), Point(5, 3)) == Horizontal(3)


def test_classify_sloped():
    assert classify(Point(0, 0), Point(2, 2)) == Sloped(1, 0)


def test_classify_sloped_with_intercept():
    line = classify(Point(1.0, 3.0), Point(3.0, 7.0))
    assert line.slope == pytest.approx(2.0)
    assert line.intercept == pytest.approx(1.0)


def test_classify_degenerate():
    assert classify(Point(1.5, 2.5), Point(1.5, 2.5)) == Degenerate()


# --- intersect_models ---

@pytest.mark.parametrize("a, b", [
    (Degenerate(), Vertical(1)),
    (Horizontal(1), Degenerate()),
    (Degenerate(), Degenerate()),
    (Vertical(1), Vertical(2)),
    (Horizontal(1), Horizontal(2)),
    (Sloped(2, 1), Sloped(2, 5)),
])
def test_intersect_none_cases(a, b):
    assert intersect_models(a, b) is None


def test_vertical_horizontal_both_orders():
    assert intersect_models(Vertical(2), Horizontal(3)) == Point(2, 3)
    assert intersect_models(Horizontal(3), Vertical(2)) == Point(2, 3)


def test_vertical_sloped_both_orders():
    assert intersect_models(Vertical(2), Sloped(3, 1)) == Point(2, 7)
    assert intersect_models(Sloped(3, 1), Vertical(2)) == Point(2, 7)


def test_horizontal_sloped_both_orders():
    assert intersect_models(Horizontal(7), Sloped(3, 1)) == Point(2, 7)
    assert intersect_models(Sloped(3, 1), Horizontal(7)) == Point(2, 7)


def test_sloped_sloped():
    p = intersect_models(Sloped(1, 0), Sloped(-1, 2))
    assert p == Point(1.0, 1.0)


def test_sloped_sloped_general():
    p = intersect_models(Sloped(0.5, 1.0), Sloped(-2.0, 6.0))
    assert p.x == pytest.approx(2.0)
    assert p.y == pytest.approx(2.0)


@pytest.mark.parametrize("p1, p2", [
    (Point(float("nan"), float("nan")), Point(1.0, 1.0)),
    (Point(1.0, 1.0), Point(float("nan"), float("nan"))),
    (Point(float("nan"), 2.0), Point(3.0, 4.0)),
    (Point(0.0, float("inf")), Point(1.0, 1.0)),
])
def test_classify_non_finite_points_are_degenerate(p1, p2):
    assert classify(p1, p2) == Degenerate()
