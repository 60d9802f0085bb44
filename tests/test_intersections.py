"""Tests for the segment intersection engine."""
from dxfcross.entities import IntersectionPoint, LineSegment, Point
from dxfcross.intersections import find_intersections


def seg(x1, y1, x2, y2):
    return LineSegment(Point(x1, y1), Point(x2, y2))


def test_crossing_diagonals():
    result = find_intersections(seg(0, 0, 2, 2), [seg(0, 2, 2, 0)])
    assert result == [IntersectionPoint(1.0, 1.0)]


def test_shared_endpoint_is_excluded_for_both_query_ends():
    assert find_intersections(seg(0, 0, 1, 1), [seg(1, 1, 2, 0)]) == []
    assert find_intersections(seg(1, 1, 2, 0), [seg(0, 0, 1, 1)]) == []


def test_parallel_segments():
    assert find_intersections(seg(0, 0, 1, 0), [seg(0, 1, 1, 1)]) == []


def test_collinear_overlapping_segments():
    assert find_intersections(seg(0, 0, 2, 2), [seg(1, 1, 3, 3)]) == []


def test_degenerate_candidate_is_skipped():
    assert find_intersections(seg(0, 0, 2, 2), [seg(1, 1, 1, 1)]) == []


def test_disjoint_boxes_are_rejected():
    # lines would cross at (3, 3), outside both segments
    assert find_intersections(seg(0, 0, 1, 1), [seg(4, 2, 5, 1)]) == []


def test_crossing_outside_overlap_is_rejected():
    # boxes overlap but the lines meet beyond the end of the candidate
    assert find_intersections(seg(0, 0, 4, 4), [seg(0, 3, 1, 2)]) == []


def test_candidate_endpoint_touching_query_interior_is_accepted():
    result = find_intersections(seg(0, 0, 2, 0), [seg(1, 0, 1, 1)])
    assert result == [IntersectionPoint(1.0, 0.0)]


def test_vertical_query_against_sloped():
    result = find_intersections(seg(1, -1, 1, 5), [seg(0, 0, 2, 4)])
    assert result == [IntersectionPoint(1.0, 2.0)]


def test_identical_points_are_not_deduplicated():
    candidates = [seg(0, 2, 2, 0), seg(0, 2, 2, 0), seg(1, 0, 1, 3)]
    result = find_intersections(seg(0, 0, 2, 2), candidates)
    assert [p.to_tuple() for p in result] == [(1.0, 1.0)] * 3


def test_empty_candidates():
    assert find_intersections(seg(0, 0, 1, 1), []) == []


NAN = float("nan")


def test_nan_query_finds_nothing():
    candidates = [seg(0, 2, 2, 0), seg(1, -1, 1, 5)]
    assert find_intersections(seg(NAN, NAN, 1, 1), candidates) == []
    assert find_intersections(seg(NAN, NAN, NAN, NAN), candidates) == []


def test_nan_candidate_is_skipped():
    candidates = [seg(NAN, NAN, 1, 1), seg(0, 2, 2, 0), seg(1, 1, NAN, NAN)]
    result = find_intersections(seg(0, 0, 2, 2), candidates)
    assert result == [IntersectionPoint(1.0, 1.0)]
