"""
Segment Intersection Engine

Finds the points where a query segment crosses a set of candidate segments.
Candidates whose bounding boxes are disjoint from the query are rejected
before any line algebra is done.
"""

from typing import Iterable, List

from .coefficients import classify, intersect_models
from .entities import IntersectionPoint, LineSegment


def find_intersections(query: LineSegment,
                       candidates: Iterable[LineSegment]) -> List[IntersectionPoint]:
    """
    Return every accepted crossing of query with the candidates.

    A point is accepted when it lies inside the overlap of both bounding
    boxes (bounds inclusive) and is not exactly equal to either endpoint of
    query. Results are not deduplicated; identical points found through
    different candidates are all returned.

    Args:
        query: Segment being placed
        candidates: Previously emitted segments to test against

    Returns:
        List of IntersectionPoint, in candidate order
    """
    intersects: List[IntersectionPoint] = []
    query_box = query.bbox
    query_line = classify(query.start, query.end)

    for candidate in candidates:
        candidate_box = candidate.bbox
        if not query_box.overlaps(candidate_box):
            continue

        point = intersect_models(query_line, classify(candidate.start, candidate.end))
        if point is None:
            continue

        if not query_box.intersection(candidate_box).contains(point.x, point.y):
            continue
        if point.to_tuple() in (query.start.to_tuple(), query.end.to_tuple()):
            continue

        intersects.append(IntersectionPoint(point.x, point.y))

    return intersects
