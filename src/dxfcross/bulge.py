"""
Bulge Arc Tessellation

A polyline vertex bulge encodes a circular arc to the next vertex:
bulge = tan(included_angle / 4). Positive values bend counter-clockwise.
"""

from typing import List, Optional
import math

from .config import ARC_SEGMENT_ANGLE, MIN_ARC_SEGMENTS
from .entities import Point
from .vector import angle2, polar


def included_angle(bulge: Optional[float]) -> float:
    """Angle subtended by the arc of a bulge; falsy bulges count as 1"""
    return 4 * math.atan(bulge or 1)


def default_segment_count(angle: float,
                          segment_angle: float = ARC_SEGMENT_ANGLE,
                          min_segments: int = MIN_ARC_SEGMENTS) -> int:
    """Segments for an arc of the given included angle"""
    return max(math.ceil(abs(angle) / segment_angle), min_segments)


def tessellate_bulge(start: Point, end: Point, bulge: Optional[float],
                     segments: Optional[int] = None,
                     segment_angle: float = ARC_SEGMENT_ANGLE,
                     min_segments: int = MIN_ARC_SEGMENTS) -> List[Point]:
    """
    Calculate points for the arc between two polyline vertices.

    Args:
        start: Starting point of the arc
        end: Ending point of the arc
        bulge: Bulge value; None or 0 are treated as 1
        segments: Number of segments; defaults to one per segment_angle
        segment_angle: Target angle per segment in radians
        min_segments: Lower bound for the default segment count

    Returns:
        Points beginning with start followed by the interior arc points.
        end is not included; the caller appends the next vertex itself.
        If start equals end the interior coordinates are NaN.
    """
    angle = included_angle(bulge)
    radius = start.distance_to(end) / 2 / math.sin(angle / 2)
    center = polar(start, radius, angle2(start, end) + (math.pi / 2 - angle / 2))

    count = segments or default_segment_count(angle, segment_angle, min_segments)
    start_angle = angle2(center, start)
    theta = angle / count

    points = [Point(start.x, start.y)]
    for i in range(1, count):
        points.append(polar(center, abs(radius), start_angle + theta * i))
    return points
