"""
Drawing Entity Model

Plain data types shared by every stage of the pipeline:
- Points, segments and bounding boxes used by the intersection search
- Entity records for an already-parsed CAD document
- Block definitions and the document container

Coordinates are compared exactly. Two points are equal only when both
coordinates are bit-for-bit equal floats; near-coincident points are never
merged.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional, Tuple
from enum import Enum
import math


class DxfCrossError(Exception):
    """Base class for errors raised by dxfcross"""


class MalformedEntityError(DxfCrossError):
    """An entity is structurally invalid (missing field, unknown block, ...)"""


class EntityKind(Enum):
    """Entity type tags, named after their DXF entity types"""
    LINE = "LINE"
    LWPOLYLINE = "LWPOLYLINE"
    CIRCLE = "CIRCLE"
    ARC = "ARC"
    ELLIPSE = "ELLIPSE"
    SPLINE = "SPLINE"
    POINT = "POINT"
    SOLID = "SOLID"
    TEXT = "TEXT"
    INSERT = "INSERT"
    DIMENSION = "DIMENSION"


@dataclass(frozen=True)
class Point:
    """2D point with x, y coordinates"""
    x: float
    y: float

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def distance_to(self, other: 'Point') -> float:
        """Calculate distance to another point"""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class IntersectionPoint(Point):
    """A point accepted as a crossing between two segments"""


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box, bounds inclusive"""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def overlaps(self, other: 'BoundingBox') -> bool:
        """False when the two rectangles are disjoint"""
        return not (other.max_x < self.min_x or self.max_x < other.min_x or
                    other.max_y < self.min_y or self.max_y < other.min_y)

    def intersection(self, other: 'BoundingBox') -> 'BoundingBox':
        """Coordinate-wise overlap of two boxes (may be empty if disjoint)"""
        return BoundingBox(
            max(self.min_x, other.min_x),
            max(self.min_y, other.min_y),
            min(self.max_x, other.max_x),
            min(self.max_y, other.max_y),
        )

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


@dataclass(frozen=True)
class LineSegment:
    """A straight segment between two consecutive path vertices"""
    start: Point
    end: Point

    @property
    def bbox(self) -> BoundingBox:
        return BoundingBox(
            min(self.start.x, self.end.x),
            min(self.start.y, self.end.y),
            max(self.start.x, self.end.x),
            max(self.start.y, self.end.y),
        )


@dataclass(frozen=True)
class Vertex:
    """Polyline vertex; bulge describes the arc to the next vertex"""
    x: float
    y: float
    bulge: float = 0.0

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass
class Entity:
    """Common attributes of every drawing entity"""
    kind: ClassVar[EntityKind]


@dataclass
class LineEntity(Entity):
    """A single line from start to end"""
    kind: ClassVar[EntityKind] = EntityKind.LINE
    start: Point = Point(0.0, 0.0)
    end: Point = Point(0.0, 0.0)
    layer: str = "0"
    color: Optional[int] = None


@dataclass
class PolylineEntity(Entity):
    """A polyline consisting of vertices with optional bulges (LWPOLYLINE and POLYLINE)"""
    kind: ClassVar[EntityKind] = EntityKind.LWPOLYLINE
    vertices: List[Vertex] = field(default_factory=list)
    closed: bool = False
    layer: str = "0"
    color: Optional[int] = None


@dataclass
class CircleEntity(Entity):
    """A full circle"""
    kind: ClassVar[EntityKind] = EntityKind.CIRCLE
    center: Point = Point(0.0, 0.0)
    radius: float = 0.0
    layer: str = "0"
    color: Optional[int] = None


@dataclass
class ArcEntity(Entity):
    """An arc defined by center, radius, and angles"""
    kind: ClassVar[EntityKind] = EntityKind.ARC
    center: Point = Point(0.0, 0.0)
    radius: float = 0.0
    start_angle: float = 0.0  # in degrees
    end_angle: float = 360.0  # in degrees
    layer: str = "0"
    color: Optional[int] = None


@dataclass
class EllipseEntity(Entity):
    """An ellipse or elliptical arc"""
    kind: ClassVar[EntityKind] = EntityKind.ELLIPSE
    center: Point = Point(0.0, 0.0)
    major_axis: Point = Point(1.0, 0.0)  # Endpoint of major axis relative to center
    ratio: float = 1.0                   # Ratio of minor to major axis (0-1)
    start_param: float = 0.0
    end_param: float = 2 * math.pi
    layer: str = "0"
    color: Optional[int] = None


@dataclass
class SplineEntity(Entity):
    """A B-spline defined by control points"""
    kind: ClassVar[EntityKind] = EntityKind.SPLINE
    control_points: List[Point] = field(default_factory=list)
    degree: int = 3
    knots: List[float] = field(default_factory=list)
    weights: List[float] = field(default_factory=list)
    layer: str = "0"
    color: Optional[int] = None


@dataclass
class PointEntity(Entity):
    kind: ClassVar[EntityKind] = EntityKind.POINT
    position: Point = Point(0.0, 0.0)
    layer: str = "0"
    color: Optional[int] = None


@dataclass
class SolidEntity(Entity):
    """Filled triangle or quadrilateral"""
    kind: ClassVar[EntityKind] = EntityKind.SOLID
    points: List[Point] = field(default_factory=list)
    layer: str = "0"
    color: Optional[int] = None


@dataclass
class TextEntity(Entity):
    """Single or multi line text; carries no flat geometry"""
    kind: ClassVar[EntityKind] = EntityKind.TEXT
    text: str = ""
    position: Point = Point(0.0, 0.0)
    height: float = 2.5
    rotation: float = 0.0
    multiline: bool = False
    layer: str = "0"
    color: Optional[int] = None


@dataclass
class InsertEntity(Entity):
    """Block reference placed with scale, rotation and translation"""
    kind: ClassVar[EntityKind] = EntityKind.INSERT
    name: str = ""
    position: Point = Point(0.0, 0.0)
    x_scale: float = 1.0
    y_scale: float = 1.0
    rotation: float = 0.0  # in degrees
    layer: str = "0"
    color: Optional[int] = None


@dataclass
class DimensionEntity(Entity):
    """Dimension whose graphics live in an anonymous block"""
    kind: ClassVar[EntityKind] = EntityKind.DIMENSION
    block: str = ""
    dimension_type: int = 0
    layer: str = "0"
    color: Optional[int] = None


@dataclass
class Block:
    """Named block definition"""
    name: str
    entities: List[Entity] = field(default_factory=list)


@dataclass
class Drawing:
    """Container for a fully loaded document"""
    entities: List[Entity] = field(default_factory=list)
    blocks: Dict[str, Block] = field(default_factory=dict)

    def get_entity_count(self) -> int:
        """Return number of top-level entities"""
        return len(self.entities)
