"""
dxfcross

Flattens CAD drawing entities into polyline geometry and finds every
crossing between the resulting line segments.

Key Features:
- Bulge arc tessellation for LWPOLYLINE/POLYLINE vertices
- Exact-case line intersection (vertical, horizontal, sloped, degenerate)
- Bounding-box pruned prefix scan over all segments of a drawing
- Bounded worker pool for both the flattening and the intersection phase
- DXF input and output through ezdxf
"""

__version__ = "0.3.0"
__author__ = ""

# Pipeline
from .pipeline import (
    IntersectionPipeline,
    PipelineResult,
    ProcessingResult,
    find_crossings,
)
from .config import PipelineConfig

# Data model
from .entities import (
    DxfCrossError,
    MalformedEntityError,
    EntityKind,
    Point,
    IntersectionPoint,
    BoundingBox,
    LineSegment,
    Vertex,
    # Entity types
    LineEntity,
    PolylineEntity,
    CircleEntity,
    ArcEntity,
    EllipseEntity,
    SplineEntity,
    PointEntity,
    SolidEntity,
    TextEntity,
    InsertEntity,
    DimensionEntity,
    Block,
    Drawing,
)

# Geometry
from .vector import angle2, polar
from .bulge import tessellate_bulge, default_segment_count
from .coefficients import Vertical, Horizontal, Sloped, Degenerate, classify, intersect_models
from .intersections import find_intersections
from .geometry_builder import EntityGeometry, build_geometry
from .scheduler import run_batch

# DXF reading and writing
from .dxf_reader import read_drawing, read_dxf, drawing_from_dict
from .dxf_writer import ResultWriter, write_result_dxf

__all__ = [
    # Version
    "__version__",
    # Pipeline
    "IntersectionPipeline",
    "PipelineResult",
    "ProcessingResult",
    "PipelineConfig",
    "find_crossings",
    # Data model
    "DxfCrossError",
    "MalformedEntityError",
    "EntityKind",
    "Point",
    "IntersectionPoint",
    "BoundingBox",
    "LineSegment",
    "Vertex",
    "LineEntity",
    "PolylineEntity",
    "CircleEntity",
    "ArcEntity",
    "EllipseEntity",
    "SplineEntity",
    "PointEntity",
    "SolidEntity",
    "TextEntity",
    "InsertEntity",
    "DimensionEntity",
    "Block",
    "Drawing",
    # Geometry
    "angle2",
    "polar",
    "tessellate_bulge",
    "default_segment_count",
    "Vertical",
    "Horizontal",
    "Sloped",
    "Degenerate",
    "classify",
    "intersect_models",
    "find_intersections",
    "EntityGeometry",
    "build_geometry",
    "run_batch",
    # DXF reading and writing
    "read_drawing",
    "read_dxf",
    "drawing_from_dict",
    "ResultWriter",
    "write_result_dxf",
]
