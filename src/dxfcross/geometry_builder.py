"""
Entity Geometry Builder

Flattens drawing entities into vertex paths and line segments. Each entity
kind has one pure builder function registered in BUILDERS; the table covers
every EntityKind.

Only line-like entities (LINE, LWPOLYLINE/POLYLINE) and the line-like content
of blocks emit segments for the intersection search unless the configuration
asks for curve segments as well.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple
import logging
import math

import numpy as np
from ezdxf.math import BSpline

from .bulge import tessellate_bulge
from .config import PipelineConfig
from .entities import (
    ArcEntity, Block, CircleEntity, DimensionEntity, EllipseEntity, Entity,
    EntityKind, InsertEntity, LineEntity, LineSegment, MalformedEntityError,
    Point, PointEntity, PolylineEntity, SolidEntity, SplineEntity, TextEntity,
)

logger = logging.getLogger(__name__)


@dataclass
class EntityGeometry:
    """Flat geometry of one entity"""
    kind: EntityKind
    paths: List[List[Point]] = field(default_factory=list)
    segments: List[LineSegment] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return sum(len(path) for path in self.paths)


@dataclass
class BuildContext:
    """Read-only inputs shared by all builders"""
    config: PipelineConfig
    blocks: Dict[str, Block]
    block_stack: Tuple[str, ...] = ()


def segments_from_path(path: List[Point]) -> List[LineSegment]:
    """One segment per pair of consecutive path vertices"""
    return [LineSegment(path[i - 1], path[i]) for i in range(1, len(path))]


def _sample_sweep(start: float, end: float, full_turn: float) -> float:
    """Counter-clockwise sweep from start to end; equal angles mean a full turn"""
    sweep = (end - start) % full_turn
    return sweep if sweep > 0 else full_turn


def _curve_geometry(entity: Entity, path: List[Point], ctx: BuildContext) -> EntityGeometry:
    segments = segments_from_path(path) if ctx.config.curve_segments else []
    return EntityGeometry(entity.kind, [path], segments)


def _build_line(entity: LineEntity, ctx: BuildContext) -> EntityGeometry:
    path = [entity.start, entity.end]
    return EntityGeometry(entity.kind, [path], segments_from_path(path))


def _build_polyline(entity: PolylineEntity, ctx: BuildContext) -> EntityGeometry:
    path: List[Point] = []
    vertices = entity.vertices
    count = len(vertices)

    for i, vertex in enumerate(vertices):
        end: Optional[Point] = None
        if vertex.bulge:
            if i + 1 < count:
                end = vertices[i + 1].point
            # three-dxf arcs a last-vertex bulge back to the first vertex even
            # on open polylines; here it only applies to closed ones
            elif entity.closed and i > 0:
                end = path[0]

        if end is not None:
            path.extend(tessellate_bulge(
                vertex.point, end, vertex.bulge,
                segment_angle=ctx.config.arc_segment_angle,
                min_segments=ctx.config.min_arc_segments,
            ))
        else:
            path.append(vertex.point)

    if entity.closed and path:
        path.append(path[0])

    return EntityGeometry(entity.kind, [path], segments_from_path(path))


def _arc_points(center: Point, radius: float, start: float, sweep: float,
                divisions: int) -> List[Point]:
    angles = start + sweep * np.linspace(0.0, 1.0, divisions + 1)
    xs = center.x + radius * np.cos(angles)
    ys = center.y + radius * np.sin(angles)
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]


def _build_circle(entity: CircleEntity, ctx: BuildContext) -> EntityGeometry:
    path = _arc_points(entity.center, entity.radius, 0.0, 2 * math.pi,
                       ctx.config.circle_segments)
    return _curve_geometry(entity, path, ctx)


def _build_arc(entity: ArcEntity, ctx: BuildContext) -> EntityGeometry:
    sweep = _sample_sweep(entity.start_angle, entity.end_angle, 360.0)
    path = _arc_points(entity.center, entity.radius, math.radians(entity.start_angle),
                       math.radians(sweep), ctx.config.circle_segments)
    return _curve_geometry(entity, path, ctx)


def _build_ellipse(entity: EllipseEntity, ctx: BuildContext) -> EntityGeometry:
    x_radius = math.hypot(entity.major_axis.x, entity.major_axis.y)
    y_radius = x_radius * entity.ratio
    rotation = math.atan2(entity.major_axis.y, entity.major_axis.x)
    sweep = _sample_sweep(entity.start_param, entity.end_param, 2 * math.pi)

    params = entity.start_param + sweep * np.linspace(0.0, 1.0, ctx.config.ellipse_segments + 1)
    local_x = x_radius * np.cos(params)
    local_y = y_radius * np.sin(params)
    cos_r, sin_r = math.cos(rotation), math.sin(rotation)
    xs = entity.center.x + local_x * cos_r - local_y * sin_r
    ys = entity.center.y + local_x * sin_r + local_y * cos_r

    path = [Point(float(x), float(y)) for x, y in zip(xs, ys)]
    return _curve_geometry(entity, path, ctx)


def _build_spline(entity: SplineEntity, ctx: BuildContext) -> EntityGeometry:
    control_points = [p.to_tuple() for p in entity.control_points]
    if len(control_points) < 2:
        return _curve_geometry(entity, list(entity.control_points), ctx)

    order = min(entity.degree + 1, len(control_points))
    # Knot and weight vectors only apply when they match the control points
    knots = entity.knots if len(entity.knots) == len(control_points) + order else None
    weights = entity.weights if len(entity.weights) == len(control_points) else None

    spline = BSpline(control_points, order=order, knots=knots, weights=weights)
    path = [Point(v.x, v.y) for v in spline.approximate(ctx.config.spline_segments)]
    return _curve_geometry(entity, path, ctx)


def _build_point(entity: PointEntity, ctx: BuildContext) -> EntityGeometry:
    return EntityGeometry(entity.kind, [[entity.position]])


def _build_solid(entity: SolidEntity, ctx: BuildContext) -> EntityGeometry:
    if not entity.points:
        return EntityGeometry(entity.kind)
    return EntityGeometry(entity.kind, [list(entity.points) + [entity.points[0]]])


def _build_text(entity: TextEntity, ctx: BuildContext) -> EntityGeometry:
    return EntityGeometry(entity.kind)


def _build_block(name: str, ctx: BuildContext) -> EntityGeometry:
    """Geometry of every entity in a block, in block coordinates"""
    if name in ctx.block_stack:
        raise MalformedEntityError(f"Block '{name}' references itself")

    block = ctx.blocks[name]
    inner = BuildContext(ctx.config, ctx.blocks, ctx.block_stack + (name,))
    geometry = EntityGeometry(EntityKind.INSERT)
    for child in block.entities:
        child_geometry = build_entity_geometry(child, inner)
        geometry.paths.extend(child_geometry.paths)
        geometry.segments.extend(child_geometry.segments)
    return geometry


def _build_insert(entity: InsertEntity, ctx: BuildContext) -> EntityGeometry:
    if entity.name not in ctx.blocks:
        raise MalformedEntityError(f"INSERT references unknown block '{entity.name}'")

    local = _build_block(entity.name, ctx)
    angle = math.radians(entity.rotation)
    cos_r, sin_r = math.cos(angle), math.sin(angle)

    def place(p: Point) -> Point:
        sx = p.x * entity.x_scale
        sy = p.y * entity.y_scale
        return Point(entity.position.x + sx * cos_r - sy * sin_r,
                     entity.position.y + sx * sin_r + sy * cos_r)

    return EntityGeometry(
        entity.kind,
        [[place(p) for p in path] for path in local.paths],
        [LineSegment(place(s.start), place(s.end)) for s in local.segments],
    )


def _build_dimension(entity: DimensionEntity, ctx: BuildContext) -> EntityGeometry:
    dimension_type = entity.dimension_type & 7
    if dimension_type != 0:
        logger.warning("Unsupported dimension type: %d", dimension_type)
        return EntityGeometry(entity.kind)
    if entity.block not in ctx.blocks:
        logger.debug("Dimension block '%s' not found", entity.block)
        return EntityGeometry(entity.kind)

    local = _build_block(entity.block, ctx)
    return EntityGeometry(entity.kind, local.paths, local.segments)


BUILDERS: Dict[EntityKind, Callable[[Entity, BuildContext], EntityGeometry]] = {
    EntityKind.LINE: _build_line,
    EntityKind.LWPOLYLINE: _build_polyline,
    EntityKind.CIRCLE: _build_circle,
    EntityKind.ARC: _build_arc,
    EntityKind.ELLIPSE: _build_ellipse,
    EntityKind.SPLINE: _build_spline,
    EntityKind.POINT: _build_point,
    EntityKind.SOLID: _build_solid,
    EntityKind.TEXT: _build_text,
    EntityKind.INSERT: _build_insert,
    EntityKind.DIMENSION: _build_dimension,
}


def build_entity_geometry(entity: Entity, ctx: BuildContext) -> EntityGeometry:
    """
    Flatten one entity.

    Args:
        entity: Entity to flatten
        ctx: Configuration and block table

    Returns:
        EntityGeometry with vertex paths and emitted segments

    Raises:
        MalformedEntityError: unknown entity type or broken block reference
    """
    builder = BUILDERS.get(getattr(entity, "kind", None))
    if builder is None:
        raise MalformedEntityError(f"Unsupported entity: {type(entity).__name__}")
    return builder(entity, ctx)


def build_geometry(entity: Entity, blocks: Optional[Dict[str, Block]] = None,
                   config: Optional[PipelineConfig] = None) -> EntityGeometry:
    """Convenience wrapper building a context from keyword arguments"""
    return build_entity_geometry(entity, BuildContext(config or PipelineConfig(), blocks or {}))
