"""
Drawing Reader Module

Loads a document into the entity model from either:
- a DXF file, parsed with ezdxf
- a parsed-document mapping or JSON file in dxf-parser layout
  ({"entities": [{"type": "LINE", ...}], "blocks": {...}})

Unsupported entity types are logged and skipped. Entities missing a
required field raise MalformedEntityError.
"""

import json
import logging
import math
import os
from typing import Any, Callable, Dict, List, Mapping, Optional

import ezdxf
from ezdxf.document import Drawing as DXFDocument

from .entities import (
    ArcEntity, Block, CircleEntity, DimensionEntity, Drawing, EllipseEntity,
    Entity, InsertEntity, LineEntity, MalformedEntityError, Point, PointEntity,
    PolylineEntity, SolidEntity, SplineEntity, TextEntity, Vertex,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------
# DXF files (ezdxf)
# ---------------------------------------------------------------

def _xy(vec) -> Point:
    return Point(float(vec[0]), float(vec[1]))


def _common(dxf_entity) -> Dict[str, Any]:
    color = dxf_entity.dxf.get("color")
    return {"layer": dxf_entity.dxf.get("layer", "0"), "color": color}


def _solid_points(dxf_entity) -> List[Point]:
    # SOLID/TRACE corners are stored in zig-zag order 0, 1, 3, 2
    corners = [_xy(dxf_entity.dxf.get(f"vtx{i}", (0, 0))) for i in range(4)]
    outline = [corners[0], corners[1], corners[3], corners[2]]
    if corners[3] == corners[2]:
        outline = outline[:3]
    return outline


def _convert_dxf_entity(dxf_entity) -> Optional[Entity]:
    """Convert one ezdxf entity, None if the type is not supported"""
    dxftype = dxf_entity.dxftype()
    common = _common(dxf_entity)
    dxf = dxf_entity.dxf

    if dxftype == "LINE":
        return LineEntity(start=_xy(dxf.start), end=_xy(dxf.end), **common)

    if dxftype == "LWPOLYLINE":
        vertices = [Vertex(float(x), float(y), float(b))
                    for x, y, b in dxf_entity.get_points("xyb")]
        return PolylineEntity(vertices=vertices, closed=dxf_entity.closed, **common)

    if dxftype == "POLYLINE":
        if not (dxf_entity.is_2d_polyline or dxf_entity.is_3d_polyline):
            logger.warning("Unsupported POLYLINE mesh/polyface skipped")
            return None
        vertices = [Vertex(float(v.dxf.location[0]), float(v.dxf.location[1]),
                           float(v.dxf.get("bulge", 0.0)))
                    for v in dxf_entity.vertices]
        return PolylineEntity(vertices=vertices, closed=dxf_entity.is_closed, **common)

    if dxftype == "CIRCLE":
        return CircleEntity(center=_xy(dxf.center), radius=dxf.radius, **common)

    if dxftype == "ARC":
        return ArcEntity(center=_xy(dxf.center), radius=dxf.radius,
                         start_angle=dxf.start_angle, end_angle=dxf.end_angle, **common)

    if dxftype == "ELLIPSE":
        return EllipseEntity(center=_xy(dxf.center), major_axis=_xy(dxf.major_axis),
                             ratio=dxf.ratio, start_param=dxf.start_param,
                             end_param=dxf.end_param, **common)

    if dxftype == "SPLINE":
        if dxf_entity.control_point_count() == 0 and dxf_entity.fit_point_count():
            # fit points lie on the curve; derive the control polygon through them
            curve = dxf_entity.construction_tool()
            return SplineEntity(control_points=[_xy(p) for p in curve.control_points],
                                degree=curve.degree,
                                knots=[float(k) for k in curve.knots()],
                                weights=[float(w) for w in curve.weights()],
                                **common)
        return SplineEntity(control_points=[_xy(p) for p in dxf_entity.control_points],
                            degree=dxf.degree,
                            knots=[float(k) for k in dxf_entity.knots],
                            weights=[float(w) for w in dxf_entity.weights],
                            **common)

    if dxftype == "POINT":
        return PointEntity(position=_xy(dxf.location), **common)

    if dxftype in ("SOLID", "TRACE"):
        return SolidEntity(points=_solid_points(dxf_entity), **common)

    if dxftype == "TEXT":
        return TextEntity(text=dxf.text, position=_xy(dxf.insert),
                          height=dxf.get("height", 2.5), rotation=dxf.get("rotation", 0.0),
                          **common)

    if dxftype == "MTEXT":
        return TextEntity(text=dxf_entity.text, position=_xy(dxf.insert),
                          height=dxf.get("char_height", 2.5),
                          rotation=dxf.get("rotation", 0.0), multiline=True, **common)

    if dxftype == "INSERT":
        return InsertEntity(name=dxf.name, position=_xy(dxf.insert),
                            x_scale=dxf.get("xscale", 1.0), y_scale=dxf.get("yscale", 1.0),
                            rotation=dxf.get("rotation", 0.0), **common)

    if dxftype == "DIMENSION":
        return DimensionEntity(block=dxf.get("geometry", ""),
                               dimension_type=dxf.get("dimtype", 0), **common)

    logger.warning("Unsupported entity type: %s", dxftype)
    return None


def _convert_all(dxf_entities) -> List[Entity]:
    entities = []
    for dxf_entity in dxf_entities:
        entity = _convert_dxf_entity(dxf_entity)
        if entity is not None:
            entities.append(entity)
    return entities


def drawing_from_dxf(doc: DXFDocument) -> Drawing:
    """Convert an ezdxf document (modelspace plus block definitions)"""
    drawing = Drawing(entities=_convert_all(doc.modelspace()))
    for block in doc.blocks:
        if block.block_record.is_any_layout:
            continue
        drawing.blocks[block.name] = Block(block.name, _convert_all(block))
    logger.debug("Loaded %d entities and %d blocks",
                 len(drawing.entities), len(drawing.blocks))
    return drawing


def read_dxf(path: str) -> Drawing:
    """Read a DXF file from disk"""
    return drawing_from_dxf(ezdxf.readfile(path))


# ---------------------------------------------------------------
# Parsed documents (dxf-parser layout)
# ---------------------------------------------------------------

def _point(data: Mapping[str, Any]) -> Point:
    return Point(float(data["x"]), float(data["y"]))


def _vertices(data: Mapping[str, Any]) -> List[Vertex]:
    return [Vertex(float(v["x"]), float(v["y"]), float(v.get("bulge") or 0.0))
            for v in data["vertices"]]


def _line_from_dict(data):
    vertices = data["vertices"]
    if len(vertices) < 2:
        raise MalformedEntityError("LINE needs two vertices")
    return LineEntity(start=_point(vertices[0]), end=_point(vertices[1]))


def _polyline_from_dict(data):
    return PolylineEntity(vertices=_vertices(data), closed=bool(data.get("shape", False)))


def _circle_from_dict(data):
    return CircleEntity(center=_point(data["center"]), radius=float(data["radius"]))


def _arc_from_dict(data):
    # dxf-parser reports arc angles in radians
    return ArcEntity(center=_point(data["center"]), radius=float(data["radius"]),
                     start_angle=math.degrees(data["startAngle"]),
                     end_angle=math.degrees(data["endAngle"]))


def _ellipse_from_dict(data):
    return EllipseEntity(center=_point(data["center"]),
                         major_axis=_point(data["majorAxisEndPoint"]),
                         ratio=float(data["axisRatio"]),
                         start_param=float(data.get("startAngle", 0.0)),
                         end_param=float(data.get("endAngle", 2 * math.pi)))


def _spline_from_dict(data):
    return SplineEntity(control_points=[_point(p) for p in data["controlPoints"]],
                        degree=int(data.get("degreeOfSplineCurve", 3)),
                        knots=[float(k) for k in data.get("knotValues", [])],
                        weights=[float(w) for w in data.get("weights", [])])


def _point_from_dict(data):
    return PointEntity(position=_point(data["position"]))


def _solid_from_dict(data):
    return SolidEntity(points=[_point(p) for p in data["points"]])


def _text_from_dict(data):
    return TextEntity(text=data.get("text", ""), position=_point(data["startPoint"]),
                      height=float(data.get("textHeight", 2.5)),
                      rotation=float(data.get("rotation", 0.0)))


def _mtext_from_dict(data):
    return TextEntity(text=data.get("text", ""), position=_point(data["position"]),
                      height=float(data.get("height", 2.5)),
                      rotation=float(data.get("rotation", 0.0)), multiline=True)


def _insert_from_dict(data):
    return InsertEntity(name=data["name"],
                        position=_point(data.get("position", {"x": 0.0, "y": 0.0})),
                        x_scale=float(data.get("xScale") or 1.0),
                        y_scale=float(data.get("yScale") or 1.0),
                        rotation=float(data.get("rotation") or 0.0))


def _dimension_from_dict(data):
    return DimensionEntity(block=data.get("block", ""),
                           dimension_type=int(data.get("dimensionType", 0)))


PARSERS: Dict[str, Callable[[Mapping[str, Any]], Entity]] = {
    "LINE": _line_from_dict,
    "LWPOLYLINE": _polyline_from_dict,
    "POLYLINE": _polyline_from_dict,
    "CIRCLE": _circle_from_dict,
    "ARC": _arc_from_dict,
    "ELLIPSE": _ellipse_from_dict,
    "SPLINE": _spline_from_dict,
    "POINT": _point_from_dict,
    "SOLID": _solid_from_dict,
    "TEXT": _text_from_dict,
    "MTEXT": _mtext_from_dict,
    "INSERT": _insert_from_dict,
    "DIMENSION": _dimension_from_dict,
}


def entity_from_dict(data: Mapping[str, Any]) -> Optional[Entity]:
    """
    Convert one parsed entity mapping.

    Returns:
        The entity, or None when its type is not supported

    Raises:
        MalformedEntityError: the type tag or a required field is missing
    """
    if "type" not in data:
        raise MalformedEntityError(f"Entity without type tag: {data!r}")

    parser = PARSERS.get(data["type"])
    if parser is None:
        logger.warning("Unsupported entity type: %s", data["type"])
        return None

    try:
        entity = parser(data)
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedEntityError(f"Malformed {data['type']} entity: {e!r}") from e

    entity.layer = data.get("layer", "0")
    entity.color = data.get("color")
    return entity


def _entities_from_list(items) -> List[Entity]:
    entities = []
    for item in items or []:
        entity = entity_from_dict(item)
        if entity is not None:
            entities.append(entity)
    return entities


def drawing_from_dict(data: Mapping[str, Any]) -> Drawing:
    """Build a Drawing from a parsed-document mapping"""
    drawing = Drawing(entities=_entities_from_list(data.get("entities")))
    for name, block in (data.get("blocks") or {}).items():
        drawing.blocks[name] = Block(name, _entities_from_list(block.get("entities")))
    return drawing


def read_drawing(path: str) -> Drawing:
    """
    Load a drawing from disk, choosing the reader by file extension.

    Args:
        path: .dxf file or .json file in dxf-parser layout

    Returns:
        Drawing
    """
    ext = os.path.splitext(path)[1].lower()
    if ext == ".json":
        with open(path, "r", encoding="utf-8") as f:
            return drawing_from_dict(json.load(f))
    if ext == ".dxf":
        return read_dxf(path)
    raise ValueError(f"Unsupported input format: {ext or path}")
