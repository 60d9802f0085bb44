"""Shared test fixtures for dxfcross tests."""
import pytest

from dxfcross.config import PipelineConfig
from dxfcross.entities import (
    Block, Drawing, InsertEntity, LineEntity, Point, PolylineEntity, Vertex,
)


@pytest.fixture
def config():
    """Default pipeline configuration."""
    return PipelineConfig()


@pytest.fixture
def crossing_lines():
    """Two diagonals of the 2x2 square, crossing at (1, 1)."""
    return Drawing(entities=[
        LineEntity(start=Point(0.0, 0.0), end=Point(2.0, 2.0)),
        LineEntity(start=Point(0.0, 2.0), end=Point(2.0, 0.0)),
    ])


@pytest.fixture
def square_and_bar():
    """Closed 4x4 square crossed by a horizontal bar at y=2."""
    square = PolylineEntity(
        vertices=[Vertex(0.0, 0.0), Vertex(4.0, 0.0), Vertex(4.0, 4.0), Vertex(0.0, 4.0)],
        closed=True,
    )
    bar = LineEntity(start=Point(-1.0, 2.0), end=Point(5.0, 2.0))
    return Drawing(entities=[square, bar])


@pytest.fixture
def block_drawing():
    """A vertical bar block placed across a horizontal line."""
    block = Block("BAR", [LineEntity(start=Point(0.0, -1.0), end=Point(0.0, 1.0))])
    return Drawing(
        entities=[
            LineEntity(start=Point(0.0, 0.0), end=Point(10.0, 0.0)),
            InsertEntity(name="BAR", position=Point(3.0, 0.0)),
        ],
        blocks={"BAR": block},
    )


@pytest.fixture
def parsed_document():
    """Document mapping in dxf-parser layout."""
    return {
        "entities": [
            {"type": "LINE", "layer": "walls",
             "vertices": [{"x": 0, "y": 0}, {"x": 2, "y": 2}]},
            {"type": "LWPOLYLINE", "shape": False,
             "vertices": [{"x": 0, "y": 2}, {"x": 2, "y": 0, "bulge": 0}]},
            {"type": "CIRCLE", "center": {"x": 5, "y": 5}, "radius": 1},
            {"type": "TEXT", "text": "A", "startPoint": {"x": 0, "y": 0}},
            {"type": "HATCH"},
        ],
        "blocks": {
            "B": {"name": "B", "entities": [
                {"type": "LINE", "vertices": [{"x": 0, "y": 0}, {"x": 1, "y": 0}]},
            ]},
        },
    }
