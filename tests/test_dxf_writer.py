"""Tests for the result DXF writer."""
import ezdxf

from dxfcross.dxf_writer import MARKER_LAYER, SEGMENT_LAYER, ResultWriter, write_result_dxf
from dxfcross.entities import IntersectionPoint, LineSegment, Point


SEGMENTS = [
    LineSegment(Point(0.0, 0.0), Point(2.0, 2.0)),
    LineSegment(Point(0.0, 2.0), Point(2.0, 0.0)),
]
CROSSINGS = [IntersectionPoint(1.0, 1.0)]


def test_create_document_layers_and_entities():
    doc = ResultWriter().create_document(SEGMENTS, CROSSINGS)
    assert SEGMENT_LAYER in doc.layers
    assert MARKER_LAYER in doc.layers

    msp = doc.modelspace()
    lines = msp.query("LINE")
    assert len(lines) == 2
    assert all(line.dxf.layer == SEGMENT_LAYER for line in lines)
    assert len(msp.query("POINT")) == 1
    assert len(msp.query("CIRCLE")) == 1


def test_zero_marker_radius_skips_circles():
    doc = ResultWriter(marker_radius=0).create_document(SEGMENTS, CROSSINGS)
    assert len(doc.modelspace().query("CIRCLE")) == 0


def test_unknown_version_falls_back():
    assert ResultWriter("R9999").version == "R2010"


def test_write_result_dxf_roundtrip(tmp_path):
    path = str(tmp_path / "out.dxf")
    assert write_result_dxf(SEGMENTS, CROSSINGS, path, "R2000") == path

    doc = ezdxf.readfile(path)
    assert doc.dxfversion == "AC1015"
    point = doc.modelspace().query("POINT")[0]
    assert tuple(point.dxf.location)[:2] == (1.0, 1.0)
