"""
DXF Writer Module

Writes pipeline output to DXF using the ezdxf library:
- flattened segments as LINE entities
- intersection markers as POINT entities ringed by a small CIRCLE

Each output class gets its own layer so the result can be overlaid on the
source drawing in any CAD viewer.
"""

from typing import Iterable, List, Optional

import ezdxf
from ezdxf import units

from .entities import IntersectionPoint, LineSegment


SEGMENT_LAYER = "SEGMENTS"
MARKER_LAYER = "INTERSECTIONS"


class ResultWriter:
    """
    Write segments and intersection points to a DXF document.

    Usage:
        writer = ResultWriter("R2010")
        writer.create_document(segments, intersections)
        writer.save("crossings.dxf")
    """

    # DXF version mapping
    VERSION_MAP = {
        "R12": "R12",
        "R2000": "R2000",
        "R2004": "R2004",
        "R2007": "R2007",
        "R2010": "R2010",
        "R2013": "R2013",
        "R2018": "R2018",
    }

    # ACI colors per layer
    LAYER_COLORS = {
        SEGMENT_LAYER: 7,   # White/black
        MARKER_LAYER: 1,    # Red
    }

    def __init__(self, version: str = "R2010", marker_radius: float = 0.05):
        """
        Initialize DXF writer.

        Args:
            version: DXF version (R12, R2000, R2004, R2007, R2010, R2013, R2018)
            marker_radius: Radius of the circle drawn around each intersection
        """
        self.version = self.VERSION_MAP.get(version, "R2010")
        self.marker_radius = marker_radius
        self.doc = None
        self.msp = None

    def create_document(self, segments: Iterable[LineSegment],
                        intersections: Iterable[IntersectionPoint]) -> ezdxf.document.Drawing:
        """
        Create a new DXF document from pipeline output.

        Args:
            segments: Flattened line segments
            intersections: Accepted crossing points

        Returns:
            ezdxf Drawing object
        """
        self.doc = ezdxf.new(self.version)
        self.doc.units = units.MM
        self.msp = self.doc.modelspace()

        self._setup_layers()
        self._add_segments(segments)
        self._add_markers(intersections)

        return self.doc

    def _setup_layers(self):
        for name, color in self.LAYER_COLORS.items():
            if name not in self.doc.layers:
                self.doc.layers.add(name, color=color)

    def _add_segments(self, segments: Iterable[LineSegment]):
        """Add one LINE per segment"""
        for segment in segments:
            self.msp.add_line(
                start=segment.start.to_tuple(),
                end=segment.end.to_tuple(),
                dxfattribs={"layer": SEGMENT_LAYER}
            )

    def _add_markers(self, intersections: Iterable[IntersectionPoint]):
        """Add a POINT and a marker circle per intersection"""
        for point in intersections:
            self.msp.add_point(point.to_tuple(), dxfattribs={"layer": MARKER_LAYER})
            if self.marker_radius > 0:
                self.msp.add_circle(
                    center=point.to_tuple(),
                    radius=self.marker_radius,
                    dxfattribs={"layer": MARKER_LAYER}
                )

    def save(self, filepath: str):
        """
        Save the DXF document to file.

        Args:
            filepath: Output file path
        """
        if self.doc:
            self.doc.saveas(filepath, encoding='utf-8')


def write_result_dxf(segments: List[LineSegment], intersections: List[IntersectionPoint],
                     output_path: str, version: str = "R2010",
                     marker_radius: Optional[float] = None) -> str:
    """
    Convenience function to write pipeline output to a DXF file.

    Args:
        segments: Flattened line segments
        intersections: Accepted crossing points
        output_path: Output DXF file path
        version: DXF version
        marker_radius: Marker circle radius (default 0.05)

    Returns:
        Path to created DXF file
    """
    writer = ResultWriter(version) if marker_radius is None else ResultWriter(version, marker_radius)
    writer.create_document(segments, intersections)
    writer.save(output_path)
    return output_path
