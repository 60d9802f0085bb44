"""
Intersection Pipeline

Main driver that orchestrates the two batch phases:
Drawing -> (parallel) tessellation -> segment list -> (parallel) intersection scan

Phase one flattens every entity on the batch scheduler. The driver then
deposits all segments into one list in document order and freezes it.
Phase two intersects each segment with every segment deposited before it,
so each crossing pair is found exactly once, from the later segment.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .config import PipelineConfig
from .dxf_reader import read_drawing
from .dxf_writer import write_result_dxf
from .entities import Drawing, IntersectionPoint, LineSegment
from .geometry_builder import BuildContext, EntityGeometry, build_entity_geometry
from .intersections import find_intersections
from .scheduler import flatten, run_batch

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Flattened geometry and crossings of one drawing"""
    geometries: List[EntityGeometry] = field(default_factory=list)
    segments: Tuple[LineSegment, ...] = ()
    intersections: List[IntersectionPoint] = field(default_factory=list)


@dataclass
class ProcessingResult:
    """Result of a file-level run"""
    success: bool
    output_files: List[str]
    message: str
    entities_count: int = 0
    segments_count: int = 0
    intersections: List[IntersectionPoint] = field(default_factory=list)


class IntersectionPipeline:
    """
    Flatten a drawing and find all segment crossings.

    Usage:
        pipeline = IntersectionPipeline()
        result = pipeline.run(drawing)

        # Or straight from a file
        result = pipeline.process_file("input.dxf", "crossings.dxf")
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        """
        Initialize pipeline.

        Args:
            config: Scheduling and sampling settings; defaults if None
        """
        self.config = config or PipelineConfig()
        self._progress_callback: Optional[Callable[[str, float], None]] = None

    def set_progress_callback(self, callback: Callable[[str, float], None]):
        """
        Set a callback for progress updates.

        Args:
            callback: Function(message: str, progress: float) where progress is 0-1
        """
        self._progress_callback = callback

    def _report_progress(self, message: str, progress: float):
        """Report progress if callback is set"""
        if self._progress_callback:
            self._progress_callback(message, progress)

    def tessellate(self, drawing: Drawing) -> Tuple[List[EntityGeometry], Tuple[LineSegment, ...]]:
        """
        Phase one: flatten every entity in parallel.

        Returns:
            Geometries in document order and the frozen segment list
        """
        ctx = BuildContext(self.config, drawing.blocks)

        def work(index, entity):
            return lambda: (index, build_entity_geometry(entity, ctx))

        items = (work(i, entity) for i, entity in enumerate(drawing.entities))
        built = sorted(flatten(run_batch(items, self.config.concurrency)),
                       key=lambda pair: pair[0])

        geometries = [geometry for _, geometry in built]
        segments: List[LineSegment] = []
        for geometry in geometries:
            segments.extend(geometry.segments)

        logger.debug("Tessellated %d entities into %d segments",
                     len(geometries), len(segments))
        return geometries, tuple(segments)

    def intersect(self, segments: Tuple[LineSegment, ...]) -> List[IntersectionPoint]:
        """
        Phase two: intersect each segment with the segments before it.

        Args:
            segments: Immutable snapshot of all deposited segments

        Returns:
            Unordered crossing points, not deduplicated
        """
        def work(index):
            return lambda: find_intersections(segments[index], segments[:index])

        items = (work(i) for i in range(len(segments)))
        intersections = flatten(flatten(run_batch(items, self.config.concurrency)))

        logger.debug("Found %d intersections among %d segments",
                     len(intersections), len(segments))
        return intersections

    def run(self, drawing: Drawing) -> PipelineResult:
        """
        Run both phases on a loaded drawing.

        Any error raised while flattening or intersecting aborts the run;
        no partial result is returned.
        """
        self._report_progress("Tessellating entities...", 0.0)
        geometries, segments = self.tessellate(drawing)

        self._report_progress(f"Intersecting {len(segments)} segments...", 0.5)
        intersections = self.intersect(segments)

        self._report_progress("Complete!", 1.0)
        return PipelineResult(geometries, segments, intersections)

    def process_file(
        self,
        input_path: str,
        output_path: Optional[str] = None,
        dxf_version: str = "R2010",
    ) -> ProcessingResult:
        """
        Load a drawing, run the pipeline and optionally write a result DXF.

        Args:
            input_path: .dxf file or .json parsed document
            output_path: Optional DXF path for segments and markers
            dxf_version: Target DXF version of the output

        Returns:
            ProcessingResult with status, counts and intersections
        """
        input_path = os.path.abspath(input_path)

        # Validate input
        if not os.path.isfile(input_path):
            return ProcessingResult(
                success=False,
                output_files=[],
                message=f"Input file not found: {input_path}"
            )

        try:
            drawing = read_drawing(input_path)
            result = self.run(drawing)

            output_files = []
            if output_path:
                output_path = os.path.abspath(output_path)
                output_dir = os.path.dirname(output_path)
                if output_dir:
                    os.makedirs(output_dir, exist_ok=True)
                write_result_dxf(list(result.segments), result.intersections,
                                 output_path, dxf_version)
                output_files.append(output_path)

            return ProcessingResult(
                success=True,
                output_files=output_files,
                message=f"Found {len(result.intersections)} intersection(s)",
                entities_count=drawing.get_entity_count(),
                segments_count=len(result.segments),
                intersections=result.intersections,
            )

        except Exception as e:
            logger.debug("Processing failed", exc_info=True)
            return ProcessingResult(
                success=False,
                output_files=[],
                message=f"Processing error: {str(e)}"
            )


def find_crossings(drawing: Drawing, concurrency: Optional[int] = None) -> List[IntersectionPoint]:
    """
    Quick helper returning only the crossing points of a drawing.

    Args:
        drawing: Loaded drawing
        concurrency: Worker count (default from PipelineConfig)

    Returns:
        Unordered list of IntersectionPoint
    """
    config = PipelineConfig() if concurrency is None else PipelineConfig(concurrency=concurrency)
    return IntersectionPipeline(config).run(drawing).intersections
