"""
Pipeline configuration.

Defaults mirror the sampling densities of the viewer the geometry is fed to.
"""

from dataclasses import dataclass
import math


# ---------------------------------------------------------------
# SCHEDULING
# ---------------------------------------------------------------

DEFAULT_CONCURRENCY = 4


# ---------------------------------------------------------------
# CURVE SAMPLING
# ---------------------------------------------------------------

ARC_SEGMENT_ANGLE = math.pi / 18   # one bulge segment roughly every 10 degrees
MIN_ARC_SEGMENTS = 6
CIRCLE_SEGMENTS = 32
ELLIPSE_SEGMENTS = 50
SPLINE_SEGMENTS = 100


@dataclass
class PipelineConfig:
    """Settings consumed by the geometry builder and the scheduler"""
    concurrency: int = DEFAULT_CONCURRENCY
    arc_segment_angle: float = ARC_SEGMENT_ANGLE
    min_arc_segments: int = MIN_ARC_SEGMENTS
    circle_segments: int = CIRCLE_SEGMENTS
    ellipse_segments: int = ELLIPSE_SEGMENTS
    spline_segments: int = SPLINE_SEGMENTS
    curve_segments: bool = False  # also intersect sampled circles, arcs, ellipses and splines

    def __post_init__(self):
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")
        if not self.arc_segment_angle > 0:
            raise ValueError(f"arc_segment_angle must be positive, got {self.arc_segment_angle}")
        for name in ("min_arc_segments", "circle_segments", "ellipse_segments", "spline_segments"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
