from hiddenline.occlusion.breaking import break_segments
from hiddenline.occlusion.pipeline import (
    OcclusionResult,
    OcclusionStats,
    occlude,
    occlude_segments,
    occlude_self,
    run_occlusion,
)
from hiddenline.occlusion.predicate import is_point_occluded

__all__ = [
    "break_segments",
    "is_point_occluded",
    "occlude",
    "occlude_segments",
    "occlude_self",
    "run_occlusion",
    "OcclusionResult",
    "OcclusionStats",
]
