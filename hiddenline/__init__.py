"""Hidden-line removal for extruded solids."""

from hiddenline.config import BreakPolicy, OcclusionConfig
from hiddenline.errors import (
    ConfigError,
    DegenerateConstructionError,
    HiddenLineError,
    OcclusionCancelled,
    SceneFormatError,
    UndefinedOperationError,
)
from hiddenline.occlusion import break_segments, is_point_occluded, occlude, occlude_self, run_occlusion
from hiddenline.solids import FlatPlane, Prism, SimpleSurface

__version__ = "0.1.0"

__all__ = [
    "BreakPolicy",
    "OcclusionConfig",
    "HiddenLineError",
    "DegenerateConstructionError",
    "UndefinedOperationError",
    "ConfigError",
    "SceneFormatError",
    "OcclusionCancelled",
    "break_segments",
    "is_point_occluded",
    "occlude",
    "occlude_self",
    "run_occlusion",
    "FlatPlane",
    "Prism",
    "SimpleSurface",
]
