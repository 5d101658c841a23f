"""
Whole-scene occlusion pass.

Boundary segments of every solid are broken at their mutual crossings, then
each piece is kept only if no planar face hides its midpoint along the view
direction. The per-piece test reads shared immutable data only, so with
``max_workers > 1`` it is fanned out over a thread pool.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from hiddenline.config import OcclusionConfig
from hiddenline.errors import OcclusionCancelled
from hiddenline.geometry.segment import Segment3
from hiddenline.occlusion.breaking import break_segments
from hiddenline.occlusion.predicate import is_point_occluded
from hiddenline.solids.prism import Solid
from hiddenline.solids.surface import SimpleSurface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OcclusionStats:
    input_segments: int
    broken_segments: int
    faces: int
    visible_segments: int
    elapsed_s: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "input_segments": self.input_segments,
            "broken_segments": self.broken_segments,
            "faces": self.faces,
            "visible_segments": self.visible_segments,
            "elapsed_s": self.elapsed_s,
        }


@dataclass(frozen=True)
class OcclusionResult:
    segments: List[Segment3]
    stats: OcclusionStats


def _check_cancel(cancel: Optional[threading.Event], where: str) -> None:
    if cancel is not None and cancel.is_set():
        raise OcclusionCancelled(f"occlusion cancelled during {where}")


def _filter_visible(
    pieces: Sequence[Segment3],
    faces: Sequence[SimpleSurface],
    config: OcclusionConfig,
    cancel: Optional[threading.Event],
) -> List[Segment3]:
    direction = config.view_direction

    def visible(piece: Segment3) -> bool:
        _check_cancel(cancel, "visibility testing")
        mid = piece.midpoint
        return not any(is_point_occluded(mid, face, direction, config.eps) for face in faces)

    if config.max_workers > 1 and len(pieces) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            flags = list(pool.map(visible, pieces))
    else:
        flags = [visible(p) for p in pieces]
    return [p for p, keep in zip(pieces, flags) if keep]


def occlude_segments(
    segments: Sequence[Segment3],
    faces: Sequence[SimpleSurface],
    config: Optional[OcclusionConfig] = None,
    cancel: Optional[threading.Event] = None,
) -> List[Segment3]:
    """Break ``segments`` against each other and keep the pieces no face hides."""
    config = config or OcclusionConfig()
    pieces = break_segments(segments, config, cancel)
    return _filter_visible(pieces, faces, config, cancel)


def run_occlusion(
    solids: Sequence[Solid],
    config: Optional[OcclusionConfig] = None,
    cancel: Optional[threading.Event] = None,
) -> OcclusionResult:
    config = config or OcclusionConfig()
    t0 = time.perf_counter()
    segments: List[Segment3] = []
    faces: List[SimpleSurface] = []
    for solid in solids:
        segments.extend(solid.decompose_to_segments(config.view_direction))
        faces.extend(solid.decompose_to_simple_surfaces())
    logger.debug("collected %d segments and %d faces from %d solids", len(segments), len(faces), len(solids))

    pieces = break_segments(segments, config, cancel)
    visible = _filter_visible(pieces, faces, config, cancel)
    stats = OcclusionStats(
        input_segments=len(segments),
        broken_segments=len(pieces),
        faces=len(faces),
        visible_segments=len(visible),
        elapsed_s=time.perf_counter() - t0,
    )
    logger.info(
        "occlusion pass: %d segments -> %d pieces -> %d visible (%.3fs)",
        stats.input_segments,
        stats.broken_segments,
        stats.visible_segments,
        stats.elapsed_s,
    )
    return OcclusionResult(segments=visible, stats=stats)


def occlude(solids: Sequence[Solid], config: Optional[OcclusionConfig] = None) -> List[Segment3]:
    """Visible pieces of all solid boundary segments, in input order."""
    return run_occlusion(solids, config).segments


def occlude_self(
    surface: SimpleSurface,
    probe: Segment3,
    config: Optional[OcclusionConfig] = None,
) -> List[Segment3]:
    """Trim ``probe`` against a single face.

    The face's outer boundary and the probe are broken together and every
    piece the face does not hide is returned, boundary pieces included.
    """
    return occlude_segments(list(surface.outer) + [probe], [surface], config)
