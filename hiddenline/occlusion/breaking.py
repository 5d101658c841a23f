"""
Segment breaking.

Every segment is flattened onto the configured reference plane and cut at the
points where other segments cross it there. The 3D sub-segments keep the
parent's direction and cover it exactly, so a sub-segment is either wholly
visible or wholly hidden as long as visibility only changes at crossings.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional, Sequence

from hiddenline.config import BreakPolicy, OcclusionConfig
from hiddenline.errors import OcclusionCancelled
from hiddenline.geometry.intersect import line_intersection_2d
from hiddenline.geometry.segment import Segment2, Segment3
from hiddenline.geometry.tolerance import near

logger = logging.getLogger(__name__)


def _cut_parameters(target: Segment2, breakers: Sequence[Optional[Segment2]], skip: int, config: OcclusionConfig) -> List[float]:
    eps = config.eps
    length = target.length
    direction = target.direction
    params: List[float] = []
    for j, breaker in enumerate(breakers):
        if j == skip or breaker is None:
            continue
        if near(direction.cross(breaker.direction), 0.0, eps):
            continue
        hit = line_intersection_2d(target.p1, direction, breaker.p1, breaker.direction, eps)
        if hit is None or not target.contains(hit, eps):
            continue
        if config.break_policy is BreakPolicy.BOTH_EXTENTS and not breaker.contains(hit, eps):
            continue
        offset = (hit - target.p1).dot(direction)
        if offset < eps or length - offset < eps:
            continue
        params.append(offset / length)
    params.sort()
    merged: List[float] = []
    for t in params:
        if merged and (t - merged[-1]) * length < eps:
            continue
        merged.append(t)
    return merged


def break_segments(
    segments: Sequence[Segment3],
    config: Optional[OcclusionConfig] = None,
    cancel: Optional[threading.Event] = None,
) -> List[Segment3]:
    """Split each segment where the others cross it in the reference plane.

    Segments whose projection has (near) zero length are dropped. Crossings
    within ``eps`` of a segment's ends or of each other are ignored, so the
    output never contains zero-length pieces and breaking it again changes
    nothing. Output keeps input order, each parent's pieces in sequence.
    """
    config = config or OcclusionConfig()
    project = config.projector()
    flat: List[Optional[Segment2]] = []
    for s in segments:
        s2 = Segment2(project(s.p1), project(s.p2))
        flat.append(None if s2.is_degenerate(config.eps) else s2)

    out: List[Segment3] = []
    dropped = 0
    for i, target in enumerate(segments):
        if cancel is not None and cancel.is_set():
            raise OcclusionCancelled(f"segment breaking cancelled at segment {i} of {len(segments)}")
        target2 = flat[i]
        if target2 is None:
            dropped += 1
            continue
        prev = target.p1
        for t in _cut_parameters(target2, flat, i, config):
            current = target.point_at(t)
            out.append(Segment3(prev, current))
            prev = current
        out.append(Segment3(prev, target.p2))
    logger.debug(
        "broke %d segments into %d pieces (%d degenerate in projection dropped)",
        len(segments),
        len(out),
        dropped,
    )
    return out
