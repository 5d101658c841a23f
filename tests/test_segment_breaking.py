from __future__ import annotations

import threading

import pytest

from hiddenline.config import BreakPolicy, OcclusionConfig
from hiddenline.errors import OcclusionCancelled
from hiddenline.geometry.segment import Segment3
from hiddenline.geometry.vector import Point3, ProjectionPlane, Vector3
from hiddenline.occlusion.breaking import break_segments


def _seg(a: tuple, b: tuple) -> Segment3:
    return Segment3(Point3(*a), Point3(*b))


def _same(xs: list[Segment3], ys: list[Segment3]) -> bool:
    return len(xs) == len(ys) and all(x.p1 == y.p1 and x.p2 == y.p2 for x, y in zip(xs, ys))


def test_crossing_pair_splits_once_each_at_the_crossing() -> None:
    out = break_segments([_seg((0, 0, 0), (2, 2, 0)), _seg((0, 2, 0), (2, 0, 0))])
    assert len(out) == 4
    assert out[0].p1 == Point3(0, 0, 0) and out[0].p2 == Point3(1, 1, 0)
    assert out[1].p1 == Point3(1, 1, 0) and out[1].p2 == Point3(2, 2, 0)
    assert out[2].p1 == Point3(0, 2, 0) and out[2].p2 == Point3(1, 1, 0)
    assert out[3].p1 == Point3(1, 1, 0) and out[3].p2 == Point3(2, 0, 0)


def test_cut_points_are_lifted_back_onto_the_3d_segment() -> None:
    out = break_segments([_seg((0, 0, 0), (2, 2, 4)), _seg((0, 2, -1), (2, 0, -1))])
    assert out[0].p2 == Point3(1, 1, 2)
    assert out[2].p2 == Point3(1, 1, -1)


def test_non_crossing_segments_are_returned_unchanged() -> None:
    segs = [
        _seg((0, 0, 0), (10, 0, 0)),
        _seg((0, 1, 0), (10, 1, 0)),
        _seg((12, 0, 0), (12, 5, 0)),
    ]
    out = break_segments(segs)
    assert _same(out, segs)


def test_shared_endpoints_do_not_produce_zero_length_pieces() -> None:
    square = [
        _seg((0, 0, 0), (10, 0, 0)),
        _seg((10, 0, 0), (10, 10, 0)),
        _seg((10, 10, 0), (0, 10, 0)),
        _seg((0, 10, 0), (0, 0, 0)),
    ]
    out = break_segments(square)
    assert _same(out, square)
    assert all(s.length > 0.0 for s in out)


def test_segments_degenerate_in_projection_are_dropped() -> None:
    out = break_segments([_seg((0, 0, 0), (0, 0, 5)), _seg((-1, 0, 0), (1, 0, 0))])
    assert len(out) == 1
    assert out[0].p1 == Point3(-1, 0, 0)


def test_breaking_is_idempotent() -> None:
    segs = [
        _seg((0, 0, 0), (2, 2, 0)),
        _seg((0, 2, 0), (2, 0, 0)),
        _seg((-1, 1.5, 0), (3, 1.5, 0)),
        _seg((0.5, -1, 2), (0.5, 3, 2)),
    ]
    for policy in BreakPolicy:
        cfg = OcclusionConfig(break_policy=policy)
        once = break_segments(segs, cfg)
        twice = break_segments(once, cfg)
        assert len(once) > len(segs)
        assert _same(once, twice)


def test_policies_diverge_when_only_the_breaker_line_reaches_the_target() -> None:
    target = _seg((0, 0, 0), (4, 0, 0))
    breaker = _seg((1, 1, 0), (1, 3, 0))
    strict = break_segments([target, breaker], OcclusionConfig(break_policy=BreakPolicy.BOTH_EXTENTS))
    loose = break_segments([target, breaker], OcclusionConfig(break_policy=BreakPolicy.TARGET_EXTENT))
    assert _same(strict, [target, breaker])
    assert len(loose) == 3
    assert loose[0].p2 == Point3(1, 0, 0)
    assert loose[1].p1 == Point3(1, 0, 0)
    assert loose[2].p1 == Point3(1, 1, 0)


def test_reference_plane_controls_projection() -> None:
    # Crossing in XZ but separated in XY.
    segs = [_seg((0, 0, 0), (2, 0, 2)), _seg((0, 5, 2), (2, 5, 0))]
    assert len(break_segments(segs)) == 2
    xz = OcclusionConfig(reference_plane=ProjectionPlane.XOZ)
    assert len(break_segments(segs, xz)) == 4
    view = OcclusionConfig(view_direction=Vector3(0, -1, 0), reference_plane=None)
    assert len(break_segments(segs, view)) == 4


def test_breaking_can_be_cancelled() -> None:
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(OcclusionCancelled, match="cancelled"):
        break_segments([_seg((0, 0, 0), (1, 0, 0))], cancel=cancel)
