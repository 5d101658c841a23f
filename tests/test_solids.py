from __future__ import annotations

import math

import pytest

from hiddenline.errors import DegenerateConstructionError
from hiddenline.geometry.transform import Quaternion
from hiddenline.geometry.vector import Point3, Vector3
from hiddenline.solids.edges import CurveEdge, StraightEdge, edge_chain_points, make_edge
from hiddenline.solids.faces import FlatPlane, RuledSurface
from hiddenline.solids.prism import Prism, Solid


def _square_plane(clockwise: bool = False) -> FlatPlane:
    pts = [Point3(0, 0, 0), Point3(10, 0, 0), Point3(10, 10, 0), Point3(0, 10, 0)]
    if clockwise:
        pts = list(reversed(pts))
    return FlatPlane.from_point_lists([[pts[i], pts[(i + 1) % 4]] for i in range(4)])


def _half_circle(radius: float = 1.0, steps: int = 4) -> list[Point3]:
    # Arc in the XZ plane from -90 to +90 degrees around the Y axis.
    out = []
    for k in range(steps + 1):
        a = -math.pi / 2 + math.pi * k / steps
        out.append(Point3(radius * math.cos(a), 0.0, radius * math.sin(a)))
    return out


def test_make_edge_picks_variant() -> None:
    assert isinstance(make_edge([Point3(0, 0, 0), Point3(1, 0, 0)]), StraightEdge)
    assert isinstance(make_edge(_half_circle()), CurveEdge)
    with pytest.raises(DegenerateConstructionError, match="less than 2"):
        make_edge([Point3(0, 0, 0)])
    with pytest.raises(DegenerateConstructionError, match="less than 3"):
        CurveEdge((Point3(0, 0, 0), Point3(1, 0, 0)))


def test_edges_decompose_and_reverse() -> None:
    curve = make_edge(_half_circle())
    assert len(curve.decompose()) == 4
    assert curve.reversed().first() == curve.last()
    straight = StraightEdge(Point3(0, 0, 0), Point3(0, 2, 0))
    assert straight.reversed().points() == [Point3(0, 2, 0), Point3(0, 0, 0)]
    assert straight.move(Vector3(3, 0, 0), 1.5).p1 == Point3(1.5, 0, 0)


def test_curve_rotation_matches_point_rotation() -> None:
    q = Quaternion.from_axis_angle(Vector3(1, 1, 0), 0.8)
    curve = make_edge(_half_circle())
    rotated = curve.rotate(q)
    for before, after in zip(curve.points(), rotated.points()):
        assert after == q.rotate(before)


def test_flat_plane_normal_and_reverse() -> None:
    plane = _square_plane()
    assert plane.normal == Vector3(0, 0, 1)
    flipped = plane.reversed()
    assert flipped.normal == Vector3(0, 0, -1)
    assert edge_chain_points(flipped.outer)[0] == Point3(0, 0, 0)
    surfaces = plane.decompose_to_simple_surfaces()
    assert len(surfaces) == 1
    assert surfaces[0].normal == plane.normal


def test_flat_plane_with_hole_decomposes_into_one_surface() -> None:
    hole = [
        [Point3(3, 3, 0), Point3(3, 7, 0)],
        [Point3(3, 7, 0), Point3(7, 7, 0)],
        [Point3(7, 7, 0), Point3(3, 3, 0)],
    ]
    plane = _square_plane().add_inner(hole)
    (surface,) = plane.decompose_to_simple_surfaces()
    assert len(surface.inners) == 1
    assert len(plane.visible_segments()) == 7


def test_ruled_surface_rails_must_match() -> None:
    with pytest.raises(DegenerateConstructionError, match="same number"):
        RuledSurface(make_edge(_half_circle()), StraightEdge(Point3(0, 0, 0), Point3(1, 0, 0)))


def test_ruled_surface_strips_and_rulings() -> None:
    ruled = RuledSurface.sweep(make_edge(_half_circle()), Vector3(0, 0, 0), Vector3(0, 5, 0))
    assert len(ruled.rulings()) == 5
    strips = ruled.decompose_to_simple_surfaces()
    assert len(strips) == 4
    for strip in strips:
        assert strip.normal.y == pytest.approx(0.0)


def test_curved_ruled_surface_adds_silhouette_ruling() -> None:
    ruled = RuledSurface.sweep(make_edge(_half_circle()), Vector3(0, 0, 0), Vector3(0, 5, 0))
    along_z = ruled.visible_segments(Vector3(0, 0, 1))
    assert len(along_z) == 3
    assert along_z[0].p1 == Point3(1, 5, 0) and along_z[0].p2 == Point3(1, 0, 0)
    # Seen along X every strip faces the same way.
    assert len(ruled.visible_segments(Vector3(1, 0, 0))) == 2


def test_straight_ruled_surface_shows_end_rulings_only() -> None:
    ruled = RuledSurface.sweep(StraightEdge(Point3(0, 0, 0), Point3(4, 0, 0)), Vector3(0, 0, 0), Vector3(0, 0, 3))
    segs = ruled.visible_segments()
    assert len(segs) == 2
    assert segs[0].p1 == Point3(0, 0, 3)
    assert segs[1].p2 == Point3(4, 0, 0)


def test_prism_box_decomposition() -> None:
    box = Prism(_square_plane(), Vector3(0, 0, 0), Vector3(0, 0, 10))
    assert isinstance(box, Solid)
    assert len(box.decompose_to_simple_surfaces()) == 6
    assert len(box.decompose_to_segments()) == 16
    assert len(box.faces) == 6


def test_prism_orients_outline_along_the_sweep() -> None:
    sweep = Vector3(0, 0, 10)
    box = Prism(_square_plane(clockwise=True), Vector3(0, 0, 0), sweep)
    assert box.plane.normal.dot(sweep) > 0.0
    down = Prism(_square_plane(), Vector3(0, 0, 0), Vector3(0, 0, -4))
    assert down.plane.normal == Vector3(0, 0, -1)


def test_prism_with_hole_gets_inner_walls() -> None:
    hole = [
        [Point3(3, 3, 0), Point3(7, 3, 0)],
        [Point3(7, 3, 0), Point3(7, 7, 0)],
        [Point3(7, 7, 0), Point3(3, 7, 0)],
        [Point3(3, 7, 0), Point3(3, 3, 0)],
    ]
    ring = Prism(_square_plane().add_inner(hole), Vector3(0, 0, 0), Vector3(0, 0, 2))
    surfaces = ring.decompose_to_simple_surfaces()
    assert len(surfaces) == 10
    assert sum(1 for s in surfaces if s.inners) == 2


def test_prism_zero_sweep_raises() -> None:
    with pytest.raises(DegenerateConstructionError, match="zero length"):
        Prism(_square_plane(), Vector3(0, 0, 1), Vector3(0, 0, 1))


def test_prism_transforms() -> None:
    box = Prism(_square_plane(), Vector3(0, 0, 0), Vector3(0, 0, 10))
    moved = box.translate(Vector3(0, 0, 5))
    zs = sorted({round(s.origin.z, 6) for s in moved.decompose_to_simple_surfaces() if abs(s.normal.z) > 0.5})
    assert zs == [5.0, 15.0]
    assert box.move(Vector3(0, 0, 2), 5.0).plane.outer[0].first() == Point3(0, 0, 5)
    q = Quaternion.from_axis_angle(Vector3.x_axis(), math.pi / 2)
    turned = box.rotate(q)
    assert turned.forward == Vector3(0, -10, 0)
    cap_points = [p for s in turned.decompose_to_simple_surfaces() for p in s.outer_boundary()]
    assert all(p.y == pytest.approx(0.0) or p.y == pytest.approx(-10.0) for p in cap_points)


def test_prism_with_zero_length_outline_edge_fails_at_construction() -> None:
    pts = [Point3(0, 0, 0), Point3(4, 0, 0), Point3(4, 4, 0), Point3(4, 4, 0), Point3(0, 4, 0)]
    outline = [[pts[i], pts[(i + 1) % 5]] for i in range(5)]
    with pytest.raises(DegenerateConstructionError, match="degenerate face"):
        Prism(FlatPlane.from_point_lists(outline), Vector3(0, 0, 0), Vector3(0, 0, 4))


def test_prism_swept_inside_its_own_plane_fails_at_construction() -> None:
    with pytest.raises(DegenerateConstructionError, match="outline plane"):
        Prism(_square_plane(), Vector3(0, 0, 0), Vector3(3, 0, 0))


def test_prism_surfaces_are_built_once() -> None:
    box = Prism(_square_plane(), Vector3(0, 0, 0), Vector3(0, 0, 10))
    first = box.decompose_to_simple_surfaces()
    second = box.decompose_to_simple_surfaces()
    assert all(a is b for a, b in zip(first, second))
    first.clear()
    assert len(box.decompose_to_simple_surfaces()) == 6
