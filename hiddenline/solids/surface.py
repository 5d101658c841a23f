"""
Planar faces with holes.

A ``SimpleSurface`` is the unit of occlusion: one outer ring and zero or more
hole rings, all coplanar. Its normal comes from the first two outer edges, so
those two edges must not be parallel.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import List, Sequence, Tuple

from hiddenline.errors import DegenerateConstructionError, UndefinedOperationError
from hiddenline.geometry.frame import CoordinateSystem3
from hiddenline.geometry.intersect import line_intersection_3d, plane_intersection, sort_points_on_line_3d
from hiddenline.geometry.polygon import contains_with_holes
from hiddenline.geometry.segment import Segment3
from hiddenline.geometry.tolerance import DEFAULT_EPS, near
from hiddenline.geometry.transform import Quaternion
from hiddenline.geometry.vector import Point2, Point3, Vector3

Ring3 = Tuple[Segment3, ...]


def ring_from_points(points: Sequence[Point3], what: str = "ring") -> Ring3:
    n = len(points)
    if n < 3:
        raise DegenerateConstructionError(f"failed to build a {what} with less than 3 points")
    return tuple(Segment3(points[i], points[(i + 1) % n]) for i in range(n))


def _face_normal(outer: Ring3, eps: float) -> Vector3:
    try:
        n = outer[0].direction.cross(outer[1].direction)
    except UndefinedOperationError as exc:
        raise UndefinedOperationError("surface normal is undefined: leading edge has zero length") from exc
    if near(n.length(), 0.0, eps):
        raise UndefinedOperationError("surface normal is undefined: first two edges are parallel")
    return n.normalize()


@dataclass(frozen=True)
class SimpleSurface:
    outer: Ring3
    inners: Tuple[Ring3, ...] = ()
    eps: float = DEFAULT_EPS
    normal: Vector3 = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "outer", tuple(self.outer))
        object.__setattr__(self, "inners", tuple(tuple(r) for r in self.inners))
        if len(self.outer) < 3:
            raise DegenerateConstructionError("failed to generate a SimpleSurface with less than 3 edges")
        for ring in self.inners:
            if len(ring) < 3:
                raise DegenerateConstructionError("failed to add a hole to a SimpleSurface with less than 3 edges")
        object.__setattr__(self, "normal", _face_normal(self.outer, self.eps))

    @staticmethod
    def from_points(
        outer: Sequence[Point3],
        holes: Sequence[Sequence[Point3]] = (),
        eps: float = DEFAULT_EPS,
    ) -> "SimpleSurface":
        return SimpleSurface(
            outer=ring_from_points(outer, "SimpleSurface"),
            inners=tuple(ring_from_points(h, "hole") for h in holes),
            eps=eps,
        )

    def add_inner(self, points: Sequence[Point3]) -> "SimpleSurface":
        return SimpleSurface(self.outer, self.inners + (ring_from_points(points, "hole"),), self.eps)

    def outer_boundary(self) -> List[Point3]:
        return [s.p1 for s in self.outer]

    def inner_boundaries(self) -> List[List[Point3]]:
        return [[s.p1 for s in ring] for ring in self.inners]

    def edges(self) -> List[Segment3]:
        out = list(self.outer)
        for ring in self.inners:
            out.extend(ring)
        return out

    @property
    def origin(self) -> Point3:
        return self.outer[0].p1

    def coordinate_system(self) -> CoordinateSystem3:
        axis_x = self.outer[0].direction
        return CoordinateSystem3(
            origin=self.origin,
            axis_x=axis_x,
            axis_y=self.normal.cross(axis_x),
            axis_z=self.normal,
        )

    @cached_property
    def _frame(self) -> CoordinateSystem3:
        return self.coordinate_system()

    @cached_property
    def _outer_2d(self) -> List[Point2]:
        return [self._frame.to_plane(p) for p in self.outer_boundary()]

    @cached_property
    def _inners_2d(self) -> List[List[Point2]]:
        return [[self._frame.to_plane(p) for p in ring] for ring in self.inner_boundaries()]

    def is_coplanar(self, p: Point3) -> bool:
        return near((p - self.origin).dot(self.normal), 0.0, self.eps)

    def contains_point(self, p: Point3, include_border: bool = False) -> bool:
        """True when ``p`` lies on this face's area.

        Off-plane points are rejected. The outer boundary counts only with
        ``include_border``; holes always subtract, and with ``include_border``
        their boundaries subtract as well.
        """
        if not self.is_coplanar(p):
            return False
        return contains_with_holes(self._outer_2d, self._inners_2d, self._frame.to_plane(p), include_border, self.eps)

    def translate(self, v: Vector3) -> "SimpleSurface":
        return SimpleSurface(
            tuple(s.translate(v) for s in self.outer),
            tuple(tuple(s.translate(v) for s in ring) for ring in self.inners),
            self.eps,
        )

    def move(self, direction: Vector3, distance: float) -> "SimpleSurface":
        return self.translate(direction.normalize() * distance)

    def rotate(self, quaternion: Quaternion) -> "SimpleSurface":
        return SimpleSurface(
            tuple(s.rotate(quaternion) for s in self.outer),
            tuple(tuple(s.rotate(quaternion) for s in ring) for ring in self.inners),
            self.eps,
        )

    def __str__(self) -> str:
        lines = ["SimpleSurface:", " outer:"]
        lines.extend(f"\t{s}" for s in self.outer)
        for ring in self.inners:
            lines.append(" inner:")
            lines.extend(f"\t{s}" for s in ring)
        return "\n".join(lines)


def face_intersection(f1: SimpleSurface, f2: SimpleSurface, include_border: bool = False) -> List[Segment3]:
    """Pieces of the line shared by two face planes that lie inside both faces."""
    line = plane_intersection(f1.origin, f1.normal, f2.origin, f2.normal, f1.eps)
    if line is None:
        return []
    p, direction = line
    hits: List[Point3] = []
    for edge in f1.edges() + f2.edges():
        if edge.is_degenerate(f1.eps):
            continue
        hit = line_intersection_3d(edge.p1, edge.direction, p, direction, f1.eps)
        if hit is not None:
            hits.append(hit)
    if len(hits) <= 1:
        return []
    ordered = sort_points_on_line_3d(hits)
    out: List[Segment3] = []
    for prev, current in zip(ordered, ordered[1:]):
        if prev == current:
            continue
        mid = prev + (current - prev) / 2
        if f1.contains_point(mid, include_border) and f2.contains_point(mid, include_border):
            out.append(Segment3(prev, current))
    return out
