from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from hiddenline.geometry.tolerance import DEFAULT_EPS, compare, near
from hiddenline.geometry.vector import Point2, Point3, ProjectionPlane, Vector2, Vector3

if TYPE_CHECKING:
    from hiddenline.geometry.frame import ViewBasis
    from hiddenline.geometry.transform import Quaternion


def distance_to_segment(p: Point2, a: Point2, b: Point2, eps: float = DEFAULT_EPS) -> float:
    """Distance from ``p`` to the closed segment ``a``-``b``."""
    if a == b:
        return p.distance_to(a)
    v1 = b - a
    v2 = p - a
    v3 = p - b
    if compare(v1.dot(v2), 0.0, eps) < 0:
        return v2.length()
    if compare(v1.dot(v3), 0.0, eps) > 0:
        return v3.length()
    return abs(v1.cross(v2)) / v1.length()


def properly_intersect(a1: Point2, a2: Point2, b1: Point2, b2: Point2, eps: float = DEFAULT_EPS) -> bool:
    """Strict crossing: each segment's endpoints lie on opposite sides of the other."""
    c1 = (a2 - a1).cross(b1 - a1)
    c2 = (a2 - a1).cross(b2 - a1)
    c3 = (b2 - b1).cross(a1 - b1)
    c4 = (b2 - b1).cross(a2 - b1)
    return compare(c1, 0.0, eps) * compare(c2, 0.0, eps) < 0 and compare(c3, 0.0, eps) * compare(c4, 0.0, eps) < 0


@dataclass(frozen=True)
class Segment2:
    p1: Point2
    p2: Point2

    @property
    def length(self) -> float:
        return (self.p2 - self.p1).length()

    @property
    def direction(self) -> Vector2:
        return (self.p2 - self.p1).normalize()

    @property
    def orthogonal(self) -> Vector2:
        return (self.p2 - self.p1).orthogonal()

    @property
    def angle(self) -> float:
        return (self.p2 - self.p1).polar_angle()

    @property
    def midpoint(self) -> Point2:
        return self.p1 + (self.p2 - self.p1) * 0.5

    def is_degenerate(self, eps: float = DEFAULT_EPS) -> bool:
        return near(self.length, 0.0, eps)

    def distance_to_point(self, p: Point2, eps: float = DEFAULT_EPS) -> float:
        return distance_to_segment(p, self.p1, self.p2, eps)

    def contains(self, p: Point2, eps: float = DEFAULT_EPS) -> bool:
        return near(self.distance_to_point(p, eps), 0.0, eps)

    def properly_intersects(self, other: "Segment2", eps: float = DEFAULT_EPS) -> bool:
        return properly_intersect(self.p1, self.p2, other.p1, other.p2, eps)

    def sample(self) -> List[Point2]:
        return [self.p1, self.p2]

    def __str__(self) -> str:
        return f"Segment2(({self.p1.x:g}, {self.p1.y:g}) -> ({self.p2.x:g}, {self.p2.y:g}))"


@dataclass(frozen=True)
class Segment3:
    """Directed segment from ``p1`` to ``p2``.

    A zero-length segment is legal; it has no ``direction`` and is skipped by
    the breaking and occlusion passes.
    """
    p1: Point3
    p2: Point3

    @property
    def length(self) -> float:
        return (self.p2 - self.p1).length()

    @property
    def direction(self) -> Vector3:
        return (self.p2 - self.p1).normalize()

    @property
    def midpoint(self) -> Point3:
        return self.p1 + (self.p2 - self.p1) / 2

    def is_degenerate(self, eps: float = DEFAULT_EPS) -> bool:
        return near(self.length, 0.0, eps)

    def point_at(self, t: float) -> Point3:
        """Point at normalised parameter ``t`` (0 at ``p1``, 1 at ``p2``)."""
        return self.p1 + (self.p2 - self.p1) * t

    def reversed(self) -> "Segment3":
        return Segment3(self.p2, self.p1)

    def contains_point(self, p: Point3, include_endpoints: bool = True, eps: float = DEFAULT_EPS) -> bool:
        if p == self.p1 or p == self.p2:
            return include_endpoints
        return near(p.distance_to(self.p1) + p.distance_to(self.p2) - self.length, 0.0, eps)

    def to_segment2(self, plane: ProjectionPlane) -> Segment2:
        return Segment2(self.p1.to_point2(plane), self.p2.to_point2(plane))

    def project(self, basis: "ViewBasis") -> Segment2:
        return Segment2(basis.project(self.p1), basis.project(self.p2))

    def translate(self, v: Vector3) -> "Segment3":
        return Segment3(self.p1 + v, self.p2 + v)

    def move(self, direction: Vector3, distance: float) -> "Segment3":
        return Segment3(self.p1.move(direction, distance), self.p2.move(direction, distance))

    def rotate(self, quaternion: "Quaternion") -> "Segment3":
        return Segment3(quaternion.rotate(self.p1), quaternion.rotate(self.p2))

    def __str__(self) -> str:
        a, b = self.p1, self.p2
        return f"Segment3(({a.x:g}, {a.y:g}, {a.z:g}) -> ({b.x:g}, {b.y:g}, {b.z:g}))"
