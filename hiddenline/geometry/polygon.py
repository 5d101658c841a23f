"""
Planar rings and the point-in-ring predicate.

The containment test is the ray-crossing variant described by Hormann and
Agathos ("The Point in Polygon Problem for Arbitrary Polygons", 2001). It is
orientation-agnostic and reports points lying on an edge or vertex separately
from interior points, which the surface and occlusion tests rely on.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from hiddenline.errors import DegenerateConstructionError
from hiddenline.geometry.tolerance import DEFAULT_EPS, near
from hiddenline.geometry.vector import Point2, Vector2


class Containment(IntEnum):
    OUTSIDE = 0
    INSIDE = 1
    ON_BOUNDARY = -1


def signed_area(p1: Point2, p2: Point2, p3: Point2) -> float:
    return (p2 - p1).cross(p3 - p1) * 0.5


def triangle_area(p1: Point2, p2: Point2, p3: Point2) -> float:
    return abs(signed_area(p1, p2, p3))


def is_counter_clockwise(p1: Point2, p2: Point2, p3: Point2) -> bool:
    return signed_area(p1, p2, p3) > 0.0


def is_triangle(p1: Point2, p2: Point2, p3: Point2) -> bool:
    l1 = p1.distance_to(p2)
    l2 = p1.distance_to(p3)
    l3 = p2.distance_to(p3)
    return l1 + l2 > l3 and l1 + l3 > l2 and l2 + l3 > l1


def circumcenter(p1: Point2, p2: Point2, p3: Point2) -> Optional[Point2]:
    """Centre of the circle through three points, None when they are collinear."""
    if not is_triangle(p1, p2, p3):
        return None
    ax, ay = p2.x - p1.x, p2.y - p1.y
    bx, by = p3.x - p1.x, p3.y - p1.y
    d = 2.0 * (ax * by - ay * bx)
    if d == 0.0:
        return None
    return Point2(
        p1.x + (by * (ax * ax + ay * ay) - ay * (bx * bx + by * by)) / d,
        p1.y + (ax * (bx * bx + by * by) - bx * (ax * ax + ay * ay)) / d,
    )


def _crossing_area(ip: Point2, ip_next: Point2, p: Point2) -> float:
    return (ip.x - p.x) * (ip_next.y - p.y) - (ip_next.x - p.x) * (ip.y - p.y)


def classify(ring: Sequence[Point2], p: Point2, eps: float = DEFAULT_EPS) -> Containment:
    """Classify ``p`` against the closed ring through ``ring`` (last point joins the first)."""
    n = len(ring)
    if n < 3:
        return Containment.OUTSIDE
    res = 0
    ip = ring[0]
    for i in range(1, n + 1):
        ip_next = ring[i % n]
        if near(ip_next.y, p.y, eps):
            if near(ip_next.x, p.x, eps) or (near(ip.y, p.y, eps) and ((ip_next.x > p.x) == (ip.x < p.x))):
                return Containment.ON_BOUNDARY
        if (ip.y < p.y) != (ip_next.y < p.y):
            if ip.x >= p.x:
                if ip_next.x > p.x:
                    res = 1 - res
                else:
                    d = _crossing_area(ip, ip_next, p)
                    if near(d, 0.0, eps):
                        return Containment.ON_BOUNDARY
                    if (d > 0.0) == (ip_next.y > ip.y):
                        res = 1 - res
            elif ip_next.x > p.x:
                d = _crossing_area(ip, ip_next, p)
                if near(d, 0.0, eps):
                    return Containment.ON_BOUNDARY
                if (d > 0.0) == (ip_next.y > ip.y):
                    res = 1 - res
        ip = ip_next
    return Containment.INSIDE if res == 1 else Containment.OUTSIDE


def contains_with_holes(
    outer: Sequence[Point2],
    holes: Iterable[Sequence[Point2]],
    p: Point2,
    include_border: bool = False,
    eps: float = DEFAULT_EPS,
) -> bool:
    """Area test for a ring with holes.

    The outer boundary counts as contained only with ``include_border``; a hole
    always subtracts its interior, and with ``include_border`` its boundary too.
    """
    where = classify(outer, p, eps)
    if where is Containment.INSIDE or (include_border and where is Containment.ON_BOUNDARY):
        for hole in holes:
            inner = classify(hole, p, eps)
            if inner is Containment.INSIDE or (include_border and inner is Containment.ON_BOUNDARY):
                return False
        return True
    return False


@dataclass
class Polygon2:
    """
    Closed planar ring of at least three points.

    Instances are value-like: transformations return new polygons. The only
    mutating operations are :meth:`make_counter_clockwise` and
    :meth:`make_clockwise`, which re-orient the ring in place by reversing
    every point after the first.
    """
    points: List[Point2]

    def __post_init__(self) -> None:
        self.points = list(self.points)
        if len(self.points) < 3:
            raise DegenerateConstructionError("Polygon2 requires at least 3 points")

    def __iter__(self) -> Iterator[Point2]:
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, i: int) -> Point2:
        return self.points[i]

    def __add__(self, v: Vector2) -> "Polygon2":
        return Polygon2([p + v for p in self.points])

    def __sub__(self, v: Vector2) -> "Polygon2":
        return self + (-v)

    def signed_area(self) -> float:
        """Shoelace area, positive for counter-clockwise rings."""
        s = 0.0
        n = len(self.points)
        for i in range(n):
            a = self.points[i]
            b = self.points[(i + 1) % n]
            s += a.x * b.y - b.x * a.y
        return 0.5 * s

    def area(self) -> float:
        return abs(self.signed_area())

    def is_counter_clockwise(self) -> bool:
        return self.signed_area() > 0.0

    def make_counter_clockwise(self) -> None:
        if self.is_counter_clockwise():
            return
        self.points[1:] = self.points[:0:-1]

    def make_clockwise(self) -> None:
        if not self.is_counter_clockwise():
            return
        self.points[1:] = self.points[:0:-1]

    def rotate(self, angle: float, center: Point2) -> "Polygon2":
        return Polygon2([center + (p - center).rotate(angle) for p in self.points])

    def classify(self, p: Point2, eps: float = DEFAULT_EPS) -> Containment:
        return classify(self.points, p, eps)

    def bounds(self) -> Tuple[Point2, Point2]:
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return Point2(min(xs), min(ys)), Point2(max(xs), max(ys))

    def __str__(self) -> str:
        return "Polygon2(" + ", ".join(f"({p.x:g}, {p.y:g})" for p in self.points) + ")"


@dataclass(frozen=True)
class PolygonWithHoles:
    outer: Polygon2
    inners: Tuple[Polygon2, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "inners", tuple(self.inners))

    def __add__(self, v: Vector2) -> "PolygonWithHoles":
        return PolygonWithHoles(self.outer + v, tuple(p + v for p in self.inners))

    def __sub__(self, v: Vector2) -> "PolygonWithHoles":
        return self + (-v)

    def rotate(self, angle: float, center: Point2) -> "PolygonWithHoles":
        return PolygonWithHoles(self.outer.rotate(angle, center), tuple(p.rotate(angle, center) for p in self.inners))

    def area(self) -> float:
        return max(0.0, self.outer.area() - math.fsum(p.area() for p in self.inners))

    def contains(self, p: Point2, include_border: bool = False, eps: float = DEFAULT_EPS) -> bool:
        return contains_with_holes(self.outer.points, (h.points for h in self.inners), p, include_border, eps)
