from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from hiddenline.errors import DegenerateConstructionError
from hiddenline.geometry.frame import CoordinateSystem3
from hiddenline.geometry.polygon import circumcenter
from hiddenline.geometry.tolerance import TWO_PI
from hiddenline.geometry.vector import Point2, Point3, Vector2, Vector3

# Default number of samples per half turn.
ARC_QUALITY = 64


@dataclass(frozen=True)
class ThreePointArc:
    """Circular arc from ``head`` through ``body`` to ``tail``."""
    head: Point2
    body: Point2
    tail: Point2

    def center(self) -> Point2:
        c = circumcenter(self.head, self.body, self.tail)
        if c is None:
            raise DegenerateConstructionError("arc points are collinear")
        return c

    def radius(self) -> float:
        c = self.center()
        return (c.distance_to(self.head) + c.distance_to(self.body) + c.distance_to(self.tail)) / 3.0

    def sweep(self) -> float:
        """Signed sweep angle from head to tail passing through body (positive is CCW)."""
        c = self.center()
        a0 = (self.head - c).polar_angle()
        ccw_tail = ((self.tail - c).polar_angle() - a0) % TWO_PI
        ccw_body = ((self.body - c).polar_angle() - a0) % TWO_PI
        if ccw_body <= ccw_tail:
            return ccw_tail
        return ccw_tail - TWO_PI

    def sample(self, quality: int = ARC_QUALITY) -> List[Point2]:
        """Polyline approximation; both endpoints are included exactly."""
        c = self.center()
        r = self.radius()
        a0 = (self.head - c).polar_angle()
        sweep = self.sweep()
        count = int(math.floor(abs(sweep) / math.pi * quality)) + 1
        each = sweep / count
        out = [self.head]
        out.extend(c + Vector2.from_polar(a0 + each * i) * r for i in range(1, count))
        out.append(self.tail)
        return out


def sample_arc_3d(head: Point3, body: Point3, tail: Point3, quality: int = ARC_QUALITY) -> List[Point3]:
    """Sample the arc through three 3D points inside their common plane."""
    try:
        frame = CoordinateSystem3.from_points(head, body, tail)
    except ArithmeticError as exc:
        raise DegenerateConstructionError("arc points are coincident or collinear") from exc
    arc = ThreePointArc(frame.to_plane(head), frame.to_plane(body), frame.to_plane(tail))
    pts = [frame.from_local(Vector3(p.x, p.y, 0.0)) for p in arc.sample(quality)]
    pts[0], pts[-1] = head, tail
    return pts
