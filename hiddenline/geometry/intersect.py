from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from hiddenline.geometry.tolerance import DEFAULT_EPS, near
from hiddenline.geometry.vector import Point2, Point3, Vector2, Vector3


def ray_plane_intersection(
    origin: Point3,
    direction: Vector3,
    plane_point: Point3,
    plane_normal: Vector3,
    eps: float = DEFAULT_EPS,
) -> Optional[Point3]:
    """Intersect the line ``origin + t * direction`` with a plane.

    ``t`` may be negative; callers decide whether only forward hits count.
    Returns None when the line is parallel to the plane.
    """
    denom = plane_normal.dot(direction)
    if near(denom, 0.0, eps):
        return None
    t = plane_normal.dot(plane_point - origin) / denom
    return origin + direction * t


def line_intersection_2d(p: Point2, v1: Vector2, q: Point2, v2: Vector2, eps: float = DEFAULT_EPS) -> Optional[Point2]:
    """Intersection of the infinite lines ``p + t*v1`` and ``q + s*v2``, None if parallel."""
    denom = v1.cross(v2)
    if near(denom, 0.0, eps):
        return None
    t = v2.cross(p - q) / denom
    return p + v1 * t


def lines_coplanar(p1: Point3, v1: Vector3, p2: Point3, v2: Vector3, eps: float = DEFAULT_EPS) -> bool:
    gap = p2 - p1
    return near(v1.cross(gap).cross(v2.cross(gap)).length(), 0.0, eps)


# Coordinate pairs tried in order when solving a coplanar 3D line pair in 2D.
_SUBPLANES = (("x", "y"), ("x", "z"), ("y", "z"))


def line_intersection_3d(p1: Point3, v1: Vector3, p2: Point3, v2: Vector3, eps: float = DEFAULT_EPS) -> Optional[Point3]:
    """Intersection of two 3D lines, None when skew or parallel."""
    if not lines_coplanar(p1, v1, p2, v2, eps):
        return None
    for a, b in _SUBPLANES:
        v1a, v1b = getattr(v1, a), getattr(v1, b)
        v2a, v2b = getattr(v2, a), getattr(v2, b)
        det = v1a * v2b - v1b * v2a
        if near(det, 0.0, eps):
            continue
        gap_a = getattr(p1, a) - getattr(p2, a)
        gap_b = getattr(p2, b) - getattr(p1, b)
        t = (v1b * gap_a + v1a * gap_b) / (v2a * v1b - v1a * v2b)
        return p2 + v2 * t
    return None


def plane_intersection(
    p1: Point3,
    normal1: Vector3,
    p2: Point3,
    normal2: Vector3,
    eps: float = DEFAULT_EPS,
) -> Optional[Tuple[Point3, Vector3]]:
    """Line shared by two planes as (point, unit direction), None for parallel planes.

    The point is the one closest to the origin, written as ``t*n1 + s*n2`` and
    solved from the two plane offset equations.
    """
    n = normal1.cross(normal2)
    if near(n.length(), 0.0, eps):
        return None
    s1 = normal1.dot(p1)
    s2 = normal2.dot(p2)
    d = normal1.dot(normal2)
    A = np.array([[normal1.dot(normal1), d], [d, normal2.dot(normal2)]], dtype=float)
    t, s = np.linalg.solve(A, np.array([s1, s2], dtype=float))
    return normal1 * float(t) + normal2 * float(s), n.normalize()


def projection_on_line(p: Point2, a: Point2, b: Point2) -> Point2:
    """Foot of the perpendicular from ``p`` onto the line through ``a`` and ``b``."""
    if a == b:
        return a
    r1 = p - a
    r2 = b - a
    t = r1.dot(r2) / r2.dot(r2)
    return a + r2 * t


def _line_axis(points: Sequence[Any], origin: Any) -> Any:
    far = max(points, key=lambda q: (q - origin).length())
    span = far - origin
    if span.length() == 0.0:
        return None
    return span.normalize()


def sort_points_on_line_2d(points: Sequence[Point2]) -> List[Point2]:
    """Order collinear points along their common line, starting from the lowest parameter."""
    if len(points) <= 1:
        return list(points)
    origin = points[0]
    axis = _line_axis(points, origin)
    if axis is None:
        return list(points)
    ts = sorted((p - origin).dot(axis) for p in points)
    return [origin + axis * t for t in ts]


def sort_points_on_line_3d(points: Sequence[Point3]) -> List[Point3]:
    if len(points) <= 1:
        return list(points)
    origin = points[0]
    axis = _line_axis(points, origin)
    if axis is None:
        return list(points)
    ts = sorted((p - origin).dot(axis) for p in points)
    return [origin + axis * t for t in ts]
