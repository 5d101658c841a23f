from __future__ import annotations

from hiddenline.geometry.intersect import ray_plane_intersection
from hiddenline.geometry.tolerance import DEFAULT_EPS
from hiddenline.geometry.vector import Point3, Vector3
from hiddenline.solids.surface import SimpleSurface


def is_point_occluded(point: Point3, face: SimpleSurface, direction: Vector3, eps: float = DEFAULT_EPS) -> bool:
    """True when ``face`` hides ``point`` from a viewer looking along ``direction``.

    The face must be strictly ahead of the point along the ray; a face through
    or behind the point never hides it. Hits on the face border count, hits
    inside a hole do not.
    """
    d = direction.normalize()
    hit = ray_plane_intersection(point, d, face.origin, face.normal, eps)
    if hit is None:
        return False
    if (hit - point).dot(d) < eps:
        return False
    return face.contains_point(hit, include_border=True)
