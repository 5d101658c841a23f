"""
Geometry kernel: tolerant comparison, vectors, rings, segments and
intersection primitives used by the occlusion engine.
"""

from hiddenline.geometry.frame import CoordinateSystem3, ViewBasis, view_basis
from hiddenline.geometry.polygon import Containment, Polygon2, PolygonWithHoles, classify
from hiddenline.geometry.segment import Segment2, Segment3
from hiddenline.geometry.tolerance import DEFAULT_EPS, compare, near
from hiddenline.geometry.transform import EulerAngle, EulerOrder, Quaternion
from hiddenline.geometry.vector import Point2, Point3, ProjectionPlane, Vector2, Vector3

__all__ = [
    "DEFAULT_EPS",
    "compare",
    "near",
    "Vector2",
    "Vector3",
    "Point2",
    "Point3",
    "ProjectionPlane",
    "EulerAngle",
    "EulerOrder",
    "Quaternion",
    "CoordinateSystem3",
    "ViewBasis",
    "view_basis",
    "Containment",
    "Polygon2",
    "PolygonWithHoles",
    "classify",
    "Segment2",
    "Segment3",
]
