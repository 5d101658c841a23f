from __future__ import annotations

from dataclasses import dataclass

from hiddenline.geometry.tolerance import near
from hiddenline.geometry.vector import Point2, Point3, ProjectionPlane, Vector3

__all__ = ["CoordinateSystem3", "ProjectionPlane", "ViewBasis", "view_basis"]


@dataclass(frozen=True)
class CoordinateSystem3:
    origin: Point3
    axis_x: Vector3
    axis_y: Vector3
    axis_z: Vector3

    @staticmethod
    def from_points(p1: Point3, p2: Point3, p3: Point3) -> "CoordinateSystem3":
        """Right-handed frame at ``p1`` with x towards ``p2`` and ``p3`` in the xy half-plane."""
        axis_x = (p2 - p1).normalize()
        axis_z = axis_x.cross(p3 - p1).normalize()
        return CoordinateSystem3(origin=p1, axis_x=axis_x, axis_y=axis_z.cross(axis_x), axis_z=axis_z)

    def to_local(self, p: Point3) -> Point3:
        v = p - self.origin
        return Vector3(v.dot(self.axis_x), v.dot(self.axis_y), v.dot(self.axis_z))

    def from_local(self, p: Point3) -> Point3:
        return self.origin + self.axis_x * p.x + self.axis_y * p.y + self.axis_z * p.z

    def to_plane(self, p: Point3) -> Point2:
        """Local (x, y) of ``p``; the z offset is discarded."""
        return self.to_local(p).to_point2(ProjectionPlane.XOY)


@dataclass(frozen=True)
class ViewBasis:
    """Orthonormal (u, v, n) frame looking along ``n``."""
    u: Vector3
    v: Vector3
    n: Vector3

    def project(self, p: Point3) -> Point2:
        return Point2(p.dot(self.u), p.dot(self.v))

    def depth(self, p: Point3) -> float:
        return p.dot(self.n)


def view_basis(direction: Vector3) -> ViewBasis:
    """Return a stable basis for a view direction.

    ``u`` is taken perpendicular to world up (+Z); when looking straight along
    Z the world Y axis is used instead, which makes the +Z view reproduce the
    XY plane exactly.
    """
    n = direction.normalize()
    up = Vector3.z_axis()
    if near(abs(up.dot(n)), 1.0):
        up = Vector3.y_axis()
    u = up.cross(n).normalize()
    v = n.cross(u).normalize()
    return ViewBasis(u=u, v=v, n=n)
