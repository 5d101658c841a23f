from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from hiddenline.errors import UndefinedOperationError
from hiddenline.geometry.vector import Vector3


class EulerOrder(Enum):
    XYZ = "xyz"
    XZY = "xzy"
    YXZ = "yxz"
    YZX = "yzx"
    ZXY = "zxy"
    ZYX = "zyx"


@dataclass(frozen=True)
class EulerAngle:
    """Euler rotation in radians, composed in ``order``."""
    x: float
    y: float
    z: float
    order: EulerOrder = EulerOrder.XYZ


# Sign pattern (sx, sy, sz, sw) of the mixed half-angle terms per order.
_ORDER_SIGNS = {
    EulerOrder.XYZ: (1.0, -1.0, 1.0, -1.0),
    EulerOrder.XZY: (-1.0, -1.0, 1.0, 1.0),
    EulerOrder.YXZ: (1.0, -1.0, -1.0, 1.0),
    EulerOrder.YZX: (1.0, 1.0, -1.0, -1.0),
    EulerOrder.ZXY: (-1.0, 1.0, 1.0, -1.0),
    EulerOrder.ZYX: (-1.0, 1.0, -1.0, 1.0),
}


@dataclass(frozen=True)
class Quaternion:
    x: float
    y: float
    z: float
    w: float

    @staticmethod
    def identity() -> "Quaternion":
        return Quaternion(0.0, 0.0, 0.0, 1.0)

    @staticmethod
    def from_euler(angle: EulerAngle) -> "Quaternion":
        c1, c2, c3 = math.cos(angle.x / 2), math.cos(angle.y / 2), math.cos(angle.z / 2)
        s1, s2, s3 = math.sin(angle.x / 2), math.sin(angle.y / 2), math.sin(angle.z / 2)
        sx, sy, sz, sw = _ORDER_SIGNS[angle.order]
        return Quaternion(
            x=s1 * c2 * c3 + sx * c1 * s2 * s3,
            y=c1 * s2 * c3 + sy * s1 * c2 * s3,
            z=c1 * c2 * s3 + sz * s1 * s2 * c3,
            w=c1 * c2 * c3 + sw * s1 * s2 * s3,
        )

    @staticmethod
    def from_axis_angle(axis: Vector3, angle: float) -> "Quaternion":
        a = axis.normalize()
        s = math.sin(angle / 2)
        return Quaternion(a.x * s, a.y * s, a.z * s, math.cos(angle / 2))

    def norm(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w)

    def normalize(self) -> "Quaternion":
        n = self.norm()
        if n == 0.0:
            raise UndefinedOperationError("Zero quaternion could not be normalized.")
        return Quaternion(self.x / n, self.y / n, self.z / n, self.w / n)

    def rotate(self, v: Vector3) -> Vector3:
        """Rotate ``v`` by this unit quaternion (q * v * conj(q))."""
        qx, qy, qz, qw = self.x, self.y, self.z, self.w
        ix = qw * v.x + qy * v.z - qz * v.y
        iy = qw * v.y + qz * v.x - qx * v.z
        iz = qw * v.z + qx * v.y - qy * v.x
        iw = -qx * v.x - qy * v.y - qz * v.z
        return Vector3(
            ix * qw - iw * qx - iy * qz + iz * qy,
            iy * qw - iw * qy - iz * qx + ix * qz,
            iz * qw - iw * qz - ix * qy + iy * qx,
        )

    def to_matrix(self) -> np.ndarray:
        """3x3 rotation matrix equivalent to :meth:`rotate`."""
        x, y, z, w = self.x, self.y, self.z, self.w
        return np.array(
            [
                [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
                [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
                [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
            ],
            dtype=float,
        )

    def rotate_many(self, points: np.ndarray) -> np.ndarray:
        """Rotate an (N, 3) array of points."""
        pts = np.asarray(points, dtype=float).reshape(-1, 3)
        return pts @ self.to_matrix().T
