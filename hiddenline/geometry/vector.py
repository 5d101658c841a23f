"""
Vector and point value types.

Points and vectors share one immutable type per dimension (``Point3`` is an
alias of ``Vector3``). Equality is tolerant: two vectors compare equal when
every component is within ``DEFAULT_EPS``. Because tolerant equality is not
transitive the types are unhashable; use explicit spatial indexing rather than
sets or dict keys when deduplicating points.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Tuple

import numpy as np

from hiddenline.errors import UndefinedOperationError
from hiddenline.geometry.tolerance import near

if TYPE_CHECKING:
    from hiddenline.geometry.transform import Quaternion


class ProjectionPlane(Enum):
    """Coordinate plane used to flatten 3D geometry by dropping one axis."""
    XOY = "xoy"
    XOZ = "xoz"
    YOZ = "yoz"


@dataclass(frozen=True, eq=False)
class Vector2:
    """2D vector (also used as a point)."""
    x: float
    y: float

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vector2":
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> "Vector2":
        if scalar == 0.0:
            raise UndefinedOperationError("vector could not divide zero")
        return Vector2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2):
            return NotImplemented
        return near(self.x, other.x) and near(self.y, other.y)

    __hash__ = None  # type: ignore[assignment]

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector2") -> float:
        """Z component of the 3D cross product (signed parallelogram area)."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> "Vector2":
        L = self.length()
        if L == 0.0:
            raise UndefinedOperationError("Zero vector could not be normalized.")
        return self / L

    def orthogonal(self) -> "Vector2":
        """Unit vector rotated +pi/2."""
        L = self.length()
        if L == 0.0:
            raise UndefinedOperationError("Zero vector has no orthogonal vector.")
        return Vector2(-self.y / L, self.x / L)

    def rotate(self, angle: float) -> "Vector2":
        c, s = math.cos(angle), math.sin(angle)
        return Vector2(self.x * c - self.y * s, self.x * s + self.y * c)

    def polar_angle(self) -> float:
        return math.atan2(self.y, self.x)

    def distance_to(self, other: "Vector2") -> float:
        return (self - other).length()

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    @staticmethod
    def from_polar(angle: float) -> "Vector2":
        return Vector2(math.cos(angle), math.sin(angle))

    @staticmethod
    def zero() -> "Vector2":
        return Vector2(0.0, 0.0)


@dataclass(frozen=True, eq=False)
class Vector3:
    """3D vector for directions, normals and positions."""
    x: float
    y: float
    z: float

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector3":
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> "Vector3":
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> "Vector3":
        if scalar == 0.0:
            raise UndefinedOperationError("vector could not divide zero")
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return near(self.x, other.x) and near(self.y, other.y) and near(self.z, other.z)

    __hash__ = None  # type: ignore[assignment]

    def dot(self, other: "Vector3") -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        """Cross product."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> "Vector3":
        """Return unit vector; a zero vector has no direction."""
        L = self.length()
        if L == 0.0:
            raise UndefinedOperationError("Zero vector could not be normalized.")
        return self / L

    def distance_to(self, other: "Vector3") -> float:
        return (self - other).length()

    def move(self, direction: "Vector3", distance: float) -> "Vector3":
        """Translate ``distance`` units along ``direction``."""
        return self + direction.normalize() * distance

    def rotate(self, quaternion: "Quaternion") -> "Vector3":
        return quaternion.rotate(self)

    def to_point2(self, plane: ProjectionPlane) -> Vector2:
        if plane is ProjectionPlane.XOY:
            return Vector2(self.x, self.y)
        if plane is ProjectionPlane.XOZ:
            return Vector2(self.x, self.z)
        if plane is ProjectionPlane.YOZ:
            return Vector2(self.y, self.z)
        raise ValueError(f"Unsupported projection plane: {plane!r}")

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_array(self) -> np.ndarray:
        """Convert to numpy array."""
        return np.array([self.x, self.y, self.z], dtype=float)

    @staticmethod
    def from_array(arr: np.ndarray) -> "Vector3":
        return Vector3(float(arr[0]), float(arr[1]), float(arr[2]))

    @staticmethod
    def zero() -> "Vector3":
        return Vector3(0.0, 0.0, 0.0)

    @staticmethod
    def x_axis() -> "Vector3":
        return Vector3(1.0, 0.0, 0.0)

    @staticmethod
    def y_axis() -> "Vector3":
        return Vector3(0.0, 1.0, 0.0)

    @staticmethod
    def z_axis() -> "Vector3":
        return Vector3(0.0, 0.0, 1.0)


# Alias for clarity
Point2 = Vector2
Point3 = Vector3
