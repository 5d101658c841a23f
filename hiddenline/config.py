"""
Occlusion pass configuration.

``OcclusionConfig`` bundles the inputs every stage of the pass must agree on:
the view direction used by the occlusion predicate, the plane segments are
flattened onto before breaking, the breaking policy and the tolerance.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from hiddenline.errors import ConfigError, UndefinedOperationError
from hiddenline.geometry.frame import view_basis
from hiddenline.geometry.tolerance import DEFAULT_EPS, near
from hiddenline.geometry.vector import Point2, Point3, ProjectionPlane, Vector3

Projector = Callable[[Point3], Point2]


class BreakPolicy(Enum):
    """Which finite extents a crossing must lie on before it cuts a segment."""
    BOTH_EXTENTS = "both"
    TARGET_EXTENT = "target"


# Axis each coordinate plane drops when flattening.
_PLANE_AXES = {
    ProjectionPlane.XOY: Vector3.z_axis(),
    ProjectionPlane.XOZ: Vector3.y_axis(),
    ProjectionPlane.YOZ: Vector3.x_axis(),
}


@dataclass(frozen=True)
class OcclusionConfig:
    view_direction: Vector3 = field(default_factory=Vector3.z_axis)
    # None flattens onto the plane perpendicular to ``view_direction``.
    reference_plane: Optional[ProjectionPlane] = ProjectionPlane.XOY
    break_policy: BreakPolicy = BreakPolicy.BOTH_EXTENTS
    eps: float = DEFAULT_EPS
    max_workers: int = 1

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "view_direction", self.view_direction.normalize())
        except UndefinedOperationError as exc:
            raise ConfigError("view_direction must be a non-zero vector") from exc
        try:
            eps = float(self.eps)
            max_workers = int(self.max_workers)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"eps and max_workers must be numbers, got {self.eps!r}, {self.max_workers!r}") from exc
        if not eps > 0.0:
            raise ConfigError(f"eps must be positive, got {self.eps!r}")
        if max_workers < 1:
            raise ConfigError(f"max_workers must be >= 1, got {self.max_workers!r}")
        object.__setattr__(self, "eps", eps)
        object.__setattr__(self, "max_workers", max_workers)
        plane = self.reference_plane
        if plane is not None and not self.view_matches_reference_plane():
            warnings.warn(
                f"view_direction {self.view_direction.to_tuple()} is not perpendicular to reference_plane "
                f"{plane.value}; segments are broken in a different plane than they are occluded in",
                RuntimeWarning,
                stacklevel=3,
            )

    def view_matches_reference_plane(self) -> bool:
        """True when breaking happens in the plane perpendicular to the view."""
        plane = self.reference_plane
        if plane is None:
            return True
        axis = _PLANE_AXES[plane]
        return near(abs(self.view_direction.dot(axis)), 1.0, self.eps)

    def projector(self) -> Projector:
        """Map a 3D point onto the 2D plane used for segment breaking."""
        plane = self.reference_plane
        if plane is not None:
            return lambda p: p.to_point2(plane)
        return view_basis(self.view_direction).project

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "OcclusionConfig":
        """Build from plain JSON-like values.

        Recognised keys: ``view_direction`` ([x, y, z]), ``reference_plane``
        ("xoy" | "xoz" | "yoz" | "view" | null), ``break_policy``
        ("both" | "target"), ``eps`` and ``max_workers``.
        """
        if not isinstance(data, Mapping):
            raise ConfigError("config must be a mapping")
        unknown = set(data) - {"view_direction", "reference_plane", "break_policy", "eps", "max_workers"}
        if unknown:
            raise ConfigError(f"unknown config keys: {sorted(unknown)}")
        kwargs: dict = {}
        if "view_direction" in data:
            raw = data["view_direction"]
            try:
                x, y, z = (float(c) for c in raw)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"view_direction must be three numbers, got {raw!r}") from exc
            kwargs["view_direction"] = Vector3(x, y, z)
        if "reference_plane" in data:
            raw = data["reference_plane"]
            if raw is None or raw == "view":
                kwargs["reference_plane"] = None
            else:
                try:
                    kwargs["reference_plane"] = ProjectionPlane(str(raw).lower())
                except ValueError as exc:
                    raise ConfigError(f"unknown reference_plane {raw!r}") from exc
        if "break_policy" in data:
            raw = data["break_policy"]
            try:
                kwargs["break_policy"] = BreakPolicy(str(raw).lower())
            except ValueError as exc:
                raise ConfigError(f"unknown break_policy {raw!r}") from exc
        for key, cast in (("eps", float), ("max_workers", int)):
            if key in data:
                try:
                    kwargs[key] = cast(data[key])
                except (TypeError, ValueError) as exc:
                    raise ConfigError(f"{key} must be a number, got {data[key]!r}") from exc
        return OcclusionConfig(**kwargs)

    def to_dict(self) -> dict:
        return {
            "view_direction": list(self.view_direction.to_tuple()),
            "reference_plane": self.reference_plane.value if self.reference_plane is not None else None,
            "break_policy": self.break_policy.value,
            "eps": self.eps,
            "max_workers": self.max_workers,
        }
