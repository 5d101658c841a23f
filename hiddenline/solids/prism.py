from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple, runtime_checkable

from hiddenline.errors import DegenerateConstructionError, UndefinedOperationError
from hiddenline.geometry.segment import Segment3
from hiddenline.geometry.tolerance import DEFAULT_EPS, near
from hiddenline.geometry.transform import Quaternion
from hiddenline.geometry.vector import Vector3
from hiddenline.solids.faces import Face, FlatPlane, RuledSurface
from hiddenline.solids.surface import SimpleSurface


@runtime_checkable
class Solid(Protocol):
    """Anything the occlusion pipeline can consume."""

    def decompose_to_segments(self, view_direction: Optional[Vector3] = None) -> List[Segment3]:
        ...

    def decompose_to_simple_surfaces(self) -> List[SimpleSurface]:
        ...


@dataclass(frozen=True)
class Prism:
    """Closed solid swept from ``plane + backward`` to ``plane + forward``.

    The outline is wound so its normal points along the sweep; the bottom cap
    keeps that winding and the top cap is reversed. Every face is decomposed
    at construction, so a prism that exists always has well-defined planar
    faces: a zero-length outline edge or a sweep lying in the outline's own
    plane raises ``DegenerateConstructionError`` here.
    """
    plane: FlatPlane
    backward: Vector3
    forward: Vector3
    faces: Tuple[Face, ...] = field(init=False, repr=False, compare=False)
    surfaces: Tuple[SimpleSurface, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        sweep = self.forward - self.backward
        if near(sweep.length(), 0.0, DEFAULT_EPS):
            raise DegenerateConstructionError("prism sweep vector has zero length")
        plane = self.plane
        try:
            normal = plane.normal
        except UndefinedOperationError as exc:
            raise DegenerateConstructionError(f"prism outline has no plane: {exc}") from exc
        along = normal.dot(sweep.normalize())
        if near(along, 0.0, DEFAULT_EPS):
            raise DegenerateConstructionError("prism sweep vector lies in the outline plane")
        if along < 0.0:
            plane = plane.reversed()
            object.__setattr__(self, "plane", plane)
        faces: List[Face] = [RuledSurface.sweep(edge, self.backward, self.forward) for edge in plane.outer]
        for loop in plane.inners:
            faces.extend(RuledSurface.sweep(edge, self.backward, self.forward) for edge in loop)
        faces.append(plane.translate(self.backward))
        faces.append(plane.translate(self.forward).reversed())
        try:
            surfaces = tuple(s for f in faces for s in f.decompose_to_simple_surfaces())
        except UndefinedOperationError as exc:
            raise DegenerateConstructionError(f"prism has a degenerate face: {exc}") from exc
        object.__setattr__(self, "faces", tuple(faces))
        object.__setattr__(self, "surfaces", surfaces)

    def decompose_to_simple_surfaces(self) -> List[SimpleSurface]:
        return list(self.surfaces)

    def decompose_to_segments(self, view_direction: Optional[Vector3] = None) -> List[Segment3]:
        return [s for f in self.faces for s in f.visible_segments(view_direction)]

    def translate(self, v: Vector3) -> "Prism":
        return Prism(self.plane.translate(v), self.backward, self.forward)

    def move(self, direction: Vector3, distance: float) -> "Prism":
        return self.translate(direction.normalize() * distance)

    def rotate(self, quaternion: Quaternion) -> "Prism":
        return Prism(
            self.plane.rotate(quaternion),
            quaternion.rotate(self.backward),
            quaternion.rotate(self.forward),
        )
