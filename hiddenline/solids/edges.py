"""
Boundary edges of planar outlines.

``Edge`` is a closed union of two variants sharing the same capability set:
``StraightEdge`` (exactly two points) and ``CurveEdge`` (a sampled polyline
of three or more points). Both are immutable; ``reversed`` returns a new edge.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

import numpy as np

from hiddenline.errors import DegenerateConstructionError
from hiddenline.geometry.segment import Segment3
from hiddenline.geometry.transform import Quaternion
from hiddenline.geometry.vector import Point3, Vector3


@dataclass(frozen=True)
class StraightEdge:
    p1: Point3
    p2: Point3

    def decompose(self) -> List[Segment3]:
        return [Segment3(self.p1, self.p2)]

    def points(self) -> List[Point3]:
        return [self.p1, self.p2]

    def first(self) -> Point3:
        return self.p1

    def last(self) -> Point3:
        return self.p2

    def reversed(self) -> "StraightEdge":
        return StraightEdge(self.p2, self.p1)

    def translate(self, v: Vector3) -> "StraightEdge":
        return StraightEdge(self.p1 + v, self.p2 + v)

    def move(self, direction: Vector3, distance: float) -> "StraightEdge":
        return self.translate(direction.normalize() * distance)

    def rotate(self, quaternion: Quaternion) -> "StraightEdge":
        return StraightEdge(quaternion.rotate(self.p1), quaternion.rotate(self.p2))


@dataclass(frozen=True)
class CurveEdge:
    vertices: Tuple[Point3, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertices", tuple(self.vertices))
        if len(self.vertices) < 3:
            raise DegenerateConstructionError("could not construct a CurveEdge with less than 3 points")

    def decompose(self) -> List[Segment3]:
        return [Segment3(a, b) for a, b in zip(self.vertices, self.vertices[1:])]

    def points(self) -> List[Point3]:
        return list(self.vertices)

    def first(self) -> Point3:
        return self.vertices[0]

    def last(self) -> Point3:
        return self.vertices[-1]

    def reversed(self) -> "CurveEdge":
        return CurveEdge(tuple(reversed(self.vertices)))

    def translate(self, v: Vector3) -> "CurveEdge":
        return CurveEdge(tuple(p + v for p in self.vertices))

    def move(self, direction: Vector3, distance: float) -> "CurveEdge":
        return self.translate(direction.normalize() * distance)

    def rotate(self, quaternion: Quaternion) -> "CurveEdge":
        arr = np.array([p.to_tuple() for p in self.vertices], dtype=float)
        return CurveEdge(tuple(Vector3.from_array(row) for row in quaternion.rotate_many(arr)))


Edge = Union[StraightEdge, CurveEdge]


def make_edge(points: Sequence[Point3]) -> Edge:
    """Straight edge for two points, sampled curve for more."""
    if len(points) < 2:
        raise DegenerateConstructionError("could not construct an Edge of a surface with less than 2 points")
    if len(points) == 2:
        return StraightEdge(points[0], points[1])
    return CurveEdge(tuple(points))


def edge_chain_points(edges: Sequence[Edge]) -> List[Point3]:
    """Ring vertices of a closed edge chain: the start point of every decomposed segment."""
    return [s.p1 for e in edges for s in e.decompose()]
