from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from hiddenline.errors import DegenerateConstructionError, UndefinedOperationError
from hiddenline.geometry.segment import Segment3
from hiddenline.geometry.tolerance import DEFAULT_EPS, near
from hiddenline.geometry.transform import Quaternion
from hiddenline.geometry.vector import Point3, Vector3
from hiddenline.solids.edges import CurveEdge, Edge, edge_chain_points, make_edge
from hiddenline.solids.surface import SimpleSurface

EdgeLoop = Tuple[Edge, ...]


def _loop(point_lists: Sequence[Sequence[Point3]]) -> EdgeLoop:
    return tuple(make_edge(ps) for ps in point_lists)


@dataclass(frozen=True)
class FlatPlane:
    """Planar face bounded by a loop of edges, with optional hole loops."""
    outer: EdgeLoop
    inners: Tuple[EdgeLoop, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "outer", tuple(self.outer))
        object.__setattr__(self, "inners", tuple(tuple(loop) for loop in self.inners))
        if not self.outer:
            raise DegenerateConstructionError("FlatPlane requires at least one outer edge")

    @staticmethod
    def from_point_lists(
        outer: Sequence[Sequence[Point3]],
        holes: Sequence[Sequence[Sequence[Point3]]] = (),
    ) -> "FlatPlane":
        """Build from one point list per edge: two points make a straight edge, more a curve."""
        return FlatPlane(outer=_loop(outer), inners=tuple(_loop(h) for h in holes))

    def add_inner(self, point_lists: Sequence[Sequence[Point3]]) -> "FlatPlane":
        return FlatPlane(self.outer, self.inners + (_loop(point_lists),))

    @property
    def normal(self) -> Vector3:
        segs = [s for e in self.outer for s in e.decompose()]
        if len(segs) < 2:
            raise UndefinedOperationError("FlatPlane normal needs at least two boundary segments")
        n = segs[0].direction.cross(segs[1].direction)
        if near(n.length(), 0.0, DEFAULT_EPS):
            raise UndefinedOperationError("FlatPlane normal is undefined: first two edges are parallel")
        return n.normalize()

    def reversed(self) -> "FlatPlane":
        """Same plane with opposite winding (and so opposite normal)."""
        return FlatPlane(
            outer=tuple(e.reversed() for e in reversed(self.outer)),
            inners=tuple(tuple(e.reversed() for e in reversed(loop)) for loop in reversed(self.inners)),
        )

    def decompose_to_simple_surfaces(self) -> List[SimpleSurface]:
        return [
            SimpleSurface.from_points(
                edge_chain_points(self.outer),
                [edge_chain_points(loop) for loop in self.inners],
            )
        ]

    def visible_segments(self, view_direction: Optional[Vector3] = None) -> List[Segment3]:
        out = [s for e in self.outer for s in e.decompose()]
        for loop in self.inners:
            out.extend(s for e in loop for s in e.decompose())
        return out

    def translate(self, v: Vector3) -> "FlatPlane":
        return FlatPlane(
            tuple(e.translate(v) for e in self.outer),
            tuple(tuple(e.translate(v) for e in loop) for loop in self.inners),
        )

    def move(self, direction: Vector3, distance: float) -> "FlatPlane":
        return self.translate(direction.normalize() * distance)

    def rotate(self, quaternion: Quaternion) -> "FlatPlane":
        return FlatPlane(
            tuple(e.rotate(quaternion) for e in self.outer),
            tuple(tuple(e.rotate(quaternion) for e in loop) for loop in self.inners),
        )


@dataclass(frozen=True)
class RuledSurface:
    """Surface swept between two rails with matching vertex counts.

    Each pair of corresponding rail segments spans one planar strip; the
    straight lines joining corresponding rail vertices are the rulings.
    """
    top: Edge
    bottom: Edge

    def __post_init__(self) -> None:
        if len(self.top.points()) != len(self.bottom.points()):
            raise DegenerateConstructionError("RuledSurface rails must have the same number of points")

    @staticmethod
    def sweep(edge: Edge, backward: Vector3, forward: Vector3) -> "RuledSurface":
        return RuledSurface(top=edge.translate(forward), bottom=edge.translate(backward))

    def rulings(self) -> List[Segment3]:
        return [Segment3(t, b) for t, b in zip(self.top.points(), self.bottom.points())]

    def decompose_to_simple_surfaces(self) -> List[SimpleSurface]:
        return [
            SimpleSurface.from_points([t.p1, t.p2, b.p2, b.p1])
            for t, b in zip(self.top.decompose(), self.bottom.decompose())
        ]

    def visible_segments(self, view_direction: Optional[Vector3] = None) -> List[Segment3]:
        """Boundary rulings, plus silhouette rulings of curved rails.

        A silhouette ruling separates two adjacent strips of which one faces the
        viewer and the other faces away.
        """
        rulings = self.rulings()
        out: List[Segment3] = []
        if isinstance(self.top, CurveEdge) and isinstance(self.bottom, CurveEdge):
            direction = view_direction if view_direction is not None else Vector3.z_axis()
            facing = [s.normal.dot(direction) < 0.0 for s in self.decompose_to_simple_surfaces()]
            for i in range(1, len(facing)):
                if facing[i] != facing[i - 1]:
                    out.append(rulings[i])
        out.append(rulings[0])
        out.append(rulings[-1])
        return out

    def translate(self, v: Vector3) -> "RuledSurface":
        return RuledSurface(self.top.translate(v), self.bottom.translate(v))

    def move(self, direction: Vector3, distance: float) -> "RuledSurface":
        return self.translate(direction.normalize() * distance)

    def rotate(self, quaternion: Quaternion) -> "RuledSurface":
        return RuledSurface(self.top.rotate(quaternion), self.bottom.rotate(quaternion))


Face = Union[FlatPlane, RuledSurface]
