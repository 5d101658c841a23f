from hiddenline.solids.edges import CurveEdge, Edge, StraightEdge, make_edge
from hiddenline.solids.faces import Face, FlatPlane, RuledSurface
from hiddenline.solids.prism import Prism, Solid
from hiddenline.solids.surface import SimpleSurface, face_intersection

__all__ = [
    "Edge",
    "StraightEdge",
    "CurveEdge",
    "make_edge",
    "Face",
    "FlatPlane",
    "RuledSurface",
    "SimpleSurface",
    "face_intersection",
    "Prism",
    "Solid",
]
