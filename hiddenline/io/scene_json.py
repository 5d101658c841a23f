"""
JSON scene files.

A scene is a list of prisms plus an optional ``config`` block::

    {
      "config": {"view_direction": [0, 0, 1], "break_policy": "both"},
      "prisms": [
        {
          "outline": [[[0, 0, 0], [0, 0, 100]], {"arc": [[...], [...], [...]]}, ...],
          "holes": [[...edges...]],
          "backward": [0, 0, 0],
          "forward": [0, 100, 0],
          "rotation": {"x": 0.5236, "y": 0.2618, "z": 0.0, "order": "xyz"}
        }
      ]
    }

Each outline entry is one edge: a list of two points is a straight edge, a
longer list a sampled curve, and ``{"arc": [head, body, tail]}`` a circular
arc sampled through three points. Angles are radians.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from hiddenline.config import OcclusionConfig
from hiddenline.errors import ConfigError, DegenerateConstructionError, SceneFormatError, UndefinedOperationError
from hiddenline.geometry.curves import ARC_QUALITY, sample_arc_3d
from hiddenline.geometry.segment import Segment3
from hiddenline.geometry.transform import EulerAngle, EulerOrder, Quaternion
from hiddenline.geometry.vector import Point3, Vector3
from hiddenline.solids.faces import FlatPlane
from hiddenline.solids.prism import Prism


@dataclass(frozen=True)
class Scene:
    prisms: List[Prism]
    config: OcclusionConfig = field(default_factory=OcclusionConfig)


def _point(raw: Any, where: str) -> Point3:
    if not isinstance(raw, Sequence) or isinstance(raw, str) or len(raw) != 3:
        raise SceneFormatError(f"{where}: expected [x, y, z], got {raw!r}")
    try:
        return Vector3(float(raw[0]), float(raw[1]), float(raw[2]))
    except (TypeError, ValueError) as exc:
        raise SceneFormatError(f"{where}: non-numeric coordinate in {raw!r}") from exc


def _edge_points(raw: Any, where: str) -> List[Point3]:
    if isinstance(raw, Mapping):
        if "arc" not in raw:
            raise SceneFormatError(f"{where}: edge object must have an 'arc' key")
        arc = raw["arc"]
        if not isinstance(arc, Sequence) or len(arc) != 3:
            raise SceneFormatError(f"{where}: arc needs exactly three points [head, body, tail]")
        head, body, tail = (_point(p, f"{where}.arc[{i}]") for i, p in enumerate(arc))
        quality = raw.get("quality", ARC_QUALITY)
        if not isinstance(quality, int) or quality < 1:
            raise SceneFormatError(f"{where}: arc quality must be a positive integer")
        return sample_arc_3d(head, body, tail, quality)
    if not isinstance(raw, Sequence) or isinstance(raw, str):
        raise SceneFormatError(f"{where}: edge must be a point list or an arc object")
    return [_point(p, f"{where}[{i}]") for i, p in enumerate(raw)]


def _loop(raw: Any, where: str) -> List[List[Point3]]:
    if not isinstance(raw, Sequence) or isinstance(raw, str) or not raw:
        raise SceneFormatError(f"{where}: expected a non-empty list of edges")
    return [_edge_points(e, f"{where}[{i}]") for i, e in enumerate(raw)]


def _rotation(raw: Any, where: str) -> Quaternion:
    if not isinstance(raw, Mapping):
        raise SceneFormatError(f"{where}: rotation must be an object")
    try:
        order = EulerOrder(str(raw.get("order", "xyz")).lower())
        angle = EulerAngle(float(raw.get("x", 0.0)), float(raw.get("y", 0.0)), float(raw.get("z", 0.0)), order)
    except (TypeError, ValueError) as exc:
        raise SceneFormatError(f"{where}: invalid rotation {raw!r}") from exc
    return Quaternion.from_euler(angle)


def prism_from_dict(data: Mapping[str, Any], where: str = "prism") -> Prism:
    if not isinstance(data, Mapping):
        raise SceneFormatError(f"{where}: expected an object")
    for key in ("outline", "forward"):
        if key not in data:
            raise SceneFormatError(f"{where}: missing '{key}'")
    raw_holes = data.get("holes", [])
    if not isinstance(raw_holes, list):
        raise SceneFormatError(f"{where}.holes: expected a list of edge loops")
    backward = _point(data.get("backward", [0.0, 0.0, 0.0]), f"{where}.backward")
    forward = _point(data["forward"], f"{where}.forward")
    try:
        outline = _loop(data["outline"], f"{where}.outline")
        holes = [_loop(h, f"{where}.holes[{i}]") for i, h in enumerate(raw_holes)]
        prism = Prism(FlatPlane.from_point_lists(outline, holes), backward, forward)
    except (DegenerateConstructionError, UndefinedOperationError) as exc:
        raise SceneFormatError(f"{where}: {exc}") from exc
    if "rotation" in data:
        prism = prism.rotate(_rotation(data["rotation"], f"{where}.rotation"))
    return prism


def scene_from_dict(data: Mapping[str, Any]) -> Scene:
    if not isinstance(data, Mapping):
        raise SceneFormatError("scene root must be an object")
    raw_prisms = data.get("prisms")
    if not isinstance(raw_prisms, list):
        raise SceneFormatError("scene must contain a 'prisms' list")
    try:
        config = OcclusionConfig.from_mapping(data.get("config", {}))
    except ConfigError as exc:
        raise SceneFormatError(f"config: {exc}") from exc
    prisms = [prism_from_dict(p, f"prisms[{i}]") for i, p in enumerate(raw_prisms)]
    return Scene(prisms=prisms, config=config)


def load_scene(path: str | Path) -> Scene:
    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(f"Scene file not found: {p}")
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SceneFormatError(f"{p}: invalid JSON ({exc})") from exc
    return scene_from_dict(data)


def segments_to_dict(segments: Sequence[Segment3]) -> Dict[str, Any]:
    return {
        "count": len(segments),
        "segments": [[list(s.p1.to_tuple()), list(s.p2.to_tuple())] for s in segments],
    }


def write_segments_json(segments: Sequence[Segment3], out_path: str | Path, extra: Mapping[str, Any] | None = None) -> Path:
    payload = segments_to_dict(segments)
    if extra:
        payload.update(extra)
    out = Path(out_path).expanduser().resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    return out


def demo_scene() -> Scene:
    """Two prisms tilted towards the viewer: a 100-unit cube and a quarter-round block above it."""
    q = Quaternion.from_euler(EulerAngle(math.pi / 6, math.pi / 12, 0.0))
    square = FlatPlane.from_point_lists(
        [
            [Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 100.0)],
            [Vector3(0.0, 0.0, 100.0), Vector3(100.0, 0.0, 100.0)],
            [Vector3(100.0, 0.0, 100.0), Vector3(100.0, 0.0, 0.0)],
            [Vector3(100.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.0)],
        ]
    )
    cube = Prism(square, Vector3.zero(), Vector3(0.0, 100.0, 0.0)).rotate(q)

    r = 50.0
    c = Vector3(100.0, 0.0, 100.0)
    body = c + Vector3(-r * math.sin(math.pi / 4), 0.0, r * math.cos(math.pi / 4))
    round_face = FlatPlane.from_point_lists(
        [
            sample_arc_3d(Vector3(100.0, 0.0, 150.0), body, Vector3(50.0, 0.0, 100.0), ARC_QUALITY),
            [Vector3(50.0, 0.0, 100.0), Vector3(100.0, 0.0, 100.0)],
            [Vector3(100.0, 0.0, 100.0), Vector3(100.0, 0.0, 150.0)],
        ]
    )
    block = Prism(round_face, Vector3.zero(), Vector3(0.0, 50.0, 0.0)).rotate(q)
    return Scene(prisms=[cube, block])
