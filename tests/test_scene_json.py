from __future__ import annotations

import json
from pathlib import Path

import pytest

from hiddenline.config import BreakPolicy
from hiddenline.errors import SceneFormatError
from hiddenline.geometry.segment import Segment3
from hiddenline.geometry.vector import Point3
from hiddenline.io.scene_json import demo_scene, load_scene, prism_from_dict, scene_from_dict, segments_to_dict
from hiddenline.occlusion.pipeline import occlude
from hiddenline.solids.edges import CurveEdge


def _box_dict(**extra: object) -> dict:
    d = {
        "outline": [
            [[0, 0, 0], [10, 0, 0]],
            [[10, 0, 0], [10, 10, 0]],
            [[10, 10, 0], [0, 10, 0]],
            [[0, 10, 0], [0, 0, 0]],
        ],
        "backward": [0, 0, 0],
        "forward": [0, 0, 10],
    }
    d.update(extra)
    return d


def test_load_scene_from_file(tmp_path: Path) -> None:
    path = tmp_path / "scene.json"
    path.write_text(
        json.dumps({"config": {"break_policy": "target"}, "prisms": [_box_dict()]}),
        encoding="utf-8",
    )
    scene = load_scene(path)
    assert len(scene.prisms) == 1
    assert scene.config.break_policy is BreakPolicy.TARGET_EXTENT
    assert len(occlude(scene.prisms, scene.config)) == 4


def test_arc_edges_are_sampled() -> None:
    prism = prism_from_dict(
        {
            "outline": [
                {"arc": [[10, 0, 0], [7.0710678, 7.0710678, 0], [0, 10, 0]], "quality": 5},
                [[0, 10, 0], [0, 0, 0]],
                [[0, 0, 0], [10, 0, 0]],
            ],
            "forward": [0, 0, 2],
        }
    )
    curves = [e for e in prism.plane.outer if isinstance(e, CurveEdge)]
    assert len(curves) == 1
    assert len(curves[0].points()) == 4
    assert all(abs(p.distance_to(Point3(0, 0, 0)) - 10.0) < 0.001 for p in curves[0].points())


def test_rotation_is_applied() -> None:
    prism = prism_from_dict(_box_dict(rotation={"x": 0.0, "y": 0.0, "z": 3.141592653589793 / 2}))
    xs = [p.x for s in prism.decompose_to_simple_surfaces() for p in s.outer_boundary()]
    assert min(xs) == pytest.approx(-10.0)


def test_malformed_scenes_raise_scene_format_error(tmp_path: Path) -> None:
    with pytest.raises(SceneFormatError, match="prisms"):
        scene_from_dict({"config": {}})
    with pytest.raises(SceneFormatError, match="expected \\[x, y, z\\]"):
        prism_from_dict(_box_dict(forward=[0, 1]))
    with pytest.raises(SceneFormatError, match="missing 'outline'"):
        prism_from_dict({"forward": [0, 0, 1]})
    with pytest.raises(SceneFormatError, match="config"):
        scene_from_dict({"config": {"eps": -1}, "prisms": []})
    with pytest.raises(SceneFormatError, match="zero length"):
        prism_from_dict(_box_dict(forward=[0, 0, 0]))
    with pytest.raises(SceneFormatError, match="outline plane"):
        prism_from_dict(_box_dict(forward=[5, 0, 0]))
    with pytest.raises(SceneFormatError, match="arc"):
        prism_from_dict(_box_dict(outline=[{"arc": [[0, 0, 0], [1, 0, 0]]}]))
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(SceneFormatError, match="invalid JSON"):
        load_scene(bad)


def test_missing_scene_file_raises_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_scene(tmp_path / "nope.json")


def test_segments_to_dict() -> None:
    d = segments_to_dict([Segment3(Point3(0, 0, 0), Point3(1, 2, 3))])
    assert d == {"count": 1, "segments": [[[0, 0, 0], [1, 2, 3]]]}


def test_demo_scene_runs() -> None:
    scene = demo_scene()
    assert len(scene.prisms) == 2
    assert any(isinstance(e, CurveEdge) for e in scene.prisms[1].plane.outer)
    visible = occlude(scene.prisms, scene.config)
    assert visible
    assert all(s.length > 0.0 for s in visible)
