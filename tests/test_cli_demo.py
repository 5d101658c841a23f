from __future__ import annotations

import json
from pathlib import Path

from hiddenline.cli import main


def _write_scene(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_cli_demo_writes_svg(tmp_path: Path) -> None:
    out = tmp_path / "demo.svg"
    rc = main(["demo", "--out", str(out)])
    assert rc == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("<svg")
    assert "<line" in text


def test_cli_demo_writes_json(tmp_path: Path) -> None:
    out = tmp_path / "demo.json"
    rc = main(["demo", "--out", str(out)])
    assert rc == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["count"] == len(data["segments"]) > 0
    assert data["stats"]["visible_segments"] == data["count"]


def test_cli_run_scene(tmp_path: Path) -> None:
    scene = _write_scene(
        tmp_path / "box.json",
        {
            "prisms": [
                {
                    "outline": [
                        [[0, 0, 0], [4, 0, 0]],
                        [[4, 0, 0], [4, 4, 0]],
                        [[4, 4, 0], [0, 4, 0]],
                        [[0, 4, 0], [0, 0, 0]],
                    ],
                    "forward": [0, 0, 4],
                }
            ]
        },
    )
    out = tmp_path / "out" / "box.json"
    rc = main(["--verbose", "run", str(scene), "--out", str(out), "--format", "json"])
    assert rc == 0
    assert json.loads(out.read_text(encoding="utf-8"))["count"] == 4


def test_cli_run_missing_scene(tmp_path: Path) -> None:
    assert main(["run", str(tmp_path / "missing.json"), "--out", str(tmp_path / "x.svg")]) == 2


def test_cli_run_malformed_scene(tmp_path: Path) -> None:
    scene = _write_scene(tmp_path / "bad.json", {"prisms": [{"outline": []}]})
    assert main(["run", str(scene), "--out", str(tmp_path / "x.svg")]) == 3


def test_cli_run_scene_with_zero_length_edge(tmp_path: Path) -> None:
    scene = _write_scene(
        tmp_path / "degenerate.json",
        {
            "prisms": [
                {
                    "outline": [
                        [[0, 0, 0], [4, 0, 0]],
                        [[4, 0, 0], [4, 4, 0]],
                        [[4, 4, 0], [4, 4, 0]],
                        [[4, 4, 0], [0, 4, 0]],
                        [[0, 4, 0], [0, 0, 0]],
                    ],
                    "forward": [0, 0, 4],
                }
            ]
        },
    )
    out = tmp_path / "x.svg"
    assert main(["run", str(scene), "--out", str(out)]) == 3
    assert not out.exists()


def test_cli_run_scene_swept_in_outline_plane(tmp_path: Path) -> None:
    scene = _write_scene(
        tmp_path / "flat.json",
        {
            "prisms": [
                {
                    "outline": [
                        [[0, 0, 0], [4, 0, 0]],
                        [[4, 0, 0], [4, 4, 0]],
                        [[4, 4, 0], [0, 4, 0]],
                        [[0, 4, 0], [0, 0, 0]],
                    ],
                    "forward": [3, 0, 0],
                }
            ]
        },
    )
    assert main(["run", str(scene), "--out", str(tmp_path / "x.svg")]) == 3
