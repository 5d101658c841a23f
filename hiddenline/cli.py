from __future__ import annotations

import argparse
import logging
from pathlib import Path

from hiddenline.errors import SceneFormatError
from hiddenline.io.scene_json import Scene, demo_scene, load_scene, write_segments_json
from hiddenline.io.svg import write_svg
from hiddenline.occlusion.pipeline import run_occlusion


def _format_for(out: Path, requested: str | None) -> str:
    if requested:
        return requested
    return "json" if out.suffix.lower() == ".json" else "svg"


def _render(scene: Scene, out: Path, fmt: str) -> int:
    result = run_occlusion(scene.prisms, scene.config)
    if fmt == "json":
        saved = write_segments_json(result.segments, out, extra={"stats": result.stats.to_dict()})
    else:
        saved = write_svg(result.segments, out, scene.config.view_direction)
    s = result.stats
    print("Hidden-line pass")
    print(f"  Solids: {len(scene.prisms)}  Faces: {s.faces}")
    print(f"  Segments: {s.input_segments} -> {s.broken_segments} pieces -> {s.visible_segments} visible")
    print(f"  Saved: {saved}")
    return 0


def _cmd_demo(args: argparse.Namespace) -> int:
    out = Path(args.out).expanduser().resolve()
    return _render(demo_scene(), out, _format_for(out, args.format))


def _cmd_run(args: argparse.Namespace) -> int:
    scene_path = Path(args.scene).expanduser().resolve()
    if not scene_path.exists():
        print(f"[ERROR] File not found: {scene_path}")
        print("        Provide a valid path to a .json scene file.")
        return 2
    if not scene_path.is_file():
        print(f"[ERROR] Not a file: {scene_path}")
        return 2
    try:
        scene = load_scene(scene_path)
    except SceneFormatError as exc:
        print(f"[ERROR] Malformed scene: {exc}")
        return 3
    out = Path(args.out).expanduser().resolve()
    return _render(scene, out, _format_for(out, args.format))


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="hiddenline")
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress of the occlusion pass")
    sub = p.add_subparsers(dest="cmd", required=True)

    demo = sub.add_parser("demo", help="Render the built-in two-prism scene.")
    demo.add_argument("--out", default="out/demo.svg", help="Output path (default: out/demo.svg)")
    demo.add_argument("--format", choices=("svg", "json"), default=None, help="Output format (default: from suffix)")
    demo.set_defaults(func=_cmd_demo)

    r = sub.add_parser("run", help="Remove hidden lines from a JSON scene.")
    r.add_argument("scene", help="Path to scene .json file")
    r.add_argument("--out", default="out/scene.svg", help="Output path (default: out/scene.svg)")
    r.add_argument("--format", choices=("svg", "json"), default=None, help="Output format (default: from suffix)")
    r.set_defaults(func=_cmd_run)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
