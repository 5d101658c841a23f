from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

from hiddenline.geometry.frame import ViewBasis, view_basis
from hiddenline.geometry.segment import Segment3
from hiddenline.geometry.vector import Vector3

Line2 = Tuple[Tuple[float, float], Tuple[float, float]]


def project_segments(segments: Sequence[Segment3], basis: ViewBasis) -> List[Line2]:
    out: List[Line2] = []
    for s in segments:
        flat = s.project(basis)
        out.append(((flat.p1.x, flat.p1.y), (flat.p2.x, flat.p2.y)))
    return out


def _line_element(a: Tuple[float, float], b: Tuple[float, float], stroke: str, width: float) -> str:
    # SVG y grows downwards.
    return (
        f'<line x1="{a[0]:.4f}" y1="{-a[1]:.4f}" x2="{b[0]:.4f}" y2="{-b[1]:.4f}" '
        f'stroke="{stroke}" stroke-width="{width:g}" stroke-linecap="round"/>'
    )


def segments_to_svg(
    segments: Sequence[Segment3],
    view_direction: Optional[Vector3] = None,
    *,
    margin: float = 10.0,
    stroke: str = "black",
    stroke_width: float = 1.0,
) -> str:
    """Line drawing of ``segments`` seen along ``view_direction`` (default +Z)."""
    basis = view_basis(view_direction if view_direction is not None else Vector3.z_axis())
    lines = project_segments(segments, basis)
    if lines:
        xs = [x for a, b in lines for x in (a[0], b[0])]
        ys = [-y for a, b in lines for y in (a[1], b[1])]
        min_x, min_y = min(xs) - margin, min(ys) - margin
        w, h = max(xs) - min(xs) + 2 * margin, max(ys) - min(ys) + 2 * margin
    else:
        min_x, min_y, w, h = 0.0, 0.0, 2 * margin, 2 * margin
    body = "\n".join(f"  {_line_element(a, b, stroke, stroke_width)}" for a, b in lines)
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="{min_x:.4f} {min_y:.4f} {w:.4f} {h:.4f}" width="{w:.0f}" height="{h:.0f}">\n'
        f"{body}\n"
        "</svg>\n"
    )


def write_svg(
    segments: Sequence[Segment3],
    out_path: str | Path,
    view_direction: Optional[Vector3] = None,
    **kwargs: Any,
) -> Path:
    content = segments_to_svg(segments, view_direction, **kwargs)
    out = Path(out_path).expanduser().resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    return out
