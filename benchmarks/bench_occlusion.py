from __future__ import annotations

import time

from hiddenline.config import OcclusionConfig
from hiddenline.geometry.vector import Point3, Vector3
from hiddenline.occlusion.pipeline import run_occlusion
from hiddenline.solids.faces import FlatPlane
from hiddenline.solids.prism import Prism


def _box(x0: float, y0: float, size: float, height: float, z0: float) -> Prism:
    pts = [
        Point3(x0, y0, 0.0),
        Point3(x0 + size, y0, 0.0),
        Point3(x0 + size, y0 + size, 0.0),
        Point3(x0, y0 + size, 0.0),
    ]
    plane = FlatPlane.from_point_lists([[pts[i], pts[(i + 1) % 4]] for i in range(4)])
    return Prism(plane, Vector3(0.0, 0.0, z0), Vector3(0.0, 0.0, z0 + height))


def _build_scene(nx: int = 6, ny: int = 6) -> list[Prism]:
    # Staggered towers so that neighbouring outlines overlap in plan view.
    solids = []
    for j in range(ny):
        for i in range(nx):
            solids.append(_box(i * 7.0 + (j % 2) * 3.5, j * 7.0, 9.0, 2.0 + (i + j) % 4, float((i * 3 + j) % 5)))
    return solids


def main() -> int:
    solids = _build_scene()
    t0 = time.perf_counter()
    serial = run_occlusion(solids, OcclusionConfig())
    t1 = time.perf_counter()
    threaded = run_occlusion(solids, OcclusionConfig(max_workers=4))
    t2 = time.perf_counter()

    print("bench_occlusion")
    print(f"  solids: {len(solids)}")
    print(f"  input_segments: {serial.stats.input_segments}")
    print(f"  broken_segments: {serial.stats.broken_segments}")
    print(f"  faces: {serial.stats.faces}")
    print(f"  visible_segments: {serial.stats.visible_segments}")
    print(f"  serial_s: {t1 - t0:.4f}")
    print(f"  threaded_s: {t2 - t1:.4f}")
    print(f"  threaded_matches_serial: {len(threaded.segments) == len(serial.segments)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
