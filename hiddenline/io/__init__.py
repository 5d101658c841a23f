from hiddenline.io.scene_json import Scene, demo_scene, load_scene, prism_from_dict, scene_from_dict, segments_to_dict
from hiddenline.io.svg import segments_to_svg, write_svg

__all__ = [
    "Scene",
    "demo_scene",
    "load_scene",
    "prism_from_dict",
    "scene_from_dict",
    "segments_to_dict",
    "segments_to_svg",
    "write_svg",
]
