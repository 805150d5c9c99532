"""Scene module.

Components:
    scene: Immutable Scene container and primitive factories
    intersection: Closest-hit query over all primitives of a scene
    default_scene: The demo scene rendered by the example script
"""

from .default_scene import create_default_scene
from .intersection import intersect_scene
from .scene import Scene, make_plane, make_sphere

__all__ = [
    "Scene",
    "create_default_scene",
    "intersect_scene",
    "make_plane",
    "make_sphere",
]
