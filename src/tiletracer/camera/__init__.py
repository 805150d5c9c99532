"""Camera module.

Components:
    viewport: Fixed pinhole camera basis, film geometry and jittered
        primary ray generation

The viewport is computed once per render and shared read-only by all
worker threads.
"""

from .viewport import (
    DEFAULT_CAMERA_POSITION,
    FILM_DISTANCE,
    WORLD_UP,
    Viewport,
    get_ray_jittered,
    setup_viewport,
    view_coordinate,
)

__all__ = [
    "DEFAULT_CAMERA_POSITION",
    "FILM_DISTANCE",
    "WORLD_UP",
    "Viewport",
    "get_ray_jittered",
    "setup_viewport",
    "view_coordinate",
]
