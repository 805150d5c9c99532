"""Scene-level closest-hit query.

Tests a ray against every plane and then every sphere of a scene and keeps
the closest hit. There is no acceleration structure: the primitive lists are
short and a linear scan is all that is needed.
"""

from __future__ import annotations

import numpy as np

from tiletracer.core.vector import Vector3
from tiletracer.geometry.hit_record import HitRecord
from tiletracer.geometry.plane import hit_plane
from tiletracer.geometry.sphere import hit_sphere
from tiletracer.scene.scene import Scene

# Initial closest-hit distance (largest finite float32)
T_MAX = np.finfo(np.float32).max


def intersect_scene(
    scene: Scene,
    ray_origin: Vector3,
    ray_direction: Vector3,
    min_hit_distance: float,
    tolerance: float,
) -> HitRecord | None:
    """Find the closest intersection of a ray with the scene.

    Args:
        scene: The scene to test.
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray.
        min_hit_distance: Hits at or closer than this are ignored.
        tolerance: Intersection tolerance passed to the primitives.

    Returns:
        The HitRecord of the closest primitive, or None if the ray escapes.
    """
    closest = None
    hit_distance = T_MAX

    for plane in scene.planes:
        record = hit_plane(
            ray_origin, ray_direction, plane, min_hit_distance, hit_distance, tolerance
        )
        if record is not None:
            closest = record
            hit_distance = record.t

    for sphere in scene.spheres:
        record = hit_sphere(
            ray_origin, ray_direction, sphere, min_hit_distance, hit_distance, tolerance
        )
        if record is not None:
            closest = record
            hit_distance = record.t

    return closest
