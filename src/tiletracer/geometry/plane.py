"""Infinite plane primitive and ray-plane intersection.

A plane is stored in implicit form: every point P on it satisfies
    dot(normal, P) + distance_from_origin = 0

Substituting the ray P = origin + t * direction gives
    t = (-distance_from_origin - dot(normal, origin)) / dot(normal, direction)
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from tiletracer.core.vector import Vector3, inner_product
from tiletracer.geometry.hit_record import HitRecord
from tiletracer.materials.table import MaterialName


@dataclass(frozen=True, eq=False)
class Plane:
    """An infinite plane.

    Attributes:
        normal: Unit normal of the plane.
        distance_from_origin: Offset term of the plane equation.
        material: The material of the plane.
    """

    normal: Vector3
    distance_from_origin: float
    material: MaterialName


def hit_plane(
    ray_origin: Vector3,
    ray_direction: Vector3,
    plane: Plane,
    t_min: float,
    t_max: float,
    tolerance: float,
) -> HitRecord | None:
    """Test for ray-plane intersection.

    Rays (nearly) parallel to the plane, where ``|dot(normal, direction)|``
    is at most ``tolerance``, never hit it.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray.
        plane: The plane to test intersection against.
        t_min: Minimum t value for a valid hit.
        t_max: Maximum t value for a valid hit.
        tolerance: Threshold for the denominator.

    Returns:
        A HitRecord carrying the plane normal, or None if there is no valid
        hit in (t_min, t_max).
    """
    denominator = inner_product(plane.normal, ray_direction)
    if -tolerance <= denominator <= tolerance:
        return None

    distance = np.float32(plane.distance_from_origin)
    t = (-distance - inner_product(plane.normal, ray_origin)) / denominator
    if not t_min < t < t_max:
        return None

    return HitRecord(t=t, normal=plane.normal, material=plane.material)
