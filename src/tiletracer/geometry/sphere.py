"""Sphere primitive and ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |ray_origin + t * ray_direction - position|^2 = radius^2

which expands to the quadratic a*t^2 + b*t + c = 0 with:
    a = dot(direction, direction)
    b = 2 * dot(direction, oc)
    c = dot(oc, oc) - radius^2
    oc = origin - position

Example:
    >>> from tiletracer.geometry.sphere import Sphere, hit_sphere
    >>> from tiletracer.core.vector import vec3
    >>> from tiletracer.materials.table import MaterialName
    >>> sphere = Sphere(vec3(0.0, 0.0, 0.0), 1.0, MaterialName.ORANGE)
    >>> record = hit_sphere(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0), sphere, 0.001, 1e30, 1e-4)
    >>> float(record.t)
    4.0
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from tiletracer.core.vector import Vector3, inner_product, normalize_or_zero, square_root
from tiletracer.geometry.hit_record import HitRecord
from tiletracer.materials.table import MaterialName

_TWO = np.float32(2.0)
_FOUR = np.float32(4.0)


@dataclass(frozen=True, eq=False)
class Sphere:
    """A sphere defined by center point, radius and material.

    Attributes:
        position: The center of the sphere.
        radius: The radius of the sphere (positive).
        material: The material the sphere is made of.
    """

    position: Vector3
    radius: float
    material: MaterialName


def hit_sphere(
    ray_origin: Vector3,
    ray_direction: Vector3,
    sphere: Sphere,
    t_min: float,
    t_max: float,
    tolerance: float,
) -> HitRecord | None:
    """Test for ray-sphere intersection.

    Rays whose discriminant root is at most ``tolerance`` (misses and grazing
    hits) are treated as non-intersecting. Of the two roots, the nearer one
    is used when it lies beyond ``t_min``; otherwise the farther one, which
    covers rays starting inside the sphere.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray.
        sphere: The sphere to test intersection against.
        t_min: Minimum t value for a valid hit (avoids self-intersection).
        t_max: Maximum t value for a valid hit (the closest hit so far).
        tolerance: Threshold for the discriminant root.

    Returns:
        A HitRecord with the outward unit normal, or None if there is no
        valid hit in (t_min, t_max).
    """
    relative_origin = ray_origin - sphere.position
    radius = np.float32(sphere.radius)

    a = inner_product(ray_direction, ray_direction)
    b = _TWO * inner_product(ray_direction, relative_origin)
    c = inner_product(relative_origin, relative_origin) - radius * radius

    discriminant = b * b - _FOUR * a * c
    if discriminant < 0.0:
        return None

    root_term = square_root(discriminant)
    if not root_term > tolerance:
        return None

    denominator = _TWO * a
    positive_term = (-b + root_term) / denominator
    negative_term = (-b - root_term) / denominator

    t = positive_term
    if t_min < negative_term < positive_term:
        t = negative_term

    if not t_min < t < t_max:
        return None

    normal = normalize_or_zero(t * ray_direction + relative_origin)
    return HitRecord(t=t, normal=normal, material=sphere.material)
