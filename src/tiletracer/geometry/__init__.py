"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with ray-sphere intersection
    plane: Infinite plane primitive with ray-plane intersection
    hit_record: Result record shared by the intersection routines

Intersection routines are plain functions with the same signature:
    record = hit_shape(ray_origin, ray_direction, shape, t_min, t_max, tolerance)
returning a HitRecord or None. There is no acceleration structure; scenes are
small and tested linearly.
"""

from .hit_record import HitRecord
from .plane import Plane, hit_plane
from .sphere import Sphere, hit_sphere

__all__ = [
    "HitRecord",
    "Plane",
    "Sphere",
    "hit_plane",
    "hit_sphere",
]
