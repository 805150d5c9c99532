"""Ray data structure.

Example:
    >>> from tiletracer.core.ray import Ray, ray_at
    >>> from tiletracer.core.vector import vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

from dataclasses import dataclass

import numpy as np

from tiletracer.core.vector import Vector3


@dataclass(eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. The integrator keeps it unit
            length, or zero for degenerate bounces.
    """

    origin: Vector3
    direction: Vector3


def ray_at(ray: Ray, t: float) -> Vector3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + np.float32(t) * ray.direction
