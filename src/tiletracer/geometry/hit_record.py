"""Hit record shared by all primitive intersection routines."""

from dataclasses import dataclass

import numpy as np

from tiletracer.core.vector import Vector3
from tiletracer.materials.table import MaterialName


@dataclass(frozen=True, eq=False)
class HitRecord:
    """Record of a ray-primitive intersection.

    Attributes:
        t: Distance along the (unit) ray direction to the hit point.
        normal: Unit surface normal at the hit point. Spheres report the
            outward normal and planes their stored normal, regardless of
            which side the ray came from.
        material: Material of the primitive that was hit.
    """

    t: np.float32
    normal: Vector3
    material: MaterialName
