"""Fixed material table shared read-only by all worker threads.

Every surface in a scene refers to a material by ``MaterialName``. The table
is built once at import time and never mutated, so workers read it without
any synchronization.

A material blends two bounce directions: ``specular`` = 1 is a perfect mirror
and ``specular`` = 0 is a randomly perturbed, normal-biased (diffuse) bounce.
Emission is added to a path whenever the material is hit, and the reflection
color tints everything gathered after the hit.

Rays that leave the scene pick up ``BACKGROUND_MATERIAL``, the sky.

Example:
    >>> from tiletracer.materials.table import MaterialName, get_material
    >>> metal = get_material(MaterialName.METALLIC)
    >>> float(metal.specular)
    0.800000011920929
"""

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType

import numpy as np

from tiletracer.core.vector import Vector3, vec3


class MaterialName(IntEnum):
    """Identifiers for the entries of the material table."""

    WHITE = 0
    METALLIC = 1
    ORANGE = 2
    VIOLET = 3
    LIGHT_GREEN = 4
    GREEN = 5
    MIRROR_BLUE = 6
    LIGHT_BLUE = 7
    RASPBERRY = 8
    LIGHT_BLUE_REFLECTIVE = 9


@dataclass(frozen=True, eq=False)
class Material:
    """Surface properties used by the integrator.

    Attributes:
        specular: Blend weight in [0, 1] between the diffuse (0) and mirror
            (1) bounce directions.
        emit_color: Radiance emitted by the surface (RGB).
        reflection_color: Color tint applied to light reflected off the
            surface (RGB).
    """

    specular: np.float32
    emit_color: Vector3
    reflection_color: Vector3


def make_material(
    specular: float,
    emit_color: tuple[float, float, float] = (0.0, 0.0, 0.0),
    reflection_color: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> Material:
    """Create a material with read-only color vectors.

    Raises:
        ValueError: If specular is outside [0, 1].
    """
    if not 0.0 <= specular <= 1.0:
        raise ValueError(f"specular must be in [0, 1], got {specular}")

    emit = vec3(*emit_color)
    reflection = vec3(*reflection_color)
    emit.flags.writeable = False
    reflection.flags.writeable = False
    return Material(
        specular=np.float32(specular),
        emit_color=emit,
        reflection_color=reflection,
    )


# =============================================================================
# Material Table
# =============================================================================

MATERIALS = MappingProxyType(
    {
        MaterialName.WHITE: make_material(0.5, emit_color=(1.0, 1.0, 1.0)),
        MaterialName.METALLIC: make_material(0.8, reflection_color=(0.5, 0.5, 0.5)),
        MaterialName.ORANGE: make_material(
            0.1, emit_color=(3.0, 0.0, 0.0), reflection_color=(1.0, 0.31, 0.098)
        ),
        MaterialName.VIOLET: make_material(0.6, reflection_color=(1.0, 0.1, 0.9)),
        MaterialName.LIGHT_GREEN: make_material(0.7, reflection_color=(0.65, 1.0, 0.1)),
        MaterialName.GREEN: make_material(
            0.8, emit_color=(0.1, 1.0, 0.02), reflection_color=(0.1, 1.0, 0.02)
        ),
        MaterialName.MIRROR_BLUE: make_material(1.0, reflection_color=(0.0, 0.25, 1.0)),
        MaterialName.LIGHT_BLUE: make_material(
            0.8, emit_color=(0.01, 1.0, 0.9), reflection_color=(0.01, 1.0, 0.9)
        ),
        MaterialName.RASPBERRY: make_material(0.9, reflection_color=(1.0, 0.01, 0.49)),
        MaterialName.LIGHT_BLUE_REFLECTIVE: make_material(
            0.98, reflection_color=(0.01, 1.0, 0.9)
        ),
    }
)

# The sky: emits white light and reflects nothing
BACKGROUND_MATERIAL = MATERIALS[MaterialName.WHITE]


def get_material(name: MaterialName) -> Material:
    """Look up a material by name.

    Raises:
        ValueError: If the name is not a known MaterialName.
    """
    return MATERIALS[MaterialName(name)]
