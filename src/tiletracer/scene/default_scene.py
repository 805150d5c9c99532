"""Default demo scene.

A metallic ground plane with a cluster of mirror spheres around a glowing
orange one, two large colored spheres, a row of small light-blue emitters,
a handful of small raspberry and green spheres near the camera, and a big
reflective sphere in the distance.

The camera sits at (0, -10, 1) looking toward the origin (see
``tiletracer.camera.viewport``), with +z up.

Example:
    >>> from tiletracer.scene.default_scene import create_default_scene
    >>> scene = create_default_scene()
    >>> len(scene.planes), len(scene.spheres)
    (1, 23)
"""

from tiletracer.materials.table import MaterialName
from tiletracer.scene.scene import Scene, make_plane, make_sphere

# =============================================================================
# Scene Layout
# =============================================================================

GROUND_NORMAL = (0.0, 0.0, 1.0)

# (position, radius, material)
_CENTER_CLUSTER = (
    ((0.0, 2.0, 1.8), 0.5, MaterialName.ORANGE),
    ((-1.2, 2.0, 1.8), 0.5, MaterialName.MIRROR_BLUE),
    ((0.0, 2.0, 2.9), 0.5, MaterialName.MIRROR_BLUE),
    ((1.2, 2.0, 1.8), 0.5, MaterialName.MIRROR_BLUE),
    ((0.0, 2.0, 0.7), 0.5, MaterialName.MIRROR_BLUE),
)

_LIGHT_TRAIL = tuple(
    (position, 0.1, MaterialName.LIGHT_BLUE)
    for position in (
        (-1.7, 4.2, 0.3),
        (-2.0, 3.6, 0.3),
        (-2.5, 3.2, 0.3),
        (-3.0, 2.8, 0.3),
        (-3.4, 2.4, 0.3),
        (-4.0, 2.6, 0.3),
        (-4.5, 2.8, 0.3),
        (-5.0, 3.2, 0.3),
        (-5.5, 3.6, 0.3),
    )
)

_FOREGROUND = (
    ((0.8, -3.6, 0.3), 0.25, MaterialName.GREEN),
    ((-1.2, -4.6, 0.3), 0.1, MaterialName.RASPBERRY),
    ((-1.8, -4.6, 0.3), 0.1, MaterialName.RASPBERRY),
    ((-1.4, -5.3, 0.3), 0.1, MaterialName.RASPBERRY),
    ((-1.6, -4.0, 0.3), 0.1, MaterialName.RASPBERRY),
    ((-1.4, -5.0, 0.15), 0.1, MaterialName.GREEN),
)

_BACKDROP = (
    ((4.0, 1.0, 2.0), 1.5, MaterialName.VIOLET),
    ((-4.0, 5.0, 1.0), 2.0, MaterialName.LIGHT_GREEN),
    ((7.0, 17.0, 0.0), 5.0, MaterialName.LIGHT_BLUE_REFLECTIVE),
)


def create_default_scene() -> Scene:
    """Create the demo scene: one ground plane and 23 spheres."""
    ground = make_plane(GROUND_NORMAL, 0.0, MaterialName.METALLIC)

    # Order matters only for ties in hit distance; keep it stable
    spheres = [
        make_sphere(position, radius, material)
        for group in (_CENTER_CLUSTER, _FOREGROUND[:1], _LIGHT_TRAIL, _FOREGROUND[1:], _BACKDROP)
        for position, radius, material in group
    ]

    return Scene(planes=(ground,), spheres=tuple(spheres))
