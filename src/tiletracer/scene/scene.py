"""Immutable scene container.

A Scene is built once before rendering and shared by reference with every
worker thread. It is frozen and holds tuples, so it cannot change while tiles
are being rendered.

Example:
    >>> from tiletracer.scene.scene import Scene, make_plane, make_sphere
    >>> from tiletracer.materials.table import MaterialName
    >>> scene = Scene(
    ...     planes=(make_plane((0, 0, 1), 0.0, MaterialName.METALLIC),),
    ...     spheres=(make_sphere((0, 2, 1), 0.5, MaterialName.ORANGE),),
    ... )
    >>> scene.primitive_count
    2
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from tiletracer.core.vector import vec3
from tiletracer.geometry.plane import Plane
from tiletracer.geometry.sphere import Sphere
from tiletracer.materials.table import MaterialName


@dataclass(frozen=True, eq=False)
class Scene:
    """An ordered collection of planes and spheres.

    Attributes:
        planes: The planes of the scene, tested first.
        spheres: The spheres of the scene, tested after the planes.
    """

    planes: tuple[Plane, ...] = field(default_factory=tuple)
    spheres: tuple[Sphere, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable but always store tuples
        object.__setattr__(self, "planes", tuple(self.planes))
        object.__setattr__(self, "spheres", tuple(self.spheres))

    @property
    def primitive_count(self) -> int:
        """Total number of primitives tested per bounce."""
        return len(self.planes) + len(self.spheres)


def make_sphere(
    position: Iterable[float],
    radius: float,
    material: MaterialName,
) -> Sphere:
    """Create a sphere from plain Python numbers."""
    center = vec3(*position)
    center.flags.writeable = False
    return Sphere(position=center, radius=float(radius), material=MaterialName(material))


def make_plane(
    normal: Iterable[float],
    distance_from_origin: float,
    material: MaterialName,
) -> Plane:
    """Create a plane from plain Python numbers.

    The normal is expected to be unit length already; it is not normalized.
    """
    plane_normal = vec3(*normal)
    plane_normal.flags.writeable = False
    return Plane(
        normal=plane_normal,
        distance_from_origin=float(distance_from_origin),
        material=MaterialName(material),
    )
