"""Fixed pinhole camera and view-plane geometry.

The viewport is computed once per render and shared read-only by all tiles.
It holds the camera's orthonormal basis:

- camera_z_axis: points from the origin toward the camera (the camera looks
  along -z)
- camera_x_axis: right in the image plane, cross(world_up, z)
- camera_y_axis: up in the image plane, cross(z, x)

The film (view plane) sits one unit in front of the camera. Its larger side
spans one unit and the other side is shrunk to keep the image aspect ratio.

Pixels map to normalized view coordinates in [-1, 1) with
``view = -1 + 2 * index / extent``; row 0 is the bottom of the image.

Example:
    >>> from tiletracer.camera.viewport import setup_viewport, view_coordinate
    >>> viewport = setup_viewport(1280, 720)
    >>> float(viewport.view_width), round(float(viewport.view_height), 4)
    (1.0, 0.5625)
    >>> float(view_coordinate(640, 1280))
    0.0
"""

from dataclasses import dataclass

import numpy as np

from tiletracer.core.random_series import RandomSeries
from tiletracer.core.ray import Ray
from tiletracer.core.vector import Vector3, cross_product, normalize_or_zero, vec3

# =============================================================================
# Camera Constants
# =============================================================================

DEFAULT_CAMERA_POSITION = (0.0, -10.0, 1.0)
WORLD_UP = (0.0, 0.0, 1.0)
FILM_DISTANCE = 1.0

_ONE = np.float32(1.0)
_TWO = np.float32(2.0)
_HALF = np.float32(0.5)


@dataclass(frozen=True, eq=False)
class Viewport:
    """Camera basis and view-plane geometry for one image size.

    Attributes:
        image_width: Image width in pixels.
        image_height: Image height in pixels.
        camera_position: Camera position in world space.
        camera_x_axis: Right vector of the view plane.
        camera_y_axis: Up vector of the view plane.
        camera_z_axis: Backward vector (the camera looks along -z).
        view_center: Center of the film, one unit in front of the camera.
        view_width: Film width in world units.
        view_height: Film height in world units.
        half_pixel_width: Half a pixel in normalized view coordinates (x).
        half_pixel_height: Half a pixel in normalized view coordinates (y).
    """

    image_width: int
    image_height: int
    camera_position: Vector3
    camera_x_axis: Vector3
    camera_y_axis: Vector3
    camera_z_axis: Vector3
    view_center: Vector3
    view_width: np.float32
    view_height: np.float32
    half_pixel_width: np.float32
    half_pixel_height: np.float32


def setup_viewport(
    image_width: int,
    image_height: int,
    camera_position: tuple[float, float, float] = DEFAULT_CAMERA_POSITION,
    world_up: tuple[float, float, float] = WORLD_UP,
    film_distance: float = FILM_DISTANCE,
) -> Viewport:
    """Compute the camera basis and view-plane geometry.

    Args:
        image_width: Image width in pixels.
        image_height: Image height in pixels.
        camera_position: Camera position; the camera looks toward the origin.
        world_up: World up direction used to orient the film.
        film_distance: Distance from the camera to the film.

    Returns:
        The Viewport shared by every tile of the render.

    Raises:
        ValueError: If the image dimensions are not positive.
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {image_width}x{image_height}")

    position = vec3(*camera_position)
    z_axis = normalize_or_zero(position)
    x_axis = normalize_or_zero(cross_product(vec3(*world_up), z_axis))
    y_axis = normalize_or_zero(cross_product(z_axis, x_axis))

    view_width = _ONE
    view_height = _ONE

    # Keep the aspect ratio for non-square images
    if image_width > image_height:
        view_height = view_width * (np.float32(image_height) / np.float32(image_width))
    elif image_height > image_width:
        view_width = view_height * (np.float32(image_width) / np.float32(image_height))

    view_center = position - np.float32(film_distance) * z_axis

    for vector in (position, x_axis, y_axis, z_axis, view_center):
        vector.flags.writeable = False

    return Viewport(
        image_width=image_width,
        image_height=image_height,
        camera_position=position,
        camera_x_axis=x_axis,
        camera_y_axis=y_axis,
        camera_z_axis=z_axis,
        view_center=view_center,
        view_width=view_width,
        view_height=view_height,
        half_pixel_width=_HALF / np.float32(image_width),
        half_pixel_height=_HALF / np.float32(image_height),
    )


def view_coordinate(index: int, extent: int) -> np.float32:
    """Map a pixel index to a normalized view coordinate in [-1, 1)."""
    return -_ONE + _TWO * (np.float32(index) / np.float32(extent))


def get_ray_jittered(
    viewport: Viewport,
    view_x: np.float32,
    view_y: np.float32,
    series: RandomSeries,
) -> Ray:
    """Generate a primary ray through a randomly jittered film position.

    The pixel position is offset by up to half a pixel in each direction
    (x first, then y) to anti-alias edges.

    Args:
        viewport: The shared camera and film geometry.
        view_x: Normalized view x coordinate of the pixel.
        view_y: Normalized view y coordinate of the pixel.
        series: The tile's random series; advanced by two draws.

    Returns:
        A ray from the camera position through the jittered film point.
    """
    x_offset = view_x + series.uniform_signed() * viewport.half_pixel_width
    y_offset = view_y + series.uniform_signed() * viewport.half_pixel_height

    film_position = (
        viewport.view_center
        + (x_offset * (_HALF * viewport.view_width)) * viewport.camera_x_axis
        + (y_offset * (_HALF * viewport.view_height)) * viewport.camera_y_axis
    )

    origin = viewport.camera_position
    direction = normalize_or_zero(film_position - origin)
    return Ray(origin=origin, direction=direction)
