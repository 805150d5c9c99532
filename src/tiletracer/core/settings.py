"""Render configuration.

``RenderSettings`` collects every tunable the renderer consumes: image size,
worker count, tile size and the integrator's quality and precision limits.
Values are validated when the settings object is created, so the engine can
assume they are sane.

Example:
    >>> from tiletracer.core.settings import RenderSettings
    >>> settings = RenderSettings(image_width=320, image_height=180, rays_per_pixel=16)
    >>> settings.tile_count
    15
"""

import numbers
from dataclasses import dataclass

import numpy as np

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_IMAGE_WIDTH = 1280
DEFAULT_IMAGE_HEIGHT = 720
DEFAULT_WORKER_COUNT = 8

# 64x64 tiles balance claim overhead against load balancing
DEFAULT_TILE_SIZE = 64

DEFAULT_RAYS_PER_PIXEL = 512
DEFAULT_MAX_BOUNCE_COUNT = 8

# Hits closer than this are ignored (self-intersection at the ray origin)
DEFAULT_MINIMUM_HIT_DISTANCE = 0.001

# Denominators and discriminants at or below this are treated as misses
DEFAULT_TOLERANCE = 0.0001

_INTEGER_FIELDS = (
    "image_width",
    "image_height",
    "worker_count",
    "tile_width",
    "tile_height",
    "rays_per_pixel",
    "max_bounce_count",
)
_FLOAT_FIELDS = ("minimum_hit_distance", "tolerance")


@dataclass(frozen=True)
class RenderSettings:
    """Configuration for a tiled render.

    Attributes:
        image_width: Output image width in pixels.
        image_height: Output image height in pixels.
        worker_count: Total number of worker threads, including the calling
            thread which renders tiles too.
        tile_width: Width of one unit of work in pixels.
        tile_height: Height of one unit of work in pixels.
        rays_per_pixel: Independent path samples averaged per pixel.
        max_bounce_count: Maximum path length in bounces.
        minimum_hit_distance: Smallest accepted hit distance along a ray.
        tolerance: Threshold below which intersection denominators and
            discriminant roots count as zero.
    """

    image_width: int = DEFAULT_IMAGE_WIDTH
    image_height: int = DEFAULT_IMAGE_HEIGHT
    worker_count: int = DEFAULT_WORKER_COUNT
    tile_width: int = DEFAULT_TILE_SIZE
    tile_height: int = DEFAULT_TILE_SIZE
    rays_per_pixel: int = DEFAULT_RAYS_PER_PIXEL
    max_bounce_count: int = DEFAULT_MAX_BOUNCE_COUNT
    minimum_hit_distance: float = DEFAULT_MINIMUM_HIT_DISTANCE
    tolerance: float = DEFAULT_TOLERANCE

    def __post_init__(self) -> None:
        """Validate that every setting is positive.

        Integer-like values (including NumPy integers) are stored as ``int``
        and real values as ``float``.

        Raises:
            ValueError: If a setting has the wrong type or is not positive.
        """
        for name in _INTEGER_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
            object.__setattr__(self, name, int(value))

        for name in _FLOAT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not value > 0.0:
                raise ValueError(f"{name} must be positive, got {value}")
            object.__setattr__(self, name, float(value))

    @property
    def contribution(self) -> np.float32:
        """Weight of one path sample in the pixel average."""
        return np.float32(1.0) / np.float32(self.rays_per_pixel)

    @property
    def tile_count_x(self) -> int:
        """Number of tile columns (the last one may be narrower)."""
        return (self.image_width + self.tile_width - 1) // self.tile_width

    @property
    def tile_count_y(self) -> int:
        """Number of tile rows (the last one may be shorter)."""
        return (self.image_height + self.tile_height - 1) // self.tile_height

    @property
    def tile_count(self) -> int:
        """Total number of tiles the image is split into."""
        return self.tile_count_x * self.tile_count_y
