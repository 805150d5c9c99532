"""Core rendering module.

This module contains the building blocks of the renderer:

Components:
    vector: float32 Vector3 helpers (products, fast normalization, lerp)
    color: sRGB encoding and packed BGRA pixels
    random_series: Per-tile xorshift32 random series
    ray: Ray data structure
    settings: Validated render configuration
    integrator: Monte Carlo path tracing of one pixel
    tiles: Partitioning of the image into tile batches
    queue: Shared tile queue with atomic counters
    engine: Worker loop and multi-threaded orchestration

Work is distributed in tiles: each worker thread claims a tile from the
shared queue with a single atomic increment and renders it completely, so
workers never block on each other.
"""

from .color import linear_to_pixel, linear_to_srgb, pack_bgra, unpack_bgra
from .random_series import RandomSeries, tile_seed, xorshift32
from .ray import Ray, ray_at
from .settings import RenderSettings
from .vector import (
    Vector3,
    cross_product,
    hadamard_product,
    inner_product,
    inverse_sqrt,
    lerp,
    normalize_or_zero,
    reflect,
    square_root,
    vec3,
)

# Note: integrator, tiles, queue and engine are NOT imported here to avoid
# circular imports. Import them directly, e.g.:
#   from tiletracer.core.engine import TileRenderer

__all__ = [
    "RandomSeries",
    "Ray",
    "RenderSettings",
    "Vector3",
    "cross_product",
    "hadamard_product",
    "inner_product",
    "inverse_sqrt",
    "lerp",
    "linear_to_pixel",
    "linear_to_srgb",
    "normalize_or_zero",
    "pack_bgra",
    "ray_at",
    "reflect",
    "square_root",
    "tile_seed",
    "unpack_bgra",
    "vec3",
    "xorshift32",
]
