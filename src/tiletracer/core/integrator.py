"""Path tracing integrator for Monte Carlo light transport.

Estimates the radiance arriving at one pixel by averaging a fixed number of
random light paths. Each path starts at the camera, passes through a jittered
point of the pixel on the film and bounces around the scene:

- On every hit the surface emission, scaled by the path's running
  attenuation, is added to the sample.
- The attenuation is then multiplied by the material's reflection color and
  a cosine term ``max(0, dot(-direction, normal) + 0.5)``.
- The next direction blends a mirror reflection with a random, normal-biased
  direction, weighted by the material's ``specular`` value.
- A ray that escapes the scene picks up the background emission and the
  path ends.

Paths are cut off after ``max_bounce_count`` bounces. All arithmetic is done
in single precision and every random draw comes from the tile's own
``RandomSeries``, so the result is fully reproducible.

Example:
    >>> from tiletracer.camera.viewport import setup_viewport
    >>> from tiletracer.core.integrator import CastState, cast_rays
    >>> from tiletracer.core.random_series import RandomSeries
    >>> from tiletracer.core.settings import RenderSettings
    >>> from tiletracer.scene.default_scene import create_default_scene
    >>>
    >>> settings = RenderSettings(image_width=64, image_height=64, rays_per_pixel=4)
    >>> state = CastState.for_viewport(
    ...     create_default_scene(), setup_viewport(64, 64), RandomSeries(12345)
    ... )
    >>> state.view_x, state.view_y = 0.0, 0.5
    >>> color = cast_rays(state, settings)
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from tiletracer.camera.viewport import Viewport, get_ray_jittered
from tiletracer.core.random_series import RandomSeries
from tiletracer.core.ray import Ray
from tiletracer.core.settings import RenderSettings
from tiletracer.core.vector import (
    Vector3,
    hadamard_product,
    inner_product,
    lerp,
    normalize_or_zero,
    reflect,
    vec3,
    zero_vector,
)
from tiletracer.materials.table import BACKGROUND_MATERIAL, get_material
from tiletracer.scene.intersection import intersect_scene
from tiletracer.scene.scene import Scene

# Added to the cosine term so grazing bounces still carry some light
COSINE_BIAS = np.float32(0.5)

_ZERO = np.float32(0.0)


@dataclass(eq=False)
class CastState:
    """Working state of one worker while it renders a tile.

    Owned by exactly one worker and never shared. The worker sets
    ``view_x``/``view_y`` for each pixel before calling ``cast_rays``, which
    leaves the pixel's radiance in ``final_color`` and adds to
    ``bounces_computed``.

    Attributes:
        scene: The scene being rendered.
        viewport: Camera basis and film geometry.
        series: The tile's random series, advanced by every draw.
        view_x: Normalized view x coordinate of the current pixel.
        view_y: Normalized view y coordinate of the current pixel.
        final_color: Linear radiance estimate of the last pixel cast.
        bounces_computed: Bounces traced by this state so far.
    """

    scene: Scene
    viewport: Viewport
    series: RandomSeries
    view_x: np.float32 = np.float32(0.0)
    view_y: np.float32 = np.float32(0.0)
    final_color: Vector3 = field(default_factory=zero_vector)
    bounces_computed: int = 0

    @classmethod
    def for_viewport(cls, scene: Scene, viewport: Viewport, series: RandomSeries) -> CastState:
        """Create a fresh state with no bounces counted yet."""
        return cls(scene=scene, viewport=viewport, series=series)


def _random_bounce(normal: Vector3, series: RandomSeries) -> Vector3:
    """Perturb a normal by a random offset in [-1, 1]^3 and renormalize."""
    offset = vec3(series.uniform_signed(), series.uniform_signed(), series.uniform_signed())
    return normalize_or_zero(normal + offset)


def trace_path(
    ray: Ray,
    scene: Scene,
    series: RandomSeries,
    settings: RenderSettings,
) -> tuple[Vector3, int]:
    """Trace a single light path through the scene.

    Args:
        ray: The primary ray. Not modified.
        scene: The scene to trace against.
        series: Random series for the diffuse bounce directions.
        settings: Supplies max_bounce_count, minimum_hit_distance and
            tolerance.

    Returns:
        A tuple of (radiance, bounces) where radiance is the linear RGB
        estimate for this path and bounces is the number of scene
        intersection tests performed.
    """
    ray_origin = ray.origin
    ray_direction = ray.direction

    sample = zero_vector()
    attenuation = vec3(1.0, 1.0, 1.0)
    bounces = 0

    for _ in range(settings.max_bounce_count):
        bounces += 1

        record = intersect_scene(
            scene,
            ray_origin,
            ray_direction,
            settings.minimum_hit_distance,
            settings.tolerance,
        )

        if record is None:
            # Escaped: the sky is seen through everything gathered so far
            sample = sample + hadamard_product(attenuation, BACKGROUND_MATERIAL.emit_color)
            break

        material = get_material(record.material)
        normal = record.normal

        sample = sample + hadamard_product(attenuation, material.emit_color)

        cosine_attenuation = max(inner_product(-ray_direction, normal) + COSINE_BIAS, _ZERO)
        attenuation = hadamard_product(
            attenuation, cosine_attenuation * material.reflection_color
        )

        ray_origin = ray_origin + record.t * ray_direction

        pure_bounce = reflect(ray_direction, normal)
        random_bounce = _random_bounce(normal, series)
        ray_direction = normalize_or_zero(lerp(random_bounce, material.specular, pure_bounce))

    return sample, bounces


def cast_rays(state: CastState, settings: RenderSettings) -> Vector3:
    """Estimate the radiance of the pixel at (state.view_x, state.view_y).

    Averages ``settings.rays_per_pixel`` jittered path samples, each weighted
    by ``1 / rays_per_pixel``.

    Args:
        state: The worker's cast state. Its series is advanced, its
            final_color is replaced and its bounces_computed is increased.
        settings: Render settings.

    Returns:
        The linear radiance estimate, also stored in state.final_color.
    """
    contribution = settings.contribution
    view_x = np.float32(state.view_x)
    view_y = np.float32(state.view_y)

    final_color = zero_vector()
    bounces_computed = 0

    for _ in range(settings.rays_per_pixel):
        ray = get_ray_jittered(state.viewport, view_x, view_y, state.series)
        sample, bounces = trace_path(ray, state.scene, state.series, settings)

        final_color = final_color + contribution * sample
        bounces_computed += bounces

    state.final_color = final_color
    state.bounces_computed += bounces_computed
    return final_color
