"""Pytest configuration for tiletracer tests.

This module provides shared fixtures for all test modules: a minimal
two-primitive scene and render settings small enough for fast tests.
"""

import logging

import pytest

from tiletracer.core.settings import RenderSettings
from tiletracer.materials.table import MaterialName
from tiletracer.scene.scene import Scene, make_plane, make_sphere


@pytest.fixture
def light_scene() -> Scene:
    """A metallic ground plane with an orange emitter sphere above it.

    Seen from the default camera at (0, -10, 1), the sphere fills the upper
    middle of the image and the plane the bottom rows. The orange emission
    differs from the white sky, so sphere hits show up in the image.
    """
    return Scene(
        planes=(make_plane((0.0, 0.0, 1.0), 0.0, MaterialName.METALLIC),),
        spheres=(make_sphere((0.0, 0.0, 2.0), 1.0, MaterialName.ORANGE),),
    )


@pytest.fixture
def small_settings() -> RenderSettings:
    """Low-cost settings for 32x32 renders split into 16 tiles."""
    return RenderSettings(
        image_width=32,
        image_height=32,
        worker_count=4,
        tile_width=8,
        tile_height=8,
        rays_per_pixel=4,
        max_bounce_count=4,
    )


@pytest.fixture(autouse=True)
def quiet_render_logging(caplog):
    """Keep per-tile debug logging out of test output unless a test asks."""
    caplog.set_level(logging.INFO, logger="tiletracer")
    yield
