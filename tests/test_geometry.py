"""Unit tests for the sphere and plane primitives.

Tests cover:
- Ray-sphere hits from outside and inside
- Misses, grazing rays and range limits
- Outward sphere normals
- Ray-plane hits, parallel rays and back-facing hits
- Ray evaluation
"""

import numpy as np
import pytest

from tiletracer.core.ray import Ray, ray_at
from tiletracer.core.vector import vec3
from tiletracer.geometry import HitRecord, Plane, Sphere, hit_plane, hit_sphere
from tiletracer.materials.table import MaterialName

T_MIN = 0.001
T_MAX = 1e30
TOLERANCE = 1e-4


@pytest.fixture
def unit_sphere() -> Sphere:
    """An orange unit sphere at the origin."""
    return Sphere(position=vec3(0.0, 0.0, 0.0), radius=1.0, material=MaterialName.ORANGE)


@pytest.fixture
def ground_plane() -> Plane:
    """The z = 0 plane with a metallic material."""
    return Plane(
        normal=vec3(0.0, 0.0, 1.0), distance_from_origin=0.0, material=MaterialName.METALLIC
    )


class TestRay:
    """Tests for the Ray dataclass."""

    def test_ray_at(self):
        """Test evaluating a point along a ray."""
        ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 0.0, -1.0))
        assert ray_at(ray, 5.0).tolist() == [1.0, 2.0, -2.0]

    def test_ray_at_zero_is_origin(self):
        """Test that t = 0 gives the origin."""
        ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(1.0, 0.0, 0.0))
        np.testing.assert_array_equal(ray_at(ray, 0.0), ray.origin)


class TestSphereIntersection:
    """Tests for hit_sphere."""

    def test_hit_from_outside(self, unit_sphere):
        """Test a ray aimed at the sphere hits the near surface."""
        record = hit_sphere(
            vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0), unit_sphere, T_MIN, T_MAX, TOLERANCE
        )
        assert isinstance(record, HitRecord)
        assert record.t == pytest.approx(4.0)
        assert record.material == MaterialName.ORANGE

    def test_outward_normal(self, unit_sphere):
        """Test that the near-side normal points back toward the ray."""
        record = hit_sphere(
            vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0), unit_sphere, T_MIN, T_MAX, TOLERANCE
        )
        np.testing.assert_allclose(record.normal, [0.0, 0.0, 1.0], atol=3e-3)

    def test_miss(self, unit_sphere):
        """Test that a ray passing beside the sphere misses."""
        record = hit_sphere(
            vec3(0.0, 2.0, 5.0), vec3(0.0, 0.0, -1.0), unit_sphere, T_MIN, T_MAX, TOLERANCE
        )
        assert record is None

    def test_sphere_behind_ray(self, unit_sphere):
        """Test that a sphere behind the origin is not hit."""
        record = hit_sphere(
            vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, 1.0), unit_sphere, T_MIN, T_MAX, TOLERANCE
        )
        assert record is None

    def test_grazing_ray_misses(self, unit_sphere):
        """Test that a tangent ray (zero discriminant) counts as a miss."""
        record = hit_sphere(
            vec3(1.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0), unit_sphere, T_MIN, T_MAX, TOLERANCE
        )
        assert record is None

    def test_origin_inside_uses_far_root(self, unit_sphere):
        """Test that a ray starting inside hits the far wall."""
        record = hit_sphere(
            vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 1.0), unit_sphere, T_MIN, T_MAX, TOLERANCE
        )
        assert record is not None
        assert record.t == pytest.approx(1.0)
        # The normal stays outward even when hit from inside
        np.testing.assert_allclose(record.normal, [0.0, 0.0, 1.0], atol=3e-3)

    def test_t_max_limits_hits(self, unit_sphere):
        """Test that hits beyond t_max are rejected."""
        record = hit_sphere(
            vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0), unit_sphere, T_MIN, 3.0, TOLERANCE
        )
        assert record is None

    def test_t_min_skips_near_root(self, unit_sphere):
        """Test that a near root below t_min falls back to the far root."""
        record = hit_sphere(
            vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0), unit_sphere, 4.5, T_MAX, TOLERANCE
        )
        assert record is not None
        assert record.t == pytest.approx(6.0)

    def test_offset_sphere(self):
        """Test a sphere away from the origin with a larger radius."""
        sphere = Sphere(position=vec3(0.0, 10.0, 0.0), radius=2.0, material=MaterialName.VIOLET)
        record = hit_sphere(
            vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0), sphere, T_MIN, T_MAX, TOLERANCE
        )
        assert record.t == pytest.approx(8.0)
        np.testing.assert_allclose(record.normal, [0.0, -1.0, 0.0], atol=3e-3)

    def test_unnormalized_direction(self, unit_sphere):
        """Test that t is measured in units of the direction length."""
        record = hit_sphere(
            vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -2.0), unit_sphere, T_MIN, T_MAX, TOLERANCE
        )
        assert record.t == pytest.approx(2.0)


class TestPlaneIntersection:
    """Tests for hit_plane."""

    def test_hit_from_above(self, ground_plane):
        """Test a downward ray hits the ground."""
        record = hit_plane(
            vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0), ground_plane, T_MIN, T_MAX, TOLERANCE
        )
        assert record.t == pytest.approx(5.0)
        assert record.normal.tolist() == [0.0, 0.0, 1.0]
        assert record.material == MaterialName.METALLIC

    def test_oblique_hit(self, ground_plane):
        """Test a 45 degree ray."""
        direction = vec3(0.0, np.sqrt(0.5), -np.sqrt(0.5))
        record = hit_plane(vec3(0.0, 0.0, 1.0), direction, ground_plane, T_MIN, T_MAX, TOLERANCE)
        assert record.t == pytest.approx(np.sqrt(2.0), rel=1e-5)

    def test_parallel_ray_misses(self, ground_plane):
        """Test that a ray parallel to the plane never hits."""
        record = hit_plane(
            vec3(0.0, 0.0, 1.0), vec3(1.0, 0.0, 0.0), ground_plane, T_MIN, T_MAX, TOLERANCE
        )
        assert record is None

    def test_nearly_parallel_ray_misses(self, ground_plane):
        """Test that a denominator within tolerance counts as parallel."""
        record = hit_plane(
            vec3(0.0, 0.0, 1e-6), vec3(1.0, 0.0, -5e-5), ground_plane, T_MIN, T_MAX, TOLERANCE
        )
        assert record is None

    def test_pointing_away_misses(self, ground_plane):
        """Test that a ray moving away from the plane misses."""
        record = hit_plane(
            vec3(0.0, 0.0, 1.0), vec3(0.0, 0.0, 1.0), ground_plane, T_MIN, T_MAX, TOLERANCE
        )
        assert record is None

    def test_hit_from_below_keeps_normal(self, ground_plane):
        """Test that a hit from the back side reports the stored normal."""
        record = hit_plane(
            vec3(0.0, 0.0, -2.0), vec3(0.0, 0.0, 1.0), ground_plane, T_MIN, T_MAX, TOLERANCE
        )
        assert record.t == pytest.approx(2.0)
        assert record.normal.tolist() == [0.0, 0.0, 1.0]

    def test_distance_offsets_plane(self):
        """Test that distance -2 describes the z = 2 plane."""
        plane = Plane(
            normal=vec3(0.0, 0.0, 1.0), distance_from_origin=-2.0, material=MaterialName.WHITE
        )
        record = hit_plane(
            vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0), plane, T_MIN, T_MAX, TOLERANCE
        )
        assert record.t == pytest.approx(3.0)

    def test_origin_on_plane_misses(self, ground_plane):
        """Test that a ray leaving the surface does not re-hit it at t = 0."""
        record = hit_plane(
            vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0), ground_plane, T_MIN, T_MAX, TOLERANCE
        )
        assert record is None

    def test_t_max_limits_hits(self, ground_plane):
        """Test that hits beyond t_max are rejected."""
        record = hit_plane(
            vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0), ground_plane, T_MIN, 4.0, TOLERANCE
        )
        assert record is None
