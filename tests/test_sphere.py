"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside
- Ray missing sphere
- Ray starting inside sphere (exit point)
- Sphere behind the ray origin
- Ray tangent to sphere
- Outward normals
"""

import pytest
import taichi as ti


def _cast(origin, direction, center, radius):
    """Run hit_sphere for one ray and sphere, returning (hit, t)."""
    from raycaster.geometry.sphere import Sphere, hit_sphere, vec3

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(
        ox: ti.f32, oy: ti.f32, oz: ti.f32,
        dx: ti.f32, dy: ti.f32, dz: ti.f32,
        cx: ti.f32, cy: ti.f32, cz: ti.f32,
        r: ti.f32,
    ):
        sphere = Sphere(center=vec3(cx, cy, cz), radius=r)
        record = hit_sphere(vec3(ox, oy, oz), vec3(dx, dy, dz), sphere)
        hit[None] = record.hit
        t_val[None] = record.t

    test_kernel(*origin, *direction, *center, radius)
    return hit[None], t_val[None]


class TestSphereBasics:
    """Tests for Sphere dataclass and basic operations."""

    def test_make_sphere(self):
        """Test make_sphere convenience function."""
        from raycaster.geometry.sphere import make_sphere, vec3

        center_result = ti.field(dtype=ti.math.vec3, shape=())
        radius_result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = make_sphere(vec3(1.0, 2.0, 3.0), 0.5)
            center_result[None] = sphere.center
            radius_result[None] = sphere.radius

        test_kernel()
        c = center_result[None]
        assert abs(c[0] - 1.0) < 1e-6
        assert abs(c[1] - 2.0) < 1e-6
        assert abs(c[2] - 3.0) < 1e-6
        assert abs(radius_result[None] - 0.5) < 1e-6


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_hit_sphere_direct_hit(self):
        """Test ray hitting sphere head-on from outside: t = distance - radius."""
        hit, t = _cast((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -5.0), 1.0)
        assert hit == 1
        assert abs(t - 4.0) < 1e-5

    def test_hit_sphere_off_axis(self):
        """Test a hit where the ray passes off the sphere center."""
        # Ray along -z at x = 0.6 hits a unit sphere at z = -5 + 0.8
        hit, t = _cast((0.6, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -5.0), 1.0)
        assert hit == 1
        assert abs(t - 4.2) < 1e-5

    def test_hit_sphere_miss(self):
        """Test ray missing sphere entirely."""
        hit, _ = _cast((5.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -5.0), 1.0)
        assert hit == 0

    def test_hit_sphere_inside(self):
        """Test ray starting inside sphere returns the exit point."""
        hit, t = _cast((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 0.0, 0.0), 1.0)
        assert hit == 1
        assert abs(t - 1.0) < 1e-5

    def test_hit_sphere_inside_off_center(self):
        """Test ray starting inside sphere but behind the center."""
        # Origin 0.5 in front of the center, looking away from it
        hit, t = _cast((0.0, 0.0, -4.5), (0.0, 0.0, 1.0), (0.0, 0.0, -5.0), 1.0)
        assert hit == 1
        assert abs(t - 0.5) < 1e-5

    def test_hit_sphere_behind(self):
        """Test that a sphere behind the ray origin is not hit."""
        hit, _ = _cast((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 0.0, -5.0), 1.0)
        assert hit == 0

    def test_hit_sphere_tangent(self):
        """Test ray grazing the sphere surface."""
        hit, t = _cast((1.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -5.0), 1.0)
        assert hit == 1
        assert abs(t - 5.0) < 1e-4

    def test_hit_sphere_just_outside_tangent(self):
        """Test ray passing just outside the sphere."""
        hit, _ = _cast((1.001, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -5.0), 1.0)
        assert hit == 0

    @pytest.mark.parametrize("distance,radius", [(10.0, 2.0), (16.0, 3.0), (100.0, 0.5)])
    def test_hit_distance_scales(self, distance, radius):
        """Test t = distance - radius for head-on hits at several scales."""
        hit, t = _cast((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -distance), radius)
        assert hit == 1
        assert abs(t - (distance - radius)) < 1e-4


class TestSphereNormal:
    """Tests for sphere_normal."""

    def test_normal_points_outward(self):
        from raycaster.geometry.sphere import Sphere, sphere_normal, vec3

        normal = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            sphere = Sphere(center=vec3(1.0, 1.0, 1.0), radius=2.0)
            normal[None] = sphere_normal(vec3(1.0, 3.0, 1.0), sphere)

        test_kernel()
        assert tuple(normal[None]) == pytest.approx((0.0, 1.0, 0.0), abs=1e-6)
