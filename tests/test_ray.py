"""Unit tests for the Ray dataclass and vector utilities.

Tests cover:
- Ray construction and evaluation
- dot, cross and length
- normalize, including the zero-length precondition
- reflect
"""

import math

import pytest
import taichi as ti


class TestRay:
    """Tests for Ray construction and ray_at."""

    def test_ray_at(self):
        """Test evaluating a point along a ray."""
        from raycaster.core.ray import make_ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(1.0, 2.0, 3.0), vec3(0.0, 0.0, -1.0))
            result[None] = ray_at(ray, 5.0)

        test_kernel()
        p = result[None]
        assert abs(p[0] - 1.0) < 1e-6
        assert abs(p[1] - 2.0) < 1e-6
        assert abs(p[2] - (-2.0)) < 1e-6

    def test_ray_fields(self):
        """Test that the Ray dataclass keeps origin and direction."""
        from raycaster.core.ray import Ray, vec3

        origin = ti.field(dtype=ti.math.vec3, shape=())
        direction = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 1.0, 0.0), direction=vec3(1.0, 0.0, 0.0))
            origin[None] = ray.origin
            direction[None] = ray.direction

        test_kernel()
        assert tuple(origin[None]) == pytest.approx((0.0, 1.0, 0.0))
        assert tuple(direction[None]) == pytest.approx((1.0, 0.0, 0.0))


class TestVectorProducts:
    """Tests for dot, cross and length."""

    def test_dot(self):
        from raycaster.core.ray import dot, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = dot(vec3(1.0, 2.0, 3.0), vec3(4.0, -5.0, 6.0))

        test_kernel()
        assert abs(result[None] - 12.0) < 1e-6

    def test_cross_follows_right_hand_rule(self):
        from raycaster.core.ray import cross, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = cross(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        assert tuple(result[None]) == pytest.approx((0.0, 0.0, 1.0))

    def test_cross_is_perpendicular(self):
        from raycaster.core.ray import cross, dot, vec3

        d1 = ti.field(dtype=ti.f32, shape=())
        d2 = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            a = vec3(1.0, 2.0, 3.0)
            b = vec3(-2.0, 0.5, 4.0)
            c = cross(a, b)
            d1[None] = dot(a, c)
            d2[None] = dot(b, c)

        test_kernel()
        assert abs(d1[None]) < 1e-5
        assert abs(d2[None]) < 1e-5

    def test_length(self):
        from raycaster.core.ray import length, length_squared, vec3

        len_result = ti.field(dtype=ti.f32, shape=())
        len_sq_result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            v = vec3(3.0, 4.0, 12.0)
            len_result[None] = length(v)
            len_sq_result[None] = length_squared(v)

        test_kernel()
        assert abs(len_result[None] - 13.0) < 1e-5
        assert abs(len_sq_result[None] - 169.0) < 1e-4


class TestNormalize:
    """Tests for normalize."""

    @pytest.mark.parametrize(
        "v",
        [(3.0, 0.0, 0.0), (1.0, 1.0, 1.0), (-0.001, 0.002, 0.0), (100.0, -250.0, 7.0)],
    )
    def test_normalize_has_unit_length(self, v):
        """Test that normalize() returns a unit vector with the same direction."""
        from raycaster.core.ray import length, normalize, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())
        result_len = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel(x: ti.f32, y: ti.f32, z: ti.f32):
            n = normalize(vec3(x, y, z))
            result[None] = n
            result_len[None] = length(n)

        test_kernel(*v)
        assert abs(result_len[None] - 1.0) < 1e-5

        norm = math.sqrt(sum(c * c for c in v))
        expected = tuple(c / norm for c in v)
        assert tuple(result[None]) == pytest.approx(expected, abs=1e-5)

    def test_normalize_zero_vector_fails(self):
        """Test that a zero-length vector is rejected, never returned."""
        from raycaster.core.ray import normalize, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = normalize(vec3(0.0, 0.0, 0.0))

        with pytest.raises((AssertionError, RuntimeError)):
            test_kernel()


class TestReflect:
    """Tests for reflect."""

    def test_reflect_off_floor(self):
        """Test a ray bouncing off a horizontal surface."""
        from raycaster.core.ray import normalize, reflect, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            v = normalize(vec3(1.0, -1.0, 0.0))
            result[None] = reflect(v, vec3(0.0, 1.0, 0.0))

        test_kernel()
        s = 1.0 / math.sqrt(2.0)
        assert tuple(result[None]) == pytest.approx((s, s, 0.0), abs=1e-6)

    @pytest.mark.parametrize(
        "v,n",
        [
            ((1.0, 2.0, 3.0), (0.0, 0.0, 1.0)),
            ((-0.5, 0.25, 4.0), (0.6, 0.8, 0.0)),
            ((0.0, -3.0, 1.0), (0.0, 1.0, 0.0)),
        ],
    )
    def test_reflect_flips_normal_component(self, v, n):
        """Test dot(reflect(v, n), n) == -dot(v, n) for unit n."""
        from raycaster.core.ray import dot, reflect, vec3

        before = ti.field(dtype=ti.f32, shape=())
        after = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel(vx: ti.f32, vy: ti.f32, vz: ti.f32, nx: ti.f32, ny: ti.f32, nz: ti.f32):
            vv = vec3(vx, vy, vz)
            nn = vec3(nx, ny, nz)
            before[None] = dot(vv, nn)
            after[None] = dot(reflect(vv, nn), nn)

        test_kernel(*v, *n)
        assert abs(after[None] + before[None]) < 1e-5
