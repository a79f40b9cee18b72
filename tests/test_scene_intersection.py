"""Tests for scene-level intersection.

Tests cover:
- Sphere storage and capacity checks
- Nearest-hit selection regardless of sphere order
- Hit record contents (point, normal, sphere index, material id)
- Empty scenes
"""

import pytest
import taichi as ti


def _intersect(origin=(0.0, 0.0, 0.0), direction=(0.0, 0.0, -1.0)):
    """Run intersect_scene for one ray and return the record as a dict."""
    from raycaster.scene.intersection import intersect_scene, vec3

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())
    point = ti.field(dtype=ti.math.vec3, shape=())
    normal = ti.field(dtype=ti.math.vec3, shape=())
    sphere_index = ti.field(dtype=ti.i32, shape=())
    material_id = ti.field(dtype=ti.i32, shape=())

    @ti.kernel
    def test_kernel(ox: ti.f32, oy: ti.f32, oz: ti.f32, dx: ti.f32, dy: ti.f32, dz: ti.f32):
        rec = intersect_scene(vec3(ox, oy, oz), vec3(dx, dy, dz))
        hit[None] = rec.hit
        t_val[None] = rec.t
        point[None] = rec.point
        normal[None] = rec.normal
        sphere_index[None] = rec.sphere_index
        material_id[None] = rec.material_id

    test_kernel(*origin, *direction)
    return {
        "hit": hit[None],
        "t": t_val[None],
        "point": tuple(point[None]),
        "normal": tuple(normal[None]),
        "sphere_index": sphere_index[None],
        "material_id": material_id[None],
    }


class TestSphereStorage:
    """Tests for adding spheres to the scene."""

    def test_add_sphere_returns_index(self):
        from raycaster.scene.intersection import add_sphere, get_sphere_count

        assert add_sphere((0.0, 0.0, -5.0), 1.0) == 0
        assert add_sphere((0.0, 0.0, -8.0), 1.0) == 1
        assert get_sphere_count() == 2

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_add_sphere_rejects_non_positive_radius(self, radius):
        from raycaster.scene.intersection import add_sphere, get_sphere_count

        with pytest.raises(ValueError, match="radius"):
            add_sphere((0.0, 0.0, -5.0), radius)
        assert get_sphere_count() == 0

    def test_clear_scene(self):
        from raycaster.scene.intersection import add_sphere, clear_scene, get_sphere_count

        add_sphere((0.0, 0.0, -5.0), 1.0)
        clear_scene()
        assert get_sphere_count() == 0

    def test_capacity_exceeded(self):
        from raycaster.scene.intersection import MAX_SPHERES, add_sphere

        for i in range(MAX_SPHERES):
            add_sphere((float(i), 0.0, -5.0), 0.1)
        with pytest.raises(RuntimeError, match="Maximum number of spheres"):
            add_sphere((0.0, 0.0, -5.0), 0.1)


class TestIntersectScene:
    """Tests for nearest-hit queries."""

    def test_empty_scene_misses(self):
        rec = _intersect()
        assert rec["hit"] == 0
        assert rec["sphere_index"] == -1
        assert rec["material_id"] == -1

    def test_single_sphere(self):
        from raycaster.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -5.0), 1.0, material_id=3)
        rec = _intersect()
        assert rec["hit"] == 1
        assert abs(rec["t"] - 4.0) < 1e-5
        assert rec["point"] == pytest.approx((0.0, 0.0, -4.0), abs=1e-5)
        assert rec["normal"] == pytest.approx((0.0, 0.0, 1.0), abs=1e-5)
        assert rec["sphere_index"] == 0
        assert rec["material_id"] == 3

    def test_nearest_hit_when_far_sphere_first(self):
        """The nearest sphere wins even when it comes later in the list."""
        from raycaster.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -20.0), 2.0, material_id=0)
        add_sphere((0.0, 0.0, -5.0), 1.0, material_id=1)
        rec = _intersect()
        assert rec["hit"] == 1
        assert abs(rec["t"] - 4.0) < 1e-5
        assert rec["sphere_index"] == 1
        assert rec["material_id"] == 1

    def test_nearest_hit_when_near_sphere_first(self):
        from raycaster.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -5.0), 1.0, material_id=1)
        add_sphere((0.0, 0.0, -20.0), 2.0, material_id=0)
        rec = _intersect()
        assert rec["sphere_index"] == 0
        assert rec["material_id"] == 1
        assert abs(rec["t"] - 4.0) < 1e-5

    def test_overlapping_spheres(self):
        """A small sphere poking out of a larger one is hit first."""
        from raycaster.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -10.0), 3.0, material_id=0)
        add_sphere((0.0, 0.0, -7.5), 1.0, material_id=1)
        rec = _intersect()
        assert rec["sphere_index"] == 1
        assert abs(rec["t"] - 6.5) < 1e-5

    def test_miss_all_spheres(self):
        from raycaster.scene.intersection import add_sphere

        add_sphere((5.0, 0.0, -5.0), 1.0)
        add_sphere((-5.0, 0.0, -5.0), 1.0)
        rec = _intersect()
        assert rec["hit"] == 0

    def test_spheres_behind_are_ignored(self):
        from raycaster.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, 5.0), 1.0, material_id=0)
        add_sphere((0.0, 0.0, -10.0), 1.0, material_id=1)
        rec = _intersect()
        assert rec["sphere_index"] == 1
        assert abs(rec["t"] - 9.0) < 1e-5
