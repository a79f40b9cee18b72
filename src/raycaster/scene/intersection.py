"""Scene-level sphere intersection testing.

This module stores the scene's spheres in Taichi fields and provides the
nearest-hit query used by the render loop. Every sphere is tested against
every ray; the smallest valid t wins regardless of sphere order.

Each sphere carries the registry index of its Phong material.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.scene.intersection import add_sphere, clear_scene, vec3
    >>> clear_scene()
    >>> add_sphere(vec3(0, 0, -5), 1.0, material_id=0)
    0
    >>> # Use intersect_scene within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from raycaster.geometry.sphere import Sphere, hit_sphere, sphere_normal

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Larger than any hit distance in a sane scene
T_MAX = 1e30


@ti.dataclass
class SceneHitRecord:
    """Record of the nearest ray-scene intersection.

    Attributes:
        hit: 1 if any sphere was hit, 0 otherwise.
        t: Distance along the ray to the nearest hit. Only valid if hit == 1.
        point: The hit point. Only valid if hit == 1.
        normal: Outward unit normal of the hit sphere at the hit point.
            Only valid if hit == 1.
        sphere_index: Index of the hit sphere, -1 on a miss.
        material_id: Material registry index of the hit sphere, -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    sphere_index: ti.i32
    material_id: ti.i32


# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all spheres from the scene.

    Resets the sphere count to zero. The field data is overwritten when new
    spheres are added.
    """
    num_spheres[None] = 0


def add_sphere(center: vec3, radius: float, material_id: int = 0) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere. Must be positive.
        material_id: The material registry index for this sphere.

    Returns:
        The index of the added sphere.

    Raises:
        ValueError: If the radius is not positive.
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    if not radius > 0.0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")

    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = center
    sphere_radii[idx] = radius
    sphere_material_ids[idx] = material_id
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


@ti.func
def get_sphere(sphere_idx: ti.i32) -> Sphere:
    """Get a sphere by index."""
    return Sphere(center=sphere_centers[sphere_idx], radius=sphere_radii[sphere_idx])


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        sphere_index=-1,
        material_id=-1,
    )


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Find the nearest sphere hit along a ray.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        A SceneHitRecord for the closest sphere, or a miss record.
    """
    closest_t = T_MAX
    closest_idx = -1

    for i in range(num_spheres[None]):
        rec = hit_sphere(ray_origin, ray_direction, get_sphere(i))
        if rec.hit == 1 and rec.t < closest_t:
            closest_t = rec.t
            closest_idx = i

    result = _make_miss_record()
    if closest_idx >= 0:
        point = ray_origin + closest_t * ray_direction
        result = SceneHitRecord(
            hit=1,
            t=closest_t,
            point=point,
            normal=sphere_normal(point, get_sphere(closest_idx)),
            sphere_index=closest_idx,
            material_id=sphere_material_ids[closest_idx],
        )

    return result
