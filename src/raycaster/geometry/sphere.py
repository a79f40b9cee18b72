"""Sphere primitive with geometric ray-sphere intersection.

This module provides a Sphere dataclass and the intersection test used by the
caster. The test is the classic geometric method: project the
origin-to-center vector onto the ray, measure the squared distance from the
center to the ray, and derive the chord half-length from the radius.

Given L = center - origin and tca = dot(L, direction):
    d^2 = dot(L, L) - tca^2
    thc = sqrt(r^2 - d^2)
    t0, t1 = tca - thc, tca + thc

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.geometry.sphere import Sphere, hit_sphere, vec3
    >>> sphere = Sphere(center=vec3(0, 0, -5), radius=1.0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti

from raycaster.core.ray import dot, normalize, vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere. Must be positive; this is
            validated when the scene is built, not here.
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Result of a ray-sphere test.

    Attributes:
        hit: 1 if the ray hits the sphere in front of its origin, else 0.
        t: Distance along the (unit) ray direction to the hit.
            Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> HitRecord:
    """Test for ray-sphere intersection using the geometric method.

    A sphere entirely behind the ray origin (tca < 0 with the origin outside
    the sphere) is rejected before any square root is taken. When the origin
    is inside the sphere the near root is negative and the exit point t1 is
    returned instead.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The ray direction. Must be unit length.
        sphere: The sphere to test.

    Returns:
        A HitRecord with the nearest non-negative t, or hit == 0 on a miss.
    """
    L = sphere.center - ray_origin
    tca = dot(L, ray_direction)
    r2 = sphere.radius * sphere.radius
    dist2 = dot(L, L)

    did_hit = 0
    hit_t = 0.0

    if not (tca < 0.0 and dist2 > r2):
        d2 = dist2 - tca * tca
        if d2 <= r2:
            thc = ti.sqrt(r2 - d2)
            t0 = tca - thc
            t1 = tca + thc
            if t0 > t1:
                temp = t0
                t0 = t1
                t1 = temp
            if t0 < 0.0:
                t0 = t1
            if t0 >= 0.0:
                did_hit = 1
                hit_t = t0

    return HitRecord(hit=did_hit, t=hit_t)


@ti.func
def sphere_normal(point: vec3, sphere: Sphere) -> vec3:
    """Outward unit normal of the sphere at a surface point."""
    return normalize(point - sphere.center)


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius."""
    return Sphere(center=center, radius=radius)
