"""Ray data structure and vector utilities for the sphere ray caster.

This module provides the Ray dataclass and the small set of vector functions
the caster needs: dot and cross products, lengths, normalization and mirror
reflection. Everything here is a Taichi function so it can be called from
rendering kernels.

Vectors are Taichi ``vec3`` values. They are used interchangeably as points,
directions and RGB colors, and have value semantics inside kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.core.ray import Ray, ray_at, vec3
    >>> @ti.kernel
    ... def probe() -> vec3:
    ...     ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    ...     return ray_at(ray, 5.0)  # (0, 0, -5)
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction of the ray (vec3). Camera rays are always
            unit length; intersection code relies on it.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product a . b."""
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product a x b."""
    return vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector."""
    return dot(v, v)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length sqrt(v . v)."""
    return ti.sqrt(dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Scale a vector to unit length.

    Passing a zero-length vector is a precondition violation. With Taichi
    running in debug mode the assertion below aborts the kernel; in release
    mode the result is NaN. A zero vector is never returned.

    Args:
        v: A non-zero vector.

    Returns:
        v / length(v).
    """
    n = length(v)
    assert n > 0.0, "normalize() called with a zero-length vector"
    return v / n


@ti.func
def reflect(v: vec3, n: vec3) -> vec3:
    """Reflect v about the normal n: v - 2 * dot(v, n) * n.

    Args:
        v: The vector to reflect.
        n: The mirror normal. Must be unit length.

    Returns:
        The mirrored vector.
    """
    return v - 2.0 * dot(v, n) * n

