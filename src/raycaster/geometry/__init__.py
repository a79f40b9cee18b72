"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with geometric ray-sphere intersection

The scene is brute-force scanned, so there is no acceleration structure.
Intersection routines are Taichi functions (@ti.func) and follow the pattern:
    record = hit_sphere(ray_origin, ray_direction, sphere)
"""

from .sphere import HitRecord, Sphere, hit_sphere, make_sphere, sphere_normal

__all__ = [
    "Sphere",
    "HitRecord",
    "hit_sphere",
    "make_sphere",
    "sphere_normal",
]
