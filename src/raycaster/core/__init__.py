"""Core rendering module.

This module contains the fundamental building blocks of the ray caster:

Components:
    ray: Ray data structure and vector utilities
    settings: Render settings (image size, background, field of view)
    integrator: Per-pixel ray casting and scanline/frame kernels
    renderer: Host-side wrapper that streams scanlines to an image sink

The pipeline is a single pass per pixel: build a camera ray, find the
nearest sphere hit, shade it with the Phong model against every point
light, or return the background color on a miss. There is no recursion,
no shadow testing and no sample accumulation.

All compute-intensive operations use Taichi kernels.
"""

from .ray import (
    Ray,
    cross,
    dot,
    length,
    length_squared,
    make_ray,
    normalize,
    ray_at,
    reflect,
    vec3,
)
from .settings import RenderSettings

# Note: integrator and renderer are NOT imported here because they allocate
# Taichi fields at import time. Import them after ti.init():
#   from raycaster.core.renderer import Renderer

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "RenderSettings",
]
