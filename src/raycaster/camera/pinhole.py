"""Pinhole camera model for primary ray generation.

The camera sits at a fixed world position and looks down -z with +y up.
There is no look-at transform. The image plane is at unit distance (z = -1)
and its half-height is tan(vfov / 2), so the default 90 degree field of view
gives a plane spanning [-1, 1] vertically and [-aspect, aspect] horizontally.

For pixel (i, j), with j = 0 the bottom row, the ray direction is

    x = (2 * (i + 0.5) / width - 1) * aspect * tan(vfov / 2)
    y = (2 * (j + 0.5) / height - 1) * tan(vfov / 2)
    direction = normalize(x, y, -1)

Rays always pass through pixel centers; there is no jitter.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.camera.pinhole import PinholeCamera, setup_camera, get_ray
    >>> setup_camera(PinholeCamera(width=1024, height=768))
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(512, 384, 1024, 768)  # Ray near the image center
"""

import math
from dataclasses import dataclass

import numpy as np
import taichi as ti
import taichi.math as tm

from raycaster.core.ray import Ray, make_ray, normalize, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        vfov: Vertical field of view in degrees.
        origin: Camera position in world space (x, y, z).
    """

    width: int
    height: int
    vfov: float = 90.0
    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

# Camera origin (position)
_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())

# Image plane half extents at unit distance
_half_width = ti.field(dtype=ti.f32, shape=())
_half_height = ti.field(dtype=ti.f32, shape=())


# =============================================================================
# Camera Setup (Python-side, called once per camera configuration)
# =============================================================================


def setup_camera(camera: PinholeCamera) -> None:
    """Initialize camera state from configuration.

    Must be called before rendering, and again whenever the image size or
    field of view changes.

    Args:
        camera: Camera configuration.

    Raises:
        ValueError: If the dimensions are not positive or the field of view
            is outside (0, 180) degrees.
    """
    if camera.width <= 0 or camera.height <= 0:
        raise ValueError(f"Camera dimensions must be positive, got {camera.width}x{camera.height}")
    if not 0.0 < camera.vfov < 180.0:
        raise ValueError(f"vfov must be in (0, 180) degrees, got {camera.vfov}")

    half_height = math.tan(math.radians(camera.vfov) / 2.0)

    _camera_origin[None] = np.array(camera.origin, dtype=np.float32).tolist()
    _half_height[None] = half_height
    _half_width[None] = camera.aspect_ratio * half_height


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def get_camera_origin() -> vec3:
    """Get the camera origin (position) in world space."""
    return _camera_origin[None]


@ti.func
def get_ray(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray through the center of pixel (i, j).

    Args:
        pixel_i: Pixel x-coordinate (0 = left).
        pixel_j: Pixel y-coordinate (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the camera origin with a unit-length direction.
    """
    ndc_x = 2.0 * (ti.cast(pixel_i, ti.f32) + 0.5) / ti.cast(width, ti.f32) - 1.0
    ndc_y = 2.0 * (ti.cast(pixel_j, ti.f32) + 0.5) / ti.cast(height, ti.f32) - 1.0

    direction = normalize(vec3(ndc_x * _half_width[None], ndc_y * _half_height[None], -1.0))

    return make_ray(get_camera_origin(), direction)


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, tuple[float, ...]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with origin and the image plane half extents.
    """
    origin_vec = _camera_origin[None]
    return {
        "origin": (float(origin_vec[0]), float(origin_vec[1]), float(origin_vec[2])),
        "half_extent": (float(_half_width[None]), float(_half_height[None])),
    }
