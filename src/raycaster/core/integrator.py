"""Ray casting integrator and render kernels.

This module implements the per-pixel render loop. For every pixel it builds
a camera ray, finds the nearest sphere hit, and shades that hit with the
Phong model against every point light. Rays that miss every sphere take the
background color. There is no recursion, no shadow testing and no sample
accumulation, so each pixel is a pure function of its coordinates, the
camera and the scene.

Pixels are rendered one scanline at a time. Within a scanline the Taichi
kernel computes every column in parallel; scanlines are produced in order so
the caller can stream them straight to an image sink without holding the
whole frame in memory.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.camera.pinhole import PinholeCamera, setup_camera
    >>> from raycaster.core.integrator import (
    ...     apply_render_settings, render_scanline, setup_render_target
    ... )
    >>> from raycaster.scene.default_scene import create_default_scene
    >>> from raycaster.scene.manager import SceneManager
    >>>
    >>> config, settings = create_default_scene()
    >>> SceneManager().load(config)
    >>> setup_camera(PinholeCamera(settings.width, settings.height))
    >>> apply_render_settings(settings)
    >>> setup_render_target(settings.width, settings.height)
    >>> top_row = render_scanline(settings.height - 1)
"""

import logging

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from raycaster.camera.pinhole import get_ray
from raycaster.core.settings import RenderSettings
from raycaster.materials.phong import shade_phong_by_id
from raycaster.scene.intersection import intersect_scene

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

# Fixed point light directions are measured from in legacy mode
LEGACY_LIGHT_POINT = (1.0, 1.0, 1.0)

# =============================================================================
# Render Settings State
# =============================================================================

_background = ti.Vector.field(3, dtype=ti.f32, shape=())
_legacy_light_point = ti.field(dtype=ti.i32, shape=())


def apply_render_settings(settings: RenderSettings) -> None:
    """Push the shading-related render settings into kernel state.

    Args:
        settings: The render settings. Only the background color and the
            legacy light point switch are used here; dimensions go to the
            camera and the render target.
    """
    _background[None] = [settings.background[0], settings.background[1], settings.background[2]]
    _legacy_light_point[None] = 1 if settings.legacy_light_point else 0


def get_background() -> tuple[float, float, float]:
    """Get the current background color."""
    bg = _background[None]
    return (float(bg[0]), float(bg[1]), float(bg[2]))


# =============================================================================
# Render Target (Scanline Buffer)
# =============================================================================

# Maximum supported image width (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 8192

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# One row of output colors
_scanline_buffer = ti.Vector.field(3, dtype=ti.f32, shape=MAX_IMAGE_WIDTH)

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Set the active image dimensions.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels.

    Raises:
        ValueError: If a dimension is not positive or the width exceeds the
            scanline buffer.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH:
        raise ValueError(
            f"Image width ({width}) exceeds maximum supported ({MAX_IMAGE_WIDTH})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1
    _scanline_buffer.fill(0.0)


def clear_render_target() -> None:
    """Mark the render target as not set up."""
    _render_target_initialized[None] = 0
    _scanline_buffer.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Ray Casting Core
# =============================================================================


@ti.func
def cast_ray(origin: vec3, direction: vec3) -> vec3:
    """Return the color seen along a ray.

    Args:
        origin: The ray origin.
        direction: The unit ray direction.

    Returns:
        The shaded color of the nearest sphere, or the background color if
        the ray hits nothing.
    """
    color = _background[None]
    record = intersect_scene(origin, direction)

    if record.hit == 1:
        light_point = record.point
        if _legacy_light_point[None] == 1:
            light_point = vec3(LEGACY_LIGHT_POINT[0], LEGACY_LIGHT_POINT[1], LEGACY_LIGHT_POINT[2])
        color = shade_phong_by_id(light_point, record.normal, record.material_id)

    return color


@ti.func
def render_pixel_impl(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Compute the color of pixel (i, j), with j = 0 the bottom row."""
    ray = get_ray(pixel_i, pixel_j, width, height)
    return cast_ray(ray.origin, ray.direction)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_scanline(pixel_j: ti.i32, width: ti.i32, height: ti.i32):
    """Render one row of pixels into the scanline buffer.

    Args:
        pixel_j: Row index (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.
    """
    for i in range(width):
        _scanline_buffer[i] = render_pixel_impl(i, pixel_j, width, height)


@ti.kernel
def _render_single_pixel(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Render a single pixel. Used for testing and debugging."""
    return render_pixel_impl(pixel_i, pixel_j, width, height)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_pixel(pixel_i: int, pixel_j: int) -> tuple[float, float, float]:
    """Render a single pixel.

    Args:
        pixel_i: Pixel x-coordinate (0 = left).
        pixel_j: Pixel y-coordinate (0 = bottom).

    Returns:
        Tuple of (R, G, B) color values, unclamped.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    color = _render_single_pixel(pixel_i, pixel_j, width, height)

    return (float(color[0]), float(color[1]), float(color[2]))


def render_scanline(pixel_j: int) -> npt.NDArray[np.float32]:
    """Render one row of the image.

    Args:
        pixel_j: Row index (0 = bottom row, height - 1 = top row).

    Returns:
        NumPy array of shape (width, 3), left to right, unclamped.

    Raises:
        RuntimeError: If render target has not been set up.
        IndexError: If the row index is out of range.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    if not 0 <= pixel_j < height:
        raise IndexError(f"Row {pixel_j} out of range for image height {height}")

    _render_scanline(pixel_j, width, height)

    return _scanline_buffer.to_numpy()[:width].astype(np.float32)


def render_image() -> npt.NDArray[np.float32]:
    """Render the whole image.

    Returns:
        NumPy array of shape (height, width, 3). Row 0 is the top of the
        image, matching the usual image memory layout.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    logger.debug("Rendering %dx%d image", width, height)

    rows = [render_scanline(j) for j in range(height - 1, -1, -1)]
    return np.stack(rows, axis=0)
