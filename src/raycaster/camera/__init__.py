"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole camera looking down -z

Camera responsibilities:
    - Map pixel coordinates to normalized device coordinates
    - Correct for the image aspect ratio
    - Build unit-length ray directions through pixel centers

Pixel coordinates follow the render target convention:
    i in [0, width): left to right
    j in [0, height): bottom to top

Importing this package allocates Taichi fields; call ti.init() first.
"""

from .pinhole import (
    PinholeCamera,
    get_camera_info,
    get_camera_origin,
    get_ray,
    setup_camera,
)

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "get_ray",
    "get_camera_origin",
    "get_camera_info",
]
