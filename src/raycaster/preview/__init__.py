"""Preview module for output and visualization.

Components:
    export: PPM (P3) streaming writer and PNG export
    display: Matplotlib-based static preview

Both formats share one channel mapping, trunc(255 * c) limited to [0, 255].
Nothing in this package touches Taichi, so it can be imported before
ti.init().

Example:
    >>> from raycaster.preview import save_ppm, show_image
    >>> save_ppm(image, "spheres.ppm")
    >>> show_image(image)
"""

from raycaster.preview.display import show_image
from raycaster.preview.export import (
    PPM_MAX_VALUE,
    PPMWriter,
    color_to_ppm_ints,
    image_to_uint8,
    save_png_from_array,
    save_ppm,
    write_ppm,
)

__all__ = [
    # Display functions
    "show_image",
    # Export functions
    "PPMWriter",
    "PPM_MAX_VALUE",
    "color_to_ppm_ints",
    "image_to_uint8",
    "write_ppm",
    "save_ppm",
    "save_png_from_array",
]
