"""Scanline renderer that streams rows to an image sink.

This module provides a convenient wrapper around the core integrator that:
- Configures camera, background and render target from RenderSettings
- Produces scanlines top to bottom, one at a time
- Streams them to a PPM sink without materializing the frame
- Reports progress through a callback, separate from the image sink

The image sink and the progress sink are independent: image data goes to
whatever text stream the caller passes in, and progress goes only to the
callback.

Example:
    >>> import sys
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycaster.core.renderer import Renderer
    >>> from raycaster.scene.default_scene import create_default_scene
    >>> from raycaster.scene.manager import SceneManager
    >>>
    >>> config, settings = create_default_scene()
    >>> SceneManager().load(config)
    >>> renderer = Renderer(settings)
    >>> renderer.render_to(sys.stdout)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt

from raycaster.camera.pinhole import PinholeCamera, setup_camera
from raycaster.core.integrator import (
    apply_render_settings,
    render_scanline,
    setup_render_target,
)
from raycaster.core.settings import RenderSettings
from raycaster.preview.export import PPMWriter, save_png_from_array

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


class Renderer:
    """Renders the resident scene one scanline at a time.

    The scene itself is loaded separately (see SceneManager); the renderer
    owns only the per-render state: camera, background and image size.

    Attributes:
        settings: The active render settings.
    """

    def __init__(self, settings: RenderSettings | None = None) -> None:
        """Initialize the renderer.

        Args:
            settings: Render settings. Defaults to RenderSettings().

        Raises:
            ValueError: If the image is wider than the scanline buffer.
        """
        self.settings = settings if settings is not None else RenderSettings()
        self._configure()

    def _configure(self) -> None:
        """Push the settings to the camera, shading state and render target."""
        s = self.settings
        setup_camera(PinholeCamera(width=s.width, height=s.height, vfov=s.vfov))
        apply_render_settings(s)
        setup_render_target(s.width, s.height)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.settings.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.settings.height

    def reconfigure(self, settings: RenderSettings) -> None:
        """Switch to new render settings.

        Args:
            settings: The new settings.
        """
        self.settings = settings
        self._configure()

    def iter_scanlines(
        self,
        callback: ProgressCallback | None = None,
    ) -> Generator[tuple[int, npt.NDArray[np.float32]], None, None]:
        """Render scanlines from the top of the image to the bottom.

        The render target is reconfigured first, so interleaving two
        renderers does not mix their settings.

        Args:
            callback: Optional progress callback, called after each row with
                (rows_done, total_rows).

        Yields:
            Tuple of (row_index, row) where row_index 0 is the top of the
            image and row has shape (width, 3).
        """
        self._configure()
        total = self.height
        for row_index, pixel_j in enumerate(range(total - 1, -1, -1)):
            row = render_scanline(pixel_j)
            yield row_index, row
            if callback is not None:
                callback(row_index + 1, total)

    def render_to(self, stream: TextIO, callback: ProgressCallback | None = None) -> None:
        """Render the image and stream it to `stream` as a P3 image.

        Args:
            stream: Text stream receiving the image data.
            callback: Optional progress callback (rows_done, total_rows).
        """
        logger.info("Rendering %dx%d", self.width, self.height)
        writer = PPMWriter(stream)
        writer.write_header(self.width, self.height)
        for _, row in self.iter_scanlines(callback):
            writer.write_row(row)

    def render_image(self, callback: ProgressCallback | None = None) -> npt.NDArray[np.float32]:
        """Render the whole image into an array.

        Args:
            callback: Optional progress callback (rows_done, total_rows).

        Returns:
            NumPy array of shape (height, width, 3), row 0 at the top.
        """
        image = np.empty((self.height, self.width, 3), dtype=np.float32)
        for row_index, row in self.iter_scanlines(callback):
            image[row_index] = row
        return image

    def save_ppm(self, filepath: str | Path, callback: ProgressCallback | None = None) -> None:
        """Render straight to a P3 file.

        Args:
            filepath: Output file path (e.g., "spheres.ppm").
            callback: Optional progress callback (rows_done, total_rows).
        """
        with open(filepath, "w", encoding="ascii", newline="\n") as f:
            self.render_to(f, callback)
        logger.info("Saved %s", filepath)

    def save_png(self, filepath: str | Path, callback: ProgressCallback | None = None) -> None:
        """Render the image and save it as a PNG.

        PNG encoding needs the whole frame, so this materializes the image.

        Args:
            filepath: Output file path (e.g., "spheres.png").
            callback: Optional progress callback (rows_done, total_rows).
        """
        save_png_from_array(self.render_image(callback), filepath)
        logger.info("Saved %s", filepath)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return f"Renderer(width={self.width}, height={self.height})"
