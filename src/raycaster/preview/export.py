"""Image export utilities for rendered images.

This module writes rendered colors to files or text streams.

Supported formats:
    - Plain-text PPM (P3), streamed one scanline at a time
    - PNG (8-bit via Pillow), from a full image array

PPM layout:
    P3
    <width> <height>
    255
    R G B        one line per pixel, rows top to bottom, left to right

Channel values are converted with trunc(255 * c), with no gamma and no tone
mapping, so in-range colors keep their exact 8-bit values.

Example:
    >>> import sys
    >>> import numpy as np
    >>> from raycaster.preview.export import PPMWriter
    >>> writer = PPMWriter(sys.stdout)
    >>> writer.write_header(2, 1)
    >>> writer.write_row(np.array([[0.2, 0.7, 0.8], [1.0, 0.0, 0.5]]))
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

# Maximum channel value written to the PPM header
PPM_MAX_VALUE = 255


def color_to_ppm_ints(colors: npt.ArrayLike) -> npt.NDArray[np.int64]:
    """Convert linear colors to 8-bit channel integers.

    Computes trunc(255 * c) in float64. Truncation rounds toward zero, so
    slightly negative channels become 0. The result is then limited to
    [0, 255]: shaded colors are not clamped upstream and over-bright channels
    would otherwise exceed the declared maximum value.

    Args:
        colors: Array of shape (..., 3) with linear RGB values.

    Returns:
        Integer array of the same shape with values in [0, 255].
    """
    scaled = np.trunc(np.asarray(colors, dtype=np.float64) * PPM_MAX_VALUE)
    return np.clip(scaled, 0, PPM_MAX_VALUE).astype(np.int64)


class PPMWriter:
    """Streams a P3 image to a text sink.

    The writer only formats; it never opens or closes the stream. Rows must
    be written top to bottom after the header.

    Attributes:
        stream: The text stream receiving image data.
    """

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self._width = 0
        self._rows_expected = 0
        self._rows_written = 0

    @property
    def rows_written(self) -> int:
        """Number of rows written since the header."""
        return self._rows_written

    def write_header(self, width: int, height: int) -> None:
        """Write the P3 header.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
        """
        self.stream.write(f"P3\n{width} {height}\n{PPM_MAX_VALUE}\n")
        self._width = width
        self._rows_expected = height
        self._rows_written = 0

    def write_row(self, row: npt.ArrayLike) -> None:
        """Write one scanline.

        Args:
            row: Array of shape (width, 3) with linear RGB values, left to
                right.

        Raises:
            ValueError: If the row has the wrong shape or the image already
                has all its rows.
        """
        pixels = color_to_ppm_ints(row)
        if pixels.shape != (self._width, 3):
            raise ValueError(f"Expected a row of shape ({self._width}, 3), got {pixels.shape}")
        if self._rows_written >= self._rows_expected:
            raise ValueError(f"Image already has all {self._rows_expected} rows")

        self.stream.write("".join(f"{r} {g} {b}\n" for r, g, b in pixels.tolist()))
        self._rows_written += 1


def write_ppm(image: npt.ArrayLike, stream: TextIO) -> None:
    """Write a full image array as a P3 image.

    Args:
        image: Array of shape (H, W, 3), row 0 at the top.
        stream: Text stream to write to.
    """
    image = np.asarray(image)
    height, width = image.shape[:2]
    writer = PPMWriter(stream)
    writer.write_header(width, height)
    for row in image:
        writer.write_row(row)


def save_ppm(image: npt.ArrayLike, filepath: str | Path) -> None:
    """Save a full image array as a P3 file.

    Args:
        image: Array of shape (H, W, 3), row 0 at the top.
        filepath: Output file path (should end in .ppm).
    """
    with open(filepath, "w", encoding="ascii", newline="\n") as f:
        write_ppm(image, f)


def image_to_uint8(image: npt.ArrayLike) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to uint8 with the PPM channel mapping.

    Args:
        image: Array of shape (H, W, 3).

    Returns:
        8-bit image array of shape (H, W, 3).
    """
    return color_to_ppm_ints(image).astype(np.uint8)


def save_png_from_array(image: npt.ArrayLike, filepath: str | Path) -> None:
    """Save a NumPy array as a PNG file.

    Uses the same channel mapping as the PPM writer, so both formats hold
    identical pixel values.

    Args:
        image: Linear image array of shape (H, W, 3), row 0 at the top.
        filepath: Output file path (should end in .png).
    """
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(filepath)
