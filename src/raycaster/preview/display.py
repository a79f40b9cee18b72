"""Matplotlib-based preview display for rendered images.

Example:
    >>> from raycaster.preview.display import show_image
    >>> show_image(image, title="Four spheres")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from raycaster.preview.export import image_to_uint8


def show_image(
    image: npt.NDArray[np.float32],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    The image is shown with the same 8-bit channel mapping used for export,
    so the preview matches the written file.

    Args:
        image: Linear image array of shape (H, W, 3), row 0 at the top.
        title: Figure title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = image_to_uint8(image)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        height, width = display_image.shape[:2]
        title = f"Render Preview - {width}x{height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
