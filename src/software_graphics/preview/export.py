"""Image export utilities for rendered surfaces.

Supported formats:
    - PNG (8-bit RGBA via Pillow)

Example:
    >>> from software_graphics.preview.export import save_png
    >>> from software_graphics.surface import PixelSurface
    >>>
    >>> surface = PixelSurface(320, 240)
    >>> Renderer().render(scene, surface)
    >>> save_png(surface, "output.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from software_graphics.surface.base import Surface
from software_graphics.surface.buffer import PixelSurface
from software_graphics.surface.field import FieldSurface


def surface_to_array(surface: Surface) -> npt.NDArray[np.uint8]:
    """Copy a surface into a (height, width, 4) uint8 array indexed [y, x].

    Known backends are copied in bulk; any other Surface must also offer
    get_pixel(x, y).

    Raises:
        TypeError: If the surface cannot be read back.
    """
    if isinstance(surface, PixelSurface):
        return surface.pixels.copy()
    if isinstance(surface, FieldSurface):
        return surface.to_numpy()

    get_pixel = getattr(surface, "get_pixel", None)
    if get_pixel is None:
        raise TypeError(f"Cannot read pixels back from {type(surface).__name__}")

    width = surface.get_width()
    height = surface.get_height()
    image = np.zeros((height, width, 4), dtype=np.uint8)
    for y in range(height):
        for x in range(width):
            image[y, x] = get_pixel(x, y).to_tuple()
    return image


def save_png(surface: Surface, filepath: str | Path) -> None:
    """Save a surface as an 8-bit RGBA PNG file.

    Row 0 of the surface becomes the top row of the image.

    Args:
        surface: The surface to save.
        filepath: Output file path (should end in .png).
    """
    save_png_from_array(surface_to_array(surface), filepath)


def save_png_from_array(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save a (H, W, 4) uint8 array as an RGBA PNG file.

    Raises:
        ValueError: If the array is not (H, W, 4) uint8.
    """
    if image.ndim != 3 or image.shape[2] != 4 or image.dtype != np.uint8:
        raise ValueError(f"Expected a (H, W, 4) uint8 image, got {image.shape} {image.dtype}")

    pil_image = PILImage.fromarray(image)
    pil_image.save(str(filepath))
