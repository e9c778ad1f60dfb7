"""In-memory RGBA pixel buffer.

Example:
    >>> surface = PixelSurface(4, 3)
    >>> surface.set_pixel(1, 2, Color8(255, 0, 0, 255))
    >>> surface.pixels.shape
    (3, 4, 4)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from software_graphics.core.color import Color8

# RGBA, one byte per channel
COLOR_BYTE_SIZE = 4


class PixelSurface:
    """A surface backed by a (height, width, 4) uint8 NumPy array.

    The buffer starts fully transparent black.

    Attributes:
        pixels: The underlying buffer, indexed [y, x, channel].
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate a cleared surface.

        Raises:
            ValueError: If either dimension is negative.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Surface dimensions must be non-negative, got {width}x{height}")
        self._width = width
        self._height = height
        self.pixels: npt.NDArray[np.uint8] = np.zeros(
            (height, width, COLOR_BYTE_SIZE), dtype=np.uint8
        )

    def get_width(self) -> int:
        return self._width

    def get_height(self) -> int:
        return self._height

    def set_pixel(self, x: int, y: int, color: Color8) -> None:
        self.pixels[y, x] = color.to_tuple()

    def get_pixel(self, x: int, y: int) -> Color8:
        return Color8.from_sequence(self.pixels[y, x].tolist())

    def clear(self, color: Color8 | None = None) -> None:
        """Fill the whole surface with one color (default transparent black)."""
        if color is None:
            self.pixels.fill(0)
        else:
            self.pixels[:, :] = color.to_tuple()

    def to_bytes(self) -> bytes:
        """Raw RGBA bytes in row-major order."""
        return self.pixels.tobytes()
