"""RGBA texture surface backed by a Taichi field.

This backend keeps the frame in device memory, where it can be handed to a
Taichi canvas or consumed by further kernels. Taichi must be initialized
before a FieldSurface is created.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt
import taichi as ti

from software_graphics.core.color import Color8


class FieldSurface:
    """A surface stored in a ``ti.Vector.field(4, ti.u8)`` indexed [x, y].

    Attributes:
        texture: The underlying Taichi field.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate the texture field.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self.texture = ti.Vector.field(4, dtype=ti.u8, shape=(width, height))

    def get_width(self) -> int:
        return self._width

    def get_height(self) -> int:
        return self._height

    def set_pixel(self, x: int, y: int, color: Color8) -> None:
        self.texture[x, y] = color.to_tuple()

    def get_pixel(self, x: int, y: int) -> Color8:
        value = self.texture[x, y]
        return Color8(*(int(value[c]) for c in range(4)))

    def to_numpy(self) -> npt.NDArray[np.uint8]:
        """Copy the texture to a (height, width, 4) uint8 array indexed [y, x]."""
        return np.ascontiguousarray(np.transpose(self.texture.to_numpy(), (1, 0, 2)))
