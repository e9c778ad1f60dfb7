"""Pixel surfaces the renderer draws into.

Components:
    base: The Surface protocol (width, height, set_pixel)
    buffer: PixelSurface, an in-memory RGBA buffer backed by NumPy
    field: FieldSurface, an RGBA texture backed by a Taichi field

The renderer only relies on the three Surface operations, so any backend
offering them can be drawn into.
"""

from .base import Surface
from .buffer import PixelSurface
from .field import FieldSurface

__all__ = [
    "Surface",
    "PixelSurface",
    "FieldSurface",
]
