"""Rasterized drawing mode.

Components:
    line: Line drawing and surface clearing on any Surface
"""

from .line import clear_surface, draw_line

__all__ = [
    "draw_line",
    "clear_surface",
]
