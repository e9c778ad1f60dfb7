"""Preview module for exporting rendered surfaces.

Components:
    export: PNG export of surfaces and raw RGBA arrays
"""

from .export import save_png, save_png_from_array, surface_to_array

__all__ = [
    "save_png",
    "save_png_from_array",
    "surface_to_array",
]
