"""Frame driver that ray traces a scene onto a surface.

The Renderer uploads the scene, traces every pixel of the target surface,
and writes each resulting color to the surface exactly once, in row-major
order. Rendering a frame runs to completion before returning; nothing is
carried over between frames, so re-rendering an unchanged scene onto a
surface of the same size reproduces identical pixels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from software_graphics.core.renderer import Renderer
    >>> from software_graphics.scene.loader import load_scene
    >>> from software_graphics.surface import PixelSurface
    >>>
    >>> surface = PixelSurface(320, 240)
    >>> Renderer().render(load_scene("scenes/demo.json"), surface)
"""

from __future__ import annotations

import logging
import time

from software_graphics.core.color import Color8
from software_graphics.core.config import RenderConfig
from software_graphics.core.tracer import render_frame
from software_graphics.scene.intersection import upload_scene
from software_graphics.scene.model import Scene
from software_graphics.surface.base import Surface

logger = logging.getLogger(__name__)


class Renderer:
    """Ray traces scenes onto surfaces with a fixed configuration.

    Attributes:
        config: The immutable rendering parameters.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config if config is not None else RenderConfig()

    @property
    def config(self) -> RenderConfig:
        """Get the rendering parameters."""
        return self._config

    def render(self, scene: Scene, surface: Surface) -> None:
        """Render one frame of ``scene`` onto ``surface``.

        Args:
            scene: The scene to draw. It is only read.
            surface: The target. Every pixel in [0, width) x [0, height) is
                written exactly once.

        Raises:
            ValueError: If the surface exceeds the supported frame size.
            RuntimeError: If the scene exceeds device storage capacity.
        """
        width = surface.get_width()
        height = surface.get_height()
        if width == 0 or height == 0:
            logger.debug("Empty %dx%d surface, nothing to render", width, height)
            return
        start_time = time.time()

        upload_scene(scene)
        pixels = render_frame(width, height, self._config)

        for y in range(height):
            row = pixels[y]
            for x in range(width):
                r, g, b, a = row[x].tolist()
                surface.set_pixel(x, y, Color8(r, g, b, a))

        logger.info(
            "Rendered %dx%d frame in %.3fs", width, height, time.time() - start_time
        )


def ray_trace(scene: Scene, surface: Surface, config: RenderConfig | None = None) -> None:
    """Render one frame of ``scene`` onto ``surface``.

    Convenience wrapper around Renderer(config).render(scene, surface).
    """
    Renderer(config).render(scene, surface)
