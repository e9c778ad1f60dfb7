"""Tests for the frame driver.

Tests cover:
- Every pixel written exactly once, in row-major order
- Pixel values for a simple ambient-lit scene
- Deterministic re-rendering
- Agreement between surface backends
- Empty and oversized surfaces
"""

import numpy as np
import pytest

from software_graphics.core.color import Color8
from software_graphics.surface.buffer import PixelSurface

BACKGROUND = Color8(10, 100, 10, 255)
SHADED_RED = Color8(100, 0, 0, 255)


class RecordingSurface:
    """A Surface that records every set_pixel call."""

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.writes = []

    def get_width(self):
        return self.width

    def get_height(self):
        return self.height

    def set_pixel(self, x, y, color):
        self.writes.append((x, y, color))


class TestRenderer:
    """Tests for Renderer.render."""

    def test_writes_each_pixel_once_in_row_major_order(self, red_ambient_scene):
        """Test the surface sees exactly width * height writes, rows first."""
        from software_graphics.core.renderer import Renderer

        surface = RecordingSurface(5, 3)
        Renderer().render(red_ambient_scene, surface)

        coords = [(x, y) for x, y, _ in surface.writes]
        assert coords == [(x, y) for y in range(3) for x in range(5)]
        assert all(isinstance(color, Color8) for _, _, color in surface.writes)

    def test_ambient_scene_pixels(self, red_ambient_scene):
        """Test covered pixels are shaded red and the rest are background."""
        from software_graphics.core.renderer import Renderer

        surface = PixelSurface(8, 8)
        Renderer().render(red_ambient_scene, surface)

        assert surface.get_pixel(4, 4) == SHADED_RED
        assert surface.get_pixel(0, 0) == BACKGROUND
        assert surface.get_pixel(7, 7) == BACKGROUND

        colors = {tuple(p) for p in surface.pixels.reshape(-1, 4).tolist()}
        assert colors == {SHADED_RED.to_tuple(), BACKGROUND.to_tuple()}

    def test_sphere_filling_view(self):
        """Test an enclosing sphere covers every pixel."""
        from software_graphics.core.color import ColorF
        from software_graphics.core.renderer import Renderer
        from software_graphics.scene.model import AmbientLight, Matte, Scene, SphereInfo

        scene = Scene(
            objects=(SphereInfo((0.0, 0.0, 0.0), 5.0, Matte(Color8(200, 0, 0, 255))),),
            lights=(AmbientLight(ColorF(0.5, 0.5, 0.5, 1.0)),),
        )
        surface = PixelSurface(6, 4)
        Renderer().render(scene, surface)

        expected = np.broadcast_to(np.array(SHADED_RED.to_tuple(), dtype=np.uint8), (4, 6, 4))
        np.testing.assert_array_equal(surface.pixels, expected)

    def test_empty_scene_is_background(self):
        """Test a scene with nothing in it renders the background everywhere."""
        from software_graphics.core.renderer import Renderer
        from software_graphics.scene.model import Scene

        surface = PixelSurface(4, 4)
        Renderer().render(Scene(), surface)
        assert np.all(surface.pixels == np.array(BACKGROUND.to_tuple(), dtype=np.uint8))

    def test_rerender_is_identical(self, red_ambient_scene):
        """Test rendering the same scene twice gives the same pixels."""
        from software_graphics.core.renderer import Renderer

        renderer = Renderer()
        first = PixelSurface(16, 12)
        second = PixelSurface(16, 12)
        renderer.render(red_ambient_scene, first)
        renderer.render(red_ambient_scene, second)
        np.testing.assert_array_equal(first.pixels, second.pixels)

    def test_field_surface_matches_pixel_surface(self, red_ambient_scene):
        """Test both backends receive identical pixels."""
        from software_graphics.core.renderer import Renderer
        from software_graphics.surface.field import FieldSurface

        pixel_surface = PixelSurface(8, 6)
        field_surface = FieldSurface(8, 6)
        Renderer().render(red_ambient_scene, pixel_surface)
        Renderer().render(red_ambient_scene, field_surface)
        np.testing.assert_array_equal(field_surface.to_numpy(), pixel_surface.pixels)

    def test_custom_background(self):
        """Test the configured background color is used."""
        from software_graphics.core.config import RenderConfig
        from software_graphics.core.renderer import Renderer
        from software_graphics.scene.model import Scene

        surface = PixelSurface(2, 2)
        Renderer(RenderConfig(background_color=Color8(1, 2, 3, 4))).render(Scene(), surface)
        assert surface.get_pixel(1, 1) == Color8(1, 2, 3, 4)

    def test_empty_surface_is_noop(self, red_ambient_scene):
        """Test a zero-area surface receives no writes."""
        from software_graphics.core.renderer import Renderer

        surface = RecordingSurface(0, 10)
        Renderer().render(red_ambient_scene, surface)
        assert surface.writes == []

    def test_oversized_surface_rejected(self, red_ambient_scene):
        """Test surfaces beyond the pixel buffer raise ValueError."""
        from software_graphics.core.renderer import Renderer
        from software_graphics.core.tracer import MAX_IMAGE_WIDTH

        with pytest.raises(ValueError, match="exceed"):
            Renderer().render(red_ambient_scene, RecordingSurface(MAX_IMAGE_WIDTH + 1, 1))

    def test_ray_trace_wrapper(self, red_ambient_scene):
        """Test the functional entry point renders like Renderer."""
        from software_graphics.core.renderer import ray_trace

        surface = PixelSurface(8, 8)
        ray_trace(red_ambient_scene, surface)
        assert surface.get_pixel(4, 4) == SHADED_RED

    def test_config_property(self):
        """Test the renderer exposes its configuration."""
        from software_graphics.core.config import RenderConfig
        from software_graphics.core.renderer import Renderer

        config = RenderConfig(recursion_limit=1)
        assert Renderer(config).config is config
        assert Renderer().config == RenderConfig()
