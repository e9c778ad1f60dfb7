"""Unit tests for the ray tracing kernels.

Tests cover:
- Background color for rays that hit nothing
- Local shading of a primary hit
- Hard shadows along primary hits
- Reflection blending and recursion depth
- Termination between facing mirrors
"""

import pytest

from software_graphics.core.color import Color8, ColorF
from software_graphics.core.config import MAX_RECURSION_LIMIT, RenderConfig
from software_graphics.scene.model import (
    AmbientLight,
    Matte,
    PointLight,
    Scene,
    Specular,
    SphereInfo,
)

BACKGROUND = Color8(10, 100, 10, 255)
FULL_AMBIENT = AmbientLight(ColorF(1.0, 1.0, 1.0, 1.0))


def _mirror_pair_scene():
    """Two fully reflective spheres facing each other across the eye."""
    return Scene(
        objects=(
            SphereInfo((0.0, 0.0, 3.0), 1.0, Specular(Color8(200, 0, 0, 255), 10.0, 1.0)),
            SphereInfo((0.0, 0.0, -3.0), 1.0, Specular(Color8(0, 0, 200, 255), 10.0, 1.0)),
        ),
        lights=(FULL_AMBIENT,),
    )


class TestPrimaryRays:
    """Tests for tracing a single pixel."""

    def test_empty_scene_is_background(self):
        """Test every pixel of an empty scene is the background color."""
        from software_graphics.core.tracer import trace_pixel

        config = RenderConfig()
        assert trace_pixel(4, 4, 8, 8, config) == BACKGROUND
        assert trace_pixel(0, 0, 8, 8, config) == BACKGROUND

    def test_custom_background(self):
        """Test the configured background is returned on a miss."""
        from software_graphics.core.tracer import trace_pixel

        config = RenderConfig(background_color=Color8(1, 2, 3, 4))
        assert trace_pixel(0, 0, 8, 8, config) == Color8(1, 2, 3, 4)

    def test_ambient_only_hit(self, red_ambient_scene):
        """Test the center pixel sees the sphere shaded by ambient light."""
        from software_graphics.core.tracer import trace_pixel
        from software_graphics.scene.intersection import upload_scene

        upload_scene(red_ambient_scene)
        assert trace_pixel(4, 4, 8, 8, RenderConfig()) == Color8(100, 0, 0, 255)

    def test_corner_pixel_misses(self, red_ambient_scene):
        """Test a corner pixel passes beside the sphere."""
        from software_graphics.core.tracer import trace_pixel
        from software_graphics.scene.intersection import upload_scene

        upload_scene(red_ambient_scene)
        assert trace_pixel(0, 0, 8, 8, RenderConfig()) == BACKGROUND

    def test_primary_window_starts_at_viewport(self):
        """Test spheres between the eye and the viewport plane are not seen."""
        from software_graphics.core.tracer import trace_pixel
        from software_graphics.scene.intersection import upload_scene

        upload_scene(
            Scene(
                objects=(SphereInfo((0.0, 0.0, 0.5), 0.25, Matte(Color8(200, 0, 0, 255))),),
                lights=(FULL_AMBIENT,),
            )
        )
        assert trace_pixel(4, 4, 8, 8, RenderConfig()) == BACKGROUND

    def test_oversized_frame_rejected(self):
        """Test frames larger than the pixel buffer raise ValueError."""
        from software_graphics.core.tracer import MAX_IMAGE_WIDTH, trace_pixel

        with pytest.raises(ValueError):
            trace_pixel(0, 0, MAX_IMAGE_WIDTH + 1, 8, RenderConfig())


class TestShadows:
    """Tests for shadowing of primary hits."""

    def _scene(self, with_occluder):
        objects = [SphereInfo((0.0, 0.0, 3.0), 1.0, Matte(Color8(200, 200, 200, 255)))]
        if with_occluder:
            # Behind the eye, so only the shadow ray can reach it
            objects.append(SphereInfo((0.0, 0.0, -4.0), 1.0, Matte(Color8(0, 0, 0, 255))))
        return Scene.build(
            objects,
            [
                AmbientLight(ColorF(0.1, 0.1, 0.1, 1.0)),
                PointLight((0.0, 0.0, -10.0), ColorF(0.5, 0.5, 0.5, 1.0)),
            ],
        )

    def test_lit(self):
        """Test an unblocked point light adds to the ambient term."""
        from software_graphics.core.tracer import trace
        from software_graphics.scene.intersection import upload_scene

        upload_scene(self._scene(with_occluder=False))
        color = trace((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), RenderConfig())
        assert color == Color8(120, 120, 120, 255)

    def test_shadowed(self):
        """Test a sphere between the hit point and the light leaves only ambient."""
        from software_graphics.core.tracer import trace
        from software_graphics.scene.intersection import upload_scene

        upload_scene(self._scene(with_occluder=True))
        color = trace((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), RenderConfig())
        assert color == Color8(20, 20, 20, 255)


class TestReflections:
    """Tests for mirror bounces."""

    def test_half_reflective_blends_background(self):
        """Test a half mirror blends its color with what it reflects."""
        from software_graphics.core.tracer import trace
        from software_graphics.scene.intersection import upload_scene

        upload_scene(
            Scene(
                objects=(
                    SphereInfo((0.0, 0.0, 3.0), 1.0, Specular(Color8(200, 0, 0, 255), 10.0, 0.5)),
                ),
                lights=(FULL_AMBIENT,),
            )
        )
        color = trace((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), RenderConfig())
        assert color == (Color8(200, 0, 0, 255) * 0.5) + (BACKGROUND * 0.5)
        assert color == Color8(105, 50, 5, 255)

    def test_depth_zero_skips_reflection(self):
        """Test no bounce is followed when the depth is zero."""
        from software_graphics.core.tracer import trace
        from software_graphics.scene.intersection import upload_scene

        upload_scene(
            Scene(
                objects=(
                    SphereInfo((0.0, 0.0, 3.0), 1.0, Specular(Color8(200, 0, 0, 255), 10.0, 0.5)),
                ),
                lights=(FULL_AMBIENT,),
            )
        )
        color = trace((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), RenderConfig(recursion_limit=0))
        assert color == Color8(200, 0, 0, 255)

    def test_matte_never_reflects(self):
        """Test a matte sphere returns its local color at any depth."""
        from software_graphics.core.tracer import trace
        from software_graphics.scene.intersection import upload_scene

        upload_scene(
            Scene(
                objects=(SphereInfo((0.0, 0.0, 3.0), 1.0, Matte(Color8(200, 0, 0, 255))),),
                lights=(FULL_AMBIENT,),
            )
        )
        config = RenderConfig(recursion_limit=MAX_RECURSION_LIMIT)
        assert trace((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), config) == Color8(200, 0, 0, 255)

    @pytest.mark.parametrize(
        "limit, expected",
        [
            (0, Color8(200, 0, 0, 255)),
            (1, Color8(0, 0, 200, 255)),
            (2, Color8(200, 0, 0, 255)),
            (3, Color8(0, 0, 200, 255)),
            (MAX_RECURSION_LIMIT, Color8(0, 0, 200, 255)),
        ],
    )
    def test_facing_mirrors_terminate(self, limit, expected):
        """Test bounces between two perfect mirrors stop at the recursion limit.

        The last sphere reached contributes its local color unblended, so the
        result alternates with the parity of the limit.
        """
        from software_graphics.core.tracer import trace
        from software_graphics.scene.intersection import upload_scene

        upload_scene(_mirror_pair_scene())
        color = trace((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), RenderConfig(recursion_limit=limit))
        assert color == expected

    def test_explicit_depth_overrides_config(self):
        """Test the depth keyword takes precedence over the config."""
        from software_graphics.core.tracer import trace
        from software_graphics.scene.intersection import upload_scene

        upload_scene(_mirror_pair_scene())
        color = trace((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), RenderConfig(), depth=2)
        assert color == Color8(200, 0, 0, 255)

    def test_depth_out_of_range(self):
        """Test depths the tracer cannot unroll raise ValueError."""
        from software_graphics.core.tracer import trace

        with pytest.raises(ValueError, match="depth"):
            trace((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), RenderConfig(), depth=MAX_RECURSION_LIMIT + 1)


class TestRenderFrame:
    """Tests for the whole-frame kernel."""

    def test_shape_and_layout(self, red_ambient_scene):
        """Test the frame is a (height, width, 4) uint8 array indexed [y, x]."""
        from software_graphics.core.tracer import render_frame, trace_pixel
        from software_graphics.scene.intersection import upload_scene

        upload_scene(red_ambient_scene)
        config = RenderConfig()
        image = render_frame(10, 6, config)

        assert image.shape == (6, 10, 4)
        assert image.dtype.name == "uint8"
        assert image.flags["C_CONTIGUOUS"]
        for y, x in [(0, 0), (3, 5), (5, 9), (2, 7)]:
            assert tuple(image[y, x].tolist()) == trace_pixel(x, y, 10, 6, config).to_tuple()

    def test_smaller_frame_after_larger(self, red_ambient_scene):
        """Test a frame only holds its own pixels after a larger render."""
        from software_graphics.core.tracer import render_frame
        from software_graphics.scene.intersection import upload_scene

        upload_scene(red_ambient_scene)
        config = RenderConfig()
        render_frame(32, 32, config)
        small = render_frame(8, 8, config)

        assert small.shape == (8, 8, 4)
        assert tuple(small[4, 4].tolist()) == (100, 0, 0, 255)
        assert tuple(small[0, 0].tolist()) == BACKGROUND.to_tuple()

    def test_full_frame_dimensions_accepted(self):
        """Test the largest supported width renders a single row."""
        from software_graphics.core.tracer import MAX_IMAGE_WIDTH, render_frame

        image = render_frame(MAX_IMAGE_WIDTH, 1, RenderConfig())
        assert image.shape == (1, MAX_IMAGE_WIDTH, 4)
        assert tuple(image[0, 0].tolist()) == BACKGROUND.to_tuple()
