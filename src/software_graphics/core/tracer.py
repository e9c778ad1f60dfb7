"""Whitted-style ray tracing kernels.

This module implements the per-pixel tracing pipeline:

    primary ray -> nearest hit -> local lighting -> mirror bounces -> color

Rays start at the eye, fixed at the world origin, and pass through a
viewport at distance ``min_z``. A hit is shaded by modulating the sphere's
8-bit base color with the accumulated light intensity. Specular materials
then blend in the color seen along the mirror direction, up to
``recursion_limit`` bounces.

Taichi functions cannot recurse, so trace_ray walks the bounce chain
iteratively over a statically unrolled set of levels, remembering each
level's local color and reflectiveness. The blends are then folded from the
deepest level back to the primary hit, which gives exactly the result of the
recursive definition, including 8-bit truncation at every level.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from software_graphics.core.tracer import render_frame
    >>> from software_graphics.scene.intersection import upload_scene
    >>> upload_scene(scene)
    >>> pixels = render_frame(320, 240, RenderConfig())  # (240, 320, 4) uint8
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from software_graphics.core.color import Color8, blend_u8, shade_u8
from software_graphics.core.config import MAX_RECURSION_LIMIT, RenderConfig
from software_graphics.core.ray import canvas_to_viewport, ray_at, reflect
from software_graphics.scene.intersection import (
    NO_HIT,
    closest_intersection,
    get_sphere,
    get_sphere_material,
    is_specular,
)
from software_graphics.scene.lighting import compute_lighting

# Type aliases for vectors
vec2 = tm.vec2
vec3 = tm.vec3
vec4 = tm.vec4

# Primary hit plus at most MAX_RECURSION_LIMIT bounces
_TRACE_LEVELS = MAX_RECURSION_LIMIT + 1

# Maximum supported image dimensions
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048


def check_image_dimensions(width: int, height: int) -> None:
    """Validate a frame size against the supported range.

    Raises:
        ValueError: If either dimension is not positive or exceeds the
            maximum supported size.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )


# =============================================================================
# Ray Tracing Core
# =============================================================================


@ti.func
def trace_ray(
    origin: vec3,
    direction: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
    depth: ti.i32,
    epsilon: ti.f32,
    background: vec4,
) -> vec4:
    """Trace a ray through the scene and return its 8-bit color.

    Args:
        origin: The starting point of the ray.
        direction: The direction of the ray (need not be normalized).
        t_min: Inclusive lower bound of the hit window.
        t_max: Exclusive upper bound of the hit window.
        depth: Remaining mirror bounces (at most MAX_RECURSION_LIMIT).
        epsilon: Lower bound of the window for shadow and reflected rays.
        background: Color of rays that hit nothing.

    Returns:
        The color as whole-number channels in [0, 255].
    """
    local_colors = ti.Matrix.zero(ti.f32, _TRACE_LEVELS, 4)
    weights = ti.Vector.zero(ti.f32, _TRACE_LEVELS)
    bounced = ti.Vector.zero(ti.i32, _TRACE_LEVELS)

    ray_origin = origin
    ray_direction = direction
    ray_t_min = t_min
    ray_t_max = t_max

    # Active flag for bounce continuation (Taichi doesn't support break in ti.func loops)
    active = 1

    for level in ti.static(range(_TRACE_LEVELS)):
        if active == 1:
            color = background
            index, t = closest_intersection(ray_origin, ray_direction, ray_t_min, ray_t_max)

            if index == NO_HIT:
                active = 0
            else:
                point = ray_at(ray_origin, ray_direction, t)
                normal = tm.normalize(point - get_sphere(index).center)
                material = get_sphere_material(index)
                view = -ray_direction

                intensity = compute_lighting(point, normal, material, view, epsilon)
                color = shade_u8(material.color, intensity)

                if level < depth and is_specular(material):
                    bounced[level] = 1
                    weights[level] = material.reflectiveness
                    ray_origin = point
                    ray_direction = reflect(normal, view)
                    ray_t_min = epsilon
                    ray_t_max = tm.inf
                else:
                    active = 0

            for c in ti.static(range(4)):
                local_colors[level, c] = color[c]

    # Fold reflections from the deepest level back to the primary hit
    result = vec4(0.0, 0.0, 0.0, 0.0)
    for k in ti.static(range(_TRACE_LEVELS)):
        level = _TRACE_LEVELS - 1 - k
        local = vec4(
            local_colors[level, 0],
            local_colors[level, 1],
            local_colors[level, 2],
            local_colors[level, 3],
        )
        if bounced[level] == 1:
            result = blend_u8(local, result, weights[level])
        else:
            result = local

    return result


@ti.func
def trace_pixel_impl(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    min_z: ti.f32,
    t_min: ti.f32,
    depth: ti.i32,
    epsilon: ti.f32,
    background: vec4,
) -> vec4:
    """Trace the primary ray through pixel (x, y).

    The pixel is centered on the surface midpoint before projection, so the
    eye at the world origin looks through the middle of the surface.
    """
    size = vec2(ti.cast(width, ti.f32), ti.cast(height, ti.f32))
    centered_x = ti.cast(x, ti.f32) - size.x / 2.0
    centered_y = ti.cast(y, ti.f32) - size.y / 2.0
    direction = canvas_to_viewport(centered_x, centered_y, size, min_z)
    return trace_ray(vec3(0.0, 0.0, 0.0), direction, t_min, tm.inf, depth, epsilon, background)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_frame(
    image: ti.types.ndarray(dtype=ti.u8, ndim=3),
    min_z: ti.f32,
    t_min: ti.f32,
    depth: ti.i32,
    epsilon: ti.f32,
    background: vec4,
):
    """Trace every pixel in parallel into a (height, width, 4) image."""
    height = image.shape[0]
    width = image.shape[1]
    for y, x in ti.ndrange(height, width):
        color = trace_pixel_impl(x, y, width, height, min_z, t_min, depth, epsilon, background)
        for c in ti.static(range(4)):
            image[y, x, c] = ti.cast(color[c], ti.u8)


@ti.kernel
def _trace_single_pixel(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    min_z: ti.f32,
    t_min: ti.f32,
    depth: ti.i32,
    epsilon: ti.f32,
    background: vec4,
) -> vec4:
    """Trace one pixel, for debugging and tests."""
    return trace_pixel_impl(x, y, width, height, min_z, t_min, depth, epsilon, background)


@ti.kernel
def _trace_single_ray(
    origin: vec3,
    direction: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
    depth: ti.i32,
    epsilon: ti.f32,
    background: vec4,
) -> vec4:
    """Trace one arbitrary ray, for debugging and tests."""
    return trace_ray(origin, direction, t_min, t_max, depth, epsilon, background)


# =============================================================================
# Public Rendering API
# =============================================================================


def _to_color8(color) -> Color8:
    return Color8(*(int(color[c]) for c in range(4)))


def render_frame(width: int, height: int, config: RenderConfig) -> npt.NDArray[np.uint8]:
    """Ray trace the uploaded scene into a new RGBA array.

    Args:
        width: Frame width in pixels.
        height: Frame height in pixels.
        config: Rendering parameters.

    Returns:
        A uint8 array of shape (height, width, 4) indexed [y, x].

    Raises:
        ValueError: If the dimensions are invalid.
    """
    check_image_dimensions(width, height)

    image = np.zeros((height, width, 4), dtype=np.uint8)
    _render_frame(
        image,
        config.min_z,
        config.primary_t_min,
        config.recursion_limit,
        config.shadow_epsilon,
        vec4(*config.background_color.to_vec4()),
    )
    return image


def trace_pixel(x: int, y: int, width: int, height: int, config: RenderConfig) -> Color8:
    """Trace the primary ray for a single pixel of a width x height frame."""
    check_image_dimensions(width, height)
    color = _trace_single_pixel(
        x,
        y,
        width,
        height,
        config.min_z,
        config.primary_t_min,
        config.recursion_limit,
        config.shadow_epsilon,
        vec4(*config.background_color.to_vec4()),
    )
    return _to_color8(color)


def trace(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    config: RenderConfig,
    *,
    t_min: float | None = None,
    t_max: float = float("inf"),
    depth: int | None = None,
) -> Color8:
    """Trace an arbitrary ray through the uploaded scene.

    Args:
        origin: The starting point of the ray.
        direction: The (non-zero) ray direction.
        config: Rendering parameters.
        t_min: Lower bound of the hit window (default: config.primary_t_min).
        t_max: Upper bound of the hit window (default: infinity).
        depth: Reflection bounces (default: config.recursion_limit).

    Returns:
        The traced color.
    """
    if depth is None:
        depth = config.recursion_limit
    if not 0 <= depth <= MAX_RECURSION_LIMIT:
        raise ValueError(f"depth must be in [0, {MAX_RECURSION_LIMIT}], got {depth}")
    color = _trace_single_ray(
        vec3(*origin),
        vec3(*direction),
        config.primary_t_min if t_min is None else t_min,
        t_max,
        depth,
        config.shadow_epsilon,
        vec4(*config.background_color.to_vec4()),
    )
    return _to_color8(color)
