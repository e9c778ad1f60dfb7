"""Ray and vector utilities for the sphere ray tracer.

This module provides the vector aliases and the small geometric helpers used
by every stage of the tracer: evaluating a point along a ray, mirror
reflection, and projecting a pixel onto the virtual viewport. All helpers are
Taichi functions so they can be called from inside render kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, 1.0)
    >>> # Within a Taichi kernel:
    >>> # point = ray_at(origin, direction, 5.0)
"""

import taichi as ti
import taichi.math as tm

# Type aliases for vectors using Taichi's math module
vec2 = tm.vec2
vec3 = tm.vec3
vec4 = tm.vec4


@ti.func
def ray_at(origin: vec3, direction: vec3, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        origin: The ray origin.
        direction: The ray direction.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point origin + t * direction.
    """
    return origin + t * direction


@ti.func
def reflect(normal: vec3, incoming: vec3) -> vec3:
    """Mirror a vector about a surface normal.

    Computes 2 * normal * (normal . incoming) - incoming. Note the
    convention: ``incoming`` points away from the surface (toward the light
    or back toward the viewer), so the result also points away from it.

    Args:
        normal: The surface normal (unit length for a true mirror).
        incoming: The vector to reflect.

    Returns:
        The reflected vector.
    """
    return 2.0 * normal * tm.dot(normal, incoming) - incoming


@ti.func
def canvas_to_viewport(x: ti.f32, y: ti.f32, size: vec2, min_z: ti.f32) -> vec3:
    """Project a centered pixel coordinate onto the viewport.

    The pixel coordinate must already be centered so that the surface
    midpoint maps to (0, 0). The result is an unnormalized ray direction
    from the eye through the viewport plane at distance ``min_z``.

    Args:
        x: Centered horizontal pixel coordinate.
        y: Centered vertical pixel coordinate.
        size: Surface size as (width, height).
        min_z: Distance from the eye to the projection plane.

    Returns:
        The direction (x / width, y / height, min_z).
    """
    return vec3(x / size.x, y / size.y, min_z)
