"""Local illumination with hard shadows.

The intensity arriving at a surface point is the unclamped sum of every
light's contribution:

    Ambient:     the light's intensity, unconditionally.
    Directional: diffuse + specular along the light's fixed direction,
                 unless any sphere lies along it (t in [eps, inf)).
    Point:       diffuse + specular along (position - point), unless a
                 sphere lies between the point and the light (t in [eps, 1)).

The diffuse cosine is computed as a dot product over the product of
magnitudes, and the specular term as a power of the reflected-light/view
cosine. When a specular highlight is added, the alpha channel of that
light's contribution is replaced by the material's base alpha / 255.

Example:
    >>> # Within a Taichi kernel:
    >>> # intensity = compute_lighting(point, normal, material, -direction, 1e-4)
"""

import taichi as ti
import taichi.math as tm

from software_graphics.core.ray import reflect
from software_graphics.scene.intersection import (
    NO_HIT,
    SurfaceMaterial,
    closest_intersection,
    is_specular,
    light_intensities,
    light_types,
    light_vectors,
    num_lights,
)
from software_graphics.scene.model import LightType

# Type aliases for vectors using Taichi's math module
vec3 = tm.vec3
vec4 = tm.vec4


@ti.func
def point_in_shadow(point: vec3, direction: vec3, t_max: ti.f32, epsilon: ti.f32) -> ti.i32:
    """Test whether any sphere blocks the path from a point toward a light.

    Args:
        point: The surface point casting the shadow ray.
        direction: Direction toward the light (not normalized).
        t_max: Exclusive upper bound of the occluder window.
        epsilon: Inclusive lower bound, keeping the surface from shadowing
            itself.

    Returns:
        1 if the point is in shadow, 0 otherwise.
    """
    index, _ = closest_intersection(point, direction, epsilon, t_max)
    return index != NO_HIT


@ti.func
def calculate_directional_light(
    direction: vec3,
    intensity: vec4,
    normal: vec3,
    material: SurfaceMaterial,
    view: vec3,
) -> vec4:
    """Diffuse and specular contribution of one unoccluded light.

    Args:
        direction: Direction from the surface point toward the light.
        intensity: The light intensity.
        normal: The surface normal at the point.
        material: The surface material.
        view: Direction from the point back toward the viewer.

    Returns:
        The light intensity reaching the viewer from this light.
    """
    contribution = vec4(0.0, 0.0, 0.0, 0.0)

    # Diffuse
    normal_dot_direction = tm.dot(normal, direction)
    if normal_dot_direction > 0.0:
        scale = normal_dot_direction / (tm.length(normal) * tm.length(direction))
        contribution = intensity * scale

    # Specular
    if is_specular(material):
        reflection = reflect(normal, direction)
        reflection_dot_view = tm.dot(reflection, view)
        if reflection_dot_view > 0.0:
            specular_scale = reflection_dot_view / (tm.length(reflection) * tm.length(view))
            contribution += intensity * tm.pow(specular_scale, material.specular_exponent)
            contribution[3] = material.color[3] / 255.0

    return contribution


@ti.func
def compute_lighting(
    point: vec3,
    normal: vec3,
    material: SurfaceMaterial,
    view: vec3,
    epsilon: ti.f32,
) -> vec4:
    """Sum the contributions of every light in the scene at a surface point.

    Args:
        point: The surface point being shaded.
        normal: The unit surface normal at the point.
        material: The surface material.
        view: Direction from the point back toward the viewer.
        epsilon: Lower bound of the shadow ray window.

    Returns:
        The total light intensity (unclamped float channels).
    """
    total = vec4(0.0, 0.0, 0.0, 0.0)

    for i in range(num_lights[None]):
        light_type = light_types[i]
        intensity = light_intensities[i]

        if light_type == int(LightType.AMBIENT):
            total += intensity

        elif light_type == int(LightType.DIRECTIONAL):
            direction = light_vectors[i]
            if not point_in_shadow(point, direction, tm.inf, epsilon):
                total += calculate_directional_light(direction, intensity, normal, material, view)

        elif light_type == int(LightType.POINT):
            direction = light_vectors[i] - point
            if not point_in_shadow(point, direction, 1.0, epsilon):
                total += calculate_directional_light(direction, intensity, normal, material, view)

    return total
