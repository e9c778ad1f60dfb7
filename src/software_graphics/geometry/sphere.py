"""Sphere primitive with ray-sphere intersection.

The intersection solves the textbook quadratic and returns both parametric
roots unsorted, leaving the choice of root to the caller. Misses are reported
as a pair of infinities so callers can compare roots against a t window
without a separate hit flag.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from software_graphics.geometry.sphere import Sphere, intersect_ray_sphere
    >>> # Within a Taichi kernel:
    >>> # t1, t2 = intersect_ray_sphere(origin, direction, Sphere(center=c, radius=1.0))
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.func
def intersect_ray_sphere(origin: vec3, direction: vec3, sphere: Sphere):
    """Compute both parametric roots where a ray meets a sphere.

    Solves |origin + t * direction - center|^2 = radius^2, i.e.

        a*t^2 + b*t + c = 0

    where:
        oc = origin - center
        a = dot(direction, direction)
        b = 2 * dot(oc, direction)
        c = dot(oc, oc) - radius^2

    The direction must be non-zero; a zero-length direction gives a = 0 and
    an unspecified result.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector of the ray (need not be normalized).
        sphere: The sphere to test.

    Returns:
        A tuple (t1, t2) with t1 = (-b + sqrt(d)) / 2a and
        t2 = (-b - sqrt(d)) / 2a, or (inf, inf) when the discriminant d is
        negative. A tangent ray yields two equal roots.
    """
    oc = origin - sphere.center

    a = tm.dot(direction, direction)
    b = 2.0 * tm.dot(oc, direction)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius

    discriminant = b * b - 4.0 * a * c

    t1 = tm.inf
    t2 = tm.inf
    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t1 = (-b + sqrt_d) / (2.0 * a)
        t2 = (-b - sqrt_d) / (2.0 * a)

    return t1, t2
