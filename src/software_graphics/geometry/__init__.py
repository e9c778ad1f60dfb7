"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with ray-sphere intersection

Intersection routines are Taichi functions (@ti.func) so they can run inside
render kernels. They return raw parametric roots:

    t1, t2 = intersect_ray_sphere(ray_origin, ray_direction, sphere)
"""

from .sphere import Sphere, intersect_ray_sphere

__all__ = [
    "Sphere",
    "intersect_ray_sphere",
]
