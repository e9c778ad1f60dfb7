"""Device-side scene storage and nearest-hit queries.

The host Scene is uploaded into preallocated Taichi fields laid out as a
Structure of Arrays. Kernels then refer to spheres by their index in the
scene's object collection; the nearest-hit query returns that index rather
than a copy of the sphere, with -1 meaning "no hit".

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from software_graphics.scene.intersection import upload_scene, closest_intersection
    >>> upload_scene(scene)
    >>> # Within a Taichi kernel:
    >>> # index, t = closest_intersection(origin, direction, 1.0, tm.inf)
"""

import logging

import numpy as np
import taichi as ti
import taichi.math as tm

from software_graphics.geometry.sphere import Sphere, intersect_ray_sphere
from software_graphics.scene.model import (
    AmbientLight,
    DirectionalLight,
    MaterialType,
    Scene,
    Specular,
)

logger = logging.getLogger(__name__)

# Type aliases for vectors using Taichi's math module
vec3 = tm.vec3
vec4 = tm.vec4

# Sentinel index reported when a ray hits nothing
NO_HIT = -1

# Maximum number of scene elements supported
MAX_SPHERES = 1024
MAX_LIGHTS = 256


@ti.dataclass
class SurfaceMaterial:
    """Device representation of a sphere's material.

    Attributes:
        material_type: MaterialType tag (MATTE or SPECULAR).
        color: Base color as whole-number channels in [0, 255].
        specular_exponent: Shininess, only meaningful for SPECULAR.
        reflectiveness: Mirror blend weight, only meaningful for SPECULAR.
    """

    material_type: ti.i32
    color: vec4
    specular_exponent: ti.f32
    reflectiveness: ti.f32


# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_colors = ti.Vector.field(4, dtype=ti.f32, shape=MAX_SPHERES)
sphere_material_types = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
sphere_specular_exponents = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_reflectiveness = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Light storage: light_vectors holds the direction of directional lights and
# the position of point lights (unused for ambient lights)
light_types = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
light_vectors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_intensities = ti.Vector.field(4, dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all spheres and lights from device storage.

    Resets the counts to zero. Field data is not cleared but will be
    overwritten by the next upload.
    """
    num_spheres[None] = 0
    num_lights[None] = 0


def upload_scene(scene: Scene) -> None:
    """Copy a host Scene into the device fields, replacing any previous one.

    Args:
        scene: The scene to upload. Object and light order is preserved.

    Raises:
        RuntimeError: If the scene exceeds MAX_SPHERES or MAX_LIGHTS.
    """
    if scene.sphere_count > MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    if scene.light_count > MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

    centers = np.zeros((MAX_SPHERES, 3), dtype=np.float32)
    radii = np.zeros(MAX_SPHERES, dtype=np.float32)
    colors = np.zeros((MAX_SPHERES, 4), dtype=np.float32)
    material_types = np.zeros(MAX_SPHERES, dtype=np.int32)
    exponents = np.zeros(MAX_SPHERES, dtype=np.float32)
    reflectiveness = np.zeros(MAX_SPHERES, dtype=np.float32)

    for i, sphere in enumerate(scene.objects):
        centers[i] = sphere.center
        radii[i] = sphere.radius
        colors[i] = sphere.base_color.to_tuple()
        material_types[i] = int(sphere.material.material_type)
        if isinstance(sphere.material, Specular):
            exponents[i] = sphere.material.specular_exponent
            reflectiveness[i] = sphere.material.reflectiveness

    types = np.zeros(MAX_LIGHTS, dtype=np.int32)
    vectors = np.zeros((MAX_LIGHTS, 3), dtype=np.float32)
    intensities = np.zeros((MAX_LIGHTS, 4), dtype=np.float32)

    for i, light in enumerate(scene.lights):
        types[i] = int(light.light_type)
        intensities[i] = light.intensity.to_tuple()
        if isinstance(light, DirectionalLight):
            vectors[i] = light.direction
        elif not isinstance(light, AmbientLight):
            vectors[i] = light.position

    sphere_centers.from_numpy(centers)
    sphere_radii.from_numpy(radii)
    sphere_colors.from_numpy(colors)
    sphere_material_types.from_numpy(material_types)
    sphere_specular_exponents.from_numpy(exponents)
    sphere_reflectiveness.from_numpy(reflectiveness)
    num_spheres[None] = scene.sphere_count

    light_types.from_numpy(types)
    light_vectors.from_numpy(vectors)
    light_intensities.from_numpy(intensities)
    num_lights[None] = scene.light_count

    logger.debug(
        "Uploaded scene: %d spheres, %d lights", scene.sphere_count, scene.light_count
    )


def get_sphere_count() -> int:
    """Get the number of spheres in device storage."""
    return int(num_spheres[None])


def get_light_count() -> int:
    """Get the number of lights in device storage."""
    return int(num_lights[None])


@ti.func
def get_sphere(index: ti.i32) -> Sphere:
    """Get the geometry of the sphere at ``index``."""
    return Sphere(center=sphere_centers[index], radius=sphere_radii[index])


@ti.func
def get_sphere_material(index: ti.i32) -> SurfaceMaterial:
    """Get the material of the sphere at ``index``."""
    return SurfaceMaterial(
        material_type=sphere_material_types[index],
        color=sphere_colors[index],
        specular_exponent=sphere_specular_exponents[index],
        reflectiveness=sphere_reflectiveness[index],
    )


@ti.func
def is_specular(material: SurfaceMaterial) -> ti.i32:
    """Check whether a material has a specular term."""
    return material.material_type == int(MaterialType.SPECULAR)


@ti.func
def closest_intersection(
    origin: vec3,
    direction: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
):
    """Find the nearest sphere hit by a ray within a t window.

    Scans spheres in scene order. A root is a candidate when it lies in the
    half-open window [t_min, t_max) and is strictly smaller than the best t
    found so far, so on equal t the earlier sphere wins.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector of the ray (must be non-zero).
        t_min: Inclusive lower bound of the window.
        t_max: Exclusive upper bound of the window.

    Returns:
        A tuple (index, t): the sphere index and its hit parameter, or
        (NO_HIT, inf) when nothing qualifies.
    """
    closest_t = tm.inf
    closest_index = NO_HIT

    for i in range(num_spheres[None]):
        t1, t2 = intersect_ray_sphere(origin, direction, get_sphere(i))

        if t_min <= t1 and t1 < t_max and t1 < closest_t:
            closest_t = t1
            closest_index = i

        if t_min <= t2 and t2 < t_max and t2 < closest_t:
            closest_t = t2
            closest_index = i

    return closest_index, closest_t
