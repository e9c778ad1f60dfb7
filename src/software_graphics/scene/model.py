"""In-memory scene data model.

A Scene is a flat, ordered collection of spheres plus a flat, ordered
collection of lights. Everything here is immutable once built; the renderer
only reads it.

Materials and lights are closed sets of variants:

    Material = Matte | Specular
    Light = AmbientLight | DirectionalLight | PointLight

The MaterialType and LightType enums give each variant the integer tag used
to dispatch on it inside Taichi kernels.

Example:
    >>> from software_graphics.core.color import Color8, ColorF
    >>> red = Matte(color=Color8(200, 0, 0, 255))
    >>> scene = Scene(
    ...     objects=(SphereInfo(center=(0.0, 0.0, 3.0), radius=1.0, material=red),),
    ...     lights=(AmbientLight(intensity=ColorF(0.5, 0.5, 0.5, 1.0)),),
    ... )
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from software_graphics.core.color import Color8, ColorF

Vector3 = tuple[float, float, float]


class MaterialType(IntEnum):
    """Tag of a material variant, used for dispatch in the tracer."""

    MATTE = 0
    SPECULAR = 1


class LightType(IntEnum):
    """Tag of a light variant, used for dispatch in the lighting routine."""

    AMBIENT = 0
    DIRECTIONAL = 1
    POINT = 2


@dataclass(frozen=True)
class Matte:
    """A purely diffuse material.

    Attributes:
        color: The base color of the surface.
    """

    color: Color8

    @property
    def material_type(self) -> MaterialType:
        return MaterialType.MATTE


@dataclass(frozen=True)
class Specular:
    """A shiny material with a specular highlight and optional mirror blend.

    Attributes:
        color: The base color of the surface.
        specular_exponent: Shininess; larger values give tighter highlights.
        reflectiveness: Weight in [0, 1] of the mirrored color in the final
            blend. Zero disables reflection bounces.

    Raises:
        ValueError: If reflectiveness is outside [0, 1].
    """

    color: Color8
    specular_exponent: float
    reflectiveness: float = 0.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.reflectiveness <= 1.0:
            raise ValueError(f"reflectiveness must be in [0, 1], got {self.reflectiveness}")

    @property
    def material_type(self) -> MaterialType:
        return MaterialType.SPECULAR


Material = Union[Matte, Specular]


@dataclass(frozen=True)
class AmbientLight:
    """Light reaching every point equally, regardless of normal or shadows."""

    intensity: ColorF

    @property
    def light_type(self) -> LightType:
        return LightType.AMBIENT


@dataclass(frozen=True)
class DirectionalLight:
    """Light arriving from a fixed direction, as from a distant source.

    Attributes:
        direction: Direction from a surface point toward the light.
        intensity: The light intensity.
    """

    direction: Vector3
    intensity: ColorF

    @property
    def light_type(self) -> LightType:
        return LightType.DIRECTIONAL


@dataclass(frozen=True)
class PointLight:
    """Light emitted from a single position.

    Attributes:
        position: World-space position of the light.
        intensity: The light intensity.
    """

    position: Vector3
    intensity: ColorF

    @property
    def light_type(self) -> LightType:
        return LightType.POINT


Light = Union[AmbientLight, DirectionalLight, PointLight]


@dataclass(frozen=True)
class SphereInfo:
    """A sphere in the scene.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere.
        material: The surface material.

    Raises:
        ValueError: If the radius is not positive.
    """

    center: Vector3
    radius: float
    material: Material

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError(f"radius must be positive, got {self.radius}")

    @property
    def base_color(self) -> Color8:
        """The material's base color, whatever the material kind."""
        return self.material.color


@dataclass(frozen=True)
class Scene:
    """An immutable collection of spheres and lights.

    Attributes:
        objects: Spheres in iteration order. Nearest-hit ties resolve to the
            earlier sphere.
        lights: Lights in accumulation order.
    """

    objects: tuple[SphereInfo, ...] = ()
    lights: tuple[Light, ...] = ()

    @classmethod
    def build(cls, objects: Iterable[SphereInfo], lights: Iterable[Light]) -> Scene:
        """Create a scene from any iterables of spheres and lights."""
        return cls(objects=tuple(objects), lights=tuple(lights))

    @property
    def sphere_count(self) -> int:
        return len(self.objects)

    @property
    def light_count(self) -> int:
        return len(self.lights)
