"""RGBA colors over 8-bit and floating-point channels.

Two channel representations take part in shading:

    Color8: 8-bit unsigned channels used for material base colors and final
        pixels. Arithmetic saturates at [0, 255] instead of wrapping.
    ColorF: float32 channels used to accumulate light intensity. Arithmetic
        is unclamped until the intensity modulates a Color8, at which point
        each product is clamped into [0, 255] and truncated.

Inside kernels an 8-bit color travels as a ``vec4`` of float32 holding whole
numbers in [0, 255]. The ``*_u8`` Taichi functions below apply exactly the
same clamping and truncation rules as the host classes so that host and
device arithmetic agree bit for bit.

Example:
    >>> white = Color8(255, 255, 255, 255)
    >>> white + Color8(10, 10, 10, 10)
    Color8(r=255, g=255, b=255, a=255)
    >>> Color8(200, 0, 0, 255) * ColorF(0.5, 0.5, 0.5, 1.0)
    Color8(r=100, g=0, b=0, a=255)
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

vec3 = tm.vec3
vec4 = tm.vec4

U8_MAX = 255


def _clamp_u8(value: np.float32) -> int:
    """Clamp a float32 product into [0, 255] and truncate toward zero."""
    return int(min(max(value, np.float32(0.0)), np.float32(U8_MAX)))


@dataclass(frozen=True)
class Color8:
    """An RGBA color with 8-bit unsigned channels.

    Attributes:
        r: Red channel in [0, 255].
        g: Green channel in [0, 255].
        b: Blue channel in [0, 255].
        a: Alpha channel in [0, 255].

    Raises:
        ValueError: If a channel is not an integer in [0, 255].
    """

    r: int
    g: int
    b: int
    a: int = U8_MAX

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"Channel {name} must be an integer, got {value!r}")
            if not 0 <= value <= U8_MAX:
                raise ValueError(f"Channel {name} must be in [0, {U8_MAX}], got {value}")

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> "Color8":
        """Build a color from an (r, g, b, a) sequence."""
        if len(values) != 4:
            raise ValueError(f"Expected 4 channels, got {len(values)}")
        return cls(*(int(v) for v in values))

    def to_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def to_array(self) -> npt.NDArray[np.uint8]:
        return np.array(self.to_tuple(), dtype=np.uint8)

    def to_vec4(self) -> list[float]:
        """Channels as floats, the layout used by device-side u8 helpers."""
        return [float(c) for c in self.to_tuple()]

    def __add__(self, other: "Color8") -> "Color8":
        if not isinstance(other, Color8):
            return NotImplemented
        return Color8(*(min(x + y, U8_MAX) for x, y in zip(self.to_tuple(), other.to_tuple())))

    def __mul__(self, other: "Color8 | ColorF | float") -> "Color8":
        if isinstance(other, Color8):
            # Saturating per-channel integer multiply
            return Color8(*(min(x * y, U8_MAX) for x, y in zip(self.to_tuple(), other.to_tuple())))
        if isinstance(other, ColorF):
            return Color8(
                *(
                    _clamp_u8(np.float32(x) * np.float32(f))
                    for x, f in zip(self.to_tuple(), other.to_tuple())
                )
            )
        if isinstance(other, (int, float, np.floating)):
            scale = np.float32(other)
            # Scalar scaling leaves alpha untouched
            return Color8(
                _clamp_u8(np.float32(self.r) * scale),
                _clamp_u8(np.float32(self.g) * scale),
                _clamp_u8(np.float32(self.b) * scale),
                _clamp_u8(np.float32(self.a) * np.float32(1.0)),
            )
        return NotImplemented


@dataclass(frozen=True)
class ColorF:
    """An RGBA light intensity with float32 channels.

    Channels are unbounded; a light brighter than 1.0 simply saturates the
    8-bit color it modulates.

    Attributes:
        r: Red intensity.
        g: Green intensity.
        b: Blue intensity.
        a: Alpha intensity.
    """

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def zero(cls) -> "ColorF":
        return cls(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "ColorF":
        """Build an intensity from an (r, g, b, a) sequence."""
        if len(values) != 4:
            raise ValueError(f"Expected 4 channels, got {len(values)}")
        return cls(*(float(v) for v in values))

    def to_tuple(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def to_vec4(self) -> list[float]:
        return [float(c) for c in self.to_tuple()]

    def __add__(self, other: "ColorF") -> "ColorF":
        if not isinstance(other, ColorF):
            return NotImplemented
        return ColorF(
            *(float(np.float32(x) + np.float32(y)) for x, y in zip(self.to_tuple(), other.to_tuple()))
        )

    def __mul__(self, other: "ColorF | float") -> "ColorF":
        if isinstance(other, ColorF):
            return ColorF(
                *(
                    float(np.float32(x) * np.float32(y))
                    for x, y in zip(self.to_tuple(), other.to_tuple())
                )
            )
        if isinstance(other, (int, float, np.floating)):
            scale = np.float32(other)
            return ColorF(*(float(np.float32(x) * scale) for x in self.to_tuple()))
        return NotImplemented


# =============================================================================
# Device-side 8-bit Color Arithmetic
# =============================================================================


@ti.func
def shade_u8(base: vec4, intensity: vec4) -> vec4:
    """Modulate an 8-bit color by a light intensity (Color8 * ColorF).

    Args:
        base: Base color with whole-number channels in [0, 255].
        intensity: Accumulated light intensity.

    Returns:
        Per-channel trunc(clamp(base * intensity, 0, 255)), alpha included.
    """
    return ti.floor(tm.clamp(base * intensity, 0.0, 255.0))


@ti.func
def scale_u8(color: vec4, scale: ti.f32) -> vec4:
    """Scale the RGB channels of an 8-bit color (Color8 * float).

    Alpha is carried over unchanged.
    """
    rgb = ti.floor(tm.clamp(vec3(color.x, color.y, color.z) * scale, 0.0, 255.0))
    return vec4(rgb.x, rgb.y, rgb.z, color.w)


@ti.func
def add_u8(a: vec4, b: vec4) -> vec4:
    """Saturating per-channel addition of two 8-bit colors."""
    return tm.min(a + b, 255.0)


@ti.func
def blend_u8(local: vec4, reflected: vec4, reflectiveness: ti.f32) -> vec4:
    """Blend a local color with a reflected color in 8-bit arithmetic.

    Computes local * (1 - r) + reflected * r, where each scaled term is
    truncated before the saturating add.
    """
    return add_u8(scale_u8(local, 1.0 - reflectiveness), scale_u8(reflected, reflectiveness))
