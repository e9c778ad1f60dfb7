"""Core rendering module.

Components:
    ray: Vector aliases, ray evaluation, reflection and viewport projection
    color: 8-bit and floating-point RGBA colors with saturating arithmetic
    config: Immutable render configuration and its default constants
    tracer: Ray tracing kernels (nearest hit, lighting, mirror bounces)
    renderer: Frame driver writing traced pixels to a surface

All per-pixel work runs in Taichi kernels.
"""

from .color import Color8, ColorF
from .config import (
    BACKGROUND_COLOR,
    MAX_RECURSION_LIMIT,
    MIN_Z,
    REFLECTION_RECURSION_LIMIT,
    SHADOW_EPSILON,
    RenderConfig,
)

# Note: tracer and renderer are NOT imported here because they allocate
# Taichi fields at import time, which must happen after ti.init().
# Import them directly from software_graphics.core.tracer or
# software_graphics.core.renderer when needed.

__all__ = [
    "Color8",
    "ColorF",
    "RenderConfig",
    "BACKGROUND_COLOR",
    "MAX_RECURSION_LIMIT",
    "MIN_Z",
    "REFLECTION_RECURSION_LIMIT",
    "SHADOW_EPSILON",
]
