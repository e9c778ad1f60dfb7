"""Render configuration shared by the frame driver and the tracer.

The constants here are part of the renderer's observable contract: changing
any of them changes pixel output. They are bundled in an immutable
RenderConfig that is threaded explicitly through rendering calls.
"""

from dataclasses import dataclass, field

from software_graphics.core.color import Color8

# Distance from the eye to the projection plane
MIN_Z = 1.0

# Number of mirror bounces followed after the primary hit
REFLECTION_RECURSION_LIMIT = 3

# Largest recursion limit the unrolled tracer supports
MAX_RECURSION_LIMIT = 5

# Lower bound of the t window for shadow and reflected rays
SHADOW_EPSILON = 1e-4

# Lower bound of the t window for primary rays (the viewport plane)
PRIMARY_T_MIN = 1.0

BACKGROUND_COLOR = Color8(10, 100, 10, 255)


@dataclass(frozen=True)
class RenderConfig:
    """Immutable rendering parameters.

    Attributes:
        min_z: Eye-to-viewport distance used by the viewport projection.
        recursion_limit: Maximum number of reflection bounces.
        shadow_epsilon: Minimum t for secondary rays, avoiding self-hits.
        primary_t_min: Minimum t for primary rays.
        background_color: Color returned for rays that hit nothing.

    Raises:
        ValueError: If a parameter is outside its supported range.
    """

    min_z: float = MIN_Z
    recursion_limit: int = REFLECTION_RECURSION_LIMIT
    shadow_epsilon: float = SHADOW_EPSILON
    primary_t_min: float = PRIMARY_T_MIN
    background_color: Color8 = field(default=BACKGROUND_COLOR)

    def __post_init__(self) -> None:
        if not 0 <= self.recursion_limit <= MAX_RECURSION_LIMIT:
            raise ValueError(
                f"recursion_limit must be in [0, {MAX_RECURSION_LIMIT}], "
                f"got {self.recursion_limit}"
            )
        if self.min_z <= 0.0:
            raise ValueError(f"min_z must be positive, got {self.min_z}")
        if self.shadow_epsilon < 0.0:
            raise ValueError(f"shadow_epsilon must be non-negative, got {self.shadow_epsilon}")
