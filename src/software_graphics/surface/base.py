"""The Surface protocol consumed by the frame driver and the rasterizer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from software_graphics.core.color import Color8


@runtime_checkable
class Surface(Protocol):
    """A width x height grid of RGBA pixels that can be written one at a time.

    Coordinates passed to set_pixel must lie within [0, width) x [0, height);
    writes outside that range are a caller error and are not checked.
    """

    def get_width(self) -> int: ...

    def get_height(self) -> int: ...

    def set_pixel(self, x: int, y: int, color: Color8) -> None: ...
