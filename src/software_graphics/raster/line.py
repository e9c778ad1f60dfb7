"""Basic 2-D line rasterizer.

A much simpler drawing mode than ray tracing: lines are stepped one pixel at
a time along their major axis, accumulating the gradient along the minor
axis. The end point is exclusive and coordinates are truncated toward zero.
Pixels that fall outside the surface are skipped.

Example:
    >>> surface = PixelSurface(320, 240)
    >>> clear_surface(surface, BACKGROUND_COLOR)
    >>> draw_line((10.0, 10.0), (200.0, 100.0), Color8(0, 0, 0, 255), surface)
"""

from __future__ import annotations

from software_graphics.core.color import Color8
from software_graphics.surface.base import Surface

Point2 = tuple[float, float]


def _plot(surface: Surface, x: float, y: float, color: Color8) -> None:
    px = int(x)
    py = int(y)
    if 0 <= px < surface.get_width() and 0 <= py < surface.get_height():
        surface.set_pixel(px, py, color)


def draw_line(start: Point2, end: Point2, color: Color8, surface: Surface) -> None:
    """Draw a straight line from ``start`` to ``end``.

    Args:
        start: First end point as (x, y).
        end: Second end point as (x, y); not itself drawn.
        color: The line color.
        surface: The surface to draw into.
    """
    run = end[0] - start[0]
    rise = end[1] - start[1]

    if abs(run) > abs(rise):
        # Horizontal-ish: step x from the left-most point
        first, last = (start, end) if start[0] <= end[0] else (end, start)
        gradient = rise / run
        current_y = first[1]
        for x in range(int(first[0]), int(last[0])):
            _plot(surface, x, current_y, color)
            current_y += gradient
    elif rise != 0:
        # Vertical-ish: step y from the lowest point
        first, last = (start, end) if start[1] <= end[1] else (end, start)
        gradient = run / rise
        current_x = first[0]
        for y in range(int(first[1]), int(last[1])):
            _plot(surface, current_x, y, color)
            current_x += gradient


def clear_surface(surface: Surface, color: Color8) -> None:
    """Set every pixel of the surface to ``color``."""
    for y in range(surface.get_height()):
        for x in range(surface.get_width()):
            surface.set_pixel(x, y, color)
