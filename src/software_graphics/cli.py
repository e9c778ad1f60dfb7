"""Render a scene description to a PNG image.

Usage:
    software-graphics SCENE [options]

Options:
    --width WIDTH             Image width in pixels (default: 640)
    --height HEIGHT           Image height in pixels (default: 480)
    --output OUTPUT           Output file path (default: render.png)
    --mode MODE               raytraced or rasterized (default: raytraced)
    --recursion-limit N       Reflection bounces (default: 3)
    --background R,G,B,A      Background color (default: 10,100,10,255)
    --arch ARCH               Taichi backend, cpu or gpu (default: cpu)
    --verbose                 Log debug output
    --quiet                   Only log warnings and errors

Example:
    software-graphics scenes/demo.json --width 320 --height 240 -o demo.png
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import taichi as ti

from software_graphics.core.color import Color8
from software_graphics.core.config import (
    BACKGROUND_COLOR,
    MAX_RECURSION_LIMIT,
    REFLECTION_RECURSION_LIMIT,
    RenderConfig,
)
from software_graphics.logging_config import setup_logging

logger = logging.getLogger("software_graphics.cli")

# Demonstration line drawn in rasterized mode
LINE_START = (10.0, 10.0)
LINE_END = (200.0, 100.0)
LINE_COLOR = Color8(0, 0, 0, 255)


def _parse_color(text: str) -> Color8:
    try:
        return Color8.from_sequence([int(part) for part in text.split(",")])
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid color {text!r}: {e}") from e


def _parse_recursion_limit(text: str) -> int:
    try:
        value = int(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid integer {text!r}") from e
    if not 0 <= value <= MAX_RECURSION_LIMIT:
        raise argparse.ArgumentTypeError(f"must be in [0, {MAX_RECURSION_LIMIT}], got {value}")
    return value


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="software-graphics",
        description="Ray trace a JSON scene of spheres and lights to a PNG image.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("scene", type=Path, help="Path to the JSON scene description")
    parser.add_argument(
        "--width",
        type=int,
        default=640,
        help="Image width in pixels (default: 640)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=480,
        help="Image height in pixels (default: 480)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("render.png"),
        help="Output file path (default: render.png)",
    )
    parser.add_argument(
        "--mode",
        choices=("raytraced", "rasterized"),
        default="raytraced",
        help="Drawing mode (default: raytraced)",
    )
    parser.add_argument(
        "--recursion-limit",
        type=_parse_recursion_limit,
        default=REFLECTION_RECURSION_LIMIT,
        help=f"Reflection bounces (default: {REFLECTION_RECURSION_LIMIT})",
    )
    parser.add_argument(
        "--background",
        type=_parse_color,
        default=BACKGROUND_COLOR,
        help="Background color as R,G,B,A (default: 10,100,10,255)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Log debug output")
    verbosity.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> Path:
    """Load the scene, draw it and save the image.

    Taichi must already be initialized.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Path to the saved image file.

    Raises:
        SceneLoadError: If the scene cannot be loaded.
        ValueError: If the image size is not supported.
        RuntimeError: If the scene exceeds device storage capacity.
    """
    # Lazy imports to allow Taichi initialization first
    from software_graphics.core.renderer import Renderer
    from software_graphics.preview.export import save_png
    from software_graphics.raster.line import clear_surface, draw_line
    from software_graphics.scene.loader import load_scene
    from software_graphics.surface.buffer import PixelSurface

    scene = load_scene(args.scene)
    config = RenderConfig(recursion_limit=args.recursion_limit, background_color=args.background)

    if args.width <= 0 or args.height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {args.width}x{args.height}")
    surface = PixelSurface(args.width, args.height)

    if args.mode == "raytraced":
        logger.info("Ray tracing %s at %dx%d", args.scene, args.width, args.height)
        Renderer(config).render(scene, surface)
    else:
        logger.info("Rasterizing at %dx%d", args.width, args.height)
        clear_surface(surface, config.background_color)
        draw_line(LINE_START, LINE_END, LINE_COLOR, surface)

    save_png(surface, args.output)
    logger.info("Saved to: %s", args.output.absolute())
    return args.output


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        setup_logging("DEBUG")
    elif args.quiet:
        setup_logging("WARNING")
    else:
        setup_logging("INFO")

    ti.init(arch=ti.gpu if args.arch == "gpu" else ti.cpu)

    try:
        run(args)
        return 0
    except (OSError, ValueError, RuntimeError) as e:
        logger.error("Error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
