#!/usr/bin/env python3
"""Render the classic three-spheres scene built in code.

The scene is assembled from the data model directly instead of being loaded
from JSON: three shiny spheres resting on a large yellow ground sphere, lit
by ambient, point and directional lights.

Usage:
    python examples/render_three_spheres.py [--width W] [--height H] [--output PATH]
"""

from __future__ import annotations

import argparse
import sys

import taichi as ti

from software_graphics.core.color import Color8, ColorF
from software_graphics.logging_config import setup_logging


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Render the three-spheres scene.")
    parser.add_argument("--width", type=int, default=512, help="Image width (default: 512)")
    parser.add_argument("--height", type=int, default=512, help="Image height (default: 512)")
    parser.add_argument(
        "--output", type=str, default="three_spheres.png", help="Output file path"
    )
    return parser.parse_args()


def build_scene():
    from software_graphics.scene.model import (
        AmbientLight,
        DirectionalLight,
        Matte,
        PointLight,
        Scene,
        Specular,
        SphereInfo,
    )

    objects = [
        SphereInfo((0.0, -1.0, 3.0), 1.0, Specular(Color8(255, 0, 0), 500.0, 0.2)),
        SphereInfo((2.0, 0.0, 4.0), 1.0, Specular(Color8(0, 0, 255), 500.0, 0.3)),
        SphereInfo((-2.0, 0.0, 4.0), 1.0, Specular(Color8(0, 255, 0), 10.0, 0.4)),
        # Ground; y grows downward on screen
        SphereInfo((0.0, 5001.0, 0.0), 5000.0, Matte(Color8(255, 255, 0))),
    ]
    lights = [
        AmbientLight(ColorF(0.2, 0.2, 0.2, 1.0)),
        PointLight((2.0, -1.0, 0.0), ColorF(0.6, 0.6, 0.6, 1.0)),
        DirectionalLight((1.0, -4.0, 4.0), ColorF(0.2, 0.2, 0.2, 1.0)),
    ]
    return Scene.build(objects, lights)


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logger = setup_logging("INFO")
    ti.init(arch=ti.cpu)

    # Imported after ti.init, these modules allocate Taichi fields
    from software_graphics.core.renderer import Renderer
    from software_graphics.preview.export import save_png
    from software_graphics.surface.buffer import PixelSurface

    try:
        surface = PixelSurface(args.width, args.height)
        Renderer().render(build_scene(), surface)
        save_png(surface, args.output)
    except (OSError, ValueError, RuntimeError) as e:
        logger.error("Error: %s", e)
        return 1

    logger.info("Saved to: %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
