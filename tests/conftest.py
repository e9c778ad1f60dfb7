"""Pytest configuration for software-graphics tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate the module-level fields allocated by the scene and tracer
    modules.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_scene_data():
    """Clear uploaded scene data before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the fields are allocated after Taichi is initialized
    from software_graphics.scene.intersection import clear_scene

    clear_scene()
    yield
    clear_scene()


@pytest.fixture
def red_ambient_scene():
    """A matte red sphere straight ahead, lit only by half-intensity ambient light."""
    from software_graphics.core.color import Color8, ColorF
    from software_graphics.scene.model import AmbientLight, Matte, Scene, SphereInfo

    return Scene(
        objects=(
            SphereInfo(center=(0.0, 0.0, 3.0), radius=1.0, material=Matte(Color8(200, 0, 0, 255))),
        ),
        lights=(AmbientLight(ColorF(0.5, 0.5, 0.5, 1.0)),),
    )
