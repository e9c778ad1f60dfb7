"""Scene module for the scene model, loading and device-side queries.

Components:
    model: Immutable Scene, SphereInfo, material and light variants
    loader: JSON scene description loading
    intersection: Device storage of the uploaded scene and nearest-hit query
    lighting: Ambient, directional and point lighting with hard shadows

A Scene is built once (usually by the loader), uploaded into Taichi fields
by the renderer at the start of each frame, and only read while tracing.
"""

from .loader import SceneLoadError, load_scene, parse_scene, scene_from_dict
from .model import (
    AmbientLight,
    DirectionalLight,
    Light,
    LightType,
    Material,
    MaterialType,
    Matte,
    PointLight,
    Scene,
    Specular,
    SphereInfo,
)

# Note: intersection and lighting are NOT imported here because they allocate
# Taichi fields at import time, which must happen after ti.init().

__all__ = [
    # Model
    "Scene",
    "SphereInfo",
    "Material",
    "MaterialType",
    "Matte",
    "Specular",
    "Light",
    "LightType",
    "AmbientLight",
    "DirectionalLight",
    "PointLight",
    # Loader
    "SceneLoadError",
    "load_scene",
    "parse_scene",
    "scene_from_dict",
]
