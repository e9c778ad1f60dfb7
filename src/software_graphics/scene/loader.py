"""Scene loading from JSON descriptions.

The description format uses externally tagged variants: a material or light
is an object with exactly one key naming its kind.

    {
      "objects": [
        {"center": {"x": 0, "y": -1, "z": 3}, "radius": 1,
         "material": {"Specular": {"color": {"r": 255, "g": 0, "b": 0, "a": 255},
                                   "specular": 500, "reflectiveness": 0.2}}}
      ],
      "lights": [
        {"Ambient": {"intensity": {"r": 0.2, "g": 0.2, "b": 0.2, "a": 1.0}}},
        {"Point": {"position": {"x": 2, "y": 1, "z": 0},
                   "intensity": {"r": 0.6, "g": 0.6, "b": 0.6, "a": 1.0}}}
      ]
    }

Loading is all or nothing: any problem raises SceneLoadError and no partial
scene is returned. 8-bit color channels must be integers in [0, 255]; an
integral float such as 200.0 is accepted as 200, while 200.5 is rejected.

Example:
    >>> from software_graphics.scene.loader import load_scene
    >>> scene = load_scene("scenes/demo.json")
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

from software_graphics.core.color import U8_MAX, Color8, ColorF
from software_graphics.scene.model import (
    AmbientLight,
    DirectionalLight,
    Light,
    Material,
    Matte,
    PointLight,
    Scene,
    Specular,
    SphereInfo,
    Vector3,
)

logger = logging.getLogger(__name__)

_LIGHT_TAGS = ("Ambient", "Directional", "Point")


class SceneLoadError(ValueError):
    """Raised when a scene description cannot be read or is malformed.

    Attributes:
        path: Location of the offending value within the description
            (e.g. ``objects[1].material``), or None for whole-file errors.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


def load_scene(filepath: str | Path) -> Scene:
    """Read and parse a scene description file.

    Args:
        filepath: Path to a JSON scene description.

    Returns:
        The loaded Scene.

    Raises:
        SceneLoadError: If the file cannot be read or its content is invalid.
    """
    path = Path(filepath)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SceneLoadError(f"Could not read scene file {path}: {e}") from e

    scene = parse_scene(text)
    logger.info(
        "Loaded scene %s: %d spheres, %d lights",
        path,
        scene.sphere_count,
        scene.light_count,
    )
    return scene


def parse_scene(text: str) -> Scene:
    """Parse a scene description from JSON text.

    Raises:
        SceneLoadError: If the text is not valid JSON or not a valid scene.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SceneLoadError(f"Invalid JSON: {e}") from e
    return scene_from_dict(data)


def scene_from_dict(data: Any) -> Scene:
    """Build a Scene from decoded JSON data.

    Raises:
        SceneLoadError: If the data does not describe a valid scene.
    """
    if not isinstance(data, dict):
        raise SceneLoadError("Scene description must be an object")

    objects = _require_list(data, "objects", "")
    lights = _require_list(data, "lights", "")

    return Scene(
        objects=tuple(_parse_sphere(obj, f"objects[{i}]") for i, obj in enumerate(objects)),
        lights=tuple(_parse_light(light, f"lights[{i}]") for i, light in enumerate(lights)),
    )


# =============================================================================
# Field Parsers
# =============================================================================


def _join(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key


def _require(data: dict[str, Any], key: str, parent: str) -> Any:
    if key not in data:
        raise SceneLoadError(f"Missing required field '{key}'", parent or None)
    return data[key]


def _require_object(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SceneLoadError(f"Expected an object, got {type(value).__name__}", path)
    return value


def _require_list(data: dict[str, Any], key: str, parent: str) -> list[Any]:
    value = _require(data, key, parent)
    if not isinstance(value, list):
        raise SceneLoadError(f"Expected a list, got {type(value).__name__}", _join(parent, key))
    return value


def _parse_float(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneLoadError(f"Expected a number, got {value!r}", path)
    result = float(value)
    if not math.isfinite(result):
        raise SceneLoadError(f"Expected a finite number, got {value!r}", path)
    return result


def _parse_vector3(value: Any, path: str) -> Vector3:
    data = _require_object(value, path)
    x, y, z = (_parse_float(_require(data, axis, path), _join(path, axis)) for axis in "xyz")
    return (x, y, z)


def _parse_color8(value: Any, path: str) -> Color8:
    data = _require_object(value, path)
    channels = []
    for name in "rgba":
        channel = _require(data, name, path)
        channel_path = _join(path, name)
        if isinstance(channel, float) and channel.is_integer():
            channel = int(channel)
        if isinstance(channel, bool) or not isinstance(channel, int):
            raise SceneLoadError(f"Expected an integer channel, got {channel!r}", channel_path)
        if not 0 <= channel <= U8_MAX:
            raise SceneLoadError(f"Channel must be in [0, {U8_MAX}], got {channel}", channel_path)
        channels.append(channel)
    return Color8.from_sequence(channels)


def _parse_colorf(value: Any, path: str) -> ColorF:
    data = _require_object(value, path)
    return ColorF.from_sequence(
        [_parse_float(_require(data, name, path), _join(path, name)) for name in "rgba"]
    )


def _parse_variant(value: Any, path: str) -> tuple[str, dict[str, Any]]:
    """Split an externally tagged variant into (tag, body)."""
    data = _require_object(value, path)
    if len(data) != 1:
        raise SceneLoadError(
            f"Expected exactly one variant tag, got {sorted(data) or 'none'}", path
        )
    tag, body = next(iter(data.items()))
    return tag, _require_object(body, _join(path, tag))


def _parse_material(value: Any, path: str) -> Material:
    tag, body = _parse_variant(value, path)
    body_path = _join(path, tag)

    if tag == "Matte":
        return Matte(color=_parse_color8(_require(body, "color", body_path), _join(body_path, "color")))

    if tag == "Specular":
        color = _parse_color8(_require(body, "color", body_path), _join(body_path, "color"))
        specular = _parse_float(_require(body, "specular", body_path), _join(body_path, "specular"))
        reflectiveness = _parse_float(
            _require(body, "reflectiveness", body_path), _join(body_path, "reflectiveness")
        )
        if not 0.0 <= reflectiveness <= 1.0:
            raise SceneLoadError(
                f"reflectiveness must be in [0, 1], got {reflectiveness}",
                _join(body_path, "reflectiveness"),
            )
        return Specular(color=color, specular_exponent=specular, reflectiveness=reflectiveness)

    raise SceneLoadError(f"Unknown material type: {tag}", path)


def _parse_sphere(value: Any, path: str) -> SphereInfo:
    data = _require_object(value, path)
    center = _parse_vector3(_require(data, "center", path), _join(path, "center"))
    radius = _parse_float(_require(data, "radius", path), _join(path, "radius"))
    if radius <= 0.0:
        raise SceneLoadError(f"radius must be positive, got {radius}", _join(path, "radius"))
    material = _parse_material(_require(data, "material", path), _join(path, "material"))
    return SphereInfo(center=center, radius=radius, material=material)


def _parse_light(value: Any, path: str) -> Light:
    tag, body = _parse_variant(value, path)
    if tag not in _LIGHT_TAGS:
        raise SceneLoadError(f"Unknown light type: {tag}", path)
    body_path = _join(path, tag)
    intensity = _parse_colorf(_require(body, "intensity", body_path), _join(body_path, "intensity"))

    if tag == "Ambient":
        return AmbientLight(intensity=intensity)
    if tag == "Directional":
        direction = _parse_vector3(
            _require(body, "direction", body_path), _join(body_path, "direction")
        )
        return DirectionalLight(direction=direction, intensity=intensity)
    position = _parse_vector3(_require(body, "position", body_path), _join(body_path, "position"))
    return PointLight(position=position, intensity=intensity)
