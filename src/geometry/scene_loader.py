# geometry/scene_loader.py
"""Scene loading from a JSON scene description.

Example::

    {
      "ambient": [0.05, 0.05, 0.05],
      "lights": [{"position": [0, 3, 2], "colour": [1, 1, 1], "intensity": 100}],
      "objects": [
        {"type": "sphere", "position": [0, 0, 4], "radius": 1, "colour": [0.9, 0.2, 0.2]},
        {"type": "bumpy_sphere", "position": [1.5, 0, 5], "radius": 1,
         "colour": [0.2, 0.3, 0.9], "bump_map": "bumps.png", "material": "glossy"}
      ],
      "render": {"width": 320, "height": 240, "bounces": 2, "dof_ray_count": 50}
    }

Relative bump map paths are resolved against the scene file's directory.
"""
import json
import logging
import os
from typing import Any, Dict, Tuple
from core.color import ColorRGB
from core.errors import SceneFormatError
from core.vector import Vector3
from geometry.bumpy_sphere import BUMP_FACTOR, BumpySphere
from geometry.light import PointLight
from geometry.sphere import Sphere
from geometry.world import Scene
from materials.presets import PhongPresets

logger = logging.getLogger(__name__)

SHADING_KEYS = ("kd", "ks", "alpha", "reflectivity")

def _triple(entry: Dict[str, Any], key: str, where: str) -> Tuple[float, float, float]:
    try:
        value = entry[key]
    except KeyError:
        raise SceneFormatError(f"{where}: missing {key!r}") from None
    if isinstance(value, (int, float)):
        return (float(value),) * 3
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise SceneFormatError(f"{where}: {key!r} must be a number or a list of 3 numbers, got {value!r}")
    try:
        return tuple(float(v) for v in value)
    except (TypeError, ValueError):
        raise SceneFormatError(f"{where}: {key!r} must contain numbers, got {value!r}") from None

def _number(entry: Dict[str, Any], key: str, where: str, default=None) -> float:
    if key not in entry:
        if default is None:
            raise SceneFormatError(f"{where}: missing {key!r}")
        return default
    try:
        return float(entry[key])
    except (TypeError, ValueError):
        raise SceneFormatError(f"{where}: {key!r} must be a number, got {entry[key]!r}") from None

def _shading(entry: Dict[str, Any], where: str) -> Dict[str, float]:
    shading = {}
    if "material" in entry:
        if not isinstance(entry["material"], str):
            raise SceneFormatError(f"{where}: 'material' must be a preset name, got {entry['material']!r}")
        try:
            shading.update(PhongPresets.by_name(entry["material"]))
        except KeyError as e:
            raise SceneFormatError(f"{where}: {e.args[0]}") from None
    for key in SHADING_KEYS:
        if key in entry:
            shading[key] = _number(entry, key, where)
    return shading

def _build_object(entry: Dict[str, Any], index: int, base_dir: str):
    where = f"objects[{index}]"
    kind = entry.get("type", "sphere")
    center = Vector3(*_triple(entry, "position", where))
    radius = _number(entry, "radius", where)
    colour = ColorRGB(*_triple(entry, "colour", where))
    shading = _shading(entry, where)

    try:
        if kind == "sphere":
            return Sphere(center, radius, colour, **shading)
        if kind == "bumpy_sphere":
            if "bump_map" not in entry:
                raise SceneFormatError(f"{where}: bumpy_sphere needs a 'bump_map'")
            if not isinstance(entry["bump_map"], str):
                raise SceneFormatError(f"{where}: 'bump_map' must be a path, got {entry['bump_map']!r}")
            bump_map = os.path.join(base_dir, entry["bump_map"])
            bump_factor = _number(entry, "bump_factor", where, BUMP_FACTOR)
            return BumpySphere.from_image(center, radius, colour, bump_map, bump_factor, **shading)
    except SceneFormatError:
        raise
    except ValueError as e:
        raise SceneFormatError(f"{where}: {e}") from e
    raise SceneFormatError(f"{where}: unknown object type {kind!r}")

def _build_light(entry: Dict[str, Any], index: int) -> PointLight:
    where = f"lights[{index}]"
    try:
        return PointLight(Vector3(*_triple(entry, "position", where)),
                          ColorRGB(*_triple(entry, "colour", where)),
                          _number(entry, "intensity", where))
    except SceneFormatError:
        raise
    except ValueError as e:
        raise SceneFormatError(f"{where}: {e}") from e

def _entries(description: Dict[str, Any], key: str):
    """Yield (index, entry) for a list of JSON objects, rejecting anything else."""
    entries = description.get(key, [])
    if not isinstance(entries, list):
        raise SceneFormatError(f"scene: {key!r} must be a list, got {entries!r}")
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise SceneFormatError(f"{key}[{i}]: expected an object, got {entry!r}")
        yield i, entry

def scene_from_dict(description: Dict[str, Any], base_dir: str = ".") -> Scene:
    """Build a Scene from an already-parsed scene description."""
    if not isinstance(description, dict):
        raise SceneFormatError("scene description must be a JSON object")

    ambient = ColorRGB(*_triple(description, "ambient", "scene")) if "ambient" in description else ColorRGB(0)
    scene = Scene(ambient_lighting=ambient)
    for i, entry in _entries(description, "objects"):
        obj = _build_object(entry, i, base_dir)
        logger.debug("Added %r", obj)
        scene.add_object(obj)
    for i, entry in _entries(description, "lights"):
        light = _build_light(entry, i)
        logger.debug("Added %r", light)
        scene.add_light(light)

    if not scene.point_lights:
        logger.warning("Scene has no point lights; only ambient light will be visible")
    return scene

def load_scene(json_path: str) -> Tuple[Scene, Dict[str, Any]]:
    """
    Load a scene file. Returns the scene and its (possibly empty) "render"
    block of output options.
    """
    with open(json_path, 'r') as f:
        try:
            description = json.load(f)
        except json.JSONDecodeError as e:
            raise SceneFormatError(f"{json_path}: invalid JSON: {e}") from e

    scene = scene_from_dict(description, os.path.dirname(os.path.abspath(json_path)))
    logger.info("Loaded %r from %s", scene, json_path)
    render = description.get("render", {})
    if not isinstance(render, dict):
        raise SceneFormatError(f"{json_path}: 'render' must be an object, got {render!r}")
    return scene, dict(render)
