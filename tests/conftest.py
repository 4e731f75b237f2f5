"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add the source root to the path
src_root = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_root))

from core.color import ColorRGB  # noqa: E402
from core.vector import Vector3  # noqa: E402
from geometry.light import PointLight  # noqa: E402
from geometry.sphere import Sphere  # noqa: E402
from geometry.world import Scene  # noqa: E402
from renderer.settings import RenderSettings  # noqa: E402


@pytest.fixture
def rng():
    """Seeded generator so sampled results are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def hard_settings():
    """Single-sample settings: deterministic shadows and no depth of field."""
    return RenderSettings.hard_shadows(seed=7)


@pytest.fixture
def lit_scene():
    """One matte sphere in front of the camera, lit from above and behind the camera."""
    scene = Scene(ambient_lighting=ColorRGB(0.05))
    scene.add_object(Sphere(Vector3(0, 0, 5), 1.0, ColorRGB(0.8, 0.3, 0.2), reflectivity=0.0))
    scene.add_light(PointLight(Vector3(0, 4, 0), ColorRGB(1.0), 100))
    return scene
