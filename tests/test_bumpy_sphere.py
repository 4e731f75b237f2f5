"""Tests for bump-mapped sphere normals."""

import logging
import pickle

import numpy as np
import pytest
from PIL import Image

from core.color import ColorRGB
from core.ray import Ray
from core.vector import Vector3
from geometry.bumpy_sphere import BUMP_FACTOR, BumpySphere
from geometry.sphere import Sphere

CENTER = Vector3(1, -2, 3)
RADIUS = 1.5


def surface_points(count=60):
    """Points spread over the sphere surface, avoiding nothing in particular."""
    golden = np.pi * (3.0 - np.sqrt(5.0))
    for i in range(count):
        y = 1 - 2 * (i + 0.5) / count
        r = np.sqrt(1 - y * y)
        theta = golden * i
        yield CENTER + Vector3(np.cos(theta) * r, y, np.sin(theta) * r) * RADIUS


def test_flat_height_field_matches_sphere_normal():
    plain = Sphere(CENTER, RADIUS, ColorRGB(1))
    bumpy = BumpySphere(CENTER, RADIUS, ColorRGB(1), np.zeros((32, 64)))
    for p in surface_points():
        assert tuple(bumpy.normal_at(p)) == pytest.approx(tuple(plain.normal_at(p)), abs=1e-12)


def test_constant_height_field_matches_sphere_normal():
    plain = Sphere(CENTER, RADIUS, ColorRGB(1))
    bumpy = BumpySphere(CENTER, RADIUS, ColorRGB(1), np.full((16, 16), 0.7))
    for p in surface_points():
        assert tuple(bumpy.normal_at(p)) == pytest.approx(tuple(plain.normal_at(p)), abs=1e-12)


def test_heights_are_scaled_by_bump_factor():
    heights = np.array([[0.0, 0.5], [1.0, 0.25]])
    bumpy = BumpySphere(CENTER, RADIUS, ColorRGB(1), heights)
    np.testing.assert_allclose(bumpy.bump_map, heights * BUMP_FACTOR)
    assert (bumpy.bump_map_height, bumpy.bump_map_width) == (2, 2)


def test_bump_map_is_read_only():
    bumpy = BumpySphere(CENTER, RADIUS, ColorRGB(1), np.zeros((4, 4)))
    with pytest.raises(ValueError):
        bumpy.bump_map[0, 0] = 1.0


def test_bump_map_stays_read_only_after_pickling():
    heights = np.linspace(0, 1, 12).reshape(3, 4)
    bumpy = pickle.loads(pickle.dumps(BumpySphere(CENTER, RADIUS, ColorRGB(1), heights, bump_factor=2.0)))
    np.testing.assert_allclose(bumpy.bump_map, heights * 2.0)
    with pytest.raises(ValueError):
        bumpy.bump_map[0, 0] = 1.0


def test_horizontal_gradient_tilts_normal():
    # Heights rise with column; at the +x equator point the normal leans to -z
    heights = np.tile(np.linspace(0.0, 1.0, 9), (8, 1))
    bumpy = BumpySphere(Vector3(0, 0, 0), 1.0, ColorRGB(1), heights)
    n = bumpy.normal_at(Vector3(1, 0, 0))
    assert n.length() == pytest.approx(1.0)
    # B_v = -(5 / 8) per column
    expected = 1.0 / np.sqrt(1.0 + 0.625 ** 2)
    assert n.x == pytest.approx(expected)
    assert n.z == pytest.approx(-0.625 * expected)


def test_out_of_range_lookup_returns_sphere_normal():
    heights = np.tile(np.linspace(0.0, 1.0, 9), (8, 1))
    bumpy = BumpySphere(Vector3(0, 0, 0), 1.0, ColorRGB(1), heights)
    # Just below the equator maps past the last bump map row
    p = Vector3(1, -1e-9, 0)
    assert tuple(bumpy.normal_at(p)) == pytest.approx(tuple(p.normalize()))


def test_intersection_is_unchanged_by_bumps():
    bumpy = BumpySphere(Vector3(0, 0, 0), 2.0, ColorRGB(1), np.random.default_rng(0).random((16, 32)))
    hit = bumpy.intersection_with(Ray(Vector3(0, 0, -10), Vector3(0, 0, 1)))
    assert hit.distance == pytest.approx(8.0)
    assert hit.normal.length() == pytest.approx(1.0)


def test_from_image_reads_grayscale(tmp_path):
    pixels = np.array([[0, 255], [51, 102]], dtype=np.uint8)
    path = tmp_path / "bumps.png"
    Image.fromarray(pixels).save(path)

    bumpy = BumpySphere.from_image(CENTER, RADIUS, ColorRGB(1), str(path), bump_factor=2.0)
    assert bumpy.has_bump_map
    np.testing.assert_allclose(bumpy.bump_map, pixels / 255.0 * 2.0)


def test_from_image_uses_blue_channel_of_colour_images(tmp_path):
    pixels = np.zeros((2, 2, 3), dtype=np.uint8)
    pixels[..., 0] = 200
    pixels[..., 2] = 51
    path = tmp_path / "bumps_rgb.png"
    Image.fromarray(pixels).save(path)

    bumpy = BumpySphere.from_image(CENTER, RADIUS, ColorRGB(1), str(path))
    np.testing.assert_allclose(bumpy.bump_map, np.full((2, 2), 0.2 * BUMP_FACTOR))


def test_missing_image_falls_back_to_smooth_normals(tmp_path, caplog):
    with caplog.at_level(logging.ERROR, logger="geometry.bumpy_sphere"):
        bumpy = BumpySphere.from_image(CENTER, RADIUS, ColorRGB(1), str(tmp_path / "missing.png"))

    assert not bumpy.has_bump_map
    assert "Error creating bump map" in caplog.text
    plain = Sphere(CENTER, RADIUS, ColorRGB(1))
    for p in surface_points(10):
        assert bumpy.normal_at(p) == plain.normal_at(p)


def test_unreadable_image_falls_back(tmp_path, caplog):
    path = tmp_path / "not_an_image.png"
    path.write_text("definitely not a png")
    with caplog.at_level(logging.ERROR, logger="geometry.bumpy_sphere"):
        bumpy = BumpySphere.from_image(CENTER, RADIUS, ColorRGB(1), str(path))
    assert not bumpy.has_bump_map
    assert str(path) in caplog.text
