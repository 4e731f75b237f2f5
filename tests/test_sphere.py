"""Tests for ray/sphere intersection."""

import math

import pytest

from core.color import ColorRGB
from core.errors import DegenerateGeometryError
from core.ray import Ray
from core.vector import Vector3
from geometry.sphere import Sphere


def make_sphere(radius=2.0, center=None):
    return Sphere(center or Vector3(0, 0, 0), radius, ColorRGB(1.0))


def test_default_shading_constants():
    s = make_sphere()
    assert (s.phong_kd, s.phong_ks, s.phong_alpha, s.reflectivity) == (0.8, 1.2, 10, 0.3)


def test_shading_constants_can_be_overridden():
    s = Sphere(Vector3(0, 0, 0), 1, ColorRGB(1), kd=0.5, ks=0.1, alpha=3, reflectivity=0.0)
    assert (s.phong_kd, s.phong_ks, s.phong_alpha, s.reflectivity) == (0.5, 0.1, 3, 0.0)


@pytest.mark.parametrize("radius", [0.5, 2.0, 7.5])
def test_head_on_hit_distance_and_normal(radius):
    hit = make_sphere(radius).intersection_with(Ray(Vector3(0, 0, -10), Vector3(0, 0, 1)))
    assert hit.is_hit
    assert hit.distance == pytest.approx(10 - radius)
    assert hit.location.z == pytest.approx(-radius)
    assert tuple(hit.normal) == pytest.approx((0, 0, -1))


def test_miss_returns_empty_hit():
    hit = make_sphere(1.0).intersection_with(Ray(Vector3(0, 1.5, -10), Vector3(0, 0, 1)))
    assert not hit.is_hit
    assert hit.object_hit is None
    assert math.isinf(hit.distance)


def test_sphere_behind_origin_is_not_hit():
    hit = make_sphere(1.0).intersection_with(Ray(Vector3(0, 0, 10), Vector3(0, 0, 1)))
    assert not hit.is_hit


def test_origin_inside_returns_exit_point():
    hit = make_sphere(2.0).intersection_with(Ray(Vector3(0, 0, 0.5), Vector3(0, 0, 1)))
    assert hit.is_hit
    assert hit.distance == pytest.approx(1.5)
    assert hit.distance > 0
    assert tuple(hit.normal) == pytest.approx((0, 0, 1))


def test_hit_references_the_sphere():
    s = make_sphere()
    hit = s.intersection_with(Ray(Vector3(0, 0, -10), Vector3(0, 0, 1)))
    assert hit.object_hit is s


def test_normal_at_centre_is_degenerate():
    with pytest.raises(DegenerateGeometryError):
        make_sphere().normal_at(Vector3(0, 0, 0))


@pytest.mark.parametrize("radius", [0, -1])
def test_non_positive_radius_rejected(radius):
    with pytest.raises(ValueError):
        make_sphere(radius)


def test_reflectivity_must_be_a_fraction():
    with pytest.raises(ValueError):
        Sphere(Vector3(0, 0, 0), 1, ColorRGB(1), reflectivity=1.5)
