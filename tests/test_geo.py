import pytest

from trackmetrics.analyze.geo import EARTH_RADIUS_M, distance_m, point_distance_m
from conftest import pt


def test_one_degree_of_longitude_on_equator():
    assert distance_m(0.0, 0.0, 0.0, 1.0) == pytest.approx(111_195, rel=0.005)


def test_distance_is_symmetric():
    a = (47.3769, 8.5417)
    b = (46.2044, 6.1432)
    assert distance_m(*a, *b) == pytest.approx(distance_m(*b, *a), rel=1e-12)


def test_distance_to_self_is_zero():
    assert distance_m(51.5, -0.12, 51.5, -0.12) == pytest.approx(0.0, abs=1e-9)


def test_uses_fixed_radius():
    # quarter meridian: pole to equator
    assert distance_m(0.0, 0.0, 90.0, 0.0) == pytest.approx(EARTH_RADIUS_M * 3.141592653589793 / 2)


def test_point_distance_matches_coordinates():
    p0, p1 = pt(0.0), pt(250.0)
    assert point_distance_m(p0, p1) == pytest.approx(250.0, rel=1e-9)
    assert point_distance_m(p0, p1) == distance_m(p0.lat, p0.lon, p1.lat, p1.lon)
