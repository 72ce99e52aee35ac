from __future__ import annotations

import math

import pytest

from factories import north_of

from poi_graph.ontology.geo import haversine_m


def test_zero_distance():
    assert haversine_m(40.0, -73.0, 40.0, -73.0) == 0.0


@pytest.mark.parametrize(
    "a,b",
    [
        ((40.7550, -73.9840), (40.7551, -73.9839)),
        ((51.5, -0.12), (48.85, 2.35)),
        ((-33.86, 151.2), (35.68, 139.69)),
        ((0.0, 179.9), (0.0, -179.9)),
    ],
)
def test_symmetry(a, b):
    ab = haversine_m(*a, *b)
    ba = haversine_m(*b, *a)
    assert ab == pytest.approx(ba, rel=1e-6)


def test_meridian_distance_matches_arc_length():
    lat2 = north_of(40.0, 450.0)
    assert haversine_m(40.0, -73.0, lat2, -73.0) == pytest.approx(450.0, abs=1e-6)


def test_known_city_pair():
    # London -> Paris is roughly 343 km on a sphere
    d = haversine_m(51.5074, -0.1278, 48.8566, 2.3522)
    assert 340_000 < d < 346_000


def test_radius_scales_linearly():
    d1 = haversine_m(10.0, 10.0, 11.0, 11.0, radius_m=1.0)
    d2 = haversine_m(10.0, 10.0, 11.0, 11.0, radius_m=2.0)
    assert d2 == pytest.approx(2 * d1)
    assert not math.isnan(d1)


def test_scenario_distances():
    assert 10 < haversine_m(40.7550, -73.9840, 40.7551, -73.9839) < 20
    assert 130 < haversine_m(40.7550, -73.9840, 40.7560, -73.9830) < 150


def test_near_antipodal_pairs_stay_in_domain():
    half_circumference = math.pi * 6_371_000.0
    for i in range(0, 2001):
        lat = i * 0.045
        d = haversine_m(lat, 0.0, -lat, 180.0)
        assert d == pytest.approx(half_circumference, rel=1e-6)
        assert haversine_m(-lat, 180.0, lat, 0.0) == pytest.approx(d, rel=1e-6)


def test_exact_antipode():
    assert haversine_m(1.215, 0.0, -1.215, 180.0) == pytest.approx(math.pi * 6_371_000.0, rel=1e-9)
