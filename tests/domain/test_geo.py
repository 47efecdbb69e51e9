# tests/domain/test_geo.py
import math

import pytest

from claim_sim.domain.geo import (
    GeoPoint,
    bounding_box,
    distance,
    offset,
    path_length,
    polygon_area,
    segments_intersect,
)

NAN = float("nan")


def test_distance_is_symmetric_and_zero_on_self(origin, local):
    pts = [origin, *local((100, 0), (0, 250), (-37.5, 12.25), (1000, -800))]
    for a in pts:
        assert distance(a, a) == 0.0
        for b in pts:
            assert distance(a, b) == distance(b, a)


def test_distance_matches_arc_length_on_equator():
    a, b = GeoPoint(0.0, 0.0), GeoPoint(0.0, 0.001)
    # R * 0.001° in radians
    assert distance(a, b) == pytest.approx(6_371_000 * math.radians(0.001), rel=1e-9)
    assert distance(a, b) == pytest.approx(111.19, abs=0.01)


def test_distance_over_kilometers_is_not_flat():
    # one degree of latitude
    assert distance(GeoPoint(10.0, 5.0), GeoPoint(11.0, 5.0)) == pytest.approx(111_195, rel=1e-4)


def test_non_finite_input_yields_zero(origin):
    assert distance(origin, GeoPoint(NAN, 121.0)) == 0.0
    assert distance(GeoPoint(31.0, math.inf), origin) == 0.0
    assert polygon_area([origin, GeoPoint(NAN, 0.0), GeoPoint(0.0, 0.0)]) == 0.0


def test_square_area_round_trip():
    square = [
        GeoPoint(0.0, 0.0),
        GeoPoint(0.0, 0.001),
        GeoPoint(0.001, 0.001),
        GeoPoint(0.001, 0.0),
    ]
    assert polygon_area(square) == pytest.approx(111.0**2, rel=0.05)


def test_area_ignores_orientation_and_needs_three_points(origin, local):
    ring = local((0, 0), (80, 0), (80, 50), (0, 50))
    assert polygon_area(ring) == pytest.approx(polygon_area(list(reversed(ring))))
    assert polygon_area(ring) == pytest.approx(4000, rel=0.01)
    assert polygon_area(ring[:2]) == 0.0
    assert polygon_area([]) == 0.0


def test_segments_cross():
    p = GeoPoint
    assert segments_intersect(p(0, 0), p(1, 1), p(0, 1), p(1, 0))
    assert not segments_intersect(p(0, 0), p(1, 1), p(0, 1), p(0.4, 0.6))  # stops short


def test_touching_or_collinear_segments_do_not_count():
    p = GeoPoint
    # shared endpoint (adjacent path segments)
    assert not segments_intersect(p(0, 0), p(1, 1), p(1, 1), p(2, 0))
    # endpoint lying on the other segment
    assert not segments_intersect(p(0, 0), p(0, 2), p(0, 1), p(1, 1))
    # collinear overlap
    assert not segments_intersect(p(0, 0), p(0, 2), p(0, 1), p(0, 3))
    # parallel
    assert not segments_intersect(p(0, 0), p(0, 2), p(1, 0), p(1, 2))


def test_offset_round_trips_through_distance(origin):
    assert distance(origin, offset(origin, 0, 100)) == pytest.approx(100.0, rel=1e-9)
    assert distance(origin, offset(origin, 100, 0)) == pytest.approx(100.0, rel=1e-6)
    assert distance(origin, offset(origin, 30, 40)) == pytest.approx(50.0, rel=1e-5)


def test_path_length_and_bbox(local):
    pts = local((0, 0), (0, 30), (40, 30))
    assert path_length(pts) == pytest.approx(70.0, rel=1e-4)
    assert path_length(pts[:1]) == 0.0

    box = bounding_box(pts)
    assert box.min_lat == pts[0].latitude and box.max_lat == pts[1].latitude
    assert box.min_lon == pts[0].longitude and box.max_lon == pts[2].longitude
    assert bounding_box([]).min_lat == 0.0
