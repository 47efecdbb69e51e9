# claim_sim/domain/geo.py
import math
from collections.abc import Sequence
from dataclasses import dataclass

EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class GeoPoint:
    latitude: float  # WGS-84 degrees
    longitude: float


@dataclass(frozen=True)
class TimedFix:
    point: GeoPoint
    timestamp: float  # seconds on the session time base
    accuracy_m: float | None = None  # horizontal accuracy reported by the sensor
    speed_mps: float | None = None  # sensor speed; negative => unknown


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float


def is_finite_point(p: GeoPoint) -> bool:
    return math.isfinite(p.latitude) and math.isfinite(p.longitude)


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters (haversine). Non-finite input yields 0."""
    if not (is_finite_point(a) and is_finite_point(b)):
        return 0.0
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))


def path_length(points: Sequence[GeoPoint]) -> float:
    return sum(distance(points[i], points[i + 1]) for i in range(len(points) - 1))


def polygon_area(points: Sequence[GeoPoint]) -> float:
    """
    Area in m² of the ring through `points` (last wraps to first).

    Spherical shoelace: sum (lon2 - lon1) * (2 + sin(lat1) + sin(lat2)), scaled by R²/2.
    Good for claims up to a few km²; not meant for larger polygons.
    """
    n = len(points)
    if n < 3 or not all(is_finite_point(p) for p in points):
        return 0.0
    acc = 0.0
    for i in range(n):
        p, q = points[i], points[(i + 1) % n]
        lat1, lon1 = math.radians(p.latitude), math.radians(p.longitude)
        lat2, lon2 = math.radians(q.latitude), math.radians(q.longitude)
        acc += (lon2 - lon1) * (2 + math.sin(lat1) + math.sin(lat2))
    return abs(acc * EARTH_RADIUS_M * EARTH_RADIUS_M / 2.0)


def _orientation(a: GeoPoint, b: GeoPoint, c: GeoPoint) -> float:
    # x = longitude, y = latitude
    return (b.longitude - a.longitude) * (c.latitude - a.latitude) - (
        b.latitude - a.latitude
    ) * (c.longitude - a.longitude)


def _opposite(u: float, v: float) -> bool:
    return (u > 0 and v < 0) or (u < 0 and v > 0)


def segments_intersect(p1: GeoPoint, p2: GeoPoint, p3: GeoPoint, p4: GeoPoint) -> bool:
    """Strict crossing of p1-p2 and p3-p4. Touching or collinear segments do not count."""
    d1 = _orientation(p3, p4, p1)
    d2 = _orientation(p3, p4, p2)
    d3 = _orientation(p1, p2, p3)
    d4 = _orientation(p1, p2, p4)
    return _opposite(d1, d2) and _opposite(d3, d4)


def offset(origin: GeoPoint, east_m: float, north_m: float) -> GeoPoint:
    """Displace `origin` on the local tangent plane."""
    dlat = math.degrees(north_m / EARTH_RADIUS_M)
    dlon = math.degrees(east_m / (EARTH_RADIUS_M * math.cos(math.radians(origin.latitude))))
    return GeoPoint(origin.latitude + dlat, origin.longitude + dlon)


def bounding_box(points: Sequence[GeoPoint]) -> BoundingBox:
    if not points:
        return BoundingBox(0.0, 0.0, 0.0, 0.0)
    lats = [p.latitude for p in points]
    lons = [p.longitude for p in points]
    return BoundingBox(min(lats), max(lats), min(lons), max(lons))
