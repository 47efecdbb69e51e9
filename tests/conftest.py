# tests/conftest.py
import pytest

from claim_sim.domain.geo import GeoPoint, TimedFix, offset


@pytest.fixture
def origin() -> GeoPoint:
    return GeoPoint(31.2304, 121.4737)


@pytest.fixture
def local(origin):
    """Factory: meters east/north of the origin -> GeoPoint list."""

    def _make(*offsets: tuple[float, float]) -> list[GeoPoint]:
        return [offset(origin, e, n) for e, n in offsets]

    return _make


@pytest.fixture
def fix_at(origin):
    """Factory: (east_m, north_m, t) -> TimedFix."""

    def _make(east: float, north: float, t: float, **kw) -> TimedFix:
        return TimedFix(point=offset(origin, east, north), timestamp=t, **kw)

    return _make
