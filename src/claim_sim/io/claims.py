# claim_sim/io/claims.py
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from claim_sim.app.protocols import ClaimSink
from claim_sim.domain.geo import GeoPoint, bounding_box
from claim_sim.domain.state import SessionSnapshot
from claim_sim.sim.clock import SimClock


class ClaimRecord(BaseModel):
    """Payload handed to the external storage collaborator for an accepted claim."""

    model_config = ConfigDict(extra="forbid", frozen=True)
    path: list[dict[str, float]]  # [{"lat": .., "lon": ..}, ...] in walk order
    polygon_wkt: str
    bbox_min_lat: float
    bbox_max_lat: float
    bbox_min_lon: float
    bbox_max_lon: float
    area_m2: float
    point_count: int
    started_at: str | None = None  # ISO-8601 wall time


def path_json(points: Sequence[GeoPoint]) -> list[dict[str, float]]:
    return [{"lat": p.latitude, "lon": p.longitude} for p in points]


def polygon_wkt(points: Sequence[GeoPoint]) -> str:
    """EWKT polygon, lon before lat, ring closed by repeating the first point if needed."""
    ring = list(points)
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    coords = ", ".join(f"{p.longitude} {p.latitude}" for p in ring)
    return f"SRID=4326;POLYGON(({coords}))"


def build_claim_record(snapshot: SessionSnapshot, *, clock: SimClock | None = None) -> ClaimRecord:
    verdict = snapshot.verdict
    if verdict is None or not verdict.valid:
        raise ValueError("only a closed, valid session can become a claim")
    points = snapshot.points
    bbox = bounding_box(points)
    started_at = None
    if snapshot.started_at is not None and clock is not None:
        started_at = clock.iso(snapshot.started_at)
    return ClaimRecord(
        path=path_json(points),
        polygon_wkt=polygon_wkt(points),
        bbox_min_lat=bbox.min_lat,
        bbox_max_lat=bbox.max_lat,
        bbox_min_lon=bbox.min_lon,
        bbox_max_lon=bbox.max_lon,
        area_m2=verdict.area_m2,
        point_count=len(points),
        started_at=started_at,
    )


class MemoryClaimSink(ClaimSink):
    def __init__(self):
        self.records: list[ClaimRecord] = []

    def save(self, record: ClaimRecord) -> None:
        self.records.append(record)
