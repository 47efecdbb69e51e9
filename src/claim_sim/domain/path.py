# claim_sim/domain/path.py
from dataclasses import dataclass, field

from claim_sim.domain.geo import GeoPoint, TimedFix, distance


@dataclass
class TrackedPath:
    points: list[GeoPoint] = field(default_factory=list)
    closed: bool = False
    version: int = 0  # bumped on every append / closure, for observers

    def append(self, p: GeoPoint) -> None:
        if self.closed:
            raise RuntimeError("cannot append to a closed path")
        self.points.append(p)
        self.version += 1

    def mark_closed(self) -> None:
        self.closed = True
        self.version += 1

    def clear(self) -> None:
        self.points.clear()
        self.closed = False
        self.version = 0

    @property
    def first(self) -> GeoPoint | None:
        return self.points[0] if self.points else None

    @property
    def last(self) -> GeoPoint | None:
        return self.points[-1] if self.points else None

    def __len__(self) -> int:
        return len(self.points)


class PathRecorder:
    """Appends fixes that moved far enough from the last recorded point."""

    def __init__(self, path: TrackedPath | None = None, *, min_distance_m: float = 10.0):
        self.path = path if path is not None else TrackedPath()
        self.min_distance_m = min_distance_m

    def try_record(self, fix: TimedFix) -> bool:
        # callers only pass fixes that SpeedGuard classified as normal
        if self.path.closed:
            return False
        last = self.path.last
        if last is None or distance(last, fix.point) > self.min_distance_m:
            self.path.append(fix.point)
            return True
        return False
