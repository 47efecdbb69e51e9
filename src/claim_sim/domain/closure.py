# claim_sim/domain/closure.py
from collections.abc import Callable

from claim_sim.domain.geo import distance
from claim_sim.domain.path import TrackedPath

OnClosed = Callable[[TrackedPath], None]


class ClosureDetector:
    """
    Flips `path.closed` the first time the path returns near its start.

    The flag is one-way: once closed, `check` is a no-op until the path is cleared,
    so `on_closed` runs at most once per path.
    """

    def __init__(
        self,
        *,
        min_points: int = 10,
        closure_distance_m: float = 30.0,
        on_closed: OnClosed | None = None,
    ):
        self.min_points = min_points
        self.closure_distance_m = closure_distance_m
        self.on_closed = on_closed
        self.last_distance_m: float | None = None

    def check(self, path: TrackedPath) -> bool:
        if path.closed or len(path) < self.min_points:
            return False
        self.last_distance_m = distance(path.last, path.first)
        if self.last_distance_m > self.closure_distance_m:
            return False
        path.mark_closed()
        if self.on_closed:
            self.on_closed(path)
        return True
