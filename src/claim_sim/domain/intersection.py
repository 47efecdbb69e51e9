# claim_sim/domain/intersection.py
from collections.abc import Sequence

from claim_sim.domain.geo import GeoPoint, segments_intersect
from claim_sim.domain.path import TrackedPath


class SelfIntersectionChecker:
    """
    Pairwise scan of the open polyline for crossings.

    Lat/lon are treated as planar coordinates, which is fine at the scale of one claim.
    Pairs with i among the first `skip_head` segments and j among the last `skip_tail`
    segments are not compared: a closing path legitimately comes back next to its start.
    """

    def __init__(self, *, skip_head: int = 2, skip_tail: int = 2):
        self.skip_head, self.skip_tail = skip_head, skip_tail

    def find_self_intersection(self, points: Sequence[GeoPoint]) -> tuple[int, int] | None:
        """Return the first crossing segment pair (i, j), or None."""
        if len(points) < 4:
            return None
        n_seg = len(points) - 1
        for i in range(n_seg):
            p1, p2 = points[i], points[i + 1]
            for j in range(i + 2, n_seg):
                if i < self.skip_head and j >= n_seg - self.skip_tail:
                    continue
                if segments_intersect(p1, p2, points[j], points[j + 1]):
                    return i, j
        return None

    def has_self_intersection(self, path: TrackedPath | Sequence[GeoPoint]) -> bool:
        points = path.points if isinstance(path, TrackedPath) else path
        return self.find_self_intersection(points) is not None
