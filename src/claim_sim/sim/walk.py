# sim/walk.py
import math

from claim_sim.app.protocols import FixSource
from claim_sim.config.models import WalkModel
from claim_sim.domain.geo import GeoPoint, TimedFix, offset
from claim_sim.sim.clock import kmh_to_mps
from claim_sim.sim.rng import RNGRegistry


class WalkSynthesizer(FixSource):
    """
    Emit fixes along a waypoint polyline at constant speed, one every `fix_interval_s`.
    The final waypoint is always emitted. Jitter and dropout are drawn from the
    registry's "walk_jitter" / "walk_dropout" streams so replays are reproducible.
    """

    def __init__(self, cfg: WalkModel, *, rng_registry: RNGRegistry | None = None):
        self.cfg = cfg
        self.origin = GeoPoint(*cfg.origin)
        self.speed_mps = kmh_to_mps(cfg.speed_kmh)
        self.rng_registry = rng_registry or RNGRegistry(0, scenario="walk")

        self._legs: list[tuple[float, float, float, float, float]] = []  # x0, y0, x1, y1, len
        for (x0, y0), (x1, y1) in zip(cfg.waypoints, cfg.waypoints[1:]):
            self._legs.append((x0, y0, x1, y1, math.hypot(x1 - x0, y1 - y0)))
        self.length_m = sum(leg[4] for leg in self._legs)

    def _position(self, s: float) -> tuple[float, float]:
        for x0, y0, x1, y1, L in self._legs:
            if s <= L:
                f = s / L if L > 0 else 0.0
                return x0 + f * (x1 - x0), y0 + f * (y1 - y0)
            s -= L
        x0, y0, x1, y1, _ = self._legs[-1]
        return x1, y1

    def stations(self) -> list[float]:
        """Arc lengths (meters) at which fixes are taken."""
        step = self.speed_mps * self.cfg.fix_interval_s
        n = int(self.length_m // step)
        out = [k * step for k in range(n + 1)]
        if self.length_m - out[-1] > 1e-9:
            out.append(self.length_m)
        return out

    def fixes(self) -> list[TimedFix]:
        cfg = self.cfg
        jitter = self.rng_registry.stream("walk_jitter")
        dropout = self.rng_registry.stream("walk_dropout")
        accuracy = 2.0 * cfg.jitter_m if cfg.jitter_m > 0 else None

        out: list[TimedFix] = []
        for k, s in enumerate(self.stations()):
            if k > 0 and cfg.dropout > 0 and dropout.random() < cfg.dropout:
                continue
            east, north = self._position(s)
            if cfg.jitter_m > 0:
                dx, dy = jitter.normal(0.0, cfg.jitter_m, size=2)
                east, north = east + float(dx), north + float(dy)
            out.append(
                TimedFix(
                    point=offset(self.origin, east, north),
                    timestamp=cfg.start_t + s / self.speed_mps,
                    accuracy_m=accuracy,
                    speed_mps=self.speed_mps,
                )
            )
        return out
