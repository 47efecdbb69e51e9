# claim_sim/domain/speed.py
import math
from dataclasses import dataclass
from enum import Enum

from claim_sim.app.protocols import SpeedEstimator
from claim_sim.domain.geo import TimedFix, distance

MPS_TO_KMH = 3.6


class SpeedVerdictKind(Enum):
    NORMAL = "normal"
    WARN = "warn"
    ABORT = "abort"


@dataclass(frozen=True)
class SpeedVerdict:
    kind: SpeedVerdictKind
    speed_kmh: float | None = None

    @property
    def is_normal(self) -> bool:
        return self.kind is SpeedVerdictKind.NORMAL

    @property
    def message(self) -> str | None:
        if self.kind is SpeedVerdictKind.ABORT:
            return f"Moving too fast ({self.speed_kmh:.1f} km/h), claim stopped"
        if self.kind is SpeedVerdictKind.WARN:
            return f"Moving fast ({self.speed_kmh:.1f} km/h), please slow down"
        return None


NORMAL = SpeedVerdict(SpeedVerdictKind.NORMAL)


@dataclass
class SpeedState:
    last_fix: TimedFix | None = None


class DerivedSpeed(SpeedEstimator):
    """Speed from the displacement between two fixes."""

    def speed_kmh(self, last: TimedFix, new: TimedFix) -> float | None:
        elapsed = new.timestamp - last.timestamp
        if elapsed <= 0:
            return None  # duplicate or reordered timestamps
        return distance(last.point, new.point) / elapsed * MPS_TO_KMH


class ReportedSpeed(SpeedEstimator):
    """Speed as reported by the location sensor; negative means the sensor had none."""

    def speed_kmh(self, last: TimedFix, new: TimedFix) -> float | None:
        if new.speed_mps is None or not math.isfinite(new.speed_mps) or new.speed_mps < 0:
            return None
        return new.speed_mps * MPS_TO_KMH


class SpeedGuard:
    def __init__(
        self,
        *,
        warn_kmh: float = 15.0,
        abort_kmh: float = 30.0,
        estimator: SpeedEstimator | None = None,
    ):
        self.warn_kmh, self.abort_kmh = warn_kmh, abort_kmh
        self.estimator = estimator or DerivedSpeed()

    def classify(self, speed_kmh: float | None) -> SpeedVerdict:
        if speed_kmh is None:
            return NORMAL
        if speed_kmh > self.abort_kmh:
            return SpeedVerdict(SpeedVerdictKind.ABORT, speed_kmh)
        if speed_kmh > self.warn_kmh:
            return SpeedVerdict(SpeedVerdictKind.WARN, speed_kmh)
        return SpeedVerdict(SpeedVerdictKind.NORMAL, speed_kmh)

    def evaluate(self, new_fix: TimedFix, state: SpeedState) -> SpeedVerdict:
        if state.last_fix is None:
            state.last_fix = new_fix
            return NORMAL
        verdict = self.classify(self.estimator.speed_kmh(state.last_fix, new_fix))
        if verdict.kind is not SpeedVerdictKind.ABORT:
            state.last_fix = new_fix
        return verdict
