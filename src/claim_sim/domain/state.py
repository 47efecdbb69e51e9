# claim_sim/domain/state.py
from dataclasses import dataclass, field
from enum import Enum

from claim_sim.domain.geo import GeoPoint, TimedFix
from claim_sim.domain.path import TrackedPath
from claim_sim.domain.speed import SpeedState, SpeedVerdict
from claim_sim.domain.validation import ValidationVerdict


class SessionState(Enum):
    IDLE = "idle"
    TRACKING = "tracking"
    CLOSED = "closed"
    ABORTED = "aborted"


class AbortReason(Enum):
    OVERSPEED = "overspeed"
    STOPPED = "stopped"
    POINT_LIMIT = "point_limit"
    DURATION_LIMIT = "duration_limit"


@dataclass
class SessionData:
    """Everything one tracking session mutates. Owned by the engine, guarded by its lock."""

    state: SessionState = SessionState.IDLE
    generation: int = 0  # bumped on start/stop/reset; stale ticks compare against it
    path: TrackedPath = field(default_factory=TrackedPath)
    speed: SpeedState = field(default_factory=SpeedState)
    latest_fix: TimedFix | None = None  # sensor state, survives start/reset
    first_sample_t: float | None = None
    started_at: float | None = None
    last_speed: SpeedVerdict | None = None
    verdict: ValidationVerdict | None = None
    abort_reason: AbortReason | None = None

    def clear(self) -> None:
        self.path.clear()
        self.speed = SpeedState()
        self.first_sample_t = None
        self.started_at = None
        self.last_speed = None
        self.verdict = None
        self.abort_reason = None


@dataclass(frozen=True)
class SessionSnapshot:
    state: SessionState
    generation: int
    points: tuple[GeoPoint, ...]
    closed: bool
    path_version: int
    last_speed: SpeedVerdict | None
    verdict: ValidationVerdict | None
    abort_reason: AbortReason | None
    started_at: float | None

    @property
    def is_tracking(self) -> bool:
        return self.state is SessionState.TRACKING
