# claim_sim/app/engine.py
import math
import threading

from claim_sim.domain.closure import ClosureDetector
from claim_sim.domain.geo import TimedFix, is_finite_point
from claim_sim.domain.path import PathRecorder, TrackedPath
from claim_sim.domain.speed import SpeedGuard, SpeedVerdict, SpeedVerdictKind
from claim_sim.domain.state import AbortReason, SessionData, SessionSnapshot, SessionState
from claim_sim.domain.validation import TerritoryValidator, ValidationVerdict
from claim_sim.sim.hooks import EngineHooks, NoopHooks


class TerritoryEngine:
    """
    Single owner of one tracking session.

    Fixes arrive through `on_fix` (push, irregular); `on_tick` samples the latest fix on a
    fixed cadence and runs speed guard -> recorder -> closure -> validation. Both entry
    points, the session commands and the observers take the same lock, so the location
    callback and the timer may run on different threads.

    State machine: IDLE -> TRACKING -> {CLOSED, ABORTED}; only `reset` returns to IDLE
    (`start` resets first). Every transition out of TRACKING bumps `generation`, which
    makes ticks scheduled for the old session harmless.

    The engine installs itself as the closure detector's `on_closed` callback; a callback
    already set on a detector passed in is kept and runs after the verdict is stored.
    """

    def __init__(
        self,
        *,
        guard: SpeedGuard | None = None,
        recorder_min_distance_m: float = 10.0,
        closure: ClosureDetector | None = None,
        validator: TerritoryValidator | None = None,
        tick_interval_s: float = 2.0,
        max_points: int = 500,
        max_duration_s: float = 3600.0,
        max_accuracy_m: float | None = None,
        hooks: EngineHooks | None = None,
    ):
        self._lock = threading.RLock()
        self._data = SessionData()
        self.guard = guard or SpeedGuard()
        self.recorder = PathRecorder(self._data.path, min_distance_m=recorder_min_distance_m)
        self.closure = closure or ClosureDetector()
        self._forward_closed = self.closure.on_closed
        self.closure.on_closed = self._on_closed
        self.validator = validator or TerritoryValidator()
        self.tick_interval_s = tick_interval_s
        self.max_points = max_points
        self.max_duration_s = max_duration_s
        self.max_accuracy_m = max_accuracy_m
        self.hooks = hooks or NoopHooks()

    # ---------------- session commands ------------------------

    def start(self, started_at: float | None = None) -> int:
        with self._lock:
            d = self._data
            d.clear()
            d.generation += 1
            d.state = SessionState.TRACKING
            if started_at is None and d.latest_fix is not None:
                started_at = d.latest_fix.timestamp
            d.started_at = started_at
            self.hooks.session_start(generation=d.generation, started_at=started_at)
            return d.generation

    def stop(self) -> None:
        with self._lock:
            if self._data.state is SessionState.TRACKING:
                self._abort(AbortReason.STOPPED)

    def reset(self) -> None:
        with self._lock:
            d = self._data
            d.clear()
            d.generation += 1
            d.state = SessionState.IDLE

    # ---------------- inputs ------------------------------------

    def on_fix(self, fix: TimedFix) -> bool:
        """Store `fix` as the latest raw observation. Returns False if it was rejected."""
        with self._lock:
            if not (is_finite_point(fix.point) and math.isfinite(fix.timestamp)):
                self.hooks.fix_rejected(fix, reason="non_finite")
                return False
            if (
                self.max_accuracy_m is not None
                and fix.accuracy_m is not None
                and not fix.accuracy_m <= self.max_accuracy_m
            ):
                self.hooks.fix_rejected(fix, reason="low_accuracy")
                return False
            self._data.latest_fix = fix
            return True

    def on_tick(self, generation: int | None = None) -> bool:
        """Sample the latest fix. Returns True if a point was appended to the path."""
        with self._lock:
            d = self._data
            if generation is not None and generation != d.generation:
                return False
            if d.state is not SessionState.TRACKING or d.latest_fix is None:
                return False
            fix = d.latest_fix

            # the raw fix outlives sessions; anything older than this start is not ours
            if d.started_at is not None and fix.timestamp < d.started_at:
                return False
            if d.first_sample_t is None:
                d.first_sample_t = fix.timestamp
            t0 = d.started_at if d.started_at is not None else d.first_sample_t
            if fix.timestamp - t0 > self.max_duration_s:
                self._abort(AbortReason.DURATION_LIMIT)
                return False

            verdict = self.guard.evaluate(fix, d.speed)
            d.last_speed = verdict
            self.hooks.speed_checked(fix, verdict=verdict)
            if verdict.kind is SpeedVerdictKind.ABORT:
                self._abort(AbortReason.OVERSPEED)
                return False
            if verdict.kind is SpeedVerdictKind.WARN:
                return False

            recorded = self.recorder.try_record(fix)
            if recorded:
                self.hooks.point_recorded(
                    fix, index=len(d.path) - 1, version=d.path.version
                )
            # runs on every normal tick, recorded or not; it measures the recorded path only
            if not self.closure.check(d.path) and len(d.path) >= self.max_points:
                self._abort(AbortReason.POINT_LIMIT)
            return recorded

    # ---------------- observations --------------------------------

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            d = self._data
            return SessionSnapshot(
                state=d.state,
                generation=d.generation,
                points=tuple(d.path.points),
                closed=d.path.closed,
                path_version=d.path.version,
                last_speed=d.last_speed,
                verdict=d.verdict,
                abort_reason=d.abort_reason,
                started_at=d.started_at,
            )

    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._data.state

    @property
    def generation(self) -> int:
        with self._lock:
            return self._data.generation

    @property
    def points(self) -> tuple:
        with self._lock:
            return tuple(self._data.path.points)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._data.path.closed

    @property
    def last_speed_verdict(self) -> SpeedVerdict | None:
        with self._lock:
            return self._data.last_speed

    @property
    def verdict(self) -> ValidationVerdict | None:
        with self._lock:
            return self._data.verdict

    # ---------------- internals -----------------------------------

    def _on_closed(self, path: TrackedPath) -> None:
        # runs inside on_tick, lock held
        d = self._data
        self.hooks.path_closed(points=len(path), distance_m=self.closure.last_distance_m)
        d.verdict = self.validator.validate(path)
        self.hooks.validated(d.verdict, points=len(path))
        self._finish(SessionState.CLOSED)
        if self._forward_closed:
            self._forward_closed(path)

    def _abort(self, reason: AbortReason) -> None:
        self._data.abort_reason = reason
        self._finish(SessionState.ABORTED)

    def _finish(self, state: SessionState) -> None:
        d = self._data
        d.state = state
        d.generation += 1
        self.hooks.session_end(
            generation=d.generation,
            state=state,
            reason=d.abort_reason,
            points=len(d.path),
        )
