# io/engine_logging.py
import json
import logging
import sys

from claim_sim.domain.speed import SpeedVerdictKind
from claim_sim.io.business_events import (
    FixRejectedBiz,
    PathClosedBiz,
    PointRecordedBiz,
    SessionEndedBiz,
    SessionStartedBiz,
    SpeedFlaggedBiz,
    TerritoryValidatedBiz,
)
from claim_sim.io.recorder import Recorder
from claim_sim.sim.clock import SimClock
from claim_sim.sim.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def _default_json_logger(name="claim_sim", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class EngineLogging(NoopHooks):
    """
    One place to shape and emit structured logs for the replay kernel and the
    tracking engine, and to forward business events to the recorder.
    """

    def __init__(
        self,
        run_id: str = "local",
        clock: SimClock | None = None,
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.clock, self.debug, self.sample_every = (
            run_id,
            clock,
            debug,
            max(1, sample_every),
        )
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self._t: float | None = None  # session time of the latest fix/event seen
        self._ticks = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        t = extra.get("t", self._t)
        if self.clock and t is not None:
            payload["wall"] = self.clock.iso(t)
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def _biz(self, ev):
        if self.recorder:
            self.recorder.emit(ev)

    # --------------- kernel lifecycle -----------------------

    def run_start(self, *, until, max_events, qsize):
        self._emit("INFO", "run_start", until=until, max_events=max_events, qsize=qsize)

    def run_end(self, *, processed, **extra):
        self._emit("INFO", "run_end", processed=processed, **extra)

    def dispatch_start(self, ev, *, seq, qsize, handlers):
        self._t = ev.t
        self._ticks += 1
        if self.debug and (self._ticks % self.sample_every) == 0:
            self._emit("DEBUG", type(ev).__name__, t=ev.t, seq=seq, qsize=qsize, handlers=handlers)

    def error(self, ev, *, reason: str, **extra):
        self._emit("ERROR", "kernel_error", event=type(ev).__name__, reason=reason, **extra)

    # --------------- engine ---------------------------------

    def session_start(self, *, generation, started_at):
        if started_at is not None:
            self._t = started_at
        self._emit("INFO", "session_start", generation=generation)
        self._biz(SessionStartedBiz(self.run_id, self._t, "session_start", generation))

    def session_end(self, *, generation, state, reason, points):
        reason_s = reason.value if reason else None
        level = "WARNING" if reason_s and reason_s != "stopped" else "INFO"
        self._emit(
            level, "session_end", generation=generation, state=state.value, reason=reason_s, points=points
        )
        self._biz(SessionEndedBiz(self.run_id, self._t, "session_end", state.value, points, reason_s))

    def fix_rejected(self, fix, *, reason: str):
        lat, lon = fix.point.latitude, fix.point.longitude
        self._emit("WARNING", "fix_rejected", reason=reason, lat=lat, lon=lon)
        self._biz(FixRejectedBiz(self.run_id, self._t, "fix_rejected", reason, lat, lon))

    def speed_checked(self, fix, *, verdict):
        self._t = fix.timestamp
        if verdict.kind is SpeedVerdictKind.NORMAL:
            if self.debug:
                self._emit("DEBUG", "speed_ok", speed_kmh=verdict.speed_kmh)
            return
        level = "ERROR" if verdict.kind is SpeedVerdictKind.ABORT else "WARNING"
        self._emit(level, "speed_" + verdict.kind.value, speed_kmh=verdict.speed_kmh)
        self._biz(
            SpeedFlaggedBiz(self.run_id, self._t, "speed_flagged", verdict.kind.value, verdict.speed_kmh)
        )

    def point_recorded(self, fix, *, index, version):
        lat, lon = fix.point.latitude, fix.point.longitude
        self._emit("DEBUG", "point_recorded", index=index, lat=lat, lon=lon)
        self._biz(PointRecordedBiz(self.run_id, fix.timestamp, "point_recorded", index, lat, lon))

    def path_closed(self, *, points, distance_m):
        self._emit("INFO", "path_closed", points=points, distance_to_start_m=distance_m)
        self._biz(PathClosedBiz(self.run_id, self._t, "path_closed", points, distance_m))

    def validated(self, verdict, *, points):
        reason = type(verdict.reason).__name__ if verdict.reason else None
        message = verdict.reason.message if verdict.reason else None
        if verdict.valid:
            self._emit("INFO", "territory_valid", area_m2=round(verdict.area_m2, 1), points=points)
        else:
            self._emit("WARNING", "territory_invalid", reason=reason, detail=message, points=points)
        self._biz(
            TerritoryValidatedBiz(
                self.run_id, self._t, "territory_validated", verdict.valid, verdict.area_m2, reason, message
            )
        )
