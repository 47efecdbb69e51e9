# sim/clock.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo


def kmh_to_mps(v: float) -> float:
    return v / 3.6


@dataclass(frozen=True)
class SimClock:
    """Maps session seconds (fix timestamps, tick times) to wall-clock instants."""

    epoch: datetime  # wall time of t=0; naive means UTC

    @classmethod
    def utc_epoch(cls, y: int, m: int, d: int, hh=0, mm=0, ss=0) -> SimClock:
        return cls(datetime(y, m, d, hh, mm, ss, tzinfo=UTC))

    def _aware(self, dt: datetime) -> datetime:
        return dt if dt.tzinfo else dt.replace(tzinfo=UTC)

    # wall -> session seconds
    def to_sim(self, dt: datetime) -> float:
        return (self._aware(dt) - self._aware(self.epoch)).total_seconds()

    # session seconds -> wall
    def to_wall(self, t: float) -> datetime:
        return self._aware(self.epoch) + timedelta(seconds=t)

    def iso(self, t: float, *, tz: tzinfo | str | None = None) -> str:
        dt = self.to_wall(t)
        if tz is not None:
            if isinstance(tz, str):
                from zoneinfo import ZoneInfo

                tz = ZoneInfo(tz)
            dt = dt.astimezone(tz)
        return dt.isoformat()
