# claim_sim/io/business_events.py

from dataclasses import dataclass
from typing import Literal


# Base type for analytics events (not scheduled in the kernel!)
@dataclass
class BizEvent:
    run_id: str
    t: float | None  # session time of the fix/tick that caused it
    name: str  # stable event name


@dataclass
class SessionStartedBiz(BizEvent):
    generation: int


@dataclass
class FixRejectedBiz(BizEvent):
    reason: Literal["non_finite", "low_accuracy"]
    lat: float
    lon: float


@dataclass
class SpeedFlaggedBiz(BizEvent):
    kind: Literal["warn", "abort"]
    speed_kmh: float | None


@dataclass
class PointRecordedBiz(BizEvent):
    index: int
    lat: float
    lon: float


@dataclass
class PathClosedBiz(BizEvent):
    points: int
    distance_to_start_m: float | None


@dataclass
class TerritoryValidatedBiz(BizEvent):
    valid: bool
    area_m2: float
    reason: str | None = None  # failure class name
    message: str | None = None


@dataclass
class SessionEndedBiz(BizEvent):
    state: str
    points: int
    reason: str | None = None
