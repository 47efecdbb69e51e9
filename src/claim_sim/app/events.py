# app/events.py
from dataclasses import dataclass, field

from claim_sim.domain.geo import TimedFix
from claim_sim.sim.event import BaseEvent


# Location source
@dataclass(order=True)
class LocationFixed(BaseEvent):
    fix: TimedFix = field(compare=False)


# Tick source; generation ties the tick to the session that scheduled it
@dataclass(order=True)
class SamplerTick(BaseEvent):
    generation: int


# Session commands
@dataclass(order=True)
class SessionStart(BaseEvent):
    pass


@dataclass(order=True)
class SessionStop(BaseEvent):
    pass


@dataclass(order=True)
class SessionReset(BaseEvent):
    pass
