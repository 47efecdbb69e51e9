# sim/hooks.py
from typing import Protocol

from claim_sim.sim.event import BaseEvent


class KernelHooks(Protocol):
    def run_start(
        self,
        *,
        until,
        max_events,
        qsize,
    ): ...
    def run_end(self, *, processed, last_t, qsize, wall_ms): ...
    def schedule(self, ev: BaseEvent, *, now, qsize): ...
    def dispatch_start(self, ev: BaseEvent, *, seq, qsize, handlers): ...
    def dispatch_end(self, ev: BaseEvent, *, out_events, ms): ...
    def error(self, ev: BaseEvent, *, reason: str, **kw): ...


class EngineHooks(Protocol):
    def session_start(self, *, generation, started_at): ...
    def session_end(self, *, generation, state, reason, points): ...
    def fix_rejected(self, fix, *, reason: str): ...
    def speed_checked(self, fix, *, verdict): ...
    def point_recorded(self, fix, *, index, version): ...
    def path_closed(self, *, points, distance_m): ...
    def validated(self, verdict, *, points): ...


class NoopHooks:
    # kernel
    def run_start(self, **_):
        pass

    def run_end(self, **_):
        pass

    def schedule(self, *_, **__):
        pass

    def dispatch_start(self, *_, **__):
        pass

    def dispatch_end(self, *_, **__):
        pass

    def error(self, *_, **__):
        pass

    # engine
    def session_start(self, **_):
        pass

    def session_end(self, **_):
        pass

    def fix_rejected(self, *_, **__):
        pass

    def speed_checked(self, *_, **__):
        pass

    def point_recorded(self, *_, **__):
        pass

    def path_closed(self, **_):
        pass

    def validated(self, *_, **__):
        pass
