# claim_sim/app/controllers/session.py

from claim_sim.app.engine import TerritoryEngine
from claim_sim.app.events import (
    LocationFixed,
    SamplerTick,
    SessionReset,
    SessionStart,
    SessionStop,
)
from claim_sim.domain.state import SessionState


class SessionHandler:
    """Kernel-side adapter: turns replayed fixes, ticks and commands into engine calls."""

    def __init__(self, engine: TerritoryEngine, tick_interval_s: float | None = None):
        self.engine = engine
        self.tick_interval_s = tick_interval_s or engine.tick_interval_s

    def _next_tick(self, now: float, generation: int) -> SamplerTick:
        return SamplerTick(t=now + self.tick_interval_s, generation=generation)

    def on_location_fixed(self, ev: LocationFixed):
        self.engine.on_fix(ev.fix)
        return []

    def on_session_start(self, ev: SessionStart):
        gen = self.engine.start(started_at=ev.t)
        return [self._next_tick(ev.t, gen)]

    def on_session_stop(self, ev: SessionStop):
        self.engine.stop()
        return []

    def on_session_reset(self, ev: SessionReset):
        self.engine.reset()
        return []

    def on_sampler_tick(self, ev: SamplerTick):
        # stale ticks (session stopped, restarted or finished since scheduling) die here
        if ev.generation != self.engine.generation:
            return []
        self.engine.on_tick(ev.generation)
        if self.engine.state is SessionState.TRACKING and ev.generation == self.engine.generation:
            return [self._next_tick(ev.t, ev.generation)]
        return []
