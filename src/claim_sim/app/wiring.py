# claim_sim/app/wiring.py
from claim_sim.app.controllers.session import SessionHandler
from claim_sim.app.events import (
    LocationFixed,
    SamplerTick,
    SessionReset,
    SessionStart,
    SessionStop,
)
from claim_sim.sim.kernel import Kernel


def wire(kernel: Kernel, *, session: SessionHandler) -> None:
    k = kernel

    # inputs
    k.on(LocationFixed, session.on_location_fixed)  # push: latest raw fix
    k.on(SamplerTick, session.on_sampler_tick)  # pull: sample + reschedule while tracking

    # commands
    k.on(SessionStart, session.on_session_start)
    k.on(SessionStop, session.on_session_stop)
    k.on(SessionReset, session.on_session_reset)
