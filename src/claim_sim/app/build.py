# claim_sim/app/build.py
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from claim_sim.app.controllers.session import SessionHandler
from claim_sim.app.engine import TerritoryEngine
from claim_sim.app.events import LocationFixed, SessionStart
from claim_sim.app.wiring import wire
from claim_sim.config.models import ScenarioModel
from claim_sim.domain.state import SessionSnapshot, SessionState
from claim_sim.io.engine_logging import EngineLogging  # JSON logs
from claim_sim.io.recorder import JsonlSink, Recorder, Sink
from claim_sim.runtime.engine_factory import build_engine
from claim_sim.sim.clock import SimClock
from claim_sim.sim.hooks import NoopHooks
from claim_sim.sim.kernel import Kernel
from claim_sim.sim.rng import RNGRegistry
from claim_sim.sim.walk import WalkSynthesizer


@dataclass
class App:
    model: ScenarioModel
    kernel: Kernel
    clock: SimClock
    rng: RNGRegistry
    engine: TerritoryEngine
    session: SessionHandler
    recorder: Recorder
    walk: WalkSynthesizer | None = None

    def run(self, until: float | None = None) -> SessionSnapshot:
        """Replay until the session leaves TRACKING or the horizon is reached."""
        horizon = self.model.sim.duration if until is None else until
        self.kernel.run(
            until=horizon,
            stop_when=lambda: self.engine.state in (SessionState.CLOSED, SessionState.ABORTED),
        )
        return self.engine.snapshot()


def build(
    cfg: ScenarioModel | Mapping,
    *,
    use_logging: bool = True,
    sinks: list[Sink] | None = None,
    logger: logging.Logger | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Clock & RNG
    clock = SimClock.utc_epoch(*model.sim.epoch)
    rng_registry = RNGRegistry(model.sim.seed, scenario=model.name)

    # 2) Hooks shared by kernel and engine
    recorder = Recorder(*(sinks or [JsonlSink()]))
    hooks = (
        EngineLogging(
            run_id=model.run_id,
            clock=clock,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
            logger=logger,
            recorder=recorder,
        )
        if use_logging
        else NoopHooks()
    )
    kernel = Kernel(hooks=hooks)

    # 3) Engine & handler
    engine = build_engine(model.tracking, hooks=hooks)
    session = SessionHandler(engine)

    # 4) Wiring
    wire(kernel, session=session)

    # 5) Seed the replay: start the session, then feed the scripted walk
    walk = None
    if model.walk is not None:
        walk = WalkSynthesizer(model.walk, rng_registry=rng_registry)
        kernel.schedule(SessionStart(t=model.walk.start_t))
        kernel.schedule_all(LocationFixed(t=f.timestamp, fix=f) for f in walk.fixes())

    return App(model, kernel, clock, rng_registry, engine, session, recorder, walk)
