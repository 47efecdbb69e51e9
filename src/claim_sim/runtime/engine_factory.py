# claim_sim/runtime/engine_factory.py

from claim_sim.app.engine import TerritoryEngine
from claim_sim.config.models import TrackingModel
from claim_sim.domain.closure import ClosureDetector
from claim_sim.domain.intersection import SelfIntersectionChecker
from claim_sim.domain.speed import SpeedGuard
from claim_sim.domain.validation import TerritoryValidator
from claim_sim.runtime.registries import make_speed_estimator
from claim_sim.sim.hooks import EngineHooks


def build_engine(cfg: TrackingModel | None = None, *, hooks: EngineHooks | None = None) -> TerritoryEngine:
    cfg = cfg or TrackingModel()

    guard = SpeedGuard(
        warn_kmh=cfg.warn_kmh,
        abort_kmh=cfg.abort_kmh,
        estimator=make_speed_estimator(cfg.speed_estimator),
    )
    closure = ClosureDetector(
        min_points=cfg.min_closure_points,
        closure_distance_m=cfg.closure_distance_m,
    )
    validator = TerritoryValidator(
        min_points=cfg.min_closure_points,
        min_total_distance_m=cfg.min_total_distance_m,
        min_area_m2=cfg.min_area_m2,
        intersection=SelfIntersectionChecker(
            skip_head=cfg.skip_head_segments, skip_tail=cfg.skip_tail_segments
        ),
    )

    return TerritoryEngine(
        guard=guard,
        recorder_min_distance_m=cfg.min_record_distance_m,
        closure=closure,
        validator=validator,
        tick_interval_s=cfg.tick_interval_s,
        max_points=cfg.max_points,
        max_duration_s=cfg.max_duration_s,
        max_accuracy_m=cfg.max_accuracy_m,
        hooks=hooks,
    )
