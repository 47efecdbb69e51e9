# runtime/registries.py
from collections.abc import Callable

from claim_sim.app.protocols import SpeedEstimator
from claim_sim.config.models import (
    SpeedEstimatorDerivedModel,
    SpeedEstimatorReportedModel,
    SpeedEstimatorUnion,
)
from claim_sim.domain.speed import DerivedSpeed, ReportedSpeed

SpeedEstimatorFactory = Callable[[SpeedEstimatorUnion], SpeedEstimator]

_speed_estimator_registry: dict[str, SpeedEstimatorFactory] = {}


# ------------------- Speed estimator registry ---------------------------


def register_speed_estimator(kind: str):
    def deco(fn: SpeedEstimatorFactory):
        _speed_estimator_registry[kind] = fn
        return fn

    return deco


def make_speed_estimator(cfg: SpeedEstimatorUnion) -> SpeedEstimator:
    try:
        factory = _speed_estimator_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown speed estimator kind {cfg.kind!r}") from None
    return factory(cfg)


@register_speed_estimator("derived")
def _make_derived(cfg: SpeedEstimatorDerivedModel):
    return DerivedSpeed()


@register_speed_estimator("reported")
def _make_reported(cfg: SpeedEstimatorReportedModel):
    return ReportedSpeed()
