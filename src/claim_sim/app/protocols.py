from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from claim_sim.domain.geo import TimedFix


# ------------- Tracking --------------------
@runtime_checkable
class SpeedEstimator(Protocol):
    """
    Estimate movement speed in km/h between the last accepted fix and a new one.
    Return None when no estimate is possible (e.g. zero elapsed time); the guard
    treats that as normal movement.
    """

    def speed_kmh(self, last: TimedFix, new: TimedFix) -> float | None: ...


@runtime_checkable
class FixSource(Protocol):
    """
    Responsibilities:
      • Produce raw location observations in timestamp order.
      • Own everything sensor-side (permissions, accuracy settings); the engine never asks.
    """

    def fixes(self) -> Iterable[TimedFix]: ...


# --------------- Collaborators -------------------------


@runtime_checkable
class ClaimSink(Protocol):
    """External storage for accepted claims. Persistence is not done by this package."""

    def save(self, record) -> None: ...
