# claim_sim/domain/validation.py
from abc import ABC, abstractmethod
from dataclasses import dataclass

from claim_sim.domain.geo import path_length, polygon_area
from claim_sim.domain.intersection import SelfIntersectionChecker
from claim_sim.domain.path import TrackedPath


# Base type for the closed set of validation failures (reported, never raised)
@dataclass(frozen=True)
class ValidationFailure(ABC):
    @property
    @abstractmethod
    def message(self) -> str: ...


@dataclass(frozen=True)
class TooFewPoints(ValidationFailure):
    count: int
    required: int

    @property
    def message(self) -> str:
        return f"Too few points: {self.count} (need >= {self.required})"


@dataclass(frozen=True)
class InsufficientDistance(ValidationFailure):
    actual: float  # meters walked
    required: float

    @property
    def message(self) -> str:
        return f"Path too short: {self.actual:.0f}m (need >= {self.required:.0f}m)"


@dataclass(frozen=True)
class SelfIntersecting(ValidationFailure):
    @property
    def message(self) -> str:
        return "Path crosses itself, do not walk a figure eight"


@dataclass(frozen=True)
class InsufficientArea(ValidationFailure):
    actual: float  # m²
    required: float

    @property
    def message(self) -> str:
        return f"Area too small: {self.actual:.0f}m² (need >= {self.required:.0f}m²)"


@dataclass(frozen=True)
class ValidationVerdict:
    valid: bool
    reason: ValidationFailure | None = None
    area_m2: float = 0.0

    @classmethod
    def ok(cls, area_m2: float) -> "ValidationVerdict":
        return cls(True, None, area_m2)

    @classmethod
    def fail(cls, reason: ValidationFailure, area_m2: float = 0.0) -> "ValidationVerdict":
        return cls(False, reason, area_m2)


class TerritoryValidator:
    """Runs the claim checks in a fixed order and stops at the first failure."""

    def __init__(
        self,
        *,
        min_points: int = 10,
        min_total_distance_m: float = 50.0,
        min_area_m2: float = 100.0,
        intersection: SelfIntersectionChecker | None = None,
    ):
        self.min_points = min_points
        self.min_total_distance_m = min_total_distance_m
        self.min_area_m2 = min_area_m2
        self.intersection = intersection or SelfIntersectionChecker()

    def validate(self, path: TrackedPath) -> ValidationVerdict:
        points = path.points
        if len(points) < self.min_points:
            return ValidationVerdict.fail(TooFewPoints(len(points), self.min_points))

        walked = path_length(points)
        if walked < self.min_total_distance_m:
            return ValidationVerdict.fail(InsufficientDistance(walked, self.min_total_distance_m))

        if self.intersection.has_self_intersection(points):
            return ValidationVerdict.fail(SelfIntersecting())

        area = polygon_area(points)
        if area < self.min_area_m2:
            return ValidationVerdict.fail(InsufficientArea(area, self.min_area_m2), area)

        return ValidationVerdict.ok(area)
