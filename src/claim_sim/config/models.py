from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class SimModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    epoch: tuple[int, int, int, int, int, int] = (2025, 1, 1, 0, 0, 0)
    seed: int = 0
    duration: int = 3600  # seconds of replay


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = 1


# ----------------- SPEED ESTIMATORS ---------------------


class SpeedEstimatorDerivedModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["derived"] = "derived"


class SpeedEstimatorReportedModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["reported"] = "reported"


SpeedEstimatorUnion = Annotated[
    SpeedEstimatorDerivedModel | SpeedEstimatorReportedModel,
    Field(discriminator="kind"),
]


# ----------------- TRACKING ---------------------


class TrackingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    tick_interval_s: float = 2.0

    # recording
    min_record_distance_m: float = 10.0
    max_accuracy_m: float | None = None  # None => accept any reported accuracy

    # anti-cheat
    warn_kmh: float = 15.0
    abort_kmh: float = 30.0
    speed_estimator: SpeedEstimatorUnion = Field(default_factory=SpeedEstimatorDerivedModel)

    # closure & validation
    closure_distance_m: float = 30.0
    min_closure_points: int = 10
    min_total_distance_m: float = 50.0
    min_area_m2: float = 100.0
    skip_head_segments: int = 2
    skip_tail_segments: int = 2

    # bounds on one session
    max_points: int = 500
    max_duration_s: float = 3600.0

    @field_validator(
        "tick_interval_s",
        "warn_kmh",
        "abort_kmh",
        "closure_distance_m",
        "max_duration_s",
    )
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v) or v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator(
        "min_record_distance_m",
        "min_total_distance_m",
        "min_area_m2",
        "skip_head_segments",
        "skip_tail_segments",
    )
    @classmethod
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    @field_validator("max_accuracy_m")
    @classmethod
    def _accuracy(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("max_accuracy_m must be > 0 or null")
        return v

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.warn_kmh >= self.abort_kmh:
            raise ValueError("warn_kmh must be below abort_kmh")
        if self.min_closure_points < 1:
            raise ValueError("min_closure_points must be >= 1")
        if self.max_points < self.min_closure_points:
            raise ValueError(
                f"max_points must be >= min_closure_points ({self.min_closure_points})"
            )
        return self


# ----------------- SYNTHETIC WALKS ---------------------


class WalkModel(BaseModel):
    """A scripted walk: waypoints in meters east/north of the origin, walked at constant speed."""

    model_config = ConfigDict(extra="forbid")
    origin: tuple[float, float] = (31.2304, 121.4737)  # lat, lon
    waypoints: list[tuple[float, float]] = Field(
        default_factory=lambda: [(0, 0), (150, 0), (150, 150), (0, 150), (0, 0)]
    )
    speed_kmh: float = 5.0
    fix_interval_s: float = 10.0
    jitter_m: float = 0.0  # gaussian sigma per axis
    dropout: float = 0.0  # probability a fix is lost
    start_t: float = 0.0

    @field_validator("speed_kmh", "fix_interval_s")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator("jitter_m")
    @classmethod
    def _nonneg(cls, v: float) -> float:
        if v < 0:
            raise ValueError("jitter_m must be >= 0")
        return v

    @field_validator("dropout")
    @classmethod
    def _probability(cls, v: float) -> float:
        if not 0.0 <= v < 1.0:
            raise ValueError("dropout must be in [0, 1)")
        return v

    @model_validator(mode="after")
    def _check_waypoints(self):
        if len(self.waypoints) < 2:
            raise ValueError("walk needs at least 2 waypoints")
        lat, lon = self.origin
        if not (-90.0 < lat < 90.0 and -180.0 <= lon <= 180.0):
            raise ValueError("origin must be a valid (lat, lon)")
        return self


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    sim: SimModel = SimModel()
    log: LogModel = LogModel()
    tracking: TrackingModel = TrackingModel()
    walk: WalkModel | None = None
