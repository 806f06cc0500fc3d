"""
Pydantic models for analysis configuration.

Every threshold used by the analysis modules lives here with its default.
The ROT intensity buckets and behavior speed cutoffs are operational
heuristics, not physical constants, and should be reviewed with domain
experts before being relied on.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PresetName(str, Enum):
    """Named configuration presets registered with the config store."""

    DEFAULT = "default"
    STRICT = "strict"
    OPEN_WATER = "open_water"


# Sections are immutable once built
class FrozenConfig(BaseModel):
    """Base for configuration sections."""

    model_config = ConfigDict(frozen=True)


# Rate of turn configuration
class RotConfig(FrozenConfig):
    """Decoding constants and intensity buckets for AIS rate of turn."""

    # AIS encoding: ROT_ais = 4.733 * sqrt(ROT deg/min)
    scale: float = 4.733
    saturation_deg_per_min: float = 720.0

    # Intensity buckets (deg/min, upper bounds are exclusive)
    none_below: float = 2.0
    slight_below: float = 5.0
    moderate_below: float = 10.0

    @model_validator(mode="after")
    def validate_bucket_order(self):
        if not 0 <= self.none_below <= self.slight_below <= self.moderate_below:
            raise ValueError("ROT intensity thresholds must be non-negative and ascending")
        return self


# Projection configuration
class ProjectionConfig(FrozenConfig):
    """Kinematic projection parameters."""

    turning_threshold_deg_per_min: float = 0.5
    step_minutes: float = 1.0
    path_interval_minutes: float = 5.0

    @field_validator("step_minutes", "path_interval_minutes")
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Time steps must be positive")
        return v


# Collision configuration
class CollisionConfig(FrozenConfig):
    """Thresholds for the pairwise collision risk scan."""

    cpa_threshold_nm: float = 0.5
    tcpa_threshold_min: float = 30.0
    path_interval_minutes: float = 2.0
    path_margin_minutes: float = 5.0
    turning_vessel_rot: float = 5.0

    @field_validator("cpa_threshold_nm", "tcpa_threshold_min")
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("Thresholds must be non-negative")
        return v

    @field_validator("path_interval_minutes")
    def validate_interval(cls, v):
        if v <= 0:
            raise ValueError("Path interval must be positive")
        return v


# Behavior configuration
class BehaviorConfig(FrozenConfig):
    """Speed and turn cutoffs for the behavior decision table."""

    stationary_speed_kn: float = 0.5
    stationary_maneuver_rot: float = 5.0
    drifting_speed_kn: float = 2.0
    drifting_max_rot: float = 2.0
    maneuvering_rot: float = 10.0
    transit_high_confidence_speed_kn: float = 5.0
    turning_rot: float = 2.0
    max_results: int = 50


# Score tables, keyed by risk level and weather severity
class CollisionScores(FrozenConfig):
    high: int = 30
    moderate: int = 15
    low: int = 5


class WeatherScores(FrozenConfig):
    severe: int = 40
    high: int = 25
    moderate: int = 10
    low: int = 0


# Safety configuration
class SafetyConfig(FrozenConfig):
    """Scoring weights and buckets for the navigation safety analysis."""

    max_vessels: int = 20
    tcpa_window_min: float = 30.0
    report_cpa_nm: float = 1.0
    high_risk_cpa_nm: float = 0.25
    moderate_risk_cpa_nm: float = 0.5

    # Score contributions
    collision_scores: CollisionScores = Field(default_factory=CollisionScores)
    weather_scores: WeatherScores = Field(default_factory=WeatherScores)
    not_under_command_score: int = 20
    restricted_maneuverability_score: int = 10
    aground_score: int = 30
    aground_min_score: int = 40
    speed_weather_score: int = 10
    speed_visibility_score: int = 15

    # Speed-for-conditions limits
    speed_weather_limit_kn: float = 15.0
    speed_visibility_limit_kn: float = 20.0
    visibility_limit_nm: float = 5.0

    # Risk buckets (inclusive lower bounds)
    critical_score: int = 60
    high_score: int = 40
    moderate_score: int = 20

    @model_validator(mode="after")
    def validate_buckets(self):
        if not 0 <= self.moderate_score <= self.high_score <= self.critical_score <= 100:
            raise ValueError("Risk buckets must be ascending within 0-100")
        return self

    @field_validator("max_vessels")
    def validate_max_vessels(cls, v):
        if v < 1:
            raise ValueError("max_vessels must be at least 1")
        return v


# Weather configuration
class WeatherConfig(FrozenConfig):
    """Forecast generation parameters."""

    forecast_interval_hours: int = 3
    max_forecast_periods: int = 48
    default_forecast_hours: int = 24


# Root configuration
class AnalysisConfig(FrozenConfig):
    """Root configuration combining all analysis sections."""

    rot: RotConfig = Field(default_factory=RotConfig)
    projection: ProjectionConfig = Field(default_factory=ProjectionConfig)
    collision: CollisionConfig = Field(default_factory=CollisionConfig)
    behavior: BehaviorConfig = Field(default_factory=BehaviorConfig)
    safety: SafetyConfig = Field(default_factory=SafetyConfig)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)

