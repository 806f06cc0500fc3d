"""
Typed tool-call arguments.

The chat layer hands over a tool name and a loosely typed argument mapping
with camelCase keys. Each tool gets a pydantic record tagged by a ``tool``
literal; ``parse_query`` validates the mapping into the matching record.
"""

import re
from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

MMSI_PATTERN = re.compile(r"^\d{9}$")
IMO_PATTERN = re.compile(r"^(?:IMO\s*)?(\d{7})$", re.IGNORECASE)

BehaviorFilter = Literal[
    "all",
    "anchored",
    "moored",
    "fishing",
    "maneuvering",
    "stationary",
    "drifting",
    "transiting",
]


class InvalidQueryError(ValueError):
    """Tool arguments failed validation."""

    def __init__(self, tool: str, errors: ValidationError | str):
        self.tool = tool
        self.errors = errors
        super().__init__(f"Invalid arguments for tool '{tool}': {errors}")


def is_valid_mmsi(value: str) -> bool:
    return bool(MMSI_PATTERN.match(value))


def normalize_imo(value: str) -> str | None:
    """Strip an optional 'IMO' prefix; None if the rest is not 7 digits."""
    match = IMO_PATTERN.match(value.strip())
    return match.group(1) if match else None


def _identifier_to_str(value):
    if isinstance(value, bool):
        raise ValueError("Identifier must be a string of digits")
    if isinstance(value, int):
        return str(value)
    return value


class ToolQuery(BaseModel):
    """Base for tool queries: accepts camelCase aliases or field names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class VesselScopedQuery(ToolQuery):
    """Query optionally restricted to one vessel by MMSI."""

    mmsi: str | None = None

    @field_validator("mmsi", mode="before")
    def coerce_mmsi(cls, v):
        return _identifier_to_str(v)

    @field_validator("mmsi")
    def validate_mmsi(cls, v):
        if v is not None and not is_valid_mmsi(v):
            raise ValueError(f"MMSI must be exactly 9 digits, got {v!r}")
        return v


class LookupVesselQuery(ToolQuery):
    """Look up a vessel by MMSI or IMO number."""

    tool: Literal["lookup_vessel"] = "lookup_vessel"
    mmsi: str | None = None
    imo: str | None = None

    # Format is checked by the tool so the caller gets a lookup-shaped answer
    @field_validator("mmsi", "imo", mode="before")
    def coerce_identifier(cls, v):
        return _identifier_to_str(v)

    @property
    def identifier(self) -> str | None:
        return self.mmsi or self.imo


class FindNearbyVesselsQuery(ToolQuery):
    """Vessels within a radius of a point."""

    tool: Literal["find_nearby_vessels"] = "find_nearby_vessels"
    latitude: float
    longitude: float
    radius_nm: float = Field(alias="radiusNm", ge=0)


class CollisionRiskQuery(VesselScopedQuery):
    tool: Literal["analyze_collision_risk"] = "analyze_collision_risk"
    cpa_threshold_nm: float = Field(default=0.5, alias="cpaThresholdNm", ge=0)
    tcpa_threshold_min: float = Field(default=30.0, alias="tcpaThresholdMin", ge=0)


class VesselBehaviorQuery(VesselScopedQuery):
    tool: Literal["analyze_vessel_behavior"] = "analyze_vessel_behavior"
    behavior_type: BehaviorFilter | None = Field(default=None, alias="behaviorType")


class NavigationSafetyQuery(VesselScopedQuery):
    tool: Literal["analyze_navigation_safety"] = "analyze_navigation_safety"
    include_weather: bool = Field(default=True, alias="includeWeather")


class SeaConditionsQuery(VesselScopedQuery):
    """Sea conditions at a point, or at a vessel's reported position."""

    tool: Literal["get_sea_conditions"] = "get_sea_conditions"
    latitude: float | None = None
    longitude: float | None = None

    @model_validator(mode="after")
    def validate_location(self):
        if self.mmsi is None and (self.latitude is None or self.longitude is None):
            raise ValueError("Provide either an MMSI or both latitude and longitude")
        return self


class WeatherForecastQuery(ToolQuery):
    tool: Literal["get_weather_forecast"] = "get_weather_forecast"
    latitude: float
    longitude: float
    hours: int = Field(default=24, gt=0)


Query = Annotated[
    Union[
        LookupVesselQuery,
        FindNearbyVesselsQuery,
        CollisionRiskQuery,
        VesselBehaviorQuery,
        NavigationSafetyQuery,
        SeaConditionsQuery,
        WeatherForecastQuery,
    ],
    Field(discriminator="tool"),
]

_query_adapter = TypeAdapter(Query)

TOOL_NAMES = (
    "lookup_vessel",
    "find_nearby_vessels",
    "analyze_collision_risk",
    "analyze_vessel_behavior",
    "analyze_navigation_safety",
    "get_sea_conditions",
    "get_weather_forecast",
)


def parse_query(tool: str, args: dict[str, Any] | None = None) -> Query:
    """
    Validate raw tool arguments into the matching query record.

    Args:
        tool: Tool name (one of TOOL_NAMES)
        args: Raw argument mapping, camelCase or snake_case keys

    Returns:
        Typed query record

    Raises:
        InvalidQueryError: Unknown tool, non-mapping arguments, or arguments
            failing validation
    """
    if tool not in TOOL_NAMES:
        raise InvalidQueryError(tool, f"unknown tool, expected one of {', '.join(TOOL_NAMES)}")

    if args is None:
        args = {}
    if not isinstance(args, Mapping):
        raise InvalidQueryError(tool, "arguments must be an object")

    payload = dict(args)
    payload["tool"] = tool
    try:
        return _query_adapter.validate_python(payload)
    except ValidationError as e:
        raise InvalidQueryError(tool, e) from e
