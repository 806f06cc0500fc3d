"""
Tool boundary: typed query parsing and dispatch to the analysis modules.
"""

from .dispatch import (
    analyze_collision_risk,
    analyze_navigation_safety,
    analyze_vessel_behavior,
    find_nearby_vessels,
    get_sea_conditions,
    get_weather_forecast,
    lookup_vessel,
    run_tool,
)
from .queries import (
    TOOL_NAMES,
    CollisionRiskQuery,
    FindNearbyVesselsQuery,
    InvalidQueryError,
    LookupVesselQuery,
    NavigationSafetyQuery,
    SeaConditionsQuery,
    VesselBehaviorQuery,
    WeatherForecastQuery,
    parse_query,
)

__all__ = [
    "run_tool",
    "parse_query",
    "InvalidQueryError",
    "TOOL_NAMES",
    "lookup_vessel",
    "find_nearby_vessels",
    "analyze_collision_risk",
    "analyze_vessel_behavior",
    "analyze_navigation_safety",
    "get_sea_conditions",
    "get_weather_forecast",
    "LookupVesselQuery",
    "FindNearbyVesselsQuery",
    "CollisionRiskQuery",
    "VesselBehaviorQuery",
    "NavigationSafetyQuery",
    "SeaConditionsQuery",
    "WeatherForecastQuery",
]
