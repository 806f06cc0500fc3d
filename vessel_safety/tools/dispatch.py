"""
Tool functions exposed to the chat layer.

Each function takes a typed query and a read-only vessel snapshot and returns
a JSON-serializable dict. Missing data (unknown vessel, no position, bad
coordinates) comes back as a structured failure, never as an exception.
"""

import logging
from typing import Any

import pandas as pd

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..data.models import VesselSnapshot, VesselState, snapshot_to_frame
from ..data.schema import FieldNames
from ..maritime.behavior import BehaviorClassifier
from ..maritime.collision import CollisionRiskAnalyzer
from ..maritime.safety import NavigationSafetyAnalyzer
from ..utils.maritime_utils import MaritimeUtils
from ..weather.sea_state import SeaStateGenerator
from .queries import (
    CollisionRiskQuery,
    FindNearbyVesselsQuery,
    InvalidQueryError,
    LookupVesselQuery,
    NavigationSafetyQuery,
    SeaConditionsQuery,
    VesselBehaviorQuery,
    WeatherForecastQuery,
    is_valid_mmsi,
    normalize_imo,
    parse_query,
)

logger = logging.getLogger(__name__)

INVALID_COORDINATES = "Invalid coordinates. Latitude must be -90 to 90, longitude -180 to 180."


def lookup_vessel(query: LookupVesselQuery, snapshot: VesselSnapshot) -> dict[str, Any]:
    """Find a vessel in the snapshot by MMSI (9 digits) or IMO (7 digits)."""
    identifier = query.identifier
    if not identifier:
        return {
            "found": False,
            "error": "Please provide either an MMSI (9 digits) or IMO number (7 digits).",
        }

    is_mmsi = is_valid_mmsi(identifier)
    imo = None if is_mmsi else normalize_imo(identifier)
    if not is_mmsi and imo is None:
        return {
            "found": False,
            "error": (
                "Invalid identifier format. MMSI must be exactly 9 digits, "
                f"IMO must be 7 digits. Received: {identifier}"
            ),
        }

    if is_mmsi:
        vessel = snapshot.get(identifier)
    else:
        vessel = next((v for v in snapshot.values() if v.imo_number == imo), None)

    if vessel is None:
        id_type = "MMSI" if is_mmsi else "IMO"
        return {
            "found": False,
            "error": (
                f"No vessel found with {id_type} {identifier}. The vessel may not be "
                "in the database or currently transmitting."
            ),
        }

    if vessel.position is None:
        return {
            "found": False,
            "error": f"Vessel {vessel.name or identifier} found but has no position data available.",
        }

    return {"found": True, "vessel": _vessel_summary(vessel)}


def _vessel_summary(vessel: VesselState) -> dict[str, Any]:
    pos = vessel.position
    return {
        "mmsi": vessel.mmsi,
        "name": vessel.name,
        "type": vessel.vessel_type,
        "position": pos.to_point(),
        "speed": pos.sog,
        "course": pos.cog,
        "lastUpdate": pos.timestamp,
    }


def find_nearby_vessels(query: FindNearbyVesselsQuery, snapshot: VesselSnapshot) -> dict[str, Any]:
    """
    Vessels within ``radius_nm`` of a point, nearest first.

    Distances and bearings are computed over the whole snapshot at once.
    """
    df = snapshot_to_frame(snapshot)
    vessels = []

    if not df.empty:
        df["distance_nm"] = MaritimeUtils.calculate_distance(
            query.latitude, query.longitude, df[FieldNames.LAT], df[FieldNames.LON]
        )
        df["bearing"] = MaritimeUtils.calculate_bearing(
            query.latitude, query.longitude, df[FieldNames.LAT], df[FieldNames.LON]
        )
        nearby = df[df["distance_nm"] <= query.radius_nm].sort_values(
            "distance_nm", kind="stable"
        )

        for row in nearby.itertuples(index=False):
            vessels.append(
                {
                    "mmsi": row.mmsi,
                    "name": row.name,
                    "distanceNm": MaritimeUtils.round_half_up(row.distance_nm, 2),
                    "bearing": MaritimeUtils.round_half_up(row.bearing) % 360,
                    "position": {
                        "latitude": float(row.latitude),
                        "longitude": float(row.longitude),
                    },
                }
            )

    logger.info(
        f"Found {len(vessels)} vessel(s) within {query.radius_nm} nm of "
        f"({query.latitude}, {query.longitude})"
    )
    return {
        "vessels": vessels,
        "searchCenter": {"latitude": query.latitude, "longitude": query.longitude},
        "searchRadiusNm": query.radius_nm,
    }


def analyze_collision_risk(
    query: CollisionRiskQuery,
    snapshot: VesselSnapshot,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> dict[str, Any]:
    analyzer = CollisionRiskAnalyzer(config)
    analysis = analyzer.analyze(
        snapshot,
        mmsi=query.mmsi,
        cpa_threshold_nm=query.cpa_threshold_nm,
        tcpa_threshold_min=query.tcpa_threshold_min,
    )
    return analysis.to_dict()


def analyze_vessel_behavior(
    query: VesselBehaviorQuery,
    snapshot: VesselSnapshot,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> dict[str, Any]:
    classifier = BehaviorClassifier(config)
    return classifier.analyze(snapshot, mmsi=query.mmsi, behavior_type=query.behavior_type)


def analyze_navigation_safety(
    query: NavigationSafetyQuery,
    snapshot: VesselSnapshot,
    config: AnalysisConfig = DEFAULT_CONFIG,
    when: pd.Timestamp | None = None,
) -> dict[str, Any]:
    analyzer = NavigationSafetyAnalyzer(config)
    return analyzer.analyze(
        snapshot, mmsi=query.mmsi, include_weather=query.include_weather, when=when
    )


def get_sea_conditions(
    query: SeaConditionsQuery,
    snapshot: VesselSnapshot,
    config: AnalysisConfig = DEFAULT_CONFIG,
    when: pd.Timestamp | None = None,
) -> dict[str, Any]:
    """Current sea conditions at a point, or at a vessel's position when an MMSI is given."""
    lat, lon = query.latitude, query.longitude

    if query.mmsi:
        vessel = snapshot.get(query.mmsi)
        if vessel is None:
            return {"success": False, "error": f"Vessel with MMSI {query.mmsi} not found"}
        if vessel.position is None:
            return {
                "success": False,
                "error": f"Vessel {vessel.display_name} has no position data",
            }
        lat, lon = vessel.position.latitude, vessel.position.longitude

    if not MaritimeUtils.is_valid_coordinate(lat, lon):
        return {"success": False, "error": INVALID_COORDINATES}

    conditions = SeaStateGenerator(config.weather).generate(lat, lon, when=when)
    return {"success": True, "conditions": conditions.to_dict()}


def get_weather_forecast(
    query: WeatherForecastQuery,
    snapshot: VesselSnapshot | None = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
    when: pd.Timestamp | None = None,
) -> dict[str, Any]:
    location = {"latitude": query.latitude, "longitude": query.longitude}
    if not MaritimeUtils.is_valid_coordinate(query.latitude, query.longitude):
        return {"success": False, "location": location, "error": INVALID_COORDINATES}

    forecast = SeaStateGenerator(config.weather).forecast(
        query.latitude, query.longitude, hours=query.hours, when=when
    )
    return {"success": True, "location": location, "forecast": forecast}


def run_tool(
    tool: str,
    args: dict[str, Any] | None,
    snapshot: VesselSnapshot,
    config: AnalysisConfig | None = None,
    when: pd.Timestamp | None = None,
) -> dict[str, Any]:
    """
    Parse raw tool arguments and run the matching tool.

    Args:
        tool: Tool name
        args: Raw argument mapping from the chat layer
        snapshot: Read-only vessel snapshot
        config: Analysis configuration (default thresholds when None)
        when: Reference time for generated weather (default: now)

    Returns:
        The tool's result dict, or ``{"success": False, "error": ...}`` when
        the arguments are rejected
    """
    if config is None:
        config = DEFAULT_CONFIG

    try:
        query = parse_query(tool, args)
    except InvalidQueryError as e:
        logger.warning(f"Rejected tool call: {e}")
        return {"success": False, "error": str(e)}

    logger.debug(f"Running tool {tool}")
    if isinstance(query, LookupVesselQuery):
        return lookup_vessel(query, snapshot)
    if isinstance(query, FindNearbyVesselsQuery):
        return find_nearby_vessels(query, snapshot)
    if isinstance(query, CollisionRiskQuery):
        return analyze_collision_risk(query, snapshot, config)
    if isinstance(query, VesselBehaviorQuery):
        return analyze_vessel_behavior(query, snapshot, config)
    if isinstance(query, NavigationSafetyQuery):
        return analyze_navigation_safety(query, snapshot, config, when=when)
    if isinstance(query, SeaConditionsQuery):
        return get_sea_conditions(query, snapshot, config, when=when)
    return get_weather_forecast(query, snapshot, config, when=when)
