"""
Centralized AIS field names and code tables.

Single source of truth for the keys used when parsing vessel-store records
and for the AIS navigational status codes the analysis rules depend on.
"""

from types import MappingProxyType


class FieldNames:
    """Centralized record key definitions."""

    # Vessel identity
    MMSI = "mmsi"
    NAME = "name"
    VESSEL_TYPE = "vessel_type"
    IMO = "imo_number"
    DESTINATION = "destination"
    ETA = "eta"
    DIMENSIONS = "dimensions"
    POSITION = "position"

    # Position report
    LAT = "latitude"
    LON = "longitude"
    SOG = "sog"
    COG = "cog"
    HEADING = "true_heading"
    ROT = "rate_of_turn"
    NAV_STATUS = "navigational_status"
    TIMESTAMP = "timestamp"


class NavStatus:
    """AIS navigational status codes used by the analysis rules."""

    UNDER_WAY_ENGINE = 0
    AT_ANCHOR = 1
    NOT_UNDER_COMMAND = 2
    RESTRICTED_MANEUVERABILITY = 3
    CONSTRAINED_BY_DRAUGHT = 4
    MOORED = 5
    AGROUND = 6
    FISHING = 7
    UNDER_WAY_SAILING = 8
    AIS_SART = 14
    NOT_DEFINED = 15


NAV_STATUS_NAMES = MappingProxyType(
    {
        NavStatus.UNDER_WAY_ENGINE: "Under Way Using Engine",
        NavStatus.AT_ANCHOR: "At Anchor",
        NavStatus.NOT_UNDER_COMMAND: "Not Under Command",
        NavStatus.RESTRICTED_MANEUVERABILITY: "Restricted Maneuverability",
        NavStatus.CONSTRAINED_BY_DRAUGHT: "Constrained by Draught",
        NavStatus.MOORED: "Moored",
        NavStatus.AGROUND: "Aground",
        NavStatus.FISHING: "Engaged in Fishing",
        NavStatus.UNDER_WAY_SAILING: "Under Way Sailing",
        NavStatus.AIS_SART: "AIS-SART Active",
        NavStatus.NOT_DEFINED: "Not Defined",
    }
)

# AIS sentinel for "rate of turn not available"
ROT_NOT_AVAILABLE = -128


def nav_status_name(status: int | None) -> str:
    """Human-readable name for a navigational status code."""
    if status is None:
        status = NavStatus.NOT_DEFINED
    return NAV_STATUS_NAMES.get(status, "Unknown")
