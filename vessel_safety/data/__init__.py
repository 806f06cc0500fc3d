"""
Vessel state model, AIS code tables and snapshot helpers.
"""

from .models import (
    PositionSample,
    VesselSnapshot,
    VesselState,
    build_snapshot,
    positioned_vessels,
    snapshot_to_frame,
)
from .schema import NAV_STATUS_NAMES, ROT_NOT_AVAILABLE, FieldNames, NavStatus, nav_status_name

__all__ = [
    "PositionSample",
    "VesselState",
    "VesselSnapshot",
    "build_snapshot",
    "positioned_vessels",
    "snapshot_to_frame",
    "FieldNames",
    "NavStatus",
    "NAV_STATUS_NAMES",
    "ROT_NOT_AVAILABLE",
    "nav_status_name",
]
