"""
Vessel state data model and snapshot construction.

A snapshot is a read-only mapping of MMSI to VesselState representing one
consistent point-in-time view of the vessel store. Analysis functions only
ever read from it.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import pandas as pd

from .schema import ROT_NOT_AVAILABLE, FieldNames

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionSample:
    """Single AIS position report."""

    latitude: float  # Decimal degrees
    longitude: float  # Decimal degrees
    sog: float  # Speed over ground in knots
    cog: float  # Course over ground in degrees
    timestamp: str  # ISO-8601
    true_heading: float | None = None
    rate_of_turn: int | None = None  # AIS-encoded, -128 = not available
    navigational_status: int | None = None

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")
        if self.rate_of_turn is not None and not (
            ROT_NOT_AVAILABLE <= self.rate_of_turn <= 127
        ):
            raise ValueError(f"Rate of turn out of AIS range: {self.rate_of_turn}")

    @property
    def has_rate_of_turn(self) -> bool:
        return self.rate_of_turn is not None and self.rate_of_turn != ROT_NOT_AVAILABLE

    def to_point(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "PositionSample":
        """Build from a vessel-store position record."""
        return cls(
            latitude=float(record[FieldNames.LAT]),
            longitude=float(record[FieldNames.LON]),
            sog=float(record.get(FieldNames.SOG) or 0.0),
            cog=float(record.get(FieldNames.COG) or 0.0),
            timestamp=str(record.get(FieldNames.TIMESTAMP, "")),
            true_heading=_optional(record.get(FieldNames.HEADING), float),
            rate_of_turn=_optional(record.get(FieldNames.ROT), int),
            navigational_status=_optional(record.get(FieldNames.NAV_STATUS), int),
        )


@dataclass(frozen=True)
class VesselState:
    """Static vessel data plus its latest position, if any."""

    mmsi: str
    vessel_type: int = 0
    name: str | None = None
    position: PositionSample | None = None
    imo_number: str | None = None
    destination: str | None = None
    eta: str | None = None
    dimensions: Mapping[str, float] | None = field(default=None, hash=False)

    @property
    def display_name(self) -> str:
        return self.name or self.mmsi

    def identity(self) -> dict[str, Any]:
        """Identity block used in analysis results."""
        return {"mmsi": self.mmsi, "name": self.name}

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "VesselState":
        """Build from a vessel-store record with an optional nested position."""
        position = record.get(FieldNames.POSITION)
        dimensions = record.get(FieldNames.DIMENSIONS)
        return cls(
            mmsi=str(record[FieldNames.MMSI]),
            vessel_type=int(record.get(FieldNames.VESSEL_TYPE) or 0),
            name=record.get(FieldNames.NAME),
            position=PositionSample.from_dict(position) if position else None,
            imo_number=_optional(record.get(FieldNames.IMO), str),
            destination=record.get(FieldNames.DESTINATION),
            eta=record.get(FieldNames.ETA),
            dimensions=MappingProxyType(dict(dimensions)) if dimensions else None,
        )


VesselSnapshot = Mapping[str, VesselState]


def _optional(value, cast):
    return None if value is None else cast(value)


def build_snapshot(
    records: Iterable[Mapping[str, Any] | VesselState] | Mapping[str, Any],
) -> VesselSnapshot:
    """
    Build a read-only snapshot keyed by MMSI.

    Args:
        records: Vessel-store records (dicts or VesselState instances), or a
            mapping of MMSI to such records

    Returns:
        Immutable mapping of MMSI to VesselState. Later records for the same
        MMSI replace earlier ones.
    """
    if isinstance(records, Mapping):
        records = records.values()

    vessels: dict[str, VesselState] = {}
    for record in records:
        vessel = record if isinstance(record, VesselState) else VesselState.from_dict(record)
        vessels[vessel.mmsi] = vessel

    logger.debug(f"Built snapshot with {len(vessels)} vessels")
    return MappingProxyType(vessels)


def positioned_vessels(snapshot: VesselSnapshot) -> list[VesselState]:
    """Vessels with a position, in snapshot order."""
    return [vessel for vessel in snapshot.values() if vessel.position is not None]


def snapshot_to_frame(snapshot: VesselSnapshot) -> pd.DataFrame:
    """
    Flatten positioned vessels into a DataFrame for vectorized queries.

    Columns: mmsi, name, latitude, longitude, sog, cog.
    """
    rows = [
        {
            FieldNames.MMSI: vessel.mmsi,
            FieldNames.NAME: vessel.name,
            FieldNames.LAT: vessel.position.latitude,
            FieldNames.LON: vessel.position.longitude,
            FieldNames.SOG: vessel.position.sog,
            FieldNames.COG: vessel.position.cog,
        }
        for vessel in positioned_vessels(snapshot)
    ]
    columns = [
        FieldNames.MMSI,
        FieldNames.NAME,
        FieldNames.LAT,
        FieldNames.LON,
        FieldNames.SOG,
        FieldNames.COG,
    ]
    return pd.DataFrame(rows, columns=columns)
