"""
CPA/TCPA (Closest Point of Approach / Time to Closest Point of Approach) calculations.

Mathematical Foundation:
- Positions are placed in a local flat-earth frame (nautical miles) relative
  to vessel 2, velocities in nautical miles per minute
- Relative velocity dv = v1 - v2, relative position d = p1 - p2
- TCPA = -(d . dv) / |dv|^2, CPA = |d + dv * TCPA|
- TCPA may be negative (closest approach already passed) or infinite
  (identical velocities, the separation never changes)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from ..data.models import VesselState
from ..utils.maritime_utils import NM_PER_DEGREE_LAT, MaritimeUtils

logger = logging.getLogger(__name__)


class EncounterType(Enum):
    """Geometric character of a vessel pair."""

    STATIONARY = "stationary"  # Both vessels stopped
    PARALLEL = "parallel"  # Identical velocity vectors
    APPROACHING = "approaching"  # CPA lies in the future
    RECEDING = "receding"  # CPA already passed


@dataclass(frozen=True)
class CPAResult:
    """Result of CPA/TCPA calculation."""

    cpa_nm: float  # CPA distance in nautical miles
    tcpa_minutes: float  # TCPA in minutes, may be inf
    cpa_latitude: float  # Midpoint of both vessels at CPA
    cpa_longitude: float
    encounter_type: EncounterType

    @property
    def cpa_point(self) -> dict[str, float]:
        return {"latitude": self.cpa_latitude, "longitude": self.cpa_longitude}

    @property
    def converges(self) -> bool:
        """True when the separation shrinks towards a finite future CPA."""
        return bool(np.isfinite(self.tcpa_minutes)) and self.tcpa_minutes >= 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "cpaNm": self.cpa_nm,
            "tcpaMinutes": self.tcpa_minutes,
            "cpaPoint": self.cpa_point,
            "encounterType": self.encounter_type.value,
        }


class CPACalculator:
    """
    Calculates CPA/TCPA for pairs of vessels in a snapshot.

    Holds no state, so one instance can be shared between threads.
    """

    def _relative_position(self, vessel1: VesselState, vessel2: VesselState) -> tuple[float, float]:
        """Position of vessel 1 relative to vessel 2 in nautical miles (east, north)."""
        pos1, pos2 = vessel1.position, vessel2.position
        dx = (pos1.longitude - pos2.longitude) * NM_PER_DEGREE_LAT * np.cos(np.radians(pos1.latitude))
        dy = (pos1.latitude - pos2.latitude) * NM_PER_DEGREE_LAT
        return float(dx), float(dy)

    def _velocity(self, vessel: VesselState) -> tuple[float, float]:
        """Velocity in nautical miles per minute (east, north)."""
        speed = MaritimeUtils.knots_to_nm_per_minute(vessel.position.sog)
        return MaritimeUtils.velocity_components(speed, vessel.position.cog)

    def calculate(self, vessel1: VesselState, vessel2: VesselState) -> CPAResult | None:
        """
        Calculate CPA/TCPA for two vessels.

        Args:
            vessel1: First vessel
            vessel2: Second vessel

        Returns:
            CPAResult, or None if either vessel has no position
        """
        if vessel1.position is None or vessel2.position is None:
            return None

        pos1, pos2 = vessel1.position, vessel2.position

        # Both stopped: separation is fixed and already at its minimum
        if pos1.sog == 0 and pos2.sog == 0:
            return self._current_separation(vessel1, vessel2, 0.0, EncounterType.STATIONARY)

        v1x, v1y = self._velocity(vessel1)
        v2x, v2y = self._velocity(vessel2)
        dvx = v1x - v2x
        dvy = v1y - v2y
        dv2 = dvx * dvx + dvy * dvy

        # Same velocity vector: separation never changes
        if dv2 == 0:
            return self._current_separation(vessel1, vessel2, float("inf"), EncounterType.PARALLEL)

        dx, dy = self._relative_position(vessel1, vessel2)
        tcpa = -(dx * dvx + dy * dvy) / dv2

        cpa_dx = dx + dvx * tcpa
        cpa_dy = dy + dvy * tcpa
        cpa_nm = float(np.hypot(cpa_dx, cpa_dy))

        # CPA point: midpoint of both vessels projected linearly to TCPA
        cpa_lat1, cpa_lon1 = MaritimeUtils.offset_position(
            pos1.latitude, pos1.longitude, v1x * tcpa, v1y * tcpa
        )
        cpa_lat2, cpa_lon2 = MaritimeUtils.offset_position(
            pos2.latitude, pos2.longitude, v2x * tcpa, v2y * tcpa
        )

        encounter_type = EncounterType.APPROACHING if tcpa >= 0 else EncounterType.RECEDING
        logger.debug(
            f"CPA {vessel1.mmsi}/{vessel2.mmsi}: {cpa_nm:.3f} nm in {tcpa:.1f} min"
        )

        return CPAResult(
            cpa_nm=cpa_nm,
            tcpa_minutes=float(tcpa),
            cpa_latitude=(cpa_lat1 + cpa_lat2) / 2,
            cpa_longitude=(cpa_lon1 + cpa_lon2) / 2,
            encounter_type=encounter_type,
        )

    def _current_separation(
        self,
        vessel1: VesselState,
        vessel2: VesselState,
        tcpa: float,
        encounter_type: EncounterType,
    ) -> CPAResult:
        pos1, pos2 = vessel1.position, vessel2.position
        distance = MaritimeUtils.calculate_distance(
            pos1.latitude, pos1.longitude, pos2.latitude, pos2.longitude
        )
        return CPAResult(
            cpa_nm=distance,
            tcpa_minutes=tcpa,
            cpa_latitude=pos1.latitude,
            cpa_longitude=pos1.longitude,
            encounter_type=encounter_type,
        )
