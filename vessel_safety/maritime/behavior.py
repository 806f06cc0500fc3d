"""
Rule-based vessel behavior classification.

Behavior is decided by a fixed-priority decision table: declared AIS
navigational status first, then speed, then turn rate. A vessel legally at
anchor is 'anchored' even when GPS jitter reports residual speed.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import pandas as pd

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..data.models import VesselSnapshot, VesselState
from ..data.schema import NavStatus, nav_status_name
from ..utils.maritime_utils import MaritimeUtils
from .collision import missing_vessel_error
from .rot import decode_rot

logger = logging.getLogger(__name__)


class Behavior(Enum):
    """Vessel behavior labels."""

    ANCHORED = "anchored"
    MOORED = "moored"
    FISHING = "fishing"
    MANEUVERING = "maneuvering"
    STATIONARY = "stationary"
    DRIFTING = "drifting"
    TRANSITING = "transiting"
    UNKNOWN = "unknown"


class Confidence(Enum):
    """Confidence tier of a classification."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Declared statuses that decide the behavior outright
STATUS_BEHAVIORS = {
    NavStatus.AT_ANCHOR: Behavior.ANCHORED,
    NavStatus.MOORED: Behavior.MOORED,
    NavStatus.FISHING: Behavior.FISHING,
}

# Report ordering: vessels needing attention first
BEHAVIOR_PRIORITY = (
    Behavior.MANEUVERING,
    Behavior.DRIFTING,
    Behavior.TRANSITING,
    Behavior.FISHING,
    Behavior.ANCHORED,
    Behavior.MOORED,
    Behavior.STATIONARY,
    Behavior.UNKNOWN,
)


@dataclass(frozen=True)
class BehaviorResult:
    """Behavior label for one vessel."""

    mmsi: str
    behavior: Behavior
    confidence: Confidence

    def to_dict(self) -> dict[str, Any]:
        return {
            "mmsi": self.mmsi,
            "behavior": self.behavior.value,
            "confidence": self.confidence.value,
        }


class BehaviorClassifier:
    """Classifies vessel behavior from status, speed and rate of turn."""

    def __init__(self, config: AnalysisConfig = DEFAULT_CONFIG):
        self.config = config

    def classify(self, vessel: VesselState) -> BehaviorResult:
        """
        Classify a single vessel.

        Args:
            vessel: Vessel to classify

        Returns:
            BehaviorResult; vessels without a position are unknown/low
        """
        if vessel.position is None:
            return BehaviorResult(vessel.mmsi, Behavior.UNKNOWN, Confidence.LOW)

        pos = vessel.position
        nav_status = pos.navigational_status
        if nav_status is None:
            nav_status = NavStatus.NOT_DEFINED
        rot = decode_rot(pos.rate_of_turn, self.config.rot)
        behavior, confidence = self._decide(nav_status, pos.sog, rot)
        return BehaviorResult(vessel.mmsi, behavior, confidence)

    def _decide(self, nav_status: int, sog: float, rot: float | None) -> tuple[Behavior, Confidence]:
        cfg = self.config.behavior
        abs_rot = abs(rot) if rot is not None else None

        if nav_status in STATUS_BEHAVIORS:
            return STATUS_BEHAVIORS[nav_status], Confidence.HIGH

        if sog < cfg.stationary_speed_kn:
            if abs_rot is not None and abs_rot > cfg.stationary_maneuver_rot:
                return Behavior.MANEUVERING, Confidence.MEDIUM
            return Behavior.STATIONARY, Confidence.MEDIUM

        if sog < cfg.drifting_speed_kn and (abs_rot is None or abs_rot < cfg.drifting_max_rot):
            return Behavior.DRIFTING, Confidence.LOW

        if abs_rot is not None and abs_rot > cfg.maneuvering_rot:
            return Behavior.MANEUVERING, Confidence.HIGH

        if sog > cfg.transit_high_confidence_speed_kn:
            return Behavior.TRANSITING, Confidence.HIGH
        return Behavior.TRANSITING, Confidence.MEDIUM

    def analyze(
        self,
        snapshot: VesselSnapshot,
        mmsi: str | None = None,
        behavior_type: str | None = None,
    ) -> dict[str, Any]:
        """
        Build a behavior report for one vessel or the whole snapshot.

        Summary counts cover every classified vessel; 'total' counts the
        entries that passed the behavior filter.

        Args:
            snapshot: Vessel snapshot
            mmsi: Restrict to this vessel
            behavior_type: Only report this behavior ('all' or None for every behavior)

        Returns:
            Dictionary with 'vessels', 'summary' and 'timestamp', plus 'error'
            when the named vessel is missing or has no position
        """
        cfg = self.config.behavior
        if mmsi:
            vessel = snapshot.get(mmsi)
            candidates = [vessel] if vessel is not None else []
        else:
            candidates = list(snapshot.values())

        summary = {"total": 0}
        summary.update({b.value: 0 for b in BEHAVIOR_PRIORITY if b is not Behavior.UNKNOWN})
        entries = []

        for vessel in candidates:
            if vessel.position is None:
                continue

            result = self.classify(vessel)
            summary[result.behavior.value] += 1

            if behavior_type and behavior_type != "all" and result.behavior.value != behavior_type:
                continue

            entries.append(self._report_entry(vessel, result))
            summary["total"] += 1

        entries.sort(
            key=lambda e: (BEHAVIOR_PRIORITY.index(Behavior(e["behavior"])), -e["speed"])
        )
        logger.info(f"Classified {summary['total']} vessel(s) for behavior report")

        report = {
            "vessels": entries[: cfg.max_results],
            "summary": summary,
            "timestamp": pd.Timestamp.now(tz="UTC").isoformat(),
        }
        if mmsi and (not candidates or candidates[0].position is None):
            report["error"] = missing_vessel_error(snapshot, mmsi)
        return report

    def _report_entry(self, vessel: VesselState, result: BehaviorResult) -> dict[str, Any]:
        pos = vessel.position
        rot = decode_rot(pos.rate_of_turn, self.config.rot)
        is_turning = rot is not None and abs(rot) > self.config.behavior.turning_rot

        entry = {
            "mmsi": vessel.mmsi,
            "name": vessel.name,
            "behavior": result.behavior.value,
            "confidence": result.confidence.value,
            "navStatus": nav_status_name(pos.navigational_status),
            "speed": MaritimeUtils.round_half_up(pos.sog, 1),
            "isTurning": is_turning,
            "position": pos.to_point(),
        }
        if is_turning:
            entry["turnDirection"] = "right" if rot > 0 else "left"
        return entry
