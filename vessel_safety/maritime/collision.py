"""
Pairwise collision risk analysis over a vessel snapshot.

Runs CPA/TCPA for every (target, other) pair of positioned vessels, keeps
pairs that converge inside the CPA/TCPA thresholds, attaches projected paths
for display and removes mirrored A-B / B-A duplicates.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..data.models import VesselSnapshot, VesselState, positioned_vessels
from ..utils.maritime_utils import MaritimeUtils
from .cpa_tcpa import CPACalculator, CPAResult
from .kinematics import project_path
from .rot import decode_rot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollisionRisk:
    """A vessel pair predicted to pass inside the CPA threshold."""

    vessel1: dict[str, Any]
    vessel2: dict[str, Any]
    cpa_nm: float
    tcpa_minutes: float
    cpa_point: dict[str, float]
    vessel1_path: list[dict[str, float]] = field(default_factory=list)
    vessel2_path: list[dict[str, float]] = field(default_factory=list)
    turning_vessel: bool = False

    @property
    def pair_key(self) -> str:
        return f"{self.vessel1['mmsi']}-{self.vessel2['mmsi']}"

    @property
    def reverse_key(self) -> str:
        return f"{self.vessel2['mmsi']}-{self.vessel1['mmsi']}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        result = {
            "vessel1": dict(self.vessel1),
            "vessel2": dict(self.vessel2),
            "cpaNm": self.cpa_nm,
            "tcpaMinutes": self.tcpa_minutes,
            "cpaPoint": dict(self.cpa_point),
            "vessel1Path": [dict(p) for p in self.vessel1_path],
            "vessel2Path": [dict(p) for p in self.vessel2_path],
        }
        if self.turning_vessel:
            result["turningVessel"] = True
        return result


@dataclass(frozen=True)
class CollisionAnalysis:
    """Collision risks found in one snapshot."""

    risks: list[CollisionRisk]
    analyzed_vessels: int
    timestamp: str
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result = {
            "risks": [risk.to_dict() for risk in self.risks],
            "analyzedVessels": self.analyzed_vessels,
            "timestamp": self.timestamp,
        }
        if self.error:
            result["error"] = self.error
        return result


def deduplicate_pairs(risks: list[CollisionRisk]) -> list[CollisionRisk]:
    """Keep the first occurrence of each unordered vessel pair."""
    unique = []
    seen_pairs = set()
    for risk in risks:
        if risk.pair_key in seen_pairs or risk.reverse_key in seen_pairs:
            continue
        unique.append(risk)
        seen_pairs.add(risk.pair_key)
    return unique


def missing_vessel_error(snapshot: VesselSnapshot, mmsi: str) -> str:
    """Message for a named vessel that is absent or has no position."""
    if snapshot.get(mmsi) is None:
        return f"Vessel with MMSI {mmsi} not found"
    return f"Vessel with MMSI {mmsi} has no position data"

class CollisionRiskAnalyzer:
    """
    Finds converging vessel pairs in a snapshot.

    The scan is O(n^2) over positioned vessels; callers bound the population
    when latency matters.
    """

    def __init__(self, config: AnalysisConfig = DEFAULT_CONFIG):
        self.config = config
        self.calculator = CPACalculator()

    def select_targets(self, snapshot: VesselSnapshot, mmsi: str | None = None) -> list[VesselState]:
        """The named vessel (if it has a position) or every positioned vessel."""
        if mmsi:
            vessel = snapshot.get(mmsi)
            return [vessel] if vessel is not None and vessel.position is not None else []
        return positioned_vessels(snapshot)

    def encounters(
        self, target: VesselState, snapshot: VesselSnapshot
    ) -> Iterator[tuple[VesselState, CPAResult]]:
        """Yield (other vessel, CPA result) for every other positioned vessel."""
        for other in positioned_vessels(snapshot):
            if other.mmsi == target.mmsi:
                continue
            result = self.calculator.calculate(target, other)
            if result is not None:
                yield other, result

    def is_turning(self, vessel: VesselState) -> bool:
        """True if the vessel's decoded turn rate exceeds the turning-vessel limit."""
        rot = decode_rot(vessel.position.rate_of_turn, self.config.rot)
        return rot is not None and abs(rot) > self.config.collision.turning_vessel_rot

    def analyze(
        self,
        snapshot: VesselSnapshot,
        mmsi: str | None = None,
        cpa_threshold_nm: float | None = None,
        tcpa_threshold_min: float | None = None,
    ) -> CollisionAnalysis:
        """
        Analyze collision risks.

        Args:
            snapshot: Vessel snapshot (not modified)
            mmsi: Restrict the analysis to pairs involving this vessel
            cpa_threshold_nm: Maximum CPA to report (default from config)
            tcpa_threshold_min: Maximum TCPA to report (default from config)

        Returns:
            CollisionAnalysis with deduplicated risks
        """
        collision_config = self.config.collision
        if cpa_threshold_nm is None:
            cpa_threshold_nm = collision_config.cpa_threshold_nm
        if tcpa_threshold_min is None:
            tcpa_threshold_min = collision_config.tcpa_threshold_min

        targets = self.select_targets(snapshot, mmsi)
        risks = []

        for vessel1 in targets:
            for vessel2, cpa in self.encounters(vessel1, snapshot):
                if not (
                    cpa.cpa_nm <= cpa_threshold_nm
                    and 0 <= cpa.tcpa_minutes <= tcpa_threshold_min
                ):
                    continue
                risks.append(self._build_risk(vessel1, vessel2, cpa, tcpa_threshold_min))

        error = None
        if mmsi and not targets:
            error = missing_vessel_error(snapshot, mmsi)
            logger.warning(f"Collision scan skipped: {error}")

        unique_risks = deduplicate_pairs(risks)
        logger.info(
            f"Collision scan: {len(targets)} target(s), {len(unique_risks)} risk(s) "
            f"(cpa<={cpa_threshold_nm} nm, tcpa<={tcpa_threshold_min} min)"
        )

        return CollisionAnalysis(
            risks=unique_risks,
            analyzed_vessels=len(targets),
            timestamp=pd.Timestamp.now(tz="UTC").isoformat(),
            error=error,
        )

    def _build_risk(
        self,
        vessel1: VesselState,
        vessel2: VesselState,
        cpa: CPAResult,
        tcpa_threshold_min: float,
    ) -> CollisionRisk:
        collision_config = self.config.collision
        projection_time = min(
            cpa.tcpa_minutes + collision_config.path_margin_minutes, tcpa_threshold_min
        )

        def path(vessel):
            return project_path(
                vessel,
                projection_time,
                collision_config.path_interval_minutes,
                self.config.projection,
                self.config.rot,
            )

        return CollisionRisk(
            vessel1=vessel1.identity(),
            vessel2=vessel2.identity(),
            cpa_nm=MaritimeUtils.round_half_up(cpa.cpa_nm, 2),
            tcpa_minutes=MaritimeUtils.round_half_up(cpa.tcpa_minutes, 1),
            cpa_point=cpa.cpa_point,
            vessel1_path=path(vessel1),
            vessel2_path=path(vessel2),
            turning_vessel=self.is_turning(vessel1) or self.is_turning(vessel2),
        )
