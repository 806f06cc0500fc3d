"""
Composite navigation safety scoring.

Combines collision risk, synthetic weather severity, declared vessel status
and speed-for-conditions rules into a 0-100 risk score per vessel:

    collision:   +30 (CPA < 0.25 nm), +15 (< 0.5 nm), +5 (< 1.0 nm) per pair
    weather:     +40 severe, +25 high, +10 moderate
    status:      +20 Not Under Command, +10 Restricted Maneuverability,
                 +30 Aground (and never below the 'high' bucket)
    speed:       +10 above 15 kn in non-low weather, otherwise
                 +15 above 20 kn with visibility under 5 nm

The score is capped at 100 and bucketed into low/moderate/high/critical.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import pandas as pd

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..data.models import VesselSnapshot, VesselState, positioned_vessels
from ..data.schema import NavStatus, nav_status_name
from ..utils.maritime_utils import MaritimeUtils
from ..weather.sea_state import SeaStateGenerator, Severity, WeatherImpact
from .collision import CollisionRiskAnalyzer

logger = logging.getLogger(__name__)


class RiskLevel(Enum):
    """Overall navigation risk bucket."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class FactorStatus(Enum):
    """Status of a single safety factor."""

    SAFE = "safe"
    CAUTION = "caution"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class SafetyFactor:
    factor: str
    status: FactorStatus
    details: str

    def to_dict(self) -> dict[str, str]:
        return {"factor": self.factor, "status": self.status.value, "details": self.details}


@dataclass
class NavigationSafetyResult:
    """Safety assessment of one vessel."""

    vessel: VesselState
    risk_score: int = 0
    overall_risk: RiskLevel = RiskLevel.LOW
    collision_risks: list[dict[str, Any]] = field(default_factory=list)
    weather_impact: WeatherImpact | None = None
    safety_factors: list[SafetyFactor] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def recommend(self, text: str):
        """Add a recommendation once, keeping first-seen order."""
        if text not in self.recommendations:
            self.recommendations.append(text)

    def to_dict(self) -> dict[str, Any]:
        pos = self.vessel.position
        result = {
            "vessel": {
                "mmsi": self.vessel.mmsi,
                "name": self.vessel.name,
                "position": pos.to_point(),
                "speed": pos.sog,
                "course": pos.cog,
            },
            "overallRisk": self.overall_risk.value,
            "riskScore": self.risk_score,
            "collisionRisks": [dict(r) for r in self.collision_risks],
            "safetyFactors": [f.to_dict() for f in self.safety_factors],
            "recommendations": list(self.recommendations),
        }
        if self.weather_impact is not None:
            result["weatherImpact"] = self.weather_impact.to_dict()
        return result


class NavigationSafetyAnalyzer:
    """Scores navigation safety for one vessel or the leading vessels of a snapshot."""

    def __init__(
        self,
        config: AnalysisConfig = DEFAULT_CONFIG,
        weather: SeaStateGenerator | None = None,
    ):
        self.config = config
        self.collisions = CollisionRiskAnalyzer(config)
        self.weather = weather if weather is not None else SeaStateGenerator(config.weather)

    def risk_level(self, score: int) -> RiskLevel:
        cfg = self.config.safety
        if score >= cfg.critical_score:
            return RiskLevel.CRITICAL
        if score >= cfg.high_score:
            return RiskLevel.HIGH
        if score >= cfg.moderate_score:
            return RiskLevel.MODERATE
        return RiskLevel.LOW

    def assess_vessel(
        self,
        vessel: VesselState,
        snapshot: VesselSnapshot,
        include_weather: bool = True,
        when: pd.Timestamp | None = None,
    ) -> NavigationSafetyResult:
        """
        Assess a single positioned vessel against the rest of the snapshot.

        Args:
            vessel: Vessel to assess (must have a position)
            snapshot: Vessel snapshot providing the surrounding traffic
            include_weather: Include synthetic weather in the score
            when: Reference time for the weather model (default: now)

        Returns:
            NavigationSafetyResult
        """
        result = NavigationSafetyResult(vessel=vessel)
        score = self._score_collisions(result, snapshot)
        if include_weather:
            score += self._score_weather(result, when)
        score += self._score_status(result)
        if include_weather:
            score += self._score_speed(result)

        if vessel.position.navigational_status == NavStatus.AGROUND:
            score = max(score, self.config.safety.aground_min_score)

        result.risk_score = min(100, score)
        result.overall_risk = self.risk_level(result.risk_score)
        return result

    def _score_collisions(self, result: NavigationSafetyResult, snapshot: VesselSnapshot) -> int:
        cfg = self.config.safety
        score = 0
        for other, cpa in self.collisions.encounters(result.vessel, snapshot):
            if not 0 <= cpa.tcpa_minutes <= cfg.tcpa_window_min:
                continue
            if cpa.cpa_nm >= cfg.report_cpa_nm:
                continue

            if cpa.cpa_nm < cfg.high_risk_cpa_nm:
                level = "high"
            elif cpa.cpa_nm < cfg.moderate_risk_cpa_nm:
                level = "moderate"
            else:
                level = "low"
            score += getattr(cfg.collision_scores, level)

            result.collision_risks.append(
                {
                    "otherVessel": other.identity(),
                    "cpaNm": MaritimeUtils.round_half_up(cpa.cpa_nm, 2),
                    "tcpaMinutes": MaritimeUtils.round_half_up(cpa.tcpa_minutes, 1),
                    "riskLevel": level,
                }
            )

        risks = result.collision_risks
        if risks:
            high_risk = sum(1 for r in risks if r["riskLevel"] == "high")
            if high_risk > 0:
                status = FactorStatus.DANGER
            elif len(risks) > 2:
                status = FactorStatus.WARNING
            else:
                status = FactorStatus.CAUTION
            result.safety_factors.append(
                SafetyFactor(
                    "Collision Risk",
                    status,
                    f"{len(risks)} vessel(s) within CPA threshold, {high_risk} high-risk",
                )
            )
            if high_risk > 0:
                result.recommend("Immediate course/speed alteration recommended to increase CPA")
        else:
            result.safety_factors.append(
                SafetyFactor("Collision Risk", FactorStatus.SAFE, "No vessels within dangerous CPA range")
            )
        return score

    def _score_weather(self, result: NavigationSafetyResult, when) -> int:
        pos = result.vessel.position
        impact = self.weather.impact(pos.latitude, pos.longitude, when)
        result.weather_impact = impact

        if impact.beaufort >= 8:
            wind_status = FactorStatus.DANGER
        elif impact.beaufort >= 6:
            wind_status = FactorStatus.WARNING
        elif impact.beaufort >= 4:
            wind_status = FactorStatus.CAUTION
        else:
            wind_status = FactorStatus.SAFE

        if impact.sea_state >= 6:
            sea_status = FactorStatus.DANGER
        elif impact.sea_state >= 4:
            sea_status = FactorStatus.WARNING
        elif impact.sea_state >= 3:
            sea_status = FactorStatus.CAUTION
        else:
            sea_status = FactorStatus.SAFE

        if impact.visibility < 1:
            visibility_status = FactorStatus.DANGER
        elif impact.visibility < 3:
            visibility_status = FactorStatus.WARNING
        elif impact.visibility < 5:
            visibility_status = FactorStatus.CAUTION
        else:
            visibility_status = FactorStatus.SAFE

        result.safety_factors.extend(
            [
                SafetyFactor("Wind Conditions", wind_status, impact.wind_impact),
                SafetyFactor("Sea State", sea_status, impact.sea_impact),
                SafetyFactor("Visibility", visibility_status, impact.visibility_impact),
            ]
        )
        for recommendation in impact.recommendations:
            result.recommend(recommendation)

        return getattr(self.config.safety.weather_scores, impact.severity.value)

    def _score_status(self, result: NavigationSafetyResult) -> int:
        cfg = self.config.safety
        nav_status = result.vessel.position.navigational_status
        if nav_status is None:
            nav_status = NavStatus.NOT_DEFINED

        if nav_status == NavStatus.NOT_UNDER_COMMAND:
            result.safety_factors.append(
                SafetyFactor(
                    "Vessel Status",
                    FactorStatus.DANGER,
                    "Vessel is Not Under Command - limited maneuverability",
                )
            )
            result.recommend("Vessel has limited maneuverability - other vessels should keep clear")
            return cfg.not_under_command_score

        if nav_status == NavStatus.RESTRICTED_MANEUVERABILITY:
            result.safety_factors.append(
                SafetyFactor("Vessel Status", FactorStatus.WARNING, "Vessel has Restricted Maneuverability")
            )
            return cfg.restricted_maneuverability_score

        if nav_status == NavStatus.AGROUND:
            result.safety_factors.append(
                SafetyFactor("Vessel Status", FactorStatus.DANGER, "Vessel is Aground")
            )
            result.recommend("Emergency: Vessel is aground - assistance may be required")
            return cfg.aground_score

        result.safety_factors.append(
            SafetyFactor(
                "Vessel Status",
                FactorStatus.SAFE,
                f"Normal operations ({nav_status_name(nav_status)})",
            )
        )
        return 0

    def _score_speed(self, result: NavigationSafetyResult) -> int:
        cfg = self.config.safety
        sog = result.vessel.position.sog
        impact = result.weather_impact

        if sog > cfg.speed_weather_limit_kn and impact.severity is not Severity.LOW:
            result.safety_factors.append(
                SafetyFactor(
                    "Speed for Conditions",
                    FactorStatus.WARNING,
                    f"High speed ({sog} kts) in {impact.severity.value} weather conditions",
                )
            )
            result.recommend("Consider reducing speed given current weather conditions")
            return cfg.speed_weather_score

        if sog > cfg.speed_visibility_limit_kn and impact.visibility < cfg.visibility_limit_nm:
            result.safety_factors.append(
                SafetyFactor(
                    "Speed for Visibility",
                    FactorStatus.WARNING,
                    f"High speed ({sog} kts) with reduced visibility ({impact.visibility} nm)",
                )
            )
            result.recommend("Reduce speed to safe level for current visibility")
            return cfg.speed_visibility_score

        return 0

    def analyze(
        self,
        snapshot: VesselSnapshot,
        mmsi: str | None = None,
        include_weather: bool = True,
        when: pd.Timestamp | None = None,
    ) -> dict[str, Any]:
        """
        Analyze navigation safety.

        Args:
            snapshot: Vessel snapshot (not modified)
            mmsi: Analyze only this vessel; otherwise the first positioned
                vessels up to the configured cap
            include_weather: Include weather and speed-for-conditions rules
            when: Reference time for the weather model (default: now)

        Returns:
            Dictionary with 'success', 'results', 'summary', 'timestamp' and,
            on failure, 'error'
        """
        error = None
        if mmsi:
            vessel = snapshot.get(mmsi)
            targets = [vessel] if vessel is not None and vessel.position is not None else []
            if vessel is None:
                error = f"Vessel {mmsi} not found"
            elif vessel.position is None:
                error = f"Vessel {vessel.display_name} has no position data"
        else:
            targets = positioned_vessels(snapshot)[: self.config.safety.max_vessels]
            if not targets:
                error = "No vessels available for analysis"

        summary = {
            "totalAnalyzed": 0,
            "criticalRisk": 0,
            "highRisk": 0,
            "moderateRisk": 0,
            "lowRisk": 0,
            "weatherWarnings": [],
        }
        timestamp = pd.Timestamp.now(tz="UTC").isoformat()

        if error is not None:
            logger.info(f"Navigation safety analysis skipped: {error}")
            return {
                "success": False,
                "results": [],
                "summary": summary,
                "timestamp": timestamp,
                "error": error,
            }

        results = []
        bucket_keys = {
            RiskLevel.CRITICAL: "criticalRisk",
            RiskLevel.HIGH: "highRisk",
            RiskLevel.MODERATE: "moderateRisk",
            RiskLevel.LOW: "lowRisk",
        }
        for vessel in targets:
            result = self.assess_vessel(vessel, snapshot, include_weather, when)
            results.append(result)
            summary[bucket_keys[result.overall_risk]] += 1

            impact = result.weather_impact
            if impact is not None and impact.severity in (Severity.HIGH, Severity.SEVERE):
                for factor in impact.factors:
                    if factor not in summary["weatherWarnings"]:
                        summary["weatherWarnings"].append(factor)

        results.sort(key=lambda r: r.risk_score, reverse=True)
        summary["totalAnalyzed"] = len(results)
        logger.info(
            f"Navigation safety: {len(results)} vessel(s), "
            f"{summary['criticalRisk']} critical, {summary['highRisk']} high"
        )

        return {
            "success": True,
            "results": [r.to_dict() for r in results],
            "summary": summary,
            "timestamp": timestamp,
        }
