"""
Maritime Analysis Module

Collision, behavior and safety analysis over a vessel snapshot:
- Rate of turn decoding and curved-path projection
- CPA/TCPA (Closest Point of Approach / Time to Closest Point of Approach)
- Pairwise collision risk scan with A-B / B-A deduplication
- Rule-based behavior classification
- Composite navigation safety scoring

Key Components:
- CPACalculator: CPA/TCPA for a vessel pair
- CollisionRiskAnalyzer: Threshold-filtered pair scan
- BehaviorClassifier: Status/speed/ROT decision table
- NavigationSafetyAnalyzer: 0-100 risk score with recommendations
"""

from .behavior import Behavior, BehaviorClassifier, BehaviorResult, Confidence
from .collision import CollisionAnalysis, CollisionRisk, CollisionRiskAnalyzer
from .cpa_tcpa import CPACalculator, CPAResult, EncounterType
from .kinematics import ProjectedPosition, project_path, project_position
from .rot import RateOfTurn, TurnDirection, TurnIntensity, decode_rot, describe_rot
from .safety import NavigationSafetyAnalyzer, NavigationSafetyResult, RiskLevel

__all__ = [
    "CPACalculator",
    "CPAResult",
    "EncounterType",
    "CollisionRiskAnalyzer",
    "CollisionRisk",
    "CollisionAnalysis",
    "BehaviorClassifier",
    "BehaviorResult",
    "Behavior",
    "Confidence",
    "NavigationSafetyAnalyzer",
    "NavigationSafetyResult",
    "RiskLevel",
    "ProjectedPosition",
    "project_position",
    "project_path",
    "RateOfTurn",
    "TurnDirection",
    "TurnIntensity",
    "decode_rot",
    "describe_rot",
]
