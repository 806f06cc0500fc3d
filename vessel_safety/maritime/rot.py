"""
AIS Rate of Turn (ROT) decoding.

AIS transmits turn rate as ROT_ais = 4.733 * sqrt(ROT), signed, in the range
-127..127. -128 means no turn information is available, and +/-127 means the
vessel is turning at 720 deg/min or more (no turn indicator fitted).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from ..config import DEFAULT_CONFIG, RotConfig
from ..data.schema import ROT_NOT_AVAILABLE

ROT_SATURATION_CODE = 127


class TurnDirection(Enum):
    """Direction of turn (positive ROT = starboard = right)."""

    LEFT = "left"
    RIGHT = "right"
    UNKNOWN = "unknown"


class TurnIntensity(Enum):
    """Coarse turn-rate bucket."""

    NONE = "none"
    SLIGHT = "slight"
    MODERATE = "moderate"
    SHARP = "sharp"


@dataclass(frozen=True)
class RateOfTurn:
    """Decoded rate of turn."""

    deg_per_min: float
    direction: TurnDirection
    intensity: TurnIntensity
    saturated: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "degPerMin": self.deg_per_min,
            "direction": self.direction.value,
            "intensity": self.intensity.value,
            "saturated": self.saturated,
        }


def decode_rot(rot: int | None, config: RotConfig = DEFAULT_CONFIG.rot) -> float | None:
    """
    Decode an AIS ROT value to degrees per minute.

    Args:
        rot: AIS-encoded rate of turn, or None
        config: Decoding constants

    Returns:
        Signed degrees per minute (positive = turning right), or None if no
        turn data is available
    """
    if rot is None or rot == ROT_NOT_AVAILABLE:
        return None

    sign = 1.0 if rot >= 0 else -1.0
    magnitude = abs(rot)

    if magnitude >= ROT_SATURATION_CODE:
        return sign * config.saturation_deg_per_min

    return float(sign * np.power(magnitude / config.scale, 2))


def classify_intensity(deg_per_min: float, config: RotConfig = DEFAULT_CONFIG.rot) -> TurnIntensity:
    """Bucket a decoded turn rate by magnitude."""
    magnitude = abs(deg_per_min)
    if magnitude < config.none_below:
        return TurnIntensity.NONE
    if magnitude < config.slight_below:
        return TurnIntensity.SLIGHT
    if magnitude < config.moderate_below:
        return TurnIntensity.MODERATE
    return TurnIntensity.SHARP


def describe_rot(rot: int | None, config: RotConfig = DEFAULT_CONFIG.rot) -> RateOfTurn | None:
    """
    Decode an AIS ROT value with direction and intensity.

    Direction is reported as unknown while the rate is below the 'none'
    intensity bucket, since sensor noise dominates there.
    """
    deg_per_min = decode_rot(rot, config)
    if deg_per_min is None:
        return None

    intensity = classify_intensity(deg_per_min, config)
    if intensity is TurnIntensity.NONE:
        direction = TurnDirection.UNKNOWN
    else:
        direction = TurnDirection.RIGHT if deg_per_min > 0 else TurnDirection.LEFT

    return RateOfTurn(
        deg_per_min=deg_per_min,
        direction=direction,
        intensity=intensity,
        saturated=abs(rot) >= ROT_SATURATION_CODE,
    )
