"""
Deterministic synthetic sea-state and weather model.

This is not a weather feed. Values are derived from a sine-based
pseudo-random function seeded by latitude, longitude and hour of day, so the
same location queried within the same clock hour always yields identical
conditions. Callers rely on that stability between repeated queries.

Scales:
- Beaufort wind force 0-12 from wind speed in knots
- Douglas sea state 0-9 from significant wave height in meters
"""

import logging
from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

import numpy as np
import pandas as pd

from ..config import DEFAULT_CONFIG, WeatherConfig
from ..utils.maritime_utils import MaritimeUtils

logger = logging.getLogger(__name__)

# Upper bounds (exclusive) in knots for Beaufort forces 0..11; 64+ kn is force 12
BEAUFORT_LIMITS_KN = (1, 4, 7, 11, 17, 22, 28, 34, 41, 48, 56, 64)

# (upper bound in meters, Douglas code); heights past the last bound are code 9
DOUGLAS_LIMITS_M = ((0.1, 0), (0.5, 2), (1.25, 3), (2.5, 4), (4.0, 5), (6.0, 6), (9.0, 7), (14.0, 8))

BEAUFORT_DESCRIPTIONS = MappingProxyType(
    {
        0: "Calm",
        1: "Light air",
        2: "Light breeze",
        3: "Gentle breeze",
        4: "Moderate breeze",
        5: "Fresh breeze",
        6: "Strong breeze",
        7: "Near gale",
        8: "Gale",
        9: "Strong gale",
        10: "Storm",
        11: "Violent storm",
        12: "Hurricane force",
    }
)

SEA_STATE_DESCRIPTIONS = MappingProxyType(
    {
        0: "Calm (glassy)",
        1: "Calm (rippled)",
        2: "Smooth",
        3: "Slight",
        4: "Moderate",
        5: "Rough",
        6: "Very rough",
        7: "High",
        8: "Very high",
        9: "Phenomenal",
    }
)

# (upper bound in nm, description)
VISIBILITY_DESCRIPTIONS = (
    (0.5, "Dense fog"),
    (1.0, "Thick fog"),
    (2.0, "Fog"),
    (5.0, "Mist/Haze"),
    (10.0, "Moderate"),
)


class Severity(Enum):
    """Weather severity, ordered from benign to worst."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        return list(Severity).index(self)


def worst(*severities: Severity) -> Severity:
    """Most severe of the given severities."""
    return max(severities, key=lambda s: s.rank)


def wind_speed_to_beaufort(knots: float) -> int:
    """Convert wind speed in knots to Beaufort force."""
    return bisect_right(BEAUFORT_LIMITS_KN, knots)


def wave_height_to_sea_state(meters: float) -> int:
    """Convert significant wave height in meters to Douglas sea state code."""
    for upper, code in DOUGLAS_LIMITS_M:
        if meters < upper:
            return code
    return 9


def visibility_description(nm: float) -> str:
    for upper, description in VISIBILITY_DESCRIPTIONS:
        if nm < upper:
            return description
    return "Good"


def wind_severity(beaufort: int) -> Severity:
    if beaufort >= 10:
        return Severity.SEVERE
    if beaufort >= 8:
        return Severity.HIGH
    if beaufort >= 6:
        return Severity.MODERATE
    return Severity.LOW


def sea_severity(sea_state: int) -> Severity:
    if sea_state >= 7:
        return Severity.SEVERE
    if sea_state >= 5:
        return Severity.HIGH
    if sea_state >= 4:
        return Severity.MODERATE
    return Severity.LOW


def visibility_severity(visibility_nm: float) -> Severity:
    if visibility_nm < 0.5:
        return Severity.SEVERE
    if visibility_nm < 2:
        return Severity.HIGH
    if visibility_nm < 5:
        return Severity.MODERATE
    return Severity.LOW


class SeededRandom:
    """frac(sin(seed + offset) * 10000): cheap, repeatable, location-seeded noise."""

    def __init__(self, seed: float):
        self.seed = seed

    @classmethod
    def for_location(cls, lat: float, lon: float, hour: int, extra: float = 0.0) -> "SeededRandom":
        return cls(abs(lat * 1000 + lon * 100 + hour + extra))

    def __call__(self, offset: int) -> float:
        x = np.sin(self.seed + offset) * 10000
        return float(x - np.floor(x))


def _r1(value: float) -> float:
    return MaritimeUtils.round_half_up(value, 1)


@dataclass(frozen=True)
class SeaConditions:
    """Synthetic sea and weather conditions at a location."""

    latitude: float
    longitude: float
    timestamp: str
    wind_speed: float  # knots
    wind_direction: int  # degrees
    gust_speed: float | None
    beaufort: int
    wave_height: float  # meters
    wave_period: float  # seconds
    wave_direction: int
    sea_state: int
    swell: dict[str, float] | None
    visibility: float  # nautical miles
    air_temperature: float  # Celsius
    sea_temperature: float
    pressure: float  # hPa
    pressure_trend: str
    warnings: list[str] = field(default_factory=list)

    @property
    def severity(self) -> Severity:
        return worst(
            wind_severity(self.beaufort),
            sea_severity(self.sea_state),
            visibility_severity(self.visibility),
        )

    @property
    def summary(self) -> str:
        text = f"{BEAUFORT_DESCRIPTIONS[self.beaufort]} winds"
        if self.sea_state >= 4:
            text += f", {SEA_STATE_DESCRIPTIONS[self.sea_state].lower()} seas"
        if self.visibility < 5:
            text += f", {visibility_description(self.visibility).lower()} visibility"
        return text

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        result = {
            "location": {"latitude": self.latitude, "longitude": self.longitude},
            "timestamp": self.timestamp,
            "wind": {
                "speed": self.wind_speed,
                "direction": self.wind_direction,
                "beaufortScale": self.beaufort,
                "description": BEAUFORT_DESCRIPTIONS[self.beaufort],
            },
            "waves": {
                "height": self.wave_height,
                "period": self.wave_period,
                "direction": self.wave_direction,
                "description": SEA_STATE_DESCRIPTIONS[self.sea_state],
            },
            "seaState": {
                "code": self.sea_state,
                "description": SEA_STATE_DESCRIPTIONS[self.sea_state],
            },
            "visibility": {
                "distance": self.visibility,
                "description": visibility_description(self.visibility),
            },
            "temperature": {"air": self.air_temperature, "seaSurface": self.sea_temperature},
            "pressure": {"value": self.pressure, "trend": self.pressure_trend},
            "conditions": self.summary,
            "severity": self.severity.value,
        }
        if self.gust_speed is not None:
            result["wind"]["gustSpeed"] = self.gust_speed
        if self.swell is not None:
            result["swell"] = dict(self.swell)
        if self.warnings:
            result["warnings"] = list(self.warnings)
        return result


@dataclass(frozen=True)
class WeatherImpact:
    """Weather severity and its effect on navigation at a vessel position."""

    severity: Severity
    factors: list[str]
    recommendations: list[str]
    wind_speed: float
    beaufort: int
    wind_impact: str
    wave_height: float
    sea_state: int
    sea_impact: str
    visibility: float
    visibility_impact: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "factors": list(self.factors),
            "recommendations": list(self.recommendations),
            "windEffect": {
                "speed": self.wind_speed,
                "beaufort": self.beaufort,
                "impact": self.wind_impact,
            },
            "seaStateEffect": {
                "waveHeight": self.wave_height,
                "seaState": self.sea_state,
                "impact": self.sea_impact,
            },
            "visibilityEffect": {
                "distance": self.visibility,
                "impact": self.visibility_impact,
            },
        }


class SeaStateGenerator:
    """
    Generates deterministic synthetic conditions, impacts and forecasts.

    Hour of day comes from ``when`` (default: local now), so two calls for the
    same location within one clock hour agree exactly.
    """

    def __init__(self, config: WeatherConfig = DEFAULT_CONFIG.weather):
        self.config = config

    @staticmethod
    def _resolve_time(when: pd.Timestamp | None) -> pd.Timestamp:
        return pd.Timestamp.now() if when is None else pd.Timestamp(when)

    @staticmethod
    def _wind_speed(lat: float, rand: SeededRandom) -> float:
        # Stronger winds at higher latitudes
        return _r1(5 + abs(lat) / 10 + rand(1) * 15)

    def generate(self, lat: float, lon: float, when: pd.Timestamp | None = None) -> SeaConditions:
        """
        Generate sea conditions at a location.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees
            when: Reference time (default: now)

        Returns:
            SeaConditions
        """
        when = self._resolve_time(when)
        rand = SeededRandom.for_location(lat, lon, when.hour)

        wind_speed = self._wind_speed(lat, rand)
        wind_direction = MaritimeUtils.round_half_up(rand(2) * 360)
        gust_speed = _r1(wind_speed + rand(3) * 10) if wind_speed > 15 else None
        beaufort = wind_speed_to_beaufort(wind_speed)

        # Waves follow the wind
        wave_height = _r1(wind_speed / 10 + rand(4) * 1.5)
        wave_period = _r1(5 + rand(5) * 8)
        wave_direction = (wind_direction + MaritimeUtils.round_half_up(rand(6) * 30 - 15) + 360) % 360
        sea_state = wave_height_to_sea_state(wave_height)

        swell = None
        if rand(7) > 0.4:
            swell = {
                "height": _r1(0.5 + rand(8) * 2),
                "period": _r1(8 + rand(9) * 6),
                "direction": MaritimeUtils.round_half_up(rand(10) * 360),
            }

        visibility = _r1(10 + rand(11) * 15)

        air_temperature = _r1(25 - abs(lat) / 3 + rand(12) * 10 - 5)
        sea_temperature = _r1(air_temperature - 2 + rand(13) * 4)

        pressure = _r1(1013 + rand(14) * 30 - 15)
        trend_draw = rand(15)
        if trend_draw < 0.33:
            pressure_trend = "falling"
        elif trend_draw < 0.66:
            pressure_trend = "steady"
        else:
            pressure_trend = "rising"

        warnings = []
        if beaufort >= 7:
            warnings.append(f"Gale warning: Wind force {beaufort}")
        if wave_height >= 4:
            warnings.append(f"Heavy seas warning: Wave height {wave_height}m")
        if visibility < 2:
            warnings.append(f"Restricted visibility: {visibility} nm")

        return SeaConditions(
            latitude=lat,
            longitude=lon,
            timestamp=when.isoformat(),
            wind_speed=wind_speed,
            wind_direction=wind_direction,
            gust_speed=gust_speed,
            beaufort=beaufort,
            wave_height=wave_height,
            wave_period=wave_period,
            wave_direction=wave_direction,
            sea_state=sea_state,
            swell=swell,
            visibility=visibility,
            air_temperature=air_temperature,
            sea_temperature=sea_temperature,
            pressure=pressure,
            pressure_trend=pressure_trend,
            warnings=warnings,
        )

    def impact(self, lat: float, lon: float, when: pd.Timestamp | None = None) -> WeatherImpact:
        """
        Assess how conditions at a position affect navigation.

        Severity is the worst of the wind, sea and visibility severities.
        """
        conditions = self.generate(lat, lon, when)
        wind_speed = conditions.wind_speed
        beaufort = conditions.beaufort
        wave_height = conditions.wave_height
        sea_state = conditions.sea_state
        visibility = conditions.visibility

        factors = []
        recommendations = []

        if beaufort >= 10:
            wind_impact = f"Storm force winds ({wind_speed} kts, Beaufort {beaufort}) - Extremely dangerous"
            factors.append("Storm force winds")
            recommendations.append("Seek shelter immediately if possible")
        elif beaufort >= 8:
            wind_impact = f"Gale force winds ({wind_speed} kts, Beaufort {beaufort}) - Dangerous conditions"
            factors.append("Gale force winds")
            recommendations.append("Reduce speed and secure all loose equipment")
        elif beaufort >= 6:
            wind_impact = f"Strong winds ({wind_speed} kts, Beaufort {beaufort}) - Challenging conditions"
            factors.append("Strong winds")
            recommendations.append("Exercise caution, monitor conditions")
        elif beaufort >= 4:
            wind_impact = f"Moderate winds ({wind_speed} kts, Beaufort {beaufort}) - Normal operations"
        else:
            wind_impact = f"Light winds ({wind_speed} kts, Beaufort {beaufort}) - Favorable conditions"

        if sea_state >= 7:
            sea_impact = f"Very high seas ({wave_height}m waves) - Extremely hazardous"
            factors.append("Very high seas")
            recommendations.append("Alter course to minimize beam seas if possible")
        elif sea_state >= 5:
            sea_impact = f"Rough seas ({wave_height}m waves) - Difficult conditions"
            factors.append("Rough seas")
            recommendations.append("Reduce speed to prevent structural stress")
        elif sea_state >= 4:
            sea_impact = f"Moderate seas ({wave_height}m waves) - Some discomfort"
        else:
            sea_impact = f"Calm to slight seas ({wave_height}m waves) - Good conditions"

        if visibility < 0.5:
            visibility_impact = f"Dense fog ({visibility} nm visibility) - Navigation extremely hazardous"
            factors.append("Dense fog")
            recommendations.append("Sound fog signals, post extra lookouts, reduce to safe speed")
        elif visibility < 2:
            visibility_impact = f"Poor visibility ({visibility} nm) - Restricted visibility rules apply"
            factors.append("Restricted visibility")
            recommendations.append("Apply COLREGS Rule 19, use radar, reduce speed")
        elif visibility < 5:
            visibility_impact = f"Moderate visibility ({visibility} nm) - Exercise caution"
        else:
            visibility_impact = f"Good visibility ({visibility} nm) - Clear conditions"

        return WeatherImpact(
            severity=conditions.severity,
            factors=factors,
            recommendations=recommendations,
            wind_speed=wind_speed,
            beaufort=beaufort,
            wind_impact=wind_impact,
            wave_height=wave_height,
            sea_state=sea_state,
            sea_impact=sea_impact,
            visibility=visibility,
            visibility_impact=visibility_impact,
        )

    def forecast(
        self,
        lat: float,
        lon: float,
        hours: int | None = None,
        when: pd.Timestamp | None = None,
    ) -> list[dict[str, Any]]:
        """
        Generate a forecast in fixed-interval periods.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees
            hours: Forecast horizon (default from config)
            when: Start time (default: now)

        Returns:
            List of forecast period dictionaries, first period at ``when``
        """
        if hours is None:
            hours = self.config.default_forecast_hours
        interval = self.config.forecast_interval_hours
        start = self._resolve_time(when)
        periods_count = min(int(np.ceil(hours / interval)), self.config.max_forecast_periods)

        forecast = []
        for i in range(periods_count):
            forecast_time = start + pd.Timedelta(hours=i * interval)
            rand = SeededRandom.for_location(lat, lon, forecast_time.hour, extra=i * 7)

            wind_speed = self._wind_speed(lat, rand)
            wind_direction = MaritimeUtils.round_half_up(rand(2) * 360)
            wave_height = _r1(wind_speed / 10 + rand(4) * 1.5)

            wind = {"speed": wind_speed, "direction": wind_direction}
            if wind_speed > 15:
                wind["gustSpeed"] = _r1(wind_speed + rand(3) * 10)

            forecast.append(
                {
                    "time": forecast_time.isoformat(),
                    "wind": wind,
                    "waves": {
                        "height": wave_height,
                        "period": _r1(5 + rand(5) * 8),
                        "direction": (
                            wind_direction + MaritimeUtils.round_half_up(rand(6) * 30 - 15) + 360
                        )
                        % 360,
                    },
                    "visibility": _r1(10 + rand(7) * 15),
                    "precipitation": _r1(rand(9) * 10) if rand(8) > 0.7 else 0,
                    "conditions": BEAUFORT_DESCRIPTIONS[wind_speed_to_beaufort(wind_speed)],
                }
            )

        logger.debug(f"Generated {len(forecast)} forecast periods for ({lat}, {lon})")
        return forecast
