"""
Synthetic, deterministic sea-state and weather model.
"""

from .sea_state import (
    BEAUFORT_DESCRIPTIONS,
    SEA_STATE_DESCRIPTIONS,
    SeaConditions,
    SeaStateGenerator,
    Severity,
    WeatherImpact,
    visibility_description,
    wave_height_to_sea_state,
    wind_speed_to_beaufort,
)

__all__ = [
    "SeaStateGenerator",
    "SeaConditions",
    "WeatherImpact",
    "Severity",
    "BEAUFORT_DESCRIPTIONS",
    "SEA_STATE_DESCRIPTIONS",
    "wind_speed_to_beaufort",
    "wave_height_to_sea_state",
    "visibility_description",
]
