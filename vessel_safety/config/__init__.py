"""Configuration module for vessel safety analysis."""

from .dataclasses import (
    AnalysisConfig,
    BehaviorConfig,
    CollisionConfig,
    CollisionScores,
    PresetName,
    ProjectionConfig,
    RotConfig,
    SafetyConfig,
    WeatherConfig,
    WeatherScores,
)
from .store import load_config, register_configs

DEFAULT_CONFIG = AnalysisConfig()

__all__ = [
    "AnalysisConfig",
    "RotConfig",
    "ProjectionConfig",
    "CollisionConfig",
    "BehaviorConfig",
    "SafetyConfig",
    "WeatherConfig",
    "CollisionScores",
    "WeatherScores",
    "PresetName",
    "DEFAULT_CONFIG",
    "load_config",
    "register_configs",
]
