"""
Hydra ConfigStore registration.

Registers the analysis configuration tree and its named presets with
Hydra's ConfigStore, and resolves presets plus dot-list overrides into a
validated AnalysisConfig.
"""

import logging
from typing import Any

from hydra.core.config_store import ConfigStore
from omegaconf import OmegaConf

from .dataclasses import (
    AnalysisConfig,
    CollisionConfig,
    PresetName,
    SafetyConfig,
)

logger = logging.getLogger(__name__)

CONFIG_GROUP = "analysis"


def _preset_nodes() -> dict[str, dict[str, Any]]:
    """Build the plain-dict node for each preset."""
    default = AnalysisConfig().model_dump()

    # Tighter watch: wider CPA ring, longer look-ahead
    strict = AnalysisConfig(
        collision=CollisionConfig(cpa_threshold_nm=1.0, tcpa_threshold_min=45.0),
        safety=SafetyConfig(report_cpa_nm=1.5, tcpa_window_min=45.0),
    ).model_dump()

    # Open sea: fewer, closer encounters matter
    open_water = AnalysisConfig(
        collision=CollisionConfig(cpa_threshold_nm=0.25, tcpa_threshold_min=20.0),
        safety=SafetyConfig(tcpa_window_min=20.0),
    ).model_dump()

    return {
        PresetName.DEFAULT.value: default,
        PresetName.STRICT.value: strict,
        PresetName.OPEN_WATER.value: open_water,
    }


def register_configs():
    """Register all configuration presets with Hydra ConfigStore."""
    cs = ConfigStore.instance()

    nodes = _preset_nodes()
    cs.store(name="config", node={CONFIG_GROUP: nodes[PresetName.DEFAULT.value]})
    for name, node in nodes.items():
        cs.store(group=CONFIG_GROUP, name=name, node=node)

    logger.debug(f"Registered {len(nodes)} analysis presets")


def load_config(
    preset: str | PresetName = PresetName.DEFAULT,
    overrides: list[str] | dict[str, Any] | None = None,
) -> AnalysisConfig:
    """
    Resolve a preset plus overrides into a validated configuration.

    Args:
        preset: Preset name ('default', 'strict', 'open_water')
        overrides: Dot-list strings such as ``"collision.cpa_threshold_nm=1.0"``
            or a nested mapping merged on top of the preset

    Returns:
        Validated AnalysisConfig

    Raises:
        ValueError: If the preset is unknown or the merged values fail validation
    """
    preset_name = PresetName(preset).value
    base = OmegaConf.create(_preset_nodes()[preset_name])

    if overrides is None:
        merged = base
    elif isinstance(overrides, dict):
        merged = OmegaConf.merge(base, OmegaConf.create(overrides))
    else:
        merged = OmegaConf.merge(base, OmegaConf.from_dotlist(list(overrides)))

    return AnalysisConfig.model_validate(OmegaConf.to_container(merged, resolve=True))
