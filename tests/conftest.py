"""
Pytest configuration and fixtures for vessel safety analysis tests.

Provides deterministic seeding, vessel/snapshot factory fixtures and a fixed
reference time for the synthetic weather generator.
"""

import os
import random
from typing import Any, Callable

import numpy as np
import pandas as pd
import pytest

from vessel_safety.config import AnalysisConfig
from vessel_safety.data import PositionSample, VesselState, build_snapshot


def pytest_configure(config):
    """Configure pytest with deterministic seeding."""
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "slow: integration tests")

    seed = int(os.getenv("TEST_SEED", "42"))
    random.seed(seed)
    np.random.seed(seed)


def pytest_collection_modifyitems(config, items):
    """Mark integration tests as slow, everything else as unit."""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.slow)
        if not any(item.iter_markers()):
            item.add_marker(pytest.mark.unit)


# ============================================================================
# Data Factory Fixtures
# ============================================================================


@pytest.fixture
def vessel_factory() -> Callable[..., VesselState]:
    """Factory for vessels with a position report."""

    def _make_vessel(
        mmsi: str = "123456789",
        lat: float | None = 0.0,
        lon: float | None = 0.0,
        sog: float = 10.0,
        cog: float = 0.0,
        rot: int | None = None,
        nav_status: int | None = 0,
        name: str | None = "TEST VESSEL",
        **kwargs: Any,
    ) -> VesselState:
        position = None
        if lat is not None and lon is not None:
            position = PositionSample(
                latitude=lat,
                longitude=lon,
                sog=sog,
                cog=cog,
                timestamp="2024-01-01T12:00:00Z",
                rate_of_turn=rot,
                navigational_status=nav_status,
            )
        return VesselState(mmsi=mmsi, name=name, position=position, **kwargs)

    return _make_vessel


@pytest.fixture
def snapshot_factory(vessel_factory):
    """Factory for read-only snapshots from vessel keyword dicts or VesselStates."""

    def _make_snapshot(*vessels):
        return build_snapshot(
            v if isinstance(v, VesselState) else vessel_factory(**v) for v in vessels
        )

    return _make_snapshot


@pytest.fixture
def head_on_snapshot(snapshot_factory):
    """Two vessels 0.1 deg apart on the equator steaming towards each other at 10 kn."""
    return snapshot_factory(
        {"mmsi": "111111111", "name": "ALPHA", "lat": 0.0, "lon": 0.0, "sog": 10.0, "cog": 90.0},
        {"mmsi": "222222222", "name": "BRAVO", "lat": 0.0, "lon": 0.1, "sog": 10.0, "cog": 270.0},
    )


@pytest.fixture
def fixed_time() -> pd.Timestamp:
    """Reference time for weather generation."""
    return pd.Timestamp("2024-06-01 12:00:00")


@pytest.fixture
def default_config() -> AnalysisConfig:
    return AnalysisConfig()
