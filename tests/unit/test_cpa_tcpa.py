"""
Unit tests for CPA/TCPA calculations.

Tests cover encounter geometries with known outcomes.
"""

import math

import pytest

from vessel_safety.maritime.cpa_tcpa import CPACalculator, CPAResult, EncounterType


class TestCPAResult:
    """Test CPAResult dataclass functionality."""

    def test_to_dict(self):
        result = CPAResult(
            cpa_nm=0.3,
            tcpa_minutes=12.0,
            cpa_latitude=55.0,
            cpa_longitude=12.0,
            encounter_type=EncounterType.APPROACHING,
        )

        assert result.to_dict() == {
            "cpaNm": 0.3,
            "tcpaMinutes": 12.0,
            "cpaPoint": {"latitude": 55.0, "longitude": 12.0},
            "encounterType": "approaching",
        }

    def test_converges(self):
        def make(tcpa):
            return CPAResult(1.0, tcpa, 0.0, 0.0, EncounterType.APPROACHING)

        assert make(5.0).converges
        assert make(0.0).converges
        assert not make(-5.0).converges
        assert not make(float("inf")).converges


class TestCPACalculator:
    """Test CPA/TCPA calculation functionality."""

    def setup_method(self):
        self.calculator = CPACalculator()

    def test_missing_position(self, vessel_factory):
        v1 = vessel_factory(mmsi="111111111")
        v2 = vessel_factory(mmsi="222222222", lat=None, lon=None)
        assert self.calculator.calculate(v1, v2) is None
        assert self.calculator.calculate(v2, v1) is None

    def test_head_on(self, head_on_snapshot):
        """0.1 deg apart at the equator (6 nm), 20 kn closing speed: 18 minutes."""
        v1 = head_on_snapshot["111111111"]
        v2 = head_on_snapshot["222222222"]
        result = self.calculator.calculate(v1, v2)

        assert result.tcpa_minutes == pytest.approx(18.0, abs=0.01)
        assert result.cpa_nm == pytest.approx(0.0, abs=1e-6)
        assert result.encounter_type is EncounterType.APPROACHING
        assert result.cpa_latitude == pytest.approx(0.0, abs=1e-9)
        assert result.cpa_longitude == pytest.approx(0.05, abs=1e-6)

    def test_symmetric_in_time_and_distance(self, head_on_snapshot):
        v1 = head_on_snapshot["111111111"]
        v2 = head_on_snapshot["222222222"]
        forward = self.calculator.calculate(v1, v2)
        backward = self.calculator.calculate(v2, v1)

        assert forward.tcpa_minutes == pytest.approx(backward.tcpa_minutes)
        assert forward.cpa_nm == pytest.approx(backward.cpa_nm)

    def test_crossing_at_right_angles(self, vessel_factory):
        """Both reach the origin after 30 minutes."""
        # 5 nm south heading north, 5 nm west heading east, both at 10 kn
        v1 = vessel_factory(mmsi="111111111", lat=-5 / 60, lon=0.0, sog=10.0, cog=0.0)
        v2 = vessel_factory(mmsi="222222222", lat=0.0, lon=-5 / 60, sog=10.0, cog=90.0)
        result = self.calculator.calculate(v1, v2)

        assert result.tcpa_minutes == pytest.approx(30.0, rel=1e-3)
        assert result.cpa_nm == pytest.approx(0.0, abs=0.01)

    def test_receding(self, vessel_factory):
        v1 = vessel_factory(mmsi="111111111", lat=0.0, lon=0.0, sog=10.0, cog=270.0)
        v2 = vessel_factory(mmsi="222222222", lat=0.0, lon=0.1, sog=10.0, cog=90.0)
        result = self.calculator.calculate(v1, v2)

        assert result.tcpa_minutes < 0
        assert result.encounter_type is EncounterType.RECEDING
        assert not result.converges

    def test_offset_passing(self, vessel_factory):
        """Opposite courses on parallel tracks 1 nm apart pass at 1 nm."""
        v1 = vessel_factory(mmsi="111111111", lat=0.0, lon=0.0, sog=10.0, cog=90.0)
        v2 = vessel_factory(mmsi="222222222", lat=1 / 60, lon=0.1, sog=10.0, cog=270.0)
        result = self.calculator.calculate(v1, v2)

        assert result.cpa_nm == pytest.approx(1.0, rel=1e-3)
        assert result.tcpa_minutes == pytest.approx(18.0, rel=1e-3)

    def test_both_stationary(self, vessel_factory):
        v1 = vessel_factory(mmsi="111111111", lat=0.0, lon=0.0, sog=0.0)
        v2 = vessel_factory(mmsi="222222222", lat=1.0, lon=0.0, sog=0.0)
        result = self.calculator.calculate(v1, v2)

        assert result.encounter_type is EncounterType.STATIONARY
        assert result.tcpa_minutes == 0.0
        assert result.cpa_nm == pytest.approx(60.04, abs=0.01)
        assert result.cpa_point == {"latitude": 0.0, "longitude": 0.0}

    def test_identical_velocity(self, vessel_factory):
        """Same course and speed: separation never changes, TCPA is infinite."""
        v1 = vessel_factory(mmsi="111111111", lat=0.0, lon=0.0, sog=12.0, cog=45.0)
        v2 = vessel_factory(mmsi="222222222", lat=0.0, lon=0.1, sog=12.0, cog=45.0)
        result = self.calculator.calculate(v1, v2)

        assert result.encounter_type is EncounterType.PARALLEL
        assert math.isinf(result.tcpa_minutes)
        assert result.cpa_nm == pytest.approx(6.0, abs=0.01)
        assert not result.converges

    def test_one_vessel_stopped(self, vessel_factory):
        """A moving vessel heading straight for a stopped one."""
        v1 = vessel_factory(mmsi="111111111", lat=0.0, lon=0.0, sog=12.0, cog=90.0)
        v2 = vessel_factory(mmsi="222222222", lat=0.0, lon=0.1, sog=0.0, cog=0.0)
        result = self.calculator.calculate(v1, v2)

        assert result.tcpa_minutes == pytest.approx(30.0, rel=1e-3)
        assert result.cpa_nm == pytest.approx(0.0, abs=1e-6)
