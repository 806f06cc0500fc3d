"""
Tests for the vessel data model and snapshot helpers.
"""

from types import MappingProxyType

import pytest

from vessel_safety.data import (
    PositionSample,
    VesselState,
    build_snapshot,
    nav_status_name,
    positioned_vessels,
    snapshot_to_frame,
)


def record(mmsi, position=True, **kwargs):
    data = {"mmsi": mmsi, "name": f"VESSEL {mmsi[-1]}", "vessel_type": 70, **kwargs}
    if position:
        data["position"] = {
            "latitude": 55.0,
            "longitude": 12.0,
            "sog": 11.5,
            "cog": 270.0,
            "timestamp": "2024-01-01T12:00:00Z",
            "rate_of_turn": -128,
            "navigational_status": 0,
        }
    return data


class TestPositionSample:
    def test_range_checks(self):
        with pytest.raises(ValueError):
            PositionSample(latitude=91.0, longitude=0.0, sog=0.0, cog=0.0, timestamp="")
        with pytest.raises(ValueError):
            PositionSample(latitude=0.0, longitude=181.0, sog=0.0, cog=0.0, timestamp="")
        with pytest.raises(ValueError):
            PositionSample(latitude=0.0, longitude=0.0, sog=0.0, cog=0.0, timestamp="", rate_of_turn=200)

    def test_rate_of_turn_sentinel(self):
        sample = PositionSample.from_dict(record("123456789")["position"])
        assert sample.rate_of_turn == -128
        assert not sample.has_rate_of_turn

    def test_missing_speed_and_course_default_to_zero(self):
        sample = PositionSample.from_dict({"latitude": 1.0, "longitude": 2.0})
        assert sample.sog == 0.0
        assert sample.cog == 0.0
        assert sample.navigational_status is None


class TestVesselState:
    def test_from_dict(self):
        vessel = VesselState.from_dict(record("123456789", imo_number=9074729))

        assert vessel.mmsi == "123456789"
        assert vessel.vessel_type == 70
        assert vessel.imo_number == "9074729"
        assert vessel.position.to_point() == {"latitude": 55.0, "longitude": 12.0}

    def test_display_name_falls_back_to_mmsi(self):
        assert VesselState(mmsi="123456789").display_name == "123456789"
        assert VesselState(mmsi="123456789", name="ALPHA").display_name == "ALPHA"

    def test_identity(self):
        vessel = VesselState(mmsi="123456789", name="ALPHA")
        assert vessel.identity() == {"mmsi": "123456789", "name": "ALPHA"}


class TestSnapshot:
    def test_read_only(self):
        snapshot = build_snapshot([record("111111111"), record("222222222", position=False)])

        assert isinstance(snapshot, MappingProxyType)
        with pytest.raises(TypeError):
            snapshot["333333333"] = VesselState(mmsi="333333333")

    def test_later_records_replace_earlier(self):
        snapshot = build_snapshot([record("111111111"), record("111111111", name="RENAMED")])
        assert len(snapshot) == 1
        assert snapshot["111111111"].name == "RENAMED"

    def test_from_mapping(self):
        snapshot = build_snapshot({"111111111": record("111111111")})
        assert "111111111" in snapshot

    def test_positioned_vessels(self):
        snapshot = build_snapshot([record("111111111"), record("222222222", position=False)])
        assert [v.mmsi for v in positioned_vessels(snapshot)] == ["111111111"]

    def test_frame(self):
        snapshot = build_snapshot([record("111111111"), record("222222222", position=False)])
        df = snapshot_to_frame(snapshot)

        assert list(df.columns) == ["mmsi", "name", "latitude", "longitude", "sog", "cog"]
        assert len(df) == 1
        assert df.iloc[0]["sog"] == 11.5

    def test_empty_frame(self):
        df = snapshot_to_frame(build_snapshot([]))
        assert df.empty
        assert "latitude" in df.columns


class TestNavStatusName:
    def test_names(self):
        assert nav_status_name(1) == "At Anchor"
        assert nav_status_name(None) == "Not Defined"
        assert nav_status_name(12) == "Unknown"
