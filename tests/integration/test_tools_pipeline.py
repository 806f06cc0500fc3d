"""
End-to-end tests: raw tool calls from the chat layer through to result dicts.
"""

import json

import pytest

from vessel_safety.config import load_config
from vessel_safety.data import build_snapshot
from vessel_safety.tools import TOOL_NAMES, run_tool


@pytest.fixture
def harbour_snapshot():
    """Vessel-store records around a harbour approach."""
    base = {"timestamp": "2024-06-01T12:00:00Z"}
    records = [
        {
            "mmsi": "111111111",
            "name": "ALPHA",
            "vessel_type": 70,
            "imo_number": "9074729",
            "position": {**base, "latitude": 0.0, "longitude": 0.0, "sog": 10.0, "cog": 90.0,
                         "navigational_status": 0},
        },
        {
            "mmsi": "222222222",
            "name": "BRAVO",
            "vessel_type": 80,
            "position": {**base, "latitude": 0.0, "longitude": 0.1, "sog": 10.0, "cog": 270.0,
                         "navigational_status": 0, "rate_of_turn": 0},
        },
        {
            "mmsi": "333333333",
            "name": "CHARLIE",
            "vessel_type": 30,
            "position": {**base, "latitude": 0.02, "longitude": 0.02, "sog": 0.0, "cog": 0.0,
                         "navigational_status": 1},
        },
        {"mmsi": "444444444", "name": "DELTA", "vessel_type": 60},
    ]
    return build_snapshot(records)


class TestHeadOnEncounter:
    """Two vessels 6 nm apart closing at 20 kn."""

    def test_collision_risk(self, harbour_snapshot):
        result = run_tool("analyze_collision_risk", {}, harbour_snapshot)

        assert result["analyzedVessels"] == 3
        assert len(result["risks"]) == 1
        risk = result["risks"][0]
        assert {risk["vessel1"]["mmsi"], risk["vessel2"]["mmsi"]} == {"111111111", "222222222"}
        assert risk["tcpaMinutes"] == pytest.approx(18.0, abs=0.1)
        assert risk["cpaNm"] == pytest.approx(0.0, abs=0.01)
        assert risk["cpaPoint"]["longitude"] == pytest.approx(0.05, abs=1e-4)

    def test_collision_risk_scoped_to_vessel(self, harbour_snapshot):
        result = run_tool("analyze_collision_risk", {"mmsi": "222222222"}, harbour_snapshot)
        assert result["analyzedVessels"] == 1
        assert result["risks"][0]["vessel1"]["mmsi"] == "222222222"

    def test_unknown_vessel_reports_error(self, harbour_snapshot):
        collision = run_tool("analyze_collision_risk", {"mmsi": "999999999"}, harbour_snapshot)
        assert collision["risks"] == []
        assert collision["error"] == "Vessel with MMSI 999999999 not found"

        behavior = run_tool("analyze_vessel_behavior", {"mmsi": "999999999"}, harbour_snapshot)
        assert behavior["vessels"] == []
        assert behavior["error"] == "Vessel with MMSI 999999999 not found"

    def test_strict_config(self, harbour_snapshot):
        result = run_tool(
            "analyze_collision_risk", {"cpaThresholdNm": 0.5}, harbour_snapshot, load_config("strict")
        )
        assert len(result["risks"]) == 1

    def test_navigation_safety(self, harbour_snapshot, fixed_time):
        result = run_tool(
            "analyze_navigation_safety", {"mmsi": "111111111"}, harbour_snapshot, when=fixed_time
        )

        assert result["success"] is True
        vessel_result = result["results"][0]
        assert vessel_result["collisionRisks"][0]["riskLevel"] == "high"
        assert vessel_result["riskScore"] >= 30
        assert "weatherImpact" in vessel_result

    def test_fleet_safety_summary(self, harbour_snapshot):
        result = run_tool("analyze_navigation_safety", {"includeWeather": False}, harbour_snapshot)

        assert result["summary"]["totalAnalyzed"] == 3
        scores = [r["riskScore"] for r in result["results"]]
        assert scores == sorted(scores, reverse=True)
        assert scores[-1] == 0


class TestLookupAndSearch:
    def test_lookup_by_mmsi(self, harbour_snapshot):
        result = run_tool("lookup_vessel", {"mmsi": "222222222"}, harbour_snapshot)

        assert result["found"] is True
        assert result["vessel"]["name"] == "BRAVO"
        assert result["vessel"]["type"] == 80
        assert result["vessel"]["lastUpdate"] == "2024-06-01T12:00:00Z"

    def test_lookup_by_imo(self, harbour_snapshot):
        result = run_tool("lookup_vessel", {"imo": "IMO 9074729"}, harbour_snapshot)
        assert result["found"] is True
        assert result["vessel"]["mmsi"] == "111111111"

    def test_lookup_failures(self, harbour_snapshot):
        assert run_tool("lookup_vessel", {}, harbour_snapshot)["found"] is False

        bad = run_tool("lookup_vessel", {"mmsi": "12345"}, harbour_snapshot)
        assert bad["found"] is False
        assert "Invalid identifier format" in bad["error"]

        missing = run_tool("lookup_vessel", {"mmsi": "999999999"}, harbour_snapshot)
        assert missing["error"].startswith("No vessel found with MMSI 999999999")

        no_position = run_tool("lookup_vessel", {"mmsi": "444444444"}, harbour_snapshot)
        assert no_position["error"] == "Vessel DELTA found but has no position data available."

    def test_find_nearby(self, harbour_snapshot):
        result = run_tool(
            "find_nearby_vessels",
            {"latitude": 0.0, "longitude": 0.0, "radiusNm": 3.0},
            harbour_snapshot,
        )

        assert [v["mmsi"] for v in result["vessels"]] == ["111111111", "333333333"]
        assert result["vessels"][0]["distanceNm"] == 0.0
        charlie = result["vessels"][1]
        assert charlie["distanceNm"] == pytest.approx(1.70, abs=0.01)
        assert charlie["bearing"] == 45
        assert result["searchRadiusNm"] == 3.0

    def test_find_nearby_empty_snapshot(self):
        result = run_tool(
            "find_nearby_vessels",
            {"latitude": 0.0, "longitude": 0.0, "radiusNm": 3.0},
            build_snapshot([]),
        )
        assert result["vessels"] == []


class TestBehaviorAndWeather:
    def test_behavior_report(self, harbour_snapshot):
        result = run_tool("analyze_vessel_behavior", {}, harbour_snapshot)

        assert result["summary"]["transiting"] == 2
        assert result["summary"]["anchored"] == 1
        assert [v["behavior"] for v in result["vessels"]] == ["transiting", "transiting", "anchored"]

    def test_sea_conditions_for_vessel(self, harbour_snapshot, fixed_time):
        by_vessel = run_tool("get_sea_conditions", {"mmsi": "111111111"}, harbour_snapshot, when=fixed_time)
        by_point = run_tool(
            "get_sea_conditions", {"latitude": 0.0, "longitude": 0.0}, harbour_snapshot, when=fixed_time
        )

        assert by_vessel["success"] is True
        assert by_vessel["conditions"] == by_point["conditions"]

    def test_sea_conditions_failures(self, harbour_snapshot):
        missing = run_tool("get_sea_conditions", {"mmsi": "999999999"}, harbour_snapshot)
        assert missing == {"success": False, "error": "Vessel with MMSI 999999999 not found"}

        no_position = run_tool("get_sea_conditions", {"mmsi": "444444444"}, harbour_snapshot)
        assert no_position["error"] == "Vessel DELTA has no position data"

        bad = run_tool("get_sea_conditions", {"latitude": 95.0, "longitude": 0.0}, harbour_snapshot)
        assert bad["success"] is False

    def test_weather_forecast(self, harbour_snapshot, fixed_time):
        result = run_tool(
            "get_weather_forecast",
            {"latitude": 55.0, "longitude": 12.0, "hours": 12},
            harbour_snapshot,
            when=fixed_time,
        )
        assert result["success"] is True
        assert result["location"] == {"latitude": 55.0, "longitude": 12.0}
        assert len(result["forecast"]) == 4

    def test_weather_forecast_bad_coordinates(self, harbour_snapshot):
        result = run_tool(
            "get_weather_forecast", {"latitude": 0.0, "longitude": 200.0}, harbour_snapshot
        )
        assert result["success"] is False
        assert result["location"] == {"latitude": 0.0, "longitude": 200.0}


class TestBoundary:
    def test_rejected_arguments(self, harbour_snapshot):
        result = run_tool("analyze_collision_risk", {"mmsi": "abc"}, harbour_snapshot)
        assert result["success"] is False
        assert "analyze_collision_risk" in result["error"]

    def test_unknown_tool(self, harbour_snapshot):
        result = run_tool("plot_course", {}, harbour_snapshot)
        assert result["success"] is False

    @pytest.mark.parametrize(
        "tool, args",
        [
            ("lookup_vessel", {"mmsi": "111111111"}),
            ("find_nearby_vessels", {"latitude": 0.0, "longitude": 0.0, "radiusNm": 10}),
            ("analyze_collision_risk", {}),
            ("analyze_vessel_behavior", {"behaviorType": "all"}),
            ("analyze_navigation_safety", {}),
            ("get_sea_conditions", {"latitude": 10.0, "longitude": 10.0}),
            ("get_weather_forecast", {"latitude": 10.0, "longitude": 10.0}),
        ],
    )
    def test_results_are_json_serializable(self, harbour_snapshot, fixed_time, tool, args):
        assert tool in TOOL_NAMES
        result = run_tool(tool, args, harbour_snapshot, when=fixed_time)
        json.dumps(result)
