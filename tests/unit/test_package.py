"""
Tests for the top-level package surface.
"""

import logging

import vessel_safety


class TestPackage:
    def test_version_is_string(self):
        assert isinstance(vessel_safety.__version__, str)
        assert vessel_safety.__version__

    def test_subpackages_exposed(self):
        for name in ("config", "data", "maritime", "tools", "utils", "weather"):
            assert name in vessel_safety.__all__
            assert hasattr(vessel_safety, name)

    def test_tools_reachable_from_package(self):
        assert "analyze_collision_risk" in vessel_safety.tools.TOOL_NAMES

    def test_library_logger_has_null_handler(self):
        handlers = logging.getLogger("vessel_safety").handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)
