"""
Utility functions and helpers.
"""

from .maritime_utils import EARTH_RADIUS_NM, MaritimeUtils

__all__ = ["MaritimeUtils", "EARTH_RADIUS_NM"]
