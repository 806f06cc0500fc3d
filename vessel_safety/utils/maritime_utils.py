"""
Geodesy and unit helpers shared by the analysis modules.
"""

import logging

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

EARTH_RADIUS_NM = 3440.065
NM_PER_DEGREE_LAT = 60.0
MINUTES_PER_HOUR = 60.0


class MaritimeUtils:
    """Maritime utility functions for AIS position data."""

    @staticmethod
    def calculate_distance(lat1, lon1, lat2, lon2):
        """
        Calculate great-circle distance using the Haversine formula.
        Handles both scalar and Series/array inputs with numpy broadcasting.

        Args:
            lat1, lon1: First point coordinates (scalar, Series, or array)
            lat2, lon2: Second point coordinates (scalar, Series, or array)

        Returns:
            Distance in nautical miles (float, Series, or array)
        """
        result_index = None
        for value in (lat1, lon1, lat2, lon2):
            if isinstance(value, pd.Series):
                result_index = value.index
                break

        if result_index is None and any(pd.isna([lat1, lon1, lat2, lon2])):
            return np.nan

        lat1_rad = np.radians(np.asarray(lat1, dtype=float))
        lat2_rad = np.radians(np.asarray(lat2, dtype=float))
        dlat = lat2_rad - lat1_rad
        dlon = np.radians(np.asarray(lon2, dtype=float) - np.asarray(lon1, dtype=float))

        a = (
            np.sin(dlat / 2) ** 2
            + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon / 2) ** 2
        )
        c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
        distance_nm = EARTH_RADIUS_NM * c

        if result_index is not None:
            return pd.Series(distance_nm, index=result_index)
        if np.ndim(distance_nm) == 0:
            return float(distance_nm)
        return distance_nm

    @staticmethod
    def calculate_bearing(lat1, lon1, lat2, lon2):
        """
        Calculate initial great-circle bearing from point 1 to point 2.

        Args:
            lat1, lon1: First point coordinates
            lat2, lon2: Second point coordinates

        Returns:
            Bearing in degrees, normalized to [0, 360)
        """
        is_series = isinstance(lat2, pd.Series)
        if not is_series and any(pd.isna([lat1, lon1, lat2, lon2])):
            return np.nan

        lat1_rad = np.radians(np.asarray(lat1, dtype=float))
        lat2_rad = np.radians(np.asarray(lat2, dtype=float))
        dlon_rad = np.radians(np.asarray(lon2, dtype=float) - np.asarray(lon1, dtype=float))

        y = np.sin(dlon_rad) * np.cos(lat2_rad)
        x = np.cos(lat1_rad) * np.sin(lat2_rad) - np.sin(lat1_rad) * np.cos(
            lat2_rad
        ) * np.cos(dlon_rad)

        bearing_deg = (np.degrees(np.arctan2(y, x)) + 360) % 360

        if is_series:
            return pd.Series(bearing_deg, index=lat2.index)
        if np.ndim(bearing_deg) == 0:
            return float(bearing_deg)
        return bearing_deg

    @staticmethod
    def knots_to_nm_per_minute(speed_knots: float) -> float:
        """Convert speed from knots to nautical miles per minute."""
        return speed_knots / MINUTES_PER_HOUR

    @staticmethod
    def velocity_components(speed: float, course_degrees: float) -> tuple[float, float]:
        """
        Split a speed along a compass course into (east, north) components.

        Maritime course: 0 = North, 90 = East, measured clockwise.
        """
        course_rad = np.radians(course_degrees)
        return float(speed * np.sin(course_rad)), float(speed * np.cos(course_rad))

    @staticmethod
    def offset_position(
        lat: float, lon: float, east_nm: float, north_nm: float, reference_lat=None
    ) -> tuple[float, float]:
        """
        Move a position by a local (east, north) displacement in nautical miles.

        Uses the flat-earth approximation 1 deg lat = 60 nm and
        1 deg lon = 60 * cos(reference_lat) nm. Only valid for short hops
        away from the poles.
        """
        if reference_lat is None:
            reference_lat = lat
        new_lat = lat + north_nm / NM_PER_DEGREE_LAT
        new_lon = lon + east_nm / (NM_PER_DEGREE_LAT * np.cos(np.radians(reference_lat)))
        return float(new_lat), float(new_lon)

    @staticmethod
    def round_half_up(value, digits: int = 0):
        """
        Round halves toward positive infinity to the given number of decimals.

        Matches floor(x * 10**digits + 0.5) display rounding, so -2.5 becomes
        -2 rather than -3. Infinite values pass through.
        """
        if value is None or not np.isfinite(value):
            return value
        factor = 10**digits
        rounded = float(np.floor(value * factor + 0.5) / factor)
        return int(rounded) if digits == 0 else rounded

    @staticmethod
    def is_valid_coordinate(lat: float, lon: float) -> bool:
        """Check latitude/longitude ranges."""
        return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0
