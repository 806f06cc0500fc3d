"""
Short-horizon kinematic projection of vessel positions.

Positions are advanced with a flat-earth approximation (1 deg lat = 60 nm,
1 deg lon = 60 * cos(lat) nm). This is adequate for projections under about
an hour and breaks down near the poles or over multi-hour horizons.
"""

import logging
from dataclasses import dataclass

import numpy as np

from ..config import DEFAULT_CONFIG, ProjectionConfig, RotConfig
from ..data.models import VesselState
from ..utils.maritime_utils import NM_PER_DEGREE_LAT, MaritimeUtils
from .rot import decode_rot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectedPosition:
    """Projected vessel position and course."""

    latitude: float
    longitude: float
    course: float

    def to_point(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


def _advance(lat: float, lon: float, speed: float, course: float, minutes: float):
    """Advance a position along a constant course; longitude scaled at the new latitude."""
    vx, vy = MaritimeUtils.velocity_components(speed, course)
    new_lat = lat + (vy * minutes) / NM_PER_DEGREE_LAT
    new_lon = lon + (vx * minutes) / (NM_PER_DEGREE_LAT * np.cos(np.radians(new_lat)))
    return float(new_lat), float(new_lon)


def project_position(
    vessel: VesselState,
    minutes: float,
    use_rot: bool = True,
    projection: ProjectionConfig = DEFAULT_CONFIG.projection,
    rot_config: RotConfig = DEFAULT_CONFIG.rot,
) -> ProjectedPosition | None:
    """
    Project a vessel's position forward in time.

    Args:
        vessel: Vessel to project
        minutes: Look-ahead time in minutes
        use_rot: Follow a curved path when the vessel reports a turn rate
        projection: Turning threshold and integration step
        rot_config: ROT decoding constants

    Returns:
        ProjectedPosition, or None if the vessel has no position
    """
    pos = vessel.position
    if pos is None:
        return None

    speed = MaritimeUtils.knots_to_nm_per_minute(pos.sog)
    rot_deg_per_min = decode_rot(pos.rate_of_turn, rot_config) if use_rot else None

    if rot_deg_per_min is None or abs(rot_deg_per_min) <= projection.turning_threshold_deg_per_min:
        vx, vy = MaritimeUtils.velocity_components(speed, pos.cog)
        new_lat, new_lon = MaritimeUtils.offset_position(
            pos.latitude, pos.longitude, vx * minutes, vy * minutes
        )
        return ProjectedPosition(latitude=new_lat, longitude=new_lon, course=pos.cog)

    # Curved path: integrate in fixed steps, the last one possibly partial
    step = projection.step_minutes
    steps = int(np.ceil(minutes / step))
    lat, lon = pos.latitude, pos.longitude
    course = pos.cog

    for i in range(steps):
        step_time = min(step, minutes - i * step)
        turn = rot_deg_per_min * step_time

        # Mean heading over the step, taken before wrapping so 359->1 stays near 0
        mean_course = course + turn / 2
        lat, lon = _advance(lat, lon, speed, mean_course, step_time)
        course = (course + turn + 360) % 360

    return ProjectedPosition(latitude=lat, longitude=lon, course=float(course))


def project_path(
    vessel: VesselState,
    total_minutes: float,
    interval_minutes: float = DEFAULT_CONFIG.projection.path_interval_minutes,
    projection: ProjectionConfig = DEFAULT_CONFIG.projection,
    rot_config: RotConfig = DEFAULT_CONFIG.rot,
) -> list[dict[str, float]]:
    """
    Project a polyline of future positions for visualization.

    The current position is always the first point, followed by one point
    per interval up to and including total_minutes.
    """
    pos = vessel.position
    if pos is None:
        return []
    if interval_minutes <= 0:
        raise ValueError("interval_minutes must be positive")

    path = [pos.to_point()]
    t = interval_minutes
    while t <= total_minutes:
        projected = project_position(vessel, t, True, projection, rot_config)
        path.append(projected.to_point())
        t += interval_minutes

    return path
