# aircraftpath/path_planner/utils/dead_zone.py
from typing import Tuple

import numpy as np

from ..config import BezierCurveSettings, DeadZoneSettings
from ..constants import PathConstants
from ..data_models import Rotator
from .vectors import angle_between_deg, distance, rotate_about_up, safe_normal, turn_sign


def is_within_dead_zone(orientation: Rotator, start: np.ndarray, point: np.ndarray,
                        settings: DeadZoneSettings) -> Tuple[bool, float]:
    """
    A point is in the dead zone when it is both sharply angled and close.
    Returns the verdict and the angle to the point in degrees.
    """
    delta = point - start
    dist = float(np.linalg.norm(delta))
    if dist <= PathConstants.SMALL_NUMBER:
        return False, 0.0
    forward = safe_normal(orientation.vector())
    angle = angle_between_deg(forward, delta / dist)
    in_angle = angle >= settings.angle_at_dead_zone
    in_distance = dist <= settings.distance_at_dead_zone
    return in_angle and in_distance, angle

def dead_zone_escape_point(start: np.ndarray, end: np.ndarray, orientation: Rotator,
                           angle_to_point: float, settings: DeadZoneSettings) -> np.ndarray:
    """Point ahead of the aircraft, turned slightly toward the end, to start the curve from."""
    forward = safe_normal(orientation.vector())
    side_sign = turn_sign(forward, safe_normal(end - start))
    step_angle = (angle_to_point / PathConstants.DEAD_ZONE_POINT_ANGLE_DIVIDER) * side_sign
    stepped_dir = safe_normal(rotate_about_up(forward, step_angle))
    return start + stepped_dir * (settings.distance_at_dead_zone * PathConstants.DEAD_ZONE_POINT_DISTANCE_MLT)

def is_outside_bezier_reach(start: np.ndarray, end: np.ndarray, settings: BezierCurveSettings) -> bool:
    return distance(start, end) > settings.max_bezier_distance

def bezier_end_in_reach(start: np.ndarray, end: np.ndarray, settings: BezierCurveSettings) -> np.ndarray:
    """The point max_bezier_distance away from start in the direction of end."""
    return start + safe_normal(end - start) * settings.max_bezier_distance
