# aircraftpath/path_planner/utils/bezier.py
import math
import logging
from typing import List

import numpy as np

from ..constants import PathConstants
from ..data_models import PathPoint, PathPointType, Rotator
from .vectors import UP, angle_between_deg, lerp, safe_normal, turn_sign


def sample_count(angle_deg: float) -> int:
    """Number of interior samples for a turn of angle_deg degrees."""
    return max(0, math.ceil(angle_deg / PathConstants.BEZIER_SAMPLE_ANGLE_DIVIDER))

def quadratic_bezier(p0: np.ndarray, p1: np.ndarray, p2: np.ndarray, num_samples: int) -> List[PathPoint]:
    """Samples a quadratic bezier, excluding both end points."""
    if num_samples <= 0:
        return []
    div = num_samples + 1
    points = []
    for i in range(1, num_samples + 1):
        t = i / div
        a = lerp(p0, p1, t)
        b = lerp(p1, p2, t)
        points.append(PathPoint(lerp(a, b, t), 0.0, PathPointType.BEZIER))
    return points

def cubic_bezier(p0: np.ndarray, p1: np.ndarray, p2: np.ndarray, p3: np.ndarray,
                 num_samples: int) -> List[PathPoint]:
    """
    Samples a cubic bezier with De Casteljau, excluding both end points.
    P1 controls the tangent leaving P0 and P2 the tangent entering P3.
    """
    if num_samples <= 0:
        return []
    div = num_samples + 1
    points = []
    for i in range(1, num_samples + 1):
        t = i / div
        a = lerp(p0, p1, t)
        b = lerp(p1, p2, t)
        c = lerp(p2, p3, t)
        d = lerp(a, b, t)
        e = lerp(b, c, t)
        points.append(PathPoint(lerp(d, e, t), 0.0, PathPointType.BEZIER))
    return points

def large_turn_points(start: np.ndarray, end: np.ndarray, tension: float, distance: float,
                      dir_to_end: np.ndarray, num_samples: int, counter_clockwise: bool,
                      forward: np.ndarray) -> List[PathPoint]:
    """
    Wide cubic curve for turns toward points (nearly) behind the aircraft.
    Both control points are pushed to the side of the turn.
    """
    side = safe_normal(np.cross(dir_to_end, UP))
    if not counter_clockwise:
        side = -side
    forward_dist = distance * tension
    side_dist = forward_dist * PathConstants.LARGE_TURN_SIDE_SCALE
    control_1 = start + forward * forward_dist + side * side_dist
    control_2 = end - dir_to_end * forward_dist + side * side_dist
    return cubic_bezier(start, control_1, control_2, end,
                        num_samples + PathConstants.LARGE_TURN_EXTRA_SAMPLES)

def curve_between(orientation: Rotator, start: np.ndarray, end: np.ndarray,
                  tension: float, large_turn_angle: float) -> List[PathPoint]:
    """
    Interior points of the curve from start to end. The caller adds the end point.
    Turns sharper than large_turn_angle use the cubic large-turn curve.
    """
    delta = end - start
    dist = float(np.linalg.norm(delta))
    if dist <= PathConstants.SMALL_NUMBER:
        return []

    dir_to_end = delta / dist
    forward = safe_normal(orientation.vector())
    angle = angle_between_deg(forward, dir_to_end)
    num_samples = sample_count(angle)

    if angle > large_turn_angle:
        logging.debug(f"Large turn of {angle:.1f} deg (threshold {large_turn_angle:.1f}), using cubic curve.")
        return large_turn_points(start, end, tension, dist, dir_to_end, num_samples,
                                 turn_sign(forward, dir_to_end) > 0, forward)
    control = start + forward * (dist * tension)
    return quadratic_bezier(start, control, end, num_samples)
