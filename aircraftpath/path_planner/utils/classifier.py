# aircraftpath/path_planner/utils/classifier.py
from typing import Tuple

import numpy as np

from ..data_models import AttackDiveResult, DistanceAngleSign, Rotator
from .vectors import FORWARD, angle_between_deg, flatten, right_vector, safe_normal, turn_sign, with_z


def classify_attack_position(start: np.ndarray, orientation: Rotator, target: np.ndarray,
                             attack_range: Tuple[float, float],
                             max_dive_angle: float) -> Tuple[AttackDiveResult, DistanceAngleSign]:
    """
    Decides whether a direct attack dive can start from this pose.

    The target is flattened to the start altitude. Distance checks run before the
    angle check, so a target that is close and behind reports TOO_CLOSE.
    """
    start = np.asarray(start, dtype=float)
    target_at_altitude = with_z(target, start[2])
    delta = target_at_altitude - start
    dist = float(np.linalg.norm(delta))
    dir_to_target = safe_normal(delta)
    forward = safe_normal(orientation.vector())

    sign = turn_sign(forward, dir_to_target)
    planar_forward = safe_normal(flatten(forward))
    if not planar_forward.any():
        planar_forward = FORWARD
    info = DistanceAngleSign(
        distance=dist,
        abs_angle=angle_between_deg(forward, dir_to_target),
        sign=sign,
        lateral=right_vector(orientation) * sign,
        forward=planar_forward,
    )

    min_range, max_range = attack_range
    if dist < min_range:
        return AttackDiveResult.TOO_CLOSE, info
    if dist > max_range:
        return AttackDiveResult.TOO_FAR, info
    if info.abs_angle > max_dive_angle:
        return AttackDiveResult.NOT_WITHIN_ANGLE, info
    return AttackDiveResult.DIVE_POSSIBLE, info
