# aircraftpath/path_planner/utils/maneuvers.py
"""
Geometry of the attack maneuvers: the direct dive, the sideways offset when the
target is too close, the fly-to points when it is too far, and the U-turn.
None of these set rolls; the roll pass runs once a segment is complete.
"""
import logging
from typing import List, Tuple

import numpy as np

from ..config import AttackMoveSettings
from ..constants import PathConstants
from ..data_models import AttackDiveResult, DistanceAngleSign, PathPoint, PathPointType, Rotator
from .classifier import classify_attack_position
from .vectors import (
    FORWARD, distance, flatten, lerp, look_at_rotation, planar_distance,
    rotate_about_up, safe_normal, with_z,
)


def dive_alpha(settings: AttackMoveSettings) -> float:
    """Fraction of the start-to-target line at which the dive bottoms out."""
    dive = max(settings.dive_strength, 1.0)
    recovery = max(settings.recovery_strength, 1.0)
    return float(np.clip(dive / (dive + recovery), PathConstants.MIN_ALPHA, PathConstants.MAX_ALPHA))

def attack_dive_points(dive_start: np.ndarray, target: np.ndarray,
                       settings: AttackMoveSettings) -> List[PathPoint]:
    """Attack point, recovery point and exit point of a direct dive."""
    start_z = dive_start[2]
    alpha = dive_alpha(settings)

    attack_point = with_z(lerp(dive_start, target, alpha), start_z - settings.delta_attack_height)

    # Measured in 2D since the recovery point returns to the start altitude.
    recovery_base = planar_distance(attack_point, target)
    recovery_length = recovery_base + max(settings.recovery_length_addition, 1.0)

    dive_dir = safe_normal(flatten(attack_point - dive_start))
    if not dive_dir.any():
        dive_dir = safe_normal(flatten(target - attack_point))
        if not dive_dir.any():
            dive_dir = FORWARD.copy()

    recovery_point = with_z(attack_point + dive_dir * recovery_length, start_z)
    exit_point = with_z(recovery_point + dive_dir * PathConstants.OUT_OF_DIVE_POINT_OFFSET, start_z)

    logging.debug(f"Attack dive: alpha={alpha:.3f}, recovery base={recovery_base:.1f}, "
                  f"recovery length={recovery_length:.1f}")
    return [
        PathPoint(attack_point, 0.0, PathPointType.ATTACK_DIVE),
        PathPoint(recovery_point, 0.0, PathPointType.DIVE_RECOVERY),
        PathPoint(exit_point, 0.0, PathPointType.REGULAR),
    ]

def too_close_offset_point(start: np.ndarray, orientation: Rotator, settings: AttackMoveSettings,
                           rng) -> np.ndarray:
    """
    Point half the max dive range away, randomly left or right of the nose.
    rng needs random() and uniform(low, high); random.Random and numpy Generators both work.
    """
    go_counter_clockwise = rng.random() < 0.5
    low = min(PathConstants.TOO_CLOSE_MIN_OFFSET_ANGLE, settings.angle_allow_attack_dive)
    offset_angle = float(rng.uniform(low, settings.angle_allow_attack_dive))
    if not go_counter_clockwise:
        offset_angle = -offset_angle
    offset_dir = safe_normal(rotate_about_up(orientation.vector(), offset_angle))
    offset = start + offset_dir * (settings.max_range / 2)
    logging.debug(f"Target too close, offsetting by {offset_angle:.2f} deg.")
    return with_z(offset, start[2])

def is_extreme_angle(info: DistanceAngleSign) -> bool:
    """True when the target is within the extreme tolerance of straight behind."""
    return abs(info.abs_angle - 180.0) <= PathConstants.DELTA_ANGLE_EXTREME

def is_extremely_far(info: DistanceAngleSign, settings: AttackMoveSettings) -> bool:
    return info.distance > settings.max_range * PathConstants.MAX_ATTACK_DISTANCE_SCALE

def offset_location_in_attack_range(target: np.ndarray, offset: np.ndarray,
                                    settings: AttackMoveSettings) -> np.ndarray:
    """Moves offset along the target-to-offset line into the dive range band, at target altitude."""
    dist = distance(offset, target)
    direction = safe_normal(offset - target)
    if dist >= settings.max_range:
        logging.debug("Offset location outside dive range, pulling it in.")
        return with_z(target + direction * (settings.max_range * PathConstants.BAND_TOO_FAR_FRACTION), target[2])
    if dist <= settings.min_range:
        logging.debug("Offset location inside min dive range, pushing it out.")
        return with_z(target + direction * (settings.min_range * PathConstants.BAND_TOO_CLOSE_FRACTION), target[2])
    return with_z(offset, target[2])

def extreme_angle_recovery_point(start: np.ndarray, info: DistanceAngleSign,
                                 settings: AttackMoveSettings) -> np.ndarray:
    """Turns part of the way toward a target straight behind the aircraft."""
    direction = rotate_about_up(info.forward, PathConstants.DELTA_ANGLE_EXTREME * info.sign)
    return start + direction * (settings.max_range / 2)

def extreme_distance_points(start: np.ndarray, target: np.ndarray,
                            settings: AttackMoveSettings) -> Tuple[np.ndarray, np.ndarray]:
    """Returns the curve end and the look-ahead point on the target-to-start line."""
    to_start = look_at_rotation(target, start).vector()
    curve_end = target + to_start * (settings.max_range * PathConstants.EXTREME_DISTANCE_BEZIER_FRACTION)
    look_ahead = target + to_start * (settings.max_range * PathConstants.EXTREME_DISTANCE_END_FRACTION)
    return curve_end, look_ahead

def within_angle_point(start: np.ndarray, target: np.ndarray, info: DistanceAngleSign,
                       settings: AttackMoveSettings) -> np.ndarray:
    guess = start + info.direction * (info.distance * PathConstants.TOO_FAR_GUESS_FRACTION)
    return offset_location_in_attack_range(target, guess, settings)

def uturn_points(info: DistanceAngleSign, settings: AttackMoveSettings, target: np.ndarray,
                 orientation: Rotator, start: np.ndarray, tension: float) -> Tuple[np.ndarray, np.ndarray]:
    """Entry and exit of the U-turn. The exit lies inside the dive range band."""
    approach_dir = safe_normal(rotate_about_up(
        orientation.yaw_only().vector(), PathConstants.UTURN_APPROACH_POINT_ANGLE * info.sign))
    entry = start + approach_dir * (info.distance / 3)

    offset_distance = 2 * tension * info.abs_angle / 90 * settings.uturn_start_offset_distance
    offset = start + info.lateral * offset_distance
    if is_extreme_angle(info):
        logging.debug(f"Target straight behind at {info.abs_angle:.1f} deg, widening U-turn.")
        offset = offset + info.direction * settings.uturn_extreme_angle_offset
    return entry, offset_location_in_attack_range(target, offset, settings)

def _facing_at(points: List[PathPoint], index: int, orientation: Rotator) -> Rotator:
    if index == 0:
        return orientation
    if index < len(points) - 1:
        return look_at_rotation(points[index].position, points[index + 1].position)
    return look_at_rotation(points[index - 1].position, points[index].position)

def first_dive_possible_index(points: List[PathPoint], first: int, orientation: Rotator,
                              target: np.ndarray, settings: AttackMoveSettings) -> int:
    """
    Index of the first point from which a dive is possible under tightened
    tolerances, or -1 when none qualifies.
    """
    strict = settings.tightened()
    for index in range(first, len(points)):
        position = points[index].position
        result, _ = classify_attack_position(
            position, _facing_at(points, index, orientation), with_z(target, position[2]),
            strict.attack_dive_range, strict.angle_allow_attack_dive)
        if result is AttackDiveResult.DIVE_POSSIBLE:
            return index
    return -1
