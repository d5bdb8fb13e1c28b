# aircraftpath/path_planner/utils/roll_smoothing.py
"""
Second pass over a finished path segment that assigns each point its bank angle.
Interior points blend the rotations of the incoming and outgoing legs; points on
a bezier curve bank extra into the turn. Dive legs are flown wings level.
"""
from typing import List, Optional, Tuple

import numpy as np
from scipy.spatial.transform import Rotation, Slerp

from ..constants import PathConstants, RollConstants
from ..data_models import PathPoint, Rotator
from .vectors import angle_between_deg, direction_to_rotator, look_at_rotation, safe_normal, turn_sign


def _to_rotation(rotator: Rotator) -> Rotation:
    return Rotation.from_euler('ZYX', [rotator.yaw, -rotator.pitch, rotator.roll], degrees=True)

def _roll_of(rotation: Rotation) -> float:
    return float(rotation.as_euler('ZYX', degrees=True)[2])

def blended_roll(prev: np.ndarray, curr: np.ndarray, nxt: np.ndarray) -> float:
    """Roll of the distance-weighted slerp between the incoming and outgoing leg rotations."""
    d_prev = float(np.linalg.norm(curr - prev))
    d_next = float(np.linalg.norm(nxt - curr))
    total = d_prev + d_next
    weight = d_prev / total if total > PathConstants.SMALL_NUMBER else 0.5

    r0 = _to_rotation(direction_to_rotator(curr - prev))
    r1 = _to_rotation(direction_to_rotator(nxt - curr))
    slerp = Slerp([0.0, 1.0], Rotation.concatenate([r0, r1]))
    return _roll_of(slerp([weight])[0])

def bezier_roll_bonus(prev: np.ndarray, curr: np.ndarray, nxt: np.ndarray) -> Tuple[float, int]:
    """Roll added for the local turn at curr, and the side of that turn."""
    incoming = safe_normal(look_at_rotation(prev, curr).vector())
    outgoing = safe_normal(nxt - curr)
    angle = angle_between_deg(incoming, outgoing)
    side = turn_sign(incoming, outgoing)
    roll = RollConstants.MIN_ADDED_ROLL + (RollConstants.MAX_ADDED_ROLL - RollConstants.MIN_ADDED_ROLL) * angle / 180.0
    return roll * side, side

def gather_neighbors(points: List[PathPoint], index: int, first: int) -> Tuple[List[np.ndarray], List[np.ndarray]]:
    """Up to NEIGHBORS/2 points on either side that are close enough to describe the local curve."""
    curr = points[index].position
    half = RollConstants.NEIGHBORS // 2
    prev_pts, next_pts = [], []
    for offset in range(1, half + 1):
        before, after = index - offset, index + offset
        if before >= first and not points[before].point_type.is_dive:
            if np.linalg.norm(points[before].position - curr) <= RollConstants.MAX_NEIGHBOR_DISTANCE:
                prev_pts.append(points[before].position)
        if after < len(points) and not points[after].point_type.is_dive:
            if np.linalg.norm(points[after].position - curr) <= RollConstants.MAX_NEIGHBOR_DISTANCE:
                next_pts.append(points[after].position)
    return prev_pts, next_pts

def neighborhood_roll(curr: np.ndarray, prev_pts: List[np.ndarray], next_pts: List[np.ndarray], side: int) -> float:
    """Grows with the heading change across the furthest gathered neighbours."""
    incoming = safe_normal(curr - prev_pts[-1])
    outgoing = safe_normal(next_pts[-1] - curr)
    turn = angle_between_deg(incoming, outgoing)
    return turn ** RollConstants.BEZIER_ROLL_EXPONENT * side

def _interior_roll(points: List[PathPoint], index: int, first: int, roll_mlt: float) -> float:
    prev = points[index - 1].position
    curr = points[index].position
    nxt = points[index + 1].position

    bonus = 0.0
    if points[index].is_on_bezier_curve:
        bonus, side = bezier_roll_bonus(prev, curr, nxt)
        bonus *= roll_mlt
        prev_pts, next_pts = gather_neighbors(points, index, first)
        if prev_pts and next_pts:
            bonus += neighborhood_roll(curr, prev_pts, next_pts, side)
    return blended_roll(prev, curr, nxt) + bonus

def _is_wings_level(points: List[PathPoint], index: int) -> bool:
    if points[index].point_type.is_dive:
        return True
    return index + 1 < len(points) and points[index + 1].point_type.is_dive

def complete_rolls(points: List[PathPoint], start_orientation: Rotator, end_point: Optional[np.ndarray] = None,
                   first: int = 0, roll_mlt: float = 1.0) -> None:
    """
    Sets the roll of points[first:] in place.
    The first point keeps the start roll, the last one looks at end_point
    (defaults to its own position) and interior points are blended.
    """
    count = len(points)
    if count <= first:
        return

    points[first].roll = start_orientation.roll
    if count - first > 1:
        last = count - 1
        end = points[last].position if end_point is None else np.asarray(end_point, dtype=float)
        points[last].roll = look_at_rotation(points[last - 1].position, end).roll

        for index in range(first + 1, last):
            if _is_wings_level(points, index):
                points[index].roll = 0.0
                continue
            points[index].roll = _interior_roll(points, index, first, roll_mlt)

    for index in (first, count - 1):
        if _is_wings_level(points, index):
            points[index].roll = 0.0
