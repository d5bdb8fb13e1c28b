# aircraftpath/path_planner/utils/vectors.py
"""
Vector and rotation helpers. Logging is omitted here as these are
high-frequency, low-level functions.
"""
import math
from typing import Sequence

import numpy as np

from ..constants import PathConstants
from ..data_models import Rotator

UP = np.array([0.0, 0.0, 1.0])
FORWARD = np.array([1.0, 0.0, 0.0])


def vec(values: Sequence[float]) -> np.ndarray:
    return np.array(values, dtype=float)

def distance(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.linalg.norm(np.asarray(b, dtype=float) - np.asarray(a, dtype=float)))

def planar_distance(a: np.ndarray, b: np.ndarray) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])

def safe_normal(v: np.ndarray) -> np.ndarray:
    """Unit vector of v, or the zero vector when v is too short to normalize."""
    v = np.asarray(v, dtype=float)
    length = np.linalg.norm(v)
    if length <= PathConstants.SMALL_NUMBER:
        return np.zeros(3)
    return v / length

def flatten(v: np.ndarray) -> np.ndarray:
    return np.array([v[0], v[1], 0.0])

def with_z(v: np.ndarray, z: float) -> np.ndarray:
    return np.array([v[0], v[1], z])

def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    return a + (b - a) * t

def angle_between_deg(a: np.ndarray, b: np.ndarray) -> float:
    """Unsigned angle in degrees between two unit vectors."""
    dot = float(np.clip(np.dot(a, b), -1.0, 1.0))
    return math.degrees(math.acos(dot))

def turn_sign(forward: np.ndarray, direction: np.ndarray) -> int:
    """1 when direction is counter-clockwise of forward seen from above, -1 otherwise."""
    return 1 if np.cross(forward, direction)[2] >= 0.0 else -1

def rotate_about_up(v: np.ndarray, angle_deg: float) -> np.ndarray:
    angle_rad = math.radians(angle_deg)
    cos_a, sin_a = math.cos(angle_rad), math.sin(angle_rad)
    return np.array([v[0] * cos_a - v[1] * sin_a, v[0] * sin_a + v[1] * cos_a, v[2]])

def right_vector(rotation: Rotator) -> np.ndarray:
    """Unit vector 90 degrees counter-clockwise of the yaw of the rotation."""
    return rotate_about_up(rotation.yaw_only().vector(), 90.0)

def direction_to_rotator(direction: np.ndarray) -> Rotator:
    """Rotation that points along direction. Roll is always zero."""
    direction = safe_normal(direction)
    if not direction.any():
        return Rotator()
    yaw = math.degrees(math.atan2(direction[1], direction[0]))
    pitch = math.degrees(math.atan2(direction[2], math.hypot(direction[0], direction[1])))
    return Rotator(pitch, yaw, 0.0)

def look_at_rotation(start: np.ndarray, target: np.ndarray) -> Rotator:
    return direction_to_rotator(np.asarray(target, dtype=float) - np.asarray(start, dtype=float))
