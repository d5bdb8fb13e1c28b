# aircraftpath/path_planner/data_models.py
"""
Core data structures of the path planner: orientations, path points, the
path container with its traversal cursor, and the classifier result.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .config import AttackMoveSettings, BezierCurveSettings, DeadZoneSettings


@dataclass(frozen=True)
class Rotator:
    """Orientation in degrees. Positive pitch is nose up, yaw is counter-clockwise from +X."""
    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0

    def vector(self) -> np.ndarray:
        """Unit forward vector of this orientation."""
        pitch_rad, yaw_rad = math.radians(self.pitch), math.radians(self.yaw)
        return np.array([
            math.cos(pitch_rad) * math.cos(yaw_rad),
            math.cos(pitch_rad) * math.sin(yaw_rad),
            math.sin(pitch_rad),
        ])

    def yaw_only(self) -> "Rotator":
        return Rotator(0.0, self.yaw, 0.0)


class PathPointType(Enum):
    REGULAR = "Regular"
    BEZIER = "Bezier"
    ATTACK_DIVE = "Attack Dive"
    DIVE_RECOVERY = "Get Out Of Dive"

    @property
    def is_dive(self) -> bool:
        return self in (PathPointType.ATTACK_DIVE, PathPointType.DIVE_RECOVERY)


@dataclass
class PathPoint:
    """Represents a single point in an aircraft path."""
    position: np.ndarray
    roll: float = 0.0
    point_type: PathPointType = PathPointType.REGULAR

    def __post_init__(self):
        self.position = np.array(self.position, dtype=float)

    @property
    def is_on_bezier_curve(self) -> bool:
        return self.point_type is PathPointType.BEZIER

    @property
    def is_dive_point(self) -> bool:
        return self.point_type is PathPointType.ATTACK_DIVE

    @property
    def is_dive_recovery_point(self) -> bool:
        return self.point_type is PathPointType.DIVE_RECOVERY


class AttackDiveResult(Enum):
    DIVE_POSSIBLE = "Dive Possible"
    TOO_CLOSE = "Too Close"
    TOO_FAR = "Too Far"
    NOT_WITHIN_ANGLE = "Not Within Angle"


@dataclass
class DistanceAngleSign:
    """Distance and angle from an aircraft to its target. Produced and consumed in one build."""
    distance: float = 0.0
    abs_angle: float = 0.0
    # 1 when the target is counter-clockwise of the forward vector, -1 otherwise.
    sign: int = 1
    lateral: np.ndarray = field(default_factory=lambda: np.zeros(3))
    forward: np.ndarray = field(default_factory=lambda: np.array([1.0, 0.0, 0.0]))

    @property
    def direction(self) -> np.ndarray:
        """Planar forward rotated by the signed angle, i.e. the horizontal bearing to the target."""
        angle_rad = math.radians(self.abs_angle * self.sign)
        cos_a, sin_a = math.cos(angle_rad), math.sin(angle_rad)
        x, y = self.forward[0], self.forward[1]
        return np.array([x * cos_a - y * sin_a, x * sin_a + y * cos_a, 0.0])

    @property
    def is_counter_clockwise(self) -> bool:
        return self.sign > 0


@dataclass
class AircraftPath:
    """Ordered path points plus the index of the point the aircraft is flying to."""
    points: List[PathPoint] = field(default_factory=list)
    current_index: int = 0

    def reset(self) -> None:
        self.points.clear()
        self.current_index = 0

    def add(self, position, roll: float = 0.0, point_type: PathPointType = PathPointType.REGULAR) -> PathPoint:
        point = PathPoint(position, roll, point_type)
        self.points.append(point)
        return point

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[PathPoint]:
        return iter(self.points)

    def __getitem__(self, index: int) -> PathPoint:
        return self.points[index]

    @property
    def current_point(self) -> Optional[PathPoint]:
        if 0 <= self.current_index < len(self.points):
            return self.points[self.current_index]
        return None

    @property
    def is_finished(self) -> bool:
        return self.current_index >= len(self.points)

    def advance(self) -> Optional[PathPoint]:
        """Moves the cursor to the next point and returns it, or None past the end."""
        if not self.is_finished:
            self.current_index += 1
        return self.current_point

    def positions(self) -> np.ndarray:
        if not self.points:
            return np.zeros((0, 3))
        return np.array([p.position for p in self.points])

    def total_length(self) -> float:
        coords = self.positions()
        if len(coords) < 2:
            return 0.0
        return float(np.sum(np.linalg.norm(np.diff(coords, axis=0), axis=1)))

    # --- Builders -------------------------------------------------------------

    def create_move_to_path(self, start, orientation: Rotator, destination,
                            bezier: "BezierCurveSettings", dead_zone: "DeadZoneSettings",
                            debug_sink=None) -> "AircraftPath":
        from .core import PathBuilder
        builder = PathBuilder(bezier=bezier, dead_zone=dead_zone, debug_sink=debug_sink)
        return builder.build_move_to_path(start, orientation, destination, path=self)

    def create_attack_path(self, start, orientation: Rotator, target,
                           bezier: "BezierCurveSettings", attack: "AttackMoveSettings",
                           dead_zone: "DeadZoneSettings", rng=None, debug_sink=None) -> "AircraftPath":
        from .core import PathBuilder
        builder = PathBuilder(bezier=bezier, attack=attack, dead_zone=dead_zone, rng=rng, debug_sink=debug_sink)
        return builder.build_attack_path(start, orientation, target, path=self)
