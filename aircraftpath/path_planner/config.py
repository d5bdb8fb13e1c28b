# aircraftpath/path_planner/config.py
"""
Tuning blocks handed to the path builder. They are read-only inputs: the builder
only clamps values to avoid division by zero, it never rejects them.
"""
import json
import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from .constants import PathConstants
from .exceptions import InvalidSettingsError


def _read_block(cls, data: Dict[str, Any], block: str):
    known = {f.name: f for f in fields(cls)}
    unknown = set(data) - set(known)
    if unknown:
        raise InvalidSettingsError(f"Unknown {block} settings: {', '.join(sorted(unknown))}", block=block)
    values = {}
    for key, raw in data.items():
        try:
            if key == "attack_dive_range":
                low, high = raw
                values[key] = (float(low), float(high))
            else:
                values[key] = float(raw)
        except (TypeError, ValueError) as e:
            raise InvalidSettingsError(f"Invalid value for {block}.{key}: {raw!r}", block=block) from e
    return cls(**values)


@dataclass(frozen=True)
class BezierCurveSettings:
    # Fraction of the start-to-end distance used to place the control point(s).
    curve_tension: float = 0.5
    # Turns sharper than this (degrees) use the cubic large-turn curve.
    angle_consider_point_behind: float = 75.0
    # Scales the extra roll on bezier points.
    curve_point_roll_mlt: float = 1.2
    # Curves are cut off at this distance; the real end becomes a straight leg.
    max_bezier_distance: float = 5000.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BezierCurveSettings":
        return _read_block(cls, data, "bezier")


@dataclass(frozen=True)
class AttackMoveSettings:
    angle_allow_attack_dive: float = 75.0
    # (min, max) distance at which a direct dive is allowed.
    attack_dive_range: Tuple[float, float] = (800.0, 7000.0)
    # More dive strength puts the attack point closer to the target.
    dive_strength: float = 3.0
    # More recovery strength starts the pull-out earlier.
    recovery_strength: float = 1.0
    recovery_length_addition: float = 100.0
    # Maximum altitude lost in the dive.
    delta_attack_height: float = 500.0
    # Base lateral offset of the U-turn exit, scaled with angle / 90.
    uturn_start_offset_distance: float = 2000.0
    # Added to the U-turn offset when the target is straight behind.
    uturn_extreme_angle_offset: float = 100.0

    @property
    def min_range(self) -> float:
        return self.attack_dive_range[0]

    @property
    def max_range(self) -> float:
        return self.attack_dive_range[1]

    def tightened(self) -> "AttackMoveSettings":
        """Stricter copy used to re-check points along a finished U-turn."""
        low = self.min_range * PathConstants.TRIM_MIN_RANGE_SCALE
        high = self.max_range * PathConstants.TRIM_MAX_RANGE_SCALE
        if low >= high:
            mid = (low + high) * 0.5
            low, high = mid * 0.95, mid * 1.05
        return replace(
            self,
            attack_dive_range=(low, high),
            angle_allow_attack_dive=self.angle_allow_attack_dive * PathConstants.TRIM_ANGLE_SCALE,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AttackMoveSettings":
        return _read_block(cls, data, "attack")


@dataclass(frozen=True)
class DeadZoneSettings:
    """Both the angle and the distance must be inside the zone for it to apply."""
    angle_at_dead_zone: float = 50.0
    distance_at_dead_zone: float = 800.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeadZoneSettings":
        return _read_block(cls, data, "dead_zone")


@dataclass(frozen=True)
class AircraftMovementSettings:
    bezier: BezierCurveSettings = field(default_factory=BezierCurveSettings)
    attack: AttackMoveSettings = field(default_factory=AttackMoveSettings)
    dead_zone: DeadZoneSettings = field(default_factory=DeadZoneSettings)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AircraftMovementSettings":
        unknown = set(data) - {"bezier", "attack", "dead_zone"}
        if unknown:
            raise InvalidSettingsError(f"Unknown settings blocks: {', '.join(sorted(unknown))}")
        return cls(
            bezier=BezierCurveSettings.from_dict(data.get("bezier", {})),
            attack=AttackMoveSettings.from_dict(data.get("attack", {})),
            dead_zone=DeadZoneSettings.from_dict(data.get("dead_zone", {})),
        )


def load_movement_settings(path: Union[str, Path]) -> AircraftMovementSettings:
    """Loads the three tuning blocks from a JSON file. Missing keys keep their defaults."""
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidSettingsError(f"Could not read movement settings from '{path}': {e}") from e
    if not isinstance(data, dict):
        raise InvalidSettingsError(f"Movement settings in '{path}' must be a JSON object.")
    settings = AircraftMovementSettings.from_dict(data)
    logging.info(f"Loaded aircraft movement settings from '{path}'.")
    return settings
