# aircraftpath/path_planner/__init__.py
"""
Initializes the path_planner module, defining its public API.

This file makes the builder, the data models and the settings blocks directly
accessible to client modules, simplifying imports and hiding the internal structure.
"""
# Core logic from core.py
from .core import PathBuilder, build_move_to_path, build_attack_path

# Public data models from data_models.py
from .data_models import (
    AircraftPath, AttackDiveResult, DistanceAngleSign, PathPoint, PathPointType, Rotator,
)

# Settings blocks and their loader
from .config import (
    AircraftMovementSettings, AttackMoveSettings, BezierCurveSettings, DeadZoneSettings,
    load_movement_settings,
)
from .exceptions import AircraftPathError, InvalidSettingsError

# Expose the classifier for callers that only need the dive decision
from .utils.classifier import classify_attack_position

__all__ = [
    "PathBuilder",
    "build_move_to_path",
    "build_attack_path",
    "AircraftPath",
    "AttackDiveResult",
    "DistanceAngleSign",
    "PathPoint",
    "PathPointType",
    "Rotator",
    "AircraftMovementSettings",
    "AttackMoveSettings",
    "BezierCurveSettings",
    "DeadZoneSettings",
    "load_movement_settings",
    "AircraftPathError",
    "InvalidSettingsError",
    "classify_attack_position"
]
