# aircraftpath/path_planner/core.py
import logging
from typing import Optional, Sequence, Union

import numpy as np

from .config import AttackMoveSettings, BezierCurveSettings, DeadZoneSettings
from .data_models import AircraftPath, AttackDiveResult, DistanceAngleSign, PathPointType, Rotator
from .utils.bezier import curve_between, large_turn_points, sample_count
from .utils.classifier import classify_attack_position
from .utils.dead_zone import (
    bezier_end_in_reach, dead_zone_escape_point, is_outside_bezier_reach, is_within_dead_zone,
)
from .utils.maneuvers import (
    attack_dive_points, extreme_angle_recovery_point, extreme_distance_points,
    first_dive_possible_index, is_extreme_angle, is_extremely_far, too_close_offset_point,
    uturn_points, within_angle_point,
)
from .utils.roll_smoothing import complete_rolls
from .utils.vectors import safe_normal, vec, with_z

Vector = Union[np.ndarray, Sequence[float]]


class PathBuilder:
    """
    Builds move-to and attack paths for one aircraft.

    rng is only used when the target is too close to dive on; it needs random()
    and uniform(low, high). debug_sink, when given, receives on_point(position, label)
    for adjusted points and on_path_built(path) once a build completes.
    """

    def __init__(self, bezier: Optional[BezierCurveSettings] = None,
                 attack: Optional[AttackMoveSettings] = None,
                 dead_zone: Optional[DeadZoneSettings] = None,
                 rng=None, debug_sink=None):
        self.bezier = bezier or BezierCurveSettings()
        self.attack = attack or AttackMoveSettings()
        self.dead_zone = dead_zone or DeadZoneSettings()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.debug_sink = debug_sink

        if not logging.getLogger().hasHandlers():
            logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    # --- Entry points ---------------------------------------------------------

    def build_move_to_path(self, start: Vector, orientation: Rotator, destination: Vector,
                           path: Optional[AircraftPath] = None) -> AircraftPath:
        if path is None:
            path = AircraftPath()
        path.reset()
        start, destination = vec(start), vec(destination)

        path.add(start, 0.0, PathPointType.REGULAR)
        self._add_move_to_leg(path, start, destination, orientation)
        complete_rolls(path.points, orientation, destination, roll_mlt=self.bezier.curve_point_roll_mlt)

        logging.debug(f"Move-to path built with {len(path)} points.")
        self._path_built(path)
        return path

    def build_attack_path(self, start: Vector, orientation: Rotator, target: Vector,
                          path: Optional[AircraftPath] = None) -> AircraftPath:
        if path is None:
            path = AircraftPath()
        path.reset()
        start, target = vec(start), vec(target)

        path.add(start, orientation.roll, PathPointType.REGULAR)
        target_air = with_z(target, start[2])
        result, info = classify_attack_position(
            start, orientation, target_air, self.attack.attack_dive_range, self.attack.angle_allow_attack_dive)
        logging.info(f"Attack classification: {result.value} (distance {info.distance:.1f}, "
                     f"angle {info.abs_angle:.1f} deg, sign {info.sign:+d})")

        if result is AttackDiveResult.DIVE_POSSIBLE:
            self._add_attack_dive(path, start, orientation, target)
        elif result is AttackDiveResult.TOO_CLOSE:
            self._add_too_close(path, start, orientation)
        elif result is AttackDiveResult.TOO_FAR:
            self._add_too_far(path, start, orientation, target_air, info)
        else:
            self._add_uturn(path, start, orientation, target_air, info)

        self._path_built(path)
        return path

    # --- Attack branches ------------------------------------------------------

    def _add_attack_dive(self, path: AircraftPath, start: np.ndarray, orientation: Rotator,
                         target: np.ndarray) -> None:
        first = len(path) - 1
        path.points.extend(attack_dive_points(start, target, self.attack))
        complete_rolls(path.points, orientation, first=first, roll_mlt=self.bezier.curve_point_roll_mlt)

    def _add_too_close(self, path: AircraftPath, start: np.ndarray, orientation: Rotator) -> None:
        first = len(path) - 1
        offset = too_close_offset_point(start, orientation, self.attack, self.rng)
        path.add(offset, orientation.roll, PathPointType.REGULAR)
        complete_rolls(path.points, orientation, offset, first=first, roll_mlt=self.bezier.curve_point_roll_mlt)

    def _add_too_far(self, path: AircraftPath, start: np.ndarray, orientation: Rotator,
                     target_air: np.ndarray, info: DistanceAngleSign) -> None:
        first = len(path) - 1
        if is_extreme_angle(info):
            logging.info("Target too far and straight behind, turning toward it first.")
            end_point = extreme_angle_recovery_point(start, info, self.attack)
            self._add_move_to_leg(path, start, end_point, orientation)
        elif is_extremely_far(info, self.attack):
            logging.info("Target extremely far, closing in before attacking.")
            curve_end, end_point = extreme_distance_points(start, target_air, self.attack)
            self._add_move_to_leg(path, start, curve_end, orientation)
        elif info.abs_angle <= self.attack.angle_allow_attack_dive:
            logging.info("Target too far but within dive angle, moving into dive range.")
            end_point = within_angle_point(start, target_air, info, self.attack)
            self._add_move_to_leg(path, start, end_point, orientation)
        else:
            self._add_uturn(path, start, orientation, target_air, info)
            return
        complete_rolls(path.points, orientation, end_point, first=first,
                       roll_mlt=self.bezier.curve_point_roll_mlt)

    def _add_uturn(self, path: AircraftPath, start: np.ndarray, orientation: Rotator,
                   target_air: np.ndarray, info: DistanceAngleSign) -> None:
        first = len(path) - 1
        entry, exit_point = uturn_points(info, self.attack, target_air, orientation, start,
                                         self.bezier.curve_tension)
        path.add(entry, orientation.roll, PathPointType.REGULAR)
        self._debug_point(entry, "U-turn entry")

        if is_outside_bezier_reach(entry, exit_point, self.bezier):
            exit_point = bezier_end_in_reach(entry, exit_point, self.bezier)

        delta = exit_point - entry
        dist = float(np.linalg.norm(delta))
        path.points.extend(large_turn_points(
            entry, exit_point, self.bezier.curve_tension, dist, safe_normal(delta),
            sample_count(info.abs_angle), info.is_counter_clockwise, safe_normal(orientation.vector())))
        path.add(exit_point, 0.0, PathPointType.REGULAR)
        self._debug_point(exit_point, "U-turn exit")

        dive_index = first_dive_possible_index(path.points, first, orientation, target_air, self.attack)
        if dive_index >= 0:
            logging.info(f"Dive possible at point {dive_index} of {len(path)}, trimming U-turn.")
            del path.points[dive_index + 1:]
        complete_rolls(path.points, orientation, first=first, roll_mlt=self.bezier.curve_point_roll_mlt)

    # --- Move-to leg ----------------------------------------------------------

    def _add_move_to_leg(self, path: AircraftPath, start: np.ndarray, destination: np.ndarray,
                         orientation: Rotator) -> None:
        """Curves from start (already in the path) to destination and appends destination."""
        bezier_start = start
        in_dead_zone, angle = is_within_dead_zone(orientation, start, destination, self.dead_zone)
        if in_dead_zone:
            logging.debug(f"Destination in dead zone at {angle:.1f} deg, adding escape point.")
            bezier_start = dead_zone_escape_point(start, destination, orientation, angle, self.dead_zone)
            path.add(bezier_start, 0.0, PathPointType.REGULAR)
            self._debug_point(bezier_start, "Dead zone escape")

        bezier_end = destination
        clamped = is_outside_bezier_reach(start, destination, self.bezier)
        if clamped:
            logging.debug("Destination out of bezier reach, clamping curve end.")
            bezier_end = bezier_end_in_reach(start, destination, self.bezier)

        path.points.extend(curve_between(orientation, bezier_start, bezier_end,
                                         self.bezier.curve_tension, self.bezier.angle_consider_point_behind))
        if clamped:
            path.add(bezier_end, 0.0, PathPointType.REGULAR)
            self._debug_point(bezier_end, "Bezier reach")
        path.add(destination, 0.0, PathPointType.REGULAR)

    # --- Debug ----------------------------------------------------------------

    def _debug_point(self, position: np.ndarray, label: str) -> None:
        if self.debug_sink is not None:
            self.debug_sink.on_point(position, label)

    def _path_built(self, path: AircraftPath) -> None:
        if self.debug_sink is not None:
            self.debug_sink.on_path_built(path)


def build_move_to_path(start: Vector, orientation: Rotator, destination: Vector,
                       bezier: BezierCurveSettings, dead_zone: DeadZoneSettings,
                       *, debug_sink=None) -> AircraftPath:
    """Path that curves from the start pose to the destination."""
    builder = PathBuilder(bezier=bezier, dead_zone=dead_zone, debug_sink=debug_sink)
    return builder.build_move_to_path(start, orientation, destination)


def build_attack_path(start: Vector, orientation: Rotator, target: Vector,
                      bezier: BezierCurveSettings, attack: AttackMoveSettings,
                      dead_zone: DeadZoneSettings, *, rng=None, debug_sink=None) -> AircraftPath:
    """Path for an attack run on target, or the path that sets one up."""
    builder = PathBuilder(bezier=bezier, attack=attack, dead_zone=dead_zone, rng=rng, debug_sink=debug_sink)
    return builder.build_attack_path(start, orientation, target)
