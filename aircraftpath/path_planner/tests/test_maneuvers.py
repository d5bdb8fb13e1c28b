#!/usr/bin/env python3
# aircraftpath/path_planner/tests/test_maneuvers.py

import sys
import math
from pathlib import Path
import unittest

import numpy as np

# Add project root
project_root = Path(__file__).resolve().parent.parent.parent.parent
sys.path.append(str(project_root))

from aircraftpath.path_planner.config import AttackMoveSettings
from aircraftpath.path_planner.data_models import AttackDiveResult, PathPoint, PathPointType, Rotator
from aircraftpath.path_planner.utils.classifier import classify_attack_position
from aircraftpath.path_planner.utils.maneuvers import (
    attack_dive_points, dive_alpha, first_dive_possible_index, is_extreme_angle,
    offset_location_in_attack_range, uturn_points,
)


class TestAttackDive(unittest.TestCase):
    def test_alpha_grows_with_dive_strength(self):
        alphas = [dive_alpha(AttackMoveSettings(dive_strength=s)) for s in (1.0, 3.0, 9.0)]
        self.assertLess(alphas[0], alphas[1])
        self.assertLess(alphas[1], alphas[2])
        self.assertAlmostEqual(alphas[1], 0.75)

    def test_alpha_clamps_weak_strengths(self):
        settings = AttackMoveSettings(dive_strength=0.0, recovery_strength=-2.0)
        self.assertAlmostEqual(dive_alpha(settings), 0.5)

    def test_target_directly_below(self):
        points = attack_dive_points(np.array([0.0, 0.0, 1000.0]), np.array([0.0, 0.0, 0.0]), AttackMoveSettings())
        np.testing.assert_allclose(points[0].position, [0.0, 0.0, 500.0], atol=1e-9)
        np.testing.assert_allclose(points[1].position, [100.0, 0.0, 1000.0], atol=1e-9)
        np.testing.assert_allclose(points[2].position, [1100.0, 0.0, 1000.0], atol=1e-9)
        self.assertTrue(points[0].is_dive_point)
        self.assertTrue(points[1].is_dive_recovery_point)
        self.assertIs(points[2].point_type, PathPointType.REGULAR)


class TestRangeBand(unittest.TestCase):
    def setUp(self):
        self.settings = AttackMoveSettings()
        self.target = np.array([0.0, 0.0, 0.0])

    def test_far_offset_is_pulled_in(self):
        result = offset_location_in_attack_range(self.target, np.array([10000.0, 0.0, 0.0]), self.settings)
        np.testing.assert_allclose(result, [5600.0, 0.0, 0.0])

    def test_pull_in_follows_the_slanted_line_then_drops(self):
        offset = np.array([10000.0, 0.0, 500.0])
        result = offset_location_in_attack_range(self.target, offset, self.settings)
        expected_x = 5600.0 * 10000.0 / np.linalg.norm(offset)
        np.testing.assert_allclose(result, [expected_x, 0.0, 0.0])

    def test_close_offset_is_pushed_out(self):
        result = offset_location_in_attack_range(self.target, np.array([100.0, 0.0, 0.0]), self.settings)
        np.testing.assert_allclose(result, [960.0, 0.0, 0.0])

    def test_offset_inside_band_only_drops_to_target_altitude(self):
        result = offset_location_in_attack_range(self.target, np.array([3000.0, 0.0, 50.0]), self.settings)
        np.testing.assert_allclose(result, [3000.0, 0.0, 0.0])


class TestUTurn(unittest.TestCase):
    def setUp(self):
        self.settings = AttackMoveSettings()
        self.start = np.array([0.0, 0.0, 0.0])
        self.facing_x = Rotator()

    def test_entry_and_exit(self):
        target = np.array([-3000.0, 2500.0, 0.0])
        _, info = classify_attack_position(self.start, self.facing_x, target,
                                           self.settings.attack_dive_range, self.settings.angle_allow_attack_dive)
        entry, exit_point = uturn_points(info, self.settings, target, self.facing_x, self.start, 0.5)

        angle = math.radians(20.0)
        expected_entry = np.array([math.cos(angle), math.sin(angle), 0.0]) * (info.distance / 3)
        np.testing.assert_allclose(entry, expected_entry, atol=1e-6)

        expected_offset = 2 * 0.5 * info.abs_angle / 90 * 2000.0
        np.testing.assert_allclose(exit_point, [0.0, expected_offset, 0.0], atol=1e-6)

    def test_exit_widens_when_target_is_straight_behind(self):
        target = np.array([-3000.0, 300.0, 0.0])
        result, info = classify_attack_position(self.start, self.facing_x, target,
                                                self.settings.attack_dive_range,
                                                self.settings.angle_allow_attack_dive)
        self.assertIs(result, AttackDiveResult.NOT_WITHIN_ANGLE)
        self.assertTrue(is_extreme_angle(info))

        _, exit_point = uturn_points(info, self.settings, target, self.facing_x, self.start, 0.5)
        offset_distance = 2 * 0.5 * info.abs_angle / 90 * self.settings.uturn_start_offset_distance
        offset = (self.start + info.lateral * offset_distance
                  + info.direction * self.settings.uturn_extreme_angle_offset)
        expected = offset_location_in_attack_range(target, offset, self.settings)
        np.testing.assert_allclose(exit_point, expected, atol=1e-6)
        # Inside the band, so only the altitude is changed.
        np.testing.assert_allclose(exit_point, [offset[0], offset[1], 0.0], atol=1e-6)

        no_widening = AttackMoveSettings(uturn_extreme_angle_offset=0.0)
        _, narrow_exit = uturn_points(info, no_widening, target, self.facing_x, self.start, 0.5)
        self.assertGreater(np.linalg.norm(exit_point - narrow_exit), 50.0)

    def test_extreme_angle(self):
        _, info = classify_attack_position(self.start, self.facing_x, np.array([-3000.0, 10.0, 0.0]),
                                           self.settings.attack_dive_range, 75.0)
        self.assertTrue(is_extreme_angle(info))
        _, info = classify_attack_position(self.start, self.facing_x, np.array([-3000.0, 3000.0, 0.0]),
                                           self.settings.attack_dive_range, 75.0)
        self.assertFalse(is_extreme_angle(info))


class TestFirstDivePossibleIndex(unittest.TestCase):
    def setUp(self):
        self.settings = AttackMoveSettings()
        self.points = [PathPoint(np.array(p, dtype=float)) for p in (
            (0, 0, 0), (1000, 1000, 0), (1000, 2000, 0), (0, 2000, 0), (-1000, 2000, 0))]

    def test_finds_first_point_facing_target(self):
        index = first_dive_possible_index(self.points, 0, Rotator(), np.array([-4000.0, 0.0, 0.0]), self.settings)
        self.assertEqual(index, 2)

    def test_starts_scanning_at_first(self):
        index = first_dive_possible_index(self.points, 3, Rotator(), np.array([-4000.0, 0.0, 0.0]), self.settings)
        self.assertEqual(index, 3)

    def test_no_point_qualifies(self):
        index = first_dive_possible_index(self.points, 0, Rotator(), np.array([10000.0, 0.0, 0.0]), self.settings)
        self.assertEqual(index, -1)


if __name__ == '__main__':
    unittest.main()
