#!/usr/bin/env python3
# aircraftpath/path_planner/tests/test_bezier.py

import sys
from pathlib import Path
import unittest

import numpy as np
from scipy.spatial import Delaunay

# Add project root
project_root = Path(__file__).resolve().parent.parent.parent.parent
sys.path.append(str(project_root))

from aircraftpath.path_planner.data_models import PathPointType, Rotator
from aircraftpath.path_planner.utils.bezier import (
    cubic_bezier, curve_between, quadratic_bezier, sample_count,
)
from aircraftpath.path_planner.utils.vectors import angle_between_deg, safe_normal


def _inside_hull(control_points, samples) -> bool:
    hull = Delaunay(np.array(control_points)[:, :2])
    coords = np.array([p.position[:2] for p in samples])
    return bool(np.all(hull.find_simplex(coords, tol=1e-9) >= 0))


class TestBezierSampling(unittest.TestCase):
    def setUp(self):
        self.p0 = np.array([0.0, 0.0, 0.0])
        self.p1 = np.array([1000.0, 0.0, 0.0])
        self.p2 = np.array([1500.0, 1200.0, 0.0])
        self.p3 = np.array([-500.0, 2000.0, 0.0])

    def test_sample_count(self):
        self.assertEqual(sample_count(0.0), 0)
        self.assertEqual(sample_count(3.0), 2)
        self.assertEqual(sample_count(10.0), 5)
        self.assertEqual(sample_count(179.5), 90)

    def test_no_samples_requested(self):
        self.assertEqual(quadratic_bezier(self.p0, self.p1, self.p2, 0), [])
        self.assertEqual(cubic_bezier(self.p0, self.p1, self.p2, self.p3, -3), [])

    def test_quadratic_matches_bernstein_form(self):
        samples = quadratic_bezier(self.p0, self.p1, self.p2, 9)
        self.assertEqual(len(samples), 9)
        for i, point in enumerate(samples, start=1):
            t = i / 10
            expected = (1 - t) ** 2 * self.p0 + 2 * (1 - t) * t * self.p1 + t ** 2 * self.p2
            np.testing.assert_allclose(point.position, expected, atol=1e-9)
            self.assertIs(point.point_type, PathPointType.BEZIER)

    def test_cubic_matches_bernstein_form(self):
        samples = cubic_bezier(self.p0, self.p1, self.p2, self.p3, 7)
        self.assertEqual(len(samples), 7)
        for i, point in enumerate(samples, start=1):
            t = i / 8
            expected = ((1 - t) ** 3 * self.p0 + 3 * (1 - t) ** 2 * t * self.p1
                        + 3 * (1 - t) * t ** 2 * self.p2 + t ** 3 * self.p3)
            np.testing.assert_allclose(point.position, expected, atol=1e-9)

    def test_samples_stay_inside_control_hull(self):
        quad = quadratic_bezier(self.p0, self.p1, self.p2, 25)
        self.assertTrue(_inside_hull([self.p0, self.p1, self.p2], quad))
        cubic = cubic_bezier(self.p0, self.p1, self.p2, self.p3, 40)
        self.assertTrue(_inside_hull([self.p0, self.p1, self.p2, self.p3], cubic))

    def test_endpoints_are_excluded(self):
        for point in quadratic_bezier(self.p0, self.p1, self.p2, 5):
            self.assertFalse(np.allclose(point.position, self.p0))
            self.assertFalse(np.allclose(point.position, self.p2))


class TestCurveSelection(unittest.TestCase):
    def setUp(self):
        self.start = np.array([0.0, 0.0, 1000.0])
        self.facing_x = Rotator(0.0, 0.0, 0.0)

    def test_zero_distance_gives_no_samples(self):
        self.assertEqual(curve_between(self.facing_x, self.start, self.start.copy(), 0.5, 75.0), [])

    def test_straight_ahead_gives_no_samples(self):
        end = self.start + np.array([3000.0, 0.0, 0.0])
        self.assertEqual(curve_between(self.facing_x, self.start, end, 0.5, 75.0), [])

    def test_small_turn_uses_quadratic(self):
        end = self.start + np.array([1000.0, 1000.0, 0.0])
        samples = curve_between(self.facing_x, self.start, end, 0.5, 75.0)
        self.assertEqual(len(samples), sample_count(45.0))
        control = self.start + np.array([1.0, 0.0, 0.0]) * (np.linalg.norm(end - self.start) * 0.5)
        self.assertTrue(_inside_hull([self.start, control, end], samples))

    def test_large_turn_uses_cubic_with_extra_samples(self):
        end = self.start + np.array([-1000.0, 100.0, 0.0])
        angle = angle_between_deg(np.array([1.0, 0.0, 0.0]), safe_normal(end - self.start))
        samples = curve_between(self.facing_x, self.start, end, 0.5, 75.0)
        self.assertEqual(len(samples), sample_count(angle) + 2)

    def test_large_turn_bends_toward_the_turn_side(self):
        left = curve_between(self.facing_x, self.start, self.start + np.array([-1000.0, 100.0, 0.0]), 0.5, 75.0)
        right = curve_between(self.facing_x, self.start, self.start + np.array([-1000.0, -100.0, 0.0]), 0.5, 75.0)
        self.assertTrue(all(p.position[1] > 0 for p in left))
        self.assertTrue(all(p.position[1] < 0 for p in right))


if __name__ == '__main__':
    unittest.main()
