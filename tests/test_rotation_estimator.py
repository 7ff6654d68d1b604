"""
Rotation Estimator Module Tests
===============================
"""

import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
import math
import unittest
from target_locator import RotationEstimator


class TestRotationEstimator(unittest.TestCase):
    def test_camera_at_rotation_center(self):
        estimator = RotationEstimator(0, 0)

        for angle in (-20, 0, 5, 26):
            with self.subTest(angle=angle):
                self.assertAlmostEqual(
                    estimator.compute_rotation(angle, 100), angle
                )

    def test_offset_rotation_center(self):
        """
        Test a rotation center 9 right of and 12 behind the camera.
        """
        estimator = RotationEstimator(9, 12)

        lateral = 100 * math.tan(math.radians(10))
        expected = math.degrees(math.atan((lateral - 9) / 112))

        self.assertAlmostEqual(estimator.compute_rotation(10, 100), expected)

    def test_straight_ahead_of_offset_camera(self):
        """
        Test that a target dead ahead of a camera mounted left of the
        rotation center needs a left turn.
        """
        estimator = RotationEstimator(9, 12)
        self.assertLess(estimator.compute_rotation(0, 100), 0)

    def test_zero_forward_distance(self):
        estimator = RotationEstimator(-5, -100)

        self.assertEqual(estimator.compute_rotation(0, 100), 90.0)


if __name__ == "__main__":
    unittest.main()
