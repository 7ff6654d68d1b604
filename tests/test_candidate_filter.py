"""
Candidate Filter Module Tests
=============================

Unit tests for filter_candidates, CandidateFilter and the hole check.
"""

import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
import unittest
from dataclasses import replace
from unittest.mock import patch
import numpy as np
from target_locator import (
    CandidateFilter,
    HoleCheck,
    MetricSpec,
    Polygon,
    TargetCandidate,
    filter_candidates,
)
from target_locator.utils.candidate_filter import fill_percent
from helpers import PROFILE_2016, rectangle, u_mask, u_shape


class TestFilterCandidates(unittest.TestCase):
    """
    Tests the pure metric filter.
    """

    def test_accepts_matching_polygon(self):
        poly = u_shape()

        self.assertEqual(filter_candidates([poly], PROFILE_2016), [poly])

    def test_rejects_each_metric(self):
        cases = {
            "too_short": u_shape(height=20, depth=10),
            "too_narrow": rectangle(100, 100, 30, 25),
            "too_wide": u_shape(width=250),
            "too_few_vertices": Polygon([(100, 100), (220, 180)]),
            "aspect_too_high": rectangle(100, 100, 199, 30),
            "area_too_small": rectangle(100, 100, 41, 26),
        }
        for name, poly in cases.items():
            with self.subTest(case=name):
                self.assertEqual(filter_candidates([poly], PROFILE_2016), [])

    def test_bounds_are_strict(self):
        """
        Test that a metric equal to min or max is rejected.
        """
        profile = replace(PROFILE_2016, width=MetricSpec(40, 120, 100, 1))
        self.assertEqual(filter_candidates([u_shape(width=120)], profile), [])

        profile = replace(PROFILE_2016, width=MetricSpec(120, 200, 100, 1))
        self.assertEqual(filter_candidates([u_shape(width=120)], profile), [])

    def test_order_kept_and_input_untouched(self):
        a = u_shape(x=100)
        b = rectangle(0, 0, 5, 5)
        c = u_shape(x=400)
        polygons = [a, b, c]

        result = filter_candidates(polygons, PROFILE_2016)

        self.assertEqual(result, [a, c])
        self.assertEqual(polygons, [a, b, c])

    def test_empty_input(self):
        self.assertEqual(filter_candidates([], PROFILE_2016), [])


class TestCandidateFilter(unittest.TestCase):
    """
    Tests the profile bound filter, frame limits and hole check.
    """

    def setUp(self):
        self.cf = CandidateFilter(PROFILE_2016)

    def test_init_requires_profile(self):
        with self.assertRaises(ValueError):
            CandidateFilter({"name": "not a profile"})

    def test_frame_limits(self):
        high = u_shape(y=40)
        low = u_shape(y=650)

        self.assertFalse(self.cf.accepts(high))
        self.assertFalse(self.cf.accepts(low))
        self.assertIn("min_y", self.cf.rejection_reasons(high)[0])
        self.assertIn("max_y", self.cf.rejection_reasons(low)[0])

    def test_frame_limits_optional(self):
        cf = CandidateFilter(replace(PROFILE_2016, min_y=None, max_y=None))
        self.assertTrue(cf.accepts(u_shape(y=40)))

    def test_hole_check_passes_u_shape(self):
        self.assertTrue(self.cf.accepts(u_shape(), u_mask()))

    def test_hole_check_rejects_filled_shape(self):
        mask = np.zeros((600, 800), dtype=np.uint8)
        mask[100:181, 100:221] = 255

        reasons = self.cf.rejection_reasons(u_shape(), mask)

        self.assertEqual(len(reasons), 1)
        self.assertIn("filled", reasons[0])

    def test_hole_check_skipped_without_mask(self):
        self.assertEqual(self.cf.rejection_reasons(u_shape()), [])

    def test_partition(self):
        good = u_shape()
        bad = rectangle(0, 0, 5, 5)

        accepted, rejected = self.cf.partition([bad, good])

        self.assertEqual(accepted, [good])
        self.assertEqual(rejected, [bad])
        self.assertEqual(self.cf.filter([bad, good]), [good])

    def test_candidates_carry_profile_name(self):
        result = self.cf.candidates([u_shape()])

        self.assertEqual(result, [TargetCandidate(result[0].polygon, "tower-2016")])

    def test_debug_prints_reasons(self):
        cf = CandidateFilter(PROFILE_2016, debug=True)

        with patch("builtins.print") as mock_print:
            cf.partition([rectangle(0, 0, 5, 5)])

        printed = [call.args[0] for call in mock_print.call_args_list]
        self.assertTrue(
            printed[0].startswith("CandidateFilter.partition: Rejected")
        )
        self.assertIn("0 of 1", printed[-1])

    def test_quiet_without_debug(self):
        with patch("builtins.print") as mock_print:
            self.cf.partition([rectangle(0, 0, 5, 5), u_shape()])

        mock_print.assert_not_called()


class TestFillPercent(unittest.TestCase):
    """
    Tests the middle window statistics.
    """

    def test_half_filled(self):
        poly = rectangle(0, 0, 100, 100)
        hole = HoleCheck(top=0, bottom=0, left=0, right=0)
        mask = np.zeros((100, 100), dtype=np.uint8)
        mask[:, :50] = 255

        self.assertEqual(fill_percent(poly, mask, hole), 50.0)

    def test_window_bounds_truncated(self):
        """
        Test that a trimmed edge at 3.6 pixels starts the window at column
        3, not 4.
        """
        poly = rectangle(0, 0, 10, 10)
        hole = HoleCheck(top=0, bottom=0, left=0.36, right=0)
        mask = np.zeros((10, 10), dtype=np.uint8)
        mask[:, 3] = 255

        # One filled column out of the seven in columns 3 to 9.
        self.assertEqual(fill_percent(poly, mask, hole), 14.0)

    def test_empty_window(self):
        poly = rectangle(10, 10, 4, 4)
        hole = HoleCheck(top=0.5, bottom=0.5)
        mask = np.full((50, 50), 255, dtype=np.uint8)

        self.assertIsNone(fill_percent(poly, mask, hole))

    def test_mask_must_be_2d(self):
        with self.assertRaises(ValueError):
            fill_percent(
                rectangle(0, 0, 10, 10),
                np.zeros((10, 10, 3), dtype=np.uint8),
                HoleCheck(),
            )


if __name__ == "__main__":
    unittest.main()
