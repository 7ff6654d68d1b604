"""
Polygon Module Tests
====================

Unit tests for the Polygon class: bounding box metrics, contour
simplification and vertical edge finding.
"""

import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
import unittest
import numpy as np
from target_locator import Polygon, VerticalEdge


class TestPolygon(unittest.TestCase):
    """
    Tests the metrics computed at construction and the edge queries.
    """

    def test_metrics(self):
        """
        Test the bounding box metrics of a simple triangle.
        """
        poly = Polygon([(10, 10), (50, 10), (50, 30)])

        self.assertEqual(len(poly), 3)
        self.assertEqual(poly.vertex_count, 3)
        self.assertEqual(poly.min_x, 10)
        self.assertEqual(poly.max_x, 50)
        self.assertEqual(poly.min_y, 10)
        self.assertEqual(poly.max_y, 30)
        self.assertEqual(poly.width, 40)
        self.assertEqual(poly.height, 20)
        self.assertEqual(poly.center_x, 30)
        self.assertEqual(poly.center_y, 20)
        self.assertEqual(poly.aspect_ratio, 2.0)
        self.assertEqual(poly.bounding_area, 800)
        self.assertFalse(poly.closed)

    def test_empty_polygon(self):
        """
        Test that a polygon with no points has every metric set to 0.
        """
        poly = Polygon()

        self.assertEqual(len(poly), 0)
        for name in (
            "min_x",
            "max_x",
            "min_y",
            "max_y",
            "width",
            "height",
            "aspect_ratio",
            "bounding_area",
        ):
            with self.subTest(metric=name):
                self.assertEqual(getattr(poly, name), 0)
        self.assertFalse(poly.closed)
        self.assertIsNone(poly.find_left_edge(0.05))

    def test_zero_height_uses_sentinel(self):
        """
        Test the aspect ratio of flat and single point polygons.
        """
        cases = {
            "flat": [(0, 5), (10, 5)],
            "single": [(3, 4)],
        }
        for name, points in cases.items():
            with self.subTest(case=name):
                poly = Polygon(points)
                self.assertEqual(
                    poly.aspect_ratio, Polygon.ASPECT_RATIO_SENTINEL
                )

    def test_closed(self):
        poly = Polygon([(0, 0), (10, 0), (10, 10), (0, 0)])
        self.assertTrue(poly.closed)

    def test_points_are_immutable(self):
        """
        Test that neither the input nor the returned points can change
        the polygon.
        """
        source = [[0, 0], [10, 0], [10, 20]]
        poly = Polygon(source)
        source[0][0] = 99

        points = poly.points
        points[0, 0] = 50

        self.assertEqual(poly.point(0), (0.0, 0.0))
        self.assertEqual(poly.min_x, 0)

    def test_accepts_opencv_shape(self):
        """
        Test construction from an (n, 1, 2) OpenCV style array.
        """
        contour = np.array([[[1, 2]], [[5, 2]], [[5, 9]]], dtype=np.int32)
        poly = Polygon(contour)

        self.assertEqual(len(poly), 3)
        self.assertEqual(poly.height, 7)

    def test_invalid_points(self):
        with self.assertRaises(ValueError):
            Polygon([(1, 2, 3), (4, 5, 6)])

    def test_from_contour_simplifies(self):
        """
        Test that a dense square contour is simplified to its corners.
        """
        edge = list(range(0, 100, 10))
        dense = (
            [(x, 0) for x in edge]
            + [(100, y) for y in edge]
            + [(100 - x, 100) for x in edge]
            + [(0, 100 - y) for y in edge]
        )
        contour = np.array(dense, dtype=np.int32).reshape(-1, 1, 2)

        poly = Polygon.from_contour(contour, 2.0)

        self.assertEqual(poly.vertex_count, 4)
        self.assertEqual(poly.width, 100)
        self.assertEqual(poly.height, 100)

    def test_from_contour_negative_epsilon(self):
        with self.assertRaises(ValueError):
            Polygon.from_contour(np.zeros((3, 1, 2), dtype=np.int32), -1)

    def test_to_contour(self):
        poly = Polygon([(1.4, 2.6), (5, 2), (5, 9)])
        contour = poly.to_contour()

        self.assertEqual(contour.shape, (3, 1, 2))
        self.assertEqual(contour.dtype, np.int32)
        self.assertEqual(tuple(contour[0, 0]), (1, 3))

    def test_find_vertical_edge_extremes(self):
        """
        Test that the smallest and largest y vertices in range are used.
        """
        poly = Polygon([(0, 5), (1, 20), (0, 1), (2, 30), (50, 0)])

        edge = poly.find_vertical_edge(0, 2)

        self.assertEqual(edge, VerticalEdge(bottom=(0.0, 1.0), top=(2.0, 30.0)))

    def test_find_vertical_edge_first_wins_ties(self):
        poly = Polygon([(0, 1), (1, 1), (0, 9), (1, 9)])

        edge = poly.find_vertical_edge(0, 1)

        self.assertEqual(edge.bottom, (0.0, 1.0))
        self.assertEqual(edge.top, (0.0, 9.0))

    def test_find_vertical_edge_needs_two_points(self):
        poly = Polygon([(0, 0), (10, 10), (20, 0)])

        self.assertIsNone(poly.find_vertical_edge(0, 1))
        self.assertIsNone(poly.find_left_edge(0.05))

    def test_find_left_and_right_edges(self):
        """
        Test the edges of a rectangle with a tolerance window.
        """
        poly = Polygon([(270, 140), (370, 140), (370, 340), (270, 340)])

        left = poly.find_left_edge(0.05)
        right = poly.find_right_edge(0.05)

        self.assertEqual(left, VerticalEdge((270.0, 140.0), (270.0, 340.0)))
        self.assertEqual(right, VerticalEdge((370.0, 140.0), (370.0, 340.0)))

    def test_points_in_x_range_inclusive(self):
        poly = Polygon([(0, 0), (5, 1), (10, 2)])

        self.assertEqual(
            poly.points_in_x_range(0, 5), [(0.0, 0.0), (5.0, 1.0)]
        )

    def test_contains(self):
        outer = Polygon([(0, 0), (100, 0), (100, 100), (0, 100)])
        inner = Polygon([(10, 10), (90, 10), (90, 90)])
        edge = Polygon([(0, 0), (100, 100)])
        outside = Polygon([(50, 50), (150, 50)])

        self.assertTrue(outer.contains(inner))
        self.assertTrue(outer.contains(edge))
        self.assertTrue(outer.contains(outer))
        self.assertFalse(outer.contains(outside))
        self.assertFalse(inner.contains(outer))

    def test_contains_single_side_overhang(self):
        outer = Polygon([(0, 0), (100, 0), (100, 100), (0, 100)])
        overhangs = {
            "left": Polygon([(-1, 10), (50, 50)]),
            "right": Polygon([(10, 10), (101, 50)]),
            "top": Polygon([(10, -1), (50, 50)]),
            "bottom": Polygon([(10, 10), (50, 101)]),
        }

        for side, other in overhangs.items():
            with self.subTest(side=side):
                self.assertFalse(outer.contains(other))

    def test_repr(self):
        poly = Polygon([(10, 10), (50, 10), (50, 30)])
        self.assertTrue(repr(poly).startswith("Polygon(n=3, x=10.0, y=10.0"))


if __name__ == "__main__":
    unittest.main()
