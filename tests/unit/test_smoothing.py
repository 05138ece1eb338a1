"""Unit tests for stroke smoothing.

Tests shape_lib.drawing.smoothing:
    - catmull_rom segment evaluation
    - smooth_stroke output sizes, endpoint preservation and filtering
    - moving_average_smooth averaging near the ends
"""

import sys
import unittest
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from shape_lib.config import SmoothingConfig
from shape_lib.domain import Point
from shape_lib.drawing.smoothing import (
    catmull_rom,
    moving_average_smooth,
    smooth_stroke,
)


class TestCatmullRom(unittest.TestCase):
    """Tests for catmull_rom."""

    def setUp(self):
        self.p0 = Point(0, 0)
        self.p1 = Point(10, 0)
        self.p2 = Point(20, 10)
        self.p3 = Point(30, 10)

    def test_starts_at_p1(self):
        p = catmull_rom(self.p0, self.p1, self.p2, self.p3, 0.0)
        self.assertEqual(p.to_tuple(), (10.0, 0.0))

    def test_ends_at_p2(self):
        p = catmull_rom(self.p0, self.p1, self.p2, self.p3, 1.0)
        self.assertAlmostEqual(p.x, 20.0)
        self.assertAlmostEqual(p.y, 10.0)

    def test_pressure_interpolated(self):
        p1 = Point(10, 0, pressure=0.2)
        p2 = Point(20, 10, pressure=0.6)
        p = catmull_rom(self.p0, p1, p2, self.p3, 0.5)
        self.assertAlmostEqual(p.pressure, 0.4)

    def test_pressure_omitted_when_missing(self):
        p = catmull_rom(self.p0, Point(10, 0, pressure=0.2), self.p2, self.p3, 0.5)
        self.assertIsNone(p.pressure)


class TestSmoothStroke(unittest.TestCase):
    """Tests for smooth_stroke."""

    def test_empty_and_single_point(self):
        self.assertEqual(smooth_stroke([]), [])
        self.assertEqual(smooth_stroke([Point(3, 4)]), [Point(3, 4)])

    def test_two_points_linear(self):
        """Two points give resolution + 1 evenly spaced samples."""
        result = smooth_stroke([Point(0, 0), Point(80, 0)])
        self.assertEqual(len(result), 9)
        self.assertEqual([p.x for p in result], [0, 10, 20, 30, 40, 50, 60, 70, 80])

    def test_segment_count(self):
        """Four well-spaced points give three segments of eight samples plus one."""
        pts = [Point(0, 0), Point(10, 10), Point(20, 0), Point(30, 10)]
        self.assertEqual(len(smooth_stroke(pts)), 25)

    def test_resolution_changes_density(self):
        pts = [Point(0, 0), Point(10, 10), Point(20, 5)]
        self.assertEqual(len(smooth_stroke(pts, SmoothingConfig(resolution=4))), 9)
        self.assertEqual(len(smooth_stroke(pts, SmoothingConfig(resolution=8))), 17)

    def test_endpoints_preserved(self):
        pts = [Point(0, 0), Point(10, 10), Point(20, 0), Point(30, 10)]
        result = smooth_stroke(pts)
        self.assertEqual(result[0].to_tuple(), (0.0, 0.0))
        self.assertEqual(result[-1], Point(30, 10))

    def test_collinear_input_stays_on_line(self):
        pts = [Point(x, 0) for x in range(0, 50, 10)]
        self.assertTrue(all(p.y == 0 for p in smooth_stroke(pts)))

    def test_close_points_filtered(self):
        """A point within min_point_distance of its predecessor is dropped."""
        pts = [Point(0, 0), Point(0.5, 0), Point(10, 0), Point(20, 0)]
        self.assertEqual(len(smooth_stroke(pts)), 17)

    def test_dropped_last_point_is_restored(self):
        pts = [Point(0, 0), Point(10, 0), Point(20, 0), Point(20.5, 0)]
        result = smooth_stroke(pts)
        self.assertEqual(len(result), 25)
        self.assertEqual(result[-1], Point(20.5, 0))

    def test_all_points_close_together(self):
        """Filtering down to two points falls back to linear sampling."""
        pts = [Point(0, 0), Point(0.5, 0), Point(1, 0)]
        result = smooth_stroke(pts)
        self.assertEqual(len(result), 9)
        self.assertEqual(result[-1], Point(1, 0))

    def test_simplify_first(self):
        """Near-collinear noise collapses to a segment before smoothing."""
        pts = [Point(0, 0), Point(5, 0.1), Point(10, 0), Point(15, 0), Point(20, 0)]
        cfg = SmoothingConfig(simplify_first=True)
        self.assertEqual(len(smooth_stroke(pts, cfg)), 9)
        self.assertEqual(len(smooth_stroke(pts)), 33)

    def test_input_not_mutated(self):
        pts = [Point(0, 0), Point(10, 10), Point(20, 0)]
        before = list(pts)
        smooth_stroke(pts)
        self.assertEqual(pts, before)


class TestMovingAverage(unittest.TestCase):
    """Tests for moving_average_smooth."""

    def setUp(self):
        self.points = [Point(0, 0), Point(10, 10), Point(5, 5), Point(15, 15), Point(10, 10)]

    def test_length_preserved(self):
        self.assertEqual(len(moving_average_smooth(self.points, 3)), 5)

    def test_interior_mean(self):
        result = moving_average_smooth(self.points, 3)
        self.assertAlmostEqual(result[2].x, 10.0)
        self.assertAlmostEqual(result[2].y, 10.0)

    def test_end_uses_available_neighbors(self):
        """The first point averages itself with its single neighbor."""
        result = moving_average_smooth(self.points, 3)
        self.assertAlmostEqual(result[0].x, 5.0)
        self.assertAlmostEqual(result[-1].x, 12.5)

    def test_short_input_unchanged(self):
        pts = [Point(0, 0), Point(10, 10)]
        self.assertEqual(moving_average_smooth(pts, 3), pts)

    def test_metadata_copied(self):
        pts = [Point(i, i, pressure=0.1 * i, timestamp=i) for i in range(5)]
        result = moving_average_smooth(pts, 3)
        self.assertEqual([p.timestamp for p in result], [0, 1, 2, 3, 4])
        self.assertAlmostEqual(result[3].pressure, 0.3)

    def test_even_window_rounds_up_to_odd(self):
        """A window of 4 averages two neighbors on each side."""
        pts = [Point(float(x), 0) for x in (0, 10, 20, 30, 40)]
        result = moving_average_smooth(pts, 4)
        self.assertAlmostEqual(result[0].x, 10.0)
        self.assertAlmostEqual(result[2].x, 20.0)

    def test_end_mean_is_exact(self):
        pts = [Point(10, 0), Point(5, 0), Point(15, 0)]
        self.assertEqual(moving_average_smooth(pts, 3)[2].x, 10.0)

    def test_large_coordinates_match_arithmetic_mean(self):
        xs = [1e6 + 0.1 * i for i in range(50)]
        result = moving_average_smooth([Point(x, -x) for x in xs], 3)
        for i, p in enumerate(result):
            window = xs[max(0, i - 1):i + 2]
            self.assertEqual(p.x, sum(window) / len(window))
            self.assertEqual(p.y, sum(-x for x in window) / len(window))


if __name__ == '__main__':
    unittest.main()
