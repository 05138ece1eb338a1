"""Unit tests for stroke feature extraction."""

import math
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from shape_lib.domain import BBox, Point
from shape_lib.recognition.features import _dominant_angle, extract_features


class TestDegenerateInput:
    """Fewer than two points produce a zero record."""

    def test_empty(self):
        f = extract_features([])
        assert f.point_count == 0
        assert f.path_length == 0.0
        assert f.centroid == Point(0, 0)
        assert f.aspect_ratio == 1.0
        assert f.closure_ratio == 0.0
        assert f.is_closed is False
        assert f.corner_count == 0

    def test_single_point_anchors_record(self):
        f = extract_features([Point(7, 9, pressure=0.5)])
        assert f.point_count == 1
        assert f.start_point == Point(7, 9)
        assert f.end_point == Point(7, 9)
        assert f.bounding_box == BBox(7, 9, 0, 0)

    def test_zero_length_path(self):
        f = extract_features([Point(5, 5)] * 3)
        assert f.path_length == 0.0
        assert f.closure_ratio == 1.0
        assert f.is_closed is False
        assert f.circularity == 0.0


class TestBasicMeasurements:
    """Measurements on a small hand-checked path."""

    @pytest.fixture
    def features(self):
        return extract_features([Point(0, 0), Point(3, 4), Point(6, 0)])

    def test_lengths(self, features):
        assert features.path_length == 10.0
        assert features.start_end_distance == 6.0
        assert features.closure_ratio == pytest.approx(0.6)
        assert features.is_closed is False

    def test_bounds(self, features):
        assert features.bounding_box == BBox(0, 0, 6, 4)
        assert features.aspect_ratio == pytest.approx(1.5)
        assert features.centroid.x == pytest.approx(3.0)
        assert features.centroid.y == pytest.approx(4 / 3)

    def test_corner(self, features):
        assert features.corner_count == 1
        assert features.corner_indices == (1,)
        assert features.corner_angles[0] == pytest.approx(-2 * math.degrees(math.atan2(4, 3)))

    def test_tangent_angles(self, features):
        assert features.start_angle == pytest.approx(math.degrees(math.atan2(4, 3)))
        assert features.end_angle == pytest.approx(-math.degrees(math.atan2(4, 3)))

    def test_sequences_are_tuples(self, features):
        assert isinstance(features.curvatures, tuple)
        assert isinstance(features.angle_changes, tuple)
        assert len(features.angle_changes) == 1


def test_flat_stroke_has_unit_aspect():
    """Zero height yields aspect ratio 1 rather than dividing by zero."""
    f = extract_features([Point(0, 0), Point(10, 0)])
    assert f.aspect_ratio == 1.0
    assert f.closure_ratio == 1.0
    assert f.start_angle == 0.0


def test_circle_features(circle_points):
    f = extract_features(circle_points)
    assert f.is_closed
    assert f.circularity > 0.99
    assert f.mean_radius == pytest.approx(50, abs=2)
    assert f.corner_count == 0


def test_square_features(square_points):
    f = extract_features(square_points)
    assert f.is_closed
    assert f.corner_indices == (5, 15, 25, 35)
    assert all(abs(a) % 180 == pytest.approx(90) for a in f.corner_angles)
    # Straight runs dominate the turning-angle histogram
    assert f.dominant_angle == 22.5


def test_to_dict_keys(line_points):
    d = extract_features(line_points).to_dict()
    assert d['pointCount'] == 51
    assert d['cornerCount'] == 0
    assert d['isClosed'] is False
    assert set(d['boundingBox']) == {'x', 'y', 'width', 'height'}
    assert isinstance(d['curvatures'], list)


class TestDominantAngle:
    """Turning-angle histogram with 45 degree bins."""

    def test_empty(self):
        assert _dominant_angle([]) == 0.0

    def test_sign_is_ignored(self):
        assert _dominant_angle([math.radians(-100), math.radians(100)]) == 112.5

    def test_tie_goes_to_lowest_bin(self):
        assert _dominant_angle([math.radians(100), math.radians(10)]) == 22.5
