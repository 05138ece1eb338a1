"""Triangle detection."""

from __future__ import annotations

from typing import Sequence

from ...config import TRIANGLE_MIN_CONFIDENCE, TRIANGLE_MIN_SIZE
from ...domain.geometry import Point
from ...domain.shapes import TriangleParams
from ..features import StrokeFeatures
from .base import DetectionResult, round_point, size_score, straightness_score


def _corner_score(corner_count: int) -> float:
    if corner_count == 3:
        return 1.0
    if corner_count in (2, 4):
        return 0.5
    return 0.0


def _triangle_vertices(features: StrokeFeatures,
                       points: Sequence[Point]) -> TriangleParams:
    """Vertices at the first three corners, else inscribed in the bounds.

    The fallback is an upward triangle: top-center, bottom-left and
    bottom-right of the bounding box.
    """
    corners = features.corner_indices
    if len(corners) >= 3:
        return TriangleParams(points[corners[0]], points[corners[1]], points[corners[2]])

    bbox = features.bounding_box
    return TriangleParams(
        Point(bbox.x + bbox.width / 2, bbox.y),
        Point(bbox.x, bbox.y + bbox.height),
        Point(bbox.x + bbox.width, bbox.y + bbox.height),
    )


def detect_triangle(features: StrokeFeatures,
                    points: Sequence[Point]) -> DetectionResult:
    """Score how much a stroke looks like a triangle.

    Weights: closure 0.25, corner count 0.4, straight sides 0.15, low
    circularity 0.1, size 0.1. Detection requires confidence > 0.6, a
    closed path and two or three corners.
    """
    confidence = (
        (1.0 if features.is_closed else 0.0) * 0.25
        + _corner_score(features.corner_count) * 0.4
        + straightness_score(features.curvature_variance, 5) * 0.15
        + (1.0 - features.circularity) * 0.1
        + size_score(features.bounding_box.min_side, TRIANGLE_MIN_SIZE) * 0.1
    )

    detected = (confidence > TRIANGLE_MIN_CONFIDENCE and features.is_closed
                and features.corner_count in (2, 3))
    if detected:
        return DetectionResult(True, confidence, _triangle_vertices(features, points))

    return DetectionResult.rejected(confidence)


def optimize_triangle(params: TriangleParams) -> TriangleParams:
    return TriangleParams(round_point(params.p1), round_point(params.p2),
                          round_point(params.p3))
