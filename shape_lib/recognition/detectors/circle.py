"""Circle detection."""

from __future__ import annotations

from typing import Sequence

from ...config import CIRCLE_MIN_CIRCULARITY, CIRCLE_MIN_CONFIDENCE, CIRCLE_MIN_SIZE
from ...domain.geometry import Point
from ...domain.shapes import CircleParams
from ..features import StrokeFeatures
from .base import DetectionResult, corner_penalty_score, round_half_up, round_point, size_score


def detect_circle(features: StrokeFeatures,
                  points: Sequence[Point] = ()) -> DetectionResult:
    """Score how much a stroke looks like a circle.

    Weights: closure 0.25, circularity 0.35, aspect ratio near 1 0.2,
    no corners 0.15, size 0.05. Detection also requires a closed path and
    circularity above 0.6. The fitted circle is centered on the centroid
    with the mean radius.
    """
    if features.is_closed:
        closed_score = 1.0
    else:
        closed_score = max(0.0, 1.0 - features.closure_ratio * 3)
    aspect_score = max(0.0, 1.0 - abs(1.0 - features.aspect_ratio) * 2)

    confidence = (
        closed_score * 0.25
        + features.circularity * 0.35
        + aspect_score * 0.2
        + corner_penalty_score(features.corner_count, 0.3) * 0.15
        + size_score(features.bounding_box.min_side, CIRCLE_MIN_SIZE) * 0.05
    )

    if (confidence > CIRCLE_MIN_CONFIDENCE and features.is_closed
            and features.circularity > CIRCLE_MIN_CIRCULARITY):
        return DetectionResult(
            True, confidence, CircleParams(features.centroid, features.mean_radius))

    return DetectionResult.rejected(confidence)


def optimize_circle(params: CircleParams) -> CircleParams:
    return CircleParams(round_point(params.center), round_half_up(params.radius))
