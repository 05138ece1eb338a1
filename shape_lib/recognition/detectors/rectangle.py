"""Rectangle detection."""

from __future__ import annotations

import logging
from typing import Sequence

from ...config import (
    RECTANGLE_MIN_CONFIDENCE,
    RECTANGLE_MIN_SIZE,
    RIGHT_ANGLE_RANGE_DEG,
    SQUARE_ASPECT_TOLERANCE,
    SQUARE_SNAP_TOLERANCE,
)
from ...domain.geometry import Point
from ...domain.shapes import RectangleParams
from ..features import StrokeFeatures
from .base import DetectionResult, round_half_up, size_score, straightness_score

logger = logging.getLogger(__name__)


def _corner_score(corner_count: int) -> float:
    if corner_count == 4:
        return 1.0
    if corner_count in (3, 5):
        return 0.6
    return max(0.0, 1.0 - abs(corner_count - 4) * 0.3)


def _right_angle_score(corner_angles: Sequence[float]) -> float:
    """Share of corner turns that are roughly 90 degrees.

    Needs at least three corner angles; fewer score 0.
    """
    if len(corner_angles) < 3:
        return 0.0
    low, high = RIGHT_ANGLE_RANGE_DEG
    right = sum(1 for a in corner_angles if low < abs(a) % 180 < high)
    return right / len(corner_angles)


def detect_rectangle(features: StrokeFeatures,
                     points: Sequence[Point] = ()) -> DetectionResult:
    """Score how much a stroke looks like an axis-aligned rectangle.

    Weights: closure 0.2, corner count 0.35, right angles 0.25, straight
    sides 0.15, size 0.05. Detection requires confidence > 0.6, a closed
    path and 3 to 5 corners. The rectangle is the stroke's bounding box.

    Args:
        features: Features of the stroke.
        points: Unused; accepted for uniform dispatch.

    Returns:
        A DetectionResult whose ``is_square`` flag is set when the aspect
        ratio is within 0.2 of 1.
    """
    confidence = (
        (1.0 if features.is_closed else 0.0) * 0.2
        + _corner_score(features.corner_count) * 0.35
        + _right_angle_score(features.corner_angles) * 0.25
        + straightness_score(features.curvature_variance, 5) * 0.15
        + size_score(features.bounding_box.min_side, RECTANGLE_MIN_SIZE) * 0.05
    )

    detected = (confidence > RECTANGLE_MIN_CONFIDENCE and features.is_closed
                and 3 <= features.corner_count <= 5)
    if not detected:
        return DetectionResult.rejected(confidence)

    bbox = features.bounding_box
    is_square = abs(1.0 - features.aspect_ratio) < SQUARE_ASPECT_TOLERANCE
    logger.debug("Rectangle detected: confidence=%.3f corners=%d square=%s",
                 confidence, features.corner_count, is_square)
    return DetectionResult(
        True, confidence,
        RectangleParams(bbox.x, bbox.y, bbox.width, bbox.height),
        is_square=is_square,
    )


def optimize_rectangle(params: RectangleParams,
                       force_square: bool = False) -> RectangleParams:
    """Round a rectangle and snap near-squares to equal sides.

    Sides become their mean when ``force_square`` is set or width and
    height differ by less than 15%.
    """
    width = round_half_up(params.width)
    height = round_half_up(params.height)

    near_square = (params.height > 0
                   and abs(1.0 - params.width / params.height) < SQUARE_SNAP_TOLERANCE)
    if force_square or near_square:
        width = height = round_half_up((params.width + params.height) / 2)

    return RectangleParams(
        round_half_up(params.x), round_half_up(params.y), width, height,
        params.rotation,
    )
