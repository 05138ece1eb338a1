"""Checkmark and x-mark detection.

Both symbols are small open strokes and share one detector. The checkmark
and x-mark checks run independently and the stronger detection wins, with
the x-mark winning ties.
"""

from __future__ import annotations

from typing import Sequence, Union

from ...config import (
    CHECKMARK_ASPECT_RANGE,
    CHECKMARK_LOW_POINT_RANGE,
    SYMBOL_MAX_SIZE,
    SYMBOL_MIN_CONFIDENCE,
    XMARK_CROSS_RANGE,
    XMARK_MID_ANGLE_DEG,
    XMARK_MIN_ASPECT_SCORE,
)
from ...domain.geometry import Point
from ...domain.shapes import CheckmarkParams, XMarkParams
from ...utils.geometry import to_degrees
from ..features import StrokeFeatures
from .base import DetectionResult, round_half_up, round_point

SymbolParams = Union[CheckmarkParams, XMarkParams]


def has_checkmark_shape(points: Sequence[Point]) -> bool:
    """A V whose lowest point sits mid-stroke with both ends above it.

    Screen coordinates: larger y is lower. The first point with the
    greatest y must fall between 20% and 80% of the sequence.
    """
    if len(points) < 5:
        return False

    lowest_idx = 0
    lowest_y = points[0].y
    for i in range(1, len(points)):
        if points[i].y > lowest_y:
            lowest_y = points[i].y
            lowest_idx = i

    low, high = CHECKMARK_LOW_POINT_RANGE
    if not low <= lowest_idx / len(points) <= high:
        return False

    return points[0].y < lowest_y and points[-1].y < lowest_y


def has_cross_pattern(points: Sequence[Point], features: StrokeFeatures) -> bool:
    """A corner in the middle of the stroke, or a sharp turn at its midpoint."""
    if len(points) < 5:
        return False

    low, high = XMARK_CROSS_RANGE
    middle_start = int(len(points) * low)
    middle_end = int(len(points) * high)
    if any(middle_start <= idx <= middle_end for idx in features.corner_indices):
        return True

    angles = features.angle_changes
    if angles:
        mid_angle = angles[len(angles) // 2]
        return abs(to_degrees(mid_angle)) > XMARK_MID_ANGLE_DEG

    return False


def detect_checkmark(features: StrokeFeatures,
                     points: Sequence[Point]) -> DetectionResult:
    if features.is_closed or not 1 <= features.corner_count <= 2:
        return DetectionResult.rejected(0.0)

    low, high = CHECKMARK_ASPECT_RANGE
    if not low < features.aspect_ratio < high:
        return DetectionResult.rejected(0.0)

    size = features.bounding_box.max_side
    if size > SYMBOL_MAX_SIZE:
        return DetectionResult.rejected(0.0)

    if not has_checkmark_shape(points):
        return DetectionResult.rejected(0.4)

    confidence = 0.75 + (0.15 if features.corner_count == 1 else 0.0)
    if confidence > SYMBOL_MIN_CONFIDENCE:
        return DetectionResult(True, confidence, CheckmarkParams(features.centroid, size))
    return DetectionResult.rejected(confidence)


def detect_xmark(features: StrokeFeatures,
                 points: Sequence[Point]) -> DetectionResult:
    if features.is_closed or not 1 <= features.corner_count <= 3:
        return DetectionResult.rejected(0.0)

    aspect_score = 1.0 - abs(1.0 - features.aspect_ratio)
    if aspect_score < XMARK_MIN_ASPECT_SCORE:
        return DetectionResult.rejected(0.0)

    size = features.bounding_box.max_side
    if size > SYMBOL_MAX_SIZE:
        return DetectionResult.rejected(0.0)

    if not has_cross_pattern(points, features):
        return DetectionResult.rejected(0.4)

    confidence = 0.7 + aspect_score * 0.2
    if confidence > SYMBOL_MIN_CONFIDENCE:
        return DetectionResult(True, confidence, XMarkParams(features.centroid, size))
    return DetectionResult.rejected(confidence)


def detect_symbol(features: StrokeFeatures,
                  points: Sequence[Point]) -> DetectionResult:
    """Detect a checkmark or an x-mark.

    Returns:
        The checkmark result when it is detected and the x-mark is either
        not detected or scores strictly lower; else the x-mark result if
        detected; else a rejection with confidence 0. The params class
        (CheckmarkParams or XMarkParams) tells which symbol was found.
    """
    check = detect_checkmark(features, points)
    xmark = detect_xmark(features, points)

    if check.detected and (not xmark.detected or check.confidence > xmark.confidence):
        return check
    if xmark.detected:
        return xmark
    return DetectionResult.rejected(0.0)


def optimize_symbol(params: SymbolParams) -> SymbolParams:
    """Round center and size, keeping the symbol type."""
    return type(params)(round_point(params.center), round_half_up(params.size))
