"""Straight line detection."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ...config import (
    LINE_MIN_CONFIDENCE,
    LINE_MIN_LENGTH,
    LINE_MIN_STRAIGHTNESS,
    LINE_SNAP_ANGLES_DEG,
    LINE_SNAP_TOLERANCE_DEG,
)
from ...domain.geometry import Point
from ...domain.shapes import LineParams
from ..features import StrokeFeatures
from .base import (
    DetectionResult,
    corner_penalty_score,
    round_point,
    size_score,
    straightness_score,
)

logger = logging.getLogger(__name__)


def detect_line(features: StrokeFeatures,
                points: Sequence[Point] = ()) -> DetectionResult:
    """Score how much a stroke looks like a straight line.

    Confidence weights: straightness 0.4, low curvature variance 0.25,
    open path 0.15, no corners 0.15, length 0.05. Corners lower the score
    but never gate detection on their own.

    Args:
        features: Features of the stroke.
        points: Unused; accepted for uniform dispatch.

    Returns:
        A DetectionResult with LineParams from the first to the last point
        when confidence > 0.7 and straightness > 0.9.
    """
    if features.path_length > 0:
        straightness = features.start_end_distance / features.path_length
    else:
        straightness = 0.0

    confidence = (
        straightness * 0.4
        + straightness_score(features.curvature_variance, 10) * 0.25
        + (0.0 if features.is_closed else 1.0) * 0.15
        + corner_penalty_score(features.corner_count, 0.5) * 0.15
        + size_score(features.path_length, LINE_MIN_LENGTH) * 0.05
    )

    if confidence > LINE_MIN_CONFIDENCE and straightness > LINE_MIN_STRAIGHTNESS:
        logger.debug("Line detected: confidence=%.3f straightness=%.3f",
                     confidence, straightness)
        return DetectionResult(
            True, confidence, LineParams(features.start_point, features.end_point))

    return DetectionResult.rejected(confidence)


def optimize_line(params: LineParams,
                  snap_angle: float = LINE_SNAP_TOLERANCE_DEG) -> LineParams:
    """Snap a line to a common direction and round its endpoints.

    The direction snaps to the first of 0, 45, 90, 135, 180, -45, -90, -135,
    -180 degrees lying within ``snap_angle``; the start stays put and the
    length is preserved.
    """
    start, end = params.start, params.end
    dx = end.x - start.x
    dy = end.y - start.y
    angle = math.degrees(math.atan2(dy, dx))
    length = math.hypot(dx, dy)

    snapped = angle
    for common in LINE_SNAP_ANGLES_DEG:
        if abs(angle - common) < snap_angle:
            snapped = common
            break

    if snapped != angle:
        radians = math.radians(snapped)
        end = Point(start.x + length * math.cos(radians),
                    start.y + length * math.sin(radians))

    return LineParams(round_point(start), round_point(end))
