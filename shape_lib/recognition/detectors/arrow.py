"""Arrow detection.

An arrow is an open stroke with a shaft and a head drawn as a sharp
direction change near one end. Both ends are checked; a head found at the
start means the stroke was drawn from the tip, so the arrow is reversed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ...config import (
    ARROW_DEFAULT_HEAD_SIZE,
    ARROW_HEAD_SIZE_RANGE,
    ARROW_HEAD_SIZE_SCALE,
    ARROW_HEAD_WINDOW_MAX_POINTS,
    ARROW_HEAD_WINDOW_RATIO,
    ARROW_MIN_BODY_LENGTH,
    ARROW_MIN_CONFIDENCE,
    ARROW_SHARP_ANGLE_RANGE_DEG,
)
from ...domain.geometry import Point
from ...domain.shapes import ArrowParams
from ...utils.geometry import distance, to_degrees, vector_angle, vector_from_points
from ..features import StrokeFeatures
from .base import DetectionResult, round_half_up, round_point, size_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeadCheck:
    """Result of looking for an arrow head at the end of a point sequence."""
    has_head: bool
    confidence: float
    start: Optional[Point] = None
    end: Optional[Point] = None
    head_size: Optional[float] = None


def check_arrow_head(points: Sequence[Point]) -> HeadCheck:
    """Look for an arrow head at the last points of ``points``.

    The head window is the last ``min(floor(0.3 * n), 20)`` points. Each
    interior window vertex whose segment direction changes by between 30
    and 150 degrees counts as sharp; two sharp turns give full confidence.

    Args:
        points: Stroke points, ordered so the candidate tip is last.

    Returns:
        A HeadCheck spanning first to last point with the head size
        estimated from the window and clamped to [10, 30].
    """
    if len(points) < 5:
        return HeadCheck(False, 0.0)

    window = min(int(len(points) * ARROW_HEAD_WINDOW_RATIO), ARROW_HEAD_WINDOW_MAX_POINTS)
    head = points[-window:] if window > 0 else []
    if len(head) < 3:
        return HeadCheck(False, 0.0)

    low, high = ARROW_SHARP_ANGLE_RANGE_DEG
    sharp = 0
    for i in range(1, len(head) - 1):
        angle1 = to_degrees(vector_angle(vector_from_points(head[i - 1], head[i])))
        angle2 = to_degrees(vector_angle(vector_from_points(head[i], head[i + 1])))
        if low < abs(angle2 - angle1) < high:
            sharp += 1

    tip = points[-1]
    min_size, max_size = ARROW_HEAD_SIZE_RANGE
    head_size = distance(head[0], tip) * ARROW_HEAD_SIZE_SCALE

    return HeadCheck(
        has_head=sharp >= 1,
        confidence=min(1.0, sharp / 2),
        start=points[0],
        end=tip,
        head_size=max(min_size, min(max_size, head_size)),
    )


def detect_arrow(features: StrokeFeatures,
                 points: Sequence[Point]) -> DetectionResult:
    """Score how much a stroke looks like an arrow.

    Closed strokes and strokes with no corner or more than four score 0.
    Otherwise weights are: open path 0.2, head 0.6, shaft length 0.2.
    Detection requires confidence > 0.6 and a head at one of the ends.
    """
    if features.is_closed or not 1 <= features.corner_count <= 4:
        return DetectionResult.rejected(0.0)

    end_head = check_arrow_head(points)
    start_head = check_arrow_head(list(reversed(points)))
    best = end_head if end_head.confidence > start_head.confidence else start_head

    confidence = (
        0.2  # open path
        + best.confidence * 0.6
        + size_score(features.path_length, ARROW_MIN_BODY_LENGTH) * 0.2
    )

    if confidence > ARROW_MIN_CONFIDENCE and best.has_head:
        logger.debug("Arrow detected: confidence=%.3f head_at_end=%s",
                     confidence, best is end_head)
        return DetectionResult(True, confidence, ArrowParams(
            best.start, best.end,
            best.head_size if best.head_size else ARROW_DEFAULT_HEAD_SIZE,
        ))

    return DetectionResult.rejected(confidence)


def optimize_arrow(params: ArrowParams) -> ArrowParams:
    return ArrowParams(round_point(params.start), round_point(params.end),
                       round_half_up(params.head_size))
