"""Shared types and helpers for the shape detectors."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ...domain.geometry import Point
from ...domain.shapes import ShapeParams
from ..features import StrokeFeatures


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of one detector on one stroke.

    Attributes:
        detected: Both the confidence threshold and the structural gates
            passed.
        confidence: Weighted score in [0, 1], reported even when not
            detected.
        params: Raw (not yet snapped) shape parameters, set only when
            detected. Their class identifies the detected shape type.
        is_square: Rectangle detector only: the stroke is close enough to
            square that the optimizer should force equal sides.
    """
    detected: bool
    confidence: float
    params: Optional[ShapeParams] = None
    is_square: bool = False

    @classmethod
    def rejected(cls, confidence: float = 0.0) -> DetectionResult:
        return cls(False, confidence)


Detector = Callable[[StrokeFeatures, Sequence[Point]], DetectionResult]
Optimizer = Callable[[DetectionResult], ShapeParams]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    Unlike the builtin ``round`` there is no banker's rounding:
    ``round_half_up(2.5) == 3`` and ``round_half_up(-2.5) == -2``.
    """
    return int(math.floor(value + 0.5))


def round_point(p: Point) -> Point:
    """Integer-snapped copy of ``p`` without capture metadata."""
    return Point(round_half_up(p.x), round_half_up(p.y))


def size_score(size: float, minimum: float) -> float:
    """1 above ``minimum``, else the linear fraction of it."""
    return 1.0 if size > minimum else size / minimum


def corner_penalty_score(corner_count: int, penalty: float) -> float:
    """1 for no corners, else ``1 - penalty * corner_count`` floored at 0."""
    if corner_count == 0:
        return 1.0
    return max(0.0, 1.0 - corner_count * penalty)


def straightness_score(curvature_variance: float, scale: float) -> float:
    return max(0.0, 1.0 - curvature_variance * scale)
