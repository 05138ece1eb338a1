"""Shape recognition engine.

This module runs the detectors over one stroke and fuses their results into
a single RecognitionResult.

Recognition steps:
    1. Reject strokes with fewer than five points outright.
    2. Extract the stroke features once.
    3. Run every enabled detector in table order (line, circle, rectangle,
       triangle, arrow, symbol) and snap each detection's parameters.
    4. Stable-sort the candidates by confidence, highest first.
    5. Accept the top candidate when it reaches ``min_confidence``.

Example usage:
    One-off recognition::

        from shape_lib.recognition import recognize_shape

        result = recognize_shape(points)
        if result.recognized:
            print(result.shape_type, result.confidence)

    Reusing a configured recognizer::

        from shape_lib.config import RecognitionConfig
        from shape_lib.recognition import ShapeRecognizer

        recognizer = ShapeRecognizer(RecognitionConfig(min_confidence=0.8))
        results = [recognizer.recognize(stroke.points) for stroke in strokes]
"""

from __future__ import annotations

import itertools
import logging
from typing import Callable, List, Optional, Sequence

from ..config import (
    DEFAULT_SHAPE_COLOR,
    DEFAULT_SHAPE_WIDTH,
    MIN_RECOGNITION_POINTS,
    RecognitionConfig,
)
from ..domain.geometry import Point
from ..domain.shapes import RecognitionResult, Shape, ShapeCandidate
from .detectors import DETECTORS
from .features import extract_features

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def sequential_ids(prefix: str = 'shape') -> IdFactory:
    """Id factory yielding ``<prefix>-1``, ``<prefix>-2``, ...

    Example:
        >>> next_id = sequential_ids()
        >>> next_id(), next_id()
        ('shape-1', 'shape-2')
    """
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


class ShapeRecognizer:
    """Classifies strokes into shapes.

    Holds a configuration and an optional id factory; no state carries over
    between calls, so one instance can serve many strokes.

    Attributes:
        config: RecognitionConfig applied to every call.
        id_factory: Callable returning a fresh shape id. When None, each
            call numbers its candidates ``shape-1``, ``shape-2``, ... so
            identical input gives identical output.
    """

    def __init__(self, config: Optional[RecognitionConfig] = None,
                 id_factory: Optional[IdFactory] = None):
        self.config = config or RecognitionConfig()
        self.id_factory = id_factory

    def recognize(self, points: Sequence[Point]) -> RecognitionResult:
        """Recognize the shape drawn by ``points``.

        Args:
            points: Raw stroke points in drawing order.

        Returns:
            The RecognitionResult. Not recognizing a shape is a normal
            outcome: ``recognized`` is False and ``confidence`` holds the
            best candidate's score (0 when there are none).
        """
        if len(points) < MIN_RECOGNITION_POINTS:
            logger.debug("Skipping recognition: %d points", len(points))
            return RecognitionResult.not_recognized()

        next_id = self.id_factory or sequential_ids()
        features = extract_features(points)
        candidates: List[ShapeCandidate] = []

        for entry in DETECTORS:
            if not any(self.config.is_enabled(t) for t in entry.shape_types):
                continue

            result = entry.detect(features, points)
            if not result.detected or result.params is None:
                continue

            # The symbol detector can report a sub-type that is disabled
            shape_type = result.params.shape_type
            if not self.config.is_enabled(shape_type):
                continue

            shape = Shape(
                id=next_id(),
                params=entry.optimize(result),
                color=DEFAULT_SHAPE_COLOR,
                width=DEFAULT_SHAPE_WIDTH,
                confidence=result.confidence,
            )
            candidates.append(ShapeCandidate(shape_type, result.confidence, shape))

        candidates.sort(key=lambda c: c.confidence, reverse=True)
        ranked = tuple(candidates)

        logger.debug("Recognition candidates: %s",
                     ', '.join(f"{c.shape_type.value}={c.confidence:.3f}" for c in ranked)
                     or 'none')

        if ranked and ranked[0].confidence >= self.config.min_confidence:
            best = ranked[0]
            return RecognitionResult(True, best.shape, best.confidence, best.shape_type, ranked)

        return RecognitionResult.not_recognized(
            ranked[0].confidence if ranked else 0.0, ranked)


def recognize_shape(points: Sequence[Point],
                    config: Optional[RecognitionConfig] = None,
                    id_factory: Optional[IdFactory] = None) -> RecognitionResult:
    """Recognize a single stroke with a throwaway ShapeRecognizer."""
    return ShapeRecognizer(config, id_factory).recognize(points)
