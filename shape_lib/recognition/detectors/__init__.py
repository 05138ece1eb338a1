"""Shape detectors.

Every detector is a pure function ``(features, points) -> DetectionResult``
paired with an optimizer that snaps the detected parameters to clean,
integer values. They are registered in ``DETECTORS``, a closed table in
the fixed order the recognizer runs them.

Detectors:
    line: Straight, open strokes.
    circle: Closed strokes with uniform radius.
    rectangle: Closed strokes with about four right-angle corners.
    triangle: Closed strokes with three corners.
    arrow: Open strokes with a head at one end.
    symbol: Small checkmarks and x-marks.

Example usage:
    Running one detector by hand::

        from shape_lib.recognition.detectors import detect_circle
        from shape_lib.recognition.features import extract_features

        result = detect_circle(extract_features(points), points)
        if result.detected:
            print(result.confidence, result.params)
"""

from __future__ import annotations

from typing import FrozenSet, NamedTuple, Tuple

from ...domain.shapes import ShapeType
from .arrow import check_arrow_head, detect_arrow, optimize_arrow
from .base import DetectionResult, Detector, Optimizer, round_half_up
from .circle import detect_circle, optimize_circle
from .line import detect_line, optimize_line
from .rectangle import detect_rectangle, optimize_rectangle
from .symbol import (
    detect_checkmark,
    detect_symbol,
    detect_xmark,
    optimize_symbol,
)
from .triangle import detect_triangle, optimize_triangle


class DetectorEntry(NamedTuple):
    """One row of the detector table.

    Attributes:
        name: Stable detector name.
        shape_types: Shape types this detector can produce. The detector
            runs when any of them is enabled.
        detect: The detection function.
        optimize: Maps a positive DetectionResult to snapped parameters.
    """
    name: str
    shape_types: FrozenSet[ShapeType]
    detect: Detector
    optimize: Optimizer


DETECTORS: Tuple[DetectorEntry, ...] = (
    DetectorEntry('line', frozenset({ShapeType.LINE}), detect_line,
                  lambda r: optimize_line(r.params)),
    DetectorEntry('circle', frozenset({ShapeType.CIRCLE}), detect_circle,
                  lambda r: optimize_circle(r.params)),
    DetectorEntry('rectangle', frozenset({ShapeType.RECTANGLE}), detect_rectangle,
                  lambda r: optimize_rectangle(r.params, force_square=r.is_square)),
    DetectorEntry('triangle', frozenset({ShapeType.TRIANGLE}), detect_triangle,
                  lambda r: optimize_triangle(r.params)),
    DetectorEntry('arrow', frozenset({ShapeType.ARROW}), detect_arrow,
                  lambda r: optimize_arrow(r.params)),
    DetectorEntry('symbol', frozenset({ShapeType.CHECKMARK, ShapeType.XMARK}),
                  detect_symbol, lambda r: optimize_symbol(r.params)),
)

DETECTORS_BY_NAME = {entry.name: entry for entry in DETECTORS}

__all__ = [
    'DETECTORS', 'DETECTORS_BY_NAME', 'DetectorEntry', 'DetectionResult',
    'Detector', 'Optimizer', 'round_half_up',
    'detect_line', 'optimize_line',
    'detect_circle', 'optimize_circle',
    'detect_rectangle', 'optimize_rectangle',
    'detect_triangle', 'optimize_triangle',
    'detect_arrow', 'optimize_arrow', 'check_arrow_head',
    'detect_symbol', 'detect_checkmark', 'detect_xmark', 'optimize_symbol',
]
