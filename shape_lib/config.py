"""Configuration for smoothing and shape recognition.

This module centralizes the tunable values used by:
    - shape_lib.drawing.smoothing
    - shape_lib.recognition.features
    - shape_lib.recognition.detectors
    - shape_lib.recognition.recognizer

Thresholds are fixed constants. Nothing in the package adapts them at run
time; callers that want different behavior pass a different
RecognitionConfig or SmoothingConfig.

Example usage:
    Override defaults for one call::

        from shape_lib.config import RecognitionConfig
        from shape_lib.domain import ShapeType

        cfg = RecognitionConfig(
            min_confidence=0.8,
            enabled_shapes=frozenset({ShapeType.LINE, ShapeType.ARROW}),
        )

    Build from a JSON payload::

        cfg = RecognitionConfig.from_dict({'minConfidence': 0.5})
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, FrozenSet

from .domain.shapes import ShapeType

# --- Recognition ---
MIN_RECOGNITION_POINTS = 5
DEFAULT_MIN_CONFIDENCE = 0.65
DEFAULT_SHAPE_COLOR = '#000000'
DEFAULT_SHAPE_WIDTH = 2.0

# Shapes the recognizer runs by default (SQUARE is never emitted directly)
DEFAULT_ENABLED_SHAPES: FrozenSet[ShapeType] = frozenset({
    ShapeType.LINE, ShapeType.CIRCLE, ShapeType.RECTANGLE, ShapeType.TRIANGLE,
    ShapeType.ARROW, ShapeType.CHECKMARK, ShapeType.XMARK,
})

# --- Feature extraction ---
CLOSURE_THRESHOLD = 0.15
FEATURE_CORNER_THRESHOLD = math.pi / 4  # 45 degrees
ANGLE_HISTOGRAM_BINS = 8
ANGLE_BIN_WIDTH_DEG = 45.0

# --- Line detector ---
LINE_MIN_CONFIDENCE = 0.7
LINE_MIN_STRAIGHTNESS = 0.9
LINE_MIN_LENGTH = 20.0
LINE_SNAP_TOLERANCE_DEG = 15.0
LINE_SNAP_ANGLES_DEG = (0, 45, 90, 135, 180, -45, -90, -135, -180)

# --- Circle detector ---
CIRCLE_MIN_CONFIDENCE = 0.65
CIRCLE_MIN_CIRCULARITY = 0.6
CIRCLE_MIN_SIZE = 15.0

# --- Rectangle detector ---
RECTANGLE_MIN_CONFIDENCE = 0.6
RECTANGLE_MIN_SIZE = 20.0
RIGHT_ANGLE_RANGE_DEG = (70.0, 110.0)
# Two square tolerances on purpose: one flags a square during detection,
# the other decides when the optimizer snaps to equal sides.
SQUARE_ASPECT_TOLERANCE = 0.2
SQUARE_SNAP_TOLERANCE = 0.15

# --- Triangle detector ---
TRIANGLE_MIN_CONFIDENCE = 0.6
TRIANGLE_MIN_SIZE = 20.0

# --- Arrow detector ---
ARROW_MIN_CONFIDENCE = 0.6
ARROW_HEAD_WINDOW_RATIO = 0.3
ARROW_HEAD_WINDOW_MAX_POINTS = 20
ARROW_SHARP_ANGLE_RANGE_DEG = (30.0, 150.0)
ARROW_MIN_BODY_LENGTH = 30.0
ARROW_HEAD_SIZE_SCALE = 0.8
ARROW_HEAD_SIZE_RANGE = (10.0, 30.0)
ARROW_DEFAULT_HEAD_SIZE = 15.0

# --- Symbol detector ---
SYMBOL_MIN_CONFIDENCE = 0.6
SYMBOL_MAX_SIZE = 100.0
CHECKMARK_ASPECT_RANGE = (0.5, 3.0)
CHECKMARK_LOW_POINT_RANGE = (0.2, 0.8)
XMARK_MIN_ASPECT_SCORE = 0.5
XMARK_CROSS_RANGE = (0.3, 0.7)
XMARK_MID_ANGLE_DEG = 60.0

# --- Smoothing ---
DEFAULT_RESOLUTION = 8
DEFAULT_MIN_POINT_DISTANCE = 2.0
DEFAULT_SIMPLIFY_EPSILON = 1.5
DEFAULT_MOVING_AVERAGE_WINDOW = 3

# --- Input limits ---
# Largest |x| or |y| accepted from callers; squared distances stay finite
MAX_COORDINATE = 1e9


def _parse_shape_type(value: Any) -> ShapeType:
    if isinstance(value, ShapeType):
        return value
    try:
        return ShapeType(str(value))
    except ValueError:
        raise ValueError(f"Unknown shape type: {value!r}") from None


@dataclass(frozen=True)
class RecognitionConfig:
    """Configuration for a recognition call.

    Attributes:
        min_confidence: Best-candidate confidence required to report a
            shape as recognized. Must lie in [0, 1].
        enabled_shapes: Shape types whose detectors run. CHECKMARK and
            XMARK share one detector; it runs when either is enabled and
            only its enabled sub-type is reported.
    """
    min_confidence: float = DEFAULT_MIN_CONFIDENCE
    enabled_shapes: FrozenSet[ShapeType] = field(
        default_factory=lambda: DEFAULT_ENABLED_SHAPES)

    def __post_init__(self):
        if not 0.0 <= self.min_confidence <= 1.0:
            raise ValueError(
                f"min_confidence must be within [0, 1], got {self.min_confidence}")
        object.__setattr__(self, 'enabled_shapes', frozenset(self.enabled_shapes))

    def is_enabled(self, shape_type: ShapeType) -> bool:
        return shape_type in self.enabled_shapes

    def to_dict(self) -> dict[str, Any]:
        return {
            'minConfidence': self.min_confidence,
            'enabledShapes': sorted(s.value for s in self.enabled_shapes),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> RecognitionConfig:
        """Build from camelCase JSON keys, falling back to defaults.

        Raises:
            ValueError: On unknown shape names or an out-of-range threshold.
        """
        if not d:
            return cls()
        kwargs: dict[str, Any] = {}
        if d.get('minConfidence') is not None:
            kwargs['min_confidence'] = float(d['minConfidence'])
        if d.get('enabledShapes') is not None:
            kwargs['enabled_shapes'] = frozenset(
                _parse_shape_type(s) for s in d['enabledShapes'])
        return cls(**kwargs)


@dataclass(frozen=True)
class SmoothingConfig:
    """Configuration for Catmull-Rom smoothing.

    Attributes:
        resolution: Samples emitted per segment between filtered points.
        min_point_distance: Points closer than this to the previously kept
            point are dropped before interpolation.
        simplify_first: Run a Douglas-Peucker pass before filtering. Off by
            default.
        simplify_epsilon: Tolerance for that pass.
    """
    resolution: int = DEFAULT_RESOLUTION
    min_point_distance: float = DEFAULT_MIN_POINT_DISTANCE
    simplify_first: bool = False
    simplify_epsilon: float = DEFAULT_SIMPLIFY_EPSILON

    def __post_init__(self):
        if self.resolution < 1:
            raise ValueError(f"resolution must be >= 1, got {self.resolution}")
        if self.min_point_distance < 0:
            raise ValueError(
                f"min_point_distance must be >= 0, got {self.min_point_distance}")
        if self.simplify_epsilon < 0:
            raise ValueError(
                f"simplify_epsilon must be >= 0, got {self.simplify_epsilon}")

    def to_dict(self) -> dict[str, Any]:
        return {
            'resolution': self.resolution,
            'minPointDistance': self.min_point_distance,
            'simplifyFirst': self.simplify_first,
            'simplifyEpsilon': self.simplify_epsilon,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> SmoothingConfig:
        if not d:
            return cls()
        kwargs: dict[str, Any] = {}
        if d.get('resolution') is not None:
            kwargs['resolution'] = int(d['resolution'])
        if d.get('minPointDistance') is not None:
            kwargs['min_point_distance'] = float(d['minPointDistance'])
        if d.get('simplifyFirst') is not None:
            kwargs['simplify_first'] = bool(d['simplifyFirst'])
        if d.get('simplifyEpsilon') is not None:
            kwargs['simplify_epsilon'] = float(d['simplifyEpsilon'])
        return cls(**kwargs)
