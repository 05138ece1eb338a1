"""Service layer for smoothing and recognition.

This module wraps the numeric core in a dictionary-based interface suitable
for JSON APIs. Services accept raw point payloads, validate and convert
them into domain objects, run the requested operation, and return plain
dicts and lists ready for serialization.

The module contains:
    ShapeService: Recognition, smoothing, feature analysis and path
        simplification over raw point payloads.
    InvalidPointsError: Raised when a point payload cannot be parsed.
    parse_points: Convert a raw payload into Point objects.

Example usage:
    Recognizing a stroke::

        from shape_lib.api.services import ShapeService

        service = ShapeService()
        result = service.recognize(
            [{'x': 0, 'y': 0}, {'x': 50, 'y': 1}, {'x': 100, 'y': 0}, ...],
            stroke_id='stroke-7', color='#ff0000',
        )
        if result['recognized']:
            print(result['shapeType'], result['shape']['params'])

    Smoothing for display::

        smoothed = service.smooth([[0, 0], [10, 10], [20, 5]], resolution=4)
"""

from __future__ import annotations

import dataclasses
import logging
import math
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..config import (
    DEFAULT_MOVING_AVERAGE_WINDOW,
    DEFAULT_SIMPLIFY_EPSILON,
    MAX_COORDINATE,
    RecognitionConfig,
    SmoothingConfig,
)
from ..domain.geometry import Point
from ..domain.shapes import RecognitionResult, Shape, ShapeCandidate, Stroke
from ..drawing.smoothing import moving_average_smooth, smooth_stroke
from ..recognition.features import extract_features
from ..recognition.recognizer import ShapeRecognizer
from ..utils.geometry import simplify_path

# Logger for service errors
_logger = logging.getLogger(__name__)


class InvalidPointsError(ValueError):
    """A point payload is missing, malformed or non-numeric."""


def _coerce_coordinate(value: Any, index: int, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidPointsError(f"Point {index}: '{name}' must be a number")
    try:
        number = float(value)
    except OverflowError:
        raise InvalidPointsError(f"Point {index}: '{name}' must be finite") from None
    if not math.isfinite(number):
        raise InvalidPointsError(f"Point {index}: '{name}' must be finite")
    return number


def _coerce_position(value: Any, index: int, name: str) -> float:
    coordinate = _coerce_coordinate(value, index, name)
    if abs(coordinate) > MAX_COORDINATE:
        raise InvalidPointsError(f"Point {index}: '{name}' exceeds {MAX_COORDINATE:g} in magnitude")
    return coordinate


def _parse_point(raw: Any, index: int) -> Point:
    if isinstance(raw, dict):
        if 'x' not in raw or 'y' not in raw:
            raise InvalidPointsError(f"Point {index}: missing 'x' or 'y'")
        x = _coerce_position(raw['x'], index, 'x')
        y = _coerce_position(raw['y'], index, 'y')
        pressure = raw.get('pressure')
        timestamp = raw.get('timestamp')
        return Point(
            x, y,
            _coerce_coordinate(pressure, index, 'pressure') if pressure is not None else None,
            int(_coerce_coordinate(timestamp, index, 'timestamp')) if timestamp is not None else None,
        )

    if isinstance(raw, (list, tuple)) and len(raw) >= 2:
        return Point(_coerce_position(raw[0], index, 'x'),
                     _coerce_position(raw[1], index, 'y'))

    raise InvalidPointsError(f"Point {index}: expected an object or an [x, y] pair")


def parse_points(raw: Any) -> List[Point]:
    """Convert a raw point payload into Point objects.

    Args:
        raw: A list whose items are ``{'x', 'y', 'pressure'?, 'timestamp'?}``
            dicts or ``[x, y]`` pairs. The two forms may be mixed.
            Coordinates must be finite and at most MAX_COORDINATE in
            magnitude.

    Returns:
        The parsed points, in order.

    Raises:
        InvalidPointsError: If ``raw`` is not a list or any item is invalid.

    Example:
        >>> parse_points([[0, 0], {'x': 3, 'y': 4, 'pressure': 0.5}])
        [Point(x=0.0, y=0.0, pressure=None, timestamp=None), Point(x=3.0, y=4.0, pressure=0.5, timestamp=None)]
    """
    if not isinstance(raw, (list, tuple)):
        _logger.warning("Rejected points payload of type %s", type(raw).__name__)
        raise InvalidPointsError("'points' must be a list")
    try:
        return [_parse_point(item, i) for i, item in enumerate(raw)]
    except InvalidPointsError as e:
        _logger.warning("Rejected points payload: %s", e)
        raise


def _points_to_dicts(points: Sequence[Point]) -> List[Dict[str, Any]]:
    return [p.to_dict() for p in points]


def _default_id_factory() -> str:
    return uuid.uuid4().hex


@dataclass
class ShapeService:
    """Service for recognition and smoothing operations.

    Provides a clean interface for the API layer. All methods take raw,
    JSON-decoded point payloads and return serializable structures.

    Attributes:
        recognition_config: Default RecognitionConfig for ``recognize``.
        smoothing_config: Default SmoothingConfig for ``smooth``.
        id_factory: Callable producing ids for recognized shapes.

    Example:
        >>> service = ShapeService()
        >>> service.recognize([[0, 0], [1, 1]])['recognized']
        False
    """
    recognition_config: RecognitionConfig = field(default_factory=RecognitionConfig)
    smoothing_config: SmoothingConfig = field(default_factory=SmoothingConfig)
    id_factory: Callable[[], str] = _default_id_factory

    def recognize(
        self,
        raw_points: Any,
        stroke_id: Optional[str] = None,
        color: Optional[str] = None,
        width: Optional[float] = None,
        min_confidence: Optional[float] = None,
        config: Optional[RecognitionConfig] = None,
    ) -> Dict[str, Any]:
        """Recognize the shape drawn by a raw stroke.

        Args:
            raw_points: Point payload accepted by ``parse_points``.
            stroke_id: Id of the source stroke, stamped on the shapes as
                ``originalStrokeId``.
            color: Stroke color to stamp on the shapes.
            width: Stroke width to stamp on the shapes.
            min_confidence: Overrides the configured acceptance threshold.
            config: Replaces the service's RecognitionConfig for this call.

        Returns:
            ``RecognitionResult.to_dict()``: keys 'recognized', 'shape',
            'confidence', 'shapeType' and 'allCandidates'.

        Raises:
            InvalidPointsError: If the payload is invalid.
            ValueError: If ``min_confidence`` is outside [0, 1].
        """
        points = parse_points(raw_points)
        cfg = config or self.recognition_config
        if min_confidence is not None:
            cfg = dataclasses.replace(cfg, min_confidence=float(min_confidence))
        return self._recognize_points(points, cfg, stroke_id, color, width).to_dict()

    def recognize_stroke(self, raw_stroke: Dict[str, Any],
                         min_confidence: Optional[float] = None) -> Dict[str, Any]:
        """Recognize a serialized Stroke, keeping its id, color and width."""
        if not isinstance(raw_stroke, dict) or 'id' not in raw_stroke:
            _logger.warning("Rejected stroke payload without id")
            raise InvalidPointsError("stroke must be an object with an 'id'")
        stroke = Stroke(
            id=str(raw_stroke['id']),
            points=parse_points(raw_stroke.get('points', [])),
            color=raw_stroke.get('color', '#000000'),
            width=float(raw_stroke.get('width', 2.0)),
            timestamp=int(raw_stroke.get('timestamp', 0)),
        )
        cfg = self.recognition_config
        if min_confidence is not None:
            cfg = dataclasses.replace(cfg, min_confidence=float(min_confidence))
        result = self._recognize_points(stroke.points, cfg, stroke.id, stroke.color, stroke.width)
        return result.to_dict()

    def _recognize_points(self, points: Sequence[Point], cfg: RecognitionConfig,
                          stroke_id: Optional[str], color: Optional[str],
                          width: Optional[float]) -> RecognitionResult:
        result = ShapeRecognizer(cfg, self.id_factory).recognize(points)
        result = self._stamp(result, points, stroke_id, color, width)
        _logger.debug("recognize: %d points -> recognized=%s type=%s confidence=%.3f",
                      len(points), result.recognized,
                      result.shape_type.value if result.shape_type else None,
                      result.confidence)
        return result

    @staticmethod
    def _stamp(result: RecognitionResult, points: Sequence[Point],
               stroke_id: Optional[str], color: Optional[str],
               width: Optional[float]) -> RecognitionResult:
        """Copy caller display attributes onto every candidate shape."""
        changes: Dict[str, Any] = {}
        if stroke_id is not None:
            changes['original_stroke_id'] = stroke_id
        if color is not None:
            changes['color'] = color
        if width is not None:
            changes['width'] = float(width)
        if points and points[-1].timestamp is not None:
            changes['timestamp'] = points[-1].timestamp
        if not changes or not result.all_candidates:
            return result

        candidates = tuple(
            ShapeCandidate(c.shape_type, c.confidence, dataclasses.replace(c.shape, **changes))
            for c in result.all_candidates
        )
        shape: Optional[Shape] = None
        if result.recognized:
            shape = candidates[0].shape
        return dataclasses.replace(result, shape=shape, all_candidates=candidates)

    def smooth(self, raw_points: Any, resolution: Optional[int] = None,
               config: Optional[SmoothingConfig] = None) -> List[Dict[str, Any]]:
        """Catmull-Rom smooth a raw stroke.

        Args:
            raw_points: Point payload accepted by ``parse_points``.
            resolution: Overrides the configured samples per segment.
            config: Replaces the service's SmoothingConfig for this call.

        Returns:
            The smoothed points as dicts.
        """
        points = parse_points(raw_points)
        cfg = config or self.smoothing_config
        if resolution is not None:
            cfg = dataclasses.replace(cfg, resolution=int(resolution))

        smoothed = smooth_stroke(points, cfg)
        _logger.debug("smooth: %d -> %d points (resolution=%d)",
                      len(points), len(smoothed), cfg.resolution)
        return _points_to_dicts(smoothed)

    def moving_average(self, raw_points: Any,
                       window_size: int = DEFAULT_MOVING_AVERAGE_WINDOW) -> List[Dict[str, Any]]:
        """Moving-average smooth a raw stroke, one output point per input."""
        if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size < 1:
            _logger.warning("Rejected window size %r", window_size)
            raise ValueError("windowSize must be a positive integer")
        points = parse_points(raw_points)
        _logger.debug("moving_average: %d points, window=%d", len(points), window_size)
        return _points_to_dicts(moving_average_smooth(points, window_size))

    def analyze(self, raw_points: Any) -> Dict[str, Any]:
        """Return the feature vector of a raw stroke."""
        points = parse_points(raw_points)
        _logger.debug("analyze: %d points", len(points))
        return extract_features(points).to_dict()

    def simplify(self, raw_points: Any,
                 epsilon: float = DEFAULT_SIMPLIFY_EPSILON) -> List[Dict[str, Any]]:
        """Douglas-Peucker simplify a raw stroke.

        Raises:
            InvalidPointsError: If the payload is invalid.
            ValueError: If ``epsilon`` is negative or not a number.
        """
        if isinstance(epsilon, bool) or not isinstance(epsilon, (int, float)) or epsilon < 0:
            _logger.warning("Rejected simplify epsilon %r", epsilon)
            raise ValueError("epsilon must be a non-negative number")
        points = parse_points(raw_points)
        simplified = simplify_path(points, float(epsilon))
        _logger.debug("simplify: %d -> %d points (epsilon=%s)",
                      len(points), len(simplified), epsilon)
        return _points_to_dicts(simplified)
