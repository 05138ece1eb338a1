"""Shape-related domain objects.

This module provides the data structures exchanged between the recognition
pipeline and its callers: the closed set of shape types, one parameter
class per shape type, strokes, shapes and the recognition result.

The module provides the following classes:
    ShapeType: Enumeration of recognizable shape types.
    LineParams, CircleParams, RectangleParams, SquareParams, TriangleParams,
    ArrowParams, CheckmarkParams, XMarkParams: Geometric parameters needed
        to redraw each shape type.
    Stroke: A finalized freehand stroke with display attributes.
    Shape: A classified vector shape.
    ShapeCandidate: One detector hit produced during recognition.
    RecognitionResult: Outcome of recognizing a single stroke.

Every parameter class carries its ``shape_type`` as a class attribute and
``Shape.type`` is read from the parameters, so a shape's tag and its
parameters cannot disagree.

Example usage:
    Building a shape by hand::

        from shape_lib.domain import CircleParams, Point, Shape

        shape = Shape(id='c1', params=CircleParams(Point(50, 50), 20))
        shape.type           # ShapeType.CIRCLE
        shape.to_dict()['params']
        # {'center': {'x': 50.0, 'y': 50.0}, 'radius': 20}

    Round-tripping through JSON-friendly dicts::

        data = shape.to_dict()
        same = Shape.from_dict(data)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type, Union

from .geometry import Point


class ShapeType(Enum):
    """Types of shapes the recognizer can produce.

    SQUARE is never emitted by the recognizer itself (a square stroke is
    reported as a RECTANGLE with equal sides) but is part of the drawing
    model so callers can store explicit squares.

    Example:
        >>> ShapeType('xmark')
        <ShapeType.XMARK: 'xmark'>
    """
    LINE = 'line'
    CIRCLE = 'circle'
    RECTANGLE = 'rectangle'
    SQUARE = 'square'
    TRIANGLE = 'triangle'
    ARROW = 'arrow'
    CHECKMARK = 'checkmark'
    XMARK = 'xmark'


@dataclass(frozen=True)
class LineParams:
    shape_type: ClassVar[ShapeType] = ShapeType.LINE
    start: Point
    end: Point

    def to_dict(self) -> dict[str, Any]:
        return {'start': self.start.to_dict(), 'end': self.end.to_dict()}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> LineParams:
        return cls(Point.from_dict(d['start']), Point.from_dict(d['end']))


@dataclass(frozen=True)
class CircleParams:
    shape_type: ClassVar[ShapeType] = ShapeType.CIRCLE
    center: Point
    radius: float

    def to_dict(self) -> dict[str, Any]:
        return {'center': self.center.to_dict(), 'radius': self.radius}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CircleParams:
        return cls(Point.from_dict(d['center']), d['radius'])


@dataclass(frozen=True)
class _BoxParams:
    """Fields shared by rectangles and squares."""
    x: float
    y: float
    width: float
    height: float
    rotation: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            'x': self.x, 'y': self.y,
            'width': self.width, 'height': self.height,
        }
        if self.rotation is not None:
            d['rotation'] = self.rotation
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]):
        return cls(d['x'], d['y'], d['width'], d['height'], d.get('rotation'))


@dataclass(frozen=True)
class RectangleParams(_BoxParams):
    """Axis-aligned rectangle, optionally rotated (radians) about its center."""
    shape_type: ClassVar[ShapeType] = ShapeType.RECTANGLE


@dataclass(frozen=True)
class SquareParams(_BoxParams):
    """Square drawn exactly like a rectangle with equal sides."""
    shape_type: ClassVar[ShapeType] = ShapeType.SQUARE


@dataclass(frozen=True)
class TriangleParams:
    shape_type: ClassVar[ShapeType] = ShapeType.TRIANGLE
    p1: Point
    p2: Point
    p3: Point

    def to_dict(self) -> dict[str, Any]:
        return {
            'p1': self.p1.to_dict(),
            'p2': self.p2.to_dict(),
            'p3': self.p3.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> TriangleParams:
        return cls(
            Point.from_dict(d['p1']),
            Point.from_dict(d['p2']),
            Point.from_dict(d['p3']),
        )


@dataclass(frozen=True)
class ArrowParams:
    """Arrow from ``start`` to ``end``; the head is drawn at ``end``."""
    shape_type: ClassVar[ShapeType] = ShapeType.ARROW
    start: Point
    end: Point
    head_size: float

    def to_dict(self) -> dict[str, Any]:
        return {
            'start': self.start.to_dict(),
            'end': self.end.to_dict(),
            'headSize': self.head_size,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ArrowParams:
        return cls(Point.from_dict(d['start']), Point.from_dict(d['end']), d['headSize'])


@dataclass(frozen=True)
class _SymbolParams:
    """Center and size shared by the checkmark and x-mark variants."""
    center: Point
    size: float

    def to_dict(self) -> dict[str, Any]:
        return {'center': self.center.to_dict(), 'size': self.size}

    @classmethod
    def from_dict(cls, d: dict[str, Any]):
        return cls(Point.from_dict(d['center']), d['size'])


@dataclass(frozen=True)
class CheckmarkParams(_SymbolParams):
    shape_type: ClassVar[ShapeType] = ShapeType.CHECKMARK


@dataclass(frozen=True)
class XMarkParams(_SymbolParams):
    shape_type: ClassVar[ShapeType] = ShapeType.XMARK


ShapeParams = Union[
    LineParams, CircleParams, RectangleParams, SquareParams,
    TriangleParams, ArrowParams, CheckmarkParams, XMarkParams,
]

# One entry per ShapeType; consumers dispatch through this table.
PARAMS_BY_TYPE: Dict[ShapeType, Type] = {
    ShapeType.LINE: LineParams,
    ShapeType.CIRCLE: CircleParams,
    ShapeType.RECTANGLE: RectangleParams,
    ShapeType.SQUARE: SquareParams,
    ShapeType.TRIANGLE: TriangleParams,
    ShapeType.ARROW: ArrowParams,
    ShapeType.CHECKMARK: CheckmarkParams,
    ShapeType.XMARK: XMarkParams,
}


def params_from_dict(shape_type: ShapeType, d: dict[str, Any]) -> ShapeParams:
    """Rebuild the parameter variant for ``shape_type`` from a dict."""
    return PARAMS_BY_TYPE[shape_type].from_dict(d)


@dataclass
class Stroke:
    """A finalized freehand stroke.

    Owned by the caller; recognition and smoothing never mutate it.
    """
    id: str
    points: List[Point] = field(default_factory=list)
    color: str = '#000000'
    width: float = 2.0
    timestamp: int = 0

    def __len__(self) -> int:
        return len(self.points)

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'points': [p.to_dict() for p in self.points],
            'color': self.color,
            'width': self.width,
            'timestamp': self.timestamp,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Stroke:
        return cls(
            id=str(d['id']),
            points=[Point.from_dict(p) for p in d.get('points', [])],
            color=d.get('color', '#000000'),
            width=float(d.get('width', 2.0)),
            timestamp=int(d.get('timestamp', 0)),
        )


@dataclass(frozen=True)
class Shape:
    """A classified vector shape.

    Attributes:
        id: Unique identifier supplied by the caller's id factory.
        params: Geometric parameters; also determine ``type``.
        color: Stroke color. Recognition uses a placeholder that callers
            override before display.
        width: Stroke width.
        confidence: Recognizer confidence in [0, 1], if recognized.
        original_stroke_id: Id of the stroke this shape replaced.
        timestamp: Creation time in epoch milliseconds, if known.
    """
    id: str
    params: ShapeParams
    color: str = '#000000'
    width: float = 2.0
    confidence: Optional[float] = None
    original_stroke_id: Optional[str] = None
    timestamp: Optional[int] = None

    @property
    def type(self) -> ShapeType:
        return self.params.shape_type

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            'id': self.id,
            'type': self.type.value,
            'params': self.params.to_dict(),
            'color': self.color,
            'width': self.width,
        }
        if self.confidence is not None:
            d['confidence'] = self.confidence
        if self.original_stroke_id is not None:
            d['originalStrokeId'] = self.original_stroke_id
        if self.timestamp is not None:
            d['timestamp'] = self.timestamp
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Shape:
        shape_type = ShapeType(d['type'])
        return cls(
            id=str(d['id']),
            params=params_from_dict(shape_type, d['params']),
            color=d.get('color', '#000000'),
            width=float(d.get('width', 2.0)),
            confidence=d.get('confidence'),
            original_stroke_id=d.get('originalStrokeId'),
            timestamp=d.get('timestamp'),
        )


@dataclass(frozen=True)
class ShapeCandidate:
    """A detector hit. Produced per recognition call, never persisted."""
    shape_type: ShapeType
    confidence: float
    shape: Shape

    def to_dict(self) -> dict[str, Any]:
        return {
            'shapeType': self.shape_type.value,
            'confidence': self.confidence,
            'shape': self.shape.to_dict(),
        }


@dataclass(frozen=True)
class RecognitionResult:
    """Outcome of recognizing one stroke.

    ``recognized`` False is a routine outcome. In that case ``confidence``
    still reports the best candidate seen so callers can show near misses.
    """
    recognized: bool
    shape: Optional[Shape]
    confidence: float
    shape_type: Optional[ShapeType]
    all_candidates: Tuple[ShapeCandidate, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            'recognized': self.recognized,
            'shape': self.shape.to_dict() if self.shape else None,
            'confidence': self.confidence,
            'shapeType': self.shape_type.value if self.shape_type else None,
            'allCandidates': [c.to_dict() for c in self.all_candidates],
        }

    @classmethod
    def not_recognized(cls, confidence: float = 0.0,
                       candidates: Tuple[ShapeCandidate, ...] = ()) -> RecognitionResult:
        return cls(False, None, confidence, None, candidates)
