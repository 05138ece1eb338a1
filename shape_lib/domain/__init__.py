"""Domain objects for stroke recognition.

This module provides the value objects used throughout the package:
geometric primitives, strokes, shapes and recognition results.

Geometry classes:
    Point: Immutable pointer sample with optional pressure and timestamp.
    Vector: Immutable 2D displacement.
    BBox: Immutable axis-aligned bounding box (origin plus size).

Shape classes:
    ShapeType: Closed enumeration of shape types.
    LineParams, CircleParams, RectangleParams, SquareParams, TriangleParams,
    ArrowParams, CheckmarkParams, XMarkParams: Per-type shape parameters.
    Stroke, Shape, ShapeCandidate, RecognitionResult.

Example usage:
    Working with geometry::

        from shape_lib.domain import Point, BBox

        p1 = Point(0, 0)
        p2 = Point(30, 40, pressure=0.5)
        p1.distance_to(p2)            # 50.0
        BBox.from_points([p1, p2])    # BBox(x=0, y=0, width=30, height=40)
"""

from .geometry import ZERO_VECTOR, BBox, Point, Vector
from .shapes import (
    PARAMS_BY_TYPE,
    ArrowParams,
    CheckmarkParams,
    CircleParams,
    LineParams,
    RecognitionResult,
    RectangleParams,
    Shape,
    ShapeCandidate,
    ShapeParams,
    ShapeType,
    SquareParams,
    Stroke,
    TriangleParams,
    XMarkParams,
    params_from_dict,
)

__all__ = [
    'Point', 'Vector', 'BBox', 'ZERO_VECTOR',
    'ShapeType', 'ShapeParams', 'PARAMS_BY_TYPE', 'params_from_dict',
    'LineParams', 'CircleParams', 'RectangleParams', 'SquareParams',
    'TriangleParams', 'ArrowParams', 'CheckmarkParams', 'XMarkParams',
    'Stroke', 'Shape', 'ShapeCandidate', 'RecognitionResult',
]
