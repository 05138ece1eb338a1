"""Geometric utility functions.

This module provides the pure, stateless geometry used by the smoother, the
feature extractor and the shape detectors. These functions supplement the
methods on the domain objects (Point, Vector, BBox) and never mutate their
inputs.

The module provides the following groups of functions:
    Point operations: distance, distance_squared, midpoint, lerp.
    Vector operations: vector_from_points, magnitude, normalize, dot, cross,
        angle_between, vector_angle.
    Angle helpers: to_degrees, to_radians, normalize_angle.
    Path operations: path_length, bounding_box, centroid, angle_changes,
        calculate_curvatures, is_closed_path, find_corners, variance,
        simplify_path, perpendicular_distance.

Degenerate input never raises. Empty paths have zero length and a zero
bounding box, zero vectors normalize to zero vectors, and coincident points
contribute zero curvature.

Example usage:
    Path metrics::

        from shape_lib.domain import Point
        from shape_lib.utils.geometry import path_length, find_corners

        pts = [Point(0, 0), Point(3, 4), Point(6, 0)]
        path_length(pts)        # 10.0
        find_corners(pts)       # [1]

    Simplification::

        from shape_lib.utils.geometry import simplify_path

        simplified = simplify_path(pts, epsilon=1.5)
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from ..domain.geometry import ZERO_VECTOR, BBox, Point, Vector

# Default closure rule: start/end gap below 15% of the path length.
DEFAULT_CLOSURE_RATIO = 0.15
DEFAULT_CORNER_THRESHOLD = math.pi / 6


# ---------------------------------------------------------------------------
# Point operations
# ---------------------------------------------------------------------------

def distance_squared(p1: Point, p2: Point) -> float:
    """Compute squared Euclidean distance between two points.

    Using squared distance avoids the sqrt computation, which is useful
    when comparing distances (the ordering is preserved).
    """
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    return dx * dx + dy * dy


def distance(p1: Point, p2: Point) -> float:
    """Compute Euclidean distance between two points."""
    return math.sqrt(distance_squared(p1, p2))


def midpoint(p1: Point, p2: Point) -> Point:
    return Point((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)


def lerp(p1: Point, p2: Point, t: float) -> Point:
    """Affine interpolation between two points.

    ``t`` is not clamped, so values outside [0, 1] extrapolate along the
    line through both points.
    """
    return Point(p1.x + (p2.x - p1.x) * t, p1.y + (p2.y - p1.y) * t)


# ---------------------------------------------------------------------------
# Vector operations
# ---------------------------------------------------------------------------

def vector_from_points(start: Point, end: Point) -> Vector:
    return Vector(end.x - start.x, end.y - start.y)


def magnitude(v: Vector) -> float:
    return math.sqrt(v.x * v.x + v.y * v.y)


def normalize(v: Vector) -> Vector:
    """Unit vector in the same direction, or the zero vector."""
    mag = magnitude(v)
    if mag == 0:
        return ZERO_VECTOR
    return Vector(v.x / mag, v.y / mag)


def dot(v1: Vector, v2: Vector) -> float:
    return v1.x * v2.x + v1.y * v2.y


def cross(v1: Vector, v2: Vector) -> float:
    """Z-component of the 3D cross product of two planar vectors."""
    return v1.x * v2.y - v1.y * v2.x


def angle_between(v1: Vector, v2: Vector) -> float:
    """Unsigned angle between two vectors in radians.

    Args:
        v1: First vector. Need not be normalized.
        v2: Second vector. Need not be normalized.

    Returns:
        Angle in radians, ranging from 0 (parallel) to pi (opposite).
        Returns 0 when either vector has zero length. The cosine is clamped
        to [-1, 1] before ``acos`` to absorb floating-point overshoot.

    Example:
        >>> angle_between(Vector(1, 0), Vector(0, 1))
        1.5707963267948966
    """
    mag1 = magnitude(v1)
    mag2 = magnitude(v2)
    if mag1 == 0 or mag2 == 0:
        return 0.0
    cos_angle = max(-1.0, min(1.0, dot(v1, v2) / (mag1 * mag2)))
    return math.acos(cos_angle)


def vector_angle(v: Vector) -> float:
    """Signed angle of a vector from the positive x-axis, in radians."""
    return math.atan2(v.y, v.x)


# ---------------------------------------------------------------------------
# Angle helpers
# ---------------------------------------------------------------------------

def to_degrees(radians: float) -> float:
    return radians * (180 / math.pi)


def to_radians(degrees: float) -> float:
    return degrees * (math.pi / 180)


def normalize_angle(angle: float) -> float:
    """Wrap an angle in radians into [0, 2*pi)."""
    two_pi = 2 * math.pi
    return ((angle % two_pi) + two_pi) % two_pi


# ---------------------------------------------------------------------------
# Path operations
# ---------------------------------------------------------------------------

def path_length(points: Sequence[Point]) -> float:
    """Total polyline length. Zero for fewer than two points."""
    if len(points) < 2:
        return 0.0
    total = 0.0
    for i in range(1, len(points)):
        total += distance(points[i - 1], points[i])
    return total


def bounding_box(points: Sequence[Point]) -> BBox:
    return BBox.from_points(points)


def centroid(points: Sequence[Point]) -> Point:
    """Arithmetic mean of the points; the origin for an empty sequence."""
    if not points:
        return Point(0.0, 0.0)
    n = len(points)
    return Point(sum(p.x for p in points) / n, sum(p.y for p in points) / n)


def angle_changes(points: Sequence[Point]) -> list[float]:
    """Unsigned turning angle (radians) at each interior vertex.

    Returns:
        A list of ``len(points) - 2`` angles, or an empty list for fewer
        than three points. Entry ``i`` belongs to ``points[i + 1]``.
    """
    if len(points) < 3:
        return []
    angles = []
    for i in range(1, len(points) - 1):
        v1 = vector_from_points(points[i - 1], points[i])
        v2 = vector_from_points(points[i], points[i + 1])
        angles.append(angle_between(v1, v2))
    return angles


def calculate_curvatures(points: Sequence[Point]) -> list[float]:
    """Menger curvature at each interior vertex.

    Curvature of the circle through three consecutive points:
    ``4 * area / (|p0p1| * |p1p2| * |p0p2|)``. Degenerate triangles with a
    zero-length side get curvature 0.
    """
    if len(points) < 3:
        return []
    curvatures = []
    for i in range(1, len(points) - 1):
        p0, p1, p2 = points[i - 1], points[i], points[i + 1]
        a = distance(p0, p1)
        b = distance(p1, p2)
        c = distance(p0, p2)
        if a * b * c == 0:
            curvatures.append(0.0)
            continue
        area = abs(cross(vector_from_points(p0, p1), vector_from_points(p0, p2))) / 2
        curvatures.append((4 * area) / (a * b * c))
    return curvatures


def is_closed_path(points: Sequence[Point],
                   threshold_ratio: float = DEFAULT_CLOSURE_RATIO) -> bool:
    """Check whether a path ends near where it started.

    Args:
        points: The path.
        threshold_ratio: Maximum start/end gap as a fraction of the total
            path length.

    Returns:
        True if ``distance(first, last) / path_length < threshold_ratio``.
        False for fewer than three points or a zero-length path.
    """
    if len(points) < 3:
        return False
    total = path_length(points)
    if total == 0:
        return False
    return distance(points[0], points[-1]) / total < threshold_ratio


def find_corners(points: Sequence[Point],
                 angle_threshold: float = DEFAULT_CORNER_THRESHOLD) -> list[int]:
    """Indices into ``points`` where the turning angle exceeds the threshold."""
    return [i + 1 for i, angle in enumerate(angle_changes(points))
            if angle > angle_threshold]


def variance(values: Sequence[float]) -> float:
    """Population variance; zero for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.var(np.asarray(values, dtype=float)))


def perpendicular_distance(point: Point, line_start: Point, line_end: Point) -> float:
    """Distance from ``point`` to the segment ``line_start``-``line_end``.

    The projection is clamped to the segment, so points beyond either end
    measure to the nearest endpoint.
    """
    dx = line_end.x - line_start.x
    dy = line_end.y - line_start.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return distance(point, line_start)
    t = ((point.x - line_start.x) * dx + (point.y - line_start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    closest = Point(line_start.x + t * dx, line_start.y + t * dy)
    return distance(point, closest)


def simplify_path(points: Sequence[Point], epsilon: float) -> list[Point]:
    """Simplify a path with the Ramer-Douglas-Peucker algorithm.

    Keeps the point of maximum deviation from the start-end chord when that
    deviation exceeds ``epsilon`` and recurses on both halves; otherwise the
    run collapses to its two endpoints.

    Args:
        points: Path to simplify.
        epsilon: Distance tolerance in the same units as the points.

    Returns:
        The simplified path. Paths of two points or fewer are returned as a
        new list with the same points.

    Example:
        >>> pts = [Point(0, 0), Point(5, 0.1), Point(10, 0)]
        >>> [p.to_tuple() for p in simplify_path(pts, 1.0)]
        [(0, 0), (10, 0)]
    """
    if len(points) <= 2:
        return list(points)

    start = points[0]
    end = points[-1]
    max_dist = 0.0
    max_index = 0
    for i in range(1, len(points) - 1):
        d = perpendicular_distance(points[i], start, end)
        if d > max_dist:
            max_dist = d
            max_index = i

    if max_dist > epsilon:
        left = simplify_path(points[:max_index + 1], epsilon)
        right = simplify_path(points[max_index:], epsilon)
        return left[:-1] + right

    return [start, end]
