"""Feature extraction for stroke recognition.

This module reduces a raw point sequence to the fixed set of geometric
measurements every shape detector reads. Features are computed once per
stroke and shared by all detectors.

The module provides:
    StrokeFeatures: Immutable feature record.
    extract_features: Compute a StrokeFeatures from a point sequence.

Example usage:
    Inspecting a stroke::

        from shape_lib.domain import Point
        from shape_lib.recognition.features import extract_features

        features = extract_features([Point(0, 0), Point(3, 4), Point(6, 0)])
        features.path_length      # 10.0
        features.corner_count     # 1
        features.is_closed        # False
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

import numpy as np

from ..config import (
    ANGLE_BIN_WIDTH_DEG,
    ANGLE_HISTOGRAM_BINS,
    CLOSURE_THRESHOLD,
    FEATURE_CORNER_THRESHOLD,
)
from ..domain.geometry import BBox, Point
from ..utils.geometry import (
    angle_changes,
    bounding_box,
    calculate_curvatures,
    centroid,
    distance,
    find_corners,
    is_closed_path,
    path_length,
    to_degrees,
    variance,
    vector_angle,
    vector_from_points,
)


@dataclass(frozen=True)
class StrokeFeatures:
    """Geometric measurements of one stroke.

    Attributes:
        point_count: Number of input points.
        path_length: Polyline length.
        bounding_box: Axis-aligned bounds.
        aspect_ratio: width / height, or 1 for zero height.
        centroid: Mean of the points.
        start_point: First point.
        end_point: Last point.
        start_end_distance: Gap between first and last point.
        closure_ratio: start_end_distance / path_length (1 for zero length).
        is_closed: Whether the gap is under 15% of the path length.
        curvatures: Menger curvature per interior vertex.
        curvature_mean: Mean of ``curvatures``.
        curvature_variance: Population variance of ``curvatures``.
        angle_changes: Unsigned turning angle per interior vertex, radians.
        total_angle_change: Sum of ``angle_changes``.
        dominant_angle: Center of the most populated 45-degree bin of the
            turning angles, in degrees.
        corner_indices: Point indices with a turn sharper than 45 degrees.
        corner_angles: Signed turn at each corner, degrees.
        circularity: 1 minus the normalized radius variance, floored at 0.
        radius_variance: Variance of point distances from the centroid.
        mean_radius: Mean point distance from the centroid.
        start_angle: Tangent direction at the start, degrees.
        end_angle: Tangent direction at the end, degrees.
    """
    point_count: int
    path_length: float
    bounding_box: BBox
    aspect_ratio: float
    centroid: Point
    start_point: Point
    end_point: Point
    start_end_distance: float
    closure_ratio: float
    is_closed: bool
    curvatures: Tuple[float, ...]
    curvature_mean: float
    curvature_variance: float
    angle_changes: Tuple[float, ...]
    total_angle_change: float
    dominant_angle: float
    corner_indices: Tuple[int, ...]
    corner_angles: Tuple[float, ...]
    circularity: float
    radius_variance: float
    mean_radius: float
    start_angle: float
    end_angle: float

    @property
    def corner_count(self) -> int:
        return len(self.corner_indices)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict with camelCase keys."""
        return {
            'pointCount': self.point_count,
            'pathLength': self.path_length,
            'boundingBox': self.bounding_box.to_dict(),
            'aspectRatio': self.aspect_ratio,
            'centroid': self.centroid.to_dict(),
            'startPoint': self.start_point.to_dict(),
            'endPoint': self.end_point.to_dict(),
            'startEndDistance': self.start_end_distance,
            'closureRatio': self.closure_ratio,
            'isClosed': self.is_closed,
            'curvatures': list(self.curvatures),
            'curvatureMean': self.curvature_mean,
            'curvatureVariance': self.curvature_variance,
            'angleChanges': list(self.angle_changes),
            'totalAngleChange': self.total_angle_change,
            'dominantAngle': self.dominant_angle,
            'cornerCount': self.corner_count,
            'cornerIndices': list(self.corner_indices),
            'cornerAngles': list(self.corner_angles),
            'circularity': self.circularity,
            'radiusVariance': self.radius_variance,
            'meanRadius': self.mean_radius,
            'startAngle': self.start_angle,
            'endAngle': self.end_angle,
        }


def _empty_features(points: Sequence[Point]) -> StrokeFeatures:
    anchor = Point(points[0].x, points[0].y) if points else Point(0.0, 0.0)
    return StrokeFeatures(
        point_count=len(points),
        path_length=0.0,
        bounding_box=BBox(anchor.x, anchor.y, 0.0, 0.0),
        aspect_ratio=1.0,
        centroid=anchor,
        start_point=anchor,
        end_point=anchor,
        start_end_distance=0.0,
        closure_ratio=0.0,
        is_closed=False,
        curvatures=(),
        curvature_mean=0.0,
        curvature_variance=0.0,
        angle_changes=(),
        total_angle_change=0.0,
        dominant_angle=0.0,
        corner_indices=(),
        corner_angles=(),
        circularity=0.0,
        radius_variance=0.0,
        mean_radius=0.0,
        start_angle=0.0,
        end_angle=0.0,
    )


def _dominant_angle(angles: Sequence[float]) -> float:
    if not angles:
        return 0.0
    degrees = np.degrees(np.abs(np.asarray(angles, dtype=float)))
    bins = np.floor(degrees / ANGLE_BIN_WIDTH_DEG).astype(int) % ANGLE_HISTOGRAM_BINS
    counts = np.bincount(bins, minlength=ANGLE_HISTOGRAM_BINS)
    # argmax returns the first maximum, so lower bins win ties
    return int(np.argmax(counts)) * ANGLE_BIN_WIDTH_DEG + ANGLE_BIN_WIDTH_DEG / 2


def _circularity(points: Sequence[Point], center: Point) -> Tuple[float, float, float]:
    """Return (circularity, radius_variance, mean_radius)."""
    if len(points) < 3:
        return 0.0, 0.0, 0.0

    radii = [distance(p, center) for p in points]
    mean_radius = float(np.mean(radii))
    radius_variance = variance(radii)

    if mean_radius > 0:
        normalized = radius_variance / (mean_radius * mean_radius)
    else:
        normalized = 1.0
    return max(0.0, 1.0 - normalized), radius_variance, mean_radius


def _tangent_angle(p1: Point, p2: Point) -> float:
    return to_degrees(vector_angle(vector_from_points(p1, p2)))


def _corner_angle(points: Sequence[Point], idx: int) -> float:
    if 0 < idx < len(points) - 1:
        v1 = vector_from_points(points[idx - 1], points[idx])
        v2 = vector_from_points(points[idx], points[idx + 1])
        return to_degrees(vector_angle(v2) - vector_angle(v1))
    return 0.0


def extract_features(points: Sequence[Point]) -> StrokeFeatures:
    """Compute every recognition feature of a stroke.

    Total over its input: fewer than two points give a zero record anchored
    at the single point (or the origin).

    Args:
        points: Raw stroke points in drawing order.

    Returns:
        The StrokeFeatures for ``points``.
    """
    if len(points) < 2:
        return _empty_features(points)

    start = points[0]
    end = points[-1]
    length = path_length(points)
    bbox = bounding_box(points)
    center = centroid(points)
    angles = angle_changes(points)
    curvatures = calculate_curvatures(points)
    corners = find_corners(points, FEATURE_CORNER_THRESHOLD)
    start_end = distance(start, end)

    aspect_ratio = bbox.width / bbox.height if bbox.height > 0 else 1.0
    closure_ratio = start_end / length if length > 0 else 1.0

    curvature_mean = float(np.mean(curvatures)) if curvatures else 0.0
    circularity, radius_variance, mean_radius = _circularity(points, center)

    return StrokeFeatures(
        point_count=len(points),
        path_length=length,
        bounding_box=bbox,
        aspect_ratio=aspect_ratio,
        centroid=center,
        start_point=start,
        end_point=end,
        start_end_distance=start_end,
        closure_ratio=closure_ratio,
        is_closed=is_closed_path(points, CLOSURE_THRESHOLD),
        curvatures=tuple(curvatures),
        curvature_mean=curvature_mean,
        curvature_variance=variance(curvatures),
        angle_changes=tuple(angles),
        total_angle_change=sum(abs(a) for a in angles),
        dominant_angle=_dominant_angle(angles),
        corner_indices=tuple(corners),
        corner_angles=tuple(_corner_angle(points, i) for i in corners),
        circularity=circularity,
        radius_variance=radius_variance,
        mean_radius=mean_radius,
        start_angle=_tangent_angle(points[0], points[1]),
        end_angle=_tangent_angle(points[-2], points[-1]),
    )
