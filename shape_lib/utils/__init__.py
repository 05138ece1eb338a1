"""Utility functions for stroke recognition.

This module re-exports the pure geometry helpers used throughout the
package. See :mod:`shape_lib.utils.geometry` for details.

Example usage:
    Geometric calculations::

        from shape_lib.utils import angle_between, path_length
        from shape_lib.domain import Point, Vector

        angle_between(Vector(1, 0), Vector(0, 1))   # pi/2 radians
        path_length([Point(0, 0), Point(3, 4)])     # 5.0
"""

from .geometry import (
    angle_between,
    angle_changes,
    bounding_box,
    calculate_curvatures,
    centroid,
    cross,
    distance,
    distance_squared,
    dot,
    find_corners,
    is_closed_path,
    lerp,
    magnitude,
    midpoint,
    normalize,
    normalize_angle,
    path_length,
    perpendicular_distance,
    simplify_path,
    to_degrees,
    to_radians,
    variance,
    vector_angle,
    vector_from_points,
)

__all__ = [
    'distance', 'distance_squared', 'midpoint', 'lerp',
    'vector_from_points', 'magnitude', 'normalize', 'dot', 'cross',
    'angle_between', 'vector_angle',
    'to_degrees', 'to_radians', 'normalize_angle',
    'path_length', 'bounding_box', 'centroid', 'angle_changes',
    'calculate_curvatures', 'is_closed_path', 'find_corners', 'variance',
    'perpendicular_distance', 'simplify_path',
]
