"""Stroke smoothing for display.

This module turns a raw pointer path into a denser, smoother path for
rendering. It is independent of recognition: the recognizer always works on
the raw points.

The module provides the following functions:
    catmull_rom: Sample a Catmull-Rom segment at one parameter value.
    smooth_stroke: Catmull-Rom smoothing with close-point filtering.
    moving_average_smooth: Cheap per-point averaging for live preview.

Both smoothing functions are pure. They may be called repeatedly on a
growing point list while the user draws and once more on the final stroke.

Example usage:
    Display smoothing::

        from shape_lib.config import SmoothingConfig
        from shape_lib.drawing.smoothing import smooth_stroke

        smoothed = smooth_stroke(points, SmoothingConfig(resolution=4))

    Live preview::

        from shape_lib.drawing.smoothing import moving_average_smooth

        preview = moving_average_smooth(points, window_size=5)
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from scipy.ndimage import generic_filter

from ..config import DEFAULT_MOVING_AVERAGE_WINDOW, SmoothingConfig
from ..domain.geometry import Point
from ..utils.geometry import distance, lerp, simplify_path

logger = logging.getLogger(__name__)


def catmull_rom(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    """Point on the Catmull-Rom segment between ``p1`` and ``p2``.

    Args:
        p0: Control point before the segment.
        p1: Segment start (returned exactly at t=0).
        p2: Segment end (reached at t=1).
        p3: Control point after the segment.
        t: Curve parameter in [0, 1].

    Returns:
        The interpolated point. Pressure is linearly interpolated between
        ``p1`` and ``p2`` when both carry it, otherwise omitted.
    """
    t2 = t * t
    t3 = t2 * t

    x = 0.5 * (
        2 * p1.x
        + (-p0.x + p2.x) * t
        + (2 * p0.x - 5 * p1.x + 4 * p2.x - p3.x) * t2
        + (-p0.x + 3 * p1.x - 3 * p2.x + p3.x) * t3
    )
    y = 0.5 * (
        2 * p1.y
        + (-p0.y + p2.y) * t
        + (2 * p0.y - 5 * p1.y + 4 * p2.y - p3.y) * t2
        + (-p0.y + 3 * p1.y - 3 * p2.y + p3.y) * t3
    )
    pressure = None
    if p1.pressure is not None and p2.pressure is not None:
        pressure = p1.pressure + (p2.pressure - p1.pressure) * t
    return Point(x, y, pressure)


def _filter_close_points(points: Sequence[Point], min_distance: float) -> list[Point]:
    """Drop points closer than ``min_distance`` to the last kept point.

    The first point is always kept. If the true last point was dropped it
    is appended again so the stroke still ends where the user lifted.
    """
    if not points:
        return []

    result = [points[0]]
    last_kept = 0
    for i in range(1, len(points)):
        if distance(result[-1], points[i]) >= min_distance:
            result.append(points[i])
            last_kept = i

    if last_kept != len(points) - 1:
        result.append(points[-1])

    return result


def _interpolate_linear(start: Point, end: Point, steps: int) -> list[Point]:
    return [lerp(start, end, i / steps) for i in range(steps + 1)]


def smooth_stroke(points: Sequence[Point],
                  config: SmoothingConfig | None = None) -> list[Point]:
    """Smooth a stroke using Catmull-Rom spline interpolation.

    Args:
        points: Raw input points in drawing order.
        config: Smoothing configuration. Defaults to SmoothingConfig().

    Returns:
        The smoothed points:
            - fewer than 2 points: the input, unchanged;
            - 2 points (before or after filtering): ``resolution + 1``
              evenly spaced points on the segment;
            - otherwise ``resolution`` samples per filtered segment plus
              the final filtered point.
        The first and last output points coincide with the first and last
        input points.

    Example:
        >>> pts = [Point(0, 0), Point(10, 10), Point(20, 5)]
        >>> len(smooth_stroke(pts, SmoothingConfig(resolution=4)))
        9
    """
    cfg = config or SmoothingConfig()

    if len(points) < 2:
        return list(points)

    if len(points) == 2:
        return _interpolate_linear(points[0], points[1], cfg.resolution)

    source = points
    if cfg.simplify_first:
        source = simplify_path(points, cfg.simplify_epsilon)
        logger.debug("Simplified %d -> %d points before smoothing",
                     len(points), len(source))

    filtered = _filter_close_points(source, cfg.min_point_distance)

    if len(filtered) < 2:
        return list(points)
    if len(filtered) == 2:
        return _interpolate_linear(filtered[0], filtered[1], cfg.resolution)

    last = len(filtered) - 1
    smoothed: list[Point] = []
    for i in range(last):
        # Control points clamp to the ends of the stroke
        p0 = filtered[max(0, i - 1)]
        p1 = filtered[i]
        p2 = filtered[i + 1]
        p3 = filtered[min(last, i + 2)]
        for j in range(cfg.resolution):
            smoothed.append(catmull_rom(p0, p1, p2, p3, j / cfg.resolution))

    smoothed.append(filtered[-1])
    return smoothed


def _present_mean(window: np.ndarray) -> float:
    """Mean of the window entries that fall inside the stroke."""
    values = window[~np.isnan(window)]
    return values.sum() / len(values)


def moving_average_smooth(points: Sequence[Point],
                          window_size: int = DEFAULT_MOVING_AVERAGE_WINDOW) -> list[Point]:
    """Average each point with its neighbors.

    Each output point is the arithmetic mean of the points at most
    ``window_size // 2`` positions away; near the ends fewer neighbors
    exist and the mean is taken over those that do. Pressure and timestamp
    are copied from the original point.

    Args:
        points: Input points.
        window_size: Neighborhood size. Inputs shorter than the window are
            returned unchanged.

    Returns:
        A list with exactly one point per input point.
    """
    if len(points) < window_size or len(points) == 0:
        return list(points)

    size = 2 * (window_size // 2) + 1
    xs = np.array([p.x for p in points], dtype=float)
    ys = np.array([p.y for p in points], dtype=float)

    # NaN padding marks window slots outside the stroke
    xs_avg = generic_filter(xs, _present_mean, size=size, mode='constant', cval=np.nan)
    ys_avg = generic_filter(ys, _present_mean, size=size, mode='constant', cval=np.nan)

    return [
        Point(float(x), float(y), p.pressure, p.timestamp)
        for x, y, p in zip(xs_avg, ys_avg, points)
    ]
