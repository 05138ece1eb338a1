"""Geometric value objects for stroke recognition."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class Point:
    """Immutable 2D pointer sample.

    Pressure and timestamp are optional capture metadata. They ride along
    through smoothing but are never used by the recognition maths.
    """
    x: float
    y: float
    pressure: Optional[float] = None
    timestamp: Optional[int] = None

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple for compatibility."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization.

        Optional metadata is only emitted when present.
        """
        d: dict[str, Any] = {'x': float(self.x), 'y': float(self.y)}
        if self.pressure is not None:
            d['pressure'] = float(self.pressure)
        if self.timestamp is not None:
            d['timestamp'] = int(self.timestamp)
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Point:
        """Create from a ``{'x', 'y', 'pressure'?, 'timestamp'?}`` dict."""
        pressure = d.get('pressure')
        timestamp = d.get('timestamp')
        return cls(
            float(d['x']),
            float(d['y']),
            float(pressure) if pressure is not None else None,
            int(timestamp) if timestamp is not None else None,
        )


@dataclass(frozen=True)
class Vector:
    """Immutable 2D displacement. Never carries capture metadata."""
    x: float
    y: float


ZERO_VECTOR = Vector(0.0, 0.0)


@dataclass(frozen=True)
class BBox:
    """Immutable axis-aligned bounding box stored as origin plus size."""
    x: float
    y: float
    width: float
    height: float

    @property
    def max_side(self) -> float:
        return max(self.width, self.height)

    @property
    def min_side(self) -> float:
        return min(self.width, self.height)

    def to_dict(self) -> dict[str, float]:
        return {
            'x': float(self.x),
            'y': float(self.y),
            'width': float(self.width),
            'height': float(self.height),
        }

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> BBox:
        """Create bounding box containing all points.

        An empty input yields the zero box.
        """
        pts: List[Point] = list(points)
        if not pts:
            return cls(0.0, 0.0, 0.0, 0.0)
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        min_x, min_y = min(xs), min(ys)
        return cls(min_x, min_y, max(xs) - min_x, max(ys) - min_y)
