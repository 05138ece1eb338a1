"""Shared pytest fixtures for the shape_lib test suite.

This module provides deterministic synthetic strokes used across unit and
integration tests. Polygon strokes are densified with roughly even point
spacing the way a pointer device samples a steady hand; noisy strokes use
a seeded random generator so every run sees the same points.

Fixtures:
    circle_points: Closed ring of radius 50 with slight jitter
    line_points: Near-horizontal line, 100 units long
    square_points: Square outline starting mid-edge
    rectangle_points: 2:1 rectangle outline starting mid-edge
    triangle_points: Triangle outline starting mid-edge
    arrow_points: Horizontal shaft with a barb at the right end
    checkmark_points: Short stroke down-right then long stroke up-right
    xmark_points: Z-like single-stroke cross
    zigzag_points: Sawtooth with a sharp turn at every point
    flask_client: Flask test client for the shape API

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import math
import random
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from shape_lib.domain import Point  # noqa: E402


# -----------------------------------------------------------------------------
# Pytest Markers
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# -----------------------------------------------------------------------------
# Stroke builders
# -----------------------------------------------------------------------------

def densify(vertices, spacing):
    """Sample a polyline through ``vertices`` about every ``spacing`` units.

    Each edge gets ``max(1, round(length / spacing))`` steps; every vertex
    appears exactly once and in order.
    """
    points = []
    for (x0, y0), (x1, y1) in zip(vertices, vertices[1:]):
        steps = max(1, round(math.hypot(x1 - x0, y1 - y0) / spacing))
        for k in range(steps):
            t = k / steps
            points.append(Point(x0 + (x1 - x0) * t, y0 + (y1 - y0) * t))
    x, y = vertices[-1]
    points.append(Point(float(x), float(y)))
    return points


# -----------------------------------------------------------------------------
# Shape Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def circle_points():
    """Return 41 points on a circle of radius 50 centered at (100, 100).

    The first and last samples share the same angle; coordinates carry up
    to half a unit of seeded jitter.

    Returns:
        list[Point]: Closed circular stroke.
    """
    rng = random.Random(7)
    points = []
    for i in range(41):
        angle = i * 2 * math.pi / 40
        points.append(Point(
            100 + 50 * math.cos(angle) + rng.uniform(-0.5, 0.5),
            100 + 50 * math.sin(angle) + rng.uniform(-0.5, 0.5),
        ))
    return points


@pytest.fixture
def line_points():
    """Return 51 points along y=50 from x=0 to x=100 with slight jitter.

    Returns:
        list[Point]: Open, nearly straight stroke.
    """
    rng = random.Random(11)
    return [Point(float(x), 50 + rng.uniform(-0.25, 0.25)) for x in range(0, 101, 2)]


@pytest.fixture
def square_points():
    """Return a 100x100 square outline starting and ending mid-edge.

    Starting mid-edge puts all four corners inside the stroke.

    Returns:
        list[Point]: 41 points, closed.
    """
    return densify([(50, 0), (100, 0), (100, 100), (0, 100), (0, 0), (50, 0)], 10)


@pytest.fixture
def rectangle_points():
    """Return a 200x100 rectangle outline starting and ending mid-edge.

    Returns:
        list[Point]: 61 points, closed, corners at 10, 20, 40 and 50.
    """
    return densify([(100, 0), (200, 0), (200, 100), (0, 100), (0, 0), (100, 0)], 10)


@pytest.fixture
def triangle_points():
    """Return a triangle outline with apex (50, 0) and base y=100.

    Returns:
        list[Point]: Closed stroke starting halfway up the left side.
    """
    return densify([(25, 50), (50, 0), (100, 100), (0, 100), (25, 50)], 10)


@pytest.fixture
def arrow_points():
    """Return a shaft from (0, 50) to (100, 50) with a barb back to (90, 40).

    Returns:
        list[Point]: 24 points, open.
    """
    return densify([(0, 50), (100, 50), (90, 40)], 5)


@pytest.fixture
def checkmark_points():
    """Return a check: down-right to (20, 50) then up-right to (60, 0).

    Returns:
        list[Point]: 14 points, open, lowest point at index 4.
    """
    return densify([(0, 30), (20, 50), (60, 0)], 7)


@pytest.fixture
def xmark_points():
    """Return an x-mark drawn in one stroke: diagonal, up, diagonal.

    Returns:
        list[Point]: 23 points, open, corners at indices 8 and 14.
    """
    return densify([(0, 0), (60, 60), (60, 0), (0, 60)], 10)


@pytest.fixture
def zigzag_points():
    """Return a sawtooth alternating between y=50 and y=60 every 2 units.

    Returns:
        list[Point]: 21 points, every interior point a sharp corner.
    """
    return [Point(float(i * 2), 50.0 if i % 2 == 0 else 60.0) for i in range(21)]


# -----------------------------------------------------------------------------
# Flask Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def flask_client():
    """Create a Flask test client for the shape API.

    Returns:
        flask.testing.FlaskClient: Test client for making requests.

    Example:
        def test_health(flask_client):
            response = flask_client.get('/api/health')
            assert response.status_code == 200
    """
    from shape_flask import app
    import shape_routes  # noqa: F401 - registers routes

    app.config['TESTING'] = True

    with app.test_client() as client:
        yield client
