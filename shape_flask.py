"""Flask application setup and shared helpers for the shape API.

This module serves as the central configuration hub for the shape
recognition web API. It provides:

    - The Flask application instance shared with the route module
    - Process-level settings read from the environment
    - Request validation helpers returning ready-to-send error responses

Architecture:
    - shape_flask.py: App instance, config, and utilities (this module)
    - shape_routes.py: JSON route handlers and the development server entry
    - shape_cli.py: Command-line entry point; does not import this module

Example:
    Import the app and add a route::

        from flask import jsonify
        from shape_flask import API_VERSION, app

        @app.route('/api/version')
        def version():
            return jsonify(version=API_VERSION)

Attributes:
    app (Flask): The Flask application instance.
    API_VERSION (str): Version reported by the health endpoint.
    LOG_LEVEL (str): Log level from SHAPE_LOG_LEVEL (default 'INFO').
    LOG_FILE (str | None): Log file from SHAPE_LOG_FILE (default stderr only).
    MIN_CONFIDENCE (float): Default recognition threshold from
        SHAPE_MIN_CONFIDENCE (default 0.65).
    MAX_POINTS (int): Largest point list accepted in one request.
"""

from __future__ import annotations

import logging
import os

from flask import Flask, jsonify

from shape_lib import __version__
from shape_lib.api import ShapeService
from shape_lib.config import DEFAULT_MIN_CONFIDENCE, RecognitionConfig

# Module logger
logger = logging.getLogger(__name__)


def _env_min_confidence() -> float:
    raw = os.environ.get('SHAPE_MIN_CONFIDENCE')
    if raw is None:
        return DEFAULT_MIN_CONFIDENCE
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring SHAPE_MIN_CONFIDENCE=%r: not a number", raw)
        return DEFAULT_MIN_CONFIDENCE
    if not 0.0 <= value <= 1.0:
        logger.warning("Ignoring SHAPE_MIN_CONFIDENCE=%r: outside [0, 1]", raw)
        return DEFAULT_MIN_CONFIDENCE
    return value


# Flask application
app = Flask(__name__)

# --- Global constants ---
API_VERSION = __version__
LOG_LEVEL = os.environ.get('SHAPE_LOG_LEVEL', 'INFO')
LOG_FILE = os.environ.get('SHAPE_LOG_FILE') or None
MIN_CONFIDENCE = _env_min_confidence()
MAX_POINTS = 10000


def get_service() -> ShapeService:
    """Build a ShapeService using the process-level recognition threshold.

    Returns a new service on every call.
    """
    return ShapeService(recognition_config=RecognitionConfig(min_confidence=MIN_CONFIDENCE))


def validate_points_payload(data) -> tuple[bool, tuple | None]:
    """Validate the common ``{"points": [...]}`` request body.

    Checks the shape of the payload only; individual points are validated
    by the service layer.

    Args:
        data: The decoded JSON body (``request.get_json(silent=True)``).

    Returns:
        tuple: A 2-tuple of (is_valid, error_response) where:
            - is_valid (bool): True if the payload is usable.
            - error_response: None if valid, otherwise a tuple of
              (flask.Response, status_code) ready to be returned from a route.

    Example:
        Using in a route handler::

            data = request.get_json(silent=True)
            ok, err = validate_points_payload(data)
            if not ok:
                return err
    """
    if not isinstance(data, dict):
        return False, (jsonify(error="Request body must be a JSON object"), 400)
    if 'points' not in data:
        return False, (jsonify(error="Missing 'points'"), 400)
    if not isinstance(data['points'], list):
        return False, (jsonify(error="'points' must be a list"), 400)
    if len(data['points']) > MAX_POINTS:
        return False, (jsonify(error=f"Too many points (max {MAX_POINTS})"), 400)
    return True, None
