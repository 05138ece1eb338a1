#!/usr/bin/env python3
"""Flask routes for the shape API.

This module contains the JSON route handlers. All numeric work happens in
shape_lib; handlers only validate payloads, call the service layer and
translate ValueError into 400 responses.

Usage:
    python shape_routes.py [--host HOST] [--port PORT]
"""

from __future__ import annotations

import argparse
import logging

from flask import jsonify, request

from shape_flask import (
    API_VERSION,
    LOG_FILE,
    LOG_LEVEL,
    MIN_CONFIDENCE,
    app,
    get_service,
    validate_points_payload,
)
from shape_lib.config import RecognitionConfig, SmoothingConfig
from shape_lib.domain import ShapeType
from shape_lib.logging_config import configure_logging
from shape_lib.recognition.detectors import DETECTORS

_logger = logging.getLogger(__name__)

SMOOTHING_METHODS = ('catmull_rom', 'moving_average')


def _recognition_config(raw) -> RecognitionConfig:
    """Request config layered over the process defaults."""
    base = RecognitionConfig(min_confidence=MIN_CONFIDENCE)
    if raw is None:
        return base
    if not isinstance(raw, dict):
        raise ValueError("'config' must be an object")
    return RecognitionConfig.from_dict({**base.to_dict(), **raw})


def _bad_request(e: Exception):
    _logger.warning("Bad request to %s: %s", request.path, e)
    return jsonify(error=str(e)), 400


@app.route('/api/health')
def api_health():
    return jsonify(ok=True, version=API_VERSION)


@app.route('/api/shapes')
def api_shapes():
    return jsonify(
        shapes=[t.value for t in ShapeType],
        detectors=[entry.name for entry in DETECTORS],
        recognitionConfig=RecognitionConfig(min_confidence=MIN_CONFIDENCE).to_dict(),
        smoothingConfig=SmoothingConfig().to_dict(),
    )


@app.route('/api/recognize', methods=['POST'])
def api_recognize():
    data = request.get_json(silent=True)
    ok, err = validate_points_payload(data)
    if not ok:
        return err
    try:
        cfg = _recognition_config(data.get('config'))
        result = get_service().recognize(
            data['points'],
            stroke_id=data.get('strokeId'),
            color=data.get('color'),
            width=data.get('width'),
            config=cfg,
        )
    except (ValueError, TypeError) as e:
        return _bad_request(e)
    return jsonify(result)


@app.route('/api/smooth', methods=['POST'])
def api_smooth():
    data = request.get_json(silent=True)
    ok, err = validate_points_payload(data)
    if not ok:
        return err
    method = data.get('method', 'catmull_rom')
    if method not in SMOOTHING_METHODS:
        return jsonify(error=f"Unknown method '{method}'"), 400
    try:
        service = get_service()
        if method == 'moving_average':
            points = service.moving_average(data['points'], data.get('windowSize', 3))
        else:
            raw_cfg = data.get('config')
            if raw_cfg is not None and not isinstance(raw_cfg, dict):
                raise ValueError("'config' must be an object")
            points = service.smooth(data['points'], config=SmoothingConfig.from_dict(raw_cfg))
    except (ValueError, TypeError) as e:
        return _bad_request(e)
    return jsonify(points=points, method=method)


@app.route('/api/features', methods=['POST'])
def api_features():
    data = request.get_json(silent=True)
    ok, err = validate_points_payload(data)
    if not ok:
        return err
    try:
        features = get_service().analyze(data['points'])
    except ValueError as e:
        return _bad_request(e)
    return jsonify(features)


@app.route('/api/simplify', methods=['POST'])
def api_simplify():
    data = request.get_json(silent=True)
    ok, err = validate_points_payload(data)
    if not ok:
        return err
    try:
        points = get_service().simplify(data['points'], data.get('epsilon', 1.5))
    except ValueError as e:
        return _bad_request(e)
    return jsonify(points=points)


@app.errorhandler(500)
def handle_internal_error(e):
    original = getattr(e, 'original_exception', None) or e
    _logger.error("Unhandled error on %s: %s", request.path, original,
                  exc_info=(type(original), original, original.__traceback__))
    return jsonify(error="Internal server error"), 500


def main() -> None:
    """Run the development server."""
    parser = argparse.ArgumentParser(description='Shape recognition API server')
    parser.add_argument('--host', type=str, default='127.0.0.1',
                        help='Interface to bind (default: 127.0.0.1)')
    parser.add_argument('--port', type=int, default=5000,
                        help='Port to listen on (default: 5000)')
    args = parser.parse_args()

    configure_logging(LOG_LEVEL, LOG_FILE)
    _logger.info("Starting shape API on %s:%d", args.host, args.port)
    app.run(host=args.host, port=args.port)


if __name__ == '__main__':
    main()
