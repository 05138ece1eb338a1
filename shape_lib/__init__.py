"""Freehand stroke smoothing and shape recognition.

This package turns raw pointer strokes into either smoothed curves for
display or classified vector shapes (line, circle, rectangle, triangle,
arrow, checkmark, x-mark) with a confidence score.

Architecture Overview:
    The numeric core is pure and synchronous: domain values in, domain
    values out, no shared state. The service layer translates JSON-like
    payloads to and from the core; the Flask app (shape_flask.py,
    shape_routes.py) and the command line (shape_cli.py) sit on top of it.

The package is organized into the following modules:
    domain: Value objects including Point, Vector, BBox, Stroke, Shape and
        the per-type shape parameters.
    utils: Pure geometry helpers (distances, angles, curvature, corners,
        Douglas-Peucker simplification).
    config: RecognitionConfig, SmoothingConfig and detector thresholds.
    logging_config: configure_logging shared by the web app and the CLI.
    drawing: Catmull-Rom and moving-average stroke smoothing.
    recognition: Feature extraction, the shape detectors and the recognizer.
    api: Service layer providing dictionary-based interfaces.

Example usage:
    Recognize a stroke::

        from shape_lib import Point, recognize_shape

        points = [Point(x, 50) for x in range(0, 101, 5)]
        result = recognize_shape(points)
        print(result.shape_type, result.confidence)   # ShapeType.LINE ...

    Smooth a stroke::

        from shape_lib import smooth_stroke

        smoothed = smooth_stroke(points)

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .api import InvalidPointsError, ShapeService
from .config import RecognitionConfig, SmoothingConfig
from .domain import BBox, Point, RecognitionResult, Shape, ShapeType, Stroke, Vector
from .drawing import moving_average_smooth, smooth_stroke
from .recognition import ShapeRecognizer, StrokeFeatures, extract_features, recognize_shape

__all__ = [
    # Domain objects
    'Point', 'Vector', 'BBox', 'Stroke', 'Shape', 'ShapeType', 'RecognitionResult',
    # Configuration
    'RecognitionConfig', 'SmoothingConfig',
    # Smoothing
    'smooth_stroke', 'moving_average_smooth',
    # Recognition
    'StrokeFeatures', 'extract_features', 'ShapeRecognizer', 'recognize_shape',
    # Services
    'ShapeService', 'InvalidPointsError',
]

__version__ = '1.0.0'
