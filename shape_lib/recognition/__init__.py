"""Stroke recognition.

This package turns raw stroke points into classified shapes.

Modules:
    features: Geometric feature extraction (StrokeFeatures).
    detectors: One detector and optimizer per shape family.
    recognizer: Runs the detectors and picks the best candidate.
"""

from .detectors import DETECTORS, DetectionResult
from .features import StrokeFeatures, extract_features
from .recognizer import ShapeRecognizer, recognize_shape, sequential_ids

__all__ = [
    'StrokeFeatures', 'extract_features',
    'DETECTORS', 'DetectionResult',
    'ShapeRecognizer', 'recognize_shape', 'sequential_ids',
]
