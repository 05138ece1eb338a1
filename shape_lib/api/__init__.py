"""API layer for smoothing and recognition.

This module provides the service layer used by the HTTP app and the
command line. Services take JSON-decoded payloads and return plain dicts.

Example usage:
    Recognize a stroke::

        from shape_lib.api import ShapeService

        service = ShapeService()
        result = service.recognize(points, stroke_id='s1')
        print(result['shapeType'])
"""

from .services import InvalidPointsError, ShapeService, parse_points

__all__ = ['ShapeService', 'InvalidPointsError', 'parse_points']
