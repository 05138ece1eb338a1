"""Integration tests for the shape API routes.

Exercises shape_routes.py end to end through the Flask test client.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

pytestmark = pytest.mark.integration


def as_dicts(points):
    return [{'x': p.x, 'y': p.y} for p in points]


class TestInfoRoutes:
    def test_health(self, flask_client):
        response = flask_client.get('/api/health')
        assert response.status_code == 200
        data = response.get_json()
        assert data['ok'] is True
        assert data['version']

    def test_shapes(self, flask_client):
        data = flask_client.get('/api/shapes').get_json()
        assert 'xmark' in data['shapes']
        assert data['detectors'] == ['line', 'circle', 'rectangle', 'triangle', 'arrow', 'symbol']
        assert 'square' not in data['recognitionConfig']['enabledShapes']
        assert data['smoothingConfig']['resolution'] == 8


class TestRecognize:
    def test_recognizes_circle(self, flask_client, circle_points):
        response = flask_client.post('/api/recognize', json={
            'points': as_dicts(circle_points),
            'strokeId': 'stroke-42',
            'color': '#336699',
            'width': 5,
        })
        assert response.status_code == 200
        data = response.get_json()
        assert data['recognized'] is True
        assert data['shapeType'] == 'circle'
        assert data['shape']['type'] == 'circle'
        assert data['shape']['originalStrokeId'] == 'stroke-42'
        assert data['shape']['color'] == '#336699'
        assert data['shape']['width'] == 5.0

    def test_accepts_pairs(self, flask_client, line_points):
        response = flask_client.post('/api/recognize', json={
            'points': [[p.x, p.y] for p in line_points],
        })
        assert response.get_json()['shapeType'] == 'line'

    def test_request_config(self, flask_client, square_points):
        response = flask_client.post('/api/recognize', json={
            'points': as_dicts(square_points),
            'config': {'enabledShapes': ['circle']},
        })
        data = response.get_json()
        assert data['shapeType'] == 'circle'
        assert [c['shapeType'] for c in data['allCandidates']] == ['circle']

    def test_high_threshold_not_recognized(self, flask_client, arrow_points):
        response = flask_client.post('/api/recognize', json={
            'points': as_dicts(arrow_points),
            'config': {'minConfidence': 0.95},
        })
        data = response.get_json()
        assert response.status_code == 200
        assert data['recognized'] is False
        assert data['shape'] is None
        assert data['allCandidates'][0]['shapeType'] == 'arrow'

    def test_short_stroke(self, flask_client):
        response = flask_client.post('/api/recognize', json={'points': [[0, 0], [5, 5]]})
        data = response.get_json()
        assert data == {
            'recognized': False, 'shape': None, 'confidence': 0.0,
            'shapeType': None, 'allCandidates': [],
        }

    @pytest.mark.parametrize('body', [
        {'points': [{'x': 1}]},
        {'points': [[0, 0]], 'config': {'enabledShapes': ['hexagon']}},
        {'points': [[0, 0]], 'config': {'minConfidence': 2}},
        {'points': [[0, 0]], 'config': 'strict'},
        {'pts': []},
        {'points': {'x': 0, 'y': 0}},
    ])
    def test_bad_requests(self, flask_client, body):
        response = flask_client.post('/api/recognize', json=body)
        assert response.status_code == 400
        assert 'error' in response.get_json()

    def test_non_json_body(self, flask_client):
        response = flask_client.post('/api/recognize', data='not json',
                                     content_type='text/plain')
        assert response.status_code == 400


class TestSmooth:
    def test_catmull_rom_default(self, flask_client):
        response = flask_client.post('/api/smooth', json={
            'points': [[0, 0], [10, 10], [20, 5]],
            'config': {'resolution': 4},
        })
        data = response.get_json()
        assert response.status_code == 200
        assert data['method'] == 'catmull_rom'
        assert len(data['points']) == 9
        assert data['points'][-1] == {'x': 20.0, 'y': 5.0}

    def test_moving_average(self, flask_client):
        response = flask_client.post('/api/smooth', json={
            'points': [[0, 0], [10, 10], [5, 5], [15, 15], [10, 10]],
            'method': 'moving_average',
            'windowSize': 3,
        })
        data = response.get_json()
        assert data['method'] == 'moving_average'
        assert len(data['points']) == 5
        assert data['points'][2]['x'] == pytest.approx(10.0)

    @pytest.mark.parametrize('body', [
        {'points': [[0, 0], [1, 1]], 'method': 'bezier'},
        {'points': [[0, 0], [1, 1]], 'method': 'moving_average', 'windowSize': 0},
        {'points': [[0, 0], [1, 1]], 'config': {'resolution': 0}},
        {'points': [[0, 0], [1, 1]], 'config': []},
    ])
    def test_bad_requests(self, flask_client, body):
        response = flask_client.post('/api/smooth', json=body)
        assert response.status_code == 400


class TestFeaturesAndSimplify:
    def test_features(self, flask_client):
        response = flask_client.post('/api/features', json={'points': [[0, 0], [3, 4], [6, 0]]})
        data = response.get_json()
        assert data['pathLength'] == 10.0
        assert data['cornerCount'] == 1
        assert data['isClosed'] is False

    def test_features_bad_point(self, flask_client):
        response = flask_client.post('/api/features', json={'points': [[0, 'a']]})
        assert response.status_code == 400

    def test_features_huge_coordinates(self, flask_client):
        response = flask_client.post('/api/features', json={
            'points': [[0, 0], [1e308, 1e308], [-1e308, 0]],
        })
        assert response.status_code == 400
        assert 'Point 1' in response.get_json()['error']

    def test_simplify(self, flask_client):
        response = flask_client.post('/api/simplify', json={
            'points': [[0, 0], [5, 0.1], [10, 0]],
        })
        assert response.get_json()['points'] == [{'x': 0.0, 'y': 0.0}, {'x': 10.0, 'y': 0.0}]

    def test_simplify_negative_epsilon(self, flask_client):
        response = flask_client.post('/api/simplify', json={
            'points': [[0, 0], [1, 1]], 'epsilon': -2,
        })
        assert response.status_code == 400
