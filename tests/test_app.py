"""Tests for app startup, service routes and error rendering."""
import json

import pytest

from padel_api.app import _parse_allowed_origins, create_app
from padel_api.config import DEFAULT_SECRET_KEY, ProductionConfig


def test_parse_allowed_origins():
    assert _parse_allowed_origins('') == '*'
    assert _parse_allowed_origins(' * ') == '*'
    assert _parse_allowed_origins('https://a.example.com, https://b.example.com') == [
        'https://a.example.com',
        'https://b.example.com',
    ]
    assert _parse_allowed_origins(['https://a.example.com', '']) == ['https://a.example.com']


def test_production_requires_real_secret_key(monkeypatch):
    monkeypatch.setattr(ProductionConfig, 'SECRET_KEY', DEFAULT_SECRET_KEY)
    with pytest.raises(RuntimeError, match='SECRET_KEY'):
        create_app('production')


def test_production_requires_explicit_cors_origins(monkeypatch):
    monkeypatch.setattr(ProductionConfig, 'SECRET_KEY', 'a-real-production-secret-value')
    monkeypatch.setattr(ProductionConfig, 'CORS_ALLOWED_ORIGINS', '*')
    with pytest.raises(RuntimeError, match='CORS_ALLOWED_ORIGINS'):
        create_app('production')


def test_index_and_health(client):
    index = client.get('/')
    assert index.status_code == 200
    assert 'Padel' in index.get_data(as_text=True)

    health = client.get('/health')
    assert health.status_code == 200
    assert json.loads(health.data) == {'ok': True}


def test_db_test_route_reports_database_time(client):
    res = client.get('/db-test')
    assert res.status_code == 200
    data = json.loads(res.data)
    assert data['success'] is True
    assert data['time']


def test_unknown_route_returns_json_404(client):
    res = client.get('/does-not-exist')
    assert res.status_code == 404
    assert json.loads(res.data) == {'error': 'Route not found'}


def test_wrong_method_returns_json_error(client):
    res = client.delete('/health')
    assert res.status_code == 405
    assert json.loads(res.data) == {'error': 'Method Not Allowed'}
    assert res.content_type == 'application/json'
    assert 'GET' in res.headers['Allow']


def test_unexpected_errors_render_as_internal_error(app, client):
    @app.route('/boom')
    def boom():
        raise RuntimeError('secret internals')

    res = client.get('/boom')
    assert res.status_code == 500
    assert json.loads(res.data) == {'error': 'Internal server error'}
    assert 'secret internals' not in res.get_data(as_text=True)
