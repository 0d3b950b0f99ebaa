"""Tests for registration, login and bearer-token handling."""
import json
from datetime import datetime, timedelta, timezone

import jwt

from padel_api.models import User


def _register(client, email='player@test.com', password='password123', name='Ana'):
    return client.post('/auth/register', json={
        'email': email, 'password': password, 'name': name,
    })


def test_register_returns_token_matching_user(client):
    res = _register(client, email='ana@test.com', name='Ana Ruiz')
    assert res.status_code == 200
    data = json.loads(res.data)
    assert data['user']['email'] == 'ana@test.com'
    assert data['user']['name'] == 'Ana Ruiz'
    assert 'password_hash' not in data['user']

    claims = jwt.decode(
        data['token'], client.application.config['SECRET_KEY'], algorithms=['HS256'],
    )
    assert {k: claims[k] for k in ('id', 'email', 'name')} == data['user']


def test_register_token_expires_in_seven_days(client):
    res = _register(client)
    token = json.loads(res.data)['token']
    claims = jwt.decode(
        token, client.application.config['SECRET_KEY'], algorithms=['HS256'],
    )
    expires_at = datetime.fromtimestamp(claims['exp'], tz=timezone.utc)
    remaining = expires_at - datetime.now(timezone.utc)
    assert timedelta(days=6, hours=23) < remaining <= timedelta(days=7)


def test_register_missing_fields(client):
    res = client.post('/auth/register', json={'email': 'x@test.com', 'password': 'pw'})
    assert res.status_code == 400
    assert json.loads(res.data) == {'error': 'email, password and name are required'}


def test_register_without_json_body(client):
    res = client.post('/auth/register', data='not json', content_type='text/plain')
    assert res.status_code == 400


def test_register_duplicate_email_conflicts_and_keeps_first_user(client):
    first = _register(client, email='dup@test.com', name='First')
    assert first.status_code == 200

    second = _register(client, email='DUP@test.com', password='other-pass', name='Second')
    assert second.status_code == 409
    assert 'error' in json.loads(second.data)

    with client.application.app_context():
        users = User.query.filter_by(email='dup@test.com').all()
        assert len(users) == 1
        assert users[0].name == 'First'

    login = client.post('/auth/login', json={'email': 'dup@test.com', 'password': 'password123'})
    assert login.status_code == 200


def test_login(client):
    _register(client, email='login@test.com', name='Login User')
    res = client.post('/auth/login', json={
        'email': 'login@test.com', 'password': 'password123',
    })
    assert res.status_code == 200
    data = json.loads(res.data)
    assert 'token' in data
    assert data['user'] == {'id': data['user']['id'], 'email': 'login@test.com', 'name': 'Login User'}
    assert 'password_hash' not in res.get_data(as_text=True)


def test_login_missing_fields(client):
    res = client.post('/auth/login', json={'email': 'login@test.com'})
    assert res.status_code == 400


def test_login_failures_share_the_same_error(client):
    _register(client, email='bad@test.com')
    wrong_password = client.post('/auth/login', json={
        'email': 'bad@test.com', 'password': 'wrong',
    })
    unknown_email = client.post('/auth/login', json={
        'email': 'nobody@test.com', 'password': 'password123',
    })
    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert json.loads(wrong_password.data) == json.loads(unknown_email.data)


def test_protected_route_requires_token(client):
    res = client.get('/players')
    assert res.status_code == 401
    assert json.loads(res.data) == {'error': 'Authentication required'}


def test_protected_route_rejects_garbage_token(client):
    res = client.get('/players', headers={'Authorization': 'Bearer not-a-jwt'})
    assert res.status_code == 401
    assert json.loads(res.data) == {'error': 'Invalid token'}


def test_protected_route_rejects_expired_token(client):
    expired = jwt.encode(
        {
            'id': 1, 'email': 'old@test.com', 'name': 'Old',
            'exp': datetime.now(timezone.utc) - timedelta(minutes=1),
        },
        client.application.config['SECRET_KEY'],
        algorithm='HS256',
    )
    res = client.get('/players', headers={'Authorization': f'Bearer {expired}'})
    assert res.status_code == 401
    assert json.loads(res.data) == {'error': 'Token expired'}


def test_protected_route_rejects_token_signed_with_other_secret(client):
    forged = jwt.encode(
        {'id': 1, 'email': 'x@test.com', 'name': 'X'}, 'another-secret', algorithm='HS256',
    )
    res = client.get('/players', headers={'Authorization': f'Bearer {forged}'})
    assert res.status_code == 401
