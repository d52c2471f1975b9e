"""Tests for bearer token authentication."""
import pytest
from itsdangerous import URLSafeTimedSerializer

from lms.models import UserRole


def test_health_is_public(client):
    resp = client.get('/api/health')
    assert resp.status_code == 200
    assert resp.get_json() == {'status': 'ok'}


def test_register_creates_student_and_returns_token(client):
    resp = client.post('/api/auth/register', json={
        'name': 'Ada', 'email': 'Ada@Example.com', 'password': 'secret123'
    })
    assert resp.status_code == 201
    data = resp.get_json()
    assert data['user']['email'] == 'ada@example.com'
    assert data['user']['role'] == UserRole.STUDENT
    assert 'password_hash' not in data['user']

    me = client.get('/api/auth/me', headers={'Authorization': f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.get_json()['_id'] == data['user']['_id']


def test_register_rejects_duplicate_email(client, student_id):
    resp = client.post('/api/auth/register', json={
        'name': 'Again', 'email': 'student@example.com', 'password': 'secret123'
    })
    assert resp.status_code == 400
    assert resp.get_json()['msg'] == 'User already exists'


def test_register_rejects_short_password(client):
    resp = client.post('/api/auth/register', json={
        'name': 'Bob', 'email': 'bob@example.com', 'password': '123'
    })
    assert resp.status_code == 400


def test_login_returns_token(client, student_id):
    resp = client.post('/api/auth/login', json={'email': 'student@example.com', 'password': 'secret123'})
    assert resp.status_code == 200
    token = resp.get_json()['token']

    me = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})
    assert me.get_json()['email'] == 'student@example.com'


def test_login_rejects_bad_password(client, student_id):
    resp = client.post('/api/auth/login', json={'email': 'student@example.com', 'password': 'wrong-pass'})
    assert resp.status_code == 401
    assert 'msg' in resp.get_json()


def test_login_rejects_inactive_user(client, make_user):
    make_user(UserRole.STUDENT, email='gone@example.com', is_active=False)
    resp = client.post('/api/auth/login', json={'email': 'gone@example.com', 'password': 'secret123'})
    assert resp.status_code == 401


def test_me_requires_token(client):
    resp = client.get('/api/auth/me')
    assert resp.status_code == 401
    assert resp.get_json()['msg'] == 'Authentication required'


def test_me_rejects_tampered_token(client, student_id, auth_headers):
    headers = auth_headers(student_id)
    headers['Authorization'] += 'x'
    assert client.get('/api/auth/me', headers=headers).status_code == 401


def test_token_signed_with_other_key_is_rejected(client, student_id):
    forged = URLSafeTimedSerializer('another-key', salt='lms-api-token').dumps({'uid': student_id})
    resp = client.get('/api/auth/me', headers={'Authorization': f'Bearer {forged}'})
    assert resp.status_code == 401


def test_token_of_deactivated_user_is_rejected(app, client, admin_id, student_id, auth_headers):
    headers = auth_headers(student_id)
    client.patch(f'/api/admin/users/{student_id}', json={'is_active': False}, headers=auth_headers(admin_id))
    assert client.get('/api/auth/me', headers=headers).status_code == 401


def test_cors_headers_for_dashboard_origin(client):
    resp = client.get('/api/health', headers={'Origin': 'http://localhost:5173'})
    assert resp.headers['Access-Control-Allow-Origin'] == 'http://localhost:5173'

    other = client.get('/api/health', headers={'Origin': 'http://evil.example'})
    assert 'Access-Control-Allow-Origin' not in other.headers


@pytest.mark.parametrize('body', [
    {'email': 12345, 'password': 'secret123'},
    {'email': 'student@example.com', 'password': 123456},
    {'email': ['student@example.com'], 'password': {'x': 1}},
])
def test_login_rejects_non_string_credentials(client, student_id, body):
    resp = client.post('/api/auth/login', json=body)
    assert resp.status_code == 401


def test_register_rejects_email_with_line_break(client):
    resp = client.post('/api/auth/register', json={
        'name': 'Eve', 'email': 'eve@example.com\nBcc: all@example.com', 'password': 'secret123'
    })
    assert resp.status_code == 400
    assert resp.get_json()['msg'] == 'Invalid email address'
