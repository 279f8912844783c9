"""Test authentication endpoints."""
import json

import pytest

from academy.models.user import User


@pytest.fixture
def sample_user(make_user):
    """Create sample user for testing."""
    return make_user('student', level='A2', email='test@example.com')


def test_health_check(client):
    """Test auth health endpoint."""
    response = client.get('/api/auth/health')
    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['message'] == 'Auth service is running'


def test_app_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json()['status'] == 'healthy'


def test_login_success(client, sample_user):
    """Test successful login."""
    response = client.post('/api/auth/login', json={
        'email': 'test@example.com',
        'password': 'password123'
    })

    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['error'] is False
    assert 'access_token' in data['data']
    assert 'refresh_token' in data['data']
    assert data['data']['user']['level'] == 'A2'
    assert 'password_hash' not in data['data']['user']


def test_login_invalid_credentials(client, sample_user):
    """Test login with invalid credentials."""
    response = client.post('/api/auth/login', json={
        'email': 'test@example.com',
        'password': 'wrongpassword'
    })

    assert response.status_code == 401
    assert User.query.filter_by(email='test@example.com').first().failed_login_attempts == 1


def test_login_requires_fields(client):
    response = client.post('/api/auth/login', json={'email': 'test@example.com'})
    assert response.status_code == 400


def test_login_deactivated_account(client, sample_user):
    sample_user.is_active = False
    sample_user.save()
    response = client.post('/api/auth/login', json={
        'email': 'test@example.com',
        'password': 'password123'
    })
    assert response.status_code == 401


def test_get_current_user(client, sample_user):
    """Test get current user profile."""
    login_response = client.post('/api/auth/login', json={
        'email': 'test@example.com',
        'password': 'password123'
    })
    token = json.loads(login_response.data)['data']['access_token']

    response = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['error'] is False
    assert data['data']['email'] == 'test@example.com'


def test_refresh_token(client, sample_user):
    login_response = client.post('/api/auth/login', json={
        'email': 'test@example.com',
        'password': 'password123'
    })
    refresh = login_response.get_json()['data']['refresh_token']

    response = client.post('/api/auth/refresh', headers={'Authorization': f'Bearer {refresh}'})
    assert response.status_code == 200
    assert 'access_token' in response.get_json()['data']


def test_missing_token(client):
    response = client.get('/api/auth/me')
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Authorization token required'


def test_admin_creates_users(client, admin, auth_headers):
    response = client.post('/api/auth/users', headers=auth_headers(admin), json={
        'email': 'new.student@academy.test',
        'password': 'password123',
        'name': 'New Student',
        'role': 'student',
        'level': 'b1',
    })
    assert response.status_code == 201
    assert response.get_json()['data']['level'] == 'B1'

    response = client.post('/api/auth/users', headers=auth_headers(admin), json={
        'email': 'new.teacher@academy.test',
        'password': 'password123',
        'name': 'New Teacher',
        'role': 'teacher',
        'level': 'B1',
    })
    assert response.status_code == 400


def test_create_user_validation(client, admin, auth_headers):
    headers = auth_headers(admin)
    assert client.post('/api/auth/users', headers=headers, json={
        'email': 'invalid-email', 'password': 'password123', 'name': 'Someone'
    }).status_code == 400
    assert client.post('/api/auth/users', headers=headers, json={
        'email': 'someone@academy.test', 'password': 'password123', 'name': 'Someone', 'role': 'owner'
    }).status_code == 400
    assert client.post('/api/auth/users', headers=headers, json={
        'email': 'someone@academy.test', 'password': 'password123', 'name': 'Someone', 'level': 'Z9'
    }).status_code == 400


def test_only_admin_creates_users(client, teacher, auth_headers):
    response = client.post('/api/auth/users', headers=auth_headers(teacher), json={
        'email': 'x@academy.test', 'password': 'password123', 'name': 'X'
    })
    assert response.status_code == 403


def test_admin_sets_student_level(client, admin, sample_user, teacher, auth_headers):
    headers = auth_headers(admin)
    response = client.put(f'/api/auth/users/{sample_user.id}/level', headers=headers, json={'level': 'C1'})
    assert response.status_code == 200
    assert response.get_json()['data']['level'] == 'C1'

    response = client.put(f'/api/auth/users/{sample_user.id}/level', headers=headers, json={'level': None})
    assert response.get_json()['data']['level'] is None

    response = client.put(f'/api/auth/users/{teacher.id}/level', headers=headers, json={'level': 'A1'})
    assert response.status_code == 400
