"""
Authentication and access tests.

Run with:

```
pytest -q core/tests/test_security.py
```
"""
from unittest import mock

import pytest
from django.contrib.auth.hashers import check_password
from pymongo.errors import ServerSelectionTimeoutError

from core.repositories import PatientRepository, UserRepository


def register(client, **overrides):
    data = {'name': 'Ada Lovelace', 'email': 'ada@example.com', 'password': 's3cret!'}
    data.update(overrides)
    return client.post('/api/auth/register', data, format='json')


def login(client, email='ada@example.com', password='s3cret!'):
    return client.post('/api/auth/login', {'email': email, 'password': password}, format='json')


# ---------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------
def test_register_creates_linked_patient_account(client, mongo):
    r = register(client, role='admin')
    assert r.status_code == 201, r.data
    assert r.data['success'] is True
    assert r.data['message'] == 'Registration successful'
    assert r.data['user']['role'] == 'patient'

    user = UserRepository(mongo).find_by_email('ada@example.com')
    patient = PatientRepository(mongo).find_by_email('ada@example.com')
    assert user['role'] == 'patient'
    assert user['patient_profile'] == patient['_id']
    assert patient['user'] == user['_id']
    assert patient['first_name'] == 'Ada' and patient['last_name'] == 'Lovelace'
    assert r.data['user']['patientId'] == str(patient['_id'])

    # stored hashed, never as the submitted value
    assert user['password'] != 's3cret!'
    assert check_password('s3cret!', user['password'])


def test_register_single_word_name_gets_placeholders(client, mongo):
    r = register(client, name='Madonna', email='madonna@example.com')
    assert r.status_code == 201
    patient = PatientRepository(mongo).find_by_email('madonna@example.com')
    assert patient['first_name'] == 'Madonna'
    assert patient['last_name'] == 'Patient'
    assert patient['phone'] == 'Not updated'


def test_register_duplicate_email_is_rejected(client, mongo):
    assert register(client).status_code == 201
    r = register(client, email='ADA@example.com', name='Someone Else')
    assert r.status_code == 400
    assert r.data == {'error': 'User already exists'}
    assert UserRepository(mongo).count() == 1
    assert PatientRepository(mongo).count() == 1


@pytest.mark.parametrize('missing', ['name', 'email', 'password'])
def test_register_requires_all_fields(client, mongo, missing):
    r = register(client, **{missing: ''})
    assert r.status_code == 400
    assert r.data == {'error': 'All fields are required'}
    assert UserRepository(mongo).count() == 0


def test_register_adopts_patient_created_by_booking(client, mongo):
    booked = client.post('/api/appointments', {
        'firstName': 'Ada', 'lastName': 'King', 'email': 'ada@example.com',
        'phone': '555-1', 'date': '2030-02-02',
    }, format='json')
    assert booked.status_code == 201

    r = register(client)
    assert r.status_code == 201
    patients = PatientRepository(mongo).find_all()
    assert len(patients) == 1
    assert patients[0]['last_name'] == 'King'
    assert str(patients[0]['user']) == r.data['user']['id']
    assert r.data['user']['patientId'] == booked.data['patient']


# ---------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------
def test_login_returns_profile_and_token(client):
    register(client)
    r = login(client, email=' Ada@Example.com ')
    assert r.status_code == 200
    assert r.data['success'] is True
    assert r.data['token']
    assert r.data['user']['email'] == 'ada@example.com'
    assert set(r.data['user']) == {'id', 'email', 'name', 'role', 'patientId'}


def test_login_failures_are_indistinguishable(client):
    register(client)
    wrong_password = login(client, password='nope')
    unknown_email = login(client, email='ghost@example.com')
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.data == unknown_email.data == {'error': 'Invalid credentials'}


def test_login_requires_email_and_password(client):
    r = client.post('/api/auth/login', {'email': 'ada@example.com'}, format='json')
    assert r.status_code == 400
    assert r.data == {'error': 'Email and password required'}


def test_login_accepts_legacy_plaintext_password(client, mongo):
    UserRepository(mongo).create({'name': 'Old Admin', 'email': 'old@hospital.com',
                                  'password': 'admin123', 'role': 'admin'})
    assert login(client, 'old@hospital.com', 'admin123').status_code == 200
    assert login(client, 'old@hospital.com', 'admin12').status_code == 401


def test_me_requires_valid_token(client):
    register(client)
    token = login(client).data['token']

    assert client.get('/api/auth/me').status_code == 401

    client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
    r = client.get('/api/auth/me')
    assert r.status_code == 401
    assert 'error' in r.data

    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    r = client.get('/api/auth/me')
    assert r.status_code == 200
    assert r.data['email'] == 'ada@example.com'
    assert r.data['role'] == 'patient'


def test_logout(client):
    r = client.post('/api/auth/logout')
    assert r.status_code == 200
    assert r.data['success'] is True


# ---------------------------------------------------------------------
# Access control
# ---------------------------------------------------------------------
def test_api_is_open_by_default(client):
    assert client.get('/api/patients').status_code == 200


def test_require_auth_gates_resources(client, settings):
    settings.API_REQUIRE_AUTH = True
    assert client.get('/api/patients').status_code == 401
    assert client.get('/api/dashboard/stats').status_code == 401

    # the auth endpoints stay reachable
    assert register(client).status_code == 201
    token = login(client).data['token']
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    assert client.get('/api/patients').status_code == 200


# ---------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------
def test_health_reports_store_reachable(client):
    fake = mock.Mock()
    fake.command.return_value = {'ok': 1}
    with mock.patch('core.views.health.get_database', return_value=fake):
        r = client.get('/api/health')
    assert r.status_code == 200
    body = r.json()
    assert body['status'] == 'Server is running'
    assert body['db'] is True
    assert body['timestamp']
    fake.command.assert_called_once_with('ping')


def test_health_reports_store_failure(client):
    fake = mock.Mock()
    fake.command.side_effect = ServerSelectionTimeoutError('no servers')
    with mock.patch('core.views.health.get_database', return_value=fake):
        r = client.get('/api/health')
    assert r.status_code == 500
    assert r.json()['db'] is False


def test_register_rejects_malformed_email(client, mongo):
    r = register(client, email='a@')
    assert r.status_code == 400
    assert r.data['error'].startswith('email:')
    assert UserRepository(mongo).count() == 0
    assert PatientRepository(mongo).count() == 0
