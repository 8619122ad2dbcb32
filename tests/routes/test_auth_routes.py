import pytest
from sqlalchemy.exc import OperationalError

from food_delight.auth import jwt_handler
from food_delight.models.user import User


def _register(client, email='diner@example.com', password='secret-pass'):
    return client.post('/api/register', json={'email': email, 'password': password})


def test_root_reports_running(client) -> None:
    response = client.get('/')

    assert response.status_code == 200
    assert response.json() == {'status': 'Food Delight API Running'}


def test_register_returns_201(client) -> None:
    response = _register(client)

    assert response.status_code == 201
    assert response.json() == {'message': 'User registered successfully'}


def test_register_rejects_duplicate_email(client) -> None:
    _register(client)

    response = _register(client, password='different-pass')

    assert response.status_code == 400
    assert response.json() == {'error': 'Registration failed, email may already exist'}


@pytest.mark.parametrize('body', [{}, {'email': 'diner@example.com'}, {'password': 'secret'}, {'email': ' ', 'password': 'x'}])
def test_register_requires_email_and_password(client, body: dict) -> None:
    response = client.post('/api/register', json=body)

    assert response.status_code == 400
    assert response.json() == {'error': 'Email and password are required'}


def test_register_rejects_non_json_field_types(client) -> None:
    response = client.post('/api/register', json={'email': ['a'], 'password': 'secret'})

    assert response.status_code == 400
    assert response.json()['error'] == 'Invalid request data'


def test_login_returns_token_for_registered_user(client, session_factory) -> None:
    _register(client)

    response = client.post('/api/login', json={'email': 'diner@example.com', 'password': 'secret-pass'})

    assert response.status_code == 200
    token = response.json()['token']
    session = session_factory()
    try:
        user = session.query(User).filter(User.email == 'diner@example.com').one()
    finally:
        session.close()
    assert jwt_handler.validate_access_token(token) == user.id


@pytest.mark.parametrize(
    'body',
    [
        {'email': 'diner@example.com', 'password': 'wrong-pass'},
        {'email': 'ghost@example.com', 'password': 'secret-pass'},
    ],
)
def test_login_failures_do_not_reveal_which_part_was_wrong(client, body: dict) -> None:
    _register(client)

    response = client.post('/api/login', json=body)

    assert response.status_code == 400
    assert response.json() == {'error': 'Invalid email or password'}


def test_login_requires_email_and_password(client) -> None:
    response = client.post('/api/login', json={'email': 'diner@example.com'})

    assert response.status_code == 400
    assert response.json() == {'error': 'Email and password are required'}


def test_register_returns_500_without_internal_detail_when_store_fails(client, session_factory) -> None:
    from food_delight.database import get_db
    from food_delight.main import app

    def failing_commit():
        raise OperationalError('INSERT INTO users', {}, Exception('database is locked'))

    def override_get_db():
        session = session_factory()
        session.commit = failing_commit
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    response = _register(client)

    assert response.status_code == 500
    assert response.json() == {'error': 'Database error'}
    assert 'locked' not in response.text
