import pytest

from conftest import auth_headers, login, signup


def test_signup_then_login_returns_verifiable_token(client, container):
    r = signup(client, 'a@x.com', 'pw')
    assert r.status_code == 200
    assert r.get_json() == {'message': 'Signup successful'}

    token = login(client, 'a@x.com', 'pw')
    identity = container.token_service.verify(token)
    assert identity.role.value == 'user'


def test_duplicate_email_is_rejected(client):
    assert signup(client, 'a@x.com', 'pw').status_code == 200

    r = signup(client, 'a@x.com', 'other')
    assert r.status_code == 400
    assert r.get_json() == {'message': 'User already exists'}


def test_email_is_case_sensitive(client):
    assert signup(client, 'a@x.com').status_code == 200
    assert signup(client, 'A@x.com').status_code == 200


def test_password_is_never_stored_in_plaintext(client, container):
    signup(client, 'a@x.com', 'plain-secret')

    _, record = container.user_repo.find_by_email('a@x.com')
    assert record['password'] != 'plain-secret'
    assert 'plain-secret' not in record['password']


def test_numeric_password_is_accepted(client):
    r = client.post('/api/auth/signup', json={'email': 'n@x.com', 'password': 1234})
    assert r.status_code == 200

    assert login(client, 'n@x.com', '1234')


@pytest.mark.parametrize('payload', [
    {'password': 'pw'},
    {'email': 'a@x.com'},
    {'email': '', 'password': 'pw'},
    {'email': 'a@x.com', 'password': 'pw', 'role': 'superuser'},
])
def test_signup_validation(client, payload):
    r = client.post('/api/auth/signup', json=payload)
    assert r.status_code == 400


def test_wrong_password_and_unknown_email_are_indistinguishable(client):
    signup(client, 'a@x.com', 'pw')

    wrong = client.post('/api/auth/login', json={'email': 'a@x.com', 'password': 'nope'})
    unknown = client.post('/api/auth/login', json={'email': 'ghost@x.com', 'password': 'pw'})

    assert wrong.status_code == unknown.status_code == 400
    assert wrong.get_json() == unknown.get_json() == {'message': 'Invalid credentials'}


def test_profile_requires_token(client):
    r = client.get('/api/auth/profile')
    assert r.status_code == 401
    assert r.get_json() == {'message': 'No token provided'}


def test_profile_excludes_password(client, user_token):
    r = client.get('/api/auth/profile', headers=auth_headers(user_token))
    assert r.status_code == 200
    body = r.get_json()
    assert body['email'] == 'user@x.com'
    assert body['role'] == 'user'
    assert body['cart'] == []
    assert 'password' not in body


def test_expired_token_is_rejected(client, clock, user_token):
    clock.advance(61 * 60)

    r = client.get('/api/auth/profile', headers=auth_headers(user_token))
    assert r.status_code == 401
    assert r.get_json() == {'message': 'Token expired'}


def test_garbage_token_is_rejected(client):
    r = client.get('/api/auth/profile', headers=auth_headers('garbage'))
    assert r.status_code == 401
    assert r.get_json() == {'message': 'Malformed token'}


def test_wrong_scheme_is_rejected(client, user_token):
    r = client.get('/api/auth/profile', headers={'Authorization': f'Basic {user_token}'})
    assert r.status_code == 401


def test_list_users_for_admin(client, admin_token, user_token):
    r = client.get('/api/auth/admin/users', headers=auth_headers(admin_token))
    assert r.status_code == 200
    users = r.get_json()
    assert sorted(u['email'] for u in users) == ['admin@x.com', 'user@x.com']
    assert all('password' not in u for u in users)


def test_list_users_forbidden_for_user(client, user_token):
    r = client.get('/api/auth/admin/users', headers=auth_headers(user_token))
    assert r.status_code == 403
    assert r.get_json() == {'message': 'Admin access denied'}


def test_list_users_without_token_is_unauthorized(client):
    assert client.get('/api/auth/admin/users').status_code == 401


def test_signup_and_login_are_audited(client, container):
    signup(client, 'a@x.com', 'pw')
    login(client, 'a@x.com', 'pw')

    messages = [log['message'] for log in container.audit_service.get_all_logs()]
    assert any('Registro de usuario: a@x.com' in m for m in messages)
    assert any('Inicio de sesión: a@x.com' in m for m in messages)
