import pytest

from app_shop.config import Settings
from app_shop.main import create_app

FAST_HASH = 'pbkdf2:sha256:1000'
SECRET = 'test-secret-key'


class FakeClock:
    """Reloj manual para probar expiración de tokens."""

    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def settings(tmp_path):
    return Settings(
        secret_key=SECRET,
        data_dir=str(tmp_path / 'data'),
        password_hash_method=FAST_HASH,
        logs_dir=str(tmp_path / 'logs'),
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(settings, clock):
    return create_app(settings, clock=clock)


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def container(app):
    return app.extensions['app_shop']


def signup(client, email, password='pw', name='Tester', role=None):
    payload = {'email': email, 'password': password, 'name': name}
    if role is not None:
        payload['role'] = role
    return client.post('/api/auth/signup', json=payload)


def login(client, email, password='pw'):
    r = client.post('/api/auth/login', json={'email': email, 'password': password})
    assert r.status_code == 200, r.get_json()
    return r.get_json()['token']


def auth_headers(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def admin_token(client):
    assert signup(client, 'admin@x.com', 'adminpw', 'Admin', role='admin').status_code == 200
    return login(client, 'admin@x.com', 'adminpw')


@pytest.fixture
def user_token(client):
    assert signup(client, 'user@x.com', 'userpw', 'User').status_code == 200
    return login(client, 'user@x.com', 'userpw')


@pytest.fixture
def milk(client, admin_token):
    r = client.post(
        '/api/auth/admin/addProduct',
        json={'pID': 1, 'name': 'Milk', 'price': '50', 'quantity': 10},
        headers=auth_headers(admin_token),
    )
    assert r.status_code == 200
    return r.get_json()['product']
