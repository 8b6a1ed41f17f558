import os

from app_shop.config import Settings
from app_shop.main import create_app
from app_shop.performance_logger import get_route_name

from conftest import auth_headers


def test_index(client):
    r = client.get('/')
    assert r.status_code == 200
    assert r.get_data(as_text=True) == 'API is running'


def test_api_docs_lists_every_route(client):
    doc = client.get('/api-docs').get_json()
    assert doc['openapi'].startswith('3.')
    assert '/api/auth/admin/deleteProduct/{pid}' in doc['paths']
    assert len(doc['paths']) == 10


def test_unknown_route_is_json_404(client):
    r = client.get('/api/auth/nope')
    assert r.status_code == 404
    assert 'message' in r.get_json()


def test_non_object_body_is_rejected(client):
    r = client.post('/api/auth/signup', json=['a@x.com', 'pw'])
    assert r.status_code == 400


def test_security_headers(client):
    r = client.get('/')
    assert r.headers['X-Frame-Options'] == 'DENY'
    assert r.headers['X-Content-Type-Options'] == 'nosniff'


def test_performance_log_records_user(client, settings, user_token):
    client.get('/api/auth/profile', headers=auth_headers(user_token))

    with open(os.path.join(settings.logs_dir, 'performance.log'), encoding='utf-8') as f:
        content = f.read()
    assert 'Acción: Ver perfil' in content
    assert 'Ruta: POST /api/auth/signup' in content


def test_profiling_can_be_disabled(tmp_path):
    settings = Settings(
        secret_key='k',
        data_dir=str(tmp_path / 'data'),
        logs_dir=str(tmp_path / 'logs'),
        enable_profiling=False,
    )
    with create_app(settings).test_client() as c:
        c.get('/')
    assert not (tmp_path / 'logs').exists()


def test_route_names_fall_back_to_raw_rule():
    assert get_route_name('GET', '/api/auth/cart') == 'Ver carrito'
    assert get_route_name('GET', '/otra') == 'GET /otra'


def test_apps_do_not_share_state(tmp_path):
    def make(name):
        return create_app(Settings(
            secret_key=name,
            data_dir=str(tmp_path / name),
            password_hash_method='pbkdf2:sha256:1000',
            enable_profiling=False,
        ))

    first, second = make('one'), make('two')
    first.test_client().post('/api/auth/signup', json={'email': 'a@x.com', 'password': 'pw'})

    r = second.test_client().post('/api/auth/login', json={'email': 'a@x.com', 'password': 'pw'})
    assert r.status_code == 400


def test_settings_from_env():
    settings = Settings.from_env({
        'SHOP_SECRET_KEY': 's3cret',
        'SHOP_DATA_DIR': '/tmp/shop',
        'SHOP_TOKEN_TTL': '60',
        'SHOP_ENABLE_PROFILING': 'no',
        'PORT': '8080',
        'SHOP_LOG_LEVEL': 'debug',
    })
    assert settings.secret_key == 's3cret'
    assert settings.data_dir == '/tmp/shop'
    assert settings.token_ttl == 60
    assert settings.enable_profiling is False
    assert settings.port == 8080
    assert settings.log_level == 'DEBUG'
    assert settings.resolved_logs_dir == os.path.join('/tmp/shop', 'logs')


def test_settings_default_secret_when_missing():
    settings = Settings.from_env({})
    assert settings.secret_key
    assert settings.port == 3000
    assert settings.token_ttl == 3600
