import pytest
from itsdangerous import URLSafeSerializer

from app_shop.errors import AuthError, AuthErrorKind
from app_shop.models import Identity, UserRole
from app_shop.services.token_service import TokenService

from conftest import FakeClock, SECRET


@pytest.fixture
def tokens(clock):
    return TokenService(SECRET, ttl=3600, clock=clock)


@pytest.mark.parametrize('role', [UserRole.USER, UserRole.ADMIN])
def test_round_trip_returns_same_identity(tokens, role):
    identity = Identity(id='abc123', role=role)

    assert tokens.verify(tokens.issue(identity)) == identity


def test_token_valid_until_one_hour(tokens, clock):
    token = tokens.issue(Identity(id='u1', role=UserRole.USER))
    clock.advance(59 * 60)

    assert tokens.verify(token).id == 'u1'


def test_token_expired_after_61_minutes(tokens, clock):
    token = tokens.issue(Identity(id='u1', role=UserRole.USER))
    clock.advance(61 * 60)

    with pytest.raises(AuthError) as exc:
        tokens.verify(token)
    assert exc.value.kind is AuthErrorKind.EXPIRED
    assert exc.value.status_code == 401


def test_token_from_other_secret_is_invalid(tokens, clock):
    other = TokenService('another-secret', clock=clock)
    token = other.issue(Identity(id='u1', role=UserRole.ADMIN))

    with pytest.raises(AuthError) as exc:
        tokens.verify(token)
    assert exc.value.kind is AuthErrorKind.INVALID


def test_tampered_token_is_invalid(tokens):
    token = tokens.issue(Identity(id='u1', role=UserRole.USER))
    payload, signature = token.rsplit('.', 1)
    forged = payload + '.' + ('A' if signature[0] != 'A' else 'B') + signature[1:]

    with pytest.raises(AuthError) as exc:
        tokens.verify(forged)
    assert exc.value.kind is AuthErrorKind.INVALID


@pytest.mark.parametrize('token', ['', 'not-a-token', None, 12345])
def test_unparseable_token_is_malformed(tokens, token):
    with pytest.raises(AuthError) as exc:
        tokens.verify(token)
    assert exc.value.kind is AuthErrorKind.MALFORMED


def test_signed_payload_with_unknown_role_is_malformed(tokens, clock):
    serializer = URLSafeSerializer(SECRET, salt=TokenService.SALT)
    token = serializer.dumps({'id': 'u1', 'role': 'superuser', 'iat': 0, 'exp': int(clock()) + 60})

    with pytest.raises(AuthError) as exc:
        tokens.verify(token)
    assert exc.value.kind is AuthErrorKind.MALFORMED


def test_signed_payload_missing_expiry_is_malformed(tokens):
    serializer = URLSafeSerializer(SECRET, salt=TokenService.SALT)
    token = serializer.dumps({'id': 'u1', 'role': 'user'})

    with pytest.raises(AuthError) as exc:
        tokens.verify(token)
    assert exc.value.kind is AuthErrorKind.MALFORMED


def test_issue_embeds_issued_and_expiry_times():
    clock = FakeClock(now=1000.0)
    tokens = TokenService(SECRET, ttl=3600, clock=clock)
    token = tokens.issue(Identity(id='u1', role=UserRole.USER))

    payload = URLSafeSerializer(SECRET, salt=TokenService.SALT).loads(token)
    assert payload == {'id': 'u1', 'role': 'user', 'iat': 1000, 'exp': 4600}
