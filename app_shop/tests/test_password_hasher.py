from app_shop.services.password_hasher import PasswordHasher

from conftest import FAST_HASH


def test_hash_is_salted_and_verifies():
    hasher = PasswordHasher(FAST_HASH)
    first = hasher.hash('secret')
    second = hasher.hash('secret')

    assert first != 'secret'
    assert first != second
    assert hasher.verify('secret', first)
    assert hasher.verify('secret', second)
    assert not hasher.verify('Secret', first)


def test_non_string_plaintext_is_coerced_to_text():
    hasher = PasswordHasher(FAST_HASH)
    digest = hasher.hash(1234)

    assert hasher.verify('1234', digest)
    assert hasher.verify(1234, digest)


def test_garbage_digest_never_verifies():
    hasher = PasswordHasher(FAST_HASH)

    assert not hasher.verify('pw', '')
    assert not hasher.verify('pw', 'pw')
    assert not hasher.verify('pw', None)


def test_verify_dummy_always_fails():
    hasher = PasswordHasher(FAST_HASH)

    assert hasher.verify_dummy('anything') is False
    assert hasher.verify_dummy('anything') is False


def test_verify_dummy_does_not_hash_on_first_call(monkeypatch):
    hasher = PasswordHasher(FAST_HASH)

    def fail(plaintext):
        raise AssertionError('hash() called during verify_dummy')

    monkeypatch.setattr(hasher, 'hash', fail)

    assert hasher.verify_dummy('anything') is False
