import pytest

from storefront.auth import password
from storefront.auth.password import hash_password, verify_password


def test_hash_password_round_trips_with_verify() -> None:
    digest = hash_password('mypassword', rounds=4)

    assert digest is not None
    assert digest != 'mypassword'
    assert verify_password('mypassword', digest) is True


def test_verify_password_rejects_other_password() -> None:
    digest = hash_password('mypassword', rounds=4)

    assert verify_password('wrongpassword', digest) is False


def test_hash_password_salts_every_call() -> None:
    first = hash_password('mypassword', rounds=4)
    second = hash_password('mypassword', rounds=4)

    assert first != second
    assert verify_password('mypassword', first)
    assert verify_password('mypassword', second)


def test_hash_password_uses_requested_cost() -> None:
    assert hash_password('mypassword', rounds=5).startswith('$2b$05$')


def test_default_cost_is_ten_rounds() -> None:
    assert password.DEFAULT_ROUNDS == 10


def test_hash_password_returns_none_when_hashing_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_hashpw(_password, _salt):
        raise ValueError('Hashing error')

    monkeypatch.setattr(password.bcrypt, 'hashpw', broken_hashpw)

    assert hash_password('mypassword', rounds=4) is None


@pytest.mark.parametrize(
    ('plaintext', 'digest'),
    [
        ('mypassword', 'not-a-bcrypt-hash'),
        ('mypassword', ''),
        ('', '$2b$04$abcdefghijklmnopqrstuu'),
    ],
)
def test_verify_password_fails_closed(plaintext: str, digest: str) -> None:
    assert verify_password(plaintext, digest) is False


@pytest.mark.parametrize(
    ('plaintext', 'too_long'),
    [
        ('x' * 72, False),
        ('x' * 73, True),
        ('é' * 36, False),
        ('é' * 37, True),
    ],
)
def test_password_too_long_counts_utf8_bytes(plaintext: str, too_long: bool) -> None:
    assert password.password_too_long(plaintext) is too_long
