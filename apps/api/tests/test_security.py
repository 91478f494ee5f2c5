"""Unit tests for core security helpers."""

from __future__ import annotations

from datetime import timedelta

import pytest

from app.core.config import Settings
from app.core.security import (
    TokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_hash_password_uses_bcrypt_with_random_salt() -> None:
    first = hash_password("pw1", rounds=4)
    second = hash_password("pw1", rounds=4)

    assert first.startswith("$2b$04$")
    assert first != second
    assert verify_password("pw1", first)
    assert verify_password("pw1", second)
    assert not verify_password("wrong", first)


def test_hash_password_defaults_to_cost_ten() -> None:
    assert hash_password("pw1").startswith("$2b$10$")


def test_hash_password_rejects_empty_password() -> None:
    with pytest.raises(ValueError):
        hash_password("")


def test_hash_password_rejects_more_than_72_bytes() -> None:
    assert hash_password("p" * 72, rounds=4).startswith("$2b$04$")

    with pytest.raises(ValueError):
        hash_password("p" * 73, rounds=4)


def test_verify_password_returns_false_for_malformed_hash() -> None:
    assert verify_password("pw1", "not-a-bcrypt-hash") is False


def test_decode_access_token_returns_identity_claims(settings: Settings) -> None:
    token = create_access_token(user_id="abc123", is_admin=True, settings=settings)

    payload = decode_access_token(token, settings=settings)

    assert payload["sub"] == "abc123"
    assert payload["is_admin"] is True
    assert payload["exp"] - payload["iat"] == 3600


def test_decode_access_token_rejects_tampered_signature(settings: Settings) -> None:
    token = create_access_token(user_id="abc123", is_admin=False, settings=settings)

    header_segment, payload_segment, signature_segment = token.split(".")
    tampered_payload = payload_segment[:-1] + ("a" if payload_segment[-1] != "a" else "b")
    tampered = ".".join([header_segment, tampered_payload, signature_segment])

    with pytest.raises(TokenError, match="Token signature mismatch"):
        decode_access_token(tampered, settings=settings)


def test_decode_access_token_rejects_other_secret(settings: Settings) -> None:
    token = create_access_token(user_id="abc123", is_admin=False, settings=settings)
    other = settings.model_copy(update={"jwt_secret": "another-secret"})

    with pytest.raises(TokenError, match="Token signature mismatch"):
        decode_access_token(token, settings=other)


def test_decode_access_token_rejects_expired_token(settings: Settings) -> None:
    token = create_access_token(
        user_id="abc123",
        is_admin=False,
        settings=settings,
        expires_delta=timedelta(seconds=-1),
    )

    with pytest.raises(TokenError, match="Token expired"):
        decode_access_token(token, settings=settings)


@pytest.mark.parametrize("token", ["", "garbage", "a.b", "a..c", "a.b.c.d"])
def test_decode_access_token_rejects_malformed_tokens(settings: Settings, token: str) -> None:
    with pytest.raises(TokenError):
        decode_access_token(token, settings=settings)
