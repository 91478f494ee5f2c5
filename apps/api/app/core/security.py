"""Security helpers for password hashing and JWT generation."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt

from app.core.config import Settings, get_settings

DEFAULT_BCRYPT_ROUNDS = 10
# bcrypt only reads the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


class TokenError(ValueError):
    """Raised when an access token cannot be trusted."""


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def hash_password(password: str, *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a password with bcrypt using a freshly generated salt."""

    if not password:
        raise ValueError("Password must not be empty")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, stored_hash: str) -> bool:
    """Check a candidate password against a stored bcrypt hash."""

    try:
        return bcrypt.checkpw(password.encode("utf-8"), stored_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def _sign(signing_input: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), signing_input, hashlib.sha256).digest()


def create_access_token(
    *,
    user_id: str,
    is_admin: bool,
    settings: Settings | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a signed HS256 token carrying the user's identity and role."""

    active_settings = settings or get_settings()
    now = datetime.now(timezone.utc)
    expires = now + (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=active_settings.jwt_expires_minutes)
    )

    header = {"alg": active_settings.jwt_algorithm, "typ": "JWT"}
    payload: dict[str, Any] = {
        "sub": user_id,
        "is_admin": bool(is_admin),
        "iat": int(now.timestamp()),
        "exp": int(expires.timestamp()),
    }

    header_segment = _b64encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_segment = _b64encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_segment}.{payload_segment}".encode("ascii")
    signature_segment = _b64encode(_sign(signing_input, active_settings.jwt_secret))

    return f"{header_segment}.{payload_segment}.{signature_segment}"


def decode_access_token(token: str, *, settings: Settings | None = None) -> dict[str, Any]:
    """Decode and validate a token created by ``create_access_token``."""

    active_settings = settings or get_settings()
    parts = token.split(".")
    if len(parts) != 3 or not all(parts) or not token.isascii():
        raise TokenError("Token structure invalid")

    header_segment, payload_segment, signature_segment = parts
    try:
        header = json.loads(_b64decode(header_segment))
        provided_signature = _b64decode(signature_segment)
    except (ValueError, TypeError) as exc:
        raise TokenError("Token encoding invalid") from exc

    if not isinstance(header, dict) or header.get("alg") != active_settings.jwt_algorithm:
        raise TokenError("Token algorithm unsupported")

    signing_input = f"{header_segment}.{payload_segment}".encode("ascii")
    expected_signature = _sign(signing_input, active_settings.jwt_secret)
    if not hmac.compare_digest(provided_signature, expected_signature):
        raise TokenError("Token signature mismatch")

    try:
        payload_data = json.loads(_b64decode(payload_segment))
    except (ValueError, TypeError) as exc:
        raise TokenError("Token payload malformed") from exc
    if not isinstance(payload_data, dict) or not payload_data.get("sub"):
        raise TokenError("Token payload malformed")

    exp = payload_data.get("exp")
    if exp is None:
        raise TokenError("Token missing expiration")
    now_ts = int(datetime.now(timezone.utc).timestamp())
    if now_ts >= int(exp):
        raise TokenError("Token expired")

    return payload_data
