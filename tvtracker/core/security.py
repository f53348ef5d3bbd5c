"""Password hashing and session token minting/verification."""

import secrets
from datetime import UTC, datetime
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from tvtracker.core.config import settings

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 72
# bcrypt only reads the first 72 bytes; longer passwords are refused, never truncated.
PASSWORD_MAX_BYTES = 72

# Bytes of randomness in each token's jti claim.
TOKEN_NONCE_BYTES = 16


def password_fits_bcrypt(plain_password: str) -> bool:
    """True if the UTF-8 encoding of plain_password is within bcrypt's input limit."""
    return len(plain_password.encode("utf-8")) <= PASSWORD_MAX_BYTES


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Plain passwords are never stored."""
    if not password_fits_bcrypt(plain_password):
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    pw_bytes = plain_password.encode("utf-8")
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Over-long passwords never match."""
    if not password_fits_bcrypt(plain_password):
        return False
    pw_bytes = plain_password.encode("utf-8")
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=1)
def _dummy_password_hash() -> str:
    # Same cost as real hashes so both failure paths take as long.
    return hash_password("tvtracker-dummy-password")


def burn_password_check(plain_password: str) -> None:
    """Run a throwaway bcrypt check (timing parity for unknown usernames)."""
    verify_password(plain_password, _dummy_password_hash())


def create_session_token(username: str) -> str:
    """
    Mint a new opaque session token for username.

    The token is a signed JWT with sub, iat and a random jti, so two tokens for
    the same user never collide. There is no exp: a token stays valid until
    the next one is issued for that user.
    """
    payload: dict[str, Any] = {
        "sub": username,
        "iat": datetime.now(UTC),
        "jti": secrets.token_urlsafe(TOKEN_NONCE_BYTES),
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_session_token(token: str) -> dict[str, Any]:
    """
    Verify the token signature and return its claims.
    Raises jwt.PyJWTError on a malformed or forged token.
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "jti"]},
    )


def tokens_match(presented: str, stored: str) -> bool:
    """Constant-time exact comparison of two tokens."""
    return secrets.compare_digest(presented.encode("utf-8"), stored.encode("utf-8"))
