"""Security primitives for password workflows."""

from __future__ import annotations

import hashlib
import hmac
import secrets

PBKDF2_ITERATIONS = 120_000


def _derive(password: str, salt: str, pepper: str) -> str:
    value = f"{pepper}:{password}".encode("utf-8")
    return hashlib.pbkdf2_hmac("sha256", value, salt.encode("ascii"), PBKDF2_ITERATIONS).hex()


def hash_password(password: str, pepper: str = "") -> str:
    """Return ``salt$digest`` for storage."""
    salt = secrets.token_hex(16)
    return f"{salt}${_derive(password, salt, pepper)}"


def verify_password(password: str, hashed_password: str, pepper: str = "") -> bool:
    """Constant-time comparison for hashed password values."""
    salt, sep, digest = hashed_password.partition("$")
    if not sep:
        return False
    candidate = _derive(password, salt, pepper)
    return hmac.compare_digest(candidate, digest)
