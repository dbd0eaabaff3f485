"""Password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a fixed-length
input so long passwords are not silently truncated. The cost factor is fixed;
callers cannot lower it.
"""

import base64
import hashlib

import bcrypt

from app.domain.exceptions import HashingException

BCRYPT_ROUNDS = 12


def _prehash(password: str) -> bytes:
    """SHA-256 pre-hash to avoid bcrypt's 72-byte truncation."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password.

    A malformed or empty hash is a mismatch, not an error.
    """
    if not hashed_password:
        return False
    try:
        result = bcrypt.checkpw(
            _prehash(plain_password),
            hashed_password.encode("utf-8"),
        )
        return bool(result)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Return bcrypt hash of password (SHA-256 pre-hashed before bcrypt).

    Raises:
        HashingException: If the salt cannot be generated or bcrypt fails.
    """
    try:
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        hashed = bcrypt.hashpw(_prehash(password), salt)
    except (ValueError, TypeError, OSError) as e:
        raise HashingException(f"Password hashing failed: {type(e).__name__}") from e
    return hashed.decode("utf-8")


class BcryptPasswordHasher:
    """IPasswordHasher backed by the module functions (cost factor fixed at BCRYPT_ROUNDS)."""

    def hash(self, plaintext: str) -> str:
        return get_password_hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        return verify_password(plaintext, hashed)
