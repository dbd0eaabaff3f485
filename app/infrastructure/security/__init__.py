"""Security: JWT bearer tokens and password hashing."""

from app.infrastructure.security.jwt import JWTAuthenticator, TokenClaims
from app.infrastructure.security.password import (
    BcryptPasswordHasher,
    get_password_hash,
    verify_password,
)

__all__ = [
    "BcryptPasswordHasher",
    "JWTAuthenticator",
    "TokenClaims",
    "get_password_hash",
    "verify_password",
]
