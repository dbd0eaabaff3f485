"""DTOs for registration and login use cases."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RegistrationResult:
    """Result of a successful registration.

    token is the plaintext invitation token; it is returned once and only its
    digest is stored.
    """

    token: str
    user_id: str


@dataclass(frozen=True)
class AccessTokenResult:
    """Signed bearer token issued after a successful login."""

    access_token: str
    token_type: str = "bearer"
