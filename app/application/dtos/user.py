"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from app.core.constants import ROLE_USER


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, get_by_email, etc.). No password.

    role_level is denormalised from the role row so permission checks need
    no extra lookup for the acting user.
    """

    id: str
    username: str
    email: str
    is_active: bool
    created_at: datetime | None = None
    role: str = ROLE_USER
    role_level: int = 1


@dataclass(frozen=True)
class UserCredentials:
    """User row including the stored hash; only used to verify a login."""

    id: str
    email: str
    hashed_password: str
    is_active: bool
