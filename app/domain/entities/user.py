"""User domain entity.

Represents a registered identity, independent of persistence.
"""

from dataclasses import dataclass, field
from datetime import datetime

from app.core.constants import ROLE_USER
from app.domain.exceptions import ValidationException
from app.shared.utils.generators import generate_cuid


@dataclass
class UserEntity:
    """Domain entity for a user account (SRP: lifecycle rules separate from persistence).

    A new user starts inactive with the "user" role and becomes active
    exactly once, when its invitation is redeemed. Holds only the password hash, never plaintext.
    Validation runs on construction.
    """

    username: str
    email: str
    hashed_password: str
    id: str = field(default_factory=generate_cuid)
    is_active: bool = False
    role: str = ROLE_USER
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate user business rules. Raises ValidationException if invalid."""
        if not self.username or not self.username.strip():
            raise ValidationException("Username is required", field="username")
        if not self.email or "@" not in self.email:
            raise ValidationException("A valid email is required", field="email")
        if not self.hashed_password:
            raise ValidationException("Password hash is required", field="hashed_password")
