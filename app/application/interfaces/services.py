"""Service interfaces (ports) for the application layer.

Protocols for the collaborators the registration, login and profile use
cases depend on. Implementations live in app.infrastructure.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.user import UserResult
    from app.domain.entities.user import UserEntity
    from app.infrastructure.security.jwt import TokenClaims


class IPasswordHasher(Protocol):
    """Protocol for one-way credential hashing."""

    def hash(self, plaintext: str) -> str:
        """Return a salted hash. Raises HashingException if the primitive fails."""

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Return False on mismatch or malformed hash."""


class ITokenAuthenticator(Protocol):
    """Protocol for issuing and verifying signed bearer tokens."""

    @property
    def issuer(self) -> str: ...

    @property
    def audience(self) -> str: ...

    def issue(self, subject: str, issuer: str, audience: str, ttl: timedelta) -> str:
        """Return a signed token. Raises SigningException."""

    def verify(self, token: str) -> TokenClaims:
        """Return claims. Raises AuthenticationException."""


class IInvitationWorkflow(Protocol):
    """Protocol for the transactional user + invitation workflow."""

    async def create_and_invite(
        self, user: UserEntity, plaintext_token: str, ttl: timedelta
    ) -> UserResult:
        """Atomically insert an inactive user and its invitation."""

    async def activate(self, plaintext_token: str) -> str:
        """Atomically activate the invited user; return its id."""

    async def delete_user(self, user_id: str) -> None:
        """Atomically delete the user's invitations and the user."""


class IMailer(Protocol):
    """Protocol for sending a single email."""

    async def send(self, to_email: str, subject: str, body: str) -> None:
        """Send the message. Raises MailDeliveryException on failure."""


class IMailTemplateRenderer(Protocol):
    """Protocol for rendering transactional email subject and body."""

    def render_welcome(self, username: str, activation_url: str) -> tuple[str, str]:
        """Return (subject, body) for the welcome/activation email."""


class IUserCache(Protocol):
    """Protocol for the user cache-aside store. Failures never propagate."""

    async def get(self, user_id: str) -> UserResult | None:
        """Return the cached user, or None on miss or cache failure."""

    async def set(self, user: UserResult) -> None:
        """Store the user snapshot with the configured TTL."""

    async def delete(self, user_id: str) -> None:
        """Drop the cached snapshot."""
