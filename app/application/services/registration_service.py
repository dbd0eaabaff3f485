"""Registration: create an inactive user with an invitation, then send the welcome mail.

The user and invitation are committed before the mail is sent. If sending
fails the user is deleted again (compensation); the caller sees
MailDeliveryException, or CompensationFailedException when the delete also
failed.
"""

from __future__ import annotations

import asyncio
from datetime import timedelta

from app.application.dtos.auth import RegistrationResult
from app.application.interfaces.services import (
    IInvitationWorkflow,
    IMailer,
    IMailTemplateRenderer,
    IPasswordHasher,
    IUserCache,
)
from app.application.services.saga import Saga
from app.core.constants import ACTIVATION_PATH
from app.domain.entities.user import UserEntity
from app.domain.exceptions import MailDeliveryException
from app.shared.telemetry.logging import get_logger
from app.shared.utils.generators import generate_invitation_token

logger = get_logger(__name__)


class RegistrationService:
    """Orchestrates register -> invite -> (activate later)."""

    def __init__(
        self,
        workflow: IInvitationWorkflow,
        mailer: IMailer,
        renderer: IMailTemplateRenderer,
        hasher: IPasswordHasher,
        *,
        frontend_url: str,
        invitation_ttl: timedelta,
        cache: IUserCache | None = None,
    ) -> None:
        self.workflow = workflow
        self.mailer = mailer
        self.renderer = renderer
        self.hasher = hasher
        self.frontend_url = frontend_url.rstrip("/")
        self.invitation_ttl = invitation_ttl
        self.cache = cache

    def activation_url(self, token: str) -> str:
        return f"{self.frontend_url}{ACTIVATION_PATH}/{token}"

    async def register(self, username: str, email: str, password: str) -> RegistrationResult:
        """Register a user and email them an activation link.

        Returns:
            The plaintext invitation token and the new user's id.

        Raises:
            HashingException: Password could not be hashed (nothing written).
            UserAlreadyExistsException: Username or email taken (nothing written).
            PersistenceException: Store failure (nothing written).
            MailDeliveryException: Mail failed; the user was deleted again.
            CompensationFailedException: Mail failed and the delete failed too.
        """
        hashed = await asyncio.to_thread(self.hasher.hash, password)
        user = UserEntity(username=username, email=email, hashed_password=hashed)
        token = generate_invitation_token()

        saga = Saga("register_user")
        saga.add_step(
            "create_and_invite",
            lambda: self.workflow.create_and_invite(user, token, self.invitation_ttl),
            compensate=lambda: self.workflow.delete_user(user.id),
        )
        saga.add_step("send_welcome_email", lambda: self._send_welcome(user, token))
        await saga.run()

        logger.info("Registered user %s; invitation sent", user.id)
        return RegistrationResult(token=token, user_id=user.id)

    async def activate(self, token: str) -> str:
        """Redeem an invitation token. Raises ResourceNotFoundException for any bad token."""
        user_id = await self.workflow.activate(token)
        if self.cache is not None:
            await self.cache.delete(user_id)
        return user_id

    async def _send_welcome(self, user: UserEntity, token: str) -> None:
        subject, body = self.renderer.render_welcome(
            user.username, self.activation_url(token)
        )
        try:
            await self.mailer.send(user.email, subject, body)
        except MailDeliveryException:
            raise
        except Exception as e:
            raise MailDeliveryException(reason=type(e).__name__) from e
