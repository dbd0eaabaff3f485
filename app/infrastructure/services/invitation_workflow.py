"""Invitation workflow: user + invitation lifecycle, each step in one transaction.

Each method opens its own session and transaction so the registration
orchestrator can commit the user before the welcome mail goes out and, on
mail failure, delete it again in a separate transaction.
"""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.user import UserResult
from app.domain.entities.user import UserEntity
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.database import transaction
from app.infrastructure.persistence.repositories.invitation_repo import (
    InvitationRepository,
)
from app.infrastructure.persistence.repositories.user_repo import UserRepository
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class InvitationWorkflow:
    """IInvitationWorkflow backed by the relational store."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_and_invite(
        self, user: UserEntity, plaintext_token: str, ttl: timedelta
    ) -> UserResult:
        """Insert the (inactive) user and its invitation; both or neither are committed.

        Raises:
            UserAlreadyExistsException: Username or email already taken.
            PersistenceException: Any other store failure.
        """
        async with transaction(self._session_factory, "create_and_invite") as session:
            created = await UserRepository(session).create_user(user)
            expiry = await InvitationRepository(session).create(
                created.id, plaintext_token, ttl
            )
        logger.info("Invitation created for user %s (expires %s)", created.id, expiry)
        return created

    async def activate(self, plaintext_token: str) -> str:
        """Activate the user invited with plaintext_token and purge its invitations.

        Wrong, expired and already-used tokens all raise the same
        ResourceNotFoundException.
        """
        async with transaction(self._session_factory, "activate") as session:
            invitations = InvitationRepository(session)
            user_id = await invitations.find_user_id(plaintext_token)
            if user_id is None:
                raise ResourceNotFoundException("invitation", "token")
            await UserRepository(session).activate(user_id)
            await invitations.delete_for_user(user_id)
        logger.info("User %s activated", user_id)
        return user_id

    async def delete_user(self, user_id: str) -> None:
        """Delete the user's invitations, then the user.

        Raises:
            ResourceNotFoundException: No user row with user_id.
        """
        async with transaction(self._session_factory, "delete_user") as session:
            await InvitationRepository(session).delete_for_user(user_id)
            await UserRepository(session).delete_user(user_id)
        logger.info("User %s deleted", user_id)
