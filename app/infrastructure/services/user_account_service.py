"""User account service: cache-aside reads, profile writes and follower edges.

Writes own their transaction so the cached snapshot is invalidated only
after the new state is committed.
"""

from __future__ import annotations

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.user import UserResult
from app.application.interfaces.services import (
    IInvitationWorkflow,
    IPasswordHasher,
    IUserCache,
)
from app.domain.exceptions import ValidationException
from app.infrastructure.persistence.database import transaction
from app.infrastructure.persistence.repositories.follower_repo import FollowerRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class UserAccountService:
    """Reads users through the cache and keeps it coherent on writes."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache: IUserCache,
        workflow: IInvitationWorkflow,
        hasher: IPasswordHasher,
    ) -> None:
        self._session_factory = session_factory
        self._cache = cache
        self._workflow = workflow
        self._hasher = hasher

    async def get_user(self, user_id: str) -> UserResult:
        """Return user from cache; on miss load from the store and populate the cache.

        Raises:
            ResourceNotFoundException: User does not exist (nothing is cached).
        """
        cached = await self._cache.get(user_id)
        if cached is not None:
            return cached
        async with transaction(self._session_factory, "get_user") as session:
            user = await UserRepository(session).get_by_id(user_id)
        await self._cache.set(user)
        return user

    async def update_profile(
        self,
        user_id: str,
        username: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> UserResult:
        """Update username, email and/or password, then drop the cached snapshot."""
        if username is None and email is None and password is None:
            raise ValidationException("At least one of username, email or password is required")
        hashed = None
        if password is not None:
            hashed = await asyncio.to_thread(self._hasher.hash, password)
        async with transaction(self._session_factory, "update_profile") as session:
            updated = await UserRepository(session).update_profile(
                user_id, username=username, email=email, hashed_password=hashed
            )
        await self._cache.delete(user_id)
        return updated

    async def delete_account(self, user_id: str) -> None:
        await self._workflow.delete_user(user_id)
        await self._cache.delete(user_id)

    async def follow(self, user_id: str, follower_id: str) -> None:
        if user_id == follower_id:
            raise ValidationException("Users cannot follow themselves", "user_id")
        async with transaction(self._session_factory, "follow") as session:
            await FollowerRepository(session).follow(user_id, follower_id)
        logger.debug("User %s now follows %s", follower_id, user_id)

    async def unfollow(self, user_id: str, follower_id: str) -> None:
        async with transaction(self._session_factory, "unfollow") as session:
            await FollowerRepository(session).unfollow(user_id, follower_id)

    async def assign_role(self, user_id: str, role_name: str) -> UserResult:
        """Change the user's role; the cached snapshot is dropped after commit."""
        async with transaction(self._session_factory, "assign_role") as session:
            updated = await UserRepository(session).assign_role(user_id, role_name)
        await self._cache.delete(user_id)
        logger.info("User %s now has role %s", user_id, role_name)
        return updated
