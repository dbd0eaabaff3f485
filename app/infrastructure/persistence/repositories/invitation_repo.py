"""Invitation store: digests of one-time activation tokens."""

from __future__ import annotations

import hashlib
from datetime import datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import bounded
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.models.user_invitation import UserInvitation
from app.shared.utils.datetime import utc_now


def hash_token(token: str) -> str:
    """Return the hex SHA-256 digest stored in place of the plaintext token."""
    return hashlib.sha256(token.encode()).hexdigest()


class InvitationRepository:
    """Create, resolve and purge invitations. Runs inside the caller's transaction."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, user_id: str, token: str, ttl: timedelta) -> datetime:
        """Store the digest of token for user_id; return its expiry."""
        expiry = utc_now() + ttl
        self._session.add(
            UserInvitation(token_hash=hash_token(token), user_id=user_id, expiry=expiry)
        )
        await bounded(self._session.flush())
        return expiry

    async def find_user_id(self, token: str) -> str | None:
        """Return the id of the user invited with token, if the invitation has not expired."""
        result = await bounded(
            self._session.execute(
                select(User.id)
                .join(UserInvitation, UserInvitation.user_id == User.id)
                .where(UserInvitation.token_hash == hash_token(token))
                .where(UserInvitation.expiry > utc_now())
            )
        )
        return result.scalar_one_or_none()

    async def delete_for_user(self, user_id: str) -> int:
        result = await bounded(
            self._session.execute(
                delete(UserInvitation).where(UserInvitation.user_id == user_id)
            )
        )
        return result.rowcount
