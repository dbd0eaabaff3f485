"""Follower repository: follow/unfollow edges between users."""

from __future__ import annotations

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import ConflictException, ResourceNotFoundException
from app.infrastructure.persistence.database import bounded
from app.infrastructure.persistence.models.follower import Follower
from app.infrastructure.persistence.models.user import User


class FollowerRepository:
    """Follower edges. The composite primary key rejects a second follow of the same user."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def follow(self, user_id: str, follower_id: str) -> None:
        target = await bounded(self.db.get(User, user_id))
        if target is None:
            raise ResourceNotFoundException("user", user_id)
        self.db.add(Follower(user_id=user_id, follower_id=follower_id))
        try:
            await bounded(self.db.flush())
        except IntegrityError as e:
            raise ConflictException(
                "Already following this user",
                {"user_id": user_id, "follower_id": follower_id},
            ) from e

    async def unfollow(self, user_id: str, follower_id: str) -> None:
        result = await bounded(
            self.db.execute(
                delete(Follower).where(
                    Follower.user_id == user_id,
                    Follower.follower_id == follower_id,
                )
            )
        )
        if result.rowcount == 0:
            raise ResourceNotFoundException("follower", f"{follower_id}->{user_id}")
