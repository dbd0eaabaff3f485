"""User repository. Interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserCredentials, UserResult
from app.domain.entities.user import UserEntity
from app.domain.exceptions import ResourceNotFoundException, UserAlreadyExistsException
from app.infrastructure.persistence.database import bounded
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(
        id=u.id,
        username=u.username,
        email=u.email,
        is_active=u.is_active,
        created_at=ensure_utc(u.created_at),
        role=u.role.name,
        role_level=u.role.level,
    )


class UserRepository(BaseRepository[User]):
    """User repository. Lookups, insert from a domain entity, profile update, activation."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: str) -> UserResult:
        user = await self._get_model(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return _user_to_result(user)

    async def get_by_email(self, email: str) -> UserCredentials:
        result = await bounded(self.db.execute(select(User).where(User.email == email)))
        user = result.scalar_one_or_none()
        if user is None:
            raise ResourceNotFoundException("user", email)
        return UserCredentials(
            id=user.id,
            email=user.email,
            hashed_password=user.hashed_password,
            is_active=user.is_active,
        )

    async def exists(self, user_id: str) -> bool:
        return await self._exists(user_id)

    async def _role_named(self, name: str) -> Role:
        result = await bounded(self.db.execute(select(Role).where(Role.name == name)))
        role = result.scalar_one_or_none()
        if role is None:
            raise ResourceNotFoundException("role", name)
        return role

    async def create_user(self, entity: UserEntity) -> UserResult:
        """Insert user with entity.role; raise UserAlreadyExistsException on unique constraint violation."""
        role = await self._role_named(entity.role)
        user = User(
            id=entity.id,
            username=entity.username,
            email=entity.email,
            hashed_password=entity.hashed_password,
            is_active=entity.is_active,
            role=role,
        )
        try:
            created = await self._create(user)
        except IntegrityError as e:
            raise UserAlreadyExistsException() from e
        return _user_to_result(created)

    async def update_profile(
        self,
        user_id: str,
        username: str | None = None,
        email: str | None = None,
        hashed_password: str | None = None,
    ) -> UserResult:
        """Apply the given fields; raise UserAlreadyExistsException on a duplicate username/email."""
        user = await self._get_model(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        if username is not None:
            user.username = username
        if email is not None:
            user.email = email
        if hashed_password is not None:
            user.hashed_password = hashed_password
        try:
            await bounded(self.db.flush())
        except IntegrityError as e:
            raise UserAlreadyExistsException() from e
        await bounded(self.db.refresh(user))
        return _user_to_result(user)

    async def activate(self, user_id: str) -> None:
        user = await self._get_model(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        user.is_active = True
        await bounded(self.db.flush())

    async def delete_user(self, user_id: str) -> None:
        """Delete the user row; raise ResourceNotFoundException when nothing was deleted."""
        result = await bounded(self.db.execute(delete(User).where(User.id == user_id)))
        if result.rowcount == 0:
            raise ResourceNotFoundException("user", user_id)

    async def assign_role(self, user_id: str, role_name: str) -> UserResult:
        """Give the user the named role; ResourceNotFoundException for an unknown user or role."""
        user = await self._get_model(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        user.role = await self._role_named(role_name)
        await bounded(self.db.flush())
        return _user_to_result(user)
