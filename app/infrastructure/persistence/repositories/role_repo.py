"""Role repository: lookups by name and seeding of the built-in roles."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.role import RoleResult
from app.core.constants import DEFAULT_ROLES
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.database import bounded
from app.infrastructure.persistence.models.role import Role


def _role_to_result(r: Role) -> RoleResult:
    return RoleResult(id=r.id, name=r.name, level=r.level, description=r.description)


class RoleRepository:
    """Roles are keyed by name in the API; ids only exist for the user FK."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get_model_by_name(self, name: str) -> Role | None:
        result = await bounded(self.db.execute(select(Role).where(Role.name == name)))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> RoleResult:
        role = await self._get_model_by_name(name)
        if role is None:
            raise ResourceNotFoundException("role", name)
        return _role_to_result(role)

    async def list_roles(self) -> list[RoleResult]:
        result = await bounded(self.db.execute(select(Role).order_by(Role.level)))
        return [_role_to_result(r) for r in result.scalars().all()]

    async def ensure_defaults(self) -> int:
        """Insert any missing built-in role. Returns how many were added."""
        added = 0
        for name, level, description in DEFAULT_ROLES:
            if await self._get_model_by_name(name) is None:
                self.db.add(Role(name=name, level=level, description=description))
                added += 1
        if added:
            await bounded(self.db.flush())
        return added
