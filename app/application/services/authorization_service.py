"""Authorization service: ownership and role-precedence checks."""

from __future__ import annotations

from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import IRoleRepository
from app.domain.exceptions import AuthorizationException


class AuthorizationService:
    """Roles are ordered by level; a user holds every role at or below their own level."""

    def __init__(self, role_repo: IRoleRepository) -> None:
        self.role_repo = role_repo

    async def has_role_at_least(self, actor: UserResult, role_name: str) -> bool:
        """Return True if actor's role level is >= the named role's level.

        Raises ResourceNotFoundException when role_name is not a known role.
        """
        required = await self.role_repo.get_by_name(role_name)
        return actor.role_level >= required.level

    async def require_owner_or_role(
        self,
        actor: UserResult,
        owner_id: str,
        role_name: str,
        *,
        resource: str,
        action: str,
    ) -> None:
        """Raise AuthorizationException unless actor owns the resource or outranks role_name."""
        if actor.id == owner_id:
            return
        if not await self.has_role_at_least(actor, role_name):
            raise AuthorizationException(resource=resource, action=action)
