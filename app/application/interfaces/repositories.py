"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.post import PostCreate, PostResult, PostUpdate
    from app.application.dtos.role import RoleResult
    from app.application.dtos.user import UserCredentials, UserResult


class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id(self, user_id: str) -> UserResult:
        """Return user by ID. Raises ResourceNotFoundException if missing."""

    async def get_by_email(self, email: str) -> UserCredentials:
        """Return login credentials by email. Raises ResourceNotFoundException if missing."""


class IPostRepository(Protocol):
    """Protocol for post repository (DIP)."""

    async def create_post(self, data: PostCreate) -> PostResult:
        """Insert a post at version 0."""

    async def get_by_id(self, post_id: str) -> PostResult:
        """Return post by ID. Raises ResourceNotFoundException if missing."""

    async def list_posts(
        self, user_id: str | None = None, skip: int = 0, limit: int = 20
    ) -> list[PostResult]:
        """Return posts newest first, optionally for a single author."""

    async def update_post(self, data: PostUpdate) -> PostResult:
        """Compare-and-swap on version; returns the post at version + 1.

        Raises VersionConflictException on a stale version and
        ResourceNotFoundException when the post no longer exists.
        """

    async def delete_post(self, post_id: str) -> None:
        """Delete post. Raises ResourceNotFoundException if missing."""


class IFollowerRepository(Protocol):
    """Protocol for follower edges (DIP)."""

    async def follow(self, user_id: str, follower_id: str) -> None:
        """follower_id starts following user_id. ConflictException if already following."""

    async def unfollow(self, user_id: str, follower_id: str) -> None:
        """Remove the edge. ResourceNotFoundException if it did not exist."""


class IRoleRepository(Protocol):
    """Protocol for role lookups (DIP)."""

    async def get_by_name(self, name: str) -> RoleResult:
        """Return role by name. Raises ResourceNotFoundException if missing."""
