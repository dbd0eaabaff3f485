"""Post use cases: create, read, versioned update and delete with moderation checks."""

from __future__ import annotations

from app.application.dtos.post import PostCreate, PostResult, PostUpdate
from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import IPostRepository
from app.application.services.authorization_service import AuthorizationService
from app.core.constants import ROLE_ADMIN, ROLE_MODERATOR
from app.domain.exceptions import ValidationException


class PostService:
    """Post operations.

    The author may update or delete their post. Otherwise updating needs the
    moderator role (or higher) and deleting needs the admin role.
    """

    def __init__(self, post_repo: IPostRepository, authorizer: AuthorizationService) -> None:
        self.post_repo = post_repo
        self.authorizer = authorizer

    async def create_post(
        self, user_id: str, title: str, content: str, tags: list[str] | None = None
    ) -> PostResult:
        return await self.post_repo.create_post(
            PostCreate(title=title, content=content, user_id=user_id, tags=list(tags or []))
        )

    async def get_post(self, post_id: str) -> PostResult:
        return await self.post_repo.get_by_id(post_id)

    async def list_posts(
        self, user_id: str | None = None, skip: int = 0, limit: int = 20
    ) -> list[PostResult]:
        return await self.post_repo.list_posts(user_id=user_id, skip=skip, limit=limit)

    async def update_post(
        self,
        post_id: str,
        actor: UserResult,
        *,
        title: str | None = None,
        content: str | None = None,
        tags: list[str] | None = None,
        version: int | None = None,
    ) -> PostResult:
        """Apply a partial update.

        version is the version the client loaded; when omitted the version
        read here is used, so a concurrent writer between this read and the
        write still loses the compare-and-swap.

        Raises:
            ResourceNotFoundException: Post does not exist.
            AuthorizationException: actor is neither the author nor a moderator.
            VersionConflictException: Stored version differs from version.
        """
        if title is None and content is None and tags is None:
            raise ValidationException("At least one of title, content or tags is required")
        current = await self.post_repo.get_by_id(post_id)
        await self.authorizer.require_owner_or_role(
            actor, current.user_id, ROLE_MODERATOR, resource="post", action="update"
        )
        return await self.post_repo.update_post(
            PostUpdate(
                id=post_id,
                title=title if title is not None else current.title,
                content=content if content is not None else current.content,
                tags=list(tags) if tags is not None else list(current.tags),
                version=version if version is not None else current.version,
            )
        )

    async def delete_post(self, post_id: str, actor: UserResult) -> None:
        current = await self.post_repo.get_by_id(post_id)
        await self.authorizer.require_owner_or_role(
            actor, current.user_id, ROLE_ADMIN, resource="post", action="delete"
        )
        await self.post_repo.delete_post(post_id)
