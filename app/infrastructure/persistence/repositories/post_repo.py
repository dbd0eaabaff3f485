"""Post repository with optimistic concurrency on version."""

from __future__ import annotations

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.post import PostCreate, PostResult, PostUpdate
from app.domain.exceptions import ResourceNotFoundException, VersionConflictException
from app.infrastructure.persistence.database import bounded
from app.infrastructure.persistence.models.post import Post
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _post_to_result(p: Post) -> PostResult:
    """Map ORM Post to application PostResult."""
    return PostResult(
        id=p.id,
        title=p.title,
        content=p.content,
        user_id=p.user_id,
        version=p.version,
        tags=list(p.tags or []),
        created_at=ensure_utc(p.created_at),
        updated_at=ensure_utc(p.updated_at),
    )


class PostRepository(BaseRepository[Post]):
    """Post CRUD. Updates are compare-and-swap on version; nothing is ever merged."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Post)

    async def create_post(self, data: PostCreate) -> PostResult:
        post = Post(
            title=data.title,
            content=data.content,
            user_id=data.user_id,
            tags=list(data.tags),
            version=0,
        )
        created = await self._create(post)
        return _post_to_result(created)

    async def get_by_id(self, post_id: str) -> PostResult:
        post = await self._get_model(post_id)
        if post is None:
            raise ResourceNotFoundException("post", post_id)
        return _post_to_result(post)

    async def list_posts(
        self, user_id: str | None = None, skip: int = 0, limit: int = 20
    ) -> list[PostResult]:
        stmt = select(Post)
        if user_id is not None:
            stmt = stmt.where(Post.user_id == user_id)
        stmt = stmt.order_by(Post.created_at.desc(), Post.id).offset(skip).limit(limit)
        result = await bounded(self.db.execute(stmt))
        return [_post_to_result(p) for p in result.scalars().all()]

    async def update_post(self, data: PostUpdate) -> PostResult:
        """Write the new fields only if the stored version still equals data.version.

        On success the stored version is data.version + 1. Zero affected rows
        means either the post is gone (ResourceNotFoundException) or another
        writer got there first (VersionConflictException).
        """
        stmt = (
            update(Post)
            .where(Post.id == data.id, Post.version == data.version)
            .values(
                title=data.title,
                content=data.content,
                tags=list(data.tags),
                version=Post.version + 1,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await bounded(self.db.execute(stmt))
        if result.rowcount == 0:
            if not await self._exists(data.id):
                raise ResourceNotFoundException("post", data.id)
            raise VersionConflictException("post", data.id, data.version)
        reloaded = await bounded(
            self.db.execute(
                select(Post)
                .where(Post.id == data.id)
                .execution_options(populate_existing=True)
            )
        )
        return _post_to_result(reloaded.scalar_one())

    async def delete_post(self, post_id: str) -> None:
        result = await bounded(self.db.execute(delete(Post).where(Post.id == post_id)))
        if result.rowcount == 0:
            raise ResourceNotFoundException("post", post_id)
