"""Base repository: generic lookups and inserts shared by the concrete repositories."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base, bounded


class BaseRepository[ModelType: Base]:
    """Base repository with primary-key lookup, insert and delete.

    Every statement goes through bounded() so a slow store cannot hold a
    request past settings.store_timeout_seconds. Subclasses map ORM rows to
    application DTOs.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_model(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await bounded(
            self.db.execute(select(self.model).where(model.id == entity_id))
        )
        return result.scalar_one_or_none()

    async def _exists(self, entity_id: str) -> bool:
        model: Any = self.model
        result = await bounded(
            self.db.execute(select(model.id).where(model.id == entity_id))
        )
        return result.scalar_one_or_none() is not None

    async def _create(self, obj: ModelType) -> ModelType:
        """Persist a new record and reload server defaults (created_at, version)."""
        self.db.add(obj)
        await bounded(self.db.flush())
        await bounded(self.db.refresh(obj))
        return obj

    async def _delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await bounded(self.db.flush())
