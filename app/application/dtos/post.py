"""DTOs for post use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class PostResult:
    """Post read-model. version is the optimistic-lock token for the next update."""

    id: str
    title: str
    content: str
    user_id: str
    version: int
    tags: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class PostCreate:
    """Input for creating a post."""

    title: str
    content: str
    user_id: str
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PostUpdate:
    """Versioned write: the new field values plus the version the caller loaded."""

    id: str
    title: str
    content: str
    tags: list[str]
    version: int
