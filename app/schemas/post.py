"""Post API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreateRequest(BaseModel):
    """Request body for creating a post."""

    title: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1, max_length=1000)
    tags: list[str] = Field(default_factory=list)


class PostUpdateRequest(BaseModel):
    """Request body for a partial post update.

    version is the version the client last read; omit it to update against
    the version currently stored.
    """

    title: str | None = Field(default=None, min_length=1, max_length=100)
    content: str | None = Field(default=None, min_length=1, max_length=1000)
    tags: list[str] | None = None
    version: int | None = Field(default=None, ge=0)


class PostResponse(BaseModel):
    """Post response including the optimistic-lock version."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    user_id: str
    tags: list[str]
    version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
