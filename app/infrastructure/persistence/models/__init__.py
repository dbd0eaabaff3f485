"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.follower import Follower
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    TimestampMixin,
    VersionedMixin,
)
from app.infrastructure.persistence.models.post import Post
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.models.user_invitation import UserInvitation

__all__ = [
    "CreatedAtMixin",
    "CuidMixin",
    "Follower",
    "Post",
    "Role",
    "TimestampMixin",
    "User",
    "UserInvitation",
    "VersionedMixin",
]
