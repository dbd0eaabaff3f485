"""Persistence repositories: data access for the relational store."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.follower_repo import FollowerRepository
from app.infrastructure.persistence.repositories.invitation_repo import (
    InvitationRepository,
)
from app.infrastructure.persistence.repositories.post_repo import PostRepository
from app.infrastructure.persistence.repositories.role_repo import RoleRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "FollowerRepository",
    "InvitationRepository",
    "PostRepository",
    "RoleRepository",
    "UserRepository",
]
