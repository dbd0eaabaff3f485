"""Application DTOs (no ORM dependency)."""

from app.application.dtos.auth import AccessTokenResult, RegistrationResult
from app.application.dtos.post import PostCreate, PostResult, PostUpdate
from app.application.dtos.role import RoleResult
from app.application.dtos.user import UserCredentials, UserResult

__all__ = [
    "AccessTokenResult",
    "PostCreate",
    "PostResult",
    "PostUpdate",
    "RegistrationResult",
    "RoleResult",
    "UserCredentials",
    "UserResult",
]
