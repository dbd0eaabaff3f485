"""Pydantic request/response schemas for the API."""

from app.schemas.auth import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse
from app.schemas.health import HealthResponse, ReadinessErrorResponse, ReadinessResponse
from app.schemas.post import PostCreateRequest, PostResponse, PostUpdateRequest
from app.schemas.user import UserResponse, UserUpdate

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "PostCreateRequest",
    "PostResponse",
    "PostUpdateRequest",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "RegisterRequest",
    "RegisterResponse",
    "TokenResponse",
    "UserResponse",
    "UserUpdate",
]
