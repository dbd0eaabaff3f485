"""Application services: registration saga, login, posts."""

from app.application.services.auth_service import AuthService
from app.application.services.post_service import PostService
from app.application.services.registration_service import RegistrationService
from app.application.services.saga import Saga, SagaStep

__all__ = [
    "AuthService",
    "PostService",
    "RegistrationService",
    "Saga",
    "SagaStep",
]
