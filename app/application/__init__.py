"""Application layer: interfaces, DTOs and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repos, cache, mail, tokens).
"""

from app.application.interfaces import (
    IFollowerRepository,
    IInvitationWorkflow,
    IMailer,
    IMailTemplateRenderer,
    IPasswordHasher,
    IPostRepository,
    ITokenAuthenticator,
    IUserCache,
    IUserRepository,
)
from app.application.services.auth_service import AuthService
from app.application.services.post_service import PostService
from app.application.services.registration_service import RegistrationService

__all__ = [
    "AuthService",
    "IFollowerRepository",
    "IInvitationWorkflow",
    "IMailTemplateRenderer",
    "IMailer",
    "IPasswordHasher",
    "IPostRepository",
    "ITokenAuthenticator",
    "IUserCache",
    "IUserRepository",
    "PostService",
    "RegistrationService",
]
