"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IFollowerRepository,
    IPostRepository,
    IUserRepository,
)
from app.application.interfaces.services import (
    IInvitationWorkflow,
    IMailer,
    IMailTemplateRenderer,
    IPasswordHasher,
    ITokenAuthenticator,
    IUserCache,
)

__all__ = [
    "IFollowerRepository",
    "IInvitationWorkflow",
    "IMailTemplateRenderer",
    "IMailer",
    "IPasswordHasher",
    "IPostRepository",
    "ITokenAuthenticator",
    "IUserCache",
    "IUserRepository",
]
