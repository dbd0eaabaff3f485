"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions and application use cases.
All use cases are built from infrastructure implementations here;
routes depend only on these dependencies, not on infra directly.

Process-wide collaborators (user cache, mailer) are created in
app.core.lifespan and read from app.state; when the lifespan has not run
(e.g. some tests) the no-op cache and a settings-selected mailer are used.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.user import UserResult
from app.application.interfaces.services import (
    IInvitationWorkflow,
    IMailer,
    IPasswordHasher,
    ITokenAuthenticator,
    IUserCache,
)
from app.application.services.auth_service import AuthService
from app.application.services.authorization_service import AuthorizationService
from app.application.services.post_service import PostService
from app.application.services.registration_service import RegistrationService
from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException, ResourceNotFoundException
from app.infrastructure.cache.user_cache import NullUserCache
from app.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
    get_session_factory,
)
from app.infrastructure.persistence.repositories import (
    PostRepository,
    RoleRepository,
    UserRepository,
)
from app.infrastructure.security.jwt import JWTAuthenticator
from app.infrastructure.security.password import BcryptPasswordHasher
from app.infrastructure.services import (
    InvitationWorkflow,
    MailTemplateRenderer,
    UserAccountService,
    build_mailer,
)

_http_bearer = HTTPBearer(auto_error=False)


def get_session_factory_dep() -> async_sessionmaker[AsyncSession]:
    """Session factory for services that own their transactions."""
    return get_session_factory()


def get_authenticator() -> ITokenAuthenticator:
    """Token authenticator configured from settings (secret, issuer, audience)."""
    settings = get_settings()
    return JWTAuthenticator(
        settings.secret_key.get_secret_value(),
        issuer=settings.token_issuer,
        audience=settings.token_audience,
    )


def get_password_hasher() -> IPasswordHasher:
    return BcryptPasswordHasher()


def get_user_cache(request: Request) -> IUserCache:
    """User cache selected at startup (Redis or no-op)."""
    cache = getattr(request.app.state, "user_cache", None)
    return cache if cache is not None else NullUserCache()


def get_mailer(request: Request) -> IMailer:
    mailer = getattr(request.app.state, "mailer", None)
    return mailer if mailer is not None else build_mailer(get_settings())


def get_invitation_workflow(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory_dep)],
) -> IInvitationWorkflow:
    return InvitationWorkflow(session_factory)


def get_registration_service(
    workflow: Annotated[IInvitationWorkflow, Depends(get_invitation_workflow)],
    mailer: Annotated[IMailer, Depends(get_mailer)],
    hasher: Annotated[IPasswordHasher, Depends(get_password_hasher)],
    cache: Annotated[IUserCache, Depends(get_user_cache)],
) -> RegistrationService:
    """Registration saga with the configured mailer and invitation lifetime."""
    settings = get_settings()
    return RegistrationService(
        workflow,
        mailer,
        MailTemplateRenderer(app_name=settings.app_name),
        hasher,
        frontend_url=settings.frontend_url,
        invitation_ttl=timedelta(hours=settings.invitation_expire_hours),
        cache=cache,
    )


def get_user_account_service(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory_dep)],
    cache: Annotated[IUserCache, Depends(get_user_cache)],
    workflow: Annotated[IInvitationWorkflow, Depends(get_invitation_workflow)],
    hasher: Annotated[IPasswordHasher, Depends(get_password_hasher)],
) -> UserAccountService:
    return UserAccountService(session_factory, cache, workflow, hasher)


def get_auth_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    hasher: Annotated[IPasswordHasher, Depends(get_password_hasher)],
    authenticator: Annotated[ITokenAuthenticator, Depends(get_authenticator)],
) -> AuthService:
    settings = get_settings()
    return AuthService(
        UserRepository(db),
        hasher,
        authenticator,
        token_ttl=timedelta(minutes=settings.access_token_expire_minutes),
    )


def get_post_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> PostService:
    """Post service bound to the request transaction (commit on success)."""
    return PostService(PostRepository(db), AuthorizationService(RoleRepository(db)))


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    authenticator: Annotated[ITokenAuthenticator, Depends(get_authenticator)],
    accounts: Annotated[UserAccountService, Depends(get_user_account_service)],
) -> UserResult:
    """Return the active user named by the bearer token; raise 401 otherwise."""
    if credentials is None:
        raise AuthenticationException("Not authenticated", reason="missing")
    claims = authenticator.verify(credentials.credentials)
    try:
        user = await accounts.get_user(claims.subject)
    except ResourceNotFoundException:
        raise AuthenticationException("Not authenticated", reason="unknown_user") from None
    if not user.is_active:
        raise AuthenticationException("Not authenticated", reason="inactive")
    return user
