"""Login: verify credentials by email and issue a bearer token."""

from __future__ import annotations

import asyncio
from datetime import timedelta

from app.application.dtos.auth import AccessTokenResult
from app.application.interfaces.repositories import IUserRepository
from app.application.interfaces.services import IPasswordHasher, ITokenAuthenticator
from app.domain.exceptions import AuthenticationException, ResourceNotFoundException


class AuthService:
    """Exchanges email + password for a signed access token.

    Unknown email, inactive account and wrong password all fail with the same
    generic message. A dummy hash is verified when the email is unknown so
    response time does not reveal which case occurred.
    """

    _dummy_hash: str | None = None

    def __init__(
        self,
        user_repo: IUserRepository,
        hasher: IPasswordHasher,
        authenticator: ITokenAuthenticator,
        token_ttl: timedelta,
    ) -> None:
        self.user_repo = user_repo
        self.hasher = hasher
        self.authenticator = authenticator
        self.token_ttl = token_ttl

    async def _get_dummy_hash(self) -> str:
        """Return a valid hash for dummy comparison; computed once in a thread."""
        if AuthService._dummy_hash is None:
            AuthService._dummy_hash = await asyncio.to_thread(
                self.hasher.hash, "not-a-real-password"
            )
        return AuthService._dummy_hash

    async def login(self, email: str, password: str) -> AccessTokenResult:
        try:
            user = await self.user_repo.get_by_email(email)
        except ResourceNotFoundException:
            dummy_hash = await self._get_dummy_hash()
            await asyncio.to_thread(self.hasher.verify, password, dummy_hash)
            raise AuthenticationException("Invalid credentials", reason="credentials") from None
        matches = await asyncio.to_thread(self.hasher.verify, password, user.hashed_password)
        if not matches or not user.is_active:
            raise AuthenticationException("Invalid credentials", reason="credentials")
        token = self.authenticator.issue(
            user.id,
            self.authenticator.issuer,
            self.authenticator.audience,
            self.token_ttl,
        )
        return AccessTokenResult(access_token=token)
