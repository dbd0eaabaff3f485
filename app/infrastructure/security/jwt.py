"""JWT bearer token issuance and verification.

Tokens are stateless: there is no revocation list, so ``exp`` is the only
hard lifetime bound. The signing algorithm is pinned to HS256 and tokens
declaring any other algorithm are rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, cast

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from app.domain.exceptions import AuthenticationException, SigningException
from app.shared.utils.datetime import from_timestamp_utc, utc_now

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ("sub", "iat", "nbf", "exp", "iss", "aud")

_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_aud": True,
    "verify_iat": True,
    "verify_exp": True,
    "verify_nbf": True,
    "verify_iss": True,
    "verify_sub": True,
    "require_aud": True,
    "require_iat": True,
    "require_exp": True,
    "require_nbf": True,
    "require_iss": True,
    "require_sub": True,
    "leeway": 0,
}


@dataclass(frozen=True)
class TokenClaims:
    """Verified claims of a bearer token."""

    subject: str
    issuer: str
    audience: str
    issued_at: datetime
    not_before: datetime
    expires_at: datetime


class JWTAuthenticator:
    """Issues and verifies signed, expiring, issuer/audience-scoped bearer tokens.

    The secret, expected issuer and expected audience are immutable after
    construction; there is no module-level access to the signing key.
    """

    def __init__(self, secret: str, issuer: str, audience: str) -> None:
        self._secret = secret
        self._issuer = issuer
        self._audience = audience

    @property
    def issuer(self) -> str:
        return self._issuer

    @property
    def audience(self) -> str:
        return self._audience

    def issue(
        self,
        subject: str,
        issuer: str,
        audience: str,
        ttl: timedelta,
    ) -> str:
        """Create a signed token for subject.

        Args:
            subject: User id placed in ``sub``.
            issuer: Value for ``iss``.
            audience: Value for ``aud``.
            ttl: Lifetime; ``exp`` = now + ttl.

        Returns:
            Encoded JWT string.

        Raises:
            SigningException: If the signing key is unusable.
        """
        if not self._secret:
            raise SigningException("Signing key is not configured")
        now = utc_now()
        claims: dict[str, Any] = {
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "nbf": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            "iss": issuer,
            "aud": audience,
        }
        try:
            encoded = jwt.encode(claims, self._secret, algorithm=ALGORITHM)
        except JWTError as e:
            raise SigningException(f"Token signing failed: {e!s}") from e
        return cast(str, encoded)

    def verify(self, token: str) -> TokenClaims:
        """Verify signature, algorithm, time window, issuer and audience.

        Pure: never contacts the store.

        Raises:
            AuthenticationException: With a ``reason`` detail describing the
                rejection (algorithm, expired, claims, invalid, malformed).
        """
        if not token:
            raise AuthenticationException("Invalid token", reason="missing")
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise AuthenticationException("Invalid token", reason="malformed") from e
        if header.get("alg") != ALGORITHM:
            raise AuthenticationException("Invalid token", reason="algorithm")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options=_DECODE_OPTIONS,
            )
        except ExpiredSignatureError as e:
            raise AuthenticationException("Token has expired", reason="expired") from e
        except JWTClaimsError as e:
            raise AuthenticationException("Invalid token", reason="claims") from e
        except JWTError as e:
            raise AuthenticationException("Invalid token", reason="invalid") from e

        missing = [claim for claim in REQUIRED_CLAIMS if claim not in payload]
        if missing:
            raise AuthenticationException("Invalid token", reason="claims")
        audience = payload["aud"]
        if isinstance(audience, list):
            audience = audience[0] if len(audience) == 1 else self._audience
        return TokenClaims(
            subject=str(payload["sub"]),
            issuer=str(payload["iss"]),
            audience=str(audience),
            issued_at=from_timestamp_utc(payload["iat"]),
            not_before=from_timestamp_utc(payload["nbf"]),
            expires_at=from_timestamp_utc(payload["exp"]),
        )
