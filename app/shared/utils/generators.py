"""ID and secret generators (CUID ids, one-time invitation tokens)."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

# 32 random bytes -> 43 url-safe characters; unguessable and safe in a URL path.
INVITATION_TOKEN_BYTES = 32


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_invitation_token() -> str:
    """Return a fresh plaintext invitation token (URL-safe, CSPRNG-backed)."""
    return secrets.token_urlsafe(INVITATION_TOKEN_BYTES)
