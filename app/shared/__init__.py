"""Shared utilities: telemetry (logging) and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.utils import (
    ensure_utc,
    from_timestamp_utc,
    generate_cuid,
    generate_invitation_token,
    utc_now,
)

__all__ = [
    "generate_cuid",
    "generate_invitation_token",
    "utc_now",
    "ensure_utc",
    "from_timestamp_utc",
]
