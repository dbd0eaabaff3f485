"""Shared utilities: datetime and generators."""

from app.shared.utils.datetime import ensure_utc, from_timestamp_utc, utc_now
from app.shared.utils.generators import generate_cuid, generate_invitation_token

__all__ = [
    "generate_cuid",
    "generate_invitation_token",
    "utc_now",
    "ensure_utc",
    "from_timestamp_utc",
]
