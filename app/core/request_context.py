"""Request context for log correlation.

RequestIDMiddleware sets the current request id in this context variable so
that every log record emitted while handling the request carries it.
"""

from contextvars import ContextVar, Token

# Current request ID (set by middleware, read by the logging filter).
current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None
)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Set the current request ID for this context; return the reset token."""
    return current_request_id.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    current_request_id.reset(token)


def get_request_id() -> str | None:
    """Return the current request ID if set."""
    return current_request_id.get()
