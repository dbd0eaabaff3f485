"""Domain exceptions for the social API core.

Defines domain-level exceptions that represent business rule violations
and failures of the core's collaborators. These exceptions are independent
of infrastructure concerns. Presentation layer maps them to HTTP responses
in exception handlers.
"""

from typing import Any


class SocialException(Exception):
    """Base exception for all application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(SocialException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(SocialException):
    """Raised when authentication fails (bad credentials, bad or mis-scoped token).

    ``reason`` is kept in details for logging; the message stays generic so
    callers cannot tell which part of the credential was wrong.
    """

    def __init__(
        self, message: str = "Authentication failed", reason: str | None = None
    ) -> None:
        """Initialize with optional message and machine-readable reason.

        Args:
            message: Description of the authentication failure.
            reason: Optional reason code (e.g. 'expired', 'audience').
        """
        details = {"reason": reason} if reason else {}
        super().__init__(message, "AUTHENTICATION_ERROR", details)


class AuthorizationException(SocialException):
    """Raised when the user lacks permission for the operation (e.g. not the owner)."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'post', 'user').
            action: Optional action that was attempted (e.g. 'update').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(SocialException):
    """Raised when a requested resource is not found.

    Also covers invalid, used, or expired invitation tokens; those cases are
    deliberately indistinguishable.
    """

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'user', 'post').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(SocialException):
    """Raised on a unique-constraint violation (e.g. duplicate follow)."""

    def __init__(
        self,
        message: str = "Resource already exists",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "CONFLICT", details)


class UserAlreadyExistsException(ConflictException):
    """Raised when creating a user whose username or email already exists."""

    def __init__(self) -> None:
        """Initialize with a generic message (username/email duplicate)."""
        super().__init__("Username or email already registered")
        self.error_code = "USER_ALREADY_EXISTS"


class VersionConflictException(SocialException):
    """Raised when a versioned write lost the race (optimistic lock).

    The row exists but its stored version no longer matches the version the
    caller loaded. Clients should re-read and retry.
    """

    def __init__(self, resource_type: str, resource_id: str, expected_version: int) -> None:
        super().__init__(
            f"{resource_type} was updated by another request; retry.",
            "VERSION_CONFLICT",
            {
                "resource_type": resource_type,
                "resource_id": resource_id,
                "expected_version": expected_version,
            },
        )


class PersistenceException(SocialException):
    """Raised when a transaction or the database infrastructure fails."""

    def __init__(self, operation: str, reason: str | None = None) -> None:
        details: dict[str, Any] = {"operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(
            f"Persistence failure during {operation}",
            "PERSISTENCE_ERROR",
            details,
        )


class HashingException(SocialException):
    """Raised when the password hashing primitive fails."""

    def __init__(self, message: str = "Password hashing failed") -> None:
        super().__init__(message, "HASHING_ERROR")


class SigningException(SocialException):
    """Raised when a token cannot be signed (e.g. unusable signing key)."""

    def __init__(self, message: str = "Token signing failed") -> None:
        super().__init__(message, "SIGNING_ERROR")


class MailDeliveryException(SocialException):
    """Raised when the mail collaborator fails to deliver a message."""

    def __init__(self, message: str = "Failed to send email", reason: str | None = None) -> None:
        details = {"reason": reason} if reason else {}
        super().__init__(message, "MAIL_DELIVERY_ERROR", details)


class CompensationFailedException(SocialException):
    """Raised when a compensating action itself fails.

    The system may hold partial state (e.g. an unnotified, inactive user)
    that needs operational attention.
    """

    def __init__(self, step: str, original_error: str, compensation_error: str) -> None:
        super().__init__(
            f"Compensation failed for step '{step}'",
            "COMPENSATION_FAILED",
            {
                "step": step,
                "original_error": original_error,
                "compensation_error": compensation_error,
            },
        )
