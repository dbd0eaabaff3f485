"""Domain layer: entities and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import UserEntity
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CompensationFailedException,
    ConflictException,
    HashingException,
    MailDeliveryException,
    PersistenceException,
    ResourceNotFoundException,
    SigningException,
    SocialException,
    UserAlreadyExistsException,
    ValidationException,
    VersionConflictException,
)

__all__ = [
    # Entities
    "UserEntity",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "CompensationFailedException",
    "ConflictException",
    "HashingException",
    "MailDeliveryException",
    "PersistenceException",
    "ResourceNotFoundException",
    "SigningException",
    "SocialException",
    "UserAlreadyExistsException",
    "ValidationException",
    "VersionConflictException",
]
