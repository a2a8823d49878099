"""Shared utilities for the profile edit screen."""

from .types import (
    NotificationType,
    SubmitOutcome,
    SessionUser,
    ProfileFormData,
    UpdateProfilePayload,
    FieldError,
    FieldErrorMap,
    ValidationFailure
)

from .errors import (
    DomainError,
    ValidationError,
    RemoteUpdateError,
    ConfigurationError
)

from .collaborators import (
    ApiResponse,
    SessionProvider,
    Notifier,
    ApiClient,
    Navigator,
    InMemorySessionProvider
)

__all__ = [
    # Types
    'NotificationType',
    'SubmitOutcome',
    'SessionUser',
    'ProfileFormData',
    'UpdateProfilePayload',
    'FieldError',
    'FieldErrorMap',
    'ValidationFailure',
    # Errors
    'DomainError',
    'ValidationError',
    'RemoteUpdateError',
    'ConfigurationError',
    # Collaborators
    'ApiResponse',
    'SessionProvider',
    'Notifier',
    'ApiClient',
    'Navigator',
    'InMemorySessionProvider',
]
