"""
Shared type definitions for the profile edit screen.

This module defines TypedDict classes for form data, wire payloads and the
session user, plus literal types for notifications and submit outcomes.
"""

from typing import TypedDict, Literal, List, Dict, Optional

# Notification type literal
NotificationType = Literal['success', 'error']

# Result of a single submit attempt
SubmitOutcome = Literal['updated', 'invalid', 'failed']


class SessionUser(TypedDict, total=False):
    """Authenticated user as held by the session provider."""
    id: str
    name: str
    email: str
    avatar_url: Optional[str]


class ProfileFormData(TypedDict, total=False):
    """Flat record of form field values captured on submit."""
    name: str
    email: str
    old_password: str
    password: str
    password_confirmation: str


class UpdateProfilePayload(TypedDict, total=False):
    """
    Body of PUT profile.
    
    Password keys are present only when a password change is requested.
    """
    name: str
    email: str
    old_password: str
    password: str
    password_confirmation: str


class FieldError(TypedDict):
    """Single schema violation."""
    field: str
    message: str


# Mapping from field name to the single message displayed for it
FieldErrorMap = Dict[str, str]

ValidationFailure = List[FieldError]
