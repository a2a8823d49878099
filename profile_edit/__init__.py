"""Profile edit screen: form, validation schema and API client."""

from .validation import (
    ValidationRule,
    PROFILE_RULES,
    validate_profile_form,
    check_profile_form,
    validate_email_format,
    password_change_requested
)
from .errors import get_validation_errors
from .payload import build_update_payload
from .api_client import ProfileApiClient
from .form import ProfileEditForm, create_profile_form

__all__ = [
    'ValidationRule',
    'PROFILE_RULES',
    'validate_profile_form',
    'check_profile_form',
    'validate_email_format',
    'password_change_requested',
    'get_validation_errors',
    'build_update_payload',
    'ProfileApiClient',
    'ProfileEditForm',
    'create_profile_form',
]
