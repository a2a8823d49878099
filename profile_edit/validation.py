"""
Profile edit form validation.

This module implements the declarative schema for the profile edit form.
The schema is an ordered table of rules; every active rule is evaluated so
the form can highlight all invalid fields at once.

Validates:
- name is present
- email is present and well formed
- password and password_confirmation, only when old_password is filled in:
  at least 6 characters, present, and equal to each other
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from profile_shared.errors import ValidationError
from profile_shared.types import FieldError


# Email regex pattern (RFC 5322 simplified)
EMAIL_PATTERN = re.compile(
    r'^[a-zA-Z0-9.!#$%&\'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$'
)

MIN_PASSWORD_LENGTH = 6

PROFILE_FIELDS = (
    'name',
    'email',
    'old_password',
    'password',
    'password_confirmation',
)

NAME_REQUIRED = 'Name is required'
EMAIL_REQUIRED = 'Email is required'
EMAIL_INVALID = 'Enter a valid email'
PASSWORD_TOO_SHORT = f'Minimum of {MIN_PASSWORD_LENGTH} characters'
PASSWORD_REQUIRED = 'New password is required'
CONFIRMATION_REQUIRED = 'Password confirmation is required'
CONFIRMATION_MISMATCH = 'Password confirmation does not match'

Values = Dict[str, Any]


def validate_email_format(email: Any) -> bool:
    """
    Check whether a value is a syntactically valid email address.
    
    Examples:
        >>> validate_email_format('user@example.com')
        True
        >>> validate_email_format('user@')
        False
    """
    if not isinstance(email, str) or not email:
        return False
    return EMAIL_PATTERN.match(email) is not None


def password_change_requested(data: Values) -> bool:
    """True when the user filled in their current password."""
    old_password = data.get('old_password')
    return isinstance(old_password, str) and len(old_password) > 0


def _always(values: Values) -> bool:
    return True


@dataclass(frozen=True)
class ValidationRule:
    """
    A single field constraint.
    
    ``predicate`` receives the field value and all form values and returns
    True when the value is acceptable. The rule is skipped entirely unless
    ``active_when`` returns True for the form values.
    """
    
    field: str
    predicate: Callable[[str, Values], bool]
    message: str
    active_when: Callable[[Values], bool] = _always


PROFILE_RULES: Tuple[ValidationRule, ...] = (
    ValidationRule('name', lambda v, _: bool(v), NAME_REQUIRED),
    ValidationRule('email', lambda v, _: bool(v), EMAIL_REQUIRED),
    # Empty email is reported by the required rule only
    ValidationRule('email', lambda v, _: not v or validate_email_format(v), EMAIL_INVALID),
    # Type check only; an empty old_password means no password change
    ValidationRule('old_password', lambda v, _: True, ''),
    ValidationRule(
        'password',
        lambda v, _: len(v) >= MIN_PASSWORD_LENGTH,
        PASSWORD_TOO_SHORT,
        password_change_requested
    ),
    ValidationRule('password', lambda v, _: bool(v), PASSWORD_REQUIRED, password_change_requested),
    ValidationRule(
        'password_confirmation',
        lambda v, _: len(v) >= MIN_PASSWORD_LENGTH,
        PASSWORD_TOO_SHORT,
        password_change_requested
    ),
    ValidationRule(
        'password_confirmation',
        lambda v, _: bool(v),
        CONFIRMATION_REQUIRED,
        password_change_requested
    ),
    ValidationRule(
        'password_confirmation',
        lambda v, values: v == values.get('password'),
        CONFIRMATION_MISMATCH,
        password_change_requested
    ),
)


def _normalize(data: Values) -> Values:
    # Missing keys and None read as empty strings
    values = {}
    for field in PROFILE_FIELDS:
        value = data.get(field)
        values[field] = '' if value is None else value
    return values


def validate_profile_form(
    data: Values,
    rules: Tuple[ValidationRule, ...] = PROFILE_RULES
) -> List[FieldError]:
    """
    Validate profile form data against the schema.
    
    Every active rule is evaluated; validation never stops at the first
    failure. A field holding a non-string value gets a single type error and
    none of its other rules run.
    
    Args:
        data: Flat record of form field values
        rules: Ordered rule table
        
    Returns:
        Ordered list of validation errors. Empty list if validation passes.
        Each error is a dict with 'field' and 'message' keys.
        
    Examples:
        >>> validate_profile_form({'name': 'Jane', 'email': 'jane@example.com'})
        []
        
        >>> validate_profile_form({
        ...     'name': 'Jane',
        ...     'email': 'jane@example.com',
        ...     'old_password': 'secret1',
        ...     'password': '123',
        ...     'password_confirmation': '123'
        ... })
        [{'field': 'password', 'message': 'Minimum of 6 characters'}, {'field': 'password_confirmation', 'message': 'Minimum of 6 characters'}]
    """
    values = _normalize(data)
    errors: List[FieldError] = []
    mistyped = set()
    
    for rule in rules:
        if not rule.active_when(values):
            continue
        
        value = values.get(rule.field, '')
        if not isinstance(value, str):
            if rule.field not in mistyped:
                mistyped.add(rule.field)
                errors.append({
                    'field': rule.field,
                    'message': f"{rule.field.replace('_', ' ').capitalize()} must be a string"
                })
            continue
        
        if not rule.predicate(value, values):
            errors.append({'field': rule.field, 'message': rule.message})
    
    return errors


def check_profile_form(data: Values) -> None:
    """
    Validate profile form data, raising on failure.
    
    Raises:
        ValidationError: With the ordered violations in ``errors``
    """
    errors = validate_profile_form(data)
    if errors:
        raise ValidationError('Invalid profile data', errors)
