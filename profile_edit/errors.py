"""Conversion of schema violations into per-field display messages."""

from typing import Union

from profile_shared.errors import ValidationError
from profile_shared.types import FieldErrorMap, ValidationFailure


def get_validation_errors(
    failure: Union[ValidationError, ValidationFailure]
) -> FieldErrorMap:
    """
    Map each failing field to the message to display for it.
    
    Violations are applied in order, so when a field appears more than once
    the last message wins.
    
    Args:
        failure: A ValidationError or its ordered list of violations
        
    Returns:
        Dictionary of field name to message; empty for no violations
        
    Example:
        >>> get_validation_errors([
        ...     {'field': 'email', 'message': 'invalid'},
        ...     {'field': 'email', 'message': 'required'}
        ... ])
        {'email': 'required'}
    """
    if isinstance(failure, ValidationError):
        failure = failure.errors
    
    field_errors: FieldErrorMap = {}
    for error in failure:
        field_errors[error['field']] = error['message']
    return field_errors
