"""
Domain error classes for the profile edit screen.

These error classes provide explicit, typed exceptions that the form maps to
user-visible outcomes: field annotations or a failure notification.
"""

from typing import Dict, Any, List


class DomainError(Exception):
    """
    Base class for all domain errors.
    
    Domain errors are explicit, expected failures that the form layer
    translates into UI state instead of letting them escape.
    """
    
    def __init__(self, code: str, message: str, details: Dict[str, Any] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}


class ValidationError(DomainError):
    """
    Raised when the submitted form data violates the profile schema.
    
    Details contain the ordered list of field-level violations under
    the 'errors' key, each a dict with 'field' and 'message'.
    """
    
    def __init__(self, message: str, errors: List[Dict[str, str]]):
        super().__init__('VALIDATION_ERROR', message, {'errors': errors})
    
    @property
    def errors(self) -> List[Dict[str, str]]:
        return self.details['errors']


class RemoteUpdateError(DomainError):
    """
    Raised when the profile update endpoint call fails.
    
    Covers transport failures and server-side rejections alike. Details may
    carry the HTTP status and the server's error body for logging; no
    field-level detail is derived from them.
    """
    
    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__('REMOTE_UPDATE_ERROR', message, details or {})


class ConfigurationError(DomainError):
    """Raised when required configuration is missing or malformed."""
    
    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__('CONFIGURATION_ERROR', message, details or {})
