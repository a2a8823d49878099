"""Construction of the PUT profile request body."""

from profile_shared.types import ProfileFormData, UpdateProfilePayload
from profile_edit.validation import password_change_requested


PASSWORD_FIELDS = ('old_password', 'password', 'password_confirmation')


def build_update_payload(data: ProfileFormData) -> UpdateProfilePayload:
    """
    Build the update payload from validated form data.
    
    name and email are always sent. The three password fields are sent only
    when old_password is non-empty; otherwise they are left out entirely so
    the server never starts a password change.
    """
    payload: UpdateProfilePayload = {
        'name': data['name'],
        'email': data['email'],
    }
    
    if password_change_requested(data):
        for field in PASSWORD_FIELDS:
            payload[field] = data.get(field)
    
    return payload
