"""
Profile edit form.

This module implements the screen that lets the signed-in user change their
name, email and, optionally, their password. It owns the field values and
the displayed field errors and runs the submit workflow:

1. Clear displayed field errors
2. Validate the whole form (all violations collected)
3. Build the update payload (password fields only on a password change)
4. PUT profile
5. Replace the session user with the response body
6. Navigate to the dashboard and show a success notification

Validation failures become field annotations. Any other failure becomes a
single error notification; the form keeps its values so the user can retry.
"""

from typing import Any, Dict, List, Optional

from profile_shared.collaborators import ApiClient, Navigator, Notifier, SessionProvider
from profile_shared.config import ProfileConfig, default_config, load_config
from profile_shared.errors import RemoteUpdateError, ValidationError
from profile_shared.logger import create_logger
from profile_shared.metrics import MetricsClient, create_metrics_client
from profile_shared.types import FieldErrorMap, ProfileFormData, SubmitOutcome
from profile_edit.api_client import ProfileApiClient
from profile_edit.errors import get_validation_errors
from profile_edit.payload import build_update_payload
from profile_edit.validation import (
    PROFILE_FIELDS,
    check_profile_form,
    password_change_requested,
)


OPERATION = 'profile-update'
PROFILE_PATH = 'profile'

PAGE_TITLE = 'My profile'
SUBMIT_LABEL = 'Confirm changes'

SUCCESS_TITLE = 'Profile updated!'
SUCCESS_DESCRIPTION = 'Your profile information was updated successfully!'
FAILURE_TITLE = 'Update failed!'
FAILURE_DESCRIPTION = 'An error occurred while updating the profile, please try again.'

# Input descriptors in display order
FORM_LAYOUT = (
    {'name': 'name', 'type': 'text', 'icon': 'user', 'placeholder': 'Name'},
    {'name': 'email', 'type': 'email', 'icon': 'mail', 'placeholder': 'Email'},
    {'name': 'old_password', 'type': 'password', 'icon': 'lock', 'placeholder': 'Current password'},
    {'name': 'password', 'type': 'password', 'icon': 'lock', 'placeholder': 'New password'},
    {'name': 'password_confirmation', 'type': 'password', 'icon': 'lock', 'placeholder': 'Confirm password'},
)


class ProfileEditForm:
    """
    Editable profile form bound to its collaborators.
    
    Usage:
        form = ProfileEditForm(session, api, navigator, notifier)
        form.edit_field('name', 'Jane Doe')
        outcome = form.submit()
        if outcome == 'invalid':
            form.errors  # {'email': 'Enter a valid email'}
    """
    
    def __init__(
        self,
        session: SessionProvider,
        api: ApiClient,
        navigator: Navigator,
        notifier: Notifier,
        config: Optional[ProfileConfig] = None,
        metrics: Optional[MetricsClient] = None
    ):
        """
        Initialize the form from the current session user.
        
        Args:
            session: Session provider holding the signed-in user
            api: Remote API client
            navigator: Client-side navigation
            notifier: Toast notification service
            config: Resolved configuration; defaults apply when omitted
            metrics: Metrics client; created from config when metrics are enabled
        """
        self.session = session
        self.api = api
        self.navigator = navigator
        self.notifier = notifier
        self.config = config or default_config()
        
        if metrics is None and self.config['metrics_enabled']:
            metrics = create_metrics_client(
                OPERATION,
                namespace=self.config['metrics_namespace']
            )
        self.metrics = metrics
        
        self.values: Dict[str, Any] = {field: '' for field in PROFILE_FIELDS}
        self.values.update(self.initial_data)
        self.errors: FieldErrorMap = {}
    
    @property
    def initial_data(self) -> Dict[str, str]:
        user = self.session.user
        return {
            'name': user.get('name', ''),
            'email': user.get('email', ''),
        }
    
    def set_errors(self, errors: FieldErrorMap) -> None:
        """Replace the displayed field errors."""
        self.errors = dict(errors)
    
    def edit_field(self, field: str, value: Any) -> None:
        """
        Record a new value for a field and clear its displayed error.
        
        Raises:
            ValueError: If the field is not part of the form
        """
        if field not in PROFILE_FIELDS:
            raise ValueError(f"Unknown form field '{field}'")
        
        self.values[field] = value
        if field in self.errors:
            self.set_errors({k: v for k, v in self.errors.items() if k != field})
    
    def render(self) -> Dict[str, Any]:
        """Build the view model for the current form state."""
        user = self.session.user
        fields: List[Dict[str, Any]] = []
        for descriptor in FORM_LAYOUT:
            name = descriptor['name']
            fields.append({
                **descriptor,
                'value': self.values.get(name, ''),
                'error': self.errors.get(name),
            })
        
        return {
            'title': PAGE_TITLE,
            'back_link': self.config['dashboard_path'],
            'avatar': {
                'src': user.get('avatar_url'),
                'alt': user.get('name', ''),
            },
            'fields': fields,
            'submit_label': SUBMIT_LABEL,
        }
    
    def go_back(self) -> None:
        """Leave the form without submitting."""
        self.navigator.go_to(self.config['dashboard_path'])
    
    def submit(self, data: Optional[ProfileFormData] = None) -> SubmitOutcome:
        """
        Validate and send the profile update.
        
        Args:
            data: Field values to submit; the form's current values when omitted
            
        Returns:
            'updated' on success, 'invalid' when field errors were set,
            'failed' when the update could not be completed
        """
        if data is None:
            data = dict(self.values)
        else:
            self.values.update({k: v for k, v in data.items() if k in PROFILE_FIELDS})
        
        logger = create_logger(OPERATION, metrics=self.metrics)
        logger.log_submit_start(
            path=PROFILE_PATH,
            passwordChange=password_change_requested(data)
        )
        
        self.set_errors({})
        
        try:
            check_profile_form(data)
            
            payload = build_update_payload(data)
            response = self.api.put(PROFILE_PATH, payload)
            
            self.session.update_user(response.data)
            self.navigator.go_to(self.config['dashboard_path'])
            logger.log_info('navigated', path=self.config['dashboard_path'])
            self.notifier.notify('success', SUCCESS_TITLE, SUCCESS_DESCRIPTION)
            
            logger.log_submit_complete(
                statusCode=response.status_code,
                fields=sorted(payload)
            )
            return 'updated'
        
        except ValidationError as error:
            logger.log_validation_error(errors=error.errors)
            self.set_errors(get_validation_errors(error))
            return 'invalid'
        
        except RemoteUpdateError as error:
            logger.log_domain_error(
                error_code=error.code,
                error_message=error.message,
                details=error.details
            )
            self._notify_failure()
            return 'failed'
        
        except Exception as error:
            # Everything else collapses into the same generic failure
            logger.log_unexpected_error(
                error_type=type(error).__name__,
                error_message=str(error)
            )
            self._notify_failure()
            return 'failed'
        
        finally:
            logger.publish_metrics()
    
    def _notify_failure(self) -> None:
        self.notifier.notify('error', FAILURE_TITLE, FAILURE_DESCRIPTION)


def create_profile_form(
    session: SessionProvider,
    navigator: Navigator,
    notifier: Notifier,
    config: Optional[ProfileConfig] = None,
    token: Optional[str] = None
) -> ProfileEditForm:
    """
    Wire a form to a requests-backed API client.
    
    Configuration is loaded from the environment when not given, failing
    fast on missing variables.
    
    Raises:
        ConfigurationError: If the environment configuration is invalid
    """
    if config is None:
        config = load_config()
    
    api = ProfileApiClient(
        config['api_base_url'],
        token=token,
        timeout=config['api_timeout']
    )
    return ProfileEditForm(session, api, navigator, notifier, config=config)
