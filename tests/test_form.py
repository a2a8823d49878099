"""
Unit tests for the profile edit form workflow.
Collaborators are in-memory fakes from conftest.
"""

import json
from unittest.mock import MagicMock

import pytest

from profile_shared.config import default_config
from profile_shared.errors import ConfigurationError
from profile_shared.metrics import MetricsClient
from profile_edit.api_client import ProfileApiClient
from profile_edit.form import (
    FAILURE_DESCRIPTION,
    FAILURE_TITLE,
    PROFILE_PATH,
    SUCCESS_DESCRIPTION,
    SUCCESS_TITLE,
    ProfileEditForm,
    create_profile_form,
)
from profile_edit.validation import EMAIL_INVALID, NAME_REQUIRED


@pytest.fixture
def form(session, api, navigator, notifier):
    return ProfileEditForm(session, api, navigator, notifier)


class TestInitialState:
    """Test the form before any interaction."""
    
    def test_prefilled_from_session(self, form):
        assert form.initial_data == {'name': 'Jane Doe', 'email': 'jane@example.com'}
        assert form.values['old_password'] == ''
        assert form.values['password'] == ''
        assert form.values['password_confirmation'] == ''
        assert form.errors == {}
    
    def test_render(self, form):
        view = form.render()
        
        assert view['avatar'] == {
            'src': 'https://cdn.example.com/avatars/jane.png',
            'alt': 'Jane Doe',
        }
        assert view['back_link'] == '/dashboard'
        assert [f['name'] for f in view['fields']] == [
            'name', 'email', 'old_password', 'password', 'password_confirmation'
        ]
        assert view['fields'][0]['value'] == 'Jane Doe'
        assert [f['type'] for f in view['fields'][2:]] == ['password'] * 3
    
    def test_go_back(self, form, navigator, api):
        form.go_back()
        assert navigator.visited == ['/dashboard']
        assert api.calls == []


class TestSubmitSuccess:
    """Test the happy path."""
    
    def test_update_without_password_change(self, form, valid_form_data, api, session, navigator, notifier):
        """Test a valid submit sends name and email only, then updates session."""
        outcome = form.submit(valid_form_data)
        
        assert outcome == 'updated'
        assert api.calls == [{
            'path': PROFILE_PATH,
            'body': {'name': 'Jane Smith', 'email': 'jane.smith@example.com'},
        }]
        assert session.user['name'] == 'Jane Smith'
        assert session.user['email'] == 'jane.smith@example.com'
        assert navigator.visited == ['/dashboard']
        assert notifier.notifications == [{
            'type': 'success',
            'title': SUCCESS_TITLE,
            'description': SUCCESS_DESCRIPTION,
        }]
        assert form.errors == {}
    
    def test_update_with_password_change(self, form, password_change_data, api):
        """Test password fields are sent when old_password is filled in."""
        assert form.submit(password_change_data) == 'updated'
        assert set(api.calls[0]['body']) == {
            'name', 'email', 'old_password', 'password', 'password_confirmation'
        }
    
    def test_session_replaced_with_response(self, session, navigator, notifier, valid_form_data, make_api):
        """Test the response body replaces the session user wholesale."""
        server_user = {'id': 'user-123', 'name': 'Server Name', 'email': 's@example.com', 'avatar_url': None}
        form = ProfileEditForm(session, make_api(response_data=server_user), navigator, notifier)
        
        form.submit(valid_form_data)
        
        assert session.user == server_user
        assert session.history == [server_user]
    
    def test_submit_current_values(self, form, api):
        """Test submitting without data uses the edited values."""
        form.edit_field('name', 'Janet')
        assert form.submit() == 'updated'
        assert api.calls[0]['body'] == {'name': 'Janet', 'email': 'jane@example.com'}
    
    def test_navigation_logged(self, form, valid_form_data, capsys):
        """Test the redirect to the dashboard is logged for the submit."""
        form.submit(valid_form_data)
        
        entries = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line]
        navigated = [e for e in entries if e['event'] == 'info']
        assert len(navigated) == 1
        assert navigated[0]['message'] == 'navigated'
        assert navigated[0]['path'] == '/dashboard'
        assert navigated[0]['correlationId'] == entries[0]['correlationId']
    
    def test_custom_dashboard_path(self, session, api, navigator, notifier, valid_form_data):
        config = default_config()
        config['dashboard_path'] = '/home'
        form = ProfileEditForm(session, api, navigator, notifier, config=config)
        
        form.submit(valid_form_data)
        
        assert navigator.visited == ['/home']


class TestSubmitValidationFailure:
    """Test submits that fail the schema."""
    
    def test_field_errors_set_and_nothing_sent(self, form, api, session, navigator, notifier):
        outcome = form.submit({'name': '', 'email': 'bad', 'old_password': ''})
        
        assert outcome == 'invalid'
        assert form.errors == {'name': NAME_REQUIRED, 'email': EMAIL_INVALID}
        assert api.calls == []
        assert session.history == []
        assert navigator.visited == []
        assert notifier.notifications == []
    
    def test_errors_cleared_on_next_submit(self, form, valid_form_data):
        form.submit({'name': '', 'email': 'bad'})
        assert form.errors
        
        assert form.submit(valid_form_data) == 'updated'
        assert form.errors == {}
    
    def test_edit_clears_field_error(self, form):
        form.submit({'name': '', 'email': 'bad'})
        
        form.edit_field('email', 'jane@example.org')
        
        assert form.errors == {'name': NAME_REQUIRED}
        assert form.render()['fields'][0]['error'] == NAME_REQUIRED
    
    def test_edit_unknown_field(self, form):
        with pytest.raises(ValueError):
            form.edit_field('avatar', 'x.png')
    
    def test_non_string_old_password_blocks_submit(self, form, api):
        """Test a non-string old_password is not mistaken for 'no password change'."""
        outcome = form.submit({
            'name': 'Jane',
            'email': 'jane@example.com',
            'old_password': 123456,
            'password': '1',
            'password_confirmation': '2',
        })
        
        assert outcome == 'invalid'
        assert form.errors == {'old_password': 'Old password must be a string'}
        assert api.calls == []


class TestSubmitRemoteFailure:
    """Test submits where the update call fails."""
    
    def test_remote_failure(self, session, failing_api, navigator, notifier, valid_form_data):
        form = ProfileEditForm(session, failing_api, navigator, notifier)
        before = dict(session.user)
        
        outcome = form.submit(valid_form_data)
        
        assert outcome == 'failed'
        assert len(failing_api.calls) == 1
        assert navigator.visited == []
        assert session.user == before
        assert notifier.notifications == [{
            'type': 'error',
            'title': FAILURE_TITLE,
            'description': FAILURE_DESCRIPTION,
        }]
        assert form.errors == {}
    
    def test_form_values_kept_for_retry(self, session, failing_api, navigator, notifier, valid_form_data):
        form = ProfileEditForm(session, failing_api, navigator, notifier)
        
        form.submit(valid_form_data)
        
        assert form.values['name'] == 'Jane Smith'
        assert form.values['email'] == 'jane.smith@example.com'
    
    def test_unexpected_error_collapses_to_failure(self, session, api, notifier, valid_form_data):
        """Test a failure after the update call still yields the generic notification."""
        navigator = MagicMock()
        navigator.go_to.side_effect = RuntimeError('router unavailable')
        form = ProfileEditForm(session, api, navigator, notifier)
        
        assert form.submit(valid_form_data) == 'failed'
        assert notifier.of_type('error') and not notifier.of_type('success')


class TestMetricsWiring:
    """Test metrics emission from submits."""
    
    def test_success_emits_request_and_latency(self, session, api, navigator, notifier, valid_form_data):
        cloudwatch = MagicMock()
        metrics = MetricsClient('profile-update', cloudwatch=cloudwatch)
        form = ProfileEditForm(session, api, navigator, notifier, metrics=metrics)
        
        form.submit(valid_form_data)
        
        sent = cloudwatch.put_metric_data.call_args.kwargs['MetricData']
        assert [m['MetricName'] for m in sent] == ['RequestCount', 'Latency']
    
    def test_failure_emits_error_code(self, session, failing_api, navigator, notifier, valid_form_data):
        cloudwatch = MagicMock()
        metrics = MetricsClient('profile-update', cloudwatch=cloudwatch)
        form = ProfileEditForm(session, failing_api, navigator, notifier, metrics=metrics)
        
        form.submit(valid_form_data)
        
        sent = cloudwatch.put_metric_data.call_args.kwargs['MetricData']
        error_metric = sent[0]
        assert error_metric['MetricName'] == 'ErrorCount'
        assert {'Name': 'ErrorCode', 'Value': 'REMOTE_UPDATE_ERROR'} in error_metric['Dimensions']
    
    def test_metrics_disabled_by_default(self, form):
        assert form.metrics is None


class TestCreateProfileForm:
    """Test wiring from configuration."""
    
    def test_builds_requests_client(self, session, navigator, notifier):
        config = default_config('https://api.example.com/')
        config['api_timeout'] = 5.0
        
        form = create_profile_form(session, navigator, notifier, config=config, token='abc')
        
        assert isinstance(form.api, ProfileApiClient)
        assert form.api.url_for(PROFILE_PATH) == 'https://api.example.com/profile'
        assert form.api.timeout == 5.0
        assert form.api.token == 'abc'
    
    def test_missing_environment_fails_fast(self, session, navigator, notifier, monkeypatch):
        monkeypatch.delenv('PROFILE_API_BASE_URL', raising=False)
        with pytest.raises(ConfigurationError):
            create_profile_form(session, navigator, notifier)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
