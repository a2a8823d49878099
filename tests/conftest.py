"""
Shared fixtures for profile edit tests.

In-memory stand-ins for the form's collaborators. None of them touch the
network.
"""

from typing import Any, Dict, List, Optional

import pytest

from profile_shared.collaborators import (
    ApiClient,
    ApiResponse,
    InMemorySessionProvider,
    Navigator,
    Notifier,
)
from profile_shared.errors import RemoteUpdateError


CURRENT_USER = {
    'id': 'user-123',
    'name': 'Jane Doe',
    'email': 'jane@example.com',
    'avatar_url': 'https://cdn.example.com/avatars/jane.png',
}


class RecordingNotifier(Notifier):
    def __init__(self):
        self.notifications: List[Dict[str, str]] = []

    def notify(self, notification_type, title, description):
        self.notifications.append({'type': notification_type, 'title': title, 'description': description})

    def of_type(self, notification_type: str) -> List[Dict[str, str]]:
        return [n for n in self.notifications if n['type'] == notification_type]


class RecordingNavigator(Navigator):
    def __init__(self):
        self.visited: List[str] = []

    def go_to(self, path):
        self.visited.append(path)


class StubApiClient(ApiClient):
    """Returns ``response_data`` for every PUT, or raises ``error`` when set."""

    def __init__(self, response_data: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.response_data = response_data
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def put(self, path, body):
        self.calls.append({'path': path, 'body': body})
        if self.error is not None:
            raise self.error
        data = self.response_data if self.response_data is not None else {**CURRENT_USER, **body}
        return ApiResponse(status_code=200, data=data)


@pytest.fixture
def session():
    return InMemorySessionProvider(dict(CURRENT_USER))


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def api():
    return StubApiClient()


@pytest.fixture
def failing_api():
    return StubApiClient(error=RemoteUpdateError('PUT profile returned 500', {'statusCode': 500}))


@pytest.fixture
def valid_form_data():
    return {
        'name': 'Jane Smith',
        'email': 'jane.smith@example.com',
        'old_password': '',
        'password': '',
        'password_confirmation': '',
    }


@pytest.fixture
def password_change_data(valid_form_data):
    return {
        **valid_form_data,
        'old_password': 'current-secret',
        'password': 'new-secret',
        'password_confirmation': 'new-secret',
    }


@pytest.fixture
def make_api():
    """Factory for stub API clients with a custom response or error."""
    return StubApiClient
