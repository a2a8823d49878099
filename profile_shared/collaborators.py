"""
Collaborator interfaces consumed by the profile edit form.

The form talks to four external services: the session provider, the
notification (toast) service, the remote API client and the navigator.
This module defines their abstract interfaces and the response structure
returned by the API client.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

from profile_shared.types import NotificationType, SessionUser


@dataclass
class ApiResponse:
    """
    Response of a remote API call.

    Attributes:
        status_code: HTTP status code
        data: Decoded JSON body
    """

    status_code: int
    data: Dict[str, Any]


class SessionProvider(ABC):
    """Holds the currently authenticated user."""

    @property
    @abstractmethod
    def user(self) -> SessionUser:
        """Current session user."""

    @abstractmethod
    def update_user(self, user: SessionUser) -> None:
        """Replace the session user wholesale."""


class Notifier(ABC):
    """Fire-and-forget toast notifications."""

    @abstractmethod
    def notify(self, notification_type: NotificationType, title: str, description: str) -> None:
        pass


class ApiClient(ABC):
    """Remote API client used for the profile update call."""

    @abstractmethod
    def put(self, path: str, body: Dict[str, Any]) -> ApiResponse:
        """
        Send a PUT request with a JSON body.

        Raises:
            RemoteUpdateError: On any transport or server-side failure
        """


class Navigator(ABC):
    """Client-side navigation."""

    @abstractmethod
    def go_to(self, path: str) -> None:
        pass


@dataclass
class InMemorySessionProvider(SessionProvider):
    """
    Session provider keeping the user in memory.

    Every replacement is appended to ``history`` so callers can inspect
    what was written back.
    """

    current: SessionUser
    history: List[SessionUser] = field(default_factory=list)

    @property
    def user(self) -> SessionUser:
        return self.current

    def update_user(self, user: SessionUser) -> None:
        self.current = user
        self.history.append(user)
