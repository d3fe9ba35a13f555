"""Authentication service interface."""

from typing import Protocol

from taskdesk.core.session import Session


class AuthService(Protocol):
    """Interface for exchanging credentials for a session."""

    def login(self, email: str, password: str, remember_me: bool = False) -> Session:
        """Log in. Raises ApiError on failure."""
        ...

    def register(self, email: str, password: str, confirm_password: str) -> Session:
        """Create an account and log in. Raises ApiError on failure."""
        ...
