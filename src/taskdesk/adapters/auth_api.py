"""Auth REST API adapter - exchanges credentials for a session."""

from taskdesk.adapters.rest import RestClient
from taskdesk.core.session import Session, User
from taskdesk.errors import ApiError


class RestAuthAdapter(RestClient):
    """
    REST adapter for /auth/login and /auth/register.

    Implements AuthService protocol. Never sends a bearer token.
    """

    def _session_from(self, data: dict) -> Session:
        try:
            user = User.from_api(data["user"])
            token = data["accessToken"]
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError() from e
        if not isinstance(token, str) or not token:
            raise ApiError()
        return Session(user=user, token=token)

    def login(self, email: str, password: str, remember_me: bool = False) -> Session:
        """Log in with email and password."""
        data = self._json(
            "POST",
            "/auth/login",
            json={"email": email, "password": password, "rememberMe": remember_me},
        )
        return self._session_from(data)

    def register(self, email: str, password: str, confirm_password: str) -> Session:
        """Create an account. The server checks that the passwords match."""
        data = self._json(
            "POST",
            "/auth/register",
            json={"email": email, "password": password, "confirmPassword": confirm_password},
        )
        return self._session_from(data)
