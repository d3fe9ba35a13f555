"""Session store - the single owner of "who is logged in"."""

import json
import logging
from typing import Callable

from taskdesk.core.session import Session, User
from taskdesk.errors import ApiError, AuthenticationError
from taskdesk.ports import AuthService, Navigator, SessionStorage
from taskdesk.ports.navigator import LOGIN, TASKS

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"

Listener = Callable[[Session], None]


class SessionStore:
    """
    Holds the current session and persists it to durable storage.

    Constructed once by the application and passed to every controller that
    needs it. Listeners are told about every transition (restore, login,
    register, logout) so gated views can re-check access.
    """

    def __init__(self, auth: AuthService, storage: SessionStorage, navigator: Navigator):
        self._auth = auth
        self._storage = storage
        self._navigator = navigator
        self._session = Session.empty()
        self._listeners: list[Listener] = []
        self.is_loading = True

    @property
    def session(self) -> Session:
        return self._session

    @property
    def user(self) -> User | None:
        return self._session.user

    @property
    def token(self) -> str | None:
        return self._session.token

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, session: Session) -> None:
        self._session = session
        for listener in list(self._listeners):
            listener(session)

    def restore(self) -> Session:
        """Adopt the persisted session, if both token and user are present."""
        token = self._storage.get_item(TOKEN_KEY)
        raw_user = self._storage.get_item(USER_KEY)

        session = Session.empty()
        if token and raw_user:
            try:
                session = Session(user=User.from_api(json.loads(raw_user)), token=token)
            except (json.JSONDecodeError, KeyError, TypeError, ValueError):
                logger.warning("Stored user record is unreadable, starting logged out")

        self.is_loading = False
        if session.is_authenticated:
            logger.info(f"Restored session for {session.user.email}")
        self._set(session)
        return session

    def login(self, email: str, password: str, remember_me: bool = False) -> Session:
        """Log in and persist the session. Raises AuthenticationError on failure."""
        try:
            session = self._auth.login(email, password, remember_me)
        except ApiError as e:
            logger.info(f"Login failed for {email}: {e.message}")
            raise AuthenticationError(e.message_or("Login failed")) from e
        return self._adopt(session, "Login failed")

    def register(self, email: str, password: str, confirm_password: str) -> Session:
        """Create an account and persist the session. Raises AuthenticationError on failure."""
        try:
            session = self._auth.register(email, password, confirm_password)
        except ApiError as e:
            logger.info(f"Registration failed for {email}: {e.message}")
            raise AuthenticationError(e.message_or("Registration failed")) from e
        return self._adopt(session, "Registration failed")

    def _adopt(self, session: Session, failure: str) -> Session:
        if not session.is_authenticated:
            logger.warning("Auth service returned a session without user or token")
            raise AuthenticationError(failure)
        # token and user go to storage in one write, or not at all
        self._storage.set_items(
            {TOKEN_KEY: session.token, USER_KEY: json.dumps(session.user.to_dict())}
        )
        self.is_loading = False
        logger.info(f"Logged in as {session.user.email}")
        self._set(session)
        self._navigator.navigate(TASKS)
        return session

    def logout(self) -> None:
        """Forget the session everywhere, unconditionally."""
        self._storage.remove_items(TOKEN_KEY, USER_KEY)
        logger.info("Logged out")
        self._set(Session.empty())
        self._navigator.navigate(LOGIN)
