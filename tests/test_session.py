"""Tests for the session store."""

import json

import pytest

from taskdesk.core.session import Session, User
from taskdesk.errors import ApiError, AuthenticationError
from taskdesk.ports.navigator import LOGIN, TASKS
from taskdesk.session import TOKEN_KEY, USER_KEY, SessionStore

from fakes import FakeAuthService, InMemoryStorage, RecordingNavigator


@pytest.fixture
def auth():
    return FakeAuthService()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def store(auth, storage, navigator):
    return SessionStore(auth, storage, navigator)


class TestRestore:
    def test_loading_until_restored(self, store):
        assert store.is_loading is True
        store.restore()
        assert store.is_loading is False

    def test_empty_storage_gives_empty_session(self, store):
        session = store.restore()
        assert session == Session.empty()
        assert store.is_authenticated is False

    def test_adopts_token_and_user(self, auth, navigator):
        storage = InMemoryStorage(
            {TOKEN_KEY: "tok-9", USER_KEY: json.dumps({"id": 4, "email": "bo@example.com"})}
        )
        store = SessionStore(auth, storage, navigator)
        session = store.restore()
        assert session.token == "tok-9"
        assert session.user == User(id=4, email="bo@example.com")
        assert store.token == "tok-9"
        assert auth.calls == []

    def test_token_without_user_is_ignored(self, auth, navigator):
        store = SessionStore(auth, InMemoryStorage({TOKEN_KEY: "tok-9"}), navigator)
        assert store.restore().is_authenticated is False

    def test_user_without_token_is_ignored(self, auth, navigator):
        storage = InMemoryStorage({USER_KEY: json.dumps({"id": 4, "email": "bo@example.com"})})
        store = SessionStore(auth, storage, navigator)
        assert store.restore().is_authenticated is False

    def test_unreadable_user_is_ignored(self, auth, navigator):
        storage = InMemoryStorage({TOKEN_KEY: "tok-9", USER_KEY: "{not json"})
        store = SessionStore(auth, storage, navigator)
        assert store.restore().is_authenticated is False
        assert store.is_loading is False

    def test_notifies_listeners(self, store):
        seen = []
        store.subscribe(seen.append)
        store.restore()
        assert seen == [Session.empty()]


class TestLogin:
    def test_success_persists_and_navigates(self, store, storage, navigator):
        store.restore()
        session = store.login("ada@example.com", "secret", remember_me=True)

        assert session.user.email == "ada@example.com"
        assert store.token == "tok-1"
        assert storage.items[TOKEN_KEY] == "tok-1"
        assert json.loads(storage.items[USER_KEY]) == {"id": 1, "email": "ada@example.com"}
        assert navigator.last == TASKS

    def test_token_and_user_written_in_one_call(self, store, storage):
        store.login("ada@example.com", "secret")
        assert storage.writes == 1

    def test_remember_me_forwarded(self, store, auth):
        store.login("ada@example.com", "secret", remember_me=True)
        assert auth.calls == [("login", "ada@example.com", "secret", True)]

    def test_failure_surfaces_server_message(self, store, storage, navigator):
        with pytest.raises(AuthenticationError) as exc:
            store.login("ada@example.com", "wrong")
        assert exc.value.message == "Invalid credentials"
        assert storage.items == {}
        assert store.is_authenticated is False
        assert navigator.routes == []

    def test_failure_without_message_uses_default(self, store, auth):
        auth.error = ApiError(status=500)
        with pytest.raises(AuthenticationError, match="Login failed"):
            store.login("ada@example.com", "secret")

    def test_network_failure_uses_default(self, store, auth):
        auth.error = ApiError()
        with pytest.raises(AuthenticationError, match="Login failed"):
            store.login("ada@example.com", "secret")

    def test_failure_leaves_existing_session(self, store, storage):
        store.login("ada@example.com", "secret")
        with pytest.raises(AuthenticationError):
            store.login("ada@example.com", "wrong")
        assert store.token == "tok-1"
        assert storage.items[TOKEN_KEY] == "tok-1"

    def test_tokenless_session_is_rejected(self, store, auth, storage, navigator):
        auth.token = ""
        store.restore()
        with pytest.raises(AuthenticationError, match="Login failed"):
            store.login("ada@example.com", "secret")
        assert storage.items == {}
        assert storage.writes == 0
        assert store.is_authenticated is False
        assert navigator.routes == []

    def test_survives_restart(self, auth, storage, navigator):
        SessionStore(auth, storage, navigator).login("ada@example.com", "secret")

        restarted = SessionStore(auth, storage, navigator)
        session = restarted.restore()

        assert session.token == "tok-1"
        assert session.user == User(id=1, email="ada@example.com")
        assert [c[0] for c in auth.calls] == ["login"]


class TestRegister:
    def test_success(self, store, storage, navigator):
        session = store.register("new@example.com", "pw", "pw")
        assert session.user.email == "new@example.com"
        assert storage.items[TOKEN_KEY] == "tok-1"
        assert navigator.last == TASKS

    def test_server_message_surfaced(self, store):
        with pytest.raises(AuthenticationError, match="Passwords do not match"):
            store.register("new@example.com", "pw", "other")

    def test_default_message(self, store, auth):
        auth.error = ApiError(status=400)
        with pytest.raises(AuthenticationError, match="Registration failed"):
            store.register("new@example.com", "pw", "pw")

    def test_tokenless_session_is_rejected(self, store, auth, storage):
        auth.token = None
        with pytest.raises(AuthenticationError, match="Registration failed"):
            store.register("new@example.com", "pw", "pw")
        assert storage.items == {}
        assert store.is_authenticated is False


class TestLogout:
    def test_clears_everything(self, store, storage, navigator):
        store.login("ada@example.com", "secret")
        store.logout()

        assert store.session == Session.empty()
        assert TOKEN_KEY not in storage.items
        assert USER_KEY not in storage.items
        assert navigator.last == LOGIN

    def test_logout_when_logged_out(self, store, navigator):
        store.restore()
        store.logout()
        assert store.is_authenticated is False
        assert navigator.last == LOGIN


class TestSubscribe:
    def test_every_transition_notifies(self, store):
        seen = []
        store.subscribe(seen.append)
        store.restore()
        store.login("ada@example.com", "secret")
        store.logout()
        assert [s.is_authenticated for s in seen] == [False, True, False]

    def test_unsubscribe(self, store):
        seen = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        store.restore()
        assert seen == []
