"""Pure session domain - who is logged in."""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """The authenticated account."""

    id: int
    email: str

    @classmethod
    def from_api(cls, data: dict) -> "User":
        return cls(id=int(data["id"]), email=data["email"])

    def to_dict(self) -> dict:
        return {"id": self.id, "email": self.email}


@dataclass(frozen=True)
class Session:
    """
    A user plus their opaque bearer token, or neither.

    The token is never inspected or refreshed; it's forwarded as-is until
    the session is cleared.
    """

    user: User | None = None
    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and bool(self.token)

    @classmethod
    def empty(cls) -> "Session":
        return cls()
