"""Navigation interface."""

from typing import Protocol

LOGIN = "/login"
TASKS = "/tasks"


class Navigator(Protocol):
    """Whatever renders views; told where the user should go next."""

    def navigate(self, route: str) -> None:
        ...
