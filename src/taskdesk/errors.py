"""Error types surfaced to views.

Every error carries a human-readable `message` suitable for showing to the
user as-is.
"""


class TaskDeskError(Exception):
    """Base class for all taskdesk errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ApiError(TaskDeskError):
    """Raised by adapters on a non-2xx response or transport failure.

    `message` is the server-provided message, or None when there wasn't one.
    `status` is None for network failures.
    """

    def __init__(self, message: str | None = None, status: int | None = None):
        super().__init__(message or (f"Request failed (status {status})" if status else "Request failed"))
        self.server_message = message
        self.status = status

    def message_or(self, default: str) -> str:
        """The server's message, falling back to `default`."""
        return self.server_message or default


class AuthenticationError(TaskDeskError):
    """Raised when login or registration fails."""

    pass


class NotAuthenticated(TaskDeskError):
    """Raised when a task operation is attempted without a session."""

    def __init__(self, message: str = "Not logged in. Run 'taskdesk login' first."):
        super().__init__(message)


class FetchFailed(TaskDeskError):
    """Raised when tasks can't be retrieved. The previous collection is kept."""

    pass


class MutationFailed(TaskDeskError):
    """Raised when a create, update or delete fails."""

    pass


class ValidationError(TaskDeskError):
    """Raised when a task draft is rejected before any request is sent."""

    def __init__(self, problems: list[str]):
        super().__init__("; ".join(problems))
        self.problems = problems
