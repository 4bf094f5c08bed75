"""Exception types shared across the Taskboard CLI."""


class TaskboardError(Exception):
    """Base class for all Taskboard errors."""


class RemoteStoreError(TaskboardError):
    """A request to the remote store failed.

    Attributes:
        status_code: HTTP status code when the server answered, else None
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(TaskboardError):
    """Sign-in, sign-up or token refresh was rejected."""


class NotAuthenticatedError(AuthenticationError):
    """No signed-in session is available."""
