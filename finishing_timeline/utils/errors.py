"""Error handling utilities."""

from typing import Optional


class TimelineError(Exception):
    """Base exception for the timeline backend."""
    pass


class ConfigurationError(TimelineError):
    """Invalid or missing configuration."""
    pass


class ApiRequestError(TimelineError):
    """REST API request failed (transport error or non-2xx response)."""

    def __init__(self, operation: str, message: str, status_code: Optional[int] = None):
        self.operation = operation
        self.message = message
        self.status_code = status_code
        super().__init__(f"{operation} failed: {message}")


class AuthenticationError(ApiRequestError):
    """API rejected the request token (HTTP 401)."""
    pass


class MutationError(TimelineError):
    """Create/update/delete/toggle of a task or milestone failed."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(self.user_message)

    @property
    def user_message(self) -> str:
        """Message suitable for a visible notification."""
        return f"Could not {self.operation}: {self.reason}"
