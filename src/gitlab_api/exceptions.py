"""GitLab API exceptions."""

from __future__ import annotations


class GitLabError(Exception):
    """Base exception for every failure raised by this library."""


class GitLabApiError(GitLabError):
    """Raised when the GitLab API returns a non-success response."""

    def __init__(self, status_code: int, status_text: str, body: str = "") -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(f"GitLab API Error {status_code} {status_text}: {body}")


class GitLabAuthError(GitLabApiError):
    """Raised on 401/403 authentication failures."""

    def __init__(self, status_code: int, body: str = "") -> None:
        status_text = "Unauthorized" if status_code == 401 else "Forbidden"
        super().__init__(status_code, status_text, body)


class GitLabNotFoundError(GitLabApiError):
    """Raised on 404 responses."""

    def __init__(self, body: str = "") -> None:
        super().__init__(404, "Not Found", body)


class GitLabValidationError(GitLabApiError):
    """Raised on 400/422 responses, when GitLab rejects the request payload."""

    def __init__(self, status_code: int, body: str = "") -> None:
        status_text = "Bad Request" if status_code == 400 else "Unprocessable Entity"
        super().__init__(status_code, status_text, body)


class GitLabTransportError(GitLabError):
    """Raised when no response was received (connection refused, timeout, ...)."""

    def __init__(self, method: str, path: str, cause: Exception) -> None:
        self.method = method
        self.path = path
        self.cause = cause
        super().__init__(f"{method} {path} failed: {cause}")


class GitLabEncodingError(GitLabError):
    """Raised when a query parameter cannot be percent-encoded."""

    def __init__(self, name: str, value: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Cannot encode query parameter {name}={value!r}")


class GitLabBindingError(GitLabError):
    """Raised when a component lacks the identifier or config an operation needs."""
