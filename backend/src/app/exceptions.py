"""Custom exception classes for the edge functions.

Each exception carries the HTTP status code the handlers translate it
into, so a handler only needs one ``except AppError`` branch.
"""

from __future__ import annotations

from typing import Any
from typing import Optional


class AppError(Exception):
    """Base exception for application errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code (default 500).
        detail: Optional additional context.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response body."""
        result: dict[str, Any] = {"error": self.message}
        if self.detail:
            result["detail"] = self.detail
        return result


class ValidationError(AppError):
    """Raised when a request is missing required fields or is malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        detail = f"Field: {field}" if field else None
        super().__init__(message, status_code=400, detail=detail)
        self.field = field


class MethodNotAllowedError(AppError):
    """Raised when a handler receives an unsupported HTTP method."""

    def __init__(self, method: str):
        super().__init__("Method not allowed", status_code=405)
        self.method = method


class ConfigurationError(AppError):
    """Raised when a required environment variable is missing.

    Configuration is checked per request, so a missing secret fails the
    invocation rather than the cold start.
    """

    def __init__(self, config_name: str):
        super().__init__(
            f"Missing required configuration: {config_name}",
            status_code=500,
        )
        self.config_name = config_name


class DatabaseError(AppError):
    """Raised when a database operation fails.

    The upstream message is passed through as ``message``; extra
    diagnostics go to the logs only.
    """

    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class UpstreamError(AppError):
    """Raised when the backend load balancer cannot be reached."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message, status_code=500)
        self.url = url
