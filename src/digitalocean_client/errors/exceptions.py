"""Structured exceptions for DigitalOcean API calls.

Every failure a resource call can produce is one of three kinds:

- ``TransportError``: the HTTP exchange itself failed (connect, TLS, DNS, timeout).
- ``DecodeError``: a response body did not match the expected schema.
- ``APIError``: the provider answered with a non-2xx status and a
  ``{"id", "message"}`` body. ``RateLimitError`` is the rate-limited flavour,
  raised once the retry governor has given up.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class DigitalOceanError(Exception):
    """Base exception for every error raised by the client."""

    pass


class TransportError(DigitalOceanError):
    """Network-level failure: connection refused, TLS, DNS or protocol error."""

    def __init__(self, message: str, request: "httpx.Request | None" = None):
        super().__init__(message)
        self.request = request


class RequestTimeoutError(TransportError):
    """The request exceeded the configured timeout."""

    pass


class DecodeError(DigitalOceanError):
    """Response body did not match the expected schema.

    This signals API contract drift or a library bug, never a transient
    condition, so it is never retried.
    """

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
    ):
        super().__init__(message)
        self.field_path = field_path
        self.status_code = status_code
        self.body = body


class NullFieldError(DecodeError):
    """Raised when the API returns null for a required field."""

    def __init__(self, message: str, field_path: str, **kwargs):
        super().__init__(message, field_path=field_path, **kwargs)


class APIError(DigitalOceanError):
    """Failure reported by the provider through a non-2xx response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_id: str | None = None,
        request_id: str | None = None,
        response: "httpx.Response | None" = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_id = error_id
        self.request_id = request_id
        self.response = response

    def __str__(self) -> str:
        if self.status_code is not None and self.error_id:
            return f"HTTP {self.status_code} ({self.error_id}): {self.message}"
        if self.status_code is not None:
            return f"HTTP {self.status_code}: {self.message}"
        return self.message


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class ValidationError(ClientError):
    """422 Unprocessable Entity."""

    pass


class RateLimitError(ClientError):
    """Request quota exhausted after the governor's retries."""

    def __init__(self, message: str, retry_after: float | None = None, attempts: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after
        self.attempts = attempts


class ServerError(APIError):
    """5xx server errors."""

    pass
