"""Error handling utilities for HTTP responses."""

import logging

import httpx

from digitalocean_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)
from digitalocean_client.errors.models import ErrorBody
from digitalocean_client.transport.ratelimit import RateLimitInfo

logger = logging.getLogger(__name__)

EXCEPTION_MAP: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def is_rate_limited(response: httpx.Response) -> bool:
    """Whether a response was rejected by the request quota.

    Only 429 qualifies. Other statuses were processed by the API and keep
    their own error kind, even when ``ratelimit-remaining`` has reached zero.
    """
    return response.status_code == 429


def raise_for_status(response: httpx.Response) -> None:
    """Raise the appropriate exception for an HTTP error response.

    Args:
        response: HTTP response object

    Raises:
        DecodeError: If the error body is not ``{"id", "message"}`` shaped
        APIError subclass based on status code
    """
    if response.is_success:
        return

    status_code = response.status_code
    error_body = ErrorBody.from_response(response)

    if is_rate_limited(response):
        exc_class: type[APIError] = RateLimitError
    elif status_code in EXCEPTION_MAP:
        exc_class = EXCEPTION_MAP[status_code]
    elif 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = APIError

    logger.debug(f"API error {status_code} ({error_body.id}): {error_body.message}")

    if exc_class is RateLimitError:
        retry_after = response.extensions.get("retry_after")
        if retry_after is None:
            retry_after = RateLimitInfo.from_headers(response.headers).retry_after
        raise RateLimitError(
            message=error_body.message,
            retry_after=retry_after,
            attempts=response.extensions.get("retry_attempts"),
            status_code=status_code,
            error_id=error_body.id,
            request_id=error_body.request_id,
            response=response,
        )

    raise exc_class(
        message=error_body.message,
        status_code=status_code,
        error_id=error_body.id,
        request_id=error_body.request_id,
        response=response,
    )
