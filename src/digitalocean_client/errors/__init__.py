"""Error taxonomy and error-body handling for the DigitalOcean client."""

from digitalocean_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    DecodeError,
    DigitalOceanError,
    ForbiddenError,
    NotFoundError,
    NullFieldError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from digitalocean_client.errors.handler import is_rate_limited, raise_for_status
from digitalocean_client.errors.models import ErrorBody

__all__ = [
    "APIError",
    "BadRequestError",
    "ClientError",
    "ConflictError",
    "DecodeError",
    "DigitalOceanError",
    "ErrorBody",
    "ForbiddenError",
    "NotFoundError",
    "NullFieldError",
    "RateLimitError",
    "RequestTimeoutError",
    "ServerError",
    "TransportError",
    "UnauthorizedError",
    "ValidationError",
    "is_rate_limited",
    "raise_for_status",
]
