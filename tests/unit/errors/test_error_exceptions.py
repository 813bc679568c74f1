"""Tests for structured API exceptions."""

import httpx
import pytest

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


@pytest.mark.unit
def test_api_error_instantiation():
    """Test APIError can be instantiated with all attributes."""
    response = httpx.Response(status_code=404)

    error = APIError(
        message="droplet not found",
        status_code=404,
        error_id="not_found",
        request_id="abc-123",
        response=response,
    )

    assert error.message == "droplet not found"
    assert error.status_code == 404
    assert error.error_id == "not_found"
    assert error.request_id == "abc-123"
    assert error.response is response
    assert str(error) == "HTTP 404 (not_found): droplet not found"


@pytest.mark.unit
def test_api_error_str_without_status():
    assert str(APIError("boom")) == "boom"


@pytest.mark.unit
def test_exception_inheritance():
    """Test exception inheritance chain."""
    for exc_class in (TransportError, DecodeError, APIError):
        assert issubclass(exc_class, DigitalOceanError)

    assert issubclass(RequestTimeoutError, TransportError)
    assert issubclass(NullFieldError, DecodeError)

    assert issubclass(ClientError, APIError)
    for exc_class in (
        BadRequestError,
        UnauthorizedError,
        ForbiddenError,
        NotFoundError,
        ConflictError,
        ValidationError,
        RateLimitError,
    ):
        assert issubclass(exc_class, ClientError)
    assert issubclass(ServerError, APIError)


@pytest.mark.unit
def test_error_kinds_are_disjoint():
    """Transport, decode and API failures never share a branch."""
    assert not issubclass(DecodeError, APIError)
    assert not issubclass(TransportError, APIError)
    assert not issubclass(DecodeError, TransportError)


@pytest.mark.unit
def test_rate_limit_error_with_retry_after():
    error = RateLimitError(message="API Rate limit exceeded.", retry_after=12.5, attempts=6, status_code=429)

    assert error.retry_after == 12.5
    assert error.attempts == 6
    assert error.status_code == 429


@pytest.mark.unit
def test_rate_limit_error_without_retry_after():
    error = RateLimitError(message="Too many requests")

    assert error.retry_after is None
    assert error.attempts is None


@pytest.mark.unit
def test_decode_error_attributes():
    error = DecodeError("bad", field_path="droplet.id", status_code=200, body="{}")

    assert str(error) == "bad"
    assert error.field_path == "droplet.id"
    assert error.status_code == 200
    assert error.body == "{}"


@pytest.mark.unit
def test_null_field_error():
    error = NullFieldError(message="null is not allowed", field_path="droplet.name")

    assert error.field_path == "droplet.name"
    assert error.status_code is None


@pytest.mark.unit
def test_transport_error_keeps_request():
    request = httpx.Request("GET", "https://api.digitalocean.com/v2/droplets")

    error = RequestTimeoutError("timed out", request=request)

    assert error.request is request
