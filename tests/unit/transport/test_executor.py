"""Tests for the single-exchange executor."""

import httpx
import pytest

from digitalocean_client.errors import RequestTimeoutError, TransportError
from digitalocean_client.transport.executor import execute


def raising(exc_type):
    def handler(request):
        raise exc_type("boom", request=request)

    return handler


@pytest.mark.unit
async def test_returns_response_of_any_status():
    async with httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(418))) as http:
        response = await execute(http, httpx.Request("GET", "https://api.digitalocean.com/v2/account"))

    assert response.status_code == 418


@pytest.mark.unit
@pytest.mark.parametrize("exc_type", [httpx.ConnectError, httpx.RemoteProtocolError, httpx.ReadError])
async def test_network_failures_become_transport_error(exc_type):
    request = httpx.Request("GET", "https://api.digitalocean.com/v2/account")

    async with httpx.AsyncClient(transport=httpx.MockTransport(raising(exc_type))) as http:
        with pytest.raises(TransportError) as exc_info:
            await execute(http, request)

    assert not isinstance(exc_info.value, RequestTimeoutError)
    assert isinstance(exc_info.value.__cause__, exc_type)
    assert exc_info.value.request is request
    assert "GET https://api.digitalocean.com/v2/account failed" in str(exc_info.value)


@pytest.mark.unit
@pytest.mark.parametrize("exc_type", [httpx.ConnectTimeout, httpx.ReadTimeout, httpx.PoolTimeout])
async def test_timeouts_become_request_timeout_error(exc_type):
    request = httpx.Request("GET", "https://api.digitalocean.com/v2/account")

    async with httpx.AsyncClient(transport=httpx.MockTransport(raising(exc_type))) as http:
        with pytest.raises(RequestTimeoutError) as exc_info:
            await execute(http, request)

    assert isinstance(exc_info.value, TransportError)
    assert "timed out" in str(exc_info.value)
