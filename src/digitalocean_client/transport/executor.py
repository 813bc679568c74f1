"""Single HTTP exchange.

`execute` sends one request through the client's transport stack and maps
httpx failures onto the client's error taxonomy. It performs no retries of
its own; the `RateLimitGovernor` inside the transport stack owns retry policy.
"""

import logging

import httpx

from digitalocean_client.errors.exceptions import RequestTimeoutError, TransportError

logger = logging.getLogger(__name__)


async def execute(http: httpx.AsyncClient, request: httpx.Request) -> httpx.Response:
    """Send a built request and return the fully read response.

    Args:
        http: Client holding the connection pool and transport stack
        request: Request produced by the RequestBuilder

    Returns:
        The HTTP response, whatever its status

    Raises:
        RequestTimeoutError: If the configured timeout was exceeded
        TransportError: On connection, TLS, DNS or protocol failures
    """
    logger.debug(f"Sending {request.method} {request.url}")
    try:
        response = await http.send(request)
    except httpx.TimeoutException as e:
        raise RequestTimeoutError(f"{request.method} {request.url} timed out: {e}", request=request) from e
    except httpx.TransportError as e:
        raise TransportError(f"{request.method} {request.url} failed: {e}", request=request) from e

    logger.debug(f"{request.method} {request.url} -> {response.status_code}")
    return response
