"""DigitalOcean API client."""

import logging
from typing import TypeVar

import httpx

from digitalocean_client.config import ClientConfig
from digitalocean_client.decoder import Page, decode_page, decode_response
from digitalocean_client.pagination import Pager
from digitalocean_client.request import Endpoint, RequestBuilder
from digitalocean_client.transport.executor import execute
from digitalocean_client.transport.retry import RateLimitGovernor

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DigitalOceanClient:
    """Async client every resource call funnels through.

    Holds the immutable configuration and an `httpx.AsyncClient` whose
    transport is wrapped in a `RateLimitGovernor`. Calls share no other state,
    so one client can serve many concurrent tasks.

    Args:
        config: Client configuration
        transport: Transport to wrap with the governor (default:
            httpx.AsyncHTTPTransport()); tests pass httpx.MockTransport
        governor: Fully built governor, replacing the default one around `transport`

    Example:
        ```python
        from digitalocean_client import ClientConfig, DigitalOceanClient
        from digitalocean_client.resources import droplets

        async with DigitalOceanClient(ClientConfig.from_env()) as client:
            droplet = await client.send(droplets.get_droplet(3164444))
            async for d in client.paginate(droplets.list_droplets(tag_name="web")):
                print(d.id, d.name)
        ```
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        governor: RateLimitGovernor | None = None,
    ):
        self.config = config
        self.builder = RequestBuilder(config)
        if governor is None:
            governor = RateLimitGovernor(
                wrapped_transport=transport or httpx.AsyncHTTPTransport(),
                policy=config.retry_policy(),
            )
        self._http = httpx.AsyncClient(
            transport=governor,
            timeout=httpx.Timeout(config.timeout),
            follow_redirects=False,
        )

    async def __aenter__(self) -> "DigitalOceanClient":
        await self._http.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self._http.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def send(self, endpoint: Endpoint[T]) -> T | None:
        """Execute a single call and decode its result.

        Returns:
            The endpoint's record, or None for calls without a result body

        Raises:
            TransportError: Network failure or timeout
            APIError: Provider-reported failure (RateLimitError once retries are spent)
            DecodeError: Response did not match the endpoint's schema
        """
        request = self.builder.build(endpoint)
        response = await execute(self._http, request)
        return decode_response(response, endpoint)

    async def request_page(self, request: httpx.Request, endpoint: Endpoint[T]) -> Page[T]:
        """Send one page request of a list endpoint and decode it."""
        response = await execute(self._http, request)
        return decode_page(response, endpoint)

    def paginate(self, endpoint: Endpoint[T], *, limit: int | None = None) -> Pager[T]:
        """Lazy iterator over every item of a list endpoint.

        No request is sent until the first item is pulled.
        """
        return Pager(self, endpoint, limit=limit, per_page=self.config.per_page)

    async def list_all(self, endpoint: Endpoint[T], *, limit: int | None = None) -> list[T]:
        """Fetch every item (up to `limit`) of a list endpoint."""
        return await self.paginate(endpoint, limit=limit).collect()
