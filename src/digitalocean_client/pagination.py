"""Lazy traversal of paginated list endpoints.

List responses carry the items plus a ``links.pages.next`` URL; the last page
has no ``next``. A `Pager` turns that into an async iterator:

```python
async with DigitalOceanClient(config) as client:
    async for droplet in client.paginate(droplets.list_droplets()):
        print(droplet.id)

    first_ten = await client.paginate(volumes.list_volumes(), limit=10).collect()
```

Each refill issues exactly one request, only when the in-memory page is used
up. Pagers are single-use and belong to one caller.
"""

import logging
from collections import deque
from typing import TYPE_CHECKING, Generic, TypeVar

from digitalocean_client.decoder import Page, decode_page
from digitalocean_client.errors.exceptions import DecodeError
from digitalocean_client.request import Endpoint

if TYPE_CHECKING:
    from digitalocean_client.client import DigitalOceanClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Pager(Generic[T]):
    """Async iterator over every item of a paginated endpoint.

    Args:
        client: Client used to send each page request
        endpoint: List endpoint for the first page
        limit: Stop after this many items (None: no limit)
        per_page: Page size to request (None: client default)

    Attributes:
        total: ``meta.total`` from the most recent page, once fetched
        pages_fetched: Number of pages received so far
    """

    def __init__(
        self,
        client: "DigitalOceanClient",
        endpoint: Endpoint[T],
        *,
        limit: int | None = None,
        per_page: int | None = None,
    ):
        if endpoint.method != "GET" or endpoint.record is None:
            raise ValueError(f"Pager needs a GET endpoint with a record type, got {endpoint.method} {endpoint.path!r}")
        if limit is not None and limit < 0:
            raise ValueError(f"limit must not be negative, got {limit}")

        if per_page is not None and "per_page" not in dict(endpoint.query):
            endpoint = endpoint.with_query(per_page=str(per_page))

        self._client = client
        self._endpoint = endpoint
        self._limit = limit
        self._buffer: deque[T] = deque()
        self._next_url: str | None = None
        self._started = False
        self._finished = False
        self._fetched_urls: set[str] = set()
        self._yielded = 0
        self.total: int | None = None
        self.pages_fetched = 0

    def __aiter__(self) -> "Pager[T]":
        return self

    async def __anext__(self) -> T:
        if self._limit is not None and self._yielded >= self._limit:
            self._finish()
            raise StopAsyncIteration

        while not self._buffer:
            if self._finished:
                raise StopAsyncIteration
            await self._fetch_next_page()

        self._yielded += 1
        return self._buffer.popleft()

    async def collect(self) -> list[T]:
        """Drain the remaining items into a list."""
        return [item async for item in self]

    def _finish(self) -> None:
        self._finished = True
        self._next_url = None
        self._buffer.clear()

    async def _fetch_next_page(self) -> None:
        if not self._started:
            request = self._client.builder.build(self._endpoint)
        elif self._next_url is not None:
            request = self._client.builder.build_link(self._next_url, authenticated=self._endpoint.authenticated)
        else:
            self._finish()
            return

        url = str(request.url)
        if url in self._fetched_urls:
            self._finish()
            raise DecodeError(f"pagination link points back to an already fetched page: {url}", field_path="links.pages.next")

        # A failed request leaves the cursor in place, so the next pull resends it
        page: Page[T] = await self._client.request_page(request, self._endpoint)
        self._started = True
        self._fetched_urls.add(url)
        self.pages_fetched += 1
        if page.total is not None:
            self.total = page.total

        logger.debug(
            f"Fetched page {self.pages_fetched} of {self._endpoint.path}: {len(page.items)} items, "
            f"next={'yes' if page.next_url else 'no'}"
        )

        self._buffer.extend(page.items)
        self._next_url = page.next_url
        if page.next_url is None:
            self._finished = True
