"""Endpoint descriptors and request construction.

An `Endpoint` names one API operation: method, path template, path
parameters, query pairs, optional JSON body, and the shape of the response
(the envelope key and the record type). Resource modules build them;
`RequestBuilder` turns them into `httpx.Request` objects.

Example:
    ```python
    endpoint = Endpoint(
        "GET",
        "domains/{domain}/records",
        path_params=(("domain", "example.com"),),
        key="domain_records",
        record=DomainRecord,
    ).with_query(type="A")

    request = RequestBuilder(config).build(endpoint)
    # GET https://api.digitalocean.com/v2/domains/example.com/records?type=A
    ```
"""

import json
import string
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar
from urllib.parse import quote, urlencode

import httpx

from digitalocean_client.config import ClientConfig

T = TypeVar("T")

METHODS: frozenset[str] = frozenset(["GET", "POST", "PUT", "DELETE", "PATCH"])

Pairs = tuple[tuple[str, str], ...]


def _as_pairs(items: Iterable[tuple[str, Any]] | dict[str, Any] | None, what: str) -> Pairs:
    if items is None:
        return ()
    if isinstance(items, dict):
        items = items.items()
    pairs = []
    for key, value in items:
        if not isinstance(key, str) or not isinstance(value, str):
            raise ValueError(f"{what} must be string pairs, got {key!r}={value!r}")
        pairs.append((key, value))
    return tuple(pairs)


@dataclass(frozen=True)
class Endpoint(Generic[T]):
    """Descriptor of one API call.

    Attributes:
        method: GET, POST, PUT, DELETE or PATCH.
        path: Path template relative to the API root, e.g. ``volumes/{id}``.
        path_params: Values for the template placeholders, percent-encoded.
        query: Ordered query string pairs.
        body: JSON-serialisable request body, or None.
        key: Envelope member holding the payload (``droplet``, ``droplets``).
        record: Record type of the payload; None for calls without a result.
        authenticated: Send the Authorization header (default True).
    """

    method: str
    path: str
    path_params: Pairs = ()
    query: Pairs = ()
    body: Any = None
    key: str | None = None
    record: type[T] | None = None
    authenticated: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "path_params", _as_pairs(self.path_params, "path_params"))
        object.__setattr__(self, "query", _as_pairs(self.query, "query"))
        if self.method not in METHODS:
            raise ValueError(f"unsupported HTTP method {self.method!r}")
        if "://" in self.path or self.path.startswith("//") or "?" in self.path or "#" in self.path:
            raise ValueError(f"path must be a relative path without query or fragment, got {self.path!r}")
        if self.record is not None and self.key is None:
            raise ValueError("an endpoint with a record type needs an envelope key")

    def with_query(self, *pairs: tuple[str, str], **params: str) -> "Endpoint[T]":
        """Return a copy with query pairs appended (keyword order preserved)."""
        extra = _as_pairs(list(pairs) + list(params.items()), "query")
        return replace(self, query=self.query + extra)

    def with_body(self, **fields: Any) -> "Endpoint[T]":
        """Return a copy whose JSON object body also holds `fields`."""
        if self.body is not None and not isinstance(self.body, dict):
            raise ValueError("with_body requires an object body")
        return replace(self, body={**(self.body or {}), **fields})

    def render_path(self) -> str:
        """Substitute path parameters into the template."""
        params = dict(self.path_params)
        names = {name for _, name, _, _ in string.Formatter().parse(self.path) if name is not None}
        missing = names - params.keys()
        if missing:
            raise ValueError(f"missing path parameters for {self.path!r}: {sorted(missing)}")
        unused = params.keys() - names
        if unused:
            raise ValueError(f"unused path parameters for {self.path!r}: {sorted(unused)}")
        return self.path.format(**{name: quote(value, safe="") for name, value in params.items()})


class RequestBuilder:
    """Build deterministic `httpx.Request` objects from endpoints."""

    def __init__(self, config: ClientConfig):
        self._config = config
        self._base_url = config.base_url.rstrip("/")

    def url_for(self, endpoint: Endpoint) -> httpx.URL:
        path = endpoint.render_path().lstrip("/")
        url = f"{self._base_url}/{path}"
        if endpoint.query:
            # Keeps pair order, repeated keys included
            url = f"{url}?{urlencode(endpoint.query, quote_via=quote)}"
        return httpx.URL(url)

    def headers(self, *, authenticated: bool = True, has_body: bool = False) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": self._config.user_agent,
        }
        if authenticated:
            headers["Authorization"] = self._config.token.authorization
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def build(self, endpoint: Endpoint) -> httpx.Request:
        """Build the request for an endpoint.

        Raises:
            ValueError: If the endpoint is malformed or its body is not JSON-serialisable
        """
        content = None
        if endpoint.body is not None:
            try:
                content = json.dumps(endpoint.body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
            except TypeError as e:
                raise ValueError(f"request body is not JSON-serialisable: {e}") from e

        return httpx.Request(
            endpoint.method,
            self.url_for(endpoint),
            headers=self.headers(authenticated=endpoint.authenticated, has_body=content is not None),
            content=content,
        )

    def build_link(self, url: str, *, authenticated: bool = True) -> httpx.Request:
        """Build a GET for a pagination link, used verbatim."""
        link = httpx.URL(url)
        if not link.is_absolute_url:
            raise ValueError(f"pagination link must be absolute, got {url!r}")
        return httpx.Request("GET", link, headers=self.headers(authenticated=authenticated))
