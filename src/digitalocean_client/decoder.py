"""Response decoding.

Maps an `httpx.Response` to a typed result:

- 2xx with an empty body (204 and friends): `None`, no JSON parsing
- 2xx for an endpoint without a record type: `None`
- 2xx otherwise: the envelope member ``endpoint.key`` bound to ``endpoint.record``
- anything else: the `APIError` subclass for the status, built from the
  ``{"id", "message"}`` error body

A body that does not match the expected shape raises `DecodeError`.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx

from digitalocean_client.errors.exceptions import DecodeError
from digitalocean_client.errors.handler import raise_for_status
from digitalocean_client.request import Endpoint
from digitalocean_client.schema import decode_value

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a list response.

    Attributes:
        items: Records in provider order.
        next_url: ``links.pages.next``, or None on the last page.
        total: ``meta.total`` when the provider reports it.
    """

    items: tuple[T, ...]
    next_url: str | None = None
    total: int | None = None


def _is_empty(response: httpx.Response) -> bool:
    return response.status_code == 204 or not response.content.strip()


def _parse_object(response: httpx.Response) -> dict[str, Any]:
    try:
        data = json.loads(response.content)
    except ValueError as e:
        raise DecodeError(
            f"HTTP {response.status_code} body is not valid JSON: {e}",
            status_code=response.status_code,
            body=response.text[:200],
        ) from e
    if not isinstance(data, dict):
        raise DecodeError(
            f"HTTP {response.status_code} body is not a JSON object",
            status_code=response.status_code,
            body=response.text[:200],
        )
    return data


def _envelope_member(data: dict[str, Any], endpoint: Endpoint, status_code: int) -> Any:
    if endpoint.key not in data:
        raise DecodeError(
            f"response to {endpoint.method} {endpoint.path} has no '{endpoint.key}' member",
            field_path=endpoint.key,
            status_code=status_code,
        )
    return data[endpoint.key]


def decode_response(response: httpx.Response, endpoint: Endpoint[T]) -> T | None:
    """Decode a single-resource (or unit) response.

    Args:
        response: Response to decode
        endpoint: Endpoint the response answers; supplies key and record type

    Returns:
        The record, or None for empty bodies and record-less endpoints

    Raises:
        APIError: Subclass matching a non-2xx status
        DecodeError: Body does not match the expected shape
    """
    raise_for_status(response)

    if _is_empty(response) or endpoint.record is None:
        return None

    data = _parse_object(response)
    member = _envelope_member(data, endpoint, response.status_code)
    return _decode_with_status(endpoint.record, member, endpoint.key, response.status_code)


def decode_page(response: httpx.Response, endpoint: Endpoint[T]) -> Page[T]:
    """Decode one page of a list response.

    The items array lives under ``endpoint.key``; ``links.pages.next`` and
    ``meta.total`` are optional.
    """
    raise_for_status(response)

    if endpoint.record is None:
        raise ValueError(f"list endpoint {endpoint.path!r} has no record type")

    if _is_empty(response):
        raise DecodeError(
            f"HTTP {response.status_code} list response has an empty body",
            status_code=response.status_code,
        )

    data = _parse_object(response)
    member = _envelope_member(data, endpoint, response.status_code)
    items = _decode_with_status(tuple[endpoint.record, ...], member, endpoint.key, response.status_code)

    return Page(
        items=items,
        next_url=_next_link(data, response.status_code),
        total=_total(data, response.status_code),
    )


def _decode_with_status(tp: Any, value: Any, path: str, status_code: int) -> Any:
    try:
        return decode_value(tp, value, path)
    except DecodeError as e:
        e.status_code = status_code
        logger.debug(f"Failed to decode response member '{path}': {e}")
        raise


def _next_link(data: dict[str, Any], status_code: int) -> str | None:
    links = data.get("links")
    if links is None:
        return None
    if not isinstance(links, dict):
        raise DecodeError("'links' is not an object", field_path="links", status_code=status_code)
    pages = links.get("pages")
    if pages is None:
        return None
    if not isinstance(pages, dict):
        raise DecodeError("'links.pages' is not an object", field_path="links.pages", status_code=status_code)
    next_url = pages.get("next")
    if next_url is None:
        return None
    if not isinstance(next_url, str) or not next_url:
        raise DecodeError(
            "'links.pages.next' is not a non-empty string", field_path="links.pages.next", status_code=status_code
        )
    return next_url


def _total(data: dict[str, Any], status_code: int) -> int | None:
    meta = data.get("meta")
    if meta is None:
        return None
    if not isinstance(meta, dict):
        raise DecodeError("'meta' is not an object", field_path="meta", status_code=status_code)
    total = meta.get("total")
    if total is None:
        return None
    if isinstance(total, bool) or not isinstance(total, int):
        raise DecodeError("'meta.total' is not an integer", field_path="meta.total", status_code=status_code)
    return total
