"""DigitalOcean error body model."""

import json
from dataclasses import dataclass

import httpx

from digitalocean_client.errors.exceptions import DecodeError


@dataclass(frozen=True)
class ErrorBody:
    """Error payload returned with every non-2xx response.

    Shape: ``{"id": "not_found", "message": "...", "request_id": "..."}``.
    ``request_id`` is optional; ``id`` and ``message`` are required.
    """

    id: str
    message: str
    request_id: str | None = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ErrorBody":
        """Parse the error body of an HTTP response.

        Args:
            response: Non-2xx HTTP response

        Returns:
            Parsed ErrorBody

        Raises:
            DecodeError: If the body is not a JSON object with string ``id``
                and ``message`` members
        """
        text = response.text
        try:
            data = json.loads(text)
        except ValueError as e:
            raise DecodeError(
                f"HTTP {response.status_code} error body is not valid JSON: {e}",
                status_code=response.status_code,
                body=text[:200],
            ) from e

        if not isinstance(data, dict):
            raise DecodeError(
                f"HTTP {response.status_code} error body is not a JSON object",
                status_code=response.status_code,
                body=text[:200],
            )

        for field in ("id", "message"):
            if not isinstance(data.get(field), str):
                raise DecodeError(
                    f"HTTP {response.status_code} error body has no string '{field}' member",
                    field_path=field,
                    status_code=response.status_code,
                    body=text[:200],
                )

        request_id = data.get("request_id")
        if request_id is not None and not isinstance(request_id, str):
            raise DecodeError(
                f"HTTP {response.status_code} error body has a non-string 'request_id' member",
                field_path="request_id",
                status_code=response.status_code,
                body=text[:200],
            )

        return cls(id=data["id"], message=data["message"], request_id=request_id)
