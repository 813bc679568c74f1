"""Testing utilities for code built on the DigitalOcean client.

Example:
    ```python
    import httpx

    from digitalocean_client import ClientConfig, DigitalOceanClient
    from digitalocean_client.testing import RecordingSleep, create_error_response, sequence_handler


    async def test_handles_404():
        handler, requests = sequence_handler([create_error_response(404, "not_found", "gone")])
        client = DigitalOceanClient(ClientConfig(token="test"), transport=httpx.MockTransport(handler))
        ...
    ```
"""

from digitalocean_client.testing.factories import (
    FixedClock,
    RecordingSleep,
    create_error_response,
    create_mock_response,
    create_rate_limit_response,
    paged_handler,
    sequence_handler,
)

__all__ = [
    "FixedClock",
    "RecordingSleep",
    "create_error_response",
    "create_mock_response",
    "create_rate_limit_response",
    "paged_handler",
    "sequence_handler",
]
