"""DigitalOcean client - typed async bindings for the DigitalOcean v2 API.

Every call goes through one engine:
- Bearer-token authentication and deterministic request building
- Typed decoding of JSON bodies into frozen dataclass records
- Lazy pagination over ``links.pages.next``
- Rate-limit aware retries with backoff
- One error taxonomy: TransportError, DecodeError, APIError / RateLimitError

Example:
    ```python
    from digitalocean_client import ClientConfig, DigitalOceanClient, NotFoundError
    from digitalocean_client.resources import droplets

    async with DigitalOceanClient(ClientConfig.from_env()) as client:
        try:
            droplet = await client.send(droplets.get_droplet(3164444))
        except NotFoundError as e:
            print(e.error_id, e.message)

        async for droplet in client.paginate(droplets.list_droplets()):
            print(droplet.id, droplet.name)
    ```
"""

__version__ = "0.1.0"

from digitalocean_client.auth import BearerToken, CredentialResolver  # noqa: E402
from digitalocean_client.client import DigitalOceanClient  # noqa: E402
from digitalocean_client.config import ClientConfig  # noqa: E402
from digitalocean_client.errors import (  # noqa: E402
    APIError,
    DecodeError,
    DigitalOceanError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    TransportError,
)
from digitalocean_client.pagination import Pager  # noqa: E402
from digitalocean_client.request import Endpoint  # noqa: E402

__all__ = [
    "APIError",
    "BearerToken",
    "ClientConfig",
    "CredentialResolver",
    "DecodeError",
    "DigitalOceanClient",
    "DigitalOceanError",
    "Endpoint",
    "NotFoundError",
    "Pager",
    "RateLimitError",
    "RequestTimeoutError",
    "ServerError",
    "TransportError",
    "__version__",
]
