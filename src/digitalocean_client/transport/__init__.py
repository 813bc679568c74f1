"""Transport layer: the HTTP exchange and the retry governor around it.

Modules:
    executor: One HTTP exchange, httpx errors mapped to TransportError
    retry: RetryPolicy state machine and RateLimitGovernor transport
    ratelimit: Parsing of ratelimit-* and Retry-After headers

Example:
    ```python
    import httpx

    from digitalocean_client.transport import RateLimitGovernor, RetryPolicy

    transport = RateLimitGovernor(
        wrapped_transport=httpx.AsyncHTTPTransport(),
        policy=RetryPolicy(max_retries=5),
    )
    ```
"""

from digitalocean_client.transport.executor import execute
from digitalocean_client.transport.ratelimit import RateLimitInfo
from digitalocean_client.transport.retry import RateLimitGovernor, RetryPhase, RetryPolicy, RetryState

__all__ = [
    "RateLimitGovernor",
    "RateLimitInfo",
    "RetryPhase",
    "RetryPolicy",
    "RetryState",
    "execute",
]
