"""Rate-limit and retry governor.

Retry policy is an explicit state machine so limits, delays and jitter can be
tested without a network or a real clock:

| Phase | Meaning |
|-------|---------|
| `ATTEMPT` | a request is about to be (re)sent |
| `WAITING` | a retryable response arrived; sleep `delay` seconds, then resume |
| `SUCCEEDED` | 2xx/3xx response, hand it to the decoder |
| `FAILED` | non-retryable error response, hand it to the decoder unchanged |
| `EXHAUSTED` | retry budget spent, hand the last response to the decoder |

Retried conditions:

| Condition | Methods | Budget |
|-----------|---------|--------|
| 429 | all | `max_retries` |
| 500, 502, 503, 504 | GET, HEAD, PUT, DELETE, OPTIONS, TRACE | `max_server_error_retries` |

Transport exceptions are never retried here; they propagate to the executor.

## Example

```python
import httpx

from digitalocean_client.transport.retry import RateLimitGovernor, RetryPolicy

transport = RateLimitGovernor(
    wrapped_transport=httpx.AsyncHTTPTransport(),
    policy=RetryPolicy(max_retries=5, max_backoff=60),
)

async with httpx.AsyncClient(transport=transport) as client:
    response = await client.get("https://api.digitalocean.com/v2/droplets")
```
"""

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from enum import Enum

import httpx

from digitalocean_client.transport.ratelimit import RateLimitInfo

logger = logging.getLogger(__name__)


class RetryPhase(Enum):
    ATTEMPT = "attempt"
    WAITING = "waiting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class RetryState:
    """One step of the retry state machine.

    Attributes:
        phase: Current phase.
        attempt: 1-indexed number of the attempt this state refers to.
        rate_limit_retries: Rate-limit retries consumed so far.
        server_error_retries: 5xx retries consumed so far.
        delay: Seconds to sleep when phase is WAITING; for EXHAUSTED on a
            rate limit, the delay the caller should honour before trying again.
        reason: "rate_limited" or "server_error" for retry-related phases.
    """

    phase: RetryPhase
    attempt: int = 1
    rate_limit_retries: int = 0
    server_error_retries: int = 0
    delay: float = 0.0
    reason: str | None = None

    @property
    def done(self) -> bool:
        return self.phase in (RetryPhase.SUCCEEDED, RetryPhase.FAILED, RetryPhase.EXHAUSTED)


class RetryPolicy:
    """Pure retry/backoff policy.

    Args:
        max_retries: Maximum retries on rate limiting (default: 5)
        max_server_error_retries: Maximum retries on 5xx for idempotent methods (default: 2)
        backoff_base: First exponential backoff delay in seconds (default: 1.0)
        max_backoff: Cap for every computed delay in seconds (default: 60)
        jitter: Fraction of a backoff delay that may be randomly removed (default: 0.1)
        rng: Random source for jitter
    """

    # Idempotent HTTP methods (per RFC 7231) - safe to retry on 5xx
    IDEMPOTENT_METHODS: frozenset[str] = frozenset(["HEAD", "GET", "PUT", "DELETE", "OPTIONS", "TRACE"])

    # Server errors that warrant retry
    DEFAULT_RETRY_5XX_STATUS_CODES: frozenset[int] = frozenset([500, 502, 503, 504])

    def __init__(
        self,
        *,
        max_retries: int = 5,
        max_server_error_retries: int = 2,
        backoff_base: float = 1.0,
        max_backoff: float = 60.0,
        jitter: float = 0.1,
        retry_5xx_status_codes: frozenset[int] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if max_retries < 0 or max_server_error_retries < 0:
            raise ValueError("retry budgets must not be negative")
        if not 0.0 <= jitter <= 1.0:
            raise ValueError(f"jitter must be between 0 and 1, got {jitter}")
        self.max_retries = max_retries
        self.max_server_error_retries = max_server_error_retries
        self.backoff_base = backoff_base
        self.max_backoff = max_backoff
        self.jitter = jitter
        self.retry_5xx_status_codes = retry_5xx_status_codes or self.DEFAULT_RETRY_5XX_STATUS_CODES
        self._rng = rng or random.Random()

    def start(self) -> RetryState:
        return RetryState(phase=RetryPhase.ATTEMPT, attempt=1)

    def resume(self, state: RetryState) -> RetryState:
        """Leave WAITING and schedule the next attempt."""
        if state.phase is not RetryPhase.WAITING:
            raise ValueError(f"cannot resume from {state.phase.value}")
        return replace(state, phase=RetryPhase.ATTEMPT, attempt=state.attempt + 1, delay=0.0, reason=None)

    def advance(
        self,
        state: RetryState,
        *,
        method: str,
        status_code: int,
        headers: httpx.Headers,
        now: float,
    ) -> RetryState:
        """Decide what to do with the response to the attempt in `state`.

        Args:
            state: An ATTEMPT state
            method: HTTP method of the request
            status_code: Response status
            headers: Response headers
            now: Current Unix time

        Returns:
            The next state
        """
        if state.phase is not RetryPhase.ATTEMPT:
            raise ValueError(f"cannot advance from {state.phase.value}")

        if status_code < 400:
            return replace(state, phase=RetryPhase.SUCCEEDED)

        if status_code == 429:
            info = RateLimitInfo.from_headers(headers, now=now)
            retry_number = state.rate_limit_retries + 1
            delay = self.rate_limit_delay(info, retry_number, now)
            if state.rate_limit_retries >= self.max_retries:
                return replace(state, phase=RetryPhase.EXHAUSTED, delay=delay, reason="rate_limited")
            return replace(
                state,
                phase=RetryPhase.WAITING,
                rate_limit_retries=retry_number,
                delay=delay,
                reason="rate_limited",
            )

        if status_code in self.retry_5xx_status_codes and method.upper() in self.IDEMPOTENT_METHODS:
            if state.server_error_retries >= self.max_server_error_retries:
                return replace(state, phase=RetryPhase.EXHAUSTED, reason="server_error")
            retry_number = state.server_error_retries + 1
            return replace(
                state,
                phase=RetryPhase.WAITING,
                server_error_retries=retry_number,
                delay=self.backoff_delay(retry_number),
                reason="server_error",
            )

        return replace(state, phase=RetryPhase.FAILED)

    def rate_limit_delay(self, info: RateLimitInfo, retry_number: int, now: float) -> float:
        """Delay before retrying a rate-limited request.

        Uses Retry-After or ratelimit-reset when they ask for a positive wait,
        otherwise exponential backoff. Always capped at max_backoff.
        """
        delay = info.wait_seconds(now)
        if delay is None or delay <= 0:
            return self.backoff_delay(retry_number)
        return float(min(delay, self.max_backoff))

    def backoff_delay(self, retry_number: int) -> float:
        """Calculate jittered exponential backoff delay with max_backoff cap.

        Uses formula: min(backoff_base * (2 ** (retry_number - 1)), max_backoff),
        then removes up to `jitter` of it at random.
        Default backoff sequence before jitter: 1, 2, 4, 8, 16 seconds

        Args:
            retry_number: Current retry attempt (1-indexed)

        Returns:
            Delay in seconds (never above max_backoff)
        """
        delay = min(self.backoff_base * (2 ** (retry_number - 1)), self.max_backoff)
        if self.jitter:
            delay -= delay * self.jitter * self._rng.random()
        return delay


class RateLimitGovernor(httpx.AsyncBaseTransport):
    """Transport that retries rate-limited and transient 5xx responses.

    Drives a `RetryPolicy` around the wrapped transport. When the budget runs
    out the last response is returned with ``extensions["retry_after"]`` and
    ``extensions["retry_attempts"]`` set; the decoder turns it into a
    ``RateLimitError`` or ``ServerError``.

    Args:
        wrapped_transport: The underlying transport to wrap
        policy: Retry policy (default: RetryPolicy())
        sleep: Coroutine function used for backoff waits (default: asyncio.sleep)
        clock: Returns the current Unix time (default: time.time)
    """

    def __init__(
        self,
        *,
        wrapped_transport: httpx.AsyncBaseTransport,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._wrapped_transport = wrapped_transport
        self.policy = policy or RetryPolicy()
        self._sleep = sleep
        self._clock = clock

    async def __aenter__(self):
        """Enter async context, delegating to wrapped transport."""
        await self._wrapped_transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context, delegating to wrapped transport."""
        return await self._wrapped_transport.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._wrapped_transport.aclose()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Send the request, waiting and resending while the policy says so.

        Args:
            request: The HTTP request to send

        Returns:
            The final HTTP response
        """
        state = self.policy.start()

        while True:
            response = await self._wrapped_transport.handle_async_request(request)
            state = self.policy.advance(
                state,
                method=request.method,
                status_code=response.status_code,
                headers=response.headers,
                now=self._clock(),
            )

            if state.phase is RetryPhase.WAITING:
                budget = self.policy.max_retries if state.reason == "rate_limited" else self.policy.max_server_error_retries
                retries = state.rate_limit_retries if state.reason == "rate_limited" else state.server_error_retries
                logger.warning(
                    f"Request {request.method} {request.url} failed with {response.status_code} ({state.reason}), "
                    f"retrying in {state.delay:.2f}s (attempt {retries}/{budget})"
                )
                await response.aclose()
                await self._sleep(state.delay)
                state = self.policy.resume(state)
                continue

            if state.phase is RetryPhase.EXHAUSTED:
                logger.warning(
                    f"Request {request.method} {request.url} still failing with {response.status_code} "
                    f"after {state.attempt} attempts, giving up"
                )
                response.extensions["retry_attempts"] = state.attempt
                if state.reason == "rate_limited":
                    response.extensions["retry_after"] = state.delay

            return response
