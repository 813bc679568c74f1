"""Rate-limit header parsing.

DigitalOcean reports its request quota on every response:

- ``ratelimit-limit``: requests allowed per window
- ``ratelimit-remaining``: requests left in the current window
- ``ratelimit-reset``: Unix epoch seconds at which the window resets

A ``Retry-After`` header (delta-seconds or HTTP-date) takes precedence when
present. Malformed values are treated as absent so callers fall back to
exponential backoff.
"""

from dataclasses import dataclass
from datetime import UTC
from email.utils import parsedate_to_datetime

import httpx

LIMIT_HEADER = "ratelimit-limit"
REMAINING_HEADER = "ratelimit-remaining"
RESET_HEADER = "ratelimit-reset"
RETRY_AFTER_HEADER = "retry-after"


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        parsed = int(value.strip())
    except ValueError:
        return None
    return parsed if parsed >= 0 else None


def _parse_retry_after(value: str | None, now: float | None) -> float | None:
    """Parse Retry-After in either delta-seconds or HTTP-date format."""
    if not value:
        return None

    seconds = _parse_int(value)
    if seconds is not None:
        return float(seconds)

    if now is None:
        return None

    try:
        retry_date = parsedate_to_datetime(value)
    except (ValueError, TypeError):
        return None
    if retry_date.tzinfo is None:
        retry_date = retry_date.replace(tzinfo=UTC)

    delay = retry_date.timestamp() - now
    # Dates in the past (clock skew) are treated as absent
    return delay if delay >= 0 else None


@dataclass(frozen=True)
class RateLimitInfo:
    """Quota state reported by one response."""

    limit: int | None = None
    remaining: int | None = None
    reset_at: int | None = None
    retry_after: float | None = None

    @classmethod
    def from_headers(cls, headers: httpx.Headers, now: float | None = None) -> "RateLimitInfo":
        """Parse rate-limit headers.

        Args:
            headers: Response headers
            now: Current Unix time, needed to resolve an HTTP-date Retry-After

        Returns:
            RateLimitInfo with None for every missing or malformed header
        """
        return cls(
            limit=_parse_int(headers.get(LIMIT_HEADER)),
            remaining=_parse_int(headers.get(REMAINING_HEADER)),
            reset_at=_parse_int(headers.get(RESET_HEADER)),
            retry_after=_parse_retry_after(headers.get(RETRY_AFTER_HEADER), now),
        )

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0

    def wait_seconds(self, now: float) -> float | None:
        """Seconds to wait before the quota allows another request.

        Retry-After wins over ratelimit-reset. A reset time in the past gives
        zero. None means neither header was usable.
        """
        if self.retry_after is not None:
            return self.retry_after
        if self.reset_at is not None:
            return max(0.0, self.reset_at - now)
        return None
