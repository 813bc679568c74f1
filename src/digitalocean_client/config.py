"""Client configuration.

`ClientConfig` is an immutable value passed explicitly to the client; there is
no module-level state, so several clients with different tokens can coexist.

Example:
    ```python
    from digitalocean_client import BearerToken, ClientConfig

    config = ClientConfig(token=BearerToken("dop_v1_..."), timeout=10.0)

    # Or from DIGITALOCEAN_TOKEN / .env
    config = ClientConfig.from_env(max_retries=3)
    ```
"""

from dataclasses import dataclass

import httpx

from digitalocean_client import __version__
from digitalocean_client.auth.credentials import BearerToken, CredentialResolver
from digitalocean_client.transport.retry import RetryPolicy

DEFAULT_BASE_URL = "https://api.digitalocean.com/v2"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"digitalocean-client-python/{__version__}"

# Defined in https://docs.digitalocean.com/reference/api/api-reference/#section/Introduction/Links-and-Pagination
MAX_PER_PAGE = 200

BASE_URL_ENV_VAR = "DIGITALOCEAN_API_URL"
TIMEOUT_ENV_VAR = "DIGITALOCEAN_TIMEOUT"


@dataclass(frozen=True)
class ClientConfig:
    """Settings shared by every call a client makes.

    Attributes:
        token: Bearer token sent on authenticated requests.
        base_url: API root; endpoint paths are appended to it.
        timeout: Per-request timeout in seconds.
        user_agent: User-Agent header value.
        max_retries: Retries on rate limiting before RateLimitError.
        max_server_error_retries: Retries on 5xx for idempotent methods.
        backoff_base: First exponential backoff delay in seconds.
        max_backoff: Upper bound for any wait, in seconds.
        jitter: Fraction of a backoff delay removed at random.
        per_page: Page size requested by pagers (None: provider default).
    """

    token: BearerToken
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    max_retries: int = 5
    max_server_error_retries: int = 2
    backoff_base: float = 1.0
    max_backoff: float = 60.0
    jitter: float = 0.1
    per_page: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.token, str):
            object.__setattr__(self, "token", BearerToken(self.token))
        url = httpx.URL(self.base_url)
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"base_url must be an absolute http(s) URL, got {self.base_url!r}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.per_page is not None and not 1 <= self.per_page <= MAX_PER_PAGE:
            raise ValueError(f"per_page must be between 1 and {MAX_PER_PAGE}, got {self.per_page}")

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            max_server_error_retries=self.max_server_error_retries,
            backoff_base=self.backoff_base,
            max_backoff=self.max_backoff,
            jitter=self.jitter,
        )

    @classmethod
    def from_env(cls, resolver: CredentialResolver | None = None, **overrides) -> "ClientConfig":
        """Build a config from the environment (and a .env file).

        Reads DIGITALOCEAN_TOKEN (or DIGITALOCEAN_ACCESS_TOKEN),
        DIGITALOCEAN_API_URL and DIGITALOCEAN_TIMEOUT. Keyword overrides win.

        Raises:
            CredentialNotFoundError: If no token is available.
            ValueError: If DIGITALOCEAN_TIMEOUT is not a number.
        """
        resolver = resolver or CredentialResolver()

        if "token" not in overrides:
            overrides["token"] = resolver.resolve_token()

        if "base_url" not in overrides:
            base_url = resolver.resolve(env_var_names=(BASE_URL_ENV_VAR,), mask_in_logs=False)
            if base_url:
                overrides["base_url"] = base_url

        if "timeout" not in overrides:
            timeout = resolver.resolve(env_var_names=(TIMEOUT_ENV_VAR,), mask_in_logs=False)
            if timeout:
                try:
                    overrides["timeout"] = float(timeout)
                except ValueError:
                    raise ValueError(f"{TIMEOUT_ENV_VAR} must be a number, got {timeout!r}") from None

        return cls(**overrides)
