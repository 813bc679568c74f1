"""Authentication: the bearer token and where it comes from.

Example:
    ```python
    from digitalocean_client.auth import BearerToken, CredentialResolver

    token = BearerToken("dop_v1_...")
    token = CredentialResolver().resolve_token()
    ```
"""

from digitalocean_client.auth.credentials import TOKEN_ENV_VARS, BearerToken, CredentialResolver
from digitalocean_client.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)

__all__ = [
    "TOKEN_ENV_VARS",
    "BearerToken",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
]
