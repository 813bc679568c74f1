"""API token handling.

`BearerToken` is the immutable credential every authenticated request carries.
`CredentialResolver` finds the token for the embedding application.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variables, in the order given
3. .env file (python-dotenv), loaded into the environment on construction
4. Default value

Example:
    ```python
    from digitalocean_client.auth import CredentialResolver

    resolver = CredentialResolver()
    token = resolver.resolve_token()  # DIGITALOCEAN_TOKEN or DIGITALOCEAN_ACCESS_TOKEN

    # Token kept in a file, path from the environment
    token = resolver.resolve_token_from_file(env_var_name="DIGITALOCEAN_TOKEN_FILE")
    ```

Tokens are never logged; only the source they came from is.
"""

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from digitalocean_client.auth.exceptions import CredentialFileError, CredentialNotFoundError

logger = logging.getLogger(__name__)

TOKEN_ENV_VARS: tuple[str, ...] = ("DIGITALOCEAN_TOKEN", "DIGITALOCEAN_ACCESS_TOKEN")


@dataclass(frozen=True)
class BearerToken:
    """Personal access token or OAuth token for the DigitalOcean API.

    Immutable once constructed. The value is excluded from repr().
    """

    value: str = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("API token must be a non-empty string")
        if self.value != self.value.strip():
            object.__setattr__(self, "value", self.value.strip())

    @property
    def authorization(self) -> str:
        """Value for the Authorization header."""
        return f"Bearer {self.value}"

    def __str__(self) -> str:
        return "***"


class CredentialResolver:
    """Resolve credentials from explicit values, the environment, .env files and defaults.

    Attributes:
        _dotenv_loaded: Whether .env file has been loaded.
        _dotenv_lock: Thread lock for safe dotenv loading.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize credential resolver.

        Args:
            dotenv_path: Path to .env file. If None, python-dotenv searches
                parent directories for one.
            load_dotenv: Whether to load a .env file at all. Default is True.
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        """Load the .env file once (thread-safe)."""
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for credential resolution")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_names: Sequence[str] = (),
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Resolve a setting from multiple sources.

        Args:
            value: Explicitly provided value. If not None, all other sources
                are ignored.
            env_var_names: Environment variables to check, first set one wins.
            default: Value used when nothing else is found.
            required: Raise CredentialNotFoundError instead of returning None.
            mask_in_logs: Log "***" instead of the value (default True).

        Returns:
            Resolved value, or None if not found and not required.

        Raises:
            CredentialNotFoundError: If required=True and nothing was found.
        """
        if isinstance(env_var_names, str):
            env_var_names = (env_var_names,)

        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        else:
            for name in env_var_names:
                if os.environ.get(name):
                    result = os.environ[name]
                    source = f"environment variable '{name}'"
                    break
            else:
                if default is not None:
                    result = default
                    source = "default value"

        if result is not None:
            shown = "***" if mask_in_logs else result
            logger.debug(f"Resolved credential from {source}: {shown}")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_names:
                error_msg += f" (checked env vars: {', '.join(env_var_names)})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_names[0] if env_var_names else None)

        return result

    def resolve_token(self, value: str | None = None, env_var_names: Sequence[str] = TOKEN_ENV_VARS) -> BearerToken:
        """Resolve the API token, raising CredentialNotFoundError when absent."""
        token = self.resolve(value=value, env_var_names=env_var_names, required=True)
        return BearerToken(token)

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Read a credential from a file.

        The path may come from `file_path` or from the environment variable
        `env_var_name`; ``~`` and ``$VAR`` are expanded. Contents are stripped.

        Returns:
            File contents, or None if the file is missing and not required.

        Raises:
            CredentialFileError: If required=True and the file cannot be read.
        """
        path_to_use = None

        if file_path is not None:
            path_to_use = str(file_path)
        elif env_var_name:
            path_to_use = self.resolve(env_var_names=(env_var_name,), mask_in_logs=False)

        if path_to_use is None:
            if required:
                error_msg = "No file path provided for credential resolution"
                if env_var_name:
                    error_msg += f" (env var '{env_var_name}' not set)"
                raise CredentialFileError(error_msg)
            return None

        path_obj = Path(os.path.expanduser(os.path.expandvars(path_to_use)))

        try:
            content = path_obj.read_text().strip()
        except FileNotFoundError:
            error_msg = f"Credential file not found: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.debug(error_msg)
            return None
        except PermissionError:
            error_msg = f"Permission denied reading credential file: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.warning(error_msg)
            return None
        except OSError as e:
            error_msg = f"Error reading credential file {path_obj}: {e}"
            if required:
                raise CredentialFileError(error_msg) from e
            logger.warning(error_msg)
            return None

        logger.debug(f"Resolved credential from file: {path_obj} (***)")
        return content

    def resolve_token_from_file(self, **kwargs) -> BearerToken:
        """Read the API token from a file; the file must exist and be non-empty."""
        content = self.resolve_from_file(required=True, **kwargs)
        if not content:
            raise CredentialFileError("Credential file is empty")
        return BearerToken(content)
