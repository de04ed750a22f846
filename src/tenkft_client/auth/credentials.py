"""Multi-source resolution of the API token and environment.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv, loaded into the environment)
4. Default value

Example:
    ```python
    from tenkft_client.auth import CredentialResolver

    resolver = CredentialResolver()
    token = resolver.resolve(env_var_name="TENKFT_TOKEN", required=True)
    ```

Tokens are never logged in full; only the source they came from is.
"""

import logging
import os
from threading import Lock

from dotenv import load_dotenv

from tenkft_client.auth.exceptions import CredentialNotFoundError

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Resolve configuration values from an explicit value, the environment, or a default.

    The .env file is loaded at most once per resolver. Values already present
    in the process environment are not overridden by it.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize credential resolver.

        Args:
            dotenv_path: Path to .env file. If None, python-dotenv searches
                parent directories for one.
            load_dotenv: Whether to load the .env file at all.
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for credential resolution")
            except Exception as e:
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    @staticmethod
    def _mask(value: str | None) -> str:
        if value is None:
            return "None"
        return "***"

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Resolve a value from the first source that provides one.

        Args:
            value: Explicitly provided value. Wins over every other source.
            env_var_name: Environment variable to check.
            default: Fallback when no other source has a value.
            required: Raise instead of returning None when nothing resolves.
            mask_in_logs: Log "***" in place of the value. Disable only for
                non-secret values such as the environment URL.

        Returns:
            The resolved value, or None.

        Raises:
            CredentialNotFoundError: If required and no source has a value.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = self._mask(result) if mask_in_logs else result
            logger.debug(f"Resolved credential from {source}: {shown}")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result
