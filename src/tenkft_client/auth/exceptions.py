"""Exceptions raised while resolving API credentials.

Example:
    ```python
    from tenkft_client.auth.exceptions import CredentialNotFoundError

    if not token:
        raise CredentialNotFoundError("API token not found", env_var_name="TENKFT_TOKEN")
    ```
"""

from tenkft_client.errors.exceptions import ConfigurationError


class CredentialError(ConfigurationError):
    """Base exception for credential-related errors."""

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential cannot be resolved from any source.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name
