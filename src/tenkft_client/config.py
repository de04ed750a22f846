"""Static configuration for the 10,000ft API client."""

from tenkft_client.errors.exceptions import ConfigurationError

PRODUCTION = "https://api.10000ft.com/api/v1"
STAGING = "https://vnext.10000ft.com/api/v1"
ENVIRONMENTS: frozenset[str] = frozenset([PRODUCTION, STAGING])

# The API reads the token from a custom header, not `Authorization`
AUTH_HEADER = "auth"

TOKEN_ENV_VAR = "TENKFT_TOKEN"
ENVIRONMENT_ENV_VAR = "TENKFT_ENV"

# Backoff in seconds
RATE_LIMIT_BACKOFF = 10.0
ERROR_BACKOFF = 2.0

DEFAULT_TIMEOUT = 30.0

# First-page size overrides used by the "get all" operations
LARGE_PAGE_SIZE = 201
ASSIGNMENT_PAGE_SIZE = 250
REFERENCE_PAGE_SIZE = 50


def validate_environment(env: str | None) -> str:
    """Return `env` if it is one of the known base URLs.

    Raises:
        ConfigurationError: If `env` is neither PRODUCTION nor STAGING.
    """
    if env not in ENVIRONMENTS:
        raise ConfigurationError(f"env must be either {PRODUCTION}, or {STAGING} (got {env!r})")
    return env
