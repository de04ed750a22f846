"""Credential resolution for the 10,000ft API client.

The API token is sent in the custom `auth` header. It can be passed
explicitly or picked up from the `TENKFT_TOKEN` environment variable or a
.env file.
"""

from tenkft_client.auth.credentials import CredentialResolver
from tenkft_client.auth.exceptions import CredentialError, CredentialNotFoundError

__all__ = [
    "CredentialError",
    "CredentialNotFoundError",
    "CredentialResolver",
]
