"""Error taxonomy and status-code mapping for the 10,000ft API client."""

from tenkft_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConfigurationError,
    ConflictError,
    DecodeError,
    ForbiddenError,
    IncompletePaginationError,
    NotFoundError,
    RateLimitError,
    RequestCancelledError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from tenkft_client.errors.handler import decode_json, raise_for_status

__all__ = [
    "APIError",
    "BadRequestError",
    "ClientError",
    "ConfigurationError",
    "ConflictError",
    "DecodeError",
    "ForbiddenError",
    "IncompletePaginationError",
    "NotFoundError",
    "RateLimitError",
    "RequestCancelledError",
    "ServerError",
    "TransportError",
    "UnauthorizedError",
    "ValidationError",
    "decode_json",
    "raise_for_status",
]
