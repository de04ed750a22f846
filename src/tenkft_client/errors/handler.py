"""Error handling utilities for HTTP responses."""

import logging
from typing import Any

import httpx

from tenkft_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    DecodeError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

EXCEPTION_MAP: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def response_text(response: httpx.Response) -> str | None:
    """Return the body of an already-read response, or None if it was never read."""
    try:
        return response.text
    except httpx.ResponseNotRead:
        return None


def raise_for_status(response: httpx.Response) -> None:
    """Raise appropriate exception for non-2xx responses.

    The message embeds the status code and the raw body text. When the body
    could not be read, the message carries the status code alone.

    Args:
        response: HTTP response object

    Raises:
        APIError subclass based on status code
    """
    if response.is_success:
        return

    status_code = response.status_code

    if status_code in EXCEPTION_MAP:
        exc_class = EXCEPTION_MAP[status_code]
    elif 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = APIError

    text = response_text(response)
    if text is None:
        message = f"HTTP {status_code} (response body could not be read)"
    else:
        message = f"HTTP {status_code}: {text}" if text else f"HTTP {status_code}"

    logger.debug(f"Raising {exc_class.__name__}: {message}")

    if exc_class is RateLimitError:
        retry_after = None
        if "retry-after" in response.headers:
            try:
                retry_after = int(response.headers["retry-after"])
            except (ValueError, TypeError):
                retry_after = None
        raise exc_class(
            message=message,
            retry_after=retry_after,
            status_code=status_code,
            response=response,
        )

    raise exc_class(message=message, status_code=status_code, response=response)


def decode_json(response: httpx.Response) -> Any:
    """Decode a JSON response body.

    Raises:
        DecodeError: If the body is not valid JSON. The parse failure is chained.
    """
    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(
            f"Could not decode response body as JSON: {e}",
            status_code=response.status_code,
            response=response,
        ) from e
