"""Structured exceptions for configuration and API errors."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class ConfigurationError(Exception):
    """Invalid client or request configuration. Raised before any network call."""

    pass


class APIError(Exception):
    """Base exception for API errors.

    `response` is the last response received, already read and closed, so the
    failing payload stays available for diagnostics.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class TransportError(APIError):
    """Connection-level failure (refused, timeout, DNS). Never retried."""

    pass


class DecodeError(APIError):
    """Response body was not valid JSON."""

    pass


class RequestCancelledError(APIError):
    """Cancellation was requested before a send or during a backoff wait."""

    pass


class IncompletePaginationError(APIError):
    """A page after the first failed while collecting a paginated resource.

    Attributes:
        collection: Items accumulated from the pages fetched before the failure.
        page: The page number whose fetch failed.
    """

    def __init__(self, message: str, collection: Any, page: int, **kwargs):
        super().__init__(message, **kwargs)
        self.collection = collection
        self.page = page


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class ValidationError(ClientError):
    """422 Unprocessable Entity."""

    pass


class RateLimitError(ClientError):
    """429 Too Many Requests, after the retry budget ran out."""

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(APIError):
    """5xx server errors."""

    pass
