"""Request execution with fixed-backoff retry for the 10,000ft API.

A `RequestSpec` describes one logical call. `RequestExecutor.execute` turns it
into one or more HTTP exchanges:

| Response | Budget left | Action |
|----------|-------------|--------|
| 429 | > 0 | wait `RATE_LIMIT_BACKOFF` (10s), retry |
| other non-2xx | > 0 | wait `ERROR_BACKOFF` (2s), retry |
| any non-2xx | 0 | raise the status-mapped `APIError` |
| 2xx | any | return the response |

Both branches draw on one shared budget, so at most `max_retries + 1`
requests are sent. Connection-level failures are never retried.

## Example

```python
import httpx

from tenkft_client.transport.executor import RequestExecutor, RequestSpec

with httpx.Client() as client:
    executor = RequestExecutor(client)
    spec = RequestSpec(url="https://api.10000ft.com/api/v1/users?", headers={"auth": token}, max_retries=3)
    response = executor.execute(spec)
```
"""

import logging
import threading
import time
from dataclasses import dataclass, field, replace

import httpx

from tenkft_client.config import ERROR_BACKOFF, RATE_LIMIT_BACKOFF
from tenkft_client.errors.exceptions import ConfigurationError, RequestCancelledError, TransportError
from tenkft_client.errors.handler import raise_for_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestSpec:
    """One logical API call.

    Attributes:
        url: Full request URL including any query string. Must not be empty.
        method: HTTP method. Empty means GET.
        body: Raw request body. Kept as bytes so every attempt can resend it.
        headers: Extra headers, applied over the default JSON content type.
        max_retries: Remaining retry budget.
    """

    url: str
    method: str = "GET"
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    max_retries: int = 0

    def __post_init__(self) -> None:
        if not self.url:
            raise ConfigurationError("URL cannot be empty")
        if not self.method:
            object.__setattr__(self, "method", "GET")
        if self.max_retries < 0:
            raise ConfigurationError(f"max_retries must be non-negative (got {self.max_retries})")

    def retried(self) -> "RequestSpec":
        """Return a copy with one less retry left."""
        return replace(self, max_retries=self.max_retries - 1)


class RequestExecutor:
    """Send `RequestSpec`s through an `httpx.Client`, retrying failed responses.

    Args:
        client: The client used to build and send requests.
        rate_limit_backoff: Seconds to wait before retrying a 429.
        error_backoff: Seconds to wait before retrying any other non-2xx.
    """

    DEFAULT_HEADERS: dict[str, str] = {"Content-Type": "application/json"}

    def __init__(
        self,
        client: httpx.Client,
        *,
        rate_limit_backoff: float = RATE_LIMIT_BACKOFF,
        error_backoff: float = ERROR_BACKOFF,
    ) -> None:
        self._client = client
        self.rate_limit_backoff = rate_limit_backoff
        self.error_backoff = error_backoff

    def execute(self, spec: RequestSpec, cancel: threading.Event | None = None) -> httpx.Response:
        """Execute `spec`, retrying within its budget.

        Args:
            spec: The request to send.
            cancel: Optional event. Checked before every send and waited on
                instead of sleeping during backoff.

        Returns:
            The successful response, body already read.

        Raises:
            TransportError: The request could not be sent or a 2xx body could not be read.
            RequestCancelledError: `cancel` was set.
            APIError: A status-mapped subclass once the budget is exhausted.
        """
        budget = spec.max_retries
        attempt = 0

        while True:
            self._check_cancelled(spec, cancel)
            response, readable = self._send(spec)

            delay = self._retry_delay(response, spec.max_retries)
            if delay is not None:
                attempt += 1
                logger.warning(
                    f"Request {spec.method} {spec.url} failed with {response.status_code}, "
                    f"retrying in {delay}s (attempt {attempt}/{budget})"
                )
                self._wait(spec, delay, cancel)
                spec = spec.retried()
                continue

            if response.is_success and not readable:
                raise TransportError(
                    f"Request {spec.method} {spec.url} returned {response.status_code} "
                    "but the response body could not be read",
                    status_code=response.status_code,
                    response=response,
                )

            raise_for_status(response)
            return response

    def _retry_delay(self, response: httpx.Response, remaining: int) -> float | None:
        """Return the backoff before the next attempt, or None if this response is final."""
        if remaining <= 0:
            return None

        if response.status_code == 429:
            return self.rate_limit_backoff

        if not response.is_success:
            return self.error_backoff

        return None

    def _build_request(self, spec: RequestSpec) -> httpx.Request:
        headers = httpx.Headers(self.DEFAULT_HEADERS)
        for key, value in spec.headers.items():
            headers[key] = value

        return self._client.build_request(
            spec.method,
            spec.url,
            content=spec.body or None,
            headers=headers,
        )

    def _send(self, spec: RequestSpec) -> tuple[httpx.Response, bool]:
        """Send one attempt and drain the body.

        Returns:
            The closed response and whether its body was read successfully.
        """
        request = self._build_request(spec)

        try:
            response = self._client.send(request, stream=True)
        except httpx.TransportError as e:
            raise TransportError(f"Request {spec.method} {spec.url} failed: {e}") from e

        readable = True
        try:
            response.read()
        except (httpx.HTTPError, httpx.StreamError) as e:
            logger.debug(f"Could not read response body from {spec.method} {spec.url}: {e}")
            readable = False
        finally:
            response.close()

        return response, readable

    @staticmethod
    def _check_cancelled(spec: RequestSpec, cancel: threading.Event | None) -> None:
        if cancel is not None and cancel.is_set():
            raise RequestCancelledError(f"Request {spec.method} {spec.url} was cancelled")

    @staticmethod
    def _wait(spec: RequestSpec, delay: float, cancel: threading.Event | None) -> None:
        if cancel is None:
            time.sleep(delay)
            return

        if cancel.wait(delay):
            raise RequestCancelledError(f"Request {spec.method} {spec.url} was cancelled during backoff")
