"""Tests for request execution and fixed-backoff retry."""

import json
import threading

import httpx
import pytest

from tenkft_client.errors.exceptions import (
    APIError,
    ConfigurationError,
    NotFoundError,
    RateLimitError,
    RequestCancelledError,
    ServerError,
    TransportError,
)
from tenkft_client.testing import RecordingTransport, sequence_handler
from tenkft_client.transport.executor import RequestExecutor, RequestSpec

URL = "https://vnext.10000ft.com/api/v1/users?"


def make_executor(handler) -> tuple[RequestExecutor, RecordingTransport]:
    transport = RecordingTransport(handler)
    return RequestExecutor(httpx.Client(transport=transport)), transport


class BrokenStream(httpx.SyncByteStream):
    """Response body that fails while being read."""

    def __iter__(self):
        raise httpx.ReadError("connection reset while reading body")
        yield b""  # pragma: no cover


class TestRequestSpec:
    """Test RequestSpec construction rules."""

    @pytest.mark.unit
    def test_empty_url_is_configuration_error(self):
        with pytest.raises(ConfigurationError, match="URL cannot be empty"):
            RequestSpec(url="")

    @pytest.mark.unit
    def test_empty_method_defaults_to_get(self):
        spec = RequestSpec(url=URL, method="")

        assert spec.method == "GET"

    @pytest.mark.unit
    def test_negative_budget_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            RequestSpec(url=URL, max_retries=-1)

    @pytest.mark.unit
    def test_retried_returns_decremented_copy(self):
        spec = RequestSpec(url=URL, max_retries=3)

        retried = spec.retried()

        assert retried.max_retries == 2
        assert spec.max_retries == 3
        assert retried.url == spec.url


class TestRequestBuilding:
    """Test headers and body of the outgoing request."""

    @pytest.mark.unit
    def test_sets_json_content_type(self):
        executor, transport = make_executor(lambda request: httpx.Response(200, json={}))

        executor.execute(RequestSpec(url=URL))

        assert transport.requests[0].headers["Content-Type"] == "application/json"

    @pytest.mark.unit
    def test_caller_headers_override_default(self):
        executor, transport = make_executor(lambda request: httpx.Response(200, json={}))

        executor.execute(RequestSpec(url=URL, headers={"content-type": "text/plain", "auth": "secret"}))

        request = transport.requests[0]
        assert request.headers.get_list("Content-Type") == ["text/plain"]
        assert request.headers["auth"] == "secret"

    @pytest.mark.unit
    def test_body_resent_on_every_attempt(self, sleeps):
        body = json.dumps({"first_name": "Ada"}).encode()
        handler = sequence_handler([httpx.Response(503), httpx.Response(503), httpx.Response(201, json={})])
        executor, transport = make_executor(handler)

        executor.execute(RequestSpec(url=URL, method="POST", body=body, max_retries=2))

        assert len(transport.requests) == 3
        assert all(request.content == body for request in transport.requests)
        assert all(request.method == "POST" for request in transport.requests)


class TestRetry:
    """Test retry classification and budget accounting."""

    @pytest.mark.unit
    @pytest.mark.parametrize("status_code", [200, 201, 204, 299])
    def test_success_returns_without_retry(self, status_code, sleeps):
        executor, transport = make_executor(lambda request: httpx.Response(status_code))

        response = executor.execute(RequestSpec(url=URL, max_retries=5))

        assert response.status_code == status_code
        assert len(transport.requests) == 1
        assert sleeps == []

    @pytest.mark.unit
    def test_rate_limit_uses_long_backoff(self, sleeps):
        handler = sequence_handler([httpx.Response(429), httpx.Response(200, json={"ok": True})])
        executor, transport = make_executor(handler)

        response = executor.execute(RequestSpec(url=URL, max_retries=1))

        assert response.json() == {"ok": True}
        assert len(transport.requests) == 2
        assert sleeps == [10.0]

    @pytest.mark.unit
    def test_server_error_uses_short_backoff(self, sleeps):
        handler = sequence_handler([httpx.Response(500), httpx.Response(200)])
        executor, _ = make_executor(handler)

        executor.execute(RequestSpec(url=URL, max_retries=1))

        assert sleeps == [2.0]

    @pytest.mark.unit
    def test_client_errors_are_retried_too(self, sleeps):
        handler = sequence_handler([httpx.Response(404), httpx.Response(200)])
        executor, transport = make_executor(handler)

        executor.execute(RequestSpec(url=URL, max_retries=1))

        assert len(transport.requests) == 2

    @pytest.mark.unit
    def test_budget_is_shared_between_rate_limit_and_errors(self, sleeps):
        handler = sequence_handler([httpx.Response(429), httpx.Response(503), httpx.Response(502, text="still down")])
        executor, transport = make_executor(handler)

        with pytest.raises(ServerError) as exc_info:
            executor.execute(RequestSpec(url=URL, max_retries=2))

        assert len(transport.requests) == 3
        assert sleeps == [10.0, 2.0]
        assert exc_info.value.status_code == 502

    @pytest.mark.unit
    @pytest.mark.parametrize("status_code", [400, 404, 429, 500, 503])
    @pytest.mark.parametrize("max_retries", [0, 1, 3])
    def test_at_most_budget_plus_one_requests(self, status_code, max_retries, sleeps):
        executor, transport = make_executor(lambda request: httpx.Response(status_code, text="nope"))

        with pytest.raises(APIError) as exc_info:
            executor.execute(RequestSpec(url=URL, max_retries=max_retries))

        assert len(transport.requests) == max_retries + 1
        assert len(sleeps) == max_retries
        assert exc_info.value.status_code == status_code

    @pytest.mark.unit
    def test_error_reflects_last_response(self, sleeps):
        handler = sequence_handler([httpx.Response(500, text="first"), httpx.Response(404, text="last")])
        executor, _ = make_executor(handler)

        with pytest.raises(NotFoundError) as exc_info:
            executor.execute(RequestSpec(url=URL, max_retries=1))

        assert str(exc_info.value) == "HTTP 404: last"
        assert exc_info.value.response.text == "last"

    @pytest.mark.unit
    def test_rate_limit_without_budget_is_terminal(self, sleeps):
        executor, transport = make_executor(lambda request: httpx.Response(429, text="slow down"))

        with pytest.raises(RateLimitError) as exc_info:
            executor.execute(RequestSpec(url=URL, max_retries=0))

        assert len(transport.requests) == 1
        assert sleeps == []
        assert "429" in str(exc_info.value)
        assert "slow down" in str(exc_info.value)

    @pytest.mark.unit
    def test_retry_is_logged(self, sleeps, caplog):
        import logging

        caplog.set_level(logging.WARNING)
        handler = sequence_handler([httpx.Response(429), httpx.Response(200)])
        executor, _ = make_executor(handler)

        executor.execute(RequestSpec(url=URL, max_retries=3))

        assert "failed with 429, retrying in 10.0s (attempt 1/3)" in caplog.text


class TestFailures:
    """Test terminal failures that are not retried."""

    @pytest.mark.unit
    def test_transport_error_is_not_retried(self, sleeps):
        attempt_count = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempt_count
            attempt_count += 1
            raise httpx.ConnectError("Connection refused")

        executor, _ = make_executor(handler)

        with pytest.raises(TransportError) as exc_info:
            executor.execute(RequestSpec(url=URL, max_retries=5))

        assert attempt_count == 1
        assert sleeps == []
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.unit
    def test_unreadable_error_body_keeps_status_code(self):
        executor, _ = make_executor(lambda request: httpx.Response(500, stream=BrokenStream()))

        with pytest.raises(ServerError) as exc_info:
            executor.execute(RequestSpec(url=URL))

        assert exc_info.value.status_code == 500
        assert str(exc_info.value) == "HTTP 500 (response body could not be read)"
        assert exc_info.value.response is not None

    @pytest.mark.unit
    def test_unreadable_success_body_is_transport_error(self):
        executor, _ = make_executor(lambda request: httpx.Response(200, stream=BrokenStream()))

        with pytest.raises(TransportError) as exc_info:
            executor.execute(RequestSpec(url=URL))

        assert exc_info.value.status_code == 200

    @pytest.mark.unit
    def test_response_is_closed(self):
        executor, _ = make_executor(lambda request: httpx.Response(200, json={"data": []}))

        response = executor.execute(RequestSpec(url=URL))

        assert response.is_closed
        assert response.json() == {"data": []}


class TestCancellation:
    """Test cancellation through a threading.Event."""

    @pytest.mark.unit
    def test_cancelled_before_send(self):
        executor, transport = make_executor(lambda request: httpx.Response(200))
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(RequestCancelledError):
            executor.execute(RequestSpec(url=URL), cancel=cancel)

        assert transport.requests == []

    @pytest.mark.unit
    def test_cancelled_during_backoff(self):
        cancel = threading.Event()

        def handler(request: httpx.Request) -> httpx.Response:
            cancel.set()
            return httpx.Response(503)

        executor, transport = make_executor(handler)

        with pytest.raises(RequestCancelledError):
            executor.execute(RequestSpec(url=URL, max_retries=3), cancel=cancel)

        assert len(transport.requests) == 1

    @pytest.mark.unit
    def test_unset_event_waits_instead_of_sleeping(self, sleeps):
        executor = RequestExecutor(
            httpx.Client(transport=httpx.MockTransport(sequence_handler([httpx.Response(503), httpx.Response(200)]))),
            error_backoff=0.01,
        )

        response = executor.execute(RequestSpec(url=URL, max_retries=1), cancel=threading.Event())

        assert response.status_code == 200
        assert sleeps == []
