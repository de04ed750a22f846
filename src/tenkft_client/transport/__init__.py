"""Request execution and pagination for the 10,000ft API.

Modules:
    executor: `RequestSpec` and `RequestExecutor` with fixed-backoff retry
    pagination: `fetch_all`, sequential page accumulation

Example:
    ```python
    import httpx

    from tenkft_client.transport import RequestExecutor, RequestSpec, fetch_all

    with httpx.Client() as client:
        executor = RequestExecutor(client)
        response = executor.execute(RequestSpec(url=url, headers={"auth": token}, max_retries=3))
    ```
"""

from tenkft_client.transport.executor import RequestExecutor, RequestSpec
from tenkft_client.transport.pagination import fetch_all

__all__ = ["RequestExecutor", "RequestSpec", "fetch_all"]
