"""Testing utilities for code built on tenkft-client.

Example:
    ```python
    from tenkft_client import STAGING, TenKFTClient
    from tenkft_client.testing import (
        RecordingTransport,
        collection_payload,
        create_mock_response,
        sequence_handler,
    )

    transport = RecordingTransport(sequence_handler([create_mock_response(json=collection_payload([]))]))
    client = TenKFTClient(token="test-token", env=STAGING, transport=transport)
    ```
"""

from tenkft_client.testing.factories import (
    RecordingTransport,
    collection_payload,
    create_error_response,
    create_mock_response,
    paging_payload,
    sequence_handler,
)

__all__ = [
    "RecordingTransport",
    "collection_payload",
    "create_error_response",
    "create_mock_response",
    "paging_payload",
    "sequence_handler",
]
