"""Pytest configuration and shared fixtures for tenkft-client tests."""

import pytest

from tenkft_client.auth import CredentialResolver
from tenkft_client.transport import executor


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents a developer's TENKFT_* settings from leaking into tests.
    """
    import os

    test_prefixes = ("TEST_", "TENKFT_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def sleeps(monkeypatch):
    """Replace backoff sleeps with a recorder. Yields the list of requested delays."""
    delays: list[float] = []
    monkeypatch.setattr(executor.time, "sleep", delays.append)
    yield delays


@pytest.fixture
def resolver():
    """Credential resolver that ignores any .env file on the machine."""
    return CredentialResolver(load_dotenv=False)
