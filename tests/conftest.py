"""Pytest configuration and shared fixtures for digitalocean-client tests."""

import httpx
import pytest

from digitalocean_client import ClientConfig, DigitalOceanClient
from digitalocean_client.testing import FixedClock, RecordingSleep
from digitalocean_client.transport.retry import RateLimitGovernor, RetryPolicy


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing credential resolution.
    """
    import os

    test_prefixes = ("TEST_", "DIGITALOCEAN_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def config():
    """Config with deterministic retries (no jitter)."""
    return ClientConfig(token="test-token", jitter=0.0)


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def make_client(config, sleep, clock):
    """Factory building a client whose network is an httpx.MockTransport handler."""

    def _make(handler, *, cfg: ClientConfig | None = None) -> DigitalOceanClient:
        cfg = cfg or config
        governor = RateLimitGovernor(
            wrapped_transport=httpx.MockTransport(handler),
            policy=cfg.retry_policy(),
            sleep=sleep,
            clock=clock,
        )
        client = DigitalOceanClient(cfg, governor=governor)
        return client

    return _make


@pytest.fixture
def policy():
    return RetryPolicy(jitter=0.0)
