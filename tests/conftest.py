"""Pytest configuration and fixtures."""

import os
from unittest.mock import patch

import pytest

from tests.helpers import TEST_PRIVATE_KEY, TEST_PUBLIC_KEY

# Settings are read once at import of the app, so the env has to be in place first
os.environ["VAPID_PUBLIC_KEY"] = TEST_PUBLIC_KEY
os.environ["VAPID_PRIVATE_KEY"] = TEST_PRIVATE_KEY
os.environ["VAPID_SUBJECT"] = "mailto:test@example.com"
os.environ["ENVIRONMENT"] = "development"

from fastapi.testclient import TestClient  # noqa: E402

from pushrelay.main import app  # noqa: E402
from pushrelay.services.push_transport import WebPushTransport  # noqa: E402
from pushrelay.services.subscription_store import InMemorySubscriptionRepository  # noqa: E402
from pushrelay.services.vapid import VapidKeys  # noqa: E402


@pytest.fixture
def mock_webpush():
    """Replace the pywebpush call used by the transport."""
    with patch("pushrelay.services.push_transport.webpush") as mocked:
        yield mocked


@pytest.fixture
def vapid_keys():
    """VAPID keys matching the test environment."""
    return VapidKeys(
        public_key=TEST_PUBLIC_KEY,
        private_key=TEST_PRIVATE_KEY,
        subject="mailto:test@example.com",
    )


@pytest.fixture
def store():
    """Empty in-memory subscription store."""
    return InMemorySubscriptionRepository()


@pytest.fixture
def transport(vapid_keys):
    """Transport with a short timeout."""
    return WebPushTransport(vapid_keys, timeout=1.0, ttl=60)


@pytest.fixture
def client(mock_webpush):
    """Create a test client; the lifespan builds a fresh store per test."""
    with TestClient(app) as test_client:
        yield test_client
