"""Builders shared across test modules."""

import base64
from unittest.mock import MagicMock

from pywebpush import WebPushException

from pushrelay.schemas.notification import Subscription

# A syntactically valid uncompressed P-256 point; never used to sign anything.
TEST_PUBLIC_KEY = base64.urlsafe_b64encode(b"\x04" + bytes(range(64))).rstrip(b"=").decode()
TEST_PRIVATE_KEY = "test-private-key"


def make_subscription(endpoint: str) -> Subscription:
    """Build a subscription with dummy key material."""
    keys = {"p256dh": f"{endpoint}-p256dh", "auth": f"{endpoint}-auth"}
    return Subscription(endpoint=endpoint, keys=keys)


def push_error(status_code: int) -> WebPushException:
    """Build the exception pywebpush raises for a non-2xx push service response."""
    response = MagicMock()
    response.status_code = status_code
    return WebPushException(f"Push failed: {status_code}", response=response)
