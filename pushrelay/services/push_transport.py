"""Web push transport built on pywebpush."""

import asyncio
import logging

from pywebpush import WebPushException, webpush

from pushrelay.schemas.notification import DeliveryOutcome, DeliveryStatus, Subscription
from pushrelay.services.errors import PermanentDeliveryError, TransientDeliveryError
from pushrelay.services.vapid import VapidKeys

logger = logging.getLogger(__name__)

# Push services answer 404/410 for subscriptions that expired or were revoked.
GONE_STATUS_CODES = frozenset({404, 410})


class WebPushTransport:
    """Sends encrypted payloads to a single push endpoint."""

    def __init__(self, keys: VapidKeys, timeout: float = 5.0, ttl: int = 0) -> None:
        self.keys = keys
        self.timeout = timeout
        self.ttl = ttl

    def send(self, subscription: Subscription, payload: str) -> None:
        """Blocking send. Raises PermanentDeliveryError or TransientDeliveryError."""
        try:
            webpush(
                subscription_info=subscription.to_subscription_info(),
                data=payload,
                vapid_private_key=self.keys.private_key,
                vapid_claims=self.keys.claims(),
                timeout=self.timeout,
                ttl=self.ttl,
            )
        except WebPushException as e:
            status_code = e.response.status_code if e.response is not None else None
            if status_code in GONE_STATUS_CODES:
                raise PermanentDeliveryError(subscription.endpoint, str(e), status_code) from e
            raise TransientDeliveryError(subscription.endpoint, str(e), status_code) from e
        except Exception as e:
            # Network errors, timeouts and bad key material all land here
            raise TransientDeliveryError(subscription.endpoint, str(e)) from e

    async def deliver(self, subscription: Subscription, payload: str) -> DeliveryOutcome:
        """Send in a worker thread and report the result instead of raising."""
        try:
            await asyncio.to_thread(self.send, subscription, payload)
        except PermanentDeliveryError as e:
            logger.error(
                f"Push failed permanently for {subscription.endpoint} ({e.status_code}): {e}"
            )
            return DeliveryOutcome(
                subscription=subscription,
                status=DeliveryStatus.FAILED_PERMANENT,
                status_code=e.status_code,
                error=str(e),
            )
        except TransientDeliveryError as e:
            logger.warning(f"Push failed for {subscription.endpoint}: {e}")
            return DeliveryOutcome(
                subscription=subscription,
                status=DeliveryStatus.FAILED_TRANSIENT,
                status_code=e.status_code,
                error=str(e),
            )
        return DeliveryOutcome(subscription=subscription, status=DeliveryStatus.DELIVERED)
