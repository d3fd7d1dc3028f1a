"""Admission of browser push subscriptions."""

import logging

from fastapi import BackgroundTasks

from pushrelay.schemas.notification import (
    NotificationMessage,
    PushSubscriptionCreate,
    RegistrationAck,
    Subscription,
)
from pushrelay.services.errors import ValidationError
from pushrelay.services.push_transport import WebPushTransport
from pushrelay.services.subscription_store import SubscriptionRepository

logger = logging.getLogger(__name__)

# Key material every endpoint needs for aes128gcm payload encryption
REQUIRED_KEYS = ("p256dh", "auth")

WELCOME_MESSAGE = NotificationMessage(
    title="Welcome to Simple PWA",
    body="You are now subscribed to notifications!",
)


class SubscriptionRegistrar:
    """Validates subscriptions and admits them into the store."""

    def __init__(
        self,
        store: SubscriptionRepository,
        transport: WebPushTransport,
        welcome_enabled: bool = True,
    ) -> None:
        self.store = store
        self.transport = transport
        self.welcome_enabled = welcome_enabled

    async def register(
        self,
        candidate: PushSubscriptionCreate,
        background_tasks: BackgroundTasks | None = None,
    ) -> RegistrationAck:
        """
        Store a subscription submitted by the browser.

        Raises ValidationError if the endpoint is blank or the p256dh/auth keys
        are missing or blank.
        When background tasks are supplied, a welcome push is queued for the
        new subscription only.
        """
        endpoint = (candidate.endpoint or "").strip()
        keys = candidate.keys or {}
        missing_keys = [name for name in REQUIRED_KEYS if not (keys.get(name) or "").strip()]
        if not endpoint or missing_keys:
            logger.warning(f"Rejected subscription, missing endpoint or keys {missing_keys}")
            raise ValidationError("Invalid subscription object")

        subscription = Subscription(endpoint=endpoint, keys=keys)
        await self.store.add(subscription)
        logger.info(f"Subscription added: {subscription.endpoint}")

        if self.welcome_enabled and background_tasks is not None:
            background_tasks.add_task(self.send_welcome, subscription)

        return RegistrationAck(message="Subscription added successfully")

    async def send_welcome(self, subscription: Subscription) -> None:
        """Best-effort welcome push. Failures are logged, never raised, never evict."""
        try:
            outcome = await self.transport.deliver(subscription, WELCOME_MESSAGE.to_payload())
        except Exception as e:
            logger.error(f"Error sending welcome notification: {e}")
            return
        if not outcome.delivered:
            logger.error(
                f"Error sending welcome notification to {subscription.endpoint}: {outcome.error}"
            )

    async def unregister(self, endpoint: str) -> bool:
        """Remove a subscription by endpoint."""
        removed = await self.store.remove_endpoint(endpoint)
        if removed:
            logger.info(f"Subscription removed: {endpoint}")
        return removed
