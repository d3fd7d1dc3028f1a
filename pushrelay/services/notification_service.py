"""Notification fan-out to every stored push subscription."""

import asyncio
import logging

from pushrelay.schemas.notification import (
    BroadcastResult,
    DeliveryOutcome,
    NotificationCreate,
    NotificationMessage,
)
from pushrelay.services.errors import InvalidMessage
from pushrelay.services.push_transport import WebPushTransport
from pushrelay.services.subscription_store import SubscriptionRepository

logger = logging.getLogger(__name__)


def build_message(request: NotificationCreate) -> NotificationMessage:
    """Turn a broadcast request into a message, applying tag/url defaults."""
    if not _has_text(request.title) or not _has_text(request.body):
        raise InvalidMessage("Missing required fields")

    fields = {"title": request.title, "body": request.body}
    if request.tag:
        fields["tag"] = request.tag
    if request.url:
        fields["url"] = request.url
    return NotificationMessage(**fields)


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


class NotificationRelay:
    """Delivers one message to every subscription and prunes the ones that are gone."""

    def __init__(self, store: SubscriptionRepository, transport: WebPushTransport) -> None:
        self.store = store
        self.transport = transport

    async def broadcast(self, message: NotificationMessage) -> BroadcastResult:
        """
        Send a message to all current subscriptions concurrently.

        Every subscription gets exactly one attempt. Failures are counted, never
        raised; subscriptions reported gone are removed once all attempts finish.
        """
        if not _has_text(message.title) or not _has_text(message.body):
            raise InvalidMessage("Missing required fields")

        subscriptions = await self.store.list()
        if not subscriptions:
            logger.info("No active subscriptions, nothing to send")
            return BroadcastResult()

        payload = message.to_payload()
        outcomes: list[DeliveryOutcome] = await asyncio.gather(
            *(self.transport.deliver(subscription, payload) for subscription in subscriptions)
        )

        evicted = 0
        for outcome in outcomes:
            if outcome.is_permanent_failure:
                if await self.store.remove(outcome.subscription):
                    evicted += 1
                    logger.info(f"Removing expired subscription {outcome.endpoint}")

        delivered = sum(1 for outcome in outcomes if outcome.delivered)
        result = BroadcastResult(
            attempted=len(outcomes),
            delivered=delivered,
            failed=len(outcomes) - delivered,
            evicted=evicted,
        )
        logger.info(
            f"Sent push to {result.delivered}/{result.attempted} devices "
            f"({result.failed} failed, {result.evicted} evicted)"
        )
        return result
