"""Subscription storage for web push endpoints."""

import asyncio
import logging
from abc import ABC, abstractmethod

from pushrelay.schemas.notification import Subscription

logger = logging.getLogger(__name__)


class SubscriptionRepository(ABC):
    """Storage contract used by the registrar and the relay.

    Records are identified by endpoint. Duplicate endpoints are allowed;
    removal drops the first record with a matching endpoint, which is not
    necessarily the one a caller got back from ``list()``.
    """

    @abstractmethod
    async def add(self, subscription: Subscription) -> None:
        """Store a validated subscription."""

    @abstractmethod
    async def list(self) -> tuple[Subscription, ...]:
        """Return a snapshot of the current subscriptions."""

    @abstractmethod
    async def remove_endpoint(self, endpoint: str) -> bool:
        """Remove one record with this endpoint. Returns False if none matched."""

    @abstractmethod
    async def count(self) -> int:
        """Number of stored subscriptions."""

    @abstractmethod
    async def clear(self) -> None:
        """Drop every stored subscription."""

    async def remove(self, subscription: Subscription) -> bool:
        """Remove one record matching the subscription's endpoint."""
        return await self.remove_endpoint(subscription.endpoint)


class InMemorySubscriptionRepository(SubscriptionRepository):
    """Process-lifetime subscription list with serialized mutations."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []
        self._lock = asyncio.Lock()

    async def add(self, subscription: Subscription) -> None:
        async with self._lock:
            self._subscriptions.append(subscription)
        logger.debug(f"Stored subscription {subscription.endpoint}")

    async def list(self) -> tuple[Subscription, ...]:
        return tuple(self._subscriptions)

    async def remove_endpoint(self, endpoint: str) -> bool:
        async with self._lock:
            for index, stored in enumerate(self._subscriptions):
                if stored.endpoint == endpoint:
                    del self._subscriptions[index]
                    logger.debug(f"Removed subscription {endpoint}")
                    return True
        return False

    async def count(self) -> int:
        return len(self._subscriptions)

    async def clear(self) -> None:
        async with self._lock:
            self._subscriptions.clear()
