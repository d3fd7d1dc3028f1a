"""Notification-related Pydantic schemas."""

import json
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class PushSubscriptionCreate(BaseModel):
    """Schema for a subscription submitted by the browser.

    Fields are optional here so that missing values reach the registrar and
    come back as a 400 with a readable message instead of a 422.
    """

    endpoint: str | None = None
    keys: dict[str, str] | None = None


class Subscription(BaseModel):
    """A stored push endpoint and the key material needed to encrypt for it."""

    model_config = ConfigDict(frozen=True)

    endpoint: str
    keys: dict[str, str]

    def to_subscription_info(self) -> dict:
        """Shape expected by pywebpush."""
        return {"endpoint": self.endpoint, "keys": dict(self.keys)}


class NotificationCreate(BaseModel):
    """Schema for a broadcast request."""

    title: str | None = None
    body: str | None = None
    tag: str | None = None
    url: str | None = None


class NotificationMessage(BaseModel):
    """An immutable notification payload, serialized identically for every subscription."""

    model_config = ConfigDict(frozen=True)

    title: str
    body: str
    tag: str = "default"
    url: str = "/"

    def to_payload(self) -> str:
        """Serialize to the JSON the service worker reads."""
        data = {"title": self.title, "body": self.body, "tag": self.tag, "url": self.url}
        return json.dumps(data)


class DeliveryStatus(StrEnum):
    """Result of one delivery attempt."""

    DELIVERED = "delivered"
    FAILED_PERMANENT = "failed-permanent"
    FAILED_TRANSIENT = "failed-transient"


class DeliveryOutcome(BaseModel):
    """Per-subscription result of one send attempt."""

    subscription: Subscription
    status: DeliveryStatus
    status_code: int | None = None
    error: str | None = None

    @property
    def endpoint(self) -> str:
        return self.subscription.endpoint

    @property
    def delivered(self) -> bool:
        return self.status == DeliveryStatus.DELIVERED

    @property
    def is_permanent_failure(self) -> bool:
        return self.status == DeliveryStatus.FAILED_PERMANENT


class BroadcastResult(BaseModel):
    """Aggregate of one fan-out pass."""

    attempted: int = 0
    delivered: int = 0
    failed: int = 0
    evicted: int = 0


class RegistrationAck(BaseModel):
    """Acknowledgement returned after a subscription is stored."""

    message: str


class MessageResponse(BaseModel):
    """Schema for plain message responses."""

    message: str


class VapidPublicKeyResponse(BaseModel):
    """Schema for VAPID public key response."""

    public_key: str = Field(serialization_alias="publicKey")


class SendNotificationResponse(BaseModel):
    """Schema for the broadcast summary."""

    success: bool
    message: str
    attempted: int = 0
    delivered: int = 0
    failed: int = 0


class HealthResponse(BaseModel):
    """Schema for the health check."""

    status: str
    subscriptions: int
