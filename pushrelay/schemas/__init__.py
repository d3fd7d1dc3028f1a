"""Pydantic schemas for API requests, responses and relay results."""

from pushrelay.schemas.notification import (
    BroadcastResult,
    DeliveryOutcome,
    DeliveryStatus,
    HealthResponse,
    MessageResponse,
    NotificationCreate,
    NotificationMessage,
    PushSubscriptionCreate,
    RegistrationAck,
    SendNotificationResponse,
    Subscription,
    VapidPublicKeyResponse,
)

__all__ = [
    "PushSubscriptionCreate",
    "Subscription",
    "NotificationCreate",
    "NotificationMessage",
    "DeliveryStatus",
    "DeliveryOutcome",
    "BroadcastResult",
    "RegistrationAck",
    "MessageResponse",
    "VapidPublicKeyResponse",
    "SendNotificationResponse",
    "HealthResponse",
]
