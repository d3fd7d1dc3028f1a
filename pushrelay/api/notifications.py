"""Notification API endpoints for push subscriptions and broadcasts."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, status

from pushrelay.api.dependencies import get_registrar, get_relay, get_vapid_keys
from pushrelay.schemas.notification import (
    MessageResponse,
    NotificationCreate,
    PushSubscriptionCreate,
    RegistrationAck,
    SendNotificationResponse,
    VapidPublicKeyResponse,
)
from pushrelay.services.notification_service import NotificationRelay, build_message
from pushrelay.services.subscription_service import SubscriptionRegistrar
from pushrelay.services.vapid import VapidKeys

router = APIRouter(tags=["notifications"])


@router.get("/vapid-public-key", response_model=VapidPublicKeyResponse)
async def get_vapid_public_key(
    keys: Annotated[VapidKeys, Depends(get_vapid_keys)],
) -> VapidPublicKeyResponse:
    """Get the VAPID public key for push notification subscription."""
    return VapidPublicKeyResponse(public_key=keys.get_public_key())


@router.post("/subscribe", response_model=RegistrationAck, status_code=status.HTTP_201_CREATED)
async def subscribe_push(
    subscription: PushSubscriptionCreate,
    background_tasks: BackgroundTasks,
    registrar: Annotated[SubscriptionRegistrar, Depends(get_registrar)],
) -> RegistrationAck:
    """Subscribe to push notifications."""
    return await registrar.register(subscription, background_tasks)


@router.delete("/subscribe", response_model=MessageResponse)
async def unsubscribe_push(
    endpoint: str,
    registrar: Annotated[SubscriptionRegistrar, Depends(get_registrar)],
) -> MessageResponse:
    """Unsubscribe from push notifications."""
    if await registrar.unregister(endpoint):
        return MessageResponse(message="Unsubscribed successfully")
    return MessageResponse(message="Subscription not found")


@router.post("/send-notification", response_model=SendNotificationResponse)
async def send_notification(
    request: NotificationCreate,
    relay: Annotated[NotificationRelay, Depends(get_relay)],
) -> SendNotificationResponse:
    """Broadcast a notification to every subscribed device."""
    message = build_message(request)
    result = await relay.broadcast(message)

    if result.attempted == 0:
        return SendNotificationResponse(
            success=True,
            message="No active subscriptions to send notifications to",
        )

    return SendNotificationResponse(
        success=True,
        message=f"Notifications sent: {result.delivered} successful, {result.failed} failed",
        attempted=result.attempted,
        delivered=result.delivered,
        failed=result.failed,
    )
