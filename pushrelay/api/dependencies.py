"""FastAPI dependencies for the relay components built at startup."""

from fastapi import Request

from pushrelay.services.notification_service import NotificationRelay
from pushrelay.services.subscription_service import SubscriptionRegistrar
from pushrelay.services.subscription_store import SubscriptionRepository
from pushrelay.services.vapid import VapidKeys


def get_store(request: Request) -> SubscriptionRepository:
    """Get the process-wide subscription store."""
    return request.app.state.store


def get_vapid_keys(request: Request) -> VapidKeys:
    """Get the VAPID keypair loaded at startup."""
    return request.app.state.vapid_keys


def get_registrar(request: Request) -> SubscriptionRegistrar:
    """Get the subscription registrar."""
    return request.app.state.registrar


def get_relay(request: Request) -> NotificationRelay:
    """Get the notification relay."""
    return request.app.state.relay
