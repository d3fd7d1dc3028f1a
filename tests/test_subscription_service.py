"""Tests for the subscription registrar."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import BackgroundTasks

from pushrelay.schemas.notification import PushSubscriptionCreate
from pushrelay.services.errors import ValidationError
from pushrelay.services.subscription_service import SubscriptionRegistrar
from tests.helpers import make_subscription, push_error


@pytest.fixture
def registrar(store, transport):
    """Registrar over the test store and transport."""
    return SubscriptionRegistrar(store, transport)


@pytest.mark.asyncio
async def test_register_valid_subscription(registrar, store):
    """Test that a complete subscription is stored."""
    ack = await registrar.register(
        PushSubscriptionCreate(endpoint="e1", keys={"p256dh": "k1", "auth": "k2"})
    )

    assert ack.message == "Subscription added successfully"
    assert await store.count() == 1
    (stored,) = await store.list()
    assert stored.endpoint == "e1"
    assert stored.keys == {"p256dh": "k1", "auth": "k2"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "candidate",
    [
        PushSubscriptionCreate(endpoint="e1"),
        PushSubscriptionCreate(endpoint="", keys={}),
        PushSubscriptionCreate(keys={"p256dh": "k1", "auth": "k2"}),
        PushSubscriptionCreate(endpoint="e1", keys={}),
        PushSubscriptionCreate(endpoint="e1", keys={"foo": "bar"}),
        PushSubscriptionCreate(endpoint="e1", keys={"p256dh": "", "auth": "k"}),
        PushSubscriptionCreate(endpoint="e1", keys={"p256dh": "k1"}),
        PushSubscriptionCreate(endpoint="   ", keys={"p256dh": "k1", "auth": "k2"}),
    ],
)
async def test_register_rejects_incomplete_subscription(registrar, store, candidate):
    """Test that a blank endpoint or missing p256dh/auth leaves the store untouched."""
    with pytest.raises(ValidationError):
        await registrar.register(candidate)

    assert await store.count() == 0


@pytest.mark.asyncio
async def test_register_queues_welcome(registrar):
    """Test that a welcome push is queued when background tasks are available."""
    background_tasks = BackgroundTasks()

    await registrar.register(
        PushSubscriptionCreate(endpoint="e1", keys={"p256dh": "k1", "auth": "k2"}),
        background_tasks,
    )

    assert len(background_tasks.tasks) == 1
    assert background_tasks.tasks[0].func == registrar.send_welcome


@pytest.mark.asyncio
async def test_register_without_welcome(store, transport):
    """Test that the welcome push can be switched off."""
    registrar = SubscriptionRegistrar(store, transport, welcome_enabled=False)
    background_tasks = BackgroundTasks()

    await registrar.register(
        PushSubscriptionCreate(endpoint="e1", keys={"p256dh": "k1", "auth": "k2"}),
        background_tasks,
    )

    assert background_tasks.tasks == []


@pytest.mark.asyncio
async def test_send_welcome(registrar, mock_webpush):
    """Test the welcome payload."""
    await registrar.send_welcome(make_subscription("https://push.example/a"))

    assert mock_webpush.call_args.kwargs["data"] == (
        '{"title": "Welcome to Simple PWA", "body": "You are now subscribed to notifications!", '
        '"tag": "default", "url": "/"}'
    )


@pytest.mark.asyncio
async def test_send_welcome_failure_keeps_subscription(registrar, store, mock_webpush):
    """Test that a gone endpoint during welcome is logged, not evicted."""
    subscription = make_subscription("https://push.example/a")
    await store.add(subscription)
    mock_webpush.side_effect = push_error(410)

    await registrar.send_welcome(subscription)

    assert await store.count() == 1


@pytest.mark.asyncio
async def test_send_welcome_swallows_unexpected_errors(store):
    """Test that even a broken transport cannot raise out of the welcome send."""
    transport = MagicMock()
    transport.deliver = AsyncMock(side_effect=RuntimeError("boom"))
    registrar = SubscriptionRegistrar(store, transport)

    await registrar.send_welcome(make_subscription("https://push.example/a"))


@pytest.mark.asyncio
async def test_unregister(registrar, store):
    """Test removing a subscription by endpoint."""
    await store.add(make_subscription("https://push.example/a"))

    assert await registrar.unregister("https://push.example/a") is True
    assert await registrar.unregister("https://push.example/a") is False
    assert await store.count() == 0
