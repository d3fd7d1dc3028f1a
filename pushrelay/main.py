"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pushrelay.api import notifications
from pushrelay.api.dependencies import get_store
from pushrelay.config import get_settings
from pushrelay.schemas.notification import HealthResponse
from pushrelay.services.errors import ValidationError
from pushrelay.services.notification_service import NotificationRelay
from pushrelay.services.push_transport import WebPushTransport
from pushrelay.services.subscription_service import SubscriptionRegistrar
from pushrelay.services.subscription_store import (
    InMemorySubscriptionRepository,
    SubscriptionRepository,
)
from pushrelay.services.vapid import VapidKeys

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

BROADCAST_PATH = "/send-notification"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the relay components on startup and drop subscriptions on shutdown."""
    # Raises ConfigurationError before anything is served if keys are missing
    current_settings = get_settings()
    vapid_keys = VapidKeys.from_settings(current_settings)

    store = InMemorySubscriptionRepository()
    transport = WebPushTransport(
        vapid_keys,
        timeout=current_settings.push_timeout_seconds,
        ttl=current_settings.push_ttl_seconds,
    )
    app.state.vapid_keys = vapid_keys
    app.state.store = store
    app.state.registrar = SubscriptionRegistrar(
        store,
        transport,
        welcome_enabled=current_settings.welcome_notification_enabled,
    )
    app.state.relay = NotificationRelay(store, transport)
    logger.info(f"Push relay started ({current_settings.environment})")

    yield

    logger.info(f"Push relay stopping, dropping {await store.count()} subscriptions")
    await store.clear()


app = FastAPI(
    title="Push Relay API",
    description="Web push subscription store and notification relay for the PWA demo",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(notifications.router)


def _error_content(request: Request, message: str) -> dict:
    if request.url.path == BROADCAST_PATH:
        return {"success": False, "message": message}
    return {"message": message}


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Map rejected subscriptions and notifications to a 400."""
    logger.warning(f"Rejected request to {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_content(request, exc.message),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies get the same 400 shape as rejected ones."""
    logger.warning(f"Malformed request to {request.url.path}: {exc.errors()}")
    message = (
        "Missing required fields" if request.url.path == BROADCAST_PATH else "Invalid request body"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_content(request, message),
    )


@app.get("/health", response_model=HealthResponse)
async def health_check(
    store: Annotated[SubscriptionRepository, Depends(get_store)],
) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok", subscriptions=await store.count())


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(
        "pushrelay.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
