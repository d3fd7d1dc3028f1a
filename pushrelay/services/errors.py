"""Exceptions raised by the push relay services."""


class PushRelayError(Exception):
    """Base class for all push relay failures."""


class ConfigurationError(PushRelayError):
    """Required VAPID key material is missing or malformed at startup."""


class ValidationError(PushRelayError):
    """A subscription or notification request was rejected before any mutation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidMessage(ValidationError):
    """A notification is missing its title or body."""


class DeliveryError(PushRelayError):
    """A single push delivery attempt failed."""

    def __init__(self, endpoint: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code


class TransientDeliveryError(DeliveryError):
    """Delivery failed but the endpoint may accept later messages."""


class PermanentDeliveryError(DeliveryError):
    """The push service reports the endpoint as gone for good."""
