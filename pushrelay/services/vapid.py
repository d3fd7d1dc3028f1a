"""VAPID key provisioning for web push."""

import base64
import binascii
import logging
from dataclasses import dataclass

from pushrelay.config import Settings
from pushrelay.services.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Uncompressed P-256 point: 0x04 prefix followed by 32-byte X and Y.
UNCOMPRESSED_POINT_LENGTH = 65


def url_base64_to_bytes(value: str) -> bytes:
    """Decode URL-safe base64, restoring any stripped padding."""
    padded = value + "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


@dataclass(frozen=True)
class VapidKeys:
    """The server's VAPID keypair and claim subject."""

    public_key: str
    private_key: str
    subject: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "VapidKeys":
        """Build the keypair from configuration, failing fast if it is incomplete."""
        public_key = (settings.vapid_public_key or "").strip()
        private_key = (settings.vapid_private_key or "").strip()

        missing = [
            name
            for name, value in (
                ("VAPID_PUBLIC_KEY", public_key),
                ("VAPID_PRIVATE_KEY", private_key),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing VAPID key material: {', '.join(missing)}")

        keys = cls(public_key=public_key, private_key=private_key, subject=settings.vapid_subject)
        keys.public_key_bytes()
        logger.info("VAPID keys loaded")
        return keys

    def get_public_key(self) -> str:
        return self.public_key

    def public_key_bytes(self) -> bytes:
        """Decode the public key into the raw bytes browsers use as applicationServerKey."""
        try:
            raw = url_base64_to_bytes(self.public_key)
        except (binascii.Error, ValueError) as e:
            raise ConfigurationError(f"VAPID_PUBLIC_KEY is not valid URL-safe base64: {e}") from e

        if len(raw) != UNCOMPRESSED_POINT_LENGTH or raw[0] != 0x04:
            raise ConfigurationError(
                f"VAPID_PUBLIC_KEY must be a {UNCOMPRESSED_POINT_LENGTH}-byte "
                "uncompressed P-256 point"
            )
        return raw

    def claims(self) -> dict[str, str]:
        """Fresh claims dict per send; pywebpush adds aud/exp to whatever it is given."""
        return {"sub": self.subject}
