"""MSG91 credential resolution — per-store credentials with platform fallback.

Resolution order for a send:

1. The store's cached credentials, if still fresh.
2. The store's own credentials, when they are verified and the store has
   WhatsApp notifications enabled. These are decrypted and cached.
3. Platform credentials from the environment.
4. None: the dispatcher runs in development (no-op) mode.
"""

from typing import Protocol

import structlog

from notifications.channel.whatsapp_port import WhatsAppCredentials
from shared.cache import Cache, TTLCache
from shared.config import PlatformSettings
from shared.crypto import decrypt

logger = structlog.get_logger(__name__)

CREDENTIALS_TTL_SECONDS = 5 * 60


class StoreMessagingRecord(Protocol):
    msg91_auth_key_encrypted: str | None
    msg91_whatsapp_number: str | None
    credentials_verified: bool
    whatsapp_notifications_enabled: bool


class StoreCredentialSource(Protocol):
    def lookup(self, store_id: str) -> StoreMessagingRecord | None: ...


class CredentialResolver:
    def __init__(
        self,
        settings: PlatformSettings,
        source: StoreCredentialSource | None = None,
        cache: Cache | None = None,
        ttl_seconds: float = CREDENTIALS_TTL_SECONDS,
    ):
        self.settings = settings
        self.source = source
        self.cache = cache if cache is not None else TTLCache()
        self.ttl_seconds = ttl_seconds

    def platform_credentials(self) -> WhatsAppCredentials | None:
        if not self.settings.has_whatsapp_credentials:
            return None
        return WhatsAppCredentials(
            auth_key=self.settings.msg91_auth_key,
            integrated_number=self.settings.msg91_integrated_number,
            is_store_credentials=False,
        )

    def resolve(self, store_id: str | None = None) -> WhatsAppCredentials | None:
        if not store_id or self.source is None:
            return self.platform_credentials()

        cached = self.cache.get(store_id)
        if cached is not None:
            return cached

        try:
            record = self.source.lookup(store_id)
            if (
                record is not None
                and record.whatsapp_notifications_enabled
                and record.credentials_verified
                and record.msg91_auth_key_encrypted
                and record.msg91_whatsapp_number
            ):
                credentials = WhatsAppCredentials(
                    auth_key=decrypt(record.msg91_auth_key_encrypted),
                    integrated_number=record.msg91_whatsapp_number,
                    is_store_credentials=True,
                )
                self.cache.set(store_id, credentials, self.ttl_seconds)
                return credentials
        except Exception:
            logger.exception("Failed to load store messaging credentials", store_id=store_id)

        return self.platform_credentials()

    def clear_credentials(self, store_id: str) -> None:
        """Evict a store's cached credentials after they change."""
        self.cache.expire(store_id)
