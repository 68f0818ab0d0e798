"""StoreMessagingProfile aggregate — a store's own MSG91 WhatsApp account.

A store may bring its own MSG91 credentials. They are used for sends only
once verified and while the store keeps WhatsApp notifications enabled;
otherwise messages go out through the platform account.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from notifications.domain import notifications
from notifications.messaging.events import (
    WhatsAppCredentialsConfigured,
    WhatsAppCredentialsVerified,
    WhatsAppNotificationsToggled,
)
from shared.crypto import decrypt, encrypt, mask_secret


@notifications.aggregate
class StoreMessagingProfile:
    store_id: Identifier(required=True, unique=True)
    store_name: String(max_length=200)

    # MSG91
    msg91_auth_key_encrypted: Text()
    msg91_whatsapp_number: String(max_length=20)
    credentials_verified: Boolean(default=False)
    whatsapp_notifications_enabled: Boolean(default=True)

    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def register(cls, store_id, store_name=None):
        now = datetime.now(UTC)
        return cls(
            store_id=store_id,
            store_name=store_name,
            credentials_verified=False,
            whatsapp_notifications_enabled=True,
            created_at=now,
            updated_at=now,
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.msg91_auth_key_encrypted and self.msg91_whatsapp_number)

    def configure_credentials(self, auth_key: str, whatsapp_number: str):
        """Store a new auth key (encrypted) and sender number."""
        if not auth_key or not whatsapp_number:
            raise ValidationError({"credentials": ["Auth key and WhatsApp number are both required"]})

        now = datetime.now(UTC)
        self.msg91_auth_key_encrypted = encrypt(auth_key)
        self.msg91_whatsapp_number = whatsapp_number
        self.credentials_verified = False
        self.updated_at = now

        self.raise_(
            WhatsAppCredentialsConfigured(
                profile_id=str(self.id),
                store_id=str(self.store_id),
                whatsapp_number=whatsapp_number,
                configured_at=now,
            )
        )

    def mark_verified(self):
        if not self.has_credentials:
            raise ValidationError({"credentials": ["No WhatsApp credentials to verify"]})
        if self.credentials_verified:
            return

        now = datetime.now(UTC)
        self.credentials_verified = True
        self.updated_at = now
        self.raise_(
            WhatsAppCredentialsVerified(
                profile_id=str(self.id),
                store_id=str(self.store_id),
                verified_at=now,
            )
        )

    def set_notifications_enabled(self, enabled: bool):
        if self.whatsapp_notifications_enabled == enabled:
            return

        now = datetime.now(UTC)
        self.whatsapp_notifications_enabled = enabled
        self.updated_at = now
        self.raise_(
            WhatsAppNotificationsToggled(
                profile_id=str(self.id),
                store_id=str(self.store_id),
                enabled=enabled,
                toggled_at=now,
            )
        )

    def masked_auth_key(self) -> str:
        if not self.msg91_auth_key_encrypted:
            return mask_secret(None)
        return mask_secret(decrypt(self.msg91_auth_key_encrypted))


def profile_for_store(store_id: str) -> StoreMessagingProfile | None:
    repo = current_domain.repository_for(StoreMessagingProfile)
    profiles = repo._dao.query.filter(store_id=store_id).all().items
    return profiles[0] if profiles else None


class ProfileCredentialSource:
    """Looks up messaging profiles inside the notifications domain context."""

    def lookup(self, store_id: str) -> StoreMessagingProfile | None:
        with notifications.domain_context():
            return profile_for_store(store_id)
