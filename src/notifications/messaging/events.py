"""Domain events for the StoreMessagingProfile aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from notifications.domain import notifications


@notifications.event(part_of="StoreMessagingProfile")
class WhatsAppCredentialsConfigured:
    """A store saved new MSG91 credentials. They start unverified."""

    __version__ = 1

    profile_id: Identifier(required=True)
    store_id: Identifier(required=True)
    whatsapp_number: String(required=True)
    configured_at: DateTime(required=True)


@notifications.event(part_of="StoreMessagingProfile")
class WhatsAppCredentialsVerified:
    __version__ = 1

    profile_id: Identifier(required=True)
    store_id: Identifier(required=True)
    verified_at: DateTime(required=True)


@notifications.event(part_of="StoreMessagingProfile")
class WhatsAppNotificationsToggled:
    __version__ = 1

    profile_id: Identifier(required=True)
    store_id: Identifier(required=True)
    enabled: Boolean(required=True)
    toggled_at: DateTime(required=True)
