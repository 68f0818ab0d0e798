"""Messaging profile commands — configure, verify and toggle WhatsApp.

Every change that affects which credentials a send would use evicts the
store's entry from the dispatcher's credential cache.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from notifications.domain import notifications
from notifications.messaging.notifier import get_dispatcher
from notifications.messaging.profile import StoreMessagingProfile, profile_for_store


def _existing_profile(store_id: str) -> StoreMessagingProfile:
    profile = profile_for_store(store_id)
    if profile is None:
        raise ObjectNotFoundError(f"No messaging profile for store {store_id}")
    return profile


@notifications.command(part_of="StoreMessagingProfile")
class ConfigureWhatsAppCredentials:
    store_id: Identifier(required=True)
    store_name: String(max_length=200)
    auth_key: String(required=True, max_length=200)
    whatsapp_number: String(required=True, max_length=20)


@notifications.command(part_of="StoreMessagingProfile")
class VerifyWhatsAppCredentials:
    store_id: Identifier(required=True)


@notifications.command(part_of="StoreMessagingProfile")
class SetWhatsAppNotifications:
    store_id: Identifier(required=True)
    enabled: Boolean(required=True)


@notifications.command_handler(part_of=StoreMessagingProfile)
class StoreMessagingProfileHandler:
    @handle(ConfigureWhatsAppCredentials)
    def configure_credentials(self, command: ConfigureWhatsAppCredentials):
        profile = profile_for_store(command.store_id)
        if profile is None:
            profile = StoreMessagingProfile.register(command.store_id, command.store_name)
        elif command.store_name:
            profile.store_name = command.store_name

        profile.configure_credentials(command.auth_key, command.whatsapp_number)
        current_domain.repository_for(StoreMessagingProfile).add(profile)
        get_dispatcher().credentials.clear_credentials(str(command.store_id))
        return str(profile.id)

    @handle(VerifyWhatsAppCredentials)
    def verify_credentials(self, command: VerifyWhatsAppCredentials):
        profile = _existing_profile(command.store_id)
        profile.mark_verified()
        current_domain.repository_for(StoreMessagingProfile).add(profile)
        get_dispatcher().credentials.clear_credentials(str(command.store_id))

    @handle(SetWhatsAppNotifications)
    def set_notifications(self, command: SetWhatsAppNotifications):
        profile = _existing_profile(command.store_id)
        profile.set_notifications_enabled(command.enabled)
        current_domain.repository_for(StoreMessagingProfile).add(profile)
        get_dispatcher().credentials.clear_credentials(str(command.store_id))
