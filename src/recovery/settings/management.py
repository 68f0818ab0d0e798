"""Recovery settings command — create or update a store's schedule."""

import json

from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from recovery.domain import recovery
from recovery.settings.settings import StoreRecoverySettings
from recovery.sweep.sequence import EmailStep


def settings_for_store(store_id: str) -> StoreRecoverySettings | None:
    repo = current_domain.repository_for(StoreRecoverySettings)
    matches = repo._dao.query.filter(store_id=store_id).all().items
    return matches[0] if matches else None


def enabled_store_settings() -> list[StoreRecoverySettings]:
    repo = current_domain.repository_for(StoreRecoverySettings)
    return repo._dao.query.filter(enabled=True).limit(None).all().items


@recovery.command(part_of="StoreRecoverySettings")
class ConfigureCartRecovery:
    store_id: Identifier(required=True)
    store_name: String(required=True, max_length=200)
    store_slug: String(required=True, max_length=100)
    enabled: Boolean(default=True)
    email_sequence: Text()  # JSON list of {delay_hours, subject?}
    discount_code: String(max_length=50)
    discount_percentage: Integer()


@recovery.command_handler(part_of=StoreRecoverySettings)
class StoreRecoverySettingsHandler:
    @handle(ConfigureCartRecovery)
    def configure(self, command: ConfigureCartRecovery):
        steps = None
        if command.email_sequence:
            steps = [EmailStep.from_dict(step) for step in json.loads(command.email_sequence)]

        settings = settings_for_store(command.store_id)
        if settings is None:
            settings = StoreRecoverySettings.create(
                store_id=command.store_id,
                store_name=command.store_name,
                store_slug=command.store_slug,
                enabled=command.enabled,
                sequence=steps,
                discount_code=command.discount_code,
                discount_percentage=command.discount_percentage,
            )
        else:
            settings.store_name = command.store_name
            settings.store_slug = command.store_slug
            settings.enabled = command.enabled
            settings.discount_code = command.discount_code
            settings.discount_percentage = command.discount_percentage
            if steps is not None:
                settings.set_sequence(steps)

        current_domain.repository_for(StoreRecoverySettings).add(settings)
        return str(settings.id)
