"""StoreRecoverySettings aggregate — a store's reminder schedule and offer.

The email sequence is an ordered list of delays (hours after abandonment).
The discount, when set, is offered in the last email of the sequence.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from recovery.domain import recovery
from recovery.sweep.sequence import DEFAULT_SEQUENCE, MAX_RECOVERY_EMAILS, EmailStep


@recovery.aggregate
class StoreRecoverySettings:
    store_id: Identifier(required=True, unique=True)
    store_name: String(required=True, max_length=200)
    store_slug: String(required=True, max_length=100)
    enabled: Boolean(default=True)
    email_sequence: Text()  # JSON list of {delay_hours, subject?}
    discount_code: String(max_length=50)
    discount_percentage: Integer(min_value=1, max_value=100)
    updated_at: DateTime()

    @classmethod
    def create(cls, store_id, store_name, store_slug, enabled=True, sequence=None, discount_code=None,
               discount_percentage=None):
        settings = cls(
            store_id=store_id,
            store_name=store_name,
            store_slug=store_slug,
            enabled=enabled,
            discount_code=discount_code,
            discount_percentage=discount_percentage,
            updated_at=datetime.now(UTC),
        )
        settings.set_sequence(sequence if sequence is not None else list(DEFAULT_SEQUENCE))
        return settings

    def sequence(self) -> list[EmailStep]:
        if not self.email_sequence:
            return list(DEFAULT_SEQUENCE)
        return [EmailStep.from_dict(step) for step in json.loads(self.email_sequence)]

    def set_sequence(self, steps: list[EmailStep]):
        if len(steps) > MAX_RECOVERY_EMAILS:
            raise ValidationError({"email_sequence": [f"At most {MAX_RECOVERY_EMAILS} recovery emails are supported"]})
        delays = [step.delay_hours for step in steps]
        if any(delay < 0 for delay in delays):
            raise ValidationError({"email_sequence": ["Delays cannot be negative"]})
        if delays != sorted(delays):
            raise ValidationError({"email_sequence": ["Delays must be in ascending order"]})

        self.email_sequence = json.dumps([step.to_dict() for step in steps])
        self.updated_at = datetime.now(UTC)
