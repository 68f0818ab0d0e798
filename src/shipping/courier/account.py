"""CourierAccount aggregate — a store's connection to one courier provider.

Credentials are stored encrypted (see ``shared.crypto``) as a JSON object
whose keys depend on the provider. A store has at most one account per
provider, and at most one default account among its active accounts.

State Machine:
    ACTIVE → INACTIVE → ACTIVE (reconnect)
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String, Text

from shared.crypto import decrypt, encrypt
from shipping.courier.events import (
    CourierAccountConnected,
    CourierAccountDeactivated,
    DefaultCourierChanged,
)
from shipping.courier.port import ProviderType
from shipping.domain import shipping


class AccountStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


@shipping.aggregate
class CourierAccount:
    store_id: Identifier(required=True)
    provider: String(choices=ProviderType, required=True)
    credentials_encrypted: Text()
    pickup_location: String(max_length=200)
    status: String(choices=AccountStatus, default=AccountStatus.ACTIVE.value)
    is_default: Boolean(default=False)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def connect(cls, store_id, provider, credentials=None, pickup_location=None, is_default=False):
        """Create an active account, encrypting ``credentials`` (a dict) at rest."""
        now = datetime.now(UTC)
        account = cls(
            store_id=store_id,
            provider=provider,
            credentials_encrypted=encrypt(json.dumps(credentials)) if credentials else None,
            pickup_location=pickup_location,
            status=AccountStatus.ACTIVE.value,
            is_default=is_default,
            created_at=now,
            updated_at=now,
        )
        account.raise_(
            CourierAccountConnected(
                account_id=str(account.id),
                store_id=str(store_id),
                provider=provider,
                is_default=is_default,
                connected_at=now,
            )
        )
        return account

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE.value

    def credentials(self) -> dict:
        if not self.credentials_encrypted:
            return {}
        return json.loads(decrypt(self.credentials_encrypted))

    def reconnect(self, credentials=None, pickup_location=None):
        """Replace credentials and reactivate the account."""
        now = datetime.now(UTC)
        if credentials:
            self.credentials_encrypted = encrypt(json.dumps(credentials))
        if pickup_location is not None:
            self.pickup_location = pickup_location
        self.status = AccountStatus.ACTIVE.value
        self.updated_at = now

        self.raise_(
            CourierAccountConnected(
                account_id=str(self.id),
                store_id=str(self.store_id),
                provider=self.provider,
                is_default=self.is_default,
                connected_at=now,
            )
        )

    def make_default(self):
        if not self.is_active:
            raise ValidationError({"status": ["Only active accounts can be the default"]})
        if self.is_default:
            return

        now = datetime.now(UTC)
        self.is_default = True
        self.updated_at = now
        self.raise_(
            DefaultCourierChanged(
                store_id=str(self.store_id),
                account_id=str(self.id),
                provider=self.provider,
                changed_at=now,
            )
        )

    def clear_default(self):
        self.is_default = False
        self.updated_at = datetime.now(UTC)

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"status": ["Account is already inactive"]})

        now = datetime.now(UTC)
        self.status = AccountStatus.INACTIVE.value
        self.is_default = False
        self.updated_at = now
        self.raise_(
            CourierAccountDeactivated(
                account_id=str(self.id),
                store_id=str(self.store_id),
                provider=self.provider,
                deactivated_at=now,
            )
        )
