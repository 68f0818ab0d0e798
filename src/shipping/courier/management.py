"""Courier account commands — connect, set default, deactivate.

The first account a store connects becomes its default. Choosing a new
default clears the flag on every other account of the store.
"""

import json

from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from shipping.courier.account import CourierAccount
from shipping.domain import shipping


def accounts_for_store(store_id: str) -> list[CourierAccount]:
    repo = current_domain.repository_for(CourierAccount)
    return repo._dao.query.filter(store_id=store_id).all().items


def _account_for_provider(store_id: str, provider: str) -> CourierAccount:
    for account in accounts_for_store(store_id):
        if account.provider == provider:
            return account
    raise ObjectNotFoundError(f"No {provider} account for store {store_id}")


def _promote_default(store_id: str, account: CourierAccount) -> None:
    repo = current_domain.repository_for(CourierAccount)
    for other in accounts_for_store(store_id):
        if other.id != account.id and other.is_default:
            other.clear_default()
            repo.add(other)
    account.make_default()


@shipping.command(part_of="CourierAccount")
class ConnectCourierAccount:
    store_id: Identifier(required=True)
    provider: String(required=True)
    credentials: Text()  # JSON object, provider specific
    pickup_location: String(max_length=200)
    is_default: Boolean(default=False)


@shipping.command(part_of="CourierAccount")
class SetDefaultCourier:
    store_id: Identifier(required=True)
    provider: String(required=True)


@shipping.command(part_of="CourierAccount")
class DeactivateCourierAccount:
    store_id: Identifier(required=True)
    provider: String(required=True)


@shipping.command_handler(part_of=CourierAccount)
class CourierAccountHandler:
    @handle(ConnectCourierAccount)
    def connect_account(self, command: ConnectCourierAccount):
        repo = current_domain.repository_for(CourierAccount)
        credentials = json.loads(command.credentials) if command.credentials else None

        existing = accounts_for_store(command.store_id)
        account = next((a for a in existing if a.provider == command.provider), None)

        if account is None:
            account = CourierAccount.connect(
                store_id=command.store_id,
                provider=command.provider,
                credentials=credentials,
                pickup_location=command.pickup_location,
            )
        else:
            account.reconnect(credentials=credentials, pickup_location=command.pickup_location)

        has_default = any(a.is_default and a.is_active for a in existing if a.id != account.id)
        if command.is_default or not has_default:
            _promote_default(command.store_id, account)

        repo.add(account)
        return str(account.id)

    @handle(SetDefaultCourier)
    def set_default(self, command: SetDefaultCourier):
        account = _account_for_provider(command.store_id, command.provider)
        _promote_default(command.store_id, account)
        current_domain.repository_for(CourierAccount).add(account)

    @handle(DeactivateCourierAccount)
    def deactivate(self, command: DeactivateCourierAccount):
        repo = current_domain.repository_for(CourierAccount)
        account = _account_for_provider(command.store_id, command.provider)
        was_default = account.is_default
        account.deactivate()
        repo.add(account)

        if was_default:
            remaining = [a for a in accounts_for_store(command.store_id) if a.is_active and a.id != account.id]
            if remaining:
                remaining[0].make_default()
                repo.add(remaining[0])
