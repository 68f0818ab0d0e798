"""Domain events for the CourierAccount aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from shipping.domain import shipping


@shipping.event(part_of="CourierAccount")
class CourierAccountConnected:
    """A store connected (or reconnected) a courier account."""

    __version__ = 1

    account_id: Identifier(required=True)
    store_id: Identifier(required=True)
    provider: String(required=True)
    is_default: Boolean(default=False)
    connected_at: DateTime(required=True)


@shipping.event(part_of="CourierAccount")
class DefaultCourierChanged:
    __version__ = 1

    store_id: Identifier(required=True)
    account_id: Identifier(required=True)
    provider: String(required=True)
    changed_at: DateTime(required=True)


@shipping.event(part_of="CourierAccount")
class CourierAccountDeactivated:
    __version__ = 1

    account_id: Identifier(required=True)
    store_id: Identifier(required=True)
    provider: String(required=True)
    deactivated_at: DateTime(required=True)
