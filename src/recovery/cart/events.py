"""Domain events for the AbandonedCart aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from recovery.domain import recovery


@recovery.event(part_of="AbandonedCart")
class CartSaved:
    """A shopper's cart contents were captured or refreshed."""

    __version__ = 1

    cart_id: Identifier(required=True)
    store_id: Identifier(required=True)
    email: String(max_length=255)
    subtotal: Float(required=True)
    item_count: Integer(required=True)
    saved_at: DateTime(required=True)


@recovery.event(part_of="AbandonedCart")
class CartAbandoned:
    __version__ = 1

    cart_id: Identifier(required=True)
    store_id: Identifier(required=True)
    abandoned_at: DateTime(required=True)
    expires_at: DateTime(required=True)


@recovery.event(part_of="AbandonedCart")
class RecoveryEmailSent:
    __version__ = 1

    cart_id: Identifier(required=True)
    store_id: Identifier(required=True)
    sequence_number: Integer(required=True)
    sent_at: DateTime(required=True)


@recovery.event(part_of="AbandonedCart")
class CartRecovered:
    __version__ = 1

    cart_id: Identifier(required=True)
    store_id: Identifier(required=True)
    order_id: Identifier(required=True)
    recovered_at: DateTime(required=True)


@recovery.event(part_of="AbandonedCart")
class CartExpired:
    __version__ = 1

    cart_id: Identifier(required=True)
    store_id: Identifier(required=True)
    expired_at: DateTime(required=True)


@recovery.event(part_of="AbandonedCart")
class CartUnsubscribed:
    __version__ = 1

    cart_id: Identifier(required=True)
    store_id: Identifier(required=True)
    unsubscribed_at: DateTime(required=True)
