"""AbandonedCart aggregate — a recoverable snapshot of a shopper's cart.

There is at most one active cart per (store, email) or, for signed-in
shoppers without an email, per (store, customer). Any shopper activity
resets the abandonment clock and the reminder counter.

State Machine:
    ACTIVE → RECOVERED      (order placed)
    ACTIVE → EXPIRED        (seven days after abandonment)
    ACTIVE → UNSUBSCRIBED   (shopper opted out of reminders)
"""

import json
import secrets
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from recovery.cart.events import (
    CartAbandoned,
    CartExpired,
    CartRecovered,
    CartSaved,
    CartUnsubscribed,
    RecoveryEmailSent,
)
from recovery.domain import recovery

CART_EXPIRY = timedelta(days=7)


class RecoveryStatus(Enum):
    ACTIVE = "active"
    RECOVERED = "recovered"
    EXPIRED = "expired"
    UNSUBSCRIBED = "unsubscribed"


_VALID_TRANSITIONS = {
    RecoveryStatus.ACTIVE: {
        RecoveryStatus.RECOVERED,
        RecoveryStatus.EXPIRED,
        RecoveryStatus.UNSUBSCRIBED,
    },
    RecoveryStatus.RECOVERED: set(),
    RecoveryStatus.EXPIRED: set(),
    RecoveryStatus.UNSUBSCRIBED: set(),
}


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive timestamps as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def cart_totals(items: list[dict]) -> tuple[float, int]:
    subtotal = sum(item["price"] * item["quantity"] for item in items)
    item_count = sum(item["quantity"] for item in items)
    return subtotal, item_count


def generate_recovery_token() -> str:
    return secrets.token_hex(32)


@recovery.aggregate
class AbandonedCart:
    store_id: Identifier(required=True)
    customer_id: Identifier()
    email: String(max_length=255)
    phone: String(max_length=20)

    # JSON list of {product_id, variant_id, title, variant_title, price, quantity, image_url}
    items: Text()
    subtotal: Float(default=0.0)
    item_count: Integer(default=0)

    recovery_status: String(choices=RecoveryStatus, default=RecoveryStatus.ACTIVE.value)
    recovery_emails_sent: Integer(default=0)
    recovery_token: String(max_length=64)
    last_email_sent_at: DateTime()
    recovered_at: DateTime()
    recovered_order_id: Identifier()

    created_at: DateTime()
    updated_at: DateTime()
    abandoned_at: DateTime()
    expires_at: DateTime()

    @classmethod
    def start(cls, store_id, items, email=None, customer_id=None, phone=None, now=None):
        if not email and not customer_id:
            raise ValidationError({"email": ["An email or customer id is required to track a cart"]})

        now = now or datetime.now(UTC)
        subtotal, item_count = cart_totals(items)
        cart = cls(
            store_id=store_id,
            customer_id=customer_id,
            email=email.lower() if email else None,
            phone=phone,
            items=json.dumps(items),
            subtotal=subtotal,
            item_count=item_count,
            recovery_status=RecoveryStatus.ACTIVE.value,
            recovery_emails_sent=0,
            recovery_token=generate_recovery_token(),
            created_at=now,
            updated_at=now,
        )
        cart._raise_saved(now)
        return cart

    @property
    def is_active(self) -> bool:
        return self.recovery_status == RecoveryStatus.ACTIVE.value

    def line_items(self) -> list[dict]:
        return json.loads(self.items) if self.items else []

    def _raise_saved(self, now):
        self.raise_(
            CartSaved(
                cart_id=str(self.id),
                store_id=str(self.store_id),
                email=self.email,
                subtotal=self.subtotal,
                item_count=self.item_count,
                saved_at=now,
            )
        )

    def _transition_to(self, new_status: RecoveryStatus):
        current = RecoveryStatus(self.recovery_status)
        if new_status not in _VALID_TRANSITIONS[current]:
            raise ValidationError(
                {"recovery_status": [f"Cannot transition from {current.value} to {new_status.value}"]}
            )
        self.recovery_status = new_status.value

    def replace_items(self, items, phone=None, now=None):
        """Refresh the snapshot; shopper activity restarts the reminder sequence."""
        if not self.is_active:
            raise ValidationError({"recovery_status": ["Only active carts can be updated"]})

        now = now or datetime.now(UTC)
        self.items = json.dumps(items)
        self.subtotal, self.item_count = cart_totals(items)
        if phone:
            self.phone = phone
        self.updated_at = now
        self.abandoned_at = None
        self.expires_at = None
        self.recovery_emails_sent = 0
        self._raise_saved(now)

    def mark_abandoned(self):
        """Start the abandonment clock from the last shopper activity."""
        if self.abandoned_at is not None:
            return

        self.abandoned_at = self.updated_at
        self.expires_at = as_utc(self.updated_at) + CART_EXPIRY
        self.raise_(
            CartAbandoned(
                cart_id=str(self.id),
                store_id=str(self.store_id),
                abandoned_at=self.abandoned_at,
                expires_at=self.expires_at,
            )
        )

    def is_expired(self, as_of: datetime) -> bool:
        return self.expires_at is not None and as_utc(self.expires_at) < as_of

    def expire(self, now=None):
        now = now or datetime.now(UTC)
        self._transition_to(RecoveryStatus.EXPIRED)
        self.raise_(CartExpired(cart_id=str(self.id), store_id=str(self.store_id), expired_at=now))

    def record_email_sent(self, sequence_number: int, sent_at=None):
        sent_at = sent_at or datetime.now(UTC)
        self.recovery_emails_sent = (self.recovery_emails_sent or 0) + 1
        self.last_email_sent_at = sent_at
        self.raise_(
            RecoveryEmailSent(
                cart_id=str(self.id),
                store_id=str(self.store_id),
                sequence_number=sequence_number,
                sent_at=sent_at,
            )
        )

    def mark_recovered(self, order_id, now=None):
        now = now or datetime.now(UTC)
        self._transition_to(RecoveryStatus.RECOVERED)
        self.recovered_at = now
        self.recovered_order_id = order_id
        self.raise_(
            CartRecovered(
                cart_id=str(self.id),
                store_id=str(self.store_id),
                order_id=str(order_id),
                recovered_at=now,
            )
        )

    def unsubscribe(self, now=None):
        if self.recovery_status == RecoveryStatus.UNSUBSCRIBED.value:
            return

        now = now or datetime.now(UTC)
        self._transition_to(RecoveryStatus.UNSUBSCRIBED)
        self.raise_(
            CartUnsubscribed(cart_id=str(self.id), store_id=str(self.store_id), unsubscribed_at=now)
        )
