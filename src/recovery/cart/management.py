"""Cart tracking commands — save, recover, unsubscribe.

``SaveCart`` is called from the storefront whenever the cart changes.
``MarkCartRecovered`` is called by checkout once an order is placed for
the same store and email.
"""

import json

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from recovery.cart.cart import AbandonedCart, RecoveryStatus
from recovery.domain import recovery

logger = structlog.get_logger(__name__)


def _carts(**filters) -> list[AbandonedCart]:
    repo = current_domain.repository_for(AbandonedCart)
    # No page cap: the sweep must see every matching cart
    return repo._dao.query.filter(**filters).limit(None).all().items


def active_carts_for_store(store_id: str) -> list[AbandonedCart]:
    return _carts(store_id=store_id, recovery_status=RecoveryStatus.ACTIVE.value)


def reminder_candidates(store_id: str, max_emails: int) -> list[AbandonedCart]:
    """Active carts with a known email that still have reminders left."""
    return _carts(
        store_id=store_id,
        recovery_status=RecoveryStatus.ACTIVE.value,
        recovery_emails_sent__lt=max_emails,
        email__isnull=False,
    )


def find_active_cart(store_id: str, email: str | None = None, customer_id: str | None = None) -> AbandonedCart | None:
    if email:
        matches = _carts(store_id=store_id, email=email.lower(), recovery_status=RecoveryStatus.ACTIVE.value)
    elif customer_id:
        matches = _carts(store_id=store_id, customer_id=customer_id, recovery_status=RecoveryStatus.ACTIVE.value)
    else:
        return None
    return matches[0] if matches else None


def get_cart_by_token(token: str) -> AbandonedCart | None:
    """Return the active cart for a recovery link, or None."""
    if not token:
        return None
    matches = _carts(recovery_token=token, recovery_status=RecoveryStatus.ACTIVE.value)
    return matches[0] if matches else None


@recovery.command(part_of="AbandonedCart")
class SaveCart:
    store_id: Identifier(required=True)
    customer_id: Identifier()
    email: String(max_length=255)
    phone: String(max_length=20)
    items: Text(required=True)  # JSON list of cart lines


@recovery.command(part_of="AbandonedCart")
class MarkCartRecovered:
    store_id: Identifier(required=True)
    email: String(required=True, max_length=255)
    order_id: Identifier(required=True)


@recovery.command(part_of="AbandonedCart")
class UnsubscribeCart:
    token: String(required=True, max_length=64)


@recovery.command_handler(part_of=AbandonedCart)
class AbandonedCartHandler:
    @handle(SaveCart)
    def save_cart(self, command: SaveCart):
        repo = current_domain.repository_for(AbandonedCart)
        items = json.loads(command.items)

        cart = find_active_cart(command.store_id, email=command.email, customer_id=command.customer_id)
        if cart is None:
            cart = AbandonedCart.start(
                store_id=command.store_id,
                items=items,
                email=command.email,
                customer_id=command.customer_id,
                phone=command.phone,
            )
        else:
            cart.replace_items(items, phone=command.phone)

        repo.add(cart)
        return str(cart.id)

    @handle(MarkCartRecovered)
    def mark_recovered(self, command: MarkCartRecovered):
        cart = find_active_cart(command.store_id, email=command.email)
        if cart is None:
            logger.info("No active cart to recover", store_id=str(command.store_id), order_id=str(command.order_id))
            return None

        cart.mark_recovered(command.order_id)
        current_domain.repository_for(AbandonedCart).add(cart)
        return str(cart.id)

    @handle(UnsubscribeCart)
    def unsubscribe(self, command: UnsubscribeCart):
        matches = _carts(recovery_token=command.token)
        if not matches:
            raise ObjectNotFoundError(f"No cart for recovery token {command.token}")

        cart = matches[0]
        cart.unsubscribe()
        current_domain.repository_for(AbandonedCart).add(cart)
