"""Transactional messages — one helper per customer-facing event.

Each helper renders its template and hands it to the shared
:class:`NotificationDispatcher`. Store-scoped sends use the store's own
MSG91 account when it is verified and enabled.
"""

from notifications.channel import ChannelType, get_channel
from notifications.dispatch.credentials import CredentialResolver
from notifications.dispatch.dispatcher import DispatchResult, NotificationDispatcher
from notifications.messaging.profile import ProfileCredentialSource
from notifications.templates import get_template
from shared.config import PlatformSettings

_dispatcher: NotificationDispatcher | None = None


def get_dispatcher() -> NotificationDispatcher:
    """Return the process-wide dispatcher, building it from the environment."""
    global _dispatcher
    if _dispatcher is None:
        settings = PlatformSettings.from_env()
        _dispatcher = NotificationDispatcher(
            credentials=CredentialResolver(settings, source=ProfileCredentialSource()),
            whatsapp=get_channel(ChannelType.WHATSAPP.value),
            email=get_channel(ChannelType.EMAIL.value),
            settings=settings,
        )
    return _dispatcher


def reset_dispatcher():
    global _dispatcher
    _dispatcher = None


class Notifier:
    def __init__(self, dispatcher: NotificationDispatcher | None = None):
        self.dispatcher = dispatcher or get_dispatcher()

    def _send(self, template_name: str, phone: str, context: dict, store_id: str | None) -> DispatchResult:
        params = get_template(template_name).render(context)
        return self.dispatcher.send(phone, template_name, params, store_id=store_id)

    def order_confirmation(
        self, phone, customer_name, order_number, items, total_amount, store_name, store_id=None
    ) -> DispatchResult:
        context = {
            "customer_name": customer_name,
            "order_number": order_number,
            "items": items,
            "total_amount": total_amount,
            "store_name": store_name,
        }
        return self._send("order_confirmation", phone, context, store_id)

    def order_shipped(
        self,
        phone,
        customer_name,
        order_number,
        courier_name,
        tracking_number,
        tracking_url=None,
        estimated_delivery=None,
        store_id=None,
    ) -> DispatchResult:
        context = {
            "customer_name": customer_name,
            "order_number": order_number,
            "courier_name": courier_name,
            "tracking_number": tracking_number,
            "tracking_url": tracking_url,
            "estimated_delivery": estimated_delivery,
        }
        return self._send("order_shipped", phone, context, store_id)

    def out_for_delivery(self, phone, customer_name, order_number, store_id=None) -> DispatchResult:
        context = {"customer_name": customer_name, "order_number": order_number}
        return self._send("out_for_delivery", phone, context, store_id)

    def order_delivered(
        self, phone, customer_name, order_number, store_name, review_url=None, store_id=None
    ) -> DispatchResult:
        context = {
            "customer_name": customer_name,
            "order_number": order_number,
            "store_name": store_name,
            "review_url": review_url,
        }
        return self._send("order_delivered", phone, context, store_id)

    def abandoned_cart(
        self, phone, customer_name, items_count, cart_url, store_name, store_id=None
    ) -> DispatchResult:
        context = {
            "customer_name": customer_name,
            "items_count": items_count,
            "cart_url": cart_url,
            "store_name": store_name,
        }
        return self._send("abandoned_cart", phone, context, store_id)

    def cod_reminder(self, phone, customer_name, order_number, total_amount, store_id=None) -> DispatchResult:
        context = {
            "customer_name": customer_name,
            "order_number": order_number,
            "total_amount": total_amount,
        }
        return self._send("cod_reminder", phone, context, store_id)

    def cart_recovery_email(self, email: str, context: dict) -> DispatchResult:
        """Send one step of the abandoned-cart email sequence."""
        template = get_template("abandoned_cart_email")
        rendered = template.render(context)
        return self.dispatcher.send_email(
            email,
            rendered["subject"],
            rendered["html"],
            from_name=context.get("store_name"),
            text_body=rendered["text"],
            template=template.template_name,
        )
