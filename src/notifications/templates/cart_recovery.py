"""Cart recovery templates — the WhatsApp nudge and the three-step email sequence."""

from html import escape

from notifications.channel import ChannelType
from notifications.dispatch.formatting import format_inr


class AbandonedCartTemplate:
    template_name = "abandoned_cart"
    channel = ChannelType.WHATSAPP.value

    @staticmethod
    def render(context: dict) -> dict[str, str]:
        return {
            "customer_name": context["customer_name"],
            "items_count": str(context["items_count"]),
            "cart_url": context["cart_url"],
            "store_name": context["store_name"],
        }


_SEQUENCE_CONTENT = {
    1: {
        "headline": "You left something behind!",
        "message": "We noticed you didn't complete your purchase. Your cart is saved and waiting for you.",
        "cta": "Complete Your Order",
    },
    2: {
        "headline": "Your cart is waiting",
        "message": (
            "The items in your cart are still available, but they're selling fast. "
            "Don't miss out on what you loved!"
        ),
        "cta": "Return to Cart",
    },
    3: {
        "headline": "Last chance to grab your items",
        "message": (
            "This is your final reminder. Your saved cart will expire soon. "
            "Complete your order now before it's too late!"
        ),
        "cta": "Complete Purchase Now",
    },
}


def recovery_subject(sequence_number: int, store_name: str) -> str:
    subjects = {
        1: "You left something behind!",
        2: f"Your cart at {store_name} is waiting",
        3: f"Last chance: Your {store_name} cart expires soon",
    }
    return subjects.get(sequence_number, subjects[3])


class CartRecoveryEmailTemplate:
    template_name = "abandoned_cart_email"
    channel = ChannelType.EMAIL.value

    @staticmethod
    def render(context: dict) -> dict[str, str]:
        sequence = min(max(int(context.get("sequence_number", 1)), 1), 3)
        content = _SEQUENCE_CONTENT[sequence]
        store_name = context.get("store_name") or "Store"
        customer_name = context.get("customer_name") or "there"
        recovery_url = context["recovery_url"]

        rows = "".join(
            f"<tr><td>{escape(item['title'])}</td><td>{item['quantity']}</td>"
            f"<td>{format_inr(item['price'] * item['quantity'])}</td></tr>"
            for item in context.get("items", [])
        )

        discount_html = discount_text = ""
        if context.get("discount_code") and context.get("discount_percentage"):
            offer = f"Use code {context['discount_code']} for {context['discount_percentage']}% off your order."
            discount_html = f"<p><strong>{escape(offer)}</strong></p>"
            discount_text = f"\n{offer}\n"

        html_body = (
            f"<h1>{escape(content['headline'])}</h1>"
            f"<p>Hi {escape(customer_name)},</p>"
            f"<p>{escape(content['message'])}</p>"
            f"<table>{rows}</table>"
            f"<p>Subtotal: {format_inr(context.get('subtotal', 0))}</p>"
            f"{discount_html}"
            f'<p><a href="{escape(recovery_url)}">{escape(content["cta"])}</a></p>'
            f"<p>{escape(store_name)}</p>"
        )
        text_body = (
            f"Hi {customer_name},\n\n"
            f"{content['message']}\n"
            f"{discount_text}\n"
            f"{content['cta']}: {recovery_url}\n\n"
            f"{store_name}"
        )
        return {
            "subject": recovery_subject(sequence, store_name),
            "html": html_body,
            "text": text_body,
        }
