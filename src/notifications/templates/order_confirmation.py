"""Order confirmation template — sent when an order is placed."""

from notifications.channel import ChannelType
from notifications.dispatch.formatting import format_inr, summarize_items


class OrderConfirmationTemplate:
    template_name = "order_confirmation"
    channel = ChannelType.WHATSAPP.value

    @staticmethod
    def render(context: dict) -> dict[str, str]:
        return {
            "customer_name": context["customer_name"],
            "order_number": context["order_number"],
            "items_summary": summarize_items(context.get("items", [])),
            "total_amount": format_inr(context["total_amount"]),
            "store_name": context["store_name"],
        }
