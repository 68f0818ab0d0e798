"""Last-mile templates — out for delivery and delivered."""

from notifications.channel import ChannelType


class OutForDeliveryTemplate:
    template_name = "out_for_delivery"
    channel = ChannelType.WHATSAPP.value

    @staticmethod
    def render(context: dict) -> dict[str, str]:
        return {
            "customer_name": context["customer_name"],
            "order_number": context["order_number"],
        }


class OrderDeliveredTemplate:
    template_name = "order_delivered"
    channel = ChannelType.WHATSAPP.value

    @staticmethod
    def render(context: dict) -> dict[str, str]:
        return {
            "customer_name": context["customer_name"],
            "order_number": context["order_number"],
            "store_name": context["store_name"],
            "review_url": context.get("review_url") or "#",
        }
