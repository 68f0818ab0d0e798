"""Order shipped template — sent once the courier has an AWB."""

from notifications.channel import ChannelType

DEFAULT_TRACKING_URL = "https://shiprocket.co/tracking/{tracking_number}"
DEFAULT_ESTIMATED_DELIVERY = "within 3-5 business days"


class OrderShippedTemplate:
    template_name = "order_shipped"
    channel = ChannelType.WHATSAPP.value

    @staticmethod
    def render(context: dict) -> dict[str, str]:
        tracking_number = context["tracking_number"]
        return {
            "customer_name": context["customer_name"],
            "order_number": context["order_number"],
            "courier_name": context["courier_name"],
            "tracking_number": tracking_number,
            "tracking_url": context.get("tracking_url")
            or DEFAULT_TRACKING_URL.format(tracking_number=tracking_number),
            "estimated_delivery": context.get("estimated_delivery") or DEFAULT_ESTIMATED_DELIVERY,
        }
