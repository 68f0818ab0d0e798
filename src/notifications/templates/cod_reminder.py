"""COD reminder template — asks the customer to keep cash ready."""

from notifications.channel import ChannelType
from notifications.dispatch.formatting import format_inr


class CODReminderTemplate:
    template_name = "cod_reminder"
    channel = ChannelType.WHATSAPP.value

    @staticmethod
    def render(context: dict) -> dict[str, str]:
        return {
            "customer_name": context["customer_name"],
            "order_number": context["order_number"],
            "total_amount": format_inr(context["total_amount"]),
        }
