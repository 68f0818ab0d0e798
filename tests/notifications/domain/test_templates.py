"""Message templates and the template registry."""

import pytest
from notifications.channel import ChannelType
from notifications.templates import TEMPLATE_REGISTRY, get_template
from notifications.templates.cart_recovery import recovery_subject


class TestRegistry:
    def test_all_templates_registered(self):
        assert set(TEMPLATE_REGISTRY) == {
            "order_confirmation",
            "order_shipped",
            "out_for_delivery",
            "order_delivered",
            "abandoned_cart",
            "cod_reminder",
            "abandoned_cart_email",
        }

    def test_unknown_template(self):
        with pytest.raises(ValueError, match="No template registered for: welcome"):
            get_template("welcome")

    def test_channels(self):
        assert get_template("cod_reminder").channel == ChannelType.WHATSAPP.value
        assert get_template("abandoned_cart_email").channel == ChannelType.EMAIL.value


class TestWhatsAppTemplates:
    def test_order_confirmation_parameter_order(self):
        params = get_template("order_confirmation").render(
            {
                "customer_name": "Asha",
                "order_number": "SF-1001",
                "items": [{"title": "Kurta", "quantity": 2}],
                "total_amount": 2598,
                "store_name": "Kala Threads",
            }
        )
        assert list(params.values()) == ["Asha", "SF-1001", "2x Kurta", "₹2,598", "Kala Threads"]

    def test_order_shipped_defaults(self):
        params = get_template("order_shipped").render(
            {
                "customer_name": "Asha",
                "order_number": "SF-1001",
                "courier_name": "Delhivery",
                "tracking_number": "AWB42",
            }
        )
        assert params["tracking_url"] == "https://shiprocket.co/tracking/AWB42"
        assert params["estimated_delivery"] == "within 3-5 business days"

    def test_order_delivered_review_url_default(self):
        params = get_template("order_delivered").render(
            {"customer_name": "Asha", "order_number": "SF-1001", "store_name": "Kala Threads"}
        )
        assert params["review_url"] == "#"

    def test_abandoned_cart_stringifies_count(self):
        params = get_template("abandoned_cart").render(
            {"customer_name": "Asha", "items_count": 3, "cart_url": "https://x/cart", "store_name": "Kala"}
        )
        assert params["items_count"] == "3"

    def test_cod_reminder_formats_amount(self):
        params = get_template("cod_reminder").render(
            {"customer_name": "Asha", "order_number": "SF-1001", "total_amount": 1499}
        )
        assert params["total_amount"] == "₹1,499"


class TestCartRecoveryEmail:
    def _render(self, **overrides):
        context = {
            "sequence_number": 1,
            "customer_name": "asha",
            "store_name": "Kala Threads",
            "items": [{"title": "Silk <Saree>", "quantity": 1, "price": 2400}],
            "subtotal": 2400,
            "recovery_url": "https://kala.storeforge.site/cart/recover?token=abc",
        }
        context.update(overrides)
        return get_template("abandoned_cart_email").render(context)

    def test_subjects_follow_sequence(self):
        assert recovery_subject(1, "Kala") == "You left something behind!"
        assert recovery_subject(2, "Kala") == "Your cart at Kala is waiting"
        assert recovery_subject(3, "Kala") == "Last chance: Your Kala cart expires soon"

    def test_sequence_is_clamped(self):
        assert self._render(sequence_number=7)["subject"] == "Last chance: Your Kala Threads cart expires soon"
        assert self._render(sequence_number=0)["subject"] == "You left something behind!"

    def test_html_is_escaped(self):
        rendered = self._render()
        assert "Silk &lt;Saree&gt;" in rendered["html"]
        assert "₹2,400" in rendered["html"]

    def test_text_contains_recovery_link(self):
        rendered = self._render(sequence_number=2)
        assert "Return to Cart: https://kala.storeforge.site/cart/recover?token=abc" in rendered["text"]

    def test_discount_only_with_code_and_percentage(self):
        assert "Use code" not in self._render(discount_code="COMEBACK")["text"]
        rendered = self._render(discount_code="COMEBACK", discount_percentage=10)
        assert "Use code COMEBACK for 10% off your order." in rendered["text"]

    def test_defaults(self):
        rendered = self._render(customer_name=None, store_name=None)
        assert rendered["text"].startswith("Hi there,")
        assert rendered["text"].endswith("Store")
