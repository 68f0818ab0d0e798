"""Notifier helpers render templates and hand them to the dispatcher."""

import pytest
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.channel.fake_whatsapp import FakeWhatsAppAdapter
from notifications.dispatch.credentials import CredentialResolver
from notifications.dispatch.dispatcher import NotificationDispatcher
from notifications.messaging.notifier import Notifier
from shared.config import PlatformSettings


@pytest.fixture
def channels():
    return FakeWhatsAppAdapter(), FakeEmailAdapter()


@pytest.fixture
def notifier(channels):
    settings = PlatformSettings(
        msg91_auth_key="platform-key", msg91_integrated_number="918000000000", resend_api_key="re_test"
    )
    whatsapp, email = channels
    dispatcher = NotificationDispatcher(
        credentials=CredentialResolver(settings), whatsapp=whatsapp, email=email, sleep=lambda s: None
    )
    return Notifier(dispatcher)


def test_order_confirmation(notifier, channels):
    whatsapp, _ = channels
    result = notifier.order_confirmation(
        "9876543210", "Asha", "SF-1001", [{"title": "Kurta", "quantity": 1}], 1299, "Kala Threads"
    )

    assert result.success is True
    sent = whatsapp.sent_messages[0]
    assert sent["template"] == "order_confirmation"
    assert sent["params"]["total_amount"] == "₹1,299"


def test_order_shipped_uses_given_tracking_url(notifier, channels):
    whatsapp, _ = channels
    notifier.order_shipped("9876543210", "Asha", "SF-1001", "Delhivery", "DL1", tracking_url="https://t/DL1")
    assert whatsapp.sent_messages[0]["params"]["tracking_url"] == "https://t/DL1"


def test_abandoned_cart_whatsapp(notifier, channels):
    whatsapp, _ = channels
    notifier.abandoned_cart("9876543210", "Asha", 2, "https://kala.storeforge.site/cart", "Kala Threads")
    assert whatsapp.sent_messages[0]["params"]["items_count"] == "2"


def test_cart_recovery_email(notifier, channels):
    _, email = channels
    result = notifier.cart_recovery_email(
        "asha@example.com",
        {
            "sequence_number": 2,
            "customer_name": "asha",
            "store_name": "Kala Threads",
            "items": [],
            "subtotal": 1299,
            "recovery_url": "https://kala.storeforge.site/cart/recover?token=t",
        },
    )

    assert result.success is True
    assert result.audit[0].template == "abandoned_cart_email"
    sent = email.sent_emails[0]
    assert sent["subject"] == "Your cart at Kala Threads is waiting"
    assert sent["from"] == "Kala Threads <cart@storeforge.site>"
    assert "token=t" in sent["text_body"]
