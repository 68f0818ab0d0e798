"""Shared BDD fixtures and step definitions for the Recovery domain."""

from datetime import UTC, datetime, timedelta

import pytest
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.channel.fake_whatsapp import FakeWhatsAppAdapter
from notifications.dispatch.credentials import CredentialResolver
from notifications.dispatch.dispatcher import NotificationDispatcher
from notifications.messaging.notifier import Notifier
from protean import current_domain
from pytest_bdd import given, parsers, then
from recovery.cart.cart import AbandonedCart
from recovery.settings.settings import StoreRecoverySettings
from recovery.sweep.sweep import RecoverySweep
from shared.config import PlatformSettings

STORE_ID = "store-001"
ITEMS = [{"product_id": "prod-001", "title": "Block Print Kurta", "price": 1299, "quantity": 1}]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def clock():
    """Sweep time; advanced by the When steps."""
    return {"now": datetime.now(UTC)}


@pytest.fixture()
def email_channel():
    return FakeEmailAdapter()


@pytest.fixture()
def sweep(email_channel):
    settings = PlatformSettings(resend_api_key="re_test", environment="production")
    dispatcher = NotificationDispatcher(
        credentials=CredentialResolver(settings),
        whatsapp=FakeWhatsAppAdapter(),
        email=email_channel,
        settings=settings,
        sleep=lambda seconds: None,
    )
    return RecoverySweep(notifier=Notifier(dispatcher), settings=settings)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('recovery is enabled for store "{store_name}" with slug "{slug}"'),
    target_fixture="store_settings",
)
def recovery_enabled(store_name, slug):
    settings = StoreRecoverySettings.create(store_id=STORE_ID, store_name=store_name, store_slug=slug)
    current_domain.repository_for(StoreRecoverySettings).add(settings)
    return settings


@given(parsers.cfparse('the store offers discount code "{code}" for {percentage:d} percent'))
def store_discount(store_settings, code, percentage):
    store_settings.discount_code = code
    store_settings.discount_percentage = percentage
    current_domain.repository_for(StoreRecoverySettings).add(store_settings)


@given(
    parsers.cfparse('a cart for "{email}" was last updated {hours:d} hours ago'),
    target_fixture="cart",
)
def cart_last_updated(clock, email, hours):
    cart = AbandonedCart.start(
        store_id=STORE_ID,
        items=ITEMS,
        email=email,
        now=clock["now"] - timedelta(hours=hours),
    )
    current_domain.repository_for(AbandonedCart).add(cart)
    return cart


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the cart status is "{status}"'))
def cart_status(cart, status):
    assert current_domain.repository_for(AbandonedCart).get(cart.id).recovery_status == status


@then(parsers.cfparse("the cart has {count:d} recovery email recorded"))
def cart_emails_recorded(cart, count):
    assert current_domain.repository_for(AbandonedCart).get(cart.id).recovery_emails_sent == count
