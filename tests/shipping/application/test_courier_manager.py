"""CourierManager routing across a store's courier accounts."""

import json

import httpx
import pytest
from shared.cache import TTLCache
from shared.crypto import encrypt, generate_encryption_key
from shipping.courier import get_courier
from shipping.courier.account import CourierAccount
from shipping.courier.manager import CourierManager
from shipping.courier.port import RateRequest, ShipmentItem, ShipmentRequest

STORE_ID = "store-001"


def _account(provider, credentials=None, is_default=False):
    return CourierAccount.connect(
        store_id=STORE_ID, provider=provider, credentials=credentials, is_default=is_default
    )


def _rate_request(weight=1.0):
    return RateRequest(pickup_pincode="560001", delivery_pincode="411001", weight=weight)


def _shipment_request(**overrides):
    values = dict(
        order_id="ord-001",
        order_number="SF-1001",
        pickup_location="Primary",
        pickup_pincode="560001",
        customer_name="Asha Rao",
        customer_phone="9876543210",
        delivery_address="12 MG Road",
        delivery_city="Pune",
        delivery_state="Maharashtra",
        delivery_pincode="411001",
        items=[ShipmentItem(name="Kurta", sku="KRT-1", quantity=1, price=999)],
        order_value=999,
        weight=0.5,
        length=20,
        breadth=15,
        height=10,
    )
    values.update(overrides)
    return ShipmentRequest(**values)


def _shiprocket_client(logins=None):
    def handler(request):
        if request.url.path.endswith("/auth/login"):
            if logins is not None:
                logins.append(request)
            return httpx.Response(200, json={"token": "tok"})
        return httpx.Response(
            200,
            json={
                "data": {
                    "available_courier_companies": [
                        {"courier_company_id": 7, "courier_name": "Bluedart", "rate": 55.0,
                         "estimated_delivery_days": "1"},
                    ]
                }
            },
        )

    return httpx.Client(transport=httpx.MockTransport(handler))


class TestWithoutAccounts:
    def test_shipments_fall_back_to_self_delivery(self):
        result = CourierManager(STORE_ID, accounts=[]).create_shipment(_shipment_request())
        assert result.success is True
        assert result.provider == "self"
        assert result.shipment_id == "ord-001"

    def test_rates_fall_back_to_standard_delivery(self):
        result = CourierManager(STORE_ID, accounts=[]).get_rates(_rate_request())
        assert result.success is True
        assert [(r.courier_name, r.rate) for r in result.rates] == [("Standard Delivery", 50.0)]


class TestCreateShipment:
    def test_routes_to_default_provider(self):
        manager = CourierManager(STORE_ID, accounts=[_account("fake", is_default=True)])
        result = manager.create_shipment(_shipment_request())

        assert result.success is True
        assert result.awb_code.startswith("FAKE-")
        assert get_courier().shipments[0].order_number == "SF-1001"

    def test_unknown_preferred_provider(self):
        manager = CourierManager(STORE_ID, accounts=[_account("fake", is_default=True)])
        result = manager.create_shipment(_shipment_request(), preferred_provider="delhivery")

        assert result.success is False
        assert result.error == "Provider delhivery not configured"

    def test_inactive_accounts_are_ignored(self):
        account = _account("fake", is_default=True)
        account.deactivate()
        result = CourierManager(STORE_ID, accounts=[account]).create_shipment(_shipment_request())
        assert result.provider == "self"

    def test_provider_failure_is_returned(self):
        get_courier().configure(should_succeed=False, failure_reason="Pincode not serviceable")
        manager = CourierManager(STORE_ID, accounts=[_account("fake", is_default=True)])

        result = manager.create_shipment(_shipment_request())
        assert result.success is False
        assert result.error == "Pincode not serviceable"


class TestGetRates:
    def test_rates_are_merged_and_sorted(self):
        accounts = [
            _account("fake", is_default=True),
            _account("shiprocket", {"email": "ops@store.in", "password": "secret"}),
        ]
        manager = CourierManager(STORE_ID, accounts=accounts, client=_shiprocket_client(), token_cache=TTLCache())

        result = manager.get_rates(_rate_request(weight=1.0))

        assert result.success is True
        assert [r.rate for r in result.rates] == [50.0, 55.0, 110.0]
        assert result.cheapest.rate == 50.0
        assert result.fastest.courier_name == "Bluedart"

    def test_provider_errors_are_joined(self):
        accounts = [_account("shiprocket"), _account("delhivery")]
        result = CourierManager(STORE_ID, accounts=accounts).get_rates(_rate_request())

        assert result.success is False
        assert result.error == "shiprocket: Shiprocket not configured; delhivery: Delhivery not configured"

    def test_self_accounts_do_not_quote(self):
        result = CourierManager(STORE_ID, accounts=[_account("self")]).get_rates(_rate_request())
        assert result.success is False
        assert result.error == "No shipping rates available"


class TestTrackingAndCancellation:
    def test_unconfigured_provider(self):
        manager = CourierManager(STORE_ID, accounts=[])
        assert manager.track_shipment("AWB1", "shiprocket").error == "Provider shiprocket not configured"
        assert manager.cancel_shipment("AWB1", "shiprocket").success is False
        assert manager.generate_label("ship-1", "shiprocket").success is False

    def test_routes_to_account_adapter(self):
        manager = CourierManager(STORE_ID, accounts=[_account("fake")])
        assert manager.track_shipment("FAKE-1", "fake").success is True
        assert manager.cancel_shipment("FAKE-1", "fake").success is True

    @pytest.mark.parametrize(
        "ciphertext",
        [
            "not-a-valid-ciphertext",
            encrypt(json.dumps({"api_token": "dl", "warehouse_name": "BLR"}), key=generate_encryption_key()),
        ],
        ids=["corrupt", "rotated-key"],
    )
    def test_unreadable_credentials_are_reported_not_raised(self, ciphertext):
        account = _account("delhivery", {"api_token": "dl", "warehouse_name": "BLR"})
        account.credentials_encrypted = ciphertext
        manager = CourierManager(STORE_ID, accounts=[account])

        tracking = manager.track_shipment("AWB1", "delhivery")
        assert tracking.success is False
        assert tracking.error == "Failed to track shipment"

        assert manager.cancel_shipment("AWB1", "delhivery").error == "Failed to cancel shipment"
        assert manager.generate_label("ship-1", "delhivery").error == "Failed to generate label"


class TestTokenCache:
    def test_injected_cache_is_kept(self):
        cache = TTLCache()
        assert CourierManager(STORE_ID, accounts=[], token_cache=cache).token_cache is cache

    def test_login_token_survives_across_managers(self):
        logins = []
        client = _shiprocket_client(logins)
        cache = TTLCache()
        accounts = [_account("shiprocket", {"email": "ops@store.in", "password": "secret"}, is_default=True)]

        for _ in range(2):
            manager = CourierManager(STORE_ID, accounts=accounts, client=client, token_cache=cache)
            assert manager.get_rates(_rate_request()).success is True

        assert len(logins) == 1
