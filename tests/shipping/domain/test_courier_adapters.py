"""Tests for the in-process courier adapters — self delivery and the fake."""

from shipping.courier.bluedart import BlueDartCourier, BlueDartCredentials
from shipping.courier.delhivery import DelhiveryCourier, DelhiveryCredentials
from shipping.courier.fake_adapter import FakeCourier
from shipping.courier.port import RateRequest, ShipmentItem, ShipmentRequest
from shipping.courier.self_delivery import SelfDelivery
from shipping.courier.shiprocket import ShiprocketCourier, ShiprocketCredentials


def shipment_request(**overrides):
    values = {
        "order_id": "ord-001",
        "order_number": "SF-1001",
        "pickup_location": "Primary",
        "pickup_pincode": "560001",
        "customer_name": "Asha Rao",
        "customer_phone": "9876543210",
        "delivery_address": "12 MG Road",
        "delivery_city": "Pune",
        "delivery_state": "Maharashtra",
        "delivery_pincode": "411001",
        "items": [ShipmentItem(name="Kurta", sku="KRT-1", quantity=2, price=650)],
        "order_value": 1300,
        "weight": 0.8,
        "length": 20,
        "breadth": 15,
        "height": 10,
    }
    values.update(overrides)
    return ShipmentRequest(**values)


class TestSelfDelivery:
    def test_shipment_id_is_order_id(self):
        result = SelfDelivery().create_shipment(shipment_request())
        assert result.success is True
        assert result.provider == "self"
        assert result.shipment_id == "ord-001"

    def test_standard_rate(self):
        quote = SelfDelivery().get_rates(RateRequest(pickup_pincode="560001", delivery_pincode="411001", weight=1))
        assert quote.cheapest.rate == 50
        assert quote.cheapest.estimated_days == 5
        assert quote.cheapest.courier_name == "Standard Delivery"

    def test_tracking_is_unavailable(self):
        assert SelfDelivery().track_shipment("X").success is False


class TestFakeCourier:
    def setup_method(self):
        self.courier = FakeCourier()

    def test_create_shipment_records_request(self):
        result = self.courier.create_shipment(shipment_request())
        assert result.success is True
        assert result.awb_code.startswith("FAKE-")
        assert len(self.courier.shipments) == 1

    def test_configured_failure(self):
        self.courier.configure(should_succeed=False, failure_reason="Pincode not serviceable")
        result = self.courier.create_shipment(shipment_request())
        assert result.success is False
        assert result.error == "Pincode not serviceable"
        assert self.courier.shipments == []

    def test_rates_scale_with_weight(self):
        quote = self.courier.get_rates(RateRequest(pickup_pincode="560001", delivery_pincode="411001", weight=2))
        assert [r.rate for r in quote.rates] == [60.0, 130.0]
        assert quote.fastest.courier_name == "Fake Express"

    def test_cancel_records_awb(self):
        self.courier.cancel_shipment("FAKE-1")
        assert self.courier.cancelled == ["FAKE-1"]


class TestUnconfiguredProviders:
    def test_shiprocket_without_credentials(self):
        courier = ShiprocketCourier(credentials=ShiprocketCredentials(email="", password=""))
        assert courier.is_configured() is False
        assert courier.create_shipment(shipment_request()).error == "Shiprocket not configured"
        assert courier.validate_credentials().error == "Credentials not configured"

    def test_delhivery_without_credentials(self):
        courier = DelhiveryCourier(credentials=None)
        assert courier.is_configured() is False
        assert courier.track_shipment("W1").error == "Delhivery not configured"
        assert courier.check_serviceability("560001", "411001") is False

    def test_delhivery_credentials_accept_camel_case(self):
        credentials = DelhiveryCredentials.from_dict(
            {"apiToken": "tok", "warehouseName": "BLR-WH", "useStagingApi": True}
        )
        courier = DelhiveryCourier(credentials=credentials)
        assert courier.is_configured() is True
        assert courier.api_base.startswith("https://staging-express")

    def test_bluedart_needs_every_credential(self):
        partial = BlueDartCredentials.from_dict({"apiKey": "jwt", "clientCode": "BD01", "loginId": "ops"})
        courier = BlueDartCourier(credentials=partial)
        assert courier.is_configured() is False
        assert courier.get_rates(RateRequest(pickup_pincode="560001", delivery_pincode="411001", weight=1)).error == (
            "Blue Dart not configured"
        )
