"""Fake courier — deterministic courier for testing and development.

Generates mock AWB codes, labels and tracking events. Success or failure
is configurable for integration tests.
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from shipping.courier.port import (
    CourierProvider,
    CredentialCheck,
    LabelResult,
    OperationResult,
    ProviderType,
    RateQuoteResult,
    RateRequest,
    ShipmentRequest,
    ShipmentResult,
    ShippingRate,
    TrackingEvent,
    TrackingResult,
)


class FakeCourier(CourierProvider):
    """Fake courier that always succeeds by default."""

    provider_type = ProviderType.FAKE
    name = "Fake Courier"

    def __init__(self):
        self.should_succeed = True
        self.failure_reason = "Courier unavailable"
        self.shipments: list[ShipmentRequest] = []
        self.cancelled: list[str] = []

    def configure(self, should_succeed: bool = True, failure_reason: str = "Courier unavailable"):
        """Configure the fake courier behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def is_configured(self) -> bool:
        return True

    def validate_credentials(self) -> CredentialCheck:
        if not self.should_succeed:
            return CredentialCheck(valid=False, error=self.failure_reason)
        return CredentialCheck(valid=True)

    def check_serviceability(self, pickup_pincode: str, delivery_pincode: str) -> bool:
        return self.should_succeed

    def get_rates(self, request: RateRequest) -> RateQuoteResult:
        if not self.should_succeed:
            return RateQuoteResult(success=False, error=self.failure_reason)

        provider = self.provider_type.value
        rates = [
            ShippingRate(provider=provider, courier_code="fake-surface", courier_name="Fake Surface",
                         rate=40.0 + 10 * request.weight, estimated_days=5),
            ShippingRate(provider=provider, courier_code="fake-express", courier_name="Fake Express",
                         rate=90.0 + 20 * request.weight, estimated_days=2),
        ]
        return RateQuoteResult(success=True, rates=rates, cheapest=rates[0], fastest=rates[1])

    def create_shipment(self, request: ShipmentRequest) -> ShipmentResult:
        provider = self.provider_type.value
        if not self.should_succeed:
            return ShipmentResult(success=False, provider=provider, error=self.failure_reason)

        self.shipments.append(request)
        awb_code = f"FAKE-{uuid4().hex[:12].upper()}"
        shipment_id = f"ship-{uuid4().hex[:8]}"
        estimated = datetime.now(UTC) + timedelta(days=5)

        return ShipmentResult(
            success=True,
            provider=provider,
            shipment_id=shipment_id,
            order_id=request.order_id,
            awb_code=awb_code,
            courier_name="Fake Surface",
            tracking_url=f"https://fake-courier.example.com/track/{awb_code}",
            estimated_delivery_date=estimated.date().isoformat(),
            label_url=f"https://fake-courier.example.com/labels/{shipment_id}.pdf",
        )

    def track_shipment(self, awb_code: str) -> TrackingResult:
        provider = self.provider_type.value
        if not self.should_succeed:
            return TrackingResult(success=False, provider=provider, awb_code=awb_code, error=self.failure_reason)

        now = datetime.now(UTC).isoformat()
        return TrackingResult(
            success=True,
            provider=provider,
            awb_code=awb_code,
            current_status="In Transit",
            order_status="shipped",
            current_location="Bhiwandi Hub, MH",
            events=[
                TrackingEvent(date=now, status="Picked Up", activity="Shipment picked up", location="Pune, MH"),
                TrackingEvent(date=now, status="In Transit", activity="Shipment in transit",
                              location="Bhiwandi Hub, MH"),
            ],
        )

    def cancel_shipment(self, awb_code: str) -> OperationResult:
        if not self.should_succeed:
            return OperationResult(success=False, error=self.failure_reason)
        self.cancelled.append(awb_code)
        return OperationResult(success=True)

    def generate_label(self, shipment_id: str) -> LabelResult:
        if not self.should_succeed:
            return LabelResult(success=False, error=self.failure_reason)
        return LabelResult(success=True, label_url=f"https://fake-courier.example.com/labels/{shipment_id}.pdf")
