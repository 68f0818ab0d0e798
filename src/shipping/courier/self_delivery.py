"""Self delivery — the merchant ships orders without a courier integration."""

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
    TrackingResult,
)

STANDARD_DELIVERY_RATE = 50.0
STANDARD_DELIVERY_DAYS = 5


def standard_delivery_rate() -> ShippingRate:
    return ShippingRate(
        provider=ProviderType.SELF.value,
        courier_code="self",
        courier_name="Standard Delivery",
        rate=STANDARD_DELIVERY_RATE,
        estimated_days=STANDARD_DELIVERY_DAYS,
    )


class SelfDelivery(CourierProvider):
    provider_type = ProviderType.SELF
    name = "Self Delivery"

    def is_configured(self) -> bool:
        return True

    def validate_credentials(self) -> CredentialCheck:
        return CredentialCheck(valid=True)

    def check_serviceability(self, pickup_pincode: str, delivery_pincode: str) -> bool:
        return True

    def get_rates(self, request: RateRequest) -> RateQuoteResult:
        rate = standard_delivery_rate()
        return RateQuoteResult(success=True, rates=[rate], cheapest=rate, fastest=rate)

    def create_shipment(self, request: ShipmentRequest) -> ShipmentResult:
        # Merchant handles the parcel; the order id doubles as the shipment id
        return ShipmentResult(success=True, provider=self.provider_type.value, shipment_id=request.order_id)

    def track_shipment(self, awb_code: str) -> TrackingResult:
        return TrackingResult(
            success=False,
            provider=self.provider_type.value,
            awb_code=awb_code,
            error="Tracking is not available for self delivery",
        )

    def cancel_shipment(self, awb_code: str) -> OperationResult:
        return OperationResult(success=True)

    def generate_label(self, shipment_id: str) -> LabelResult:
        return LabelResult(success=False, error="Labels are not available for self delivery")
