"""Courier port — abstract interface for courier integrations.

Every courier adapter implements this interface and normalizes its
provider's wire format to the result types below. Adapters never raise for
expected failures (missing credentials, HTTP errors, empty rate lists);
they return a result with ``success=False`` and an ``error`` message.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


class ProviderType(Enum):
    SHIPROCKET = "shiprocket"
    DELHIVERY = "delhivery"
    BLUEDART = "bluedart"
    SELF = "self"
    FAKE = "fake"


class PaymentMode(Enum):
    PREPAID = "prepaid"
    COD = "cod"


@dataclass(frozen=True)
class RateRequest:
    pickup_pincode: str
    delivery_pincode: str
    weight: float
    payment_mode: PaymentMode = PaymentMode.PREPAID
    order_value: float = 0.0
    length: float | None = None
    breadth: float | None = None
    height: float | None = None


@dataclass(frozen=True)
class ShippingRate:
    provider: str
    courier_code: str
    courier_name: str
    rate: float
    estimated_days: int
    cod_charges: float | None = None
    is_recommended: bool = False


@dataclass(frozen=True)
class RateQuoteResult:
    success: bool
    rates: list[ShippingRate] = field(default_factory=list)
    cheapest: ShippingRate | None = None
    fastest: ShippingRate | None = None
    error: str | None = None


@dataclass(frozen=True)
class ShipmentItem:
    name: str
    sku: str
    quantity: int
    price: float
    weight: float | None = None


@dataclass(frozen=True)
class ShipmentRequest:
    order_id: str
    order_number: str
    pickup_location: str
    pickup_pincode: str
    customer_name: str
    customer_phone: str
    delivery_address: str
    delivery_city: str
    delivery_state: str
    delivery_pincode: str
    items: list[ShipmentItem]
    order_value: float
    weight: float
    length: float
    breadth: float
    height: float
    payment_mode: PaymentMode = PaymentMode.PREPAID
    cod_amount: float | None = None
    customer_email: str | None = None
    delivery_country: str = "India"
    provider: str | None = None


@dataclass(frozen=True)
class ShipmentResult:
    success: bool
    provider: str
    shipment_id: str | None = None
    order_id: str | None = None
    awb_code: str | None = None
    courier_name: str | None = None
    tracking_url: str | None = None
    estimated_delivery_date: str | None = None
    label_url: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class TrackingEvent:
    date: str
    status: str
    activity: str
    location: str | None = None


@dataclass(frozen=True)
class TrackingResult:
    """``current_status`` is the courier's raw wording; ``order_status`` is the storefront status it maps to."""

    success: bool
    provider: str
    awb_code: str
    current_status: str = "Unknown"
    order_status: str | None = None
    current_location: str | None = None
    estimated_delivery: str | None = None
    delivered_at: str | None = None
    events: list[TrackingEvent] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a cancellation or pickup request."""

    success: bool
    error: str | None = None


@dataclass(frozen=True)
class LabelResult:
    success: bool
    label_url: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class CredentialCheck:
    valid: bool
    error: str | None = None


class CourierProvider(ABC):
    """Abstract interface for courier adapters."""

    provider_type: ProviderType
    name: str

    @abstractmethod
    def is_configured(self) -> bool:
        """True when every credential the provider needs is present."""
        ...

    @abstractmethod
    def validate_credentials(self) -> CredentialCheck: ...

    @abstractmethod
    def check_serviceability(self, pickup_pincode: str, delivery_pincode: str) -> bool: ...

    @abstractmethod
    def get_rates(self, request: RateRequest) -> RateQuoteResult: ...

    @abstractmethod
    def create_shipment(self, request: ShipmentRequest) -> ShipmentResult: ...

    @abstractmethod
    def track_shipment(self, awb_code: str) -> TrackingResult: ...

    @abstractmethod
    def cancel_shipment(self, awb_code: str) -> OperationResult: ...

    @abstractmethod
    def generate_label(self, shipment_id: str) -> LabelResult: ...
