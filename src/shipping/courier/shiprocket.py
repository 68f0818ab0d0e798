"""Shiprocket adapter — aggregator with many courier partners behind one API.

Authentication is a login call returning a bearer token valid for ten
days. Tokens are cached per account for nine days so a refresh always
happens before expiry.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime

import httpx
import structlog

from shared.cache import Cache, TTLCache
from shipping.courier.port import (
    CourierProvider,
    CredentialCheck,
    LabelResult,
    OperationResult,
    PaymentMode,
    ProviderType,
    RateQuoteResult,
    RateRequest,
    ShipmentRequest,
    ShipmentResult,
    ShippingRate,
    TrackingEvent,
    TrackingResult,
)
from shipping.courier.status import cheapest, fastest, map_courier_status

logger = structlog.get_logger(__name__)

SHIPROCKET_API_BASE = "https://apiv2.shiprocket.in/v1/external"
TRACKING_URL = "https://shiprocket.co/tracking/{awb}"
TOKEN_TTL_SECONDS = 9 * 24 * 60 * 60
DEFAULT_PICKUP_LOCATION = "Primary"

NOT_CONFIGURED = "Shiprocket not configured"


class ShiprocketAuthError(Exception):
    """Raised internally when the login call is rejected."""


@dataclass(frozen=True)
class ShiprocketCredentials:
    email: str
    password: str

    @classmethod
    def from_dict(cls, data: dict) -> "ShiprocketCredentials":
        return cls(email=data.get("email") or "", password=data.get("password") or "")


class ShiprocketCourier(CourierProvider):
    provider_type = ProviderType.SHIPROCKET
    name = "Shiprocket"

    def __init__(
        self,
        credentials: ShiprocketCredentials | None = None,
        client: httpx.Client | None = None,
        token_cache: Cache | None = None,
        cache_key: str | None = None,
        pickup_location: str | None = None,
    ):
        self.credentials = credentials
        self.client = client or httpx.Client(timeout=30.0)
        self.token_cache = token_cache if token_cache is not None else TTLCache()
        self.cache_key = f"{cache_key or (credentials.email if credentials else '')}:shiprocket"
        self.pickup_location = pickup_location or DEFAULT_PICKUP_LOCATION

    def is_configured(self) -> bool:
        return bool(self.credentials and self.credentials.email and self.credentials.password)

    def _login(self) -> httpx.Response:
        return self.client.post(
            f"{SHIPROCKET_API_BASE}/auth/login",
            json={"email": self.credentials.email, "password": self.credentials.password},
        )

    def authenticate(self) -> str:
        token = self.token_cache.get(self.cache_key)
        if token:
            return token

        response = self._login()
        if not response.is_success:
            raise ShiprocketAuthError("Shiprocket authentication failed")

        token = response.json().get("token")
        if not token:
            raise ShiprocketAuthError("Shiprocket authentication failed")

        self.token_cache.set(self.cache_key, token, TOKEN_TTL_SECONDS)
        logger.info("Shiprocket authenticated")
        return token

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.authenticate()}"}

    def validate_credentials(self) -> CredentialCheck:
        if not self.is_configured():
            return CredentialCheck(valid=False, error="Credentials not configured")

        try:
            response = self._login()
            data = response.json()
            if response.is_success and data.get("token"):
                return CredentialCheck(valid=True)
            return CredentialCheck(valid=False, error=data.get("message") or "Invalid credentials")
        except Exception:
            logger.exception("Shiprocket credential validation failed")
            return CredentialCheck(valid=False, error="Failed to validate credentials")

    def _serviceable_couriers(self, request: RateRequest) -> list[dict]:
        params = {
            "pickup_postcode": request.pickup_pincode,
            "delivery_postcode": request.delivery_pincode,
            "weight": request.weight,
            "cod": 1 if request.payment_mode == PaymentMode.COD else 0,
        }
        for dimension in ("length", "breadth", "height"):
            value = getattr(request, dimension)
            if value:
                params[dimension] = value

        response = self.client.get(
            f"{SHIPROCKET_API_BASE}/courier/serviceability",
            params=params,
            headers=self._headers(),
        )
        response.raise_for_status()
        return (response.json().get("data") or {}).get("available_courier_companies") or []

    def check_serviceability(self, pickup_pincode: str, delivery_pincode: str) -> bool:
        if not self.is_configured():
            return False

        try:
            couriers = self._serviceable_couriers(
                RateRequest(pickup_pincode=pickup_pincode, delivery_pincode=delivery_pincode, weight=0.5)
            )
            return bool(couriers)
        except Exception:
            logger.exception("Shiprocket serviceability check failed", delivery_pincode=delivery_pincode)
            return False

    def get_rates(self, request: RateRequest) -> RateQuoteResult:
        if not self.is_configured():
            return RateQuoteResult(success=False, error=NOT_CONFIGURED)

        try:
            couriers = self._serviceable_couriers(request)
        except ShiprocketAuthError as exc:
            return RateQuoteResult(success=False, error=str(exc))
        except Exception:
            logger.exception("Shiprocket rate fetch failed")
            return RateQuoteResult(success=False, error="Failed to get rates")

        if not couriers:
            return RateQuoteResult(success=False, error="No rates available")

        rates = [
            ShippingRate(
                provider=self.provider_type.value,
                courier_code=str(courier.get("courier_company_id", "")),
                courier_name=courier.get("courier_name") or "",
                rate=float(courier.get("rate") or courier.get("freight_charge") or 0),
                cod_charges=courier.get("cod_charges"),
                estimated_days=int(courier.get("estimated_delivery_days") or 5),
                is_recommended=bool(courier.get("is_recommended", False)),
            )
            for courier in couriers
        ]
        return RateQuoteResult(success=True, rates=rates, cheapest=cheapest(rates), fastest=fastest(rates))

    def _order_payload(self, request: ShipmentRequest) -> dict:
        return {
            "order_id": request.order_number,
            "order_date": datetime.now(UTC).date().isoformat(),
            "pickup_location": request.pickup_location or self.pickup_location,
            "billing_customer_name": request.customer_name,
            "billing_address": request.delivery_address,
            "billing_city": request.delivery_city,
            "billing_pincode": request.delivery_pincode,
            "billing_state": request.delivery_state,
            "billing_country": request.delivery_country or "India",
            "billing_email": request.customer_email or "",
            "billing_phone": request.customer_phone,
            "shipping_is_billing": True,
            "order_items": [
                {"name": item.name, "sku": item.sku, "units": item.quantity, "selling_price": item.price}
                for item in request.items
            ],
            "payment_method": "COD" if request.payment_mode == PaymentMode.COD else "Prepaid",
            "sub_total": request.order_value,
            "length": request.length,
            "breadth": request.breadth,
            "height": request.height,
            "weight": request.weight,
        }

    def create_shipment(self, request: ShipmentRequest) -> ShipmentResult:
        provider = self.provider_type.value
        if not self.is_configured():
            return ShipmentResult(success=False, provider=provider, error=NOT_CONFIGURED)

        try:
            response = self.client.post(
                f"{SHIPROCKET_API_BASE}/orders/create/adhoc",
                json=self._order_payload(request),
                headers=self._headers(),
            )
            data = response.json()

            if not response.is_success or (data.get("status_code") or 0) >= 400:
                error = data.get("message") or "Failed to create order in Shiprocket"
                logger.warning("Shiprocket rejected order", order_number=request.order_number, error=error)
                return ShipmentResult(success=False, provider=provider, error=error)

            awb_code = data.get("awb_code") or None
            logger.info("Shiprocket order created", order_number=request.order_number, awb_code=awb_code)
            return ShipmentResult(
                success=True,
                provider=provider,
                shipment_id=str(data["shipment_id"]) if data.get("shipment_id") is not None else None,
                order_id=str(data["order_id"]) if data.get("order_id") is not None else None,
                awb_code=awb_code,
                courier_name=data.get("courier_name"),
                tracking_url=TRACKING_URL.format(awb=awb_code) if awb_code else None,
            )
        except ShiprocketAuthError as exc:
            return ShipmentResult(success=False, provider=provider, error=str(exc))
        except Exception:
            logger.exception("Shiprocket shipment creation failed", order_number=request.order_number)
            return ShipmentResult(success=False, provider=provider, error="Failed to create shipment")

    def track_shipment(self, awb_code: str) -> TrackingResult:
        provider = self.provider_type.value
        if not self.is_configured():
            return TrackingResult(success=False, provider=provider, awb_code=awb_code, error=NOT_CONFIGURED)

        try:
            response = self.client.get(
                f"{SHIPROCKET_API_BASE}/courier/track/awb/{awb_code}",
                headers=self._headers(),
            )
            if not response.is_success:
                return TrackingResult(
                    success=False, provider=provider, awb_code=awb_code, error="Failed to track shipment"
                )

            tracking = response.json().get("tracking_data")
            if not tracking or tracking.get("track_status") == 0:
                return TrackingResult(
                    success=False, provider=provider, awb_code=awb_code, error="Tracking not available"
                )

            track = (tracking.get("shipment_track") or [{}])[0]
            current_status = track.get("current_status") or "In Transit"
            events = [
                TrackingEvent(
                    date=activity.get("date") or "",
                    status=activity.get("status") or "",
                    activity=activity.get("activity") or "",
                    location=activity.get("location") or "",
                )
                for activity in tracking.get("shipment_track_activities") or []
            ]
            return TrackingResult(
                success=True,
                provider=provider,
                awb_code=awb_code,
                current_status=current_status,
                order_status=map_courier_status(current_status),
                current_location=track.get("destination"),
                estimated_delivery=track.get("edd"),
                delivered_at=track.get("delivered_date"),
                events=events,
            )
        except ShiprocketAuthError as exc:
            return TrackingResult(success=False, provider=provider, awb_code=awb_code, error=str(exc))
        except Exception:
            logger.exception("Shiprocket tracking failed", awb_code=awb_code)
            return TrackingResult(
                success=False, provider=provider, awb_code=awb_code, error="Failed to track shipment"
            )

    def cancel_shipment(self, awb_code: str) -> OperationResult:
        if not self.is_configured():
            return OperationResult(success=False, error=NOT_CONFIGURED)

        try:
            response = self.client.post(
                f"{SHIPROCKET_API_BASE}/orders/cancel/shipment/awbs",
                json={"awbs": [awb_code]},
                headers=self._headers(),
            )
            if response.is_success and response.json().get("status") == 1:
                logger.info("Shiprocket shipment cancelled", awb_code=awb_code)
                return OperationResult(success=True)
            return OperationResult(success=False, error="Failed to cancel shipment")
        except ShiprocketAuthError as exc:
            return OperationResult(success=False, error=str(exc))
        except Exception:
            logger.exception("Shiprocket cancellation failed", awb_code=awb_code)
            return OperationResult(success=False, error="Failed to cancel shipment")

    def generate_label(self, shipment_id: str) -> LabelResult:
        if not self.is_configured():
            return LabelResult(success=False, error=NOT_CONFIGURED)

        try:
            response = self.client.post(
                f"{SHIPROCKET_API_BASE}/courier/generate/label",
                json={"shipment_id": [shipment_id]},
                headers=self._headers(),
            )
            label_url = response.json().get("label_url") if response.is_success else None
            if label_url:
                return LabelResult(success=True, label_url=label_url)
            return LabelResult(success=False, error="Failed to generate label")
        except ShiprocketAuthError as exc:
            return LabelResult(success=False, error=str(exc))
        except Exception:
            logger.exception("Shiprocket label generation failed", shipment_id=shipment_id)
            return LabelResult(success=False, error="Failed to generate label")

    def schedule_pickup(self, shipment_id: str, pickup_date: date) -> OperationResult:
        if not self.is_configured():
            return OperationResult(success=False, error=NOT_CONFIGURED)

        try:
            response = self.client.post(
                f"{SHIPROCKET_API_BASE}/courier/generate/pickup",
                json={"shipment_id": [shipment_id], "pickup_date": [pickup_date.isoformat()]},
                headers=self._headers(),
            )
            if response.is_success:
                logger.info("Shiprocket pickup scheduled", shipment_id=shipment_id, pickup_date=str(pickup_date))
                return OperationResult(success=True)
            return OperationResult(success=False, error="Failed to schedule pickup")
        except ShiprocketAuthError as exc:
            return OperationResult(success=False, error=str(exc))
        except Exception:
            logger.exception("Shiprocket pickup scheduling failed", shipment_id=shipment_id)
            return OperationResult(success=False, error="Failed to schedule pickup")
