"""Delhivery adapter — direct integration with Delhivery's express API.

Token-authenticated JSON GETs for charges, serviceability and tracking;
form-encoded POSTs (``format=json`` plus a JSON ``data`` field) for
shipment creation and cancellation. Weights go over the wire in grams.
"""

import json
import math
from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
import structlog

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
from shipping.courier.status import map_courier_status

logger = structlog.get_logger(__name__)

DELHIVERY_API_BASE = "https://track.delhivery.com/api"
DELHIVERY_STAGING_API_BASE = "https://staging-express.delhivery.com/api"
TRACKING_URL = "https://www.delhivery.com/track/package/{waybill}"

NOT_CONFIGURED = "Delhivery not configured"


@dataclass(frozen=True)
class DelhiveryCredentials:
    api_token: str
    warehouse_name: str
    use_staging_api: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "DelhiveryCredentials":
        return cls(
            api_token=data.get("api_token") or data.get("apiToken") or "",
            warehouse_name=data.get("warehouse_name") or data.get("warehouseName") or "",
            use_staging_api=bool(data.get("use_staging_api", data.get("useStagingApi", False))),
        )


def _grams(weight_kg: float) -> int:
    return math.ceil(weight_kg * 1000)


class DelhiveryCourier(CourierProvider):
    provider_type = ProviderType.DELHIVERY
    name = "Delhivery"

    def __init__(self, credentials: DelhiveryCredentials | None = None, client: httpx.Client | None = None):
        self.credentials = credentials
        self.client = client or httpx.Client(timeout=30.0)

    @property
    def api_base(self) -> str:
        if self.credentials and self.credentials.use_staging_api:
            return DELHIVERY_STAGING_API_BASE
        return DELHIVERY_API_BASE

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Token {self.credentials.api_token}"}

    def _charges(self, params: dict) -> httpx.Response:
        return self.client.get(
            f"{self.api_base}/kinko/v1/invoice/charges/.json",
            params={"md": "E", "ss": "Delivered", **params},
            headers=self._headers(),
        )

    def is_configured(self) -> bool:
        return bool(self.credentials and self.credentials.api_token and self.credentials.warehouse_name)

    def validate_credentials(self) -> CredentialCheck:
        if not self.is_configured():
            return CredentialCheck(valid=False, error="Credentials not configured")

        try:
            response = self._charges(
                {"d_pin": "110001", "o_pin": "400001", "cgm": 1000, "pt": "Pre-paid", "cod": 0}
            )
            if response.is_success:
                return CredentialCheck(valid=True)
            data = response.json()
            return CredentialCheck(valid=False, error=data.get("message") or "Invalid credentials")
        except Exception:
            logger.exception("Delhivery credential validation failed")
            return CredentialCheck(valid=False, error="Failed to validate credentials")

    def check_serviceability(self, pickup_pincode: str, delivery_pincode: str) -> bool:
        if not self.is_configured():
            return False

        try:
            response = self.client.get(
                f"{self.api_base}/c/api/pin-codes/json/",
                params={"filter_codes": delivery_pincode},
                headers=self._headers(),
            )
            if not response.is_success:
                return False
            return bool(response.json().get("delivery_codes"))
        except Exception:
            logger.exception("Delhivery serviceability check failed", delivery_pincode=delivery_pincode)
            return False

    def get_rates(self, request: RateRequest) -> RateQuoteResult:
        if not self.is_configured():
            return RateQuoteResult(success=False, error=NOT_CONFIGURED)

        is_cod = request.payment_mode == PaymentMode.COD
        try:
            response = self._charges(
                {
                    "d_pin": request.delivery_pincode,
                    "o_pin": request.pickup_pincode,
                    "cgm": _grams(request.weight),
                    "pt": "COD" if is_cod else "Pre-paid",
                    "cod": request.order_value if is_cod else 0,
                }
            )
            if not response.is_success:
                return RateQuoteResult(success=False, error="Failed to fetch rates")

            data = response.json()
            if not data:
                return RateQuoteResult(success=False, error="No rates available")

            rates = [
                ShippingRate(
                    provider=self.provider_type.value,
                    courier_code="delhivery",
                    courier_name=self.name,
                    rate=float(raw.get("total_amount") or 0),
                    cod_charges=float(raw.get("cod_charges") or 0),
                    estimated_days=int(raw.get("estimated_delivery_days") or 5),
                )
                for raw in data
            ]
            # A single direct carrier quote is both the cheapest and fastest
            return RateQuoteResult(success=True, rates=rates, cheapest=rates[0], fastest=rates[0])
        except Exception:
            logger.exception("Delhivery rate fetch failed")
            return RateQuoteResult(success=False, error="Failed to fetch rates")

    def _shipment_payload(self, request: ShipmentRequest) -> dict:
        is_cod = request.payment_mode == PaymentMode.COD
        return {
            "shipments": [
                {
                    "name": request.customer_name,
                    "add": request.delivery_address,
                    "pin": request.delivery_pincode,
                    "city": request.delivery_city,
                    "state": request.delivery_state,
                    "country": request.delivery_country or "India",
                    "phone": request.customer_phone,
                    "order": request.order_number,
                    "payment_mode": "COD" if is_cod else "Prepaid",
                    "return_pin": request.pickup_pincode,
                    "return_country": "India",
                    "products_desc": ", ".join(item.name for item in request.items),
                    "cod_amount": request.cod_amount or 0,
                    "order_date": datetime.now(UTC).isoformat(),
                    "total_amount": request.order_value,
                    "quantity": sum(item.quantity for item in request.items),
                    "waybill": "",
                    "shipment_width": request.breadth,
                    "shipment_height": request.height,
                    "weight": _grams(request.weight),
                    "shipping_mode": "Surface",
                    "address_type": "home",
                }
            ],
            "pickup_location": {"name": self.credentials.warehouse_name},
        }

    def create_shipment(self, request: ShipmentRequest) -> ShipmentResult:
        provider = self.provider_type.value
        if not self.is_configured():
            return ShipmentResult(success=False, provider=provider, error=NOT_CONFIGURED)

        try:
            response = self.client.post(
                f"{self.api_base}/cmu/create.json",
                data={"format": "json", "data": json.dumps(self._shipment_payload(request))},
                headers=self._headers(),
            )
            data = response.json()

            if not response.is_success or not data.get("success"):
                error = data.get("rmk") or data.get("message") or "Failed to create shipment"
                logger.warning("Delhivery rejected shipment", order_number=request.order_number, error=error)
                return ShipmentResult(success=False, provider=provider, error=error)

            package = (data.get("packages") or [{}])[0]
            waybill = package.get("waybill")

            logger.info("Delhivery shipment created", order_number=request.order_number, waybill=waybill)
            return ShipmentResult(
                success=True,
                provider=provider,
                shipment_id=package.get("refnum") or request.order_number,
                awb_code=waybill,
                courier_name=self.name,
                tracking_url=TRACKING_URL.format(waybill=waybill) if waybill else None,
            )
        except Exception:
            logger.exception("Delhivery shipment creation failed", order_number=request.order_number)
            return ShipmentResult(success=False, provider=provider, error="Failed to create shipment")

    def track_shipment(self, awb_code: str) -> TrackingResult:
        provider = self.provider_type.value
        if not self.is_configured():
            return TrackingResult(success=False, provider=provider, awb_code=awb_code, error=NOT_CONFIGURED)

        try:
            response = self.client.get(
                f"{self.api_base}/v1/packages/json/",
                params={"waybill": awb_code},
                headers=self._headers(),
            )
            if not response.is_success:
                return TrackingResult(
                    success=False, provider=provider, awb_code=awb_code, error="Failed to fetch tracking"
                )

            shipment_data = response.json().get("ShipmentData") or [{}]
            shipment = shipment_data[0].get("Shipment")
            if not shipment:
                return TrackingResult(
                    success=False, provider=provider, awb_code=awb_code, error="Shipment not found"
                )

            events = []
            for scan in shipment.get("Scans") or []:
                detail = scan.get("ScanDetail") or {}
                events.append(
                    TrackingEvent(
                        date=detail.get("ScanDateTime") or "",
                        status=detail.get("Scan") or "",
                        activity=detail.get("Instructions") or detail.get("Scan") or "",
                        location=detail.get("ScannedLocation") or "",
                    )
                )

            status = shipment.get("Status") or {}
            current_status = status.get("Status") or "In Transit"
            return TrackingResult(
                success=True,
                provider=provider,
                awb_code=awb_code,
                current_status=current_status,
                order_status=map_courier_status(current_status),
                current_location=status.get("StatusLocation") or "",
                estimated_delivery=shipment.get("ExpectedDeliveryDate") or None,
                delivered_at=status.get("StatusDateTime") if current_status == "Delivered" else None,
                events=events,
            )
        except Exception:
            logger.exception("Delhivery tracking failed", awb_code=awb_code)
            return TrackingResult(
                success=False, provider=provider, awb_code=awb_code, error="Failed to fetch tracking"
            )

    def cancel_shipment(self, awb_code: str) -> OperationResult:
        if not self.is_configured():
            return OperationResult(success=False, error=NOT_CONFIGURED)

        try:
            response = self.client.post(
                f"{self.api_base}/p/edit",
                data={"waybill": awb_code, "cancellation": "true"},
                headers=self._headers(),
            )
            data = response.json()
            if response.is_success and data.get("status"):
                logger.info("Delhivery shipment cancelled", awb_code=awb_code)
                return OperationResult(success=True)
            return OperationResult(success=False, error=data.get("error") or "Failed to cancel shipment")
        except Exception:
            logger.exception("Delhivery cancellation failed", awb_code=awb_code)
            return OperationResult(success=False, error="Failed to cancel shipment")

    def generate_label(self, shipment_id: str) -> LabelResult:
        if not self.is_configured():
            return LabelResult(success=False, error=NOT_CONFIGURED)

        label_url = f"{self.api_base}/p/packing_slip?wbns={shipment_id}&pdf=true"
        try:
            response = self.client.get(label_url, headers=self._headers())
            if response.is_success:
                # The PDF itself is served from the packing slip URL
                return LabelResult(success=True, label_url=label_url)
            return LabelResult(success=False, error="Failed to generate label")
        except Exception:
            logger.exception("Delhivery label generation failed", shipment_id=shipment_id)
            return LabelResult(success=False, error="Failed to generate label")
