"""Blue Dart adapter — direct integration with Blue Dart's NetConnect REST API.

Every call is a JSON POST carrying a ``Profile`` block (licence key and
login id) next to the request body, authenticated with the JWT and client
code headers. Blue Dart quotes a single freight charge; the express
service is offered at a fixed markup on top of it.
"""

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

BLUEDART_API_BASE = "https://netconnect.bluedart.com/Ver1.10"
TRACKING_URL = "https://www.bluedart.com/tracking?tracknumbers={awb}"
EXPRESS_MARKUP = 1.3

NOT_CONFIGURED = "Blue Dart not configured"


@dataclass(frozen=True)
class BlueDartCredentials:
    api_key: str
    client_code: str
    license_key: str
    login_id: str
    is_production: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "BlueDartCredentials":
        return cls(
            api_key=data.get("api_key") or data.get("apiKey") or "",
            client_code=data.get("client_code") or data.get("clientCode") or "",
            license_key=data.get("license_key") or data.get("licenseKey") or "",
            login_id=data.get("login_id") or data.get("loginId") or "",
            is_production=bool(data.get("is_production", data.get("isProduction", False))),
        )


def _grams(weight_kg: float) -> int:
    return math.ceil(weight_kg * 1000)


def _product_code(payment_mode: PaymentMode) -> str:
    # C = COD, A = Apex (prepaid)
    return "C" if payment_mode == PaymentMode.COD else "A"


class BlueDartCourier(CourierProvider):
    provider_type = ProviderType.BLUEDART
    name = "Blue Dart"

    def __init__(self, credentials: BlueDartCredentials | None = None, client: httpx.Client | None = None):
        self.credentials = credentials
        self.client = client or httpx.Client(timeout=30.0)

    def is_configured(self) -> bool:
        return bool(
            self.credentials
            and self.credentials.api_key
            and self.credentials.client_code
            and self.credentials.license_key
            and self.credentials.login_id
        )

    def _headers(self) -> dict[str, str]:
        return {"JWTToken": self.credentials.api_key, "ClientID": self.credentials.client_code}

    def _profile(self) -> dict[str, str]:
        return {"Api_type": "S", "LicenceKey": self.credentials.license_key, "LoginID": self.credentials.login_id}

    def _post(self, path: str, body: dict) -> httpx.Response:
        return self.client.post(f"{BLUEDART_API_BASE}{path}", json=body, headers=self._headers())

    def _serviceable_pincodes(self, delivery_pincode: str) -> httpx.Response:
        return self._post(
            "/API/Finder/GetServicablePincodeList",
            {"pinCode": delivery_pincode, "profile": self._profile()},
        )

    def validate_credentials(self) -> CredentialCheck:
        if not self.is_configured():
            return CredentialCheck(valid=False, error="Credentials not configured")

        try:
            response = self._serviceable_pincodes("110001")
            if response.is_success:
                return CredentialCheck(valid=True)
            return CredentialCheck(valid=False, error="Invalid credentials")
        except Exception:
            logger.exception("Blue Dart credential validation failed")
            return CredentialCheck(valid=False, error="Failed to validate credentials")

    def check_serviceability(self, pickup_pincode: str, delivery_pincode: str) -> bool:
        if not self.is_configured():
            return False

        try:
            response = self._serviceable_pincodes(delivery_pincode)
            if not response.is_success:
                return False
            return bool(response.json().get("ServiceablePinCodeResult"))
        except Exception:
            logger.exception("Blue Dart serviceability check failed", delivery_pincode=delivery_pincode)
            return False

    def get_rates(self, request: RateRequest) -> RateQuoteResult:
        if not self.is_configured():
            return RateQuoteResult(success=False, error=NOT_CONFIGURED)

        try:
            response = self._post(
                "/API/RateCalculator/GetFreightRate",
                {
                    "originPinCode": request.pickup_pincode,
                    "destinationPinCode": request.delivery_pincode,
                    "actualWeight": str(_grams(request.weight)),
                    "invoiceValue": str(request.order_value),
                    "creditReferenceNumber": "",
                    "productCode": _product_code(request.payment_mode),
                    "subProductCode": "",
                    "pieceCount": "1",
                    "isInsured": "false",
                    "profile": self._profile(),
                },
            )
            if not response.is_success:
                return RateQuoteResult(success=False, error="Failed to fetch rates")

            quote = response.json().get("FreightRateResult") or {}
            if quote.get("ResponseCode") != "200":
                return RateQuoteResult(success=False, error=quote.get("ErrorMessage") or "No rates available")

            freight = float(quote.get("TotalFreightCharge") or 0)
            cod_charges = float(quote.get("CODAmount") or 0)
            surface = ShippingRate(
                provider=self.provider_type.value,
                courier_code="bluedart_surface",
                courier_name="Blue Dart Surface",
                rate=freight,
                cod_charges=cod_charges,
                estimated_days=5,
            )
            express = ShippingRate(
                provider=self.provider_type.value,
                courier_code="bluedart_express",
                courier_name="Blue Dart Express",
                rate=round(freight * EXPRESS_MARKUP, 2),
                cod_charges=cod_charges,
                estimated_days=2,
                is_recommended=True,
            )
            return RateQuoteResult(success=True, rates=[surface, express], cheapest=surface, fastest=express)
        except Exception:
            logger.exception("Blue Dart rate fetch failed")
            return RateQuoteResult(success=False, error="Failed to fetch rates")

    def _waybill_payload(self, request: ShipmentRequest) -> dict:
        address = request.delivery_address
        return {
            "Request": {
                "Consignee": {
                    "ConsigneeAddress1": address[:100],
                    "ConsigneeAddress2": address[100:200],
                    "ConsigneeAddress3": "",
                    "ConsigneeAttention": request.customer_name,
                    "ConsigneeMobile": request.customer_phone,
                    "ConsigneeName": request.customer_name,
                    "ConsigneePincode": request.delivery_pincode,
                    "ConsigneeTelephone": request.customer_phone,
                },
                "Services": {
                    "ActualWeight": str(_grams(request.weight)),
                    "CollectableAmount": str(request.cod_amount or 0),
                    "Commodity": {
                        "CommodityDetail1": ", ".join(item.name for item in request.items)[:100],
                        "CommodityDetail2": "",
                        "CommodityDetail3": "",
                    },
                    "CreditReferenceNo": request.order_number,
                    "DeclaredValue": str(request.order_value),
                    "Dimensions": f"{request.length}X{request.breadth}X{request.height}",
                    "InvoiceNo": request.order_number,
                    "ItemCount": str(len(request.items)),
                    "PickupDate": datetime.now(UTC).date().isoformat(),
                    "PickupTime": "1000",
                    "PieceCount": "1",
                    "ProductCode": _product_code(request.payment_mode),
                    "ProductType": "Dutiables",
                    "SubProductCode": "",
                },
                "Shipper": {
                    "CustomerAddress1": request.pickup_location,
                    "CustomerCode": self.credentials.client_code,
                    "CustomerEmailID": request.customer_email or "",
                    "CustomerName": self.credentials.login_id,
                    "CustomerPincode": request.pickup_pincode,
                    "IsToPayCustomer": "false",
                },
            },
            "Profile": self._profile(),
        }

    def create_shipment(self, request: ShipmentRequest) -> ShipmentResult:
        provider = self.provider_type.value
        if not self.is_configured():
            return ShipmentResult(success=False, provider=provider, error=NOT_CONFIGURED)

        try:
            response = self._post("/API/Pickup/GenerateWaybill", self._waybill_payload(request))
            data = response.json()
            result = data.get("GenerateWaybillResult") or {}

            if not response.is_success or result.get("IsError") or not result.get("AWBNo"):
                statuses = result.get("Status") or [{}]
                error = statuses[0].get("StatusInformation") or "Failed to create shipment"
                logger.warning("Blue Dart rejected waybill", order_number=request.order_number, error=error)
                return ShipmentResult(success=False, provider=provider, error=error)

            awb = result["AWBNo"]
            logger.info("Blue Dart waybill generated", order_number=request.order_number, awb_code=awb)
            return ShipmentResult(
                success=True,
                provider=provider,
                shipment_id=awb,
                awb_code=awb,
                courier_name=self.name,
                tracking_url=TRACKING_URL.format(awb=awb),
                estimated_delivery_date=result.get("ExpectedDeliveryDate"),
            )
        except Exception:
            logger.exception("Blue Dart shipment creation failed", order_number=request.order_number)
            return ShipmentResult(success=False, provider=provider, error="Failed to create shipment")

    def track_shipment(self, awb_code: str) -> TrackingResult:
        provider = self.provider_type.value
        if not self.is_configured():
            return TrackingResult(success=False, provider=provider, awb_code=awb_code, error=NOT_CONFIGURED)

        try:
            response = self._post("/API/Tracking/GetTrackingData", {"AWBNo": awb_code, "Profile": self._profile()})
            if not response.is_success:
                return TrackingResult(
                    success=False, provider=provider, awb_code=awb_code, error="Failed to fetch tracking"
                )

            tracking = response.json().get("GetTrackingDataResult")
            if not tracking or tracking.get("IsError"):
                error = (tracking or {}).get("StatusInformation") or "Tracking not found"
                return TrackingResult(success=False, provider=provider, awb_code=awb_code, error=error)

            # Scans arrive newest first
            scans = tracking.get("ScanDetails") or []
            events = [
                TrackingEvent(
                    date=f"{scan.get('ScanDate', '')} {scan.get('ScanTime', '')}".strip(),
                    status=scan.get("Scan") or "",
                    activity=scan.get("ScanDescription") or scan.get("Scan") or "",
                    location=scan.get("Location") or "",
                )
                for scan in scans
            ]
            latest = scans[0] if scans else {}
            current_status = latest.get("Scan") or "In Transit"
            return TrackingResult(
                success=True,
                provider=provider,
                awb_code=awb_code,
                current_status=current_status,
                order_status=map_courier_status(current_status),
                current_location=latest.get("Location") or "",
                estimated_delivery=tracking.get("ExpectedDeliveryDate"),
                delivered_at=latest.get("ScanDate") if current_status.upper() == "DELIVERED" else None,
                events=events,
            )
        except Exception:
            logger.exception("Blue Dart tracking failed", awb_code=awb_code)
            return TrackingResult(
                success=False, provider=provider, awb_code=awb_code, error="Failed to fetch tracking"
            )

    def cancel_shipment(self, awb_code: str) -> OperationResult:
        if not self.is_configured():
            return OperationResult(success=False, error=NOT_CONFIGURED)

        try:
            response = self._post("/API/Pickup/CancelWaybill", {"AWBNo": awb_code, "Profile": self._profile()})
            result = response.json().get("CancelWaybillResult") or {}
            if response.is_success and not result.get("IsError"):
                logger.info("Blue Dart waybill cancelled", awb_code=awb_code)
                return OperationResult(success=True)
            return OperationResult(success=False, error=result.get("StatusInformation") or "Failed to cancel shipment")
        except Exception:
            logger.exception("Blue Dart cancellation failed", awb_code=awb_code)
            return OperationResult(success=False, error="Failed to cancel shipment")

    def generate_label(self, shipment_id: str) -> LabelResult:
        if not self.is_configured():
            return LabelResult(success=False, error=NOT_CONFIGURED)

        try:
            response = self._post("/API/Pickup/GetShipmentLabel", {"AWBNo": shipment_id, "Profile": self._profile()})
            label = (response.json().get("GetShipmentLabelResult") or {}).get("LabelImage")
            if response.is_success and label:
                # Blue Dart returns the PDF inline as base64
                return LabelResult(success=True, label_url=f"data:application/pdf;base64,{label}")
            return LabelResult(success=False, error="Failed to generate label")
        except Exception:
            logger.exception("Blue Dart label generation failed", shipment_id=shipment_id)
            return LabelResult(success=False, error="Failed to generate label")
