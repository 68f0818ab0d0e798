"""FastAPI endpoints for the Shipping domain."""

from fastapi import APIRouter

from shipping.api.schemas import (
    CalculateShippingRequest,
    CheckPincodeRequest,
    CheckPincodeResponse,
    ShippingCalculationResponse,
)
from shipping.rate.availability import is_shipping_available
from shipping.rate.calculator import (
    CartContext,
    Destination,
    PaymentMethod,
    calculate_shipping,
    cart_total_weight,
)
from shipping.zone.zone import StoreShippingSettings

router = APIRouter(prefix="/shipping", tags=["shipping"])


@router.post("/calculate", response_model=ShippingCalculationResponse)
async def calculate(body: CalculateShippingRequest) -> ShippingCalculationResponse:
    settings = StoreShippingSettings.from_dict(body.settings.model_dump())
    cart = CartContext(
        subtotal=body.subtotal,
        total_weight=cart_total_weight(line.model_dump() for line in body.items),
        payment_method=PaymentMethod(body.payment_method),
    )
    result = calculate_shipping(Destination(state=body.state, pincode=body.pincode), settings, cart)
    return ShippingCalculationResponse(**result.to_dict())


@router.post("/check-pincode", response_model=CheckPincodeResponse)
async def check_pincode(body: CheckPincodeRequest) -> CheckPincodeResponse:
    settings = StoreShippingSettings.from_dict(body.settings.model_dump())
    availability = is_shipping_available(body.state, body.pincode, settings.config)
    if not availability.available:
        return CheckPincodeResponse(available=False, reason=availability.reason)

    result = calculate_shipping(
        Destination(state=body.state, pincode=body.pincode),
        settings,
        CartContext(subtotal=body.subtotal),
    )
    return CheckPincodeResponse(available=True, shipping=ShippingCalculationResponse(**result.to_dict()))
