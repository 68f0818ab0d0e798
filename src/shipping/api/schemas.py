"""Pydantic request/response schemas for the Shipping API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class ShippingZoneSchema(BaseModel):
    id: str
    name: str
    type: str = Field("states", pattern="^(states|pincodes|default)$")
    flat_rate: float = Field(0, ge=0)
    states: list[str] = Field(default_factory=list)
    pincodes: list[str] = Field(default_factory=list)
    cod_available: bool | None = None
    cod_fee: float | None = Field(None, ge=0)
    free_shipping_threshold: float | None = Field(None, ge=0)
    estimated_days: int | None = Field(None, ge=0)
    is_default: bool = False


class WeightPricingSchema(BaseModel):
    enabled: bool = False
    base_weight_kg: float = Field(0.5, ge=0)
    per_kg_rate: float = Field(0, ge=0)


class ShippingConfigSchema(BaseModel):
    use_zones: bool = False
    zones: list[ShippingZoneSchema] = Field(default_factory=list)
    weight_based: WeightPricingSchema | None = None


class StoreShippingSchema(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "free_shipping_threshold": 999,
                    "flat_rate_national": 49,
                    "cod_enabled": True,
                    "cod_fee": 20,
                }
            ]
        }
    }

    free_shipping_threshold: float = Field(..., ge=0)
    flat_rate_national: float = Field(..., ge=0)
    cod_enabled: bool = False
    cod_fee: float | None = Field(None, ge=0)
    config: ShippingConfigSchema | None = None


class CartLineSchema(BaseModel):
    quantity: int = Field(1, ge=1)
    weight: float | None = Field(None, ge=0)


class CalculateShippingRequest(BaseModel):
    state: str | None = None
    pincode: str | None = Field(None, max_length=10)
    subtotal: float = Field(..., ge=0)
    payment_method: str = Field("prepaid", pattern="^(prepaid|cod)$")
    items: list[CartLineSchema] = Field(default_factory=list)
    settings: StoreShippingSchema


class CheckPincodeRequest(BaseModel):
    state: str | None = None
    pincode: str = Field(..., max_length=10)
    subtotal: float = Field(0, ge=0)
    settings: StoreShippingSchema


# --- Response Schemas ---


class ShippingCalculationResponse(BaseModel):
    zone_id: str | None
    zone_name: str
    base_rate: float
    weight_charge: float
    cod_fee: float
    total_shipping: float
    is_free_shipping: bool
    estimated_days: int | None
    cod_available: bool


class CheckPincodeResponse(BaseModel):
    available: bool
    reason: str | None = None
    shipping: ShippingCalculationResponse | None = None
