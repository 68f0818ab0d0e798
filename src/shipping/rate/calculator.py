"""Rate calculator — shipping cost for a destination, store and cart.

A pure function of its inputs. When zones are disabled (or no address is
known yet) the store-wide flat rate applies and the result is labelled
"Standard". When zones are enabled but nothing matches, the same global
numbers are returned labelled "Unserviceable"; callers that must refuse
delivery check :func:`shipping.rate.availability.is_shipping_available`.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

import structlog

from shipping.rate.resolution import resolve
from shipping.zone.matcher import find_matching_zone
from shipping.zone.zone import ShippingZone, StoreShippingSettings, WeightPricing

logger = structlog.get_logger(__name__)

DEFAULT_ITEM_WEIGHT_KG = 0.5

STANDARD_ZONE_NAME = "Standard"
UNSERVICEABLE_ZONE_NAME = "Unserviceable"


class PaymentMethod(Enum):
    PREPAID = "prepaid"
    COD = "cod"


@dataclass(frozen=True)
class Destination:
    state: str | None = None
    pincode: str | None = None

    @property
    def has_address(self) -> bool:
        return bool((self.state or "").strip() or (self.pincode or "").strip())


@dataclass(frozen=True)
class CartContext:
    subtotal: float
    total_weight: float = 0.0
    payment_method: PaymentMethod = PaymentMethod.PREPAID

    @property
    def is_cod(self) -> bool:
        return self.payment_method == PaymentMethod.COD


@dataclass(frozen=True)
class ShippingCalculation:
    zone: ShippingZone | None
    zone_name: str
    base_rate: float
    weight_charge: float
    cod_fee: float
    total_shipping: float
    is_free_shipping: bool
    estimated_days: int | None
    cod_available: bool

    def to_dict(self) -> dict:
        return {
            "zone_id": self.zone.id if self.zone else None,
            "zone_name": self.zone_name,
            "base_rate": self.base_rate,
            "weight_charge": self.weight_charge,
            "cod_fee": self.cod_fee,
            "total_shipping": self.total_shipping,
            "is_free_shipping": self.is_free_shipping,
            "estimated_days": self.estimated_days,
            "cod_available": self.cod_available,
        }


def weight_charge(total_weight: float, pricing: WeightPricing | None) -> float:
    """Surcharge for every started kilogram above the base weight."""
    if pricing is None or not pricing.enabled or total_weight <= 0:
        return 0.0
    extra = max(0.0, total_weight - pricing.base_weight_kg)
    return math.ceil(extra) * pricing.per_kg_rate


def _global_calculation(
    settings: StoreShippingSettings, cart: CartContext, zone_name: str
) -> ShippingCalculation:
    is_free = cart.subtotal >= settings.free_shipping_threshold
    base_rate = 0.0 if is_free else settings.flat_rate_national
    cod_fee = resolve(None, settings.cod_fee, 0.0) if cart.is_cod and settings.cod_enabled else 0.0

    return ShippingCalculation(
        zone=None,
        zone_name=zone_name,
        base_rate=base_rate,
        weight_charge=0.0,
        cod_fee=cod_fee,
        total_shipping=base_rate + cod_fee,
        is_free_shipping=is_free,
        estimated_days=None,
        cod_available=settings.cod_enabled,
    )


def calculate_shipping(
    destination: Destination,
    settings: StoreShippingSettings,
    cart: CartContext,
) -> ShippingCalculation:
    config = settings.config

    if not config.zones_enabled or not destination.has_address:
        return _global_calculation(settings, cart, STANDARD_ZONE_NAME)

    zone = find_matching_zone(destination.state, destination.pincode, config.zones)
    if zone is None:
        logger.info(
            "No shipping zone matches destination",
            state=destination.state,
            pincode=destination.pincode,
        )
        return _global_calculation(settings, cart, UNSERVICEABLE_ZONE_NAME)

    threshold = resolve(zone.free_shipping_threshold, settings.free_shipping_threshold)
    is_free = cart.subtotal >= threshold
    base_rate = 0.0 if is_free else zone.flat_rate
    surcharge = 0.0 if is_free else weight_charge(cart.total_weight, config.weight_based)

    cod_available = bool(resolve(zone.cod_available, settings.cod_enabled, False))
    cod_fee = resolve(zone.cod_fee, settings.cod_fee, 0.0) if cart.is_cod and cod_available else 0.0

    return ShippingCalculation(
        zone=zone,
        zone_name=zone.name,
        base_rate=base_rate,
        weight_charge=surcharge,
        cod_fee=cod_fee,
        total_shipping=base_rate + surcharge + cod_fee,
        is_free_shipping=is_free,
        estimated_days=zone.estimated_days,
        cod_available=cod_available,
    )


def cart_total_weight(items: Iterable[Mapping]) -> float:
    """Total cart weight in kg; units without a weight count as 0.5 kg."""
    total = 0.0
    for item in items:
        weight = item.get("weight")
        unit_weight = DEFAULT_ITEM_WEIGHT_KG if weight is None else float(weight)
        total += unit_weight * int(item.get("quantity", 1))
    return total


def cart_total(subtotal: float, shipping: float, tax: float = 0.0, discount: float = 0.0) -> float:
    return max(0.0, subtotal + shipping + tax - discount)
