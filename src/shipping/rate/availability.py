"""Shipping availability gate.

Separate from rate calculation, which always yields a number. Checkout
must consult this before accepting an order to a zoned store.
"""

from dataclasses import dataclass

from shipping.zone.matcher import find_matching_zone
from shipping.zone.zone import ShippingConfig

UNAVAILABLE_REASON = "Delivery is not available to this location"


@dataclass(frozen=True)
class AvailabilityResult:
    available: bool
    reason: str | None = None


def is_shipping_available(
    state: str | None,
    pincode: str | None,
    config: ShippingConfig | None,
) -> AvailabilityResult:
    if config is None or not config.zones_enabled:
        return AvailabilityResult(available=True)

    if find_matching_zone(state, pincode, config.zones) is None:
        return AvailabilityResult(available=False, reason=UNAVAILABLE_REASON)

    return AvailabilityResult(available=True)
