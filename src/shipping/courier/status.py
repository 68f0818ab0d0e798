"""Courier status vocabulary and rate selection helpers."""

from typing import Sequence

from shipping.courier.port import ShippingRate

# Raw courier statuses (Shiprocket, Delhivery, Blue Dart) to the storefront's order statuses
COURIER_STATUS_MAP = {
    "NEW": "processing",
    "AWB ASSIGNED": "processing",
    "LABEL GENERATED": "processing",
    "PICKUP SCHEDULED": "processing",
    "PICKUP QUEUED": "processing",
    "MANIFESTED": "packed",
    "SHIPPED": "shipped",
    "PICKED UP": "shipped",
    "PENDING": "shipped",
    "IN TRANSIT": "shipped",
    "OUT FOR DELIVERY": "out_for_delivery",
    "DISPATCHED": "out_for_delivery",
    "DELIVERED": "delivered",
    "CANCELED": "cancelled",
    "CANCELLED": "cancelled",
    "LOST": "cancelled",
    "DAMAGED": "cancelled",
    "RTO INITIATED": "returned",
    "RTO DELIVERED": "returned",
    "RTO": "returned",
    "RETURNED": "returned",
}


def map_courier_status(status: str | None) -> str:
    """Map a raw courier status to an order status, defaulting to processing."""
    return COURIER_STATUS_MAP.get((status or "").strip().upper(), "processing")


def cheapest(rates: Sequence[ShippingRate]) -> ShippingRate | None:
    return min(rates, key=lambda r: r.rate, default=None)


def fastest(rates: Sequence[ShippingRate]) -> ShippingRate | None:
    return min(rates, key=lambda r: r.estimated_days, default=None)
