"""Shipping zone configuration records.

Zones, the per-store zone configuration and the global fallback settings are
read-only inputs to the rate engine. They are owned by the store record and
arrive as JSON; ``from_dict`` builds them while tolerating missing optional
keys.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ZoneType(Enum):
    STATES = "states"
    PINCODES = "pincodes"
    DEFAULT = "default"


def _optional_float(value: Any) -> float | None:
    return None if value is None else float(value)


@dataclass(frozen=True)
class ShippingZone:
    """A named rate scope covering states, pincode patterns or everything else."""

    id: str
    name: str
    type: ZoneType
    flat_rate: float = 0.0
    states: frozenset[str] = field(default_factory=frozenset)
    pincodes: tuple[str, ...] = ()
    cod_available: bool | None = None
    cod_fee: float | None = None
    free_shipping_threshold: float | None = None
    estimated_days: int | None = None
    is_default: bool = False

    @property
    def is_fallback(self) -> bool:
        """True for the catch-all zone, flagged either way."""
        return self.is_default or self.type == ZoneType.DEFAULT

    @classmethod
    def from_dict(cls, data: dict) -> "ShippingZone":
        estimated_days = data.get("estimated_days")
        return cls(
            id=str(data["id"]),
            name=data.get("name") or str(data["id"]),
            type=ZoneType(data.get("type", ZoneType.STATES.value)),
            flat_rate=float(data.get("flat_rate") or 0),
            states=frozenset(s.strip().upper() for s in data.get("states") or []),
            pincodes=tuple(data.get("pincodes") or ()),
            cod_available=data.get("cod_available"),
            cod_fee=_optional_float(data.get("cod_fee")),
            free_shipping_threshold=_optional_float(data.get("free_shipping_threshold")),
            estimated_days=None if estimated_days is None else int(estimated_days),
            is_default=bool(data.get("is_default", False)),
        )


@dataclass(frozen=True)
class WeightPricing:
    """Per-kilogram surcharge above a base weight."""

    enabled: bool = False
    base_weight_kg: float = 0.5
    per_kg_rate: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> "WeightPricing":
        return cls(
            enabled=bool(data.get("enabled", False)),
            base_weight_kg=float(data.get("base_weight_kg", data.get("base_weight", 0.5))),
            per_kg_rate=float(data.get("per_kg_rate") or 0),
        )


@dataclass(frozen=True)
class ShippingConfig:
    """Per-store zone configuration."""

    use_zones: bool = False
    zones: tuple[ShippingZone, ...] = ()
    weight_based: WeightPricing | None = None

    @property
    def zones_enabled(self) -> bool:
        return self.use_zones and bool(self.zones)

    @classmethod
    def from_dict(cls, data: dict | None) -> "ShippingConfig":
        if not data:
            return cls()
        weight_based = data.get("weight_based")
        return cls(
            use_zones=bool(data.get("use_zones", False)),
            zones=tuple(ShippingZone.from_dict(z) for z in data.get("zones") or []),
            weight_based=WeightPricing.from_dict(weight_based) if weight_based else None,
        )


@dataclass(frozen=True)
class StoreShippingSettings:
    """Global fallback settings, always present on a store."""

    free_shipping_threshold: float
    flat_rate_national: float
    cod_enabled: bool = False
    cod_fee: float | None = None
    config: ShippingConfig = field(default_factory=ShippingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "StoreShippingSettings":
        return cls(
            free_shipping_threshold=float(data.get("free_shipping_threshold") or 0),
            flat_rate_national=float(data.get("flat_rate_national") or 0),
            cod_enabled=bool(data.get("cod_enabled", False)),
            cod_fee=_optional_float(data.get("cod_fee")),
            config=ShippingConfig.from_dict(data.get("config")),
        )
