"""Tests for shipping rate calculation."""

import pytest
from shipping.rate.calculator import (
    STANDARD_ZONE_NAME,
    UNSERVICEABLE_ZONE_NAME,
    CartContext,
    Destination,
    PaymentMethod,
    calculate_shipping,
    cart_total,
    cart_total_weight,
    weight_charge,
)
from shipping.rate.resolution import resolve
from shipping.zone.zone import ShippingConfig, ShippingZone, StoreShippingSettings, WeightPricing, ZoneType

DELHI = Destination(state="Delhi", pincode="110001")
BANGALORE = Destination(state="Karnataka", pincode="560034")


def _settings(config=None, **overrides):
    values = {"free_shipping_threshold": 999, "flat_rate_national": 49, "cod_enabled": True, "cod_fee": 20}
    values.update(overrides)
    return StoreShippingSettings(config=config or ShippingConfig(), **values)


def _zoned(*zones, weight_based=None):
    return ShippingConfig(use_zones=True, zones=tuple(zones), weight_based=weight_based)


SOUTH = ShippingZone(id="south", name="South", type=ZoneType.STATES, states=frozenset({"KA"}), flat_rate=60,
                     estimated_days=4)


class TestResolve:
    def test_zone_value_wins(self):
        assert resolve(10, 20, 0) == 10

    def test_zero_is_a_value(self):
        assert resolve(0, 20, 5) == 0
        assert resolve(False, True) is False

    def test_falls_back_to_global_then_default(self):
        assert resolve(None, 20, 5) == 20
        assert resolve(None, None, 5) == 5
        assert resolve(None, None) is None


class TestGlobalRates:
    def test_flat_rate_with_cod(self):
        result = calculate_shipping(DELHI, _settings(), CartContext(subtotal=500, payment_method=PaymentMethod.COD))
        assert result.zone_name == STANDARD_ZONE_NAME
        assert result.base_rate == 49
        assert result.cod_fee == 20
        assert result.total_shipping == 69
        assert result.is_free_shipping is False

    def test_threshold_is_inclusive(self):
        result = calculate_shipping(DELHI, _settings(), CartContext(subtotal=999))
        assert result.is_free_shipping is True
        assert result.base_rate == 0
        assert result.total_shipping == 0

    def test_cod_fee_still_charged_on_free_shipping(self):
        result = calculate_shipping(DELHI, _settings(), CartContext(subtotal=1500, payment_method=PaymentMethod.COD))
        assert result.base_rate == 0
        assert result.total_shipping == 20

    def test_cod_disabled_means_no_fee(self):
        settings = _settings(cod_enabled=False)
        result = calculate_shipping(DELHI, settings, CartContext(subtotal=500, payment_method=PaymentMethod.COD))
        assert result.cod_fee == 0
        assert result.cod_available is False

    def test_prepaid_has_no_cod_fee(self):
        assert calculate_shipping(DELHI, _settings(), CartContext(subtotal=500)).cod_fee == 0

    def test_no_address_uses_global_settings_even_with_zones(self):
        settings = _settings(config=_zoned(SOUTH))
        result = calculate_shipping(Destination(), settings, CartContext(subtotal=100))
        assert result.zone_name == STANDARD_ZONE_NAME
        assert result.base_rate == 49


class TestZonedRates:
    def test_zone_rate_with_weight_surcharge(self):
        config = _zoned(SOUTH, weight_based=WeightPricing(enabled=True, base_weight_kg=0.5, per_kg_rate=30))
        result = calculate_shipping(BANGALORE, _settings(config=config), CartContext(subtotal=500, total_weight=2.3))
        assert result.zone.id == "south"
        assert result.base_rate == 60
        assert result.weight_charge == 60
        assert result.total_shipping == 120
        assert result.estimated_days == 4

    def test_zone_free_threshold_overrides_global(self):
        zone = ShippingZone(id="south", name="South", type=ZoneType.STATES, states=frozenset({"KA"}),
                            flat_rate=60, free_shipping_threshold=400)
        result = calculate_shipping(BANGALORE, _settings(config=_zoned(zone)), CartContext(subtotal=450))
        assert result.is_free_shipping is True
        assert result.total_shipping == 0

    def test_free_shipping_waives_weight_charge(self):
        config = _zoned(SOUTH, weight_based=WeightPricing(enabled=True, per_kg_rate=30))
        result = calculate_shipping(BANGALORE, _settings(config=config), CartContext(subtotal=1200, total_weight=5))
        assert result.weight_charge == 0

    def test_zone_can_disable_cod(self):
        zone = ShippingZone(id="south", name="South", type=ZoneType.STATES, states=frozenset({"KA"}),
                            flat_rate=60, cod_available=False)
        result = calculate_shipping(
            BANGALORE, _settings(config=_zoned(zone)), CartContext(subtotal=500, payment_method=PaymentMethod.COD)
        )
        assert result.cod_available is False
        assert result.cod_fee == 0

    def test_zone_cod_fee_of_zero_overrides_global(self):
        zone = ShippingZone(id="south", name="South", type=ZoneType.STATES, states=frozenset({"KA"}),
                            flat_rate=60, cod_fee=0)
        result = calculate_shipping(
            BANGALORE, _settings(config=_zoned(zone)), CartContext(subtotal=500, payment_method=PaymentMethod.COD)
        )
        assert result.cod_fee == 0

    def test_unmatched_destination_still_gets_a_number(self):
        result = calculate_shipping(DELHI, _settings(config=_zoned(SOUTH)), CartContext(subtotal=500))
        assert result.zone is None
        assert result.zone_name == UNSERVICEABLE_ZONE_NAME
        assert result.total_shipping == 49

    def test_to_dict(self):
        data = calculate_shipping(BANGALORE, _settings(config=_zoned(SOUTH)), CartContext(subtotal=500)).to_dict()
        assert data["zone_id"] == "south"
        assert data["total_shipping"] == 60


class TestWeightCharge:
    PRICING = WeightPricing(enabled=True, base_weight_kg=0.5, per_kg_rate=30)

    def test_every_started_kilogram_is_charged(self):
        assert weight_charge(2.3, self.PRICING) == 60
        assert weight_charge(1.5, self.PRICING) == 30
        assert weight_charge(1.51, self.PRICING) == 60

    def test_within_base_weight_is_free(self):
        assert weight_charge(0.5, self.PRICING) == 0

    def test_disabled_or_missing_pricing(self):
        assert weight_charge(10, WeightPricing(enabled=False, per_kg_rate=30)) == 0
        assert weight_charge(10, None) == 0

    @pytest.mark.parametrize("lighter,heavier", [(0.2, 0.6), (1.0, 1.01), (2.3, 7.9), (3.0, 3.0)])
    def test_monotonic_in_weight(self, lighter, heavier):
        assert weight_charge(lighter, self.PRICING) <= weight_charge(heavier, self.PRICING)


class TestCartHelpers:
    def test_total_weight_defaults_missing_weights(self):
        items = [{"weight": 1.2, "quantity": 2}, {"quantity": 3}]
        assert cart_total_weight(items) == pytest.approx(3.9)

    def test_cart_total_clamps_at_zero(self):
        assert cart_total(500, 49, tax=10, discount=100) == 459
        assert cart_total(100, 0, discount=500) == 0
