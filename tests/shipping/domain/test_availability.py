"""Tests for the shipping availability gate."""

from shipping.rate.availability import UNAVAILABLE_REASON, is_shipping_available
from shipping.zone.zone import ShippingConfig, ShippingZone, ZoneType

SOUTH = ShippingZone(id="south", name="South", type=ZoneType.STATES, states=frozenset({"KA", "TN"}))
REST = ShippingZone(id="rest", name="Rest of India", type=ZoneType.DEFAULT, is_default=True)


class TestIsShippingAvailable:
    def test_zones_disabled_is_available(self):
        assert is_shipping_available("Delhi", "110001", ShippingConfig()).available is True

    def test_missing_config_is_available(self):
        assert is_shipping_available("Delhi", "110001", None).available is True

    def test_matched_zone_is_available(self):
        config = ShippingConfig(use_zones=True, zones=(SOUTH,))
        assert is_shipping_available("Karnataka", "560001", config).available is True

    def test_unmatched_without_default_is_unavailable(self):
        config = ShippingConfig(use_zones=True, zones=(SOUTH,))
        result = is_shipping_available("Delhi", "110001", config)
        assert result.available is False
        assert result.reason == UNAVAILABLE_REASON

    def test_default_zone_makes_everything_available(self):
        config = ShippingConfig(use_zones=True, zones=(SOUTH, REST))
        assert is_shipping_available("Delhi", "110001", config).available is True
