"""Shared BDD fixtures and step definitions for the Shipping domain."""

import pytest
from pytest_bdd import given, parsers


@pytest.fixture()
def store():
    """Raw store settings, in the shape stored on the store record."""
    return {"config": {"use_zones": False, "zones": []}}


def _add_zone(store, zone):
    zones = store["config"]["zones"]
    zone.setdefault("id", f"zone-{len(zones) + 1}")
    zones.append(zone)
    store["config"]["use_zones"] = True


@given(parsers.cfparse("a store charging {rate:g} nationally with free shipping from {threshold:g}"))
def store_flat_rate(store, rate, threshold):
    store.update(flat_rate_national=rate, free_shipping_threshold=threshold)


@given(parsers.cfparse("cash on delivery costs {fee:g}"))
def store_cod(store, fee):
    store.update(cod_enabled=True, cod_fee=fee)


@given(parsers.cfparse('zone "{name}" covers states "{states}" at {rate:g}'))
def state_zone(store, name, states, rate):
    _add_zone(store, {"name": name, "type": "states", "states": states.split(","), "flat_rate": rate})


@given(parsers.cfparse('zone "{name}" covers pincodes "{patterns}" at {rate:g}'))
def pincode_zone(store, name, patterns, rate):
    _add_zone(store, {"name": name, "type": "pincodes", "pincodes": patterns.split(","), "flat_rate": rate})


@given(parsers.cfparse('a default zone "{name}" at {rate:g}'))
def default_zone(store, name, rate):
    _add_zone(store, {"name": name, "type": "default", "flat_rate": rate, "is_default": True})


@given(parsers.cfparse("every kilogram above {base:g} costs {rate:g}"))
def weight_pricing(store, base, rate):
    store["config"]["weight_based"] = {"enabled": True, "base_weight_kg": base, "per_kg_rate": rate}
