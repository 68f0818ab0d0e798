"""Courier adapter registry — pluggable courier integrations.

Each provider type maps to a builder that turns stored account credentials
into a ready adapter. Setting ``COURIER_ADAPTER=fake`` routes every
integrated provider through one shared FakeCourier for local development.
"""

import hashlib
import os
from typing import Callable

import httpx

from shared.cache import Cache
from shipping.courier.bluedart import BlueDartCourier, BlueDartCredentials
from shipping.courier.delhivery import DelhiveryCourier, DelhiveryCredentials
from shipping.courier.port import CourierProvider, ProviderType
from shipping.courier.self_delivery import SelfDelivery
from shipping.courier.shiprocket import ShiprocketCourier, ShiprocketCredentials

_courier_instance = None


def get_courier():
    """Return the development courier adapter (singleton)."""
    global _courier_instance
    if _courier_instance is None:
        adapter = os.environ.get("COURIER_ADAPTER", "fake")
        if adapter == "fake":
            from shipping.courier.fake_adapter import FakeCourier

            _courier_instance = FakeCourier()
        else:
            raise ValueError(f"Unknown courier adapter: {adapter}")
    return _courier_instance


def reset_courier():
    """Reset the courier singleton (useful for testing)."""
    global _courier_instance
    _courier_instance = None


def _token_key(account) -> str:
    # New credentials produce a new ciphertext, so a stale token is never reused
    fingerprint = hashlib.sha256((account.credentials_encrypted or "").encode()).hexdigest()[:16]
    return f"{account.id}:{fingerprint}"


def _build_shiprocket(account, client, token_cache) -> CourierProvider:
    return ShiprocketCourier(
        credentials=ShiprocketCredentials.from_dict(account.credentials()),
        client=client,
        token_cache=token_cache,
        cache_key=_token_key(account),
        pickup_location=account.pickup_location,
    )


def _build_delhivery(account, client, token_cache) -> CourierProvider:
    return DelhiveryCourier(credentials=DelhiveryCredentials.from_dict(account.credentials()), client=client)


def _build_bluedart(account, client, token_cache) -> CourierProvider:
    return BlueDartCourier(credentials=BlueDartCredentials.from_dict(account.credentials()), client=client)


def _build_self(account, client, token_cache) -> CourierProvider:
    return SelfDelivery()


def _build_fake(account, client, token_cache) -> CourierProvider:
    return get_courier()


_BUILDERS: dict[ProviderType, Callable[..., CourierProvider]] = {
    ProviderType.SHIPROCKET: _build_shiprocket,
    ProviderType.DELHIVERY: _build_delhivery,
    ProviderType.BLUEDART: _build_bluedart,
    ProviderType.SELF: _build_self,
    ProviderType.FAKE: _build_fake,
}


def build_courier(account, client: httpx.Client | None = None, token_cache: Cache | None = None) -> CourierProvider:
    """Build the adapter for a ``CourierAccount``."""
    provider = ProviderType(account.provider)
    if provider != ProviderType.SELF and os.environ.get("COURIER_ADAPTER") == "fake":
        return get_courier()
    return _BUILDERS[provider](account, client, token_cache)
