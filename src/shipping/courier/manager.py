"""CourierManager — routes a store's shipping operations to its courier accounts.

One manager per store and request. It owns the Shiprocket token cache it
is given, so a long-lived process can share a cache across managers while
tests construct a fresh one.
"""

import httpx
import structlog

from shared.cache import Cache, TTLCache
from shipping.courier import build_courier
from shipping.courier.account import CourierAccount
from shipping.courier.management import accounts_for_store
from shipping.courier.port import (
    LabelResult,
    OperationResult,
    ProviderType,
    RateQuoteResult,
    RateRequest,
    ShipmentRequest,
    ShipmentResult,
    TrackingResult,
)
from shipping.courier.self_delivery import standard_delivery_rate
from shipping.courier.status import fastest

logger = structlog.get_logger(__name__)

DEFAULT_PACKAGE_DIMENSIONS = {"length": 20.0, "breadth": 15.0, "height": 10.0, "weight": 0.5}


class CourierManager:
    def __init__(
        self,
        store_id: str,
        accounts: list[CourierAccount] | None = None,
        client: httpx.Client | None = None,
        token_cache: Cache | None = None,
    ):
        self.store_id = store_id
        self.accounts = accounts if accounts is not None else accounts_for_store(store_id)
        self.client = client
        self.token_cache = token_cache if token_cache is not None else TTLCache()

    @property
    def active_accounts(self) -> list[CourierAccount]:
        return [a for a in self.accounts if a.is_active]

    def _account(self, provider: str) -> CourierAccount | None:
        return next((a for a in self.active_accounts if a.provider == provider), None)

    def _default_provider(self) -> str | None:
        default = next((a for a in self.active_accounts if a.is_default), None)
        if default is not None:
            return default.provider
        return self.active_accounts[0].provider if self.active_accounts else None

    def _courier(self, account: CourierAccount):
        return build_courier(account, client=self.client, token_cache=self.token_cache)

    def create_shipment(self, request: ShipmentRequest, preferred_provider: str | None = None) -> ShipmentResult:
        self_result = ShipmentResult(success=True, provider=ProviderType.SELF.value, shipment_id=request.order_id)

        if not self.active_accounts:
            logger.info("No courier configured, shipment handled by merchant", order_id=request.order_id)
            return self_result

        provider = preferred_provider or request.provider or self._default_provider()
        if not provider or provider == ProviderType.SELF.value:
            return self_result

        account = self._account(provider)
        if account is None:
            return ShipmentResult(success=False, provider=provider, error=f"Provider {provider} not configured")

        try:
            result = self._courier(account).create_shipment(request)
        except Exception as exc:
            logger.exception("Shipment creation failed", provider=provider, order_id=request.order_id)
            return ShipmentResult(success=False, provider=provider, error=str(exc) or "Failed to create shipment")

        logger.info(
            "Shipment requested",
            store_id=self.store_id,
            provider=provider,
            order_id=request.order_id,
            success=result.success,
        )
        return result

    def get_rates(self, request: RateRequest) -> RateQuoteResult:
        if not self.active_accounts:
            rate = standard_delivery_rate()
            return RateQuoteResult(success=True, rates=[rate])

        rates = []
        errors = []
        for account in self.active_accounts:
            if account.provider == ProviderType.SELF.value:
                continue
            try:
                quote = self._courier(account).get_rates(request)
            except Exception as exc:
                logger.exception("Rate quote failed", provider=account.provider)
                errors.append(f"{account.provider}: {exc}")
                continue

            if quote.success and quote.rates:
                rates.extend(quote.rates)
            elif quote.error:
                errors.append(f"{account.provider}: {quote.error}")

        if not rates:
            return RateQuoteResult(success=False, error="; ".join(errors) or "No shipping rates available")

        rates.sort(key=lambda r: r.rate)
        return RateQuoteResult(success=True, rates=rates, cheapest=rates[0], fastest=fastest(rates))

    def track_shipment(self, awb_code: str, provider: str) -> TrackingResult:
        account = self._account(provider)
        if account is None:
            return TrackingResult(
                success=False, provider=provider, awb_code=awb_code, error=f"Provider {provider} not configured"
            )
        try:
            return self._courier(account).track_shipment(awb_code)
        except Exception:
            logger.exception("Shipment tracking failed", provider=provider, awb_code=awb_code)
            return TrackingResult(
                success=False, provider=provider, awb_code=awb_code, error="Failed to track shipment"
            )

    def cancel_shipment(self, awb_code: str, provider: str) -> OperationResult:
        account = self._account(provider)
        if account is None:
            return OperationResult(success=False, error=f"Provider {provider} not configured")
        try:
            return self._courier(account).cancel_shipment(awb_code)
        except Exception:
            logger.exception("Shipment cancellation failed", provider=provider, awb_code=awb_code)
            return OperationResult(success=False, error="Failed to cancel shipment")

    def generate_label(self, shipment_id: str, provider: str) -> LabelResult:
        account = self._account(provider)
        if account is None:
            return LabelResult(success=False, error=f"Provider {provider} not configured")
        try:
            return self._courier(account).generate_label(shipment_id)
        except Exception:
            logger.exception("Label generation failed", provider=provider, shipment_id=shipment_id)
            return LabelResult(success=False, error="Failed to generate label")
