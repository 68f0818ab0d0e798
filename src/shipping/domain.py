"""Shipping bounded context — zone-based rate quotes and courier integrations.

Resolves which shipping zone covers a destination, prices the shipment
(flat, weight-based and COD components) and wraps external courier APIs
behind a single provider interface. Courier accounts are the only
persisted state; rate calculation is a pure function of store settings.
"""

import structlog
from protean.domain import Domain

shipping = Domain(name="shipping")

logger = structlog.get_logger(__name__)
