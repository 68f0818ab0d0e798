"""Recovery bounded context — abandoned-cart tracking and reminder emails.

Keeps a snapshot of each shopper's cart per store, flags carts that go
idle, and sends up to three reminder emails on the store's configured
schedule until the cart is recovered, expires or the shopper opts out.
"""

import structlog
from protean.domain import Domain

recovery = Domain(name="recovery")

logger = structlog.get_logger(__name__)
