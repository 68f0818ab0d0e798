"""Notifications bounded context — transactional WhatsApp and email delivery.

Stores each merchant's MSG91 messaging profile (encrypted credentials and
the notifications toggle) and delivers order and cart-recovery messages
through a retrying dispatcher that records an audit trail per attempt.
"""

import structlog
from protean.domain import Domain

notifications = Domain(name="notifications")

logger = structlog.get_logger(__name__)
