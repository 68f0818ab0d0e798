"""Scheduled trigger for the recovery sweep.

Meant to be fired by an external scheduler (cron, K8s CronJob) through
``POST /recovery/process``.
"""

from datetime import UTC, datetime

import structlog
from protean.fields import DateTime
from protean.utils.mixins import handle

from recovery.cart.cart import AbandonedCart
from recovery.domain import recovery
from recovery.sweep.sweep import RecoverySweep, SweepResult

logger = structlog.get_logger(__name__)


@recovery.command(part_of="AbandonedCart")
class ProcessAbandonedCarts:
    as_of = DateTime()  # Optional: defaults to now


@recovery.command_handler(part_of=AbandonedCart)
class ProcessAbandonedCartsHandler:
    @handle(ProcessAbandonedCarts)
    def process_abandoned_carts(self, command) -> SweepResult:
        as_of = command.as_of or datetime.now(UTC)
        logger.info("Processing abandoned carts", as_of=as_of.isoformat())
        return RecoverySweep().run(as_of)
