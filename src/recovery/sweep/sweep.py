"""Recovery sweep — one pass over every store with cart recovery enabled.

For each store, active carts idle for more than an hour that still have
reminders left and a known email are examined:

* a cart seen for the first time is stamped as abandoned, and expires
  seven days after its last activity;
* an expired cart is closed and skipped;
* otherwise at most one reminder is sent, following the store's schedule.

Running the sweep twice in a row does not double-send: the sent counter
and the four-hour gap both gate the next reminder.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import structlog
from protean.utils.globals import current_domain

from notifications.messaging.notifier import Notifier
from recovery.cart.cart import AbandonedCart, as_utc
from recovery.cart.management import reminder_candidates
from recovery.settings.management import enabled_store_settings
from recovery.settings.settings import StoreRecoverySettings
from recovery.sweep.links import recovery_url, store_url
from recovery.sweep.sequence import ABANDONMENT_IDLE_HOURS, MAX_RECOVERY_EMAILS, due_step
from shared.config import PlatformSettings

logger = structlog.get_logger(__name__)

SECONDS_PER_HOUR = 3600


@dataclass
class SweepResult:
    processed: int = 0
    emails_sent: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"processed": self.processed, "emails_sent": self.emails_sent, "errors": list(self.errors)}


def _hours_between(later: datetime, earlier: datetime) -> float:
    return (later - as_utc(earlier)).total_seconds() / SECONDS_PER_HOUR


def is_candidate(cart: AbandonedCart, idle_cutoff: datetime) -> bool:
    return (
        bool(cart.email)
        and (cart.recovery_emails_sent or 0) < MAX_RECOVERY_EMAILS
        and cart.updated_at is not None
        and as_utc(cart.updated_at) < idle_cutoff
    )


class RecoverySweep:
    def __init__(self, notifier: Notifier | None = None, settings: PlatformSettings | None = None):
        self.notifier = notifier or Notifier()
        self.settings = settings or PlatformSettings.from_env()

    def run(self, as_of: datetime | None = None) -> SweepResult:
        now = as_utc(as_of) if as_of else datetime.now(UTC)
        result = SweepResult()

        for store in enabled_store_settings():
            try:
                self._sweep_store(store, now, result)
            except Exception as exc:
                logger.exception("Recovery sweep failed for store", store_id=str(store.store_id))
                result.errors.append(f"Store {store.store_id}: {exc}")

        logger.info(
            "Recovery sweep complete",
            processed=result.processed,
            emails_sent=result.emails_sent,
            errors=len(result.errors),
        )
        return result

    def _sweep_store(self, store: StoreRecoverySettings, now: datetime, result: SweepResult):
        repo = current_domain.repository_for(AbandonedCart)
        idle_cutoff = now - timedelta(hours=ABANDONMENT_IDLE_HOURS)
        sequence = store.sequence()

        for cart in reminder_candidates(str(store.store_id), MAX_RECOVERY_EMAILS):
            if not is_candidate(cart, idle_cutoff):
                continue
            result.processed += 1

            cart.mark_abandoned()

            if cart.is_expired(now):
                cart.expire(now)
                repo.add(cart)
                logger.info("Abandoned cart expired", cart_id=str(cart.id), store_id=str(store.store_id))
                continue

            hours_since_last = _hours_between(now, cart.last_email_sent_at) if cart.last_email_sent_at else None
            step = due_step(
                cart.recovery_emails_sent or 0,
                _hours_between(now, cart.abandoned_at),
                hours_since_last,
                sequence,
            )

            if step is not None:
                if self._send_reminder(store, cart, step, is_final=step == len(sequence)):
                    cart.record_email_sent(step, now)
                    result.emails_sent += 1
                else:
                    result.errors.append(f"Cart {cart.id}: Failed to send email")

            repo.add(cart)

    def _send_reminder(self, store: StoreRecoverySettings, cart: AbandonedCart, step: int, is_final: bool) -> bool:
        context = {
            "customer_name": cart.email.split("@")[0],
            "store_name": store.store_name,
            "store_url": store_url(store.store_slug, self.settings),
            "recovery_url": recovery_url(store.store_slug, cart.recovery_token, self.settings),
            "items": cart.line_items(),
            "subtotal": cart.subtotal or 0,
            "sequence_number": step,
        }
        if is_final:
            context["discount_code"] = store.discount_code
            context["discount_percentage"] = store.discount_percentage

        dispatch = self.notifier.cart_recovery_email(cart.email, context)
        if dispatch.success:
            logger.info("Recovery email sent", cart_id=str(cart.id), sequence_number=step)
        else:
            logger.warning("Recovery email failed", cart_id=str(cart.id), sequence_number=step, error=dispatch.error)
        return dispatch.success
