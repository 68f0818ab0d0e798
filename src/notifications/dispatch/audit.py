"""Audit trail for outbound messages.

Every attempt, retry, success and final failure is written to the
``notifications.audit`` logger and kept on the dispatch result, including
in development no-op mode.
"""

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from enum import Enum

import structlog

audit_logger = structlog.get_logger("notifications.audit")


class AuditEvent(Enum):
    SEND_ATTEMPT = "send_attempt"
    SEND_SUCCESS = "send_success"
    SEND_FAILURE = "send_failure"
    RETRY = "retry"
    FINAL_FAILURE = "final_failure"


_ERROR_EVENTS = {AuditEvent.SEND_FAILURE, AuditEvent.FINAL_FAILURE}


@dataclass(frozen=True)
class NotificationAttempt:
    recipient: str
    template: str
    event: AuditEvent
    attempt_number: int | None = None
    max_attempts: int | None = None
    error: str | None = None
    message_id: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict:
        data = asdict(self)
        data["event"] = self.event.value
        data["timestamp"] = self.timestamp.isoformat()
        return data


class AuditTrail:
    """Collects and logs the attempts made for a single dispatch."""

    def __init__(self, service: str, provider: str):
        self.service = service
        self.provider = provider
        self.entries: list[NotificationAttempt] = []

    def record(self, recipient: str, template: str, event: AuditEvent, **details) -> NotificationAttempt:
        entry = NotificationAttempt(recipient=recipient, template=template, event=event, **details)
        self.entries.append(entry)

        log = audit_logger.error if event in _ERROR_EVENTS else audit_logger.info
        log(
            event.value,
            service=self.service,
            provider=self.provider,
            recipient=recipient,
            template=template,
            attempt=entry.attempt_number,
            max_attempts=entry.max_attempts,
            message_id=entry.message_id,
            error=entry.error,
            timestamp=entry.timestamp.isoformat(),
        )
        return entry
