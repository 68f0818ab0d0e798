"""Reminder scheduling rules.

A step ``i`` (0-based) is due when fewer than ``i + 1`` emails have been
sent, its delay has elapsed since abandonment, and the last reminder went
out at least four hours ago. The first due step wins.
"""

from dataclasses import dataclass

MAX_RECOVERY_EMAILS = 3
MIN_HOURS_BETWEEN_EMAILS = 4
ABANDONMENT_IDLE_HOURS = 1


@dataclass(frozen=True)
class EmailStep:
    delay_hours: float
    subject: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "EmailStep":
        return cls(delay_hours=float(data["delay_hours"]), subject=data.get("subject"))

    def to_dict(self) -> dict:
        data = {"delay_hours": self.delay_hours}
        if self.subject:
            data["subject"] = self.subject
        return data


DEFAULT_SEQUENCE = (
    EmailStep(delay_hours=1),
    EmailStep(delay_hours=24),
    EmailStep(delay_hours=72),
)


def due_step(
    emails_sent: int,
    hours_elapsed: float,
    hours_since_last_email: float | None,
    sequence: list[EmailStep] | tuple[EmailStep, ...],
) -> int | None:
    """Return the 1-based sequence number to send now, or None."""
    for index, step in enumerate(sequence):
        if emails_sent <= index and hours_elapsed >= step.delay_hours:
            if hours_since_last_email is not None and hours_since_last_email < MIN_HOURS_BETWEEN_EMAILS:
                continue
            return index + 1
    return None
