"""Notification dispatcher — reliable delivery of transactional messages.

Sends WhatsApp template messages through MSG91 and emails through Resend.
Each send makes up to three attempts, retrying only transient failures
with exponential backoff. Public methods never raise for delivery
problems; they return a :class:`DispatchResult`.

Without credentials the dispatcher logs the message it would have sent and
reports success, so order processing never blocks on messaging setup.
"""

import time
from dataclasses import dataclass, field
from typing import Callable

import structlog

from notifications.channel.email_port import EmailPort
from notifications.channel.response import ProviderResponse
from notifications.channel.whatsapp_port import WhatsAppPort
from notifications.dispatch.audit import AuditEvent, AuditTrail, NotificationAttempt
from notifications.dispatch.credentials import CredentialResolver
from notifications.dispatch.phone import InvalidPhoneNumberError, format_phone_number
from notifications.dispatch.retry import MAX_ATTEMPTS, backoff_delay_ms, is_retryable, random_jitter_ms
from shared.config import PlatformSettings

logger = structlog.get_logger(__name__)

DEV_MODE_MESSAGE_ID = "dev-mode"


@dataclass(frozen=True)
class DispatchResult:
    success: bool
    attempts: int
    message_id: str | None = None
    error: str | None = None
    audit: list[NotificationAttempt] = field(default_factory=list)


class NotificationDispatcher:
    def __init__(
        self,
        credentials: CredentialResolver,
        whatsapp: WhatsAppPort,
        email: EmailPort,
        settings: PlatformSettings | None = None,
        sleep: Callable[[float], None] = time.sleep,
        jitter: Callable[[], float] = random_jitter_ms,
        max_attempts: int = MAX_ATTEMPTS,
    ):
        self.credentials = credentials
        self.whatsapp = whatsapp
        self.email = email
        self.settings = settings or credentials.settings
        self.sleep = sleep
        self.jitter = jitter
        self.max_attempts = max_attempts

    def send(
        self,
        to: str,
        template_name: str,
        template_params: dict[str, str],
        store_id: str | None = None,
    ) -> DispatchResult:
        """Send a WhatsApp template message."""
        trail = AuditTrail(service="whatsapp", provider="msg91")
        credentials = self.credentials.resolve(store_id)

        if credentials is None:
            logger.info(
                "WhatsApp message not sent, MSG91 not configured",
                to=to,
                template=template_name,
                params=template_params,
                store_id=store_id,
            )
            trail.record(to, template_name, AuditEvent.SEND_SUCCESS, message_id=DEV_MODE_MESSAGE_ID)
            return DispatchResult(success=True, attempts=1, message_id=DEV_MODE_MESSAGE_ID, audit=trail.entries)

        try:
            phone = format_phone_number(to)
        except InvalidPhoneNumberError as exc:
            trail.record(to, template_name, AuditEvent.FINAL_FAILURE, error=str(exc))
            return DispatchResult(success=False, attempts=0, error=str(exc), audit=trail.entries)

        return self._deliver(
            trail,
            phone,
            template_name,
            lambda: self.whatsapp.send_template(credentials, phone, template_name, template_params),
            "Failed to send WhatsApp message after all retries",
        )

    def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        from_name: str | None = None,
        text_body: str | None = None,
        template: str = "email",
    ) -> DispatchResult:
        """Send an email through Resend with the same retry policy."""
        trail = AuditTrail(service="email", provider="resend")

        if not self.settings.resend_api_key:
            logger.info("Email not sent, Resend not configured", to=to, subject=subject)
            trail.record(to, template, AuditEvent.SEND_SUCCESS, message_id=DEV_MODE_MESSAGE_ID)
            return DispatchResult(success=True, attempts=1, message_id=DEV_MODE_MESSAGE_ID, audit=trail.entries)

        if not to or "@" not in to:
            error = f"Invalid email address: {to}"
            trail.record(to or "", template, AuditEvent.FINAL_FAILURE, error=error)
            return DispatchResult(success=False, attempts=0, error=error, audit=trail.entries)

        sender = self.settings.resend_from_email
        from_address = f"{from_name} <{sender}>" if from_name else sender

        return self._deliver(
            trail,
            to,
            template,
            lambda: self.email.send(self.settings.resend_api_key, from_address, to, subject, html_body, text_body),
            "Failed to send email after all retries",
        )

    def _attempt(self, send: Callable[[], ProviderResponse]) -> ProviderResponse:
        try:
            return send()
        except Exception as exc:
            logger.exception("Unexpected error from messaging provider")
            return ProviderResponse(ok=False, status_code=0, error=str(exc) or type(exc).__name__)

    def _deliver(
        self,
        trail: AuditTrail,
        recipient: str,
        template: str,
        send: Callable[[], ProviderResponse],
        exhausted_error: str,
    ) -> DispatchResult:
        last_error = None
        attempt = 0

        for attempt in range(1, self.max_attempts + 1):
            trail.record(
                recipient, template, AuditEvent.SEND_ATTEMPT, attempt_number=attempt, max_attempts=self.max_attempts
            )
            response = self._attempt(send)

            if response.ok:
                trail.record(
                    recipient, template, AuditEvent.SEND_SUCCESS, attempt_number=attempt, message_id=response.message_id
                )
                return DispatchResult(
                    success=True, attempts=attempt, message_id=response.message_id, audit=trail.entries
                )

            last_error = response.error
            trail.record(
                recipient,
                template,
                AuditEvent.SEND_FAILURE,
                attempt_number=attempt,
                max_attempts=self.max_attempts,
                error=last_error,
            )

            if attempt == self.max_attempts or not is_retryable(response.status_code, last_error):
                break

            delay_ms = backoff_delay_ms(attempt, self.jitter)
            trail.record(
                recipient,
                template,
                AuditEvent.RETRY,
                attempt_number=attempt,
                max_attempts=self.max_attempts,
                error=last_error,
            )
            self.sleep(delay_ms / 1000)

        trail.record(
            recipient,
            template,
            AuditEvent.FINAL_FAILURE,
            attempt_number=attempt,
            max_attempts=self.max_attempts,
            error=last_error,
        )
        return DispatchResult(success=False, attempts=attempt, error=last_error or exhausted_error, audit=trail.entries)
