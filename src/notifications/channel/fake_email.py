"""Fake email adapter — records sent emails for testing."""

from uuid import uuid4

from notifications.channel.email_port import EmailPort
from notifications.channel.response import ProviderResponse


class FakeEmailAdapter(EmailPort):
    """Email adapter that records messages in memory for test assertions."""

    def __init__(self):
        self.sent_emails: list[dict] = []
        self.calls = 0
        self.should_succeed = True
        self.status_code = 500
        self.failure_reason = "Email delivery failed"

    def configure(
        self,
        should_succeed: bool = True,
        status_code: int = 500,
        failure_reason: str = "Email delivery failed",
    ):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.status_code = status_code
        self.failure_reason = failure_reason

    def send(
        self,
        api_key: str,
        from_address: str,
        to: str,
        subject: str,
        html_body: str,
        text_body: str | None = None,
    ) -> ProviderResponse:
        self.calls += 1
        if not self.should_succeed:
            return ProviderResponse(ok=False, status_code=self.status_code, error=self.failure_reason)

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append(
            {
                "message_id": message_id,
                "from": from_address,
                "to": to,
                "subject": subject,
                "html_body": html_body,
                "text_body": text_body,
            }
        )
        return ProviderResponse(ok=True, status_code=200, message_id=message_id)

    def reset(self):
        """Clear sent emails (useful between tests)."""
        self.sent_emails.clear()
        self.calls = 0
        self.should_succeed = True
        self.status_code = 500
        self.failure_reason = "Email delivery failed"
