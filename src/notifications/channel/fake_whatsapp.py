"""Fake WhatsApp adapter — scripted responses for testing."""

from uuid import uuid4

from notifications.channel.response import ProviderResponse
from notifications.channel.whatsapp_port import WhatsAppCredentials, WhatsAppPort


class FakeWhatsAppAdapter(WhatsAppPort):
    """Records every attempt and answers from a script of status codes.

    With an empty script every attempt succeeds. Status 0 simulates a
    dropped connection.
    """

    def __init__(self):
        self.sent_messages: list[dict] = []
        self.script: list[int] = []

    def configure(self, *status_codes: int):
        """Queue status codes returned by the next attempts, in order."""
        self.script = list(status_codes)

    def send_template(
        self,
        credentials: WhatsAppCredentials,
        to: str,
        template_name: str,
        params: dict[str, str],
    ) -> ProviderResponse:
        self.sent_messages.append(
            {
                "integrated_number": credentials.integrated_number,
                "to": to,
                "template": template_name,
                "params": dict(params),
            }
        )

        status = self.script.pop(0) if self.script else 200
        if status == 0:
            return ProviderResponse(ok=False, status_code=0, error="ECONNRESET: connection reset by peer")
        if 200 <= status < 300:
            return ProviderResponse(ok=True, status_code=status, message_id=f"wa-{uuid4().hex[:12]}")
        return ProviderResponse(ok=False, status_code=status, error=f"HTTP {status}")

    @property
    def attempts(self) -> int:
        return len(self.sent_messages)

    def reset(self):
        self.sent_messages.clear()
        self.script = []
