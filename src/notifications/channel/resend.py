"""Resend email adapter — transactional email over Resend's HTTP API."""

import httpx

from notifications.channel.email_port import EmailPort
from notifications.channel.response import ProviderResponse, transport_failure

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailAdapter(EmailPort):
    def __init__(self, client: httpx.Client | None = None, api_url: str = RESEND_API_URL):
        self.client = client or httpx.Client(timeout=15.0)
        self.api_url = api_url

    def send(
        self,
        api_key: str,
        from_address: str,
        to: str,
        subject: str,
        html_body: str,
        text_body: str | None = None,
    ) -> ProviderResponse:
        body = {"from": from_address, "to": [to], "subject": subject, "html": html_body}
        if text_body:
            body["text"] = text_body

        try:
            response = self.client.post(
                self.api_url,
                json=body,
                headers={"Authorization": f"Bearer {api_key}"},
            )
        except httpx.TransportError as exc:
            return transport_failure(exc)

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_success:
            return ProviderResponse(ok=True, status_code=response.status_code, message_id=data.get("id"))

        error = data.get("message") or f"HTTP {response.status_code}: {response.reason_phrase}"
        return ProviderResponse(ok=False, status_code=response.status_code, error=error)
