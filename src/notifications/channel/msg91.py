"""MSG91 WhatsApp adapter — template messages over the WhatsApp Business API."""

import httpx

from notifications.channel.response import ProviderResponse, transport_failure
from notifications.channel.whatsapp_port import WhatsAppCredentials, WhatsAppPort

MSG91_BASE_URL = "https://api.msg91.com/api/v5/whatsapp"


def build_template_payload(integrated_number: str, to: str, template_name: str, params: dict[str, str]) -> dict:
    """Body parameters are positional; ``params`` insertion order is the template order."""
    return {
        "integrated_number": integrated_number,
        "content_type": "template",
        "payload": {
            "to": to,
            "type": "template",
            "template": {
                "name": template_name,
                "language": {"code": "en", "policy": "deterministic"},
                "components": [
                    {
                        "type": "body",
                        "parameters": [{"type": "text", "text": value} for value in params.values()],
                    }
                ],
            },
        },
    }


class MSG91WhatsAppAdapter(WhatsAppPort):
    def __init__(self, client: httpx.Client | None = None, base_url: str = MSG91_BASE_URL):
        self.client = client or httpx.Client(timeout=15.0)
        self.base_url = base_url

    def send_template(
        self,
        credentials: WhatsAppCredentials,
        to: str,
        template_name: str,
        params: dict[str, str],
    ) -> ProviderResponse:
        try:
            response = self.client.post(
                f"{self.base_url}/whatsapp/outbound/send",
                json=build_template_payload(credentials.integrated_number, to, template_name, params),
                headers={"authkey": credentials.auth_key},
            )
        except httpx.TransportError as exc:
            return transport_failure(exc)

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_success:
            return ProviderResponse(ok=True, status_code=response.status_code, message_id=data.get("request_id"))

        error = data.get("message") or f"HTTP {response.status_code}: {response.reason_phrase}"
        return ProviderResponse(ok=False, status_code=response.status_code, error=error)
