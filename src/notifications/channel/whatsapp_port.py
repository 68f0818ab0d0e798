"""WhatsApp channel port — abstract interface for template message dispatch."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from notifications.channel.response import ProviderResponse


@dataclass(frozen=True)
class WhatsAppCredentials:
    auth_key: str
    integrated_number: str
    is_store_credentials: bool = False


class WhatsAppPort(ABC):
    """Abstract interface for WhatsApp dispatch adapters."""

    @abstractmethod
    def send_template(
        self,
        credentials: WhatsAppCredentials,
        to: str,
        template_name: str,
        params: dict[str, str],
    ) -> ProviderResponse:
        """Send one pre-approved template message.

        A single attempt: no retries. Transport failures are returned as a
        response with ``status_code=0``, never raised.
        """
        ...
