"""Email channel port — abstract interface for email dispatch."""

from abc import ABC, abstractmethod

from notifications.channel.response import ProviderResponse


class EmailPort(ABC):
    """Abstract interface for email dispatch adapters."""

    @abstractmethod
    def send(
        self,
        api_key: str,
        from_address: str,
        to: str,
        subject: str,
        html_body: str,
        text_body: str | None = None,
    ) -> ProviderResponse:
        """Send one email. A single attempt; transport failures are returned, not raised."""
        ...
