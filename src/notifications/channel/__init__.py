"""Channel adapter registry — pluggable notification transports.

Real adapters (MSG91 for WhatsApp, Resend for email) are used by default.
Setting ``NOTIFICATION_ADAPTER=fake`` swaps in in-memory fakes for local
development.
"""

import os
from enum import Enum

_channel_instances: dict[str, object] = {}


class ChannelType(Enum):
    WHATSAPP = "WhatsApp"
    EMAIL = "Email"


def get_channel(channel_type: str):
    """Return the configured channel adapter (singleton per channel type).

    Args:
        channel_type: One of ChannelType enum values ("WhatsApp", "Email")
    """
    if channel_type not in _channel_instances:
        use_fakes = os.environ.get("NOTIFICATION_ADAPTER") == "fake"
        if channel_type == ChannelType.WHATSAPP.value:
            if use_fakes:
                from notifications.channel.fake_whatsapp import FakeWhatsAppAdapter

                _channel_instances[channel_type] = FakeWhatsAppAdapter()
            else:
                from notifications.channel.msg91 import MSG91WhatsAppAdapter

                _channel_instances[channel_type] = MSG91WhatsAppAdapter()
        elif channel_type == ChannelType.EMAIL.value:
            if use_fakes:
                from notifications.channel.fake_email import FakeEmailAdapter

                _channel_instances[channel_type] = FakeEmailAdapter()
            else:
                from notifications.channel.resend import ResendEmailAdapter

                _channel_instances[channel_type] = ResendEmailAdapter()
        else:
            raise ValueError(f"Unknown channel type: {channel_type}")

    return _channel_instances[channel_type]


def reset_channels():
    """Reset all channel singletons (useful for testing)."""
    _channel_instances.clear()
