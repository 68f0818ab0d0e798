"""Platform configuration read from environment variables.

Settings are resolved when ``PlatformSettings.from_env()`` is called, not at
import time, so tests can patch the environment per test.
"""

import os
from dataclasses import dataclass

DEFAULT_FROM_EMAIL = "cart@storeforge.site"
DEFAULT_PRODUCTION_DOMAIN = "storeforge.site"
DEFAULT_BASE_URL = "http://localhost:3000"


@dataclass(frozen=True)
class PlatformSettings:
    """Shared (platform-level) credentials and URLs."""

    msg91_auth_key: str | None = None
    msg91_integrated_number: str | None = None
    resend_api_key: str | None = None
    resend_from_email: str = DEFAULT_FROM_EMAIL
    encryption_key: str | None = None
    production_domain: str = DEFAULT_PRODUCTION_DOMAIN
    base_url: str = DEFAULT_BASE_URL
    environment: str = "development"

    @classmethod
    def from_env(cls) -> "PlatformSettings":
        return cls(
            msg91_auth_key=os.environ.get("MSG91_AUTH_KEY") or None,
            msg91_integrated_number=os.environ.get("MSG91_WHATSAPP_INTEGRATED_NUMBER") or None,
            resend_api_key=os.environ.get("RESEND_API_KEY") or None,
            resend_from_email=os.environ.get("RESEND_FROM_EMAIL") or DEFAULT_FROM_EMAIL,
            encryption_key=os.environ.get("CREDENTIALS_ENCRYPTION_KEY") or None,
            production_domain=os.environ.get("STOREFORGE_PRODUCTION_DOMAIN") or DEFAULT_PRODUCTION_DOMAIN,
            base_url=os.environ.get("STOREFORGE_BASE_URL") or DEFAULT_BASE_URL,
            environment=(os.environ.get("PROTEAN_ENV") or "development").lower(),
        )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def has_whatsapp_credentials(self) -> bool:
        return bool(self.msg91_auth_key and self.msg91_integrated_number)
