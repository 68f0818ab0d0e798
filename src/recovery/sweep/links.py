"""Storefront links used in recovery emails."""

from urllib.parse import quote

from shared.config import PlatformSettings


def store_url(slug: str, settings: PlatformSettings) -> str:
    if settings.is_production:
        return f"https://{slug}.{settings.production_domain}"
    return f"{settings.base_url.rstrip('/')}/{slug}"


def recovery_url(slug: str, token: str, settings: PlatformSettings) -> str:
    return f"{store_url(slug, settings)}/cart/recover?token={quote(token)}"
