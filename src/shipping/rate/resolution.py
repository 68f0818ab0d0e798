"""Zone-to-global fallback precedence for shipping settings."""

from typing import TypeVar

T = TypeVar("T")


def resolve(zone_value: T | None, global_value: T | None, default: T | None = None) -> T | None:
    """Return the zone's value if set, else the store-wide value, else ``default``.

    Only ``None`` counts as unset: a zone COD fee of ``0`` or a zone that
    explicitly disables COD overrides the global setting.
    """
    if zone_value is not None:
        return zone_value
    if global_value is not None:
        return global_value
    return default
