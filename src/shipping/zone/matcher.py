"""Zone matcher — resolves the single zone that applies to a destination.

Pincode zones take precedence over state zones wherever they sit in the
list; within each kind the first match in list order wins. The first zone
flagged as default (``is_default`` or ``type=default``) is returned only
when nothing more specific matched.
"""

from typing import Iterable

from shipping.zone.states import get_state_code
from shipping.zone.zone import ShippingZone, ZoneType


def parse_pincode_range(pattern: str) -> tuple[int, int] | None:
    """Parse an ``"A-B"`` pattern into inclusive integer bounds."""
    if "-" not in pattern:
        return None
    start, _, end = pattern.partition("-")
    try:
        return int(start.strip()), int(end.strip())
    except ValueError:
        return None


def matches_pincode(pincode: str, patterns: Iterable[str]) -> bool:
    """Check a pincode against exact, ``start-end`` range and prefix patterns."""
    pincode = (pincode or "").strip()
    if not pincode:
        return False

    for raw in patterns:
        pattern = raw.strip()
        if not pattern:
            continue

        if pincode == pattern:
            return True

        bounds = parse_pincode_range(pattern)
        if bounds is not None:
            try:
                value = int(pincode)
            except ValueError:
                continue
            if bounds[0] <= value <= bounds[1]:
                return True
            continue

        if pincode.startswith(pattern):
            return True

    return False


def find_matching_zone(
    state_name: str | None,
    pincode: str | None,
    zones: Iterable[ShippingZone],
) -> ShippingZone | None:
    zones = list(zones)
    specific = [zone for zone in zones if not zone.is_fallback]

    if pincode:
        for zone in specific:
            if zone.type == ZoneType.PINCODES and zone.pincodes and matches_pincode(pincode, zone.pincodes):
                return zone

    state_code = get_state_code(state_name)
    if state_code:
        for zone in specific:
            if zone.type == ZoneType.STATES and state_code in zone.states:
                return zone

    return next((zone for zone in zones if zone.is_fallback), None)
