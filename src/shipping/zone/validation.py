"""Advisory checks and display summaries for a store's zone list.

Nothing here blocks matching; the matcher applies first-match-wins to
whatever is configured. These helpers feed the merchant's settings screen.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from shipping.zone.matcher import parse_pincode_range
from shipping.zone.zone import ShippingZone, ZoneType


@dataclass(frozen=True)
class ZoneValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ZoneSummary:
    id: str
    name: str
    coverage: str
    rate: float
    estimated_days: int | None


def _pincode_pattern_errors(zone: ShippingZone) -> list[str]:
    errors = []
    for raw in zone.pincodes:
        pattern = raw.strip()
        if not pattern:
            continue
        if "-" in pattern:
            bounds = parse_pincode_range(pattern)
            if bounds is None:
                errors.append(f"Zone {zone.name} has an invalid pincode range: {pattern}")
            elif bounds[0] > bounds[1]:
                errors.append(f"Zone {zone.name} has an inverted pincode range: {pattern}")
        elif not pattern.isdigit():
            errors.append(f"Zone {zone.name} has an invalid pincode pattern: {pattern}")
    return errors


def validate_zone_config(zones: Sequence[ShippingZone]) -> ZoneValidationResult:
    """Report configuration problems as human-readable messages.

    An empty zone list is valid: the store simply uses its global settings.
    """
    if not zones:
        return ZoneValidationResult(valid=True)

    errors: list[str] = []

    id_counts = Counter(zone.id for zone in zones)
    duplicates = [zone_id for zone_id, count in id_counts.items() if count > 1]
    if duplicates:
        errors.append(f"Duplicate zone IDs: {', '.join(duplicates)}")

    state_owners: dict[str, list[str]] = {}
    for zone in zones:
        if zone.type != ZoneType.STATES or zone.is_fallback:
            continue
        for state in sorted(zone.states):
            state_owners.setdefault(state, []).append(zone.name)
    for state, owners in state_owners.items():
        if len(owners) > 1:
            errors.append(f"State {state} is in multiple zones: {', '.join(owners)}")

    defaults = [zone for zone in zones if zone.is_fallback]
    if not defaults:
        errors.append("No default zone configured. Orders from unmatched areas may fail.")
    elif len(defaults) > 1:
        errors.append(f"Multiple default zones configured: {', '.join(z.name for z in defaults)}")

    for zone in zones:
        if zone.type == ZoneType.PINCODES:
            errors.extend(_pincode_pattern_errors(zone))

    return ZoneValidationResult(valid=not errors, errors=errors)


def _coverage(zone: ShippingZone) -> str:
    if zone.type == ZoneType.STATES and zone.states:
        return f"{len(zone.states)} states"
    if zone.type == ZoneType.PINCODES and zone.pincodes:
        return f"{len(zone.pincodes)} pincode(s)"
    if zone.is_default:
        return "Rest of India"
    return "Default"


def get_zone_summary(zones: Sequence[ShippingZone]) -> list[ZoneSummary]:
    return [
        ZoneSummary(
            id=zone.id,
            name=zone.name,
            coverage=_coverage(zone),
            rate=zone.flat_rate,
            estimated_days=zone.estimated_days,
        )
        for zone in zones
    ]
