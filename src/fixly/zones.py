"""
Standings zones: colored bands over ranges of table positions.
"""
from typing import Dict, Iterable, List, Optional, Sequence

from fixly.exceptions import ZoneValidationError
from fixly.models import Zone

PRESET_COLORS = [
    {'name': 'Blue', 'value': '#1565C0', 'label': 'Cup / Qualification'},
    {'name': 'Light blue', 'value': '#0288D1', 'label': 'Playoff'},
    {'name': 'Orange', 'value': '#EF6C00', 'label': 'Promotion playoff'},
    {'name': 'Green', 'value': '#2E7D32', 'label': 'Promotion'},
    {'name': 'Red', 'value': '#C62828', 'label': 'Relegation'},
    {'name': 'Violet', 'value': '#6A1B9A', 'label': 'Special zone'},
    {'name': 'Gold', 'value': '#F9A825', 'label': 'Champion'},
    {'name': 'Grey', 'value': '#546E7A', 'label': 'Neutral'},
]


def find_zone(zones: Iterable[Zone], rank: int) -> Optional[Zone]:
    """Return the first zone containing the 1-based rank, or None."""
    for zone in zones:
        if zone.contains(rank):
            return zone
    return None


def validate_zones(zones: Sequence[Zone], team_count: int) -> None:
    """
    Check zones before they are stored.

    Raises ZoneValidationError with the first problem found. Bounds are
    checked zone by zone before overlaps.
    """
    for zone in zones:
        if zone.start_position < 1:
            raise ZoneValidationError("Start position must be at least 1")
        if zone.end_position > team_count:
            raise ZoneValidationError(f"End position cannot exceed {team_count}")
        if zone.end_position < zone.start_position:
            raise ZoneValidationError("End position cannot be lower than start position")

    ordered = sorted(zones, key=lambda z: z.start_position)
    for previous, current in zip(ordered, ordered[1:]):
        if current.start_position <= previous.end_position:
            raise ZoneValidationError(
                f"Zones cannot overlap: {previous.start_position}-{previous.end_position} "
                f"and {current.start_position}-{current.end_position}"
            )


def suggest_next_zone(zones: Sequence[Zone], team_count: int) -> Zone:
    """Propose a two-position zone right after the lowest covered position."""
    last_end = max((z.end_position for z in zones), default=0)
    start = last_end + 1
    if start > team_count:
        raise ZoneValidationError("All positions are already covered")
    preset = PRESET_COLORS[len(zones) % len(PRESET_COLORS)]
    return Zone(start, min(start + 1, team_count), preset['value'], '')


def zones_from_dicts(data: Iterable[Dict]) -> List[Zone]:
    zones = []
    for entry in data:
        try:
            zones.append(Zone(
                start_position=int(entry['start_position']),
                end_position=int(entry['end_position']),
                color=entry.get('color', PRESET_COLORS[-1]['value']),
                label=entry.get('label') or '',
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise ZoneValidationError(f"Malformed zone {entry!r}: {e}") from e
    return zones
