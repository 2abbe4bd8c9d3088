"""
Aircraft registry - static fleet reference data.

Maps human-readable tail numbers to the ICAO24 hex addresses the
tracking service uses to address an aircraft. The registry is loaded
once at startup and never mutated; its iteration order is the order
the scheduler queries the fleet in.

Usage:
    from fleetboard.models.aircraft import AircraftRegistry

    registry = AircraftRegistry.default()
    for entry in registry.entries():
        print(entry.tail_number, entry.tracker_id)
"""

import csv
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Tuple

from fleetboard.config import config

logger = logging.getLogger(__name__)

_ICAO24_PATTERN = re.compile(r'^[0-9a-f]{6}$')


@dataclass(frozen=True)
class AircraftEntry:
    """
    One aircraft in the fleet.

    Fields:
        tail_number: Registration (e.g., 'N628TS')
        tracker_id: 6-character lowercase ICAO24 hex address (e.g., 'a835af')
    """
    tail_number: str
    tracker_id: str

    def __repr__(self) -> str:
        return f'<AircraftEntry {self.tail_number} {self.tracker_id}>'


# Tracked fleet, in query order: (tail number, ICAO24)
FLEET: Tuple[Tuple[str, str], ...] = (
    ('N628TS', 'a835af'),
    ('N272BG', 'a2ae0a'),
    ('N502SX', 'a64304'),
    ('N778XJ', 'aa8a3b'),
)


def is_valid_tracker_id(value: str) -> bool:
    """Check for a 6-digit ICAO24 hex address."""
    return bool(value) and bool(_ICAO24_PATTERN.match(value.lower()))


class AircraftRegistry:
    """
    Ordered, immutable collection of fleet entries.

    Duplicate tail numbers are rejected at construction so each aircraft
    is queried once per session.
    """

    def __init__(self, entries: Iterable[AircraftEntry]):
        entries = tuple(entries)
        seen = set()
        for entry in entries:
            if entry.tail_number in seen:
                raise ValueError(f'Duplicate tail number in registry: {entry.tail_number}')
            seen.add(entry.tail_number)
        self._entries = entries

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> 'AircraftRegistry':
        """Build a registry from (tail number, tracker id) pairs."""
        return cls(
            AircraftEntry(tail_number=tail, tracker_id=tracker_id.lower())
            for tail, tracker_id in pairs
        )

    @classmethod
    def default(cls) -> 'AircraftRegistry':
        """Registry for the built-in fleet table."""
        return cls.from_pairs(FLEET)

    def entries(self) -> Tuple[AircraftEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)


def load_registry_csv(csv_path: Path) -> AircraftRegistry:
    """
    Load a fleet registry from CSV.

    Expected columns: tail_number,tracker_id
    Rows with a missing tail number, a malformed ICAO24 address or a
    tail number already seen earlier in the file are skipped. Entry
    order follows file order.

    Raises:
        FileNotFoundError if the CSV does not exist
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        logger.error(f'Fleet CSV not found: {csv_path}')
        raise FileNotFoundError(csv_path)

    pairs: List[Tuple[str, str]] = []
    seen = set()

    with open(csv_path, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)

        for line_no, row in enumerate(reader, start=2):
            tail = (row.get('tail_number') or '').strip().upper()
            tracker_id = (row.get('tracker_id') or '').strip().lower()

            if not tail or not is_valid_tracker_id(tracker_id):
                logger.warning(f'Skipping invalid fleet row {line_no} in {csv_path}')
                continue

            if tail in seen:
                logger.warning(f'Skipping duplicate tail number {tail} on row {line_no} in {csv_path}')
                continue
            seen.add(tail)

            pairs.append((tail, tracker_id))

    logger.info(f'Loaded {len(pairs)} aircraft from {csv_path}')
    return AircraftRegistry.from_pairs(pairs)


def load_registry() -> AircraftRegistry:
    """Registry from FLEET_CSV if configured, else the built-in fleet."""
    if config.fleet.csv_path:
        return load_registry_csv(Path(config.fleet.csv_path))
    return AircraftRegistry.default()
