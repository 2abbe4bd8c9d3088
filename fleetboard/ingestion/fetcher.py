"""
Per-aircraft source fetcher.

Wraps the OpenSky client so that one aircraft's failure never escapes:
transport errors, bad status codes and malformed bodies all become an
empty, failed FetchResult. The failure is logged and carried in the
result so callers and tests can see which aircraft dropped out.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from fleetboard.ingestion.opensky_client import OpenSkyClient
from fleetboard.models.aircraft import AircraftEntry
from fleetboard.models.flight_record import RawActivityRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchWindow:
    """Query window in Unix seconds, shared by every aircraft in a session."""
    start: int
    end: int

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f'Window start {self.start} must precede end {self.end}')

    @classmethod
    def ending_at(cls, end: int, length_seconds: int) -> 'FetchWindow':
        return cls(start=end - length_seconds, end=end)


@dataclass(frozen=True)
class FetchResult:
    """Outcome of fetching one aircraft. error is None on success."""
    entry: AircraftEntry
    records: Tuple[RawActivityRecord, ...] = field(default_factory=tuple)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SourceFetcher:
    """Fetches one aircraft at a time, isolating failures."""

    def __init__(self, client: Optional[OpenSkyClient] = None):
        self.client = client or OpenSkyClient.from_config()

    def fetch(self, entry: AircraftEntry, window: FetchWindow) -> FetchResult:
        """
        Fetch raw activity for one aircraft over the window.

        Never raises: request, status and parsing failures all return a failed
        result with no records.
        """
        try:
            records = self.client.get_flights_by_aircraft(
                entry.tracker_id,
                window.start,
                window.end,
            )
        except Exception as e:
            logger.warning(f'Fetch failed for {entry.tail_number} ({entry.tracker_id}): {e}')
            return FetchResult(entry=entry, error=str(e) or type(e).__name__)

        logger.info(f'{entry.tail_number}: {len(records)} flights')
        return FetchResult(entry=entry, records=tuple(records))
