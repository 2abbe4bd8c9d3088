"""
Rate-limited fetch scheduler.

Drives the source fetcher across the fleet registry, one aircraft at a
time, with a fixed pause between requests to stay within the tracking
service's per-client rate limit.

Session stages:
1. Window: fix [now - 24h, now] once for the whole session
2. Fetch: query each aircraft in registry order, sequentially
3. Normalize: tag each raw record with the aircraft's tail number
4. Merge: combine all aircraft into one newest-first view
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from fleetboard.config import config
from fleetboard.ingestion.aggregator import merge
from fleetboard.ingestion.fetcher import FetchResult, FetchWindow, SourceFetcher
from fleetboard.models.aircraft import AircraftEntry, AircraftRegistry
from fleetboard.models.flight_record import FlightRecord, normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionResult:
    """Everything one fetch session produced."""
    window: FetchWindow
    view: Tuple[FlightRecord, ...]
    results: Tuple[FetchResult, ...]
    started_at: float
    finished_at: float

    @property
    def failed(self) -> Tuple[AircraftEntry, ...]:
        """Aircraft whose fetch failed this session."""
        return tuple(r.entry for r in self.results if not r.ok)

    @property
    def record_count(self) -> int:
        return len(self.view)

    @property
    def duration_seconds(self) -> float:
        return self.finished_at - self.started_at


class RateLimitedScheduler:
    """
    Runs fetch sessions across the fleet.

    Exactly one fetch is outstanding at any time; consecutive requests
    start at least request_delay seconds apart.
    """

    def __init__(
        self,
        fetcher: Optional[SourceFetcher] = None,
        request_delay: Optional[float] = None,
        window_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the scheduler.

        Args:
            fetcher: Per-aircraft fetcher (created from config if None)
            request_delay: Seconds to pause between aircraft
            window_seconds: Query window length, ending at session start
            clock: Wall clock, injectable for tests
            sleep: Blocking sleep, injectable for tests
        """
        self.fetcher = fetcher or SourceFetcher()
        self.request_delay = (
            config.fetch.request_delay_seconds if request_delay is None else request_delay
        )
        self.window_seconds = window_seconds or config.fetch.window_seconds
        self._clock = clock
        self._sleep = sleep

    def current_window(self, now: Optional[float] = None) -> FetchWindow:
        """Window ending at now (the clock's current time if None)."""
        if now is None:
            now = self._clock()
        return FetchWindow.ending_at(int(now), self.window_seconds)

    def run_session(
        self,
        registry: AircraftRegistry,
        window: Optional[FetchWindow] = None,
    ) -> SessionResult:
        """
        Fetch every aircraft in registry order and merge the results.

        Per-aircraft failures are isolated by the fetcher; they show up
        as failed entries in the returned SessionResult.
        """
        started_at = self._clock()
        window = window or self.current_window(started_at)
        entries = registry.entries()

        logger.info(
            f'Starting fetch session for {len(entries)} aircraft '
            f'(window {window.start}-{window.end})'
        )

        results: List[FetchResult] = []
        per_aircraft: List[List[FlightRecord]] = []

        for index, entry in enumerate(entries):
            result = self.fetcher.fetch(entry, window)
            results.append(result)
            per_aircraft.append([normalize(raw, entry.tail_number) for raw in result.records])

            # No pause after the last aircraft
            if index < len(entries) - 1 and self.request_delay > 0:
                self._sleep(self.request_delay)

        view = merge(per_aircraft)
        finished_at = self._clock()

        failed = sum(1 for r in results if not r.ok)
        if failed:
            logger.warning(f'Fetch session finished with {failed}/{len(results)} aircraft failed')
        logger.info(f'Fetch session complete: {len(view)} flights in {finished_at - started_at:.1f}s')

        return SessionResult(
            window=window,
            view=view,
            results=tuple(results),
            started_at=started_at,
            finished_at=finished_at,
        )
