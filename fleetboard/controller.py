"""
Refresh controller - the single entry point the presentation layer drives.

Owns:
- The published flight view (last-known-good)
- The fetch gate (IDLE / FETCHING)
- The "last updated" timestamp
- A cosmetic display clock, ticking independently of fetches

refresh() never queues: while a session is running, further calls are
ignored. Sessions run on a background worker thread so the caller
(e.g. a Flask request) returns immediately.
"""

import logging
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from fleetboard.analytics.metrics import Metrics, RevenueRate, compute_metrics
from fleetboard.config import config
from fleetboard.ingestion.scheduler import RateLimitedScheduler, SessionResult
from fleetboard.models.aircraft import AircraftRegistry, load_registry
from fleetboard.models.flight_record import FlightRecord

logger = logging.getLogger(__name__)


class RefreshState(str, Enum):
    """Fetch gate state."""
    IDLE = 'idle'
    FETCHING = 'fetching'


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RefreshController:
    """
    Coordinates fetch sessions and publishes their results.

    Can run sessions in a background thread (refresh()) or inline
    (refresh(wait=True)), which is what the tests use.
    """

    def __init__(
        self,
        registry: Optional[AircraftRegistry] = None,
        scheduler: Optional[RateLimitedScheduler] = None,
        rate: Optional[RevenueRate] = None,
        clock_interval: Optional[float] = None,
        now: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the controller.

        Args:
            registry: Fleet to fetch (loaded from config if None)
            scheduler: Session runner (created from config if None)
            rate: Per-flight revenue rate holder (default from config)
            clock_interval: Display clock period in seconds
            now: Current-time source, injectable for tests
        """
        self.registry = registry if registry is not None else load_registry()
        self.scheduler = scheduler or RateLimitedScheduler()
        self.rate = rate or RevenueRate()
        self.clock_interval = clock_interval or config.clock.tick_seconds
        self._now = now

        # Published state
        self._view: Tuple[FlightRecord, ...] = ()
        self._last_updated: Optional[datetime] = None
        self._last_session: Optional[SessionResult] = None
        self._current_time: datetime = now()

        # Fetch gate
        self._state = RefreshState.IDLE
        self._lock = threading.Lock()
        self._worker: Optional[threading.Thread] = None

        # Display clock
        self._clock_stop = threading.Event()
        self._clock_thread: Optional[threading.Thread] = None

        # Statistics
        self._session_count = 0
        self._error_count = 0
        self._failed_fetch_count = 0

        # Callbacks for external integration
        self._on_update_callbacks: List[Callable[[int], None]] = []

    # -------------------------------------------------------------------------
    # Fetch lifecycle
    # -------------------------------------------------------------------------

    def add_update_callback(self, callback: Callable[[int], None]) -> None:
        """
        Register callback to be invoked after each published session.

        Callback receives the number of flights in the new view.
        """
        self._on_update_callbacks.append(callback)

    def refresh(self, wait: bool = False) -> bool:
        """
        Start a fetch session unless one is already running.

        Args:
            wait: Run the session on the calling thread and return when done

        Returns:
            True if a session was started, False if one was already in flight
        """
        with self._lock:
            if self._state is RefreshState.FETCHING:
                logger.debug('Refresh ignored: fetch already in progress')
                return False
            self._state = RefreshState.FETCHING

        if wait:
            self._run_session()
            return True

        self._worker = threading.Thread(
            target=self._run_session,
            name='fleetboard-refresh',
            daemon=True,
        )
        self._worker.start()
        return True

    def _run_session(self) -> None:
        """Run one session and publish it; on error keep the previous view."""
        session = None
        try:
            session = self.scheduler.run_session(self.registry)
        except Exception as e:
            self._error_count += 1
            logger.error(f'Fetch session failed, keeping previous data: {e}')
        finally:
            with self._lock:
                if session is not None:
                    self._view = session.view
                    self._last_session = session
                    self._last_updated = self._now()
                    self._session_count += 1
                    self._failed_fetch_count += len(session.failed)
                self._state = RefreshState.IDLE

        if session is None:
            return

        # Notify callbacks
        for callback in self._on_update_callbacks:
            try:
                callback(len(session.view))
            except Exception as e:
                logger.error(f'Update callback error: {e}')

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until the background session (if any) finishes."""
        worker = self._worker
        if worker:
            worker.join(timeout=timeout)

    # -------------------------------------------------------------------------
    # Display clock
    # -------------------------------------------------------------------------

    def tick(self) -> datetime:
        """Advance the display clock to now. Never triggers a refresh."""
        self._current_time = self._now()
        return self._current_time

    def _run_clock(self) -> None:
        while not self._clock_stop.wait(self.clock_interval):
            self.tick()

    def start_clock(self) -> None:
        """Start the display clock in a background thread."""
        if self._clock_thread and self._clock_thread.is_alive():
            logger.warning('Display clock already running')
            return

        self._clock_stop.clear()
        self._clock_thread = threading.Thread(
            target=self._run_clock,
            name='fleetboard-clock',
            daemon=True,
        )
        self._clock_thread.start()
        logger.debug(f'Display clock started (interval={self.clock_interval}s)')

    def stop(self) -> None:
        """Stop the display clock and wait for any running session."""
        self._clock_stop.set()
        if self._clock_thread:
            self._clock_thread.join(timeout=5)
            self._clock_thread = None
        self.wait(timeout=5)
        logger.info('Refresh controller stopped')

    # -------------------------------------------------------------------------
    # Read-only state for presentation
    # -------------------------------------------------------------------------

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def is_fetching(self) -> bool:
        return self._state is RefreshState.FETCHING

    @property
    def view(self) -> Tuple[FlightRecord, ...]:
        return self._view

    @property
    def last_updated(self) -> Optional[datetime]:
        return self._last_updated

    @property
    def last_session(self) -> Optional[SessionResult]:
        return self._last_session

    @property
    def current_time(self) -> datetime:
        return self._current_time

    @property
    def metrics(self) -> Metrics:
        """Recomputed from the published view on every read."""
        return compute_metrics(self._view, self.rate.value)

    def set_rate(self, value: Any) -> bool:
        """Update the per-flight rate; invalid values are ignored."""
        return self.rate.set(value)

    @property
    def stats(self) -> dict:
        """Get refresh statistics."""
        session = self._last_session
        return {
            'state': self._state.value,
            'session_count': self._session_count,
            'error_count': self._error_count,
            'failed_fetch_count': self._failed_fetch_count,
            'last_session_seconds': round(session.duration_seconds, 2) if session else None,
            'last_updated': self._last_updated.isoformat() if self._last_updated else None,
            'clock_running': bool(self._clock_thread and self._clock_thread.is_alive()),
        }
