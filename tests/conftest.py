"""
Pytest fixtures for the fleet board.

Fakes stand in for the OpenSky HTTP client and the wall clock so
sessions run instantly and request timing can be asserted exactly.
"""
import threading
from decimal import Decimal

import pytest

from fleetboard.analytics.metrics import RevenueRate
from fleetboard.controller import RefreshController
from fleetboard.ingestion.fetcher import FetchWindow, SourceFetcher
from fleetboard.ingestion.scheduler import RateLimitedScheduler, SessionResult
from fleetboard.models.aircraft import AircraftRegistry
from fleetboard.models.flight_record import RawActivityRecord


class FakeClock:
    """Manual clock; sleep() advances time instead of blocking."""

    def __init__(self, start=1_700_000_000.0):
        self.now = start
        self.sleeps = []

    def time(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class FakeOpenSkyClient:
    """
    Stand-in for OpenSkyClient.

    responses maps tracker id -> list of RawActivityRecord, or an
    exception instance to raise for that aircraft.
    """

    def __init__(self, responses=None, clock=None):
        self.responses = responses or {}
        self.clock = clock
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    def get_flights_by_aircraft(self, icao24, begin, end):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            self.calls.append({
                'icao24': icao24,
                'begin': begin,
                'end': end,
                'at': self.clock.time() if self.clock else None,
            })
            response = self.responses.get(icao24, [])
            if isinstance(response, Exception):
                raise response
            return list(response)
        finally:
            self.in_flight -= 1


class BlockingScheduler:
    """Scheduler whose session blocks until release() is called."""

    def __init__(self, view=()):
        self.view = view
        self.calls = 0
        self.entered = threading.Event()
        self._release = threading.Event()

    def run_session(self, registry, window=None):
        self.calls += 1
        self.entered.set()
        self._release.wait(timeout=5)
        return _session_result(self.view)

    def release(self):
        self._release.set()


def _session_result(view):
    return SessionResult(
        window=FetchWindow(start=0, end=86400),
        view=tuple(view),
        results=(),
        started_at=0.0,
        finished_at=1.0,
    )


def raw(first_seen, last_seen, callsign=None):
    return RawActivityRecord(first_seen=first_seen, last_seen=last_seen, callsign=callsign)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry():
    """Two-aircraft fleet: A -> id1, B -> id2."""
    return AircraftRegistry.from_pairs([('A', 'aaaaa1'), ('B', 'bbbbb2')])


@pytest.fixture
def fake_client(clock):
    return FakeOpenSkyClient(clock=clock)


@pytest.fixture
def scheduler(fake_client, clock):
    return RateLimitedScheduler(
        fetcher=SourceFetcher(client=fake_client),
        request_delay=0.5,
        window_seconds=24 * 3600,
        clock=clock.time,
        sleep=clock.sleep,
    )


@pytest.fixture
def controller(registry, scheduler):
    return RefreshController(
        registry=registry,
        scheduler=scheduler,
        rate=RevenueRate(Decimal('1000')),
        clock_interval=60,
    )
