"""
Data ingestion module for the fleet board.

Handles querying OpenSky per aircraft, spacing requests across the
fleet, and merging the results into a single view.
"""

from fleetboard.ingestion.opensky_client import OpenSkyClient
from fleetboard.ingestion.fetcher import FetchResult, FetchWindow, SourceFetcher
from fleetboard.ingestion.aggregator import merge
from fleetboard.ingestion.scheduler import RateLimitedScheduler, SessionResult

__all__ = [
    'OpenSkyClient',
    'FetchResult',
    'FetchWindow',
    'SourceFetcher',
    'merge',
    'RateLimitedScheduler',
    'SessionResult',
]
