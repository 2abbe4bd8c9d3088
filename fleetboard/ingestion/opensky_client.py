"""
OpenSky Network API client.

Handles communication with the OpenSky REST API flights endpoint:
- Per-aircraft flight queries over a time window
- Response parsing into RawActivityRecord objects
- Error logging (errors are re-raised to the caller)

OpenSky flight object format (subset used here):
icao24               - ICAO24 hex address
firstSeen            - Unix timestamp the aircraft was first seen
lastSeen             - Unix timestamp the aircraft was last seen
callsign             - Callsign (8 chars, space padded), may be null
estDepartureAirport  - Estimated departure airport ICAO code, may be null
estArrivalAirport    - Estimated arrival airport ICAO code, may be null
"""

import logging
from typing import List, Optional

import requests

from fleetboard.config import config
from fleetboard.models.flight_record import RawActivityRecord

logger = logging.getLogger(__name__)


class OpenSkyClient:
    """
    Client for OpenSky Network API.

    Handles:
    - GET requests to /flights/aircraft endpoint
    - JSON parsing and validation

    Rate limiting is the caller's concern: the scheduler spaces
    requests across the fleet.
    """

    def __init__(
        self,
        base_url: str = 'https://opensky-network.org/api',
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls) -> 'OpenSkyClient':
        """Create client from application configuration."""
        return cls(
            base_url=config.opensky.base_url,
            timeout=config.opensky.timeout_seconds,
        )

    def get_flights_by_aircraft(
        self,
        icao24: str,
        begin: int,
        end: int,
    ) -> List[RawActivityRecord]:
        """
        Fetch flights for one aircraft within [begin, end].

        Args:
            icao24: ICAO24 hex address (lowercase)
            begin: Window start, Unix seconds
            end: Window end, Unix seconds

        Returns:
            List of RawActivityRecords in response order

        Raises:
            requests.RequestException on network/API errors
            ValueError on a non-JSON or malformed response body
        """
        url = f'{self.base_url}/flights/aircraft'
        params = {
            'icao24': icao24,
            'begin': begin,
            'end': end,
        }

        logger.debug(f'Fetching flights: {url} params={params}')

        try:
            response = self.session.get(
                url,
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()

        except requests.exceptions.Timeout:
            logger.error(f'OpenSky API timeout for {icao24}')
            raise
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else '?'
            if status == 429:
                logger.warning('OpenSky rate limit exceeded')
            else:
                logger.error(f'OpenSky API error for {icao24}: {status}')
            raise
        except requests.exceptions.RequestException as e:
            logger.error(f'OpenSky request failed for {icao24}: {e}')
            raise

        # requests raises its own JSONDecodeError, a ValueError subclass
        data = response.json()

        if not isinstance(data, list):
            raise ValueError(f'Expected JSON array from OpenSky, got {type(data).__name__}')

        records = [RawActivityRecord.from_dict(item) for item in data]

        logger.debug(f'Received {len(records)} flights for {icao24}')

        return records
