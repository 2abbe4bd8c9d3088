"""
Flight activity records.

RawActivityRecord mirrors one item of the OpenSky flights-by-aircraft
response. FlightRecord is the normalized form: the raw fields plus the
tail number of the aircraft it was fetched for.

Display helpers convert Unix timestamps to local date and clock time,
and compute flight duration in whole minutes.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class RawActivityRecord:
    """
    One flight reported by the tracking service.

    Timestamps are Unix epoch seconds. first_seen <= last_seen is
    expected but not guaranteed by the service.
    """
    first_seen: int
    last_seen: int
    callsign: Optional[str] = None
    departure_airport: Optional[str] = None
    arrival_airport: Optional[str] = None

    @classmethod
    def from_dict(cls, item: Any) -> 'RawActivityRecord':
        """
        Parse one OpenSky flight object.

        Raises ValueError if the item is not an object or lacks integer
        firstSeen/lastSeen values.
        """
        if not isinstance(item, dict):
            raise ValueError(f'Expected flight object, got {type(item).__name__}')

        first_seen = item.get('firstSeen')
        last_seen = item.get('lastSeen')
        for name, value in (('firstSeen', first_seen), ('lastSeen', last_seen)):
            # bool is an int subclass
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f'Invalid {name}: {value!r}')

        # Callsigns are space-padded to 8 chars
        callsign = item.get('callsign')
        if isinstance(callsign, str):
            callsign = callsign.strip() or None
        else:
            callsign = None

        return cls(
            first_seen=first_seen,
            last_seen=last_seen,
            callsign=callsign,
            departure_airport=item.get('estDepartureAirport') or None,
            arrival_airport=item.get('estArrivalAirport') or None,
        )


@dataclass(frozen=True)
class FlightRecord:
    """Normalized flight record owned by the aggregated view."""
    tail_number: str
    first_seen: int
    last_seen: int
    callsign: Optional[str] = None
    departure_airport: Optional[str] = None
    arrival_airport: Optional[str] = None

    def __repr__(self) -> str:
        return f'<FlightRecord {self.tail_number} {self.callsign or "?"} {self.first_seen}-{self.last_seen}>'

    # -------------------------------------------------------------------------
    # Display helpers
    # -------------------------------------------------------------------------

    @property
    def duration_minutes(self) -> int:
        return duration_minutes(self.first_seen, self.last_seen)

    @property
    def display_callsign(self) -> str:
        return self.callsign or 'Unknown'

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'tail_number': self.tail_number,
            'callsign': self.display_callsign,
            'departure_airport': self.departure_airport or 'N/A',
            'arrival_airport': self.arrival_airport or 'N/A',
            'date': format_date(self.first_seen),
            'departure_time': format_time(self.first_seen),
            'arrival_time': format_time(self.last_seen),
            'duration': format_duration(self.duration_minutes),
            'duration_minutes': self.duration_minutes,
            'first_seen': self.first_seen,
            'last_seen': self.last_seen,
        }


def normalize(raw: RawActivityRecord, tail_number: str) -> FlightRecord:
    """Attach the owning tail number to a raw record."""
    return FlightRecord(
        tail_number=tail_number,
        first_seen=raw.first_seen,
        last_seen=raw.last_seen,
        callsign=raw.callsign,
        departure_airport=raw.departure_airport,
        arrival_airport=raw.arrival_airport,
    )


def format_date(ts: int) -> str:
    """Local calendar date, e.g. '2024-03-09'."""
    return datetime.fromtimestamp(ts).strftime('%Y-%m-%d')


def format_time(ts: int) -> str:
    """Local clock time, e.g. '14:05'."""
    return datetime.fromtimestamp(ts).strftime('%H:%M')


def duration_minutes(first_seen: int, last_seen: int) -> int:
    """
    Whole minutes between two timestamps, floored.

    Not clamped: last_seen < first_seen gives a negative duration.
    """
    return (last_seen - first_seen) // 60


def format_duration(minutes: int) -> str:
    """Render minutes as '{hours}h {minutes}m', with a leading '-' if negative."""
    sign = '-' if minutes < 0 else ''
    hours, mins = divmod(abs(minutes), 60)
    return f'{sign}{hours}h {mins}m'
