"""
Data models for the fleet board.

Plain immutable dataclasses:
1. AircraftEntry / AircraftRegistry - the tracked fleet
2. RawActivityRecord - one flight as reported by OpenSky
3. FlightRecord - a flight normalized with its tail number
"""

from fleetboard.models.aircraft import (
    AircraftEntry,
    AircraftRegistry,
    FLEET,
    load_registry,
    load_registry_csv,
)
from fleetboard.models.flight_record import (
    RawActivityRecord,
    FlightRecord,
    normalize,
    format_date,
    format_time,
    duration_minutes,
    format_duration,
)

__all__ = [
    'AircraftEntry',
    'AircraftRegistry',
    'FLEET',
    'load_registry',
    'load_registry_csv',
    'RawActivityRecord',
    'FlightRecord',
    'normalize',
    'format_date',
    'format_time',
    'duration_minutes',
    'format_duration',
]
