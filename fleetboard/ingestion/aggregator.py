"""Merge per-aircraft flight lists into one newest-first view."""

from itertools import chain
from typing import Iterable, Sequence, Tuple

from fleetboard.models.flight_record import FlightRecord


def merge(per_aircraft_results: Iterable[Sequence[FlightRecord]]) -> Tuple[FlightRecord, ...]:
    """
    Concatenate flight lists in input order and sort by first_seen, newest first.

    The sort is stable: records with equal first_seen keep their input
    order. Duplicates are kept.
    """
    combined = list(chain.from_iterable(per_aircraft_results))
    # reverse=True preserves the relative order of equal keys
    combined.sort(key=lambda r: r.first_seen, reverse=True)
    return tuple(combined)
