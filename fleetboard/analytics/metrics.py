"""
Operational metrics derived from the aggregated flight view.

Revenue is an estimate: flight count times a configurable per-flight
rate. Money values are held as Fraction so totals are exact for any
rational rate, including ones with no terminating decimal form.

The rate lives in a RevenueRate holder owned by whoever renders the
metrics; compute_metrics itself is a pure function of (view, rate).
"""

import logging
import threading
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Any, Optional, Sequence

from fleetboard.config import config
from fleetboard.models.flight_record import FlightRecord

logger = logging.getLogger(__name__)


def format_amount(value: Fraction) -> str:
    """
    Render an amount as a decimal string.

    Exact when the value has a terminating decimal form; otherwise
    rounded to the decimal context precision (28 digits).
    """
    if value.denominator == 1:
        return str(value.numerator)
    return format(Decimal(value.numerator) / Decimal(value.denominator), 'f')


@dataclass(frozen=True)
class Metrics:
    """Flight count and revenue estimate for one view."""
    flight_count: int
    revenue_per_flight: Fraction
    total_revenue: Fraction

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict; amounts as decimal strings."""
        return {
            'flight_count': self.flight_count,
            'revenue_per_flight': format_amount(self.revenue_per_flight),
            'total_revenue': format_amount(self.total_revenue),
        }


def compute_metrics(view: Sequence[FlightRecord], rate: Fraction) -> Metrics:
    """Metrics for a view at the given per-flight rate."""
    flight_count = len(view)
    return Metrics(
        flight_count=flight_count,
        revenue_per_flight=rate,
        total_revenue=rate * flight_count,
    )


def parse_rate(value: Any) -> Optional[Fraction]:
    """
    Parse a per-flight rate.

    Accepts int, Decimal, Fraction, float or numeric strings (including
    ratios such as '121600000/1729'). Returns None for anything negative,
    non-finite or non-numeric.
    """
    if isinstance(value, bool) or value is None:
        return None

    try:
        if isinstance(value, float):
            # repr keeps 0.1 as 1/10 rather than its binary expansion
            rate = Fraction(repr(value))
        elif isinstance(value, (str, int, Decimal, Fraction)):
            rate = Fraction(value)
        else:
            return None
    except (ValueError, TypeError, ZeroDivisionError, OverflowError, InvalidOperation):
        return None

    if rate < 0:
        return None
    return rate


class RevenueRate:
    """
    Thread-safe, mutable per-flight rate.

    Invalid updates are ignored and the last valid rate is kept.
    """

    def __init__(self, initial: Any = None):
        if initial is None:
            initial = config.revenue.revenue_per_flight
        parsed = parse_rate(initial)
        if parsed is None:
            raise ValueError(f'Invalid initial revenue rate: {initial!r}')
        self._value = parsed
        self._lock = threading.Lock()

    @property
    def value(self) -> Fraction:
        with self._lock:
            return self._value

    def set(self, value: Any) -> bool:
        """Update the rate. Returns False (and keeps the old rate) if invalid."""
        parsed = parse_rate(value)
        if parsed is None:
            logger.debug(f'Ignoring invalid revenue rate: {value!r}')
            return False

        with self._lock:
            self._value = parsed
        logger.info(f'Revenue per flight set to {parsed}')
        return True
