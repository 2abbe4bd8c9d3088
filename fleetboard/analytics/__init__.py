"""
Analytics module for the fleet board.

Derives operational metrics from the aggregated flight view:
- Flight count
- Estimated revenue at a configurable per-flight rate
"""

from fleetboard.analytics.metrics import (
    Metrics,
    RevenueRate,
    compute_metrics,
    parse_rate,
    format_amount,
)

__all__ = [
    'Metrics',
    'RevenueRate',
    'compute_metrics',
    'parse_rate',
    'format_amount',
]
