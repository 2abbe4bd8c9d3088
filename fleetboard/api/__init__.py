"""
API module for the fleet board.

Provides REST endpoints for:
- Fleet flight activity and manual refresh
- Metrics, revenue rate and status
"""

from fleetboard.api.flights import flights_bp
from fleetboard.api.metrics import metrics_bp

__all__ = ['flights_bp', 'metrics_bp']
