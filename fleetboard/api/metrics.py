"""
Metrics and status API endpoints.

Provides endpoints for:
- GET /api/metrics - Flight count and revenue estimate
- GET/PUT /api/metrics/rate - Get/set the per-flight revenue rate
- GET /api/metrics/status - Refresh status and configuration
- GET /api/metrics/clock - Display clock and last update time
"""

import logging
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request

from fleetboard.analytics.metrics import format_amount
from fleetboard.config import config

logger = logging.getLogger(__name__)

metrics_bp = Blueprint('metrics', __name__, url_prefix='/api/metrics')


def _controller():
    return current_app.config['REFRESH_CONTROLLER']


@metrics_bp.route('', methods=['GET'])
def get_metrics():
    """
    Get metrics for the published view.

    Recomputed on every request from the current view and rate.
    Amounts are returned as decimal strings.
    """
    controller = _controller()
    result = controller.metrics.to_dict()
    result.update({
        'fetching': controller.is_fetching,
        'last_updated': controller.last_updated.isoformat() if controller.last_updated else None,
    })
    return jsonify(result)


@metrics_bp.route('/rate', methods=['GET', 'PUT', 'POST'])
def revenue_rate():
    """
    Get or set the per-flight revenue rate.

    GET: Returns current rate
    PUT/POST: Set new rate
        Body: {"rate": number or numeric string}

    Invalid rates (negative, non-numeric) are ignored and the current
    rate is kept; the response reports accepted=false.
    """
    controller = _controller()

    if request.method == 'GET':
        return jsonify({'rate': format_amount(controller.rate.value)})

    data = request.get_json(silent=True)
    # Bodies that are not a JSON object carry no rate
    rate = data.get('rate') if isinstance(data, dict) else None
    accepted = controller.set_rate(rate)

    return jsonify({
        'accepted': accepted,
        'rate': format_amount(controller.rate.value),
    })


@metrics_bp.route('/status', methods=['GET'])
def get_status():
    """
    Get refresh status information.

    Returns:
    - Refresh controller statistics
    - Per-aircraft outcome of the last session
    - Configuration info
    """
    controller = _controller()
    session = controller.last_session

    aircraft = []
    if session:
        for result in session.results:
            aircraft.append({
                'tail_number': result.entry.tail_number,
                'tracker_id': result.entry.tracker_id,
                'ok': result.ok,
                'flights': len(result.records),
                'error': result.error,
            })

    return jsonify({
        'status': 'fetching' if controller.is_fetching else 'idle',
        'refresh': controller.stats,
        'fleet_size': len(controller.registry),
        'last_session': {
            'window_start': session.window.start,
            'window_end': session.window.end,
            'aircraft': aircraft,
        } if session else None,
        'config': {
            'request_delay_ms': config.fetch.request_delay_ms,
            'window_hours': config.fetch.window_hours,
            'clock_tick_seconds': config.clock.tick_seconds,
        },
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })


@metrics_bp.route('/clock', methods=['GET'])
def get_clock():
    """Display clock value and last update time."""
    controller = _controller()
    return jsonify({
        'current_time': controller.current_time.isoformat(),
        'last_updated': controller.last_updated.isoformat() if controller.last_updated else None,
    })
