"""
Flight data API endpoints.

Provides endpoints for:
- GET /api/flights - The aggregated fleet activity view, newest first
- GET /api/flights/<tail_number> - Flights for one aircraft
- POST /api/flights/refresh - Start a new fetch session
"""

import logging
import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')


def _controller():
    return current_app.config['REFRESH_CONTROLLER']


def _isoformat(value):
    return value.isoformat() if value else None


@flights_bp.route('', methods=['GET'])
def list_flights():
    """
    List all flights in the published view.

    Query parameters:
    - limit: int, max results to return (default: all)

    Response includes the fetch state so clients can show a busy indicator.
    """
    start_time = time.perf_counter()
    controller = _controller()

    flights = list(controller.view)

    limit = request.args.get('limit', type=int)
    if limit is not None and limit >= 0:
        flights = flights[:limit]

    query_time_ms = (time.perf_counter() - start_time) * 1000

    return jsonify({
        'flights': [f.to_dict() for f in flights],
        'count': len(flights),
        'fetching': controller.is_fetching,
        'last_updated': _isoformat(controller.last_updated),
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'query_time_ms': round(query_time_ms, 2),
    })


@flights_bp.route('/<tail_number>', methods=['GET'])
def get_aircraft_flights(tail_number: str):
    """Flights in the published view for a single tail number."""
    controller = _controller()
    tail_number = tail_number.upper()

    known = {e.tail_number for e in controller.registry.entries()}
    if tail_number not in known:
        return jsonify({'error': 'Aircraft not in fleet'}), 404

    flights = [f for f in controller.view if f.tail_number == tail_number]

    return jsonify({
        'tail_number': tail_number,
        'flights': [f.to_dict() for f in flights],
        'count': len(flights),
        'last_updated': _isoformat(controller.last_updated),
    })


@flights_bp.route('/refresh', methods=['POST'])
def refresh_flights():
    """
    Start a fetch session.

    Returns 202 if a session was started, 409 if one is already running.
    """
    controller = _controller()

    if not controller.refresh():
        return jsonify({
            'started': False,
            'fetching': True,
            'message': 'Refresh already in progress',
        }), 409

    logger.info('Refresh requested via API')

    return jsonify({
        'started': True,
        'fetching': True,
    }), 202
