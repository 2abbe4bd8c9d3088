"""
Fleet Board Flask Application.

Main entry point for the web application. Initializes:
- Refresh controller (initial fetch on startup)
- Display clock
- API routes

Usage:
    python -m fleetboard.app

Or with gunicorn:
    gunicorn 'fleetboard.app:create_app()'
"""

import atexit
import logging
import os
from typing import Optional

from flask import Flask
from flask_cors import CORS

from fleetboard.api import flights_bp, metrics_bp
from fleetboard.config import config
from fleetboard.controller import RefreshController

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(
    start_refresh: bool = True,
    controller: Optional[RefreshController] = None,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        start_refresh: Whether to run the initial fetch and start the
                       display clock. Set to False for testing.
        controller: Refresh controller to serve (created from config if None)

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = config.secret_key

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    # Register API blueprints
    app.register_blueprint(flights_bp)
    app.register_blueprint(metrics_bp)

    controller = controller or RefreshController()
    app.config['REFRESH_CONTROLLER'] = controller

    if start_refresh:
        controller.start_clock()
        controller.refresh()
        atexit.register(controller.stop)
        logger.info(f'Initial refresh started for {len(controller.registry)} aircraft')

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {'status': 'ok'}

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    # Get port from environment or default
    port = int(os.environ.get('PORT', 5000))

    logger.info(f'Starting Fleet Board on http://localhost:{port}')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=config.debug,
        use_reloader=False,  # Disable reloader to prevent duplicate refresh threads
    )


if __name__ == '__main__':
    run_development_server()
