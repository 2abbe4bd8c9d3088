"""
Fleet Board Package.

Fleet flight-activity board built with Flask and requests.

Modules:
    api/          REST endpoints for flights, metrics and status
    models/       Fleet registry and flight record dataclasses
    ingestion/    OpenSky client, rate-limited fetch scheduler, aggregation
    analytics/    Flight count and revenue metrics
    controller.py Refresh gate, published view and display clock
    config.py     Centralized configuration from environment variables
"""

__version__ = '1.0.0'
