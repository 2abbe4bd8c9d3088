"""
Configuration management for the fleet board.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_REVENUE_PER_FLIGHT = Decimal('70329')


def _parse_rate(value: str) -> Decimal:
    """Parse a non-negative decimal rate, falling back to the default."""
    if not value:
        return DEFAULT_REVENUE_PER_FLIGHT
    try:
        rate = Decimal(value.strip())
    except (InvalidOperation, AttributeError):
        return DEFAULT_REVENUE_PER_FLIGHT
    if not rate.is_finite() or rate < 0:
        return DEFAULT_REVENUE_PER_FLIGHT
    return rate


@dataclass(frozen=True)
class OpenSkyConfig:
    """OpenSky API configuration."""
    base_url: str = os.getenv('OPENSKY_BASE_URL', 'https://opensky-network.org/api')
    timeout_seconds: float = float(os.getenv('OPENSKY_TIMEOUT_SECONDS', '30'))


@dataclass(frozen=True)
class FetchConfig:
    """Fetch session settings."""
    # Spacing between per-aircraft requests
    request_delay_ms: int = int(os.getenv('REQUEST_DELAY_MS', '500'))
    window_hours: int = int(os.getenv('FETCH_WINDOW_HOURS', '24'))

    @property
    def request_delay_seconds(self) -> float:
        return self.request_delay_ms / 1000.0

    @property
    def window_seconds(self) -> int:
        return self.window_hours * 3600


@dataclass(frozen=True)
class RevenueConfig:
    """Revenue estimate settings."""
    revenue_per_flight: Decimal = _parse_rate(os.getenv('REVENUE_PER_FLIGHT', ''))


@dataclass(frozen=True)
class ClockConfig:
    """Display clock settings."""
    tick_seconds: int = int(os.getenv('CLOCK_TICK_SECONDS', '60'))


@dataclass(frozen=True)
class FleetConfig:
    """Fleet registry source."""
    # CSV of tail_number,tracker_id rows; None = built-in fleet table
    csv_path: Optional[str] = os.getenv('FLEET_CSV') or None


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    opensky: OpenSkyConfig
    fetch: FetchConfig
    revenue: RevenueConfig
    clock: ClockConfig
    fleet: FleetConfig

    # Flask settings
    secret_key: str
    debug: bool


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        opensky=OpenSkyConfig(),
        fetch=FetchConfig(),
        revenue=RevenueConfig(),
        clock=ClockConfig(),
        fleet=FleetConfig(),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )


# Singleton instance
config = load_config()
