from decimal import Decimal

import pytest

from fleetboard.config import DEFAULT_REVENUE_PER_FLIGHT, FetchConfig, _parse_rate


@pytest.mark.parametrize('value, expected', [
    ('', DEFAULT_REVENUE_PER_FLIGHT),
    ('abc', DEFAULT_REVENUE_PER_FLIGHT),
    ('-1', DEFAULT_REVENUE_PER_FLIGHT),
    ('NaN', DEFAULT_REVENUE_PER_FLIGHT),
    ('1500.75', Decimal('1500.75')),
    ('0', Decimal('0')),
])
def test_parse_rate(value, expected):
    assert _parse_rate(value) == expected


def test_fetch_config_units():
    fetch = FetchConfig(request_delay_ms=500, window_hours=24)

    assert fetch.request_delay_seconds == 0.5
    assert fetch.window_seconds == 86400
