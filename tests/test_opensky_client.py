from unittest.mock import Mock

import pytest
import requests

from fleetboard.ingestion.opensky_client import OpenSkyClient


def _client(json_body=None, status_error=None, json_error=None):
    response = Mock()
    if status_error:
        response.raise_for_status.side_effect = status_error
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_body
    session = Mock()
    session.get.return_value = response
    return OpenSkyClient(base_url='https://example.test/api/', timeout=7, session=session), session


def test_request_parameters():
    client, session = _client(json_body=[])

    client.get_flights_by_aircraft('a835af', 1000, 2000)

    session.get.assert_called_once_with(
        'https://example.test/api/flights/aircraft',
        params={'icao24': 'a835af', 'begin': 1000, 'end': 2000},
        timeout=7,
    )


def test_parses_flights_in_order():
    client, _ = _client(json_body=[
        {'firstSeen': 100, 'lastSeen': 200, 'callsign': 'ABC1    '},
        {'firstSeen': 300, 'lastSeen': 400, 'estArrivalAirport': 'KSJC'},
    ])

    records = client.get_flights_by_aircraft('a835af', 0, 1000)

    assert [r.first_seen for r in records] == [100, 300]
    assert records[0].callsign == 'ABC1'
    assert records[1].arrival_airport == 'KSJC'


def test_http_error_propagates():
    error = requests.HTTPError(response=Mock(status_code=503))
    client, _ = _client(status_error=error)

    with pytest.raises(requests.HTTPError):
        client.get_flights_by_aircraft('a835af', 0, 1000)


def test_rate_limited_propagates():
    error = requests.HTTPError(response=Mock(status_code=429))
    client, _ = _client(status_error=error)

    with pytest.raises(requests.HTTPError):
        client.get_flights_by_aircraft('a835af', 0, 1000)


def test_transport_error_propagates():
    client, session = _client(json_body=[])
    session.get.side_effect = requests.ConnectionError('down')

    with pytest.raises(requests.ConnectionError):
        client.get_flights_by_aircraft('a835af', 0, 1000)


def test_non_json_body():
    client, _ = _client(json_error=ValueError('Expecting value'))

    with pytest.raises(ValueError):
        client.get_flights_by_aircraft('a835af', 0, 1000)


@pytest.mark.parametrize('body', [{'flights': []}, None, [{'callsign': 'X'}]])
def test_malformed_body(body):
    client, _ = _client(json_body=body)

    with pytest.raises(ValueError):
        client.get_flights_by_aircraft('a835af', 0, 1000)
