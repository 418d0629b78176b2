from datetime import date

import pytest
import requests

from core.errors import DataSourceError
from core.models import DurationRange, SearchParams
from engine import analyze
from providers.api_provider import ApiProvider
from services.api_client import FlightApiClient
from services.result_bridge import analysis_to_dict


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Replays queued responses (or raises queued exceptions) and records each call."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, params=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "params": params, "json": json})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _provider(*responses, max_retries=3):
    session = FakeSession(*responses)
    client = FlightApiClient(
        "http://api.test/v1/", max_retries=max_retries, backoff_seconds=0, session=session)
    return ApiProvider(client), session


def _params():
    return SearchParams(
        origin="bangkok",
        destination="phuket",
        duration_range=DurationRange(4, 6),
        selected_airlines=["nok-air"],
        start_date=date(2026, 3, 2),
        end_date=date(2026, 3, 7),
        trip_type="round-trip",
        passenger_count=2,
    )


def test_analyze_posts_params_and_parses_result(today):
    expected = analyze(_params(), today=today)
    provider, session = _provider(FakeResponse(payload=analysis_to_dict(expected)))

    result = provider.analyze(_params())

    assert result == expected
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://api.test/v1/flights/analyze"
    assert call["json"]["startDate"] == "2026-03-02"
    assert call["json"]["endDate"] == "2026-03-07"
    assert call["json"]["durationRange"] == {"min": 4, "max": 6}
    assert call["json"]["passengerCount"] == 2


def test_transient_status_is_retried():
    rows = [{
        "airline": "Nok Air", "flightNumber": "NO1003", "departureTime": "06:00",
        "arrivalTime": "07:15", "duration": "1h 15m", "price": 2100, "date": "2 มีนาคม 2026",
    }]
    provider, session = _provider(FakeResponse(503), FakeResponse(payload=rows))

    flights = provider.flights_for_airline("nok-air", "bangkok", "phuket", date(2026, 3, 2))

    assert len(session.calls) == 2
    assert flights[0].flight_number == "NO1003"
    assert flights[0].direction == "OUT"
    assert session.calls[0]["json"]["tripType"] == "one-way"


def test_flights_are_sorted_by_price():
    rows = [
        {"airline": "A", "flightNumber": "1", "departureTime": "06:00", "arrivalTime": "07:00",
         "duration": "1h 0m", "price": price}
        for price in (3000, 1000, 2000)
    ]
    provider, _ = _provider(FakeResponse(payload=rows))
    flights = provider.flights_for_airline("a", "bangkok", "phuket", date(2026, 3, 2), date(2026, 3, 5))
    assert [f.price for f in flights] == [1000, 2000, 3000]


def test_connection_errors_give_up_after_max_retries():
    provider, session = _provider(
        *[requests.ConnectionError("down")] * 3, max_retries=3)

    with pytest.raises(DataSourceError):
        provider.analyze(_params())
    assert len(session.calls) == 3


def test_exhausted_retry_status_raises():
    provider, session = _provider(FakeResponse(503), FakeResponse(502), max_retries=2)
    with pytest.raises(DataSourceError):
        provider.analyze(_params())
    assert len(session.calls) == 2


def test_client_errors_are_not_retried():
    provider, session = _provider(FakeResponse(400, text="bad origin"))
    with pytest.raises(DataSourceError):
        provider.analyze(_params())
    assert len(session.calls) == 1


@pytest.mark.parametrize("payload", [
    {"recommendedPeriod": {}},
    {"recommendedPeriod": {"startDate": "x", "price": "cheap", "airline": "A", "season": "low"},
     "priceComparison": {}, "seasons": []},
    ValueError("not json"),
])
def test_malformed_analysis_raises(payload):
    provider, _ = _provider(FakeResponse(payload=payload))
    with pytest.raises(DataSourceError):
        provider.analyze(_params())


def test_flight_list_must_be_a_list():
    provider, _ = _provider(FakeResponse(payload={"flights": []}))
    with pytest.raises(DataSourceError):
        provider.flights_for_airline("nok-air", "bangkok", "phuket", date(2026, 3, 2))


def test_no_start_date_skips_the_request():
    provider, session = _provider()
    assert provider.flights_for_airline("nok-air", "bangkok", "phuket") == []
    assert session.calls == []


def test_available_airlines():
    provider, session = _provider(FakeResponse(payload=["nok-air", "thai-airasia"]))
    assert provider.available_airlines("bangkok", "phuket") == ["nok-air", "thai-airasia"]
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["params"] == {"origin": "bangkok", "destination": "phuket"}
