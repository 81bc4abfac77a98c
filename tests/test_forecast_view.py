from __future__ import annotations

import pytest
from django.core.cache import caches
from django.test import Client

from backend.api import views
from backend.api.views import format_ttl
from backend.core.abstractions import ErrorCode, ErrorRecord
from backend.core.cache import InMemoryResultCache
from backend.core.services.forecast_service import ForecastOrchestrator
from doubles import NOMINATIM_URL, OPEN_METEO_URL, GeocoderStub, WeatherStub


@pytest.fixture
def use_service(monkeypatch):
    def install(service: ForecastOrchestrator) -> ForecastOrchestrator:
        monkeypatch.setattr(views, "get_forecast_service", lambda: service)
        return service

    return install


@pytest.fixture
def live_service():
    views.get_forecast_service.cache_clear()
    caches["default"].clear()
    yield views.get_forecast_service()
    views.get_forecast_service.cache_clear()


def test_forecast_endpoint_returns_payload(use_service, chicago, weather_payload) -> None:
    use_service(ForecastOrchestrator(GeocoderStub(chicago), WeatherStub(weather_payload), InMemoryResultCache()))
    client = Client()

    response = client.get("/api/forecast", {"address": "Chicago"})

    assert response.status_code == 200
    assert response.json() == {
        "address": "Chicago, IL, USA",
        "latitude": 41.88,
        "longitude": -87.63,
        "current_temperature": 5.0,
        "weather_code": 0,
        "high": 8.0,
        "low": 2.0,
        "from_cache": False,
        "cache_ttl_display": "30 min",
    }


def test_forecast_endpoint_reports_cache_hit(use_service, chicago, weather_payload) -> None:
    use_service(ForecastOrchestrator(GeocoderStub(chicago), WeatherStub(weather_payload), InMemoryResultCache()))
    client = Client()

    client.get("/api/forecast", {"address": "Chicago"})
    payload = client.get("/api/forecast", {"address": "Chicago"}).json()

    assert payload["from_cache"] is True
    assert payload["cache_key"] == "forecast/zip/60601"


@pytest.mark.parametrize("query", [{}, {"address": ""}, {"address": "   "}])
def test_forecast_endpoint_rejects_blank_address(use_service, query) -> None:
    geocoder = GeocoderStub(ErrorRecord("unused", ErrorCode.BLANK_ADDRESS))
    use_service(ForecastOrchestrator(geocoder, WeatherStub({}), InMemoryResultCache()))

    response = Client().get("/api/forecast", query)

    assert response.status_code == 400
    assert response.json() == {"error": "Please enter an address.", "error_code": "blank_address"}
    assert geocoder.calls == []


@pytest.mark.parametrize(
    "error, expected_status",
    [
        (ErrorRecord("Address not found.", ErrorCode.ADDRESS_NOT_FOUND), 404),
        (ErrorRecord("Geocoding service unavailable.", ErrorCode.GEOCODING_UNAVAILABLE), 502),
        (ErrorRecord("Could not look up address. Please try again.", ErrorCode.TIMEOUT_OR_NETWORK), 502),
    ],
)
def test_forecast_endpoint_renders_errors(use_service, error, expected_status) -> None:
    use_service(ForecastOrchestrator(GeocoderStub(error), WeatherStub({}), InMemoryResultCache()))

    response = Client().get("/api/forecast", {"address": "somewhere"})

    assert response.status_code == expected_status
    assert response.json() == {"error": error.message, "error_code": error.code.value}


def test_forecast_endpoint_end_to_end(live_service, requests_mock, nominatim_match, weather_payload) -> None:
    requests_mock.get(NOMINATIM_URL, json=[nominatim_match])
    requests_mock.get(OPEN_METEO_URL, json=weather_payload)
    client = Client()

    first = client.get("/api/forecast", {"address": "Chicago"}).json()
    second = client.get("/api/forecast", {"address": "Chicago"}).json()

    assert first["high"] == 8.0
    assert "cache_key" not in first
    assert second["from_cache"] is True
    assert second["cache_key"] == "forecast/zip/60601"
    assert [request.hostname for request in requests_mock.request_history] == [
        "nominatim.openstreetmap.org",
        "api.open-meteo.com",
        "nominatim.openstreetmap.org",
    ]


def test_health_endpoint() -> None:
    response = Client().get("/up")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.parametrize(
    "seconds, expected",
    [(300, "5 min"), (1800, "30 min"), (3600, "1 hr"), (7200, "2 hrs"), (86400, "1 day"), (172800, "2 days")],
)
def test_format_ttl(seconds, expected) -> None:
    assert format_ttl(seconds) == expected
