from __future__ import annotations

import pytest

from backend.core.abstractions import Location


@pytest.fixture
def chicago() -> Location:
    return Location(
        latitude=41.88,
        longitude=-87.63,
        display_name="Chicago, IL, USA",
        postal_code="60601",
        country_code="US",
    )


@pytest.fixture
def weather_payload() -> dict:
    return {
        "current": {"temperature_2m": 5.0, "weather_code": 0},
        "daily": {"temperature_2m_max": [8.0, 9.5], "temperature_2m_min": [2.0, 3.0]},
    }


@pytest.fixture
def nominatim_match() -> dict:
    return {
        "lat": "41.88",
        "lon": "-87.63",
        "display_name": "Chicago, IL, USA",
        "address": {"postcode": " 60601 ", "country_code": "us"},
    }
