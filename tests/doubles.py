"""Hand-written provider doubles with call counters."""
from __future__ import annotations

from typing import List, Tuple

from backend.core.abstractions import GeocodeOutcome, WeatherOutcome


NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"


class GeocoderStub:
    def __init__(self, outcome: GeocodeOutcome) -> None:
        self.outcome = outcome
        self.calls: List[str] = []

    def geocode(self, address: str) -> GeocodeOutcome:
        self.calls.append(address)
        return self.outcome


class WeatherStub:
    def __init__(self, outcome: WeatherOutcome) -> None:
        self.outcome = outcome
        self.calls: List[Tuple[float, float]] = []

    def forecast(self, latitude: float, longitude: float) -> WeatherOutcome:
        self.calls.append((latitude, longitude))
        return self.outcome


class TimeController:
    def __init__(self) -> None:
        self.now = 0.0

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now
