"""Open-Meteo forecast client."""
from __future__ import annotations

from backend.core.abstractions import ErrorCode, ErrorRecord, WeatherOutcome
from backend.core.providers.base import HttpProvider


class OpenMeteoWeatherClient(HttpProvider):
    """Fetch current conditions and today's range from Open-Meteo.

    The payload is returned exactly as the API sends it; picking fields out of
    the ``current`` and ``daily`` groups is left to the forecast service so any
    provider producing the same two groups can be swapped in.
    """

    base_url = "https://api.open-meteo.com/v1/forecast"

    unavailable_error = ErrorRecord("Weather service unavailable.", ErrorCode.WEATHER_UNAVAILABLE)
    ssl_error = ErrorRecord(
        "Weather request failed (SSL). Set SKIP_SSL_VERIFY=1 in .env for local dev (see README).",
        ErrorCode.SSL_ERROR,
    )
    network_error = ErrorRecord("Could not fetch weather. Please try again.", ErrorCode.TIMEOUT_OR_NETWORK)

    def forecast(self, latitude: float, longitude: float) -> WeatherOutcome:
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": "temperature_2m,weather_code",
            "daily": "temperature_2m_max,temperature_2m_min",
            "timezone": "auto",
        }
        data = self._get_json(params)
        if isinstance(data, ErrorRecord):
            return data
        if not isinstance(data, dict):
            return self._fail(self.network_error, detail="unexpected payload")
        return data


__all__ = ["OpenMeteoWeatherClient"]
