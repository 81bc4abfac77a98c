"""Core abstractions for the forecast domain."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Union


class ErrorCode(str, Enum):
    """Machine-facing failure kinds reported by the providers."""

    BLANK_ADDRESS = "blank_address"
    GEOCODING_UNAVAILABLE = "geocoding_unavailable"
    ADDRESS_NOT_FOUND = "address_not_found"
    WEATHER_UNAVAILABLE = "weather_unavailable"
    SSL_ERROR = "ssl_error"
    TIMEOUT_OR_NETWORK = "timeout_or_network"


@dataclass(frozen=True)
class ErrorRecord:
    """A user-facing message paired with its machine-facing code."""

    message: str
    code: ErrorCode

    def as_dict(self) -> Dict[str, str]:
        return {"error": self.message, "error_code": self.code.value}


@dataclass(frozen=True)
class Location:
    """A single geocoding match."""

    latitude: float
    longitude: float
    display_name: str
    postal_code: Optional[str] = None
    country_code: Optional[str] = None


@dataclass(frozen=True)
class ForecastResult:
    """Normalized forecast for one address.

    Temperatures are in Celsius as reported by the weather provider. Any field
    the provider did not return is ``None`` so that a missing value never
    reads as zero degrees.
    """

    address: str
    latitude: float
    longitude: float
    current_temperature: Optional[float] = None
    weather_code: Optional[int] = None
    high: Optional[float] = None
    low: Optional[float] = None
    from_cache: bool = False
    cache_key: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        if self.cache_key is None:
            payload.pop("cache_key")
        return payload


#: Raw provider payload with ``current`` and ``daily`` groups.
WeatherSnapshot = Dict[str, Any]

GeocodeOutcome = Union[Location, ErrorRecord]
WeatherOutcome = Union[WeatherSnapshot, ErrorRecord]
ForecastOutcome = Union[ForecastResult, ErrorRecord]


class GeocodingProvider(Protocol):
    """Resolves free-text addresses to locations."""

    def geocode(self, address: str) -> GeocodeOutcome:
        """Return the best match for ``address`` or an error record."""
        ...


class WeatherProvider(Protocol):
    """A data source returning current and daily weather for coordinates."""

    def forecast(self, latitude: float, longitude: float) -> WeatherOutcome:
        """Return the raw provider payload or an error record."""
        ...


class ResultCache(Protocol):
    """Key-value store for computed forecasts."""

    def read(self, key: str) -> Optional[ForecastResult]:
        ...

    def write(self, key: str, value: ForecastResult, ttl: float) -> None:
        ...


__all__ = [
    "ErrorCode",
    "ErrorRecord",
    "ForecastOutcome",
    "ForecastResult",
    "GeocodeOutcome",
    "GeocodingProvider",
    "Location",
    "ResultCache",
    "WeatherOutcome",
    "WeatherProvider",
    "WeatherSnapshot",
]
