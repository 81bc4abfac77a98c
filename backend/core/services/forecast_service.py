"""Forecast service composing geocoding, weather and caching."""
from __future__ import annotations

import logging
import math
import re
from dataclasses import replace
from typing import Any, List, Optional

from django.conf import settings
from django.core.cache import caches

from backend.core.abstractions import (
    ErrorRecord,
    ForecastOutcome,
    ForecastResult,
    GeocodingProvider,
    Location,
    ResultCache,
    WeatherProvider,
    WeatherSnapshot,
)
from backend.core.cache import DjangoResultCache
from backend.core.config import DEFAULT_CACHE_TTL_MINUTES
from backend.core.providers.base import RequestConfig
from backend.core.providers.nominatim import NominatimGeocodingClient
from backend.core.providers.openmeteo import OpenMeteoWeatherClient
from backend.core.service_logging import log_event


logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class ForecastOrchestrator:
    """Turn an address into a (possibly cached) forecast.

    The pipeline is strictly sequential: geocode, cache lookup, then on a miss
    the weather call and a cache write. The first provider error ends the
    pipeline and is returned as-is; errors are never cached.
    """

    def __init__(
        self,
        geocoder: GeocodingProvider,
        weather: WeatherProvider,
        cache: ResultCache,
        ttl: float = DEFAULT_CACHE_TTL_MINUTES * 60,
    ) -> None:
        self._geocoder = geocoder
        self._weather = weather
        self._cache = cache
        self._ttl = ttl

    @classmethod
    def from_settings(cls) -> "ForecastOrchestrator":
        request_config = RequestConfig(verify_ssl=not settings.FORECAST_SKIP_SSL_VERIFY)
        return cls(
            geocoder=NominatimGeocodingClient(
                user_agent=settings.GEOCODING_USER_AGENT,
                request_config=request_config,
            ),
            weather=OpenMeteoWeatherClient(request_config=request_config),
            cache=DjangoResultCache(caches[settings.FORECAST_CACHE_ALIAS]),
            ttl=settings.FORECAST_CACHE_TTL,
        )

    @property
    def ttl(self) -> float:
        return self._ttl

    def fetch(self, address: str) -> ForecastOutcome:
        location = self._geocoder.geocode((address or "").strip())
        if isinstance(location, ErrorRecord):
            return location

        cache_key = self.cache_key_for(location)
        cached = self._cache.read(cache_key)
        if cached is not None:
            self._log_cache("cache_hit", cache_key)
            return replace(cached, from_cache=True, cache_key=cache_key)

        self._log_cache("cache_miss", cache_key)
        raw = self._weather.forecast(location.latitude, location.longitude)
        if isinstance(raw, ErrorRecord):
            return raw

        result = self.build_result(location, raw)
        self._cache.write(cache_key, result, self._ttl)
        return result

    # Helpers ------------------------------------------------------------
    @staticmethod
    def cache_key_for(location: Location) -> str:
        postal_code = _WHITESPACE.sub("", location.postal_code or "")
        if postal_code:
            return f"forecast/zip/{postal_code.lower()}"
        # + 0.0 folds -0.0 into 0.0
        latitude = round(location.latitude, 2) + 0.0
        longitude = round(location.longitude, 2) + 0.0
        return f"forecast/ll/{latitude}/{longitude}"

    @staticmethod
    def build_result(location: Location, raw: WeatherSnapshot) -> ForecastResult:
        current = _group(raw, "current")
        daily = _group(raw, "daily")
        return ForecastResult(
            address=location.display_name,
            latitude=location.latitude,
            longitude=location.longitude,
            current_temperature=_safe_float(current.get("temperature_2m")),
            weather_code=_safe_int(current.get("weather_code")),
            high=_safe_float(_first(daily.get("temperature_2m_max"))),
            low=_safe_float(_first(daily.get("temperature_2m_min"))),
            from_cache=False,
        )

    def _log_cache(self, event: str, cache_key: str) -> None:
        log_event(logger, logging.INFO, event, service=self.__class__.__name__, cache_key=cache_key)


def _group(raw: WeatherSnapshot, name: str) -> dict:
    group = raw.get(name)
    if not isinstance(group, dict):
        return {}
    return group


def _first(values: Optional[List[Any]]) -> Optional[Any]:
    if not isinstance(values, list) or not values:
        return None
    return values[0]


def _safe_float(value: Optional[Any]) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _safe_int(value: Optional[Any]) -> Optional[int]:
    number = _safe_float(value)
    if number is None:
        return None
    return int(number)


__all__ = ["ForecastOrchestrator"]
