"""Nominatim (OpenStreetMap) geocoding client.

Nominatim's usage policy allows roughly one request per second and asks
clients to cache results. This client does not throttle; the forecast
service caches by location so repeated lookups stay cheap.
https://operations.osmfoundation.org/policies/nominatim/
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from backend.core.abstractions import ErrorCode, ErrorRecord, GeocodeOutcome, Location
from backend.core.providers.base import HttpProvider
from backend.core.service_logging import log_event

DEFAULT_USER_AGENT = "WeatherApp (local development)"

BLANK_ADDRESS = ErrorRecord("Please enter an address.", ErrorCode.BLANK_ADDRESS)
ADDRESS_NOT_FOUND = ErrorRecord("Address not found.", ErrorCode.ADDRESS_NOT_FOUND)


class NominatimGeocodingClient(HttpProvider):
    base_url = "https://nominatim.openstreetmap.org/search"

    unavailable_error = ErrorRecord("Geocoding service unavailable.", ErrorCode.GEOCODING_UNAVAILABLE)
    network_error = ErrorRecord("Could not look up address. Please try again.", ErrorCode.TIMEOUT_OR_NETWORK)

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT, **kwargs) -> None:
        super().__init__(**kwargs)
        self.user_agent = user_agent

    @property
    def ssl_error(self) -> ErrorRecord:  # type: ignore[override]
        if not self.request_config.verify_ssl:
            message = "Could not look up address (SSL error). Check your network or certificates."
        else:
            message = (
                "Geocoding failed due to SSL certificate verification. For local dev only, "
                "you can set SKIP_SSL_VERIFY=1 in .env and restart the server (see README)."
            )
        return ErrorRecord(message, ErrorCode.SSL_ERROR)

    def geocode(self, address: str) -> GeocodeOutcome:
        address = (address or "").strip()
        if not address:
            log_event(
                self._log,
                logging.WARNING,
                BLANK_ADDRESS.code.value,
                service=self.service_name,
                detail="blank address",
            )
            return BLANK_ADDRESS

        params = {"q": address, "format": "json", "addressdetails": 1, "limit": 1}
        data = self._get_json(params, headers={"User-Agent": self.user_agent})
        if isinstance(data, ErrorRecord):
            return data
        if not isinstance(data, list):
            return self._fail(self.network_error, detail="unexpected payload")
        if not data:
            return self._fail(ADDRESS_NOT_FOUND, detail="no results")
        if not isinstance(data[0], dict):
            return self._fail(self.network_error, detail="unexpected payload")
        try:
            return self._location(data[0])
        except (KeyError, TypeError, ValueError) as exc:
            return self._fail(self.network_error, detail=f"unexpected payload: {exc}")

    def _location(self, match: dict) -> Location:
        details = match.get("address")
        if not isinstance(details, dict):
            details = {}
        return Location(
            latitude=float(match["lat"]),
            longitude=float(match["lon"]),
            display_name=match.get("display_name", ""),
            postal_code=_stripped(details.get("postcode")),
            country_code=_upper(details.get("country_code")),
        )


def _stripped(value: Optional[Any]) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


def _upper(value: Optional[Any]) -> Optional[str]:
    if value is None:
        return None
    return str(value).upper()


__all__ = ["NominatimGeocodingClient", "DEFAULT_USER_AGENT"]
