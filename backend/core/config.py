"""Environment parsing for the forecast settings."""
from __future__ import annotations

from typing import Mapping

from django.core.exceptions import ImproperlyConfigured

DEFAULT_CACHE_TTL_MINUTES = 30


def forecast_cache_ttl(environ: Mapping[str, str]) -> int:
    """Return the forecast cache TTL in seconds.

    ``FORECAST_CACHE_TTL_MINUTES`` overrides the 30 minute default.
    """

    raw = environ.get("FORECAST_CACHE_TTL_MINUTES", "").strip()
    if not raw:
        return DEFAULT_CACHE_TTL_MINUTES * 60
    try:
        minutes = int(raw)
    except ValueError as exc:
        raise ImproperlyConfigured(f"FORECAST_CACHE_TTL_MINUTES must be an integer, got {raw!r}") from exc
    if minutes <= 0:
        raise ImproperlyConfigured("FORECAST_CACHE_TTL_MINUTES must be positive")
    return minutes * 60


def skip_ssl_verify(debug: bool, environ: Mapping[str, str]) -> bool:
    """TLS verification may only be switched off in a debug (development) run."""

    return debug and environ.get("SKIP_SSL_VERIFY", "0") == "1"


__all__ = ["DEFAULT_CACHE_TTL_MINUTES", "forecast_cache_ttl", "skip_ssl_verify"]
