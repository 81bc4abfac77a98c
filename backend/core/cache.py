"""Result caches for computed forecasts."""
from __future__ import annotations

import logging
import time
from dataclasses import asdict, replace
from threading import Lock
from typing import Any, Dict, Optional, Tuple

from django.core.cache.backends.base import BaseCache

from backend.core.abstractions import ForecastResult


logger = logging.getLogger(__name__)


def _serialize(result: ForecastResult) -> dict:
    payload = asdict(replace(result, from_cache=False, cache_key=None))
    payload.pop("cache_key")
    return payload


def _deserialize(payload: Any) -> Optional[ForecastResult]:
    if not isinstance(payload, dict):
        return None
    try:
        return ForecastResult(**payload)
    except TypeError:
        logger.warning("Discarding unreadable cache payload: %r", payload)
        return None


class DjangoResultCache:
    """Store forecasts in a Django cache backend (locmem, Redis, ...)."""

    def __init__(self, backend: BaseCache) -> None:
        self._backend = backend

    def read(self, key: str) -> Optional[ForecastResult]:
        return _deserialize(self._backend.get(key))

    def write(self, key: str, value: ForecastResult, ttl: float) -> None:
        self._backend.set(key, _serialize(value), ttl)


class InMemoryResultCache:
    """A lightweight TTL cache for tests and processes without Django caches."""

    def __init__(self, time_func=time.monotonic) -> None:
        self._time_func = time_func
        self._storage: Dict[str, Tuple[float, dict]] = {}
        self._lock = Lock()

    def read(self, key: str) -> Optional[ForecastResult]:
        with self._lock:
            item = self._storage.get(key)
            if not item:
                return None
            expires_at, payload = item
            if expires_at <= self._time_func():
                self._storage.pop(key, None)
                return None
        return _deserialize(payload)

    def write(self, key: str, value: ForecastResult, ttl: float) -> None:
        with self._lock:
            self._storage[key] = (self._time_func() + ttl, _serialize(value))

    def __contains__(self, key: str) -> bool:
        return self.read(key) is not None

    def clear(self) -> None:
        with self._lock:
            self._storage.clear()


__all__ = ["DjangoResultCache", "InMemoryResultCache"]
