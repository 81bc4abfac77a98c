"""Shared log line format for the forecast components.

Every component reports cache hits, cache misses and provider failures as::

    service=<component> event=<kind> key=value ...

The timestamp and severity are added by the formatter configured in
``settings.LOGGING``. The service and event names are also attached to the
record so that handlers can filter on them.
"""
from __future__ import annotations

import logging
from typing import Any


def log_event(logger: logging.Logger, level: int, event: str, *, service: str, **detail: Any) -> None:
    parts = [f"service={service}", f"event={event}"]
    parts.extend(f"{key}={value}" for key, value in detail.items())
    logger.log(level, " ".join(parts), extra={"service": service, "event": event})


__all__ = ["log_event"]
