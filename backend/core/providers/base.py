"""HTTP plumbing shared by the geocoding and weather clients."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

import requests
from requests import Response

from backend.core.abstractions import ErrorRecord
from backend.core.service_logging import log_event


@dataclass
class RequestConfig:
    connect_timeout: float = 5.0
    read_timeout: float = 5.0
    verify_ssl: bool = True

    @property
    def timeout(self) -> Tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)


class HttpProvider:
    """Base class for single-request JSON providers.

    Subclasses set ``unavailable_error``, ``ssl_error`` and ``network_error``.
    :meth:`_get_json` never raises for transport problems; it classifies them
    and returns an :class:`ErrorRecord` instead.
    """

    base_url: str = ""
    unavailable_error: ErrorRecord
    ssl_error: ErrorRecord
    network_error: ErrorRecord

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.base_url = base_url or self.base_url
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    @property
    def service_name(self) -> str:
        return self.__class__.__name__

    def _get_json(self, params: dict, headers: Optional[dict] = None) -> Union[Any, ErrorRecord]:
        try:
            response = self.session.get(
                self.base_url,
                params=params,
                headers=headers,
                timeout=self.request_config.timeout,
                verify=self.request_config.verify_ssl,
            )
        except requests.exceptions.SSLError as exc:
            return self._fail(self.ssl_error, detail=exc)
        except requests.RequestException as exc:
            return self._fail(self.network_error, detail=exc)

        if not 200 <= response.status_code < 300:
            return self._fail(self.unavailable_error, detail=f"HTTP {response.status_code}")
        return self._json(response)

    def _json(self, response: Response) -> Union[Any, ErrorRecord]:
        try:
            return response.json()
        except ValueError as exc:
            return self._fail(self.network_error, detail=exc)

    def _fail(self, error: ErrorRecord, **detail: Any) -> ErrorRecord:
        log_event(self._log, logging.WARNING, error.code.value, service=self.service_name, **detail)
        return error


__all__ = ["HttpProvider", "RequestConfig"]
