"""REST API views for address forecasts."""
from __future__ import annotations

from functools import lru_cache

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.core.abstractions import ErrorCode, ErrorRecord
from backend.core.providers.nominatim import BLANK_ADDRESS
from backend.core.services.forecast_service import ForecastOrchestrator


ERROR_STATUS = {
    ErrorCode.BLANK_ADDRESS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ADDRESS_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


@lru_cache(maxsize=1)
def get_forecast_service() -> ForecastOrchestrator:
    return ForecastOrchestrator.from_settings()


def format_ttl(seconds: float) -> str:
    """Human-readable cache TTL, e.g. "30 min", "1 hr", "2 days"."""
    total = int(seconds)
    if total >= 86400:
        days = total // 86400
        return f"{days} {'day' if days == 1 else 'days'}"
    if total >= 3600:
        hours = total // 3600
        return f"{hours} {'hr' if hours == 1 else 'hrs'}"
    return f"{total // 60} min"


def error_response(error: ErrorRecord) -> Response:
    return Response(error.as_dict(), status=ERROR_STATUS.get(error.code, status.HTTP_502_BAD_GATEWAY))


class ForecastView(APIView):
    """Current conditions and today's high/low for a free-text address."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the forecast for the ``address`` query parameter."""
        address = request.query_params.get("address", "").strip()
        if not address:
            return error_response(BLANK_ADDRESS)

        service = get_forecast_service()
        outcome = service.fetch(address)
        if isinstance(outcome, ErrorRecord):
            return error_response(outcome)

        payload = outcome.as_dict()
        payload["cache_ttl_display"] = format_ttl(service.ttl)
        return Response(payload, status=status.HTTP_200_OK)


class HealthView(APIView):
    """Liveness probe."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        return Response({"status": "ok"}, status=status.HTTP_200_OK)
