"""Management command to fetch a forecast using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.views import get_forecast_service
from backend.core.abstractions import ErrorRecord


class Command(BaseCommand):
    help = "Fetch current weather and today's high/low for an address"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--address", type=str, required=True, help="Free-text address")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        outcome = get_forecast_service().fetch(options["address"])
        if isinstance(outcome, ErrorRecord):
            raise CommandError(f"{outcome.message} ({outcome.code.value})")

        self.stdout.write(json.dumps(outcome.as_dict()))
