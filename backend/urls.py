"""Root URL configuration."""
from __future__ import annotations

from django.urls import include, path

from backend.api.views import HealthView

urlpatterns = [
    path("up", HealthView.as_view(), name="health"),
    path("api/", include("backend.api.urls")),
]
