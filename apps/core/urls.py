from django.urls import path  # type: ignore

from .views import healthz

urlpatterns = [
    path("", healthz, name="healthz"),
]
