from django.apps import AppConfig


class ApiConfig(AppConfig):
    """App configuration for the forum REST API (no models)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "api"

