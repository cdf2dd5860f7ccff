from django.apps import AppConfig


class ActivityConfig(AppConfig):
    """App configuration for student notifications."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "activity"
