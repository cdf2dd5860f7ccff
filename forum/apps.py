from django.apps import AppConfig


class ForumConfig(AppConfig):
    """App configuration for course questions and responses."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "forum"
