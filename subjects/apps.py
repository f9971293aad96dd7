from django.apps import AppConfig


class SubjectsConfig(AppConfig):
    """App configuration for subjects and offerings."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "subjects"
