from django.apps import AppConfig


class StudentsConfig(AppConfig):
    """App configuration for student records."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "students"

    def ready(self) -> None:  # pragma: no cover
        from . import signals  # noqa: F401
        return super().ready()
