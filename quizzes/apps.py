from django.apps import AppConfig


class QuizzesConfig(AppConfig):
    """App configuration for quizzes, submissions and grading."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "quizzes"
