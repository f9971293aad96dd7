"""API routes for SchoolHub.

Quiz endpoints keep the paths the frontend calls; subjects and students
are exposed through a router. The OpenAPI schema and interactive docs
sit alongside.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularSwaggerView,
    SpectacularRedocView,
)

from .views import (
    StudentViewSet,
    SubjectViewSet,
    create_quiz,
    offering_quizzes,
    publish_quiz,
    quiz_detail,
    quiz_submissions,
    student_submission,
    submit_quiz,
    unpublish_quiz,
)

router = DefaultRouter(trailing_slash=False)
router.register(r"api/subjects", SubjectViewSet, basename="subjects")
router.register(r"api/students", StudentViewSet, basename="students")

urlpatterns = [
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path(
        "api/subjects/<int:subject_id>/offerings/<int:offering_id>/quizzes",
        create_quiz,
        name="quiz-create",
    ),
    path("api/offerings/<int:offering_id>/quizzes", offering_quizzes, name="offering-quizzes"),
    path("api/quizzes/<int:quiz_id>", quiz_detail, name="quiz-detail"),
    path("api/quizzes/<int:quiz_id>/publish", publish_quiz, name="quiz-publish"),
    path("api/quizzes/<int:quiz_id>/unpublish", unpublish_quiz, name="quiz-unpublish"),
    path("api/quizzes/<int:quiz_id>/submit", submit_quiz, name="quiz-submit"),
    path("api/quizzes/<int:quiz_id>/submissions", quiz_submissions, name="quiz-submissions"),
    path(
        "api/quizzes/<int:quiz_id>/submissions/<int:student_id>",
        student_submission,
        name="quiz-submission",
    ),
    path("", include(router.urls)),
]
