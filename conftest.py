import logging

import pytest
from django.contrib.auth.models import User
from django.core.cache import cache
from rest_framework.test import APIClient

from accounts.models import Role
from students.models import Student
from subjects.models import Subject, SubjectOffering


@pytest.fixture(autouse=True)
def silence_django_request_logger():
    """Reduce noise from expected 4xx in passing tests.

    Many tests intentionally exercise 400/403/404 paths. Django logs these
    at WARNING via 'django.request'. Lower that logger to ERROR during
    tests to avoid clutter.
    """
    logger = logging.getLogger("django.request")
    old = logger.level
    logger.setLevel(logging.ERROR)
    try:
        yield
    finally:
        logger.setLevel(old)


@pytest.fixture(autouse=True)
def reset_throttle_cache():
    # Throttle history lives in the default cache and user ids repeat across tests
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_user(db):
    def _make(username: str, role: str = Role.STUDENT, **extra) -> User:
        u = User.objects.create_user(username=username, password="Strong#Passw0rd", email=f"{username}@ex.com", **extra)
        if u.profile.role != role:
            u.profile.role = role
            u.profile.save(update_fields=["role"])
        return u

    return _make


@pytest.fixture
def make_student(make_user):
    def _make(username: str = "student", program: str = "BSIT", year_level: str = "1st Year") -> Student:
        user = make_user(username, Role.STUDENT, first_name="Juan", last_name="Cruz")
        return Student.objects.create(user=user, program=program, year_level=year_level)

    return _make


@pytest.fixture
def instructor(make_user):
    return make_user("instructor", Role.INSTRUCTOR)


@pytest.fixture
def admin_user(make_user):
    return make_user("registrar", Role.ADMIN)


@pytest.fixture
def student(make_student):
    return make_student("student")


@pytest.fixture
def offering(instructor):
    subject = Subject.objects.create(code="it101", name="Intro to Computing", units=3, program="BSIT", year_level="1st Year")
    return SubjectOffering.objects.create(subject=subject, school_year="2025-2026", semester="1st", instructor=instructor)


@pytest.fixture
def api():
    return APIClient()


@pytest.fixture
def quiz_payload():
    return {
        "title": "Quiz 1",
        "description": "Basics",
        "duration": 15,
        "totalPoints": 3,
        "questions": [
            {"question": "Pick A", "type": "multiple-choice", "options": ["A", "B", "C"], "correctAnswer": "A", "points": 1},
            {"question": "The sky is blue", "type": "true-false", "options": ["True", "False"], "correctAnswer": "True", "points": 2},
        ],
    }


@pytest.fixture
def make_quiz(offering):
    """Create a quiz through the service layer, published unless told otherwise."""
    from quizzes import services

    def _make(publish: bool = True, **fields):
        data = {
            "title": "Quiz 1",
            "description": "Basics",
            "duration": 15,
            "questions": [
                {"text": "Pick A", "type": "multiple-choice", "options": ["A", "B", "C"], "correct_answer": "A", "points": 1},
                {"text": "The sky is blue", "type": "true-false", "options": ["True", "False"], "correct_answer": "True", "points": 2},
            ],
        }
        data.update(fields)
        quiz = services.create_quiz(offering.subject, offering, data)
        if publish:
            services.publish_quiz(quiz)
        return quiz

    return _make
