"""Accounts models: user profile and roles.

Defines a `UserProfile` associated one-to-one with Django's `User`,
capturing the caller role (student/instructor/admin) used to decide
what a request may see and do. The profile is created automatically on
user creation.
"""
from __future__ import annotations

from django.conf import settings
from django.db import models


class Role(models.TextChoices):
    """Platform roles used for role-based guards."""

    STUDENT = "student", "Student"
    INSTRUCTOR = "instructor", "Instructor"
    ADMIN = "admin", "Admin"


# Roles allowed to author quizzes and see correct answers
PRIVILEGED_ROLES = frozenset({Role.INSTRUCTOR, Role.ADMIN})


class UserProfile(models.Model):
    """Profile linked to a Django auth user.

    - `role`: authorisation gate for API views and quiz visibility
    - `middle_name` completes the display name (first/last live on User)
    - `assigned_program`: the program an instructor teaches under
    """

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.STUDENT)

    middle_name = models.CharField(max_length=100, blank=True)
    assigned_program = models.CharField(max_length=100, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:  # pragma: no cover (string repr convenience)
        return f"Profile<{self.user.username}:{self.role}>"


def caller_role(user) -> str | None:
    """Effective role of a request user.

    Superusers count as admins whatever their profile says; anonymous
    callers have no role.
    """
    if not getattr(user, "is_authenticated", False):
        return None
    if getattr(user, "is_superuser", False):
        return Role.ADMIN
    profile = getattr(user, "profile", None)
    return getattr(profile, "role", None)


def is_privileged(user) -> bool:
    return caller_role(user) in PRIVILEGED_ROLES
