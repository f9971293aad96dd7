"""Student records.

A `Student` is the academic record attached to a user account: the
student number shown on class lists, the program and the year level.
Quiz submissions reference students, not users.
"""
from __future__ import annotations

from django.conf import settings
from django.db import models

from subjects.models import YearLevel


class StudentStatus(models.TextChoices):
    ACTIVE = "Active", "Active"
    INACTIVE = "Inactive", "Inactive"
    GRADUATED = "Graduated", "Graduated"
    DROPPED = "Dropped", "Dropped"
    LOA = "LOA", "Leave of absence"


class Student(models.Model):
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="student")
    # Assigned on first save (see signals.assign_student_number)
    student_number = models.CharField(max_length=20, unique=True, null=True, blank=True)
    program = models.CharField(max_length=100)
    year_level = models.CharField(max_length=16, choices=YearLevel.choices)
    section = models.CharField(max_length=20, blank=True)
    status = models.CharField(max_length=16, choices=StudentStatus.choices, default=StudentStatus.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["student_number"]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.student_number or '-'} {self.display_name}"

    @property
    def display_name(self) -> str:
        user = self.user
        middle = getattr(getattr(user, "profile", None), "middle_name", "")
        parts = [user.first_name, middle, user.last_name]
        return " ".join(p for p in parts if p) or user.username
