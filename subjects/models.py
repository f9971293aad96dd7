"""Subjects and their scheduled offerings.

A `Subject` is a catalogue entry (code, units, program, year level); a
`SubjectOffering` is one scheduled run of it in a school year and
semester, taught by an instructor. Quizzes hang off an offering.
"""
from __future__ import annotations

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class YearLevel(models.TextChoices):
    FIRST = "1st Year", "1st Year"
    SECOND = "2nd Year", "2nd Year"
    THIRD = "3rd Year", "3rd Year"
    FOURTH = "4th Year", "4th Year"
    FIFTH = "5th Year", "5th Year"


class Semester(models.TextChoices):
    FIRST = "1st", "1st"
    SECOND = "2nd", "2nd"
    SUMMER = "Summer", "Summer"


class Subject(models.Model):
    """A subject in the program catalogue."""

    code = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    units = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(6)])
    program = models.CharField(max_length=100)
    year_level = models.CharField(max_length=16, choices=YearLevel.choices)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code} {self.name}"

    def save(self, *args, **kwargs):
        # Stored upper-case
        self.code = (self.code or "").strip().upper()
        super().save(*args, **kwargs)


class SubjectOffering(models.Model):
    """A scheduled run of a subject."""

    subject = models.ForeignKey(Subject, on_delete=models.CASCADE, related_name="offerings")
    school_year = models.CharField(max_length=20)
    semester = models.CharField(max_length=8, choices=Semester.choices)
    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="offerings_taught",
    )
    room = models.CharField(max_length=50, blank=True)
    capacity = models.PositiveIntegerField(default=40)
    is_open = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-school_year", "semester", "subject_id"]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.subject_id} {self.school_year}/{self.semester}"
